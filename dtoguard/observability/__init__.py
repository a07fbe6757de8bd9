"""
Structured logging and Prometheus metrics for dtoguard.
"""
