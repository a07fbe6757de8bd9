"""
Prometheus metrics collection for dtoguard

Validation outcomes are recorded by the adapters and the CLI; the
validation engine itself never touches metrics.
"""
import os
from typing import Optional

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from dtoguard.core.models import ValidationResult

# Dedicated registry so embedding applications keep their own default registry clean
REGISTRY = CollectorRegistry()


# Records validated counter
validations_total = Counter(
    name="dtoguard_validations_total",
    documentation="Total number of records validated",
    labelnames=["source", "outcome"],  # outcome: success, failure
    registry=REGISTRY,
)

# Field errors counter
field_errors_total = Counter(
    name="dtoguard_field_errors_total",
    documentation="Total number of field-level validation errors",
    labelnames=["source", "code"],
    registry=REGISTRY,
)

# Validation duration histogram
validation_duration_seconds = Histogram(
    name="dtoguard_validation_duration_seconds",
    documentation="Time spent validating records in seconds",
    labelnames=["source"],
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
    registry=REGISTRY,
)


def record_validation(result: ValidationResult, source: str = "default") -> None:
    """
    Record the outcome of a single validation call

    Args:
        result: The validation result
        source: Label identifying the caller (handler name, CLI source, ...)
    """
    outcome = "success" if result.success else "failure"
    validations_total.labels(source=source, outcome=outcome).inc()

    for error in result.errors or []:
        code = error.code.value if error.code is not None else "unclassified"
        field_errors_total.labels(source=source, code=code).inc()


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics in text format

    Returns:
        Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def start_metrics_server(port: Optional[int] = None) -> None:
    """
    Start HTTP server for Prometheus metrics

    Args:
        port: Port to listen on (defaults to env var METRICS_PORT or 8000)
    """
    # Lazy import: the HTTP server binds a port, only do it when asked
    from prometheus_client import start_http_server

    metrics_port = port or int(os.getenv("METRICS_PORT", "8000"))
    start_http_server(metrics_port, registry=REGISTRY)


class track_duration:
    """
    Context manager for tracking validation duration

    Usage:
        with track_duration(source="orders"):
            result = validate(record, schema)
    """

    def __init__(self, histogram: Histogram = validation_duration_seconds, **labels):
        self.histogram = histogram
        self.labels = labels
        self.timer = None

    def __enter__(self):
        self.timer = self.histogram.labels(**self.labels).time()
        self.timer.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.timer.__exit__(exc_type, exc_val, exc_tb)
        return False
