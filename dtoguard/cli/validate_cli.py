"""
Command-line interface for validating JSON records against a YAML schema.

Usage:
    python -m dtoguard.cli.validate_cli check --schema <schema.yaml> --input <records.json> [options]
    python -m dtoguard.cli.validate_cli describe --schema <schema.yaml>
"""

import argparse
import json
import sys
from pathlib import Path

from dtoguard.core.rules import DTOValidator, SchemaLoader
from dtoguard.observability.logger import get_logger, log_operation
from dtoguard.observability.metrics import record_validation, start_metrics_server, track_duration

logger = get_logger(__name__)


def load_records(input_path: Path) -> list:
    """
    Load records from a JSON file.

    Args:
        input_path: File holding a JSON object or an array of objects

    Returns:
        List of records

    Raises:
        ValueError: If the file is not valid JSON or holds another shape
    """
    with open(input_path) as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {input_path}: {e}")

    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return payload
    raise ValueError("Input must be a JSON object or an array of objects")


def check_command(args) -> int:
    """
    Validate every record in the input file.

    Args:
        args: Command-line arguments

    Returns:
        Exit status (0 when all records are valid)
    """
    logger.info(f"Validating {args.input} against schema {args.schema}")

    try:
        schema = SchemaLoader(args.schema).load_schema()
        records = load_records(Path(args.input))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot run validation: {e}")
        return 1

    for index, record in enumerate(records):
        if record is not None and not isinstance(record, dict):
            logger.error(f"Record {index} is not a JSON object")
            return 1

    if args.metrics_port is not None:
        start_metrics_server(args.metrics_port)
        logger.info(f"Serving metrics on port {args.metrics_port}")

    validator = DTOValidator()
    report = []
    invalid_records = 0

    with log_operation("Validating records", logger=logger, source=args.source):
        for index, record in enumerate(records):
            with track_duration(source=args.source):
                result = validator.validate(record, schema)
            record_validation(result, source=args.source)

            if not result.success:
                invalid_records += 1
            report.append({"index": index, **result.to_dict()})

    output = json.dumps(
        {
            "total_records": len(records),
            "valid_records": len(records) - invalid_records,
            "invalid_records": invalid_records,
            "results": report,
        },
        indent=2,
        default=str,
    )

    if args.output:
        Path(args.output).write_text(output + "\n")
        logger.info(f"Report written to {args.output}")
    else:
        print(output)

    logger.info(
        f"Valid records: {len(records) - invalid_records}, invalid records: {invalid_records}"
    )
    return 1 if invalid_records else 0


def describe_command(args) -> int:
    """
    Print a summary of the schema.

    Args:
        args: Command-line arguments

    Returns:
        Exit status
    """
    try:
        schema = SchemaLoader(args.schema).load_schema()
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load schema: {e}")
        return 1

    summary = DTOValidator().describe_schema(schema)
    summary["fields"] = list(schema)
    print(json.dumps(summary, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dtoguard",
        description="Validate JSON records against a declarative field schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a file of records and print the report
  dtoguard check --schema config/user.yaml --input data/users.json

  # Write the report to a file
  dtoguard check --schema config/user.yaml --input data/users.json --output report.json

  # Expose Prometheus metrics while validating
  dtoguard check --schema config/user.yaml --input data/users.json --metrics-port 9100

  # Summarize a schema
  dtoguard describe --schema config/user.yaml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    check_parser = subparsers.add_parser("check", help="Validate records in a JSON file")
    check_parser.add_argument(
        "--schema",
        required=True,
        help="Path to schema YAML file"
    )
    check_parser.add_argument(
        "--input",
        required=True,
        help="Path to JSON file holding an object or an array of objects"
    )
    check_parser.add_argument(
        "--output",
        help="Write the JSON report to this path instead of stdout"
    )
    check_parser.add_argument(
        "--source",
        default="cli",
        help="Source label used in logs and metrics (default: cli)"
    )
    check_parser.add_argument(
        "--metrics-port",
        type=int,
        help="Expose Prometheus metrics on this port while validating"
    )

    describe_parser = subparsers.add_parser("describe", help="Summarize a schema")
    describe_parser.add_argument(
        "--schema",
        required=True,
        help="Path to schema YAML file"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "check":
        sys.exit(check_command(args))
    elif args.command == "describe":
        sys.exit(describe_command(args))


if __name__ == "__main__":
    main()
