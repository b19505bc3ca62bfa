"""
Command-line interface for record type auditing.

Usage:
    type-audit inspect --input <file_path> [--property NAME ...] [options]
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from type_audit.config import AuditConfig, AuditConfigLoader
from type_audit.core.errors import ConfigError, InvalidInputError, RecordReadError
from type_audit.core.models import PropertyKind, TypeReport
from type_audit.core.schema import TypeAggregator
from type_audit.observability.logger import configure_logging, get_logger, log_operation
from type_audit.readers import (
    SUFFIX_FORMATS,
    DataFrameRecordReader,
    JsonRecordReader,
    create_spark_session,
    load_dataframe,
    resolve_spark_format,
)


logger = get_logger(__name__)


def build_config(args) -> AuditConfig:
    """
    Combine the optional config file with command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        Effective AuditConfig
    """
    config = AuditConfigLoader(args.config).load() if args.config else AuditConfig()

    return config.merged(
        properties=args.property,
        exclude_names=args.exclude,
        member_kinds=args.member_kinds,
        skip_invalid=True if args.skip_invalid else None,
        output_format=args.output,
        log_level=args.log_level,
    )


def aggregate_file(args, config: AuditConfig) -> TypeReport:
    """
    Run one aggregation session over the input file.

    Args:
        args: Parsed command-line arguments
        config: Effective audit configuration

    Returns:
        TypeReport for the file
    """
    input_path = Path(args.input)
    aggregator = TypeAggregator(
        properties=config.properties,
        exclude_names=config.exclude_names,
        member_kinds=config.member_kinds,
        source_id=input_path.stem,
    )

    if args.engine == "spark":
        spark_format = resolve_spark_format(input_path, args.format)
        spark = create_spark_session(f"TypeAudit-{input_path.stem}")
        try:
            df = load_dataframe(spark, input_path, file_format=spark_format)
            aggregator.observe_many(DataFrameRecordReader(df), skip_invalid=config.skip_invalid)
        finally:
            spark.stop()
    else:
        records = JsonRecordReader(input_path, file_format=args.format)
        aggregator.observe_many(records, skip_invalid=config.skip_invalid)

    return aggregator.finalize()


def render_report(report: TypeReport, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(report.model_dump(), indent=2)
    return report.render_table()


def inspect_command(args) -> None:
    """
    Execute the inspect command.

    Args:
        args: Command-line arguments
    """
    try:
        config = build_config(args)
    except (ConfigError, FileNotFoundError) as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if config.log_level or config.log_format:
        configure_logging(level=config.log_level, format_type=config.log_format)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {args.input}")
        sys.exit(1)

    try:
        with log_operation("Aggregating property types", logger=logger, input=str(input_path)):
            report = aggregate_file(args, config)
    except (InvalidInputError, RecordReadError, ValueError) as e:
        logger.error(f"Type audit failed for {args.input}: {e}")
        sys.exit(1)

    logger.info("Type audit complete", extra=report.summary())
    print(render_report(report, config.output_format))


def main(argv: list[str] | None = None):
    """Main CLI entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        prog="type-audit",
        description="Report the distinct value types observed per property",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Audit every property of a JSON Lines file
  type-audit inspect --input data/events.jsonl

  # Restrict the audit to two properties
  type-audit inspect --input data/events.jsonl --property amount currency

  # Audit a CSV file through Spark and print JSON
  type-audit inspect --input data/sales.csv --engine spark --format csv --output json
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    inspect_parser = subparsers.add_parser("inspect", help="Report property types of a record file")
    inspect_parser.add_argument(
        "--input",
        required=True,
        help="Path to input file"
    )
    inspect_parser.add_argument(
        "--property",
        nargs="+",
        default=None,
        metavar="NAME",
        help="Only audit these property names (exact match)"
    )
    inspect_parser.add_argument(
        "--exclude",
        nargs="+",
        default=None,
        metavar="NAME",
        help="Property names to leave out"
    )
    inspect_parser.add_argument(
        "--member-kinds",
        nargs="+",
        default=None,
        choices=[kind.value for kind in PropertyKind],
        help="Member kinds to consider (default: data computed)"
    )
    inspect_parser.add_argument(
        "--format",
        default=None,
        choices=sorted(set(SUFFIX_FORMATS.values()) | {"csv", "parquet"}),
        help="Input file format (default: from file extension)"
    )
    inspect_parser.add_argument(
        "--engine",
        default="python",
        choices=["python", "spark"],
        help="Record source: python for JSON files, spark for csv/json/parquet (default: python)"
    )
    inspect_parser.add_argument(
        "--output",
        default=None,
        choices=["table", "json"],
        help="Report format (default: table)"
    )
    inspect_parser.add_argument(
        "--config",
        default=None,
        help="Path to audit configuration YAML file"
    )
    inspect_parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip records that cannot be introspected instead of failing"
    )
    inspect_parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: LOG_LEVEL env or INFO)"
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "inspect":
        inspect_command(args)


if __name__ == "__main__":
    main()
