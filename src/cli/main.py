"""Prepstream CLI entry point.

This module parses launch parameters, builds the runtime config, and
hands the data source, processing type, and output topic to the
pipeline dispatcher. Every failure is logged and mapped to an exit code.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Sequence

from core.config import PrepstreamConfig, parse_bootstrap_servers
from core.config_file import apply_config_file
from core.errors import PrepstreamDispatchError, PrepstreamError
from core.logging_config import configure_logging, get_logger
from core.types import DispatchResult
from pipelines.dispatcher import build_dispatcher
from pipelines.variant_registry import VariantRegistry

_LOGGER = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="prepstream",
        description="Preprocess raw broker data into labeled training records",
    )
    parser.add_argument(
        "--data-source",
        "--datasource",
        dest="data_source",
        help="Source of the raw data, e.g. slacktext",
    )
    parser.add_argument(
        "--processing-type",
        "--processtype",
        dest="processing_type",
        help="Type of preprocessing that generates labels, e.g. channel",
    )
    parser.add_argument(
        "--output-topic",
        "--topic",
        dest="output_topic",
        help="Topic to write the preprocessed data to",
    )
    parser.add_argument(
        "--bootstrap-servers",
        help="Override PREPSTREAM_KAFKA_BOOTSTRAP_SERVERS for this run",
    )
    parser.add_argument("--config-file", help="Optional YAML settings file")
    parser.add_argument(
        "--list-variants",
        action="store_true",
        help="Print known data source and processing type pairs and exit",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Prepstream CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    try:
        config = _build_config(args)
    except PrepstreamError as error:
        configure_logging()
        _LOGGER.error("config_invalid", error_type=type(error).__name__, error=str(error))
        return EXIT_FAILURE
    configure_logging(config.log_level)
    if args.list_variants:
        return _run_list_variants()
    return _run_dispatch(config, args)


def _build_config(args: argparse.Namespace) -> PrepstreamConfig:
    """Build config from environment, config file, then flags.

    Args:
        args: Parsed CLI arguments.

    Returns:
        Config with later sources overriding earlier ones.
    """
    config = PrepstreamConfig.from_env()
    if args.config_file:
        config = apply_config_file(config, args.config_file)
    if args.bootstrap_servers:
        config = replace(
            config, bootstrap_servers=parse_bootstrap_servers(args.bootstrap_servers)
        )
    return config


def _run_list_variants() -> int:
    """Print every declared variant pair and the accepted data source names.

    Returns:
        Process exit code.
    """
    registry = VariantRegistry()
    for row in registry.listings():
        status = "implemented" if row.implemented else "not-implemented"
        print(f"{row.data_source}\t{row.processing_type}\t{status}")
    print(f"data sources: {', '.join(registry.supported_data_sources())}")
    return EXIT_OK


def _run_dispatch(config: PrepstreamConfig, args: argparse.Namespace) -> int:
    """Dispatch one pipeline run and map the outcome to an exit code.

    Args:
        config: Runtime configuration.
        args: Parsed CLI arguments.

    Returns:
        Process exit code.
    """
    _LOGGER.info(
        "dispatch_requested",
        data_source=args.data_source,
        processing_type=args.processing_type,
        output_topic=args.output_topic,
    )
    dispatcher = build_dispatcher(config)
    try:
        result = dispatcher.dispatch(args.data_source, args.processing_type, args.output_topic)
    except PrepstreamDispatchError as error:
        _LOGGER.error(
            "dispatch_failed",
            kind=error.kind.value,
            error=str(error),
            field=error.field,
            data_source=error.data_source,
            processing_type=error.processing_type,
            cause=repr(error.__cause__) if error.__cause__ is not None else None,
            exc_info=error.__cause__ is not None,
        )
        return EXIT_FAILURE
    except KeyboardInterrupt:
        _LOGGER.warning("dispatch_interrupted", output_topic=args.output_topic)
        return EXIT_INTERRUPTED
    _print_result(result)
    return EXIT_OK


def _print_result(result: DispatchResult) -> None:
    """Print the run summary as key=value lines on stdout.

    Args:
        result: Finished dispatch outcome.
    """
    outcome = result.provisioning_outcome.value if result.provisioning_outcome else "-"
    print(f"variant={result.variant_name}")
    print(f"input_topic={result.request.input_channel}")
    print(f"output_topic={result.request.output_channel}")
    print(f"provisioning={outcome}")
    print(f"records_read={result.job_result.records_read}")
    print(f"records_written={result.job_result.records_written}")
    print(f"records_skipped={result.job_result.records_skipped}")
    print(f"records_duplicate={result.job_result.records_duplicate}")
