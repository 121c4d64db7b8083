#!/usr/bin/env python3
"""
Cert Policy Check CLI Tool - Main Entry Point

A CLI tool for validating tenant certificate-provisioning documents before
they reach the provisioning pipeline.

- Subcommands 'validate' and 'schema' are required
- 'validate' accepts any number of files or directories
- Proper exit codes and input validation

The module exposes the CLI entry point used by the tests and packaging metadata.
"""

import argparse
import json
import logging
import sys
from typing import Optional

from .discovery import DiscoveryError, discover_documents
from .reporter import ValidationReporter
from .schema import load_document_schema
from .validator import DocumentValidator

EXIT_USAGE = 64


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Set up basic logging configuration for the CLI tool.

    Args:
        verbose: Enable verbose logging if True

    Returns:
        Configured logger instance
    """
    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Remove existing handlers to avoid duplication
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")

    # Logs go to stderr so reports on stdout stay parseable
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    return logging.getLogger("cert_policy_check")


def create_parser() -> argparse.ArgumentParser:
    """
    Create the main argument parser for the cert-policy-check CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog='cert-policy-check',
        description='Validate tenant certificate-provisioning documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Usage Examples:
 python -m tools.cert_policy_check validate tenants.json
 python -m tools.cert_policy_check validate ./configs --format json --jobs 4
 python -m tools.cert_policy_check validate ./configs --include-yaml
 python -m tools.cert_policy_check schema

Exit Codes:
 0 = Every document is valid
 1 = At least one document has errors
 64 = Usage error (missing paths, unsupported files, no documents found)
       """
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging output'
    )

    subparsers = parser.add_subparsers(
        dest='command',
        help='Available commands',
        required=True
    )

    validate_parser = subparsers.add_parser(
        'validate',
        help='Validate tenant documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
 python -m tools.cert_policy_check validate tenants.json other.json
 python -m tools.cert_policy_check validate ./configs --format json

Directories contribute their *.json files (not recursive).
       """
    )

    validate_parser.add_argument(
        'paths',
        nargs='+',
        help='Document files or directories containing *.json documents'
    )

    validate_parser.add_argument(
        '--format', '-f',
        choices=['text', 'json'],
        default='text',
        help='Output format for validation results (default: text)'
    )

    validate_parser.add_argument(
        '--include-yaml',
        action='store_true',
        help='Also pick up *.yaml and *.yml documents from directories'
    )

    validate_parser.add_argument(
        '--jobs', '-j',
        type=int,
        default=1,
        help='Number of documents validated in parallel (default: 1)'
    )

    validate_parser.add_argument(
        '--no-suggestions',
        action='store_true',
        help='Omit fix suggestions from the report'
    )

    schema_parser = subparsers.add_parser(
        'schema',
        help='Display the tenant document JSON schema',
    )

    schema_parser.add_argument(
        '--format', '-f',
        choices=['json'],
        default='json',
        help='Output format for schema (only json supported)'
    )

    return parser


def run_validate_command(args, logger: logging.Logger) -> int:
    """
    Execute the validate subcommand.

    Args:
        args: Parsed command line arguments
        logger: Configured logger instance

    Returns:
        Exit code (0=all valid, 1=errors found, 64=usage error)
    """
    logger.info("Starting validate command execution")

    if args.jobs < 1:
        print(f"Error: --jobs must be at least 1, got {args.jobs}")
        return EXIT_USAGE

    try:
        documents = discover_documents(args.paths, include_yaml=args.include_yaml)
    except DiscoveryError as e:
        print(e)
        return EXIT_USAGE

    logger.info("Validating %d document(s)", len(documents))

    validator = DocumentValidator(jobs=args.jobs)
    reporter = ValidationReporter(
        output_format=args.format,
        show_suggestions=not args.no_suggestions,
    )
    for result in validator.validate_many(documents):
        reporter.add_validation_result(result)

    reporter.print_report()
    return reporter.determine_exit_code()


def run_schema_command(args, logger: logging.Logger) -> int:
    """
    Execute the schema subcommand.

    Args:
        args: Parsed command line arguments
        logger: Configured logger instance

    Returns:
        Exit code (0 for success)
    """
    logger.info("Starting schema command execution")

    print(json.dumps(load_document_schema(), indent=2))
    return 0


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the cert-policy-check CLI tool.

    Args:
        argv: Optional command line arguments for testing (default: sys.argv)

    Returns:
        Exit code (0=success, 1=errors, 64=usage errors)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()

    if not argv:
        parser.print_usage(sys.stderr)
        print("cert-policy-check: error: the following arguments are required: command", file=sys.stderr)
        return EXIT_USAGE

    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # argparse exits 0 for --help and 2 for bad arguments
        return 0 if e.code == 0 else EXIT_USAGE

    logger = setup_logging(verbose=getattr(args, 'verbose', False))

    if args.command == 'validate':
        return run_validate_command(args, logger)
    elif args.command == 'schema':
        return run_schema_command(args, logger)
    else:
        print(f"Error: Unknown command '{args.command}'")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
