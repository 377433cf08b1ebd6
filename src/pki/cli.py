"""Command line entry point for issuing the Aurae root CA."""

import argparse
import json
import logging
import sys

from shared.config import settings
from shared.logging import setup_logging
from shared.metrics import setup_metrics
from shared.tracing import setup_tracing

from pki.ca import CABundle, CAConfig, IssuanceError, PersistenceError, create_root_ca

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aurae-pki",
        description="Aurae runtime PKI tooling",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    create_ca = subparsers.add_parser(
        "create-ca",
        help="Generate a self-signed root CA",
    )
    create_ca.add_argument(
        "domain",
        help="Domain name used as Common Name and DNS SAN of the CA",
    )
    create_ca.add_argument(
        "--output-dir",
        default="",
        help="Directory to write ca.crt and ca.key into (default: do not write files)",
    )
    create_ca.add_argument(
        "--format",
        choices=["pem", "json"],
        default="pem",
        help="Format of the bundle printed to stdout (default: pem)",
    )
    create_ca.add_argument(
        "--silent",
        action="store_true",
        help="Do not print the bundle to stdout",
    )
    return parser


def _print_bundle(bundle: CABundle, fmt: str) -> None:
    if fmt == "json":
        print(json.dumps(bundle.as_dict(), indent=2))
    else:
        sys.stdout.write(bundle.certificate)
        sys.stdout.write(bundle.key)


def create_ca_command(args: argparse.Namespace) -> int:
    """Issue the root CA and print it.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    config = CAConfig.from_settings(settings)

    try:
        bundle = create_root_ca(args.output_dir, args.domain, config)
    except PersistenceError as e:
        logger.error("create_ca_failed", extra={"stage": e.stage, "error": str(e)})
        # The in-memory CA is still valid even though it was not saved
        if e.bundle is not None and not args.silent:
            _print_bundle(e.bundle, args.format)
        return 1
    except IssuanceError as e:
        logger.error("create_ca_failed", extra={"stage": e.stage, "error": str(e)})
        return 1

    if not args.silent:
        _print_bundle(bundle, args.format)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger_provider = setup_logging()
    tracer_provider = setup_tracing(settings.APP_NAME)
    meter_provider = setup_metrics(settings.APP_NAME)

    try:
        return create_ca_command(args)
    finally:
        # Flush batched telemetry before the process exits
        tracer_provider.shutdown()
        meter_provider.shutdown()
        logger_provider.shutdown()


if __name__ == "__main__":
    sys.exit(main())
