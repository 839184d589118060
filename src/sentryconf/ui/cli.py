from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from sentryconf.app import apply_configuration, delete_configuration, read_configuration
from sentryconf.config import ConfigurationError, configure_logging
from sentryconf.domain.errors import ConversionError, ReconciliationError
from sentryconf.domain.reconciliation import DocumentState, MappingState, load_document

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from sentryconf.app import HostState

log = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_USAGE = 2


def _add_identity_arguments(parser: argparse.ArgumentParser, *, config_required: bool) -> None:
    parser.add_argument(
        "--organization",
        type=str,
        required=True,
        help="Slug of the organization",
    )
    parser.add_argument(
        "--provider-key",
        type=str,
        required=True,
        help="Integration provider to filter by, such as slack",
    )
    parser.add_argument(
        "--name",
        type=str,
        required=True,
        help="Name of the integration",
    )
    parser.add_argument(
        "--id",
        type=str,
        help="Identifier from a previous run (integration id or composite id)",
    )
    parser.add_argument(
        "--config",
        type=str,
        required=config_required,
        help="Configuration as a JSON object, or @path to a JSON file",
    )
    parser.add_argument(
        "--fragment",
        action="store_true",
        help="Merge the configuration into the existing one instead of replacing it",
    )
    parser.add_argument(
        "--state-format",
        choices=("document", "mapping"),
        default="document",
        help="Shape of the printed state (default: %(default)s)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile Sentry organization integration configurations"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    read = subparsers.add_parser("read", help="Show the remote configuration")
    _add_identity_arguments(read, config_required=False)

    apply = subparsers.add_parser("apply", help="Write a configuration")
    _add_identity_arguments(apply, config_required=True)

    delete = subparsers.add_parser("delete", help="Clear a configuration")
    _add_identity_arguments(delete, config_required=False)

    return parser.parse_args(list(argv))


def _read_config_text(value: str | None) -> str:
    if value is None:
        return "{}"
    if value.startswith("@"):
        path = Path(value[1:]).expanduser()
        try:
            return path.read_text()
        except OSError as exc:
            raise ValueError(f"Cannot read configuration file {path}: {exc}") from exc
    return value


def _build_state(args: argparse.Namespace) -> HostState:
    config_text = _read_config_text(args.config)
    if args.state_format == "mapping":
        if args.fragment:
            raise ValueError("--fragment is only supported with --state-format document")
        return MappingState(
            organization=args.organization,
            provider_key=args.provider_key,
            name=args.name,
            config=load_document(config_text),
            id=args.id,
        )
    # Validate early so a bad document is a usage error, not a remote failure.
    load_document(config_text)
    return DocumentState(
        organization=args.organization,
        provider_key=args.provider_key,
        name=args.name,
        config_data=config_text,
        is_fragment=args.fragment,
        id=args.id,
    )


def _print_state(state: HostState) -> None:
    print(json.dumps(asdict(state), indent=2, sort_keys=True))  # noqa: T201


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        state = _build_state(parsed_args)
    except (ValueError, ConversionError):
        log.exception("CLI validation error")
        sys.exit(EXIT_USAGE)

    try:
        if parsed_args.command == "read":
            _print_state(read_configuration(state))
        elif parsed_args.command == "apply":
            _print_state(apply_configuration(state))
        elif parsed_args.command == "delete":
            delete_configuration(state)
            log.info("Cleared configuration of %r", parsed_args.name)
    except ConfigurationError:
        log.exception("Configuration error")
        sys.exit(EXIT_USAGE)
    except ReconciliationError:
        log.exception("Reconciliation failed")
        sys.exit(EXIT_FAILURE)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
