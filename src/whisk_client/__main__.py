"""
Command line entry point for the whisk client.

Run using: python -m whisk_client invoke /guest/hello -p name World
"""

import argparse
import json
import sys
from collections.abc import Sequence
from typing import Any

from whisk_client import __version__
from whisk_client.client.http_client import TransportFailure, WhiskClient
from whisk_client.core.config import ConfigurationError
from whisk_client.core.logging import get_logger, setup_logging

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-p",
        "--param",
        nargs=2,
        action="append",
        default=[],
        metavar=("KEY", "VALUE"),
        help="Parameter to send (VALUE is parsed as JSON when possible)",
    )
    common.add_argument(
        "--param-json",
        type=str,
        default=None,
        help="JSON object of parameters, merged before -p values",
    )

    parser = argparse.ArgumentParser(
        prog="whisk",
        description="Invoke actions and fire triggers on the platform REST API",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        default="text",
        help="Log format (default: text)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    invoke_parser = subparsers.add_parser("invoke", parents=[common], help="Invoke an action")
    invoke_parser.add_argument("name", help="Qualified action name, e.g. /guest/demo/hello")
    invoke_parser.add_argument(
        "--non-blocking",
        dest="blocking",
        action="store_false",
        help="Return the activation id instead of waiting for the result",
    )

    trigger_parser = subparsers.add_parser("trigger", parents=[common], help="Fire a trigger")
    trigger_parser.add_argument("name", help="Qualified trigger name, e.g. locationUpdate")

    return parser.parse_args(argv)


def _parse_value(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError:
        return value


def args_to_parameters(args: argparse.Namespace) -> dict[str, Any]:
    """Collect action parameters from command line args.

    Args:
        args: Parsed command line arguments

    Returns:
        Dictionary of parameters

    Raises:
        ValueError: If --param-json is not a JSON object
    """
    parameters: dict[str, Any] = {}

    if args.param_json is not None:
        loaded = json.loads(args.param_json)
        if not isinstance(loaded, dict):
            raise ValueError("--param-json must be a JSON object")
        parameters.update(loaded)

    for key, value in args.param:
        parameters[key] = _parse_value(value)

    return parameters


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = parse_args(argv)
    setup_logging(level=args.log_level, format_type=args.log_format)
    logger = get_logger(__name__)

    try:
        parameters = args_to_parameters(args)
    except ValueError as e:
        print(f"error: invalid parameters: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        with WhiskClient() as whisk:
            if args.command == "invoke":
                result = whisk.invoke(args.name, parameters, blocking=args.blocking)
            else:
                result = whisk.trigger(args.name, parameters)
    except ConfigurationError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except TransportFailure as e:
        logger.error(
            e.message,
            extra={"context": {"status_code": e.status_code, "response": e.response_data}},
        )
        print(f"error: {e.message}", file=sys.stderr)
        return EXIT_FAILURE

    print(json.dumps(result, indent=2))
    return EXIT_OK


def run() -> None:
    """Synchronous entry point for package scripts."""
    sys.exit(main())


if __name__ == "__main__":
    run()
