"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m simplehttp_cli get URL [-H "Name: value"]... [--async] [--json] [--encoding ENC]
    python -m simplehttp_cli post URL --data TEXT [-H ...] [--async] [--json]
    python -m simplehttp_cli post URL --data-file PATH [-H ...]
    python -m simplehttp_cli config --init|--show

Environment Variables:
    SIMPLEHTTP_TIMEOUT          Read timeout in seconds (default: 10)
    SIMPLEHTTP_CONNECT_TIMEOUT  Connect timeout in seconds (default: 10)
    SIMPLEHTTP_MAX_WORKERS      Worker threads for --async (default: 64)
    SIMPLEHTTP_USER_AGENT       Default User-Agent header
    SIMPLEHTTP_PROXY            Proxy URL
    SIMPLEHTTP_LOG_LEVEL        Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from simplehttp_cli import EXIT_HTTP_ERROR, EXIT_RUNTIME_ERROR, EXIT_SUCCESS, __version__
from simplehttp_cli.commands import request
from simplehttp_cli.config import DEFAULT_CONFIG_NAME, get_default_config_template, load_config


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _add_request_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", type=str, help="Request URL")
    parser.add_argument(
        "--header", "-H",
        action="append",
        default=None,
        help="Request header as 'Name: value' (repeatable; repeated names keep order)",
    )
    parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        default=False,
        help="Dispatch on the worker pool and wait for the callback",
    )
    parser.add_argument(
        "--encoding",
        type=str,
        default=None,
        help="Decode the response body with this encoding (default: utf-8)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="simplehttp",
        description="simplehttp CLI - issue simple GET/POST requests.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_NAME} or ~/.config/simplehttp/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- get command ---
    get_parser = subparsers.add_parser(
        "get",
        help="Issue a GET request",
        description="Issue a GET request and print status and body.",
    )
    _add_request_options(get_parser)
    get_parser.set_defaults(func=request.get_cmd)

    # --- post command ---
    post_parser = subparsers.add_parser(
        "post",
        help="Issue a POST request",
        description="Issue a POST request; the body is sent verbatim with no Content-Type inferred.",
    )
    _add_request_options(post_parser)
    body_group = post_parser.add_mutually_exclusive_group(required=True)
    body_group.add_argument("--data", "-d", type=str, help="Request body text (sent as UTF-8)")
    body_group.add_argument("--data-file", type=str, help="Read the request body from a file")
    post_parser.set_defaults(func=request.post_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=DEFAULT_CONFIG_NAME,
        help=f"Path for config file (default: {DEFAULT_CONFIG_NAME})",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (SIMPLEHTTP_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.client_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: simplehttp config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=non-2xx response)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(level=args.log_level or config.log_level)

    # Attach config to args for commands to use
    args.client_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
