#!/usr/bin/env python3
"""
VBAM CLI Entry Point

Run with: python -m vbam_cma <command> [args]
"""

import argparse
import json
import logging
import sys
from typing import NoReturn

from .core.logging import set_log_level


def output_json(data: dict, indent: int = 2) -> None:
    """Print JSON output to stdout."""
    print(json.dumps(data, indent=indent))


def output_error(message: str, exit_code: int = 1, **kwargs) -> NoReturn:
    """Print error JSON and exit."""
    error_data = {
        "error": kwargs.pop("error_type", "error"),
        "message": message,
    }
    error_data.update(kwargs)
    print(json.dumps(error_data, indent=2))
    sys.exit(exit_code)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vbam-cma",
        description="VBAM Campaign Moderator's Assistant - campaign data",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress and storage activity to stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    from .commands import campaign

    campaign.register_parsers(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level(logging.DEBUG)

    if not args.command:
        parser.print_help()
        return 0

    try:
        result = args.func(args)

        if isinstance(result, dict) and result:
            output_json(result)
            if "error" in result:
                return 1

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except Exception as e:
        output_error(str(e), error_type="command_error", command=args.command)


if __name__ == "__main__":
    sys.exit(main())
