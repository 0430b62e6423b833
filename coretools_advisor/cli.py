"""
Command-line entry point.

Usage:
    coretools-advisor check            # Warn if the Core Tools are outdated
    coretools-advisor ensure [--force] # Offer to install missing Core Tools
    coretools-advisor runtime          # Print the runtime a new project targets
"""

from __future__ import annotations

import argparse
import sys

from .advisor import RuntimeVersionAdvisor
from .config import load_config
from .logging_config import setup_logging
from .settings import YamlSettingsStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="coretools-advisor",
        description="Check, install and upgrade the Azure Functions Core Tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        help="Path to a configuration file",
    )
    parser.add_argument(
        "--settings",
        help="Path to the preferences file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Warn if the installed Core Tools are outdated")
    ensure = subparsers.add_parser("ensure", help="Offer to install the Core Tools if missing")
    ensure.add_argument(
        "--force",
        action="store_true",
        help="Prompt even if installation prompts were turned off",
    )
    subparsers.add_parser("runtime", help="Print the runtime a new project would target")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    try:
        return _run(args)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


def _run(args: argparse.Namespace) -> int:
    setup_logging(verbose=args.verbose, log_file=args.log_file)

    try:
        config = load_config(args.config, verbose=args.verbose)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    advisor = RuntimeVersionAdvisor(
        config=config,
        settings=YamlSettingsStore(args.settings, verbose=args.verbose),
    )

    if args.command == "check":
        advisor.check()
        return 0
    elif args.command == "ensure":
        return 0 if advisor.ensure_installed(force_prompt=args.force) else 1
    else:
        runtime = advisor.local_runtime()
        if runtime is None:
            print("unknown")
            return 1
        print(runtime.value)
        return 0


if __name__ == "__main__":
    sys.exit(main())
