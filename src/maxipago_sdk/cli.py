#!/usr/bin/env python3
"""Command-line tools for the maxiPago! connector.

Usage:
    python -m maxipago_sdk.cli scrub transcript.log
    python -m maxipago_sdk.cli scrub transcript.log --output clean.log
    cat transcript.log | python -m maxipago_sdk.cli scrub
"""

import argparse
import logging
import sys
from typing import List, Optional

from .connectors.maxipago.scrub import scrub

logger = logging.getLogger(__name__)


def run_scrub(input_file: Optional[str], output_file: Optional[str]) -> int:
    """Sanitize a transcript and write it out.

    Args:
        input_file: Transcript path, or None to read stdin.
        output_file: Destination path, or None to write stdout.

    Returns:
        Exit code (0 for success, 1 for I/O errors).
    """
    try:
        if input_file:
            with open(input_file, "r", encoding="utf-8") as f:
                transcript = f.read()
        else:
            transcript = sys.stdin.read()
    except OSError as e:
        logger.error("Cannot read transcript: %s", e)
        return 1

    cleaned = scrub(transcript)

    try:
        if output_file:
            with open(output_file, "w", encoding="utf-8") as f:
                f.write(cleaned)
            logger.info("Scrubbed transcript written to %s", output_file)
        else:
            sys.stdout.write(cleaned)
    except OSError as e:
        logger.error("Cannot write transcript: %s", e)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="maxiPago! connector tools",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    scrub_parser = subparsers.add_parser(
        "scrub",
        help="Redact merchant key, card number and CVV from a transcript",
    )
    scrub_parser.add_argument("input", nargs="?", help="Transcript file (default: stdin)")
    scrub_parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    scrub_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "scrub":
        return run_scrub(args.input, args.output)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
