"""
Threefish Explorer - Main Entry Point
Encrypt or decrypt one Threefish-256 block from the command line.

Usage:
    python -m src.main encrypt --key HEX64 --tweak HEX32 --input HEX64 [--trace]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .codec.hex_words import format_state
from .explorer.session import (
    ExplorerSession, Operation, DEFAULT_KEY_HEX, DEFAULT_TWEAK_HEX, DEFAULT_INPUT_HEX,
)


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="threefish-explorer",
        description="Threefish-256 block encrypt/decrypt with step trace",
    )
    ap.add_argument("operation", choices=[op.value for op in Operation])
    ap.add_argument("--key", default=DEFAULT_KEY_HEX, help="Key (64 hex digits)")
    ap.add_argument("--tweak", default=DEFAULT_TWEAK_HEX, help="Tweak (32 hex digits)")
    ap.add_argument("--input", default=DEFAULT_INPUT_HEX, help="Input block (64 hex digits)")
    ap.add_argument("--trace", action="store_true", help="Print every step with its state")
    ap.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the Threefish explorer CLI."""
    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    session = ExplorerSession(
        key_hex=args.key,
        tweak_hex=args.tweak,
        input_hex=args.input,
        operation=Operation(args.operation),
    )

    try:
        output = session.process()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.trace:
        for i, step in enumerate(session.steps, 1):
            print(f"{i:3d}  {step}")
            print(f"     {format_state(step.state)}")
        print()

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
