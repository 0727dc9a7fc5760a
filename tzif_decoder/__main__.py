"""Command line tool to dump the contents of a TZif file as JSON.

Usage: python -m tzif_decoder America/New_York
       python -m tzif_decoder /etc/localtime
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Sequence

from pydantic_core import to_json

from .timezoneinfo import TimezoneInfoError, read, read_file

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tzif-dump", description="Decode a TZif file and print it as JSON."
    )
    parser.add_argument("timezone", help="An IANA timezone key or a path to a TZif file")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Verify references and ordering between fields",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Decode the requested timezone and write it to stdout."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        if os.path.sep in args.timezone and os.path.isfile(args.timezone):
            result = read_file(args.timezone, strict=args.strict)
        else:
            result = read(args.timezone, strict=args.strict)
    except TimezoneInfoError as err:
        _LOGGER.error("%s", err)
        return 1

    # Designations are raw octets and may not be valid UTF-8
    sys.stdout.write(to_json(result, indent=2, bytes_mode="hex").decode("utf-8"))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
