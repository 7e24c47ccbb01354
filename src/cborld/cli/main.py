"""Main CLI entry point for cborld."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .. import __version__
from ..exceptions import CborldError
from .analyze import analyze_file

logger = logging.getLogger(__name__)


def main() -> int:
    """Main entry point for the cborld CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="cborld: CBOR-LD Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cborld --analyze credential.jsonld                     Show size report
  cborld --analyze vp.jsonld --emit-chunks out/frames    Write framed chunks
  cborld --version                                       Show version
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Encode a JSON-LD file and report sizes and round-trip",
    )

    parser.add_argument(
        "--emit-chunks",
        metavar="DIR",
        type=str,
        help="With --analyze: write gzip(CBOR) as framed chunks plus a manifest",
    )

    parser.add_argument(
        "--chunk-size",
        metavar="N",
        type=int,
        default=600,
        help="Payload bytes per chunk frame (default: 600)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"cborld {__version__}",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        emit_dir = Path(args.emit_chunks) if args.emit_chunks else None
        try:
            analyze_file(file_path, emit_dir=emit_dir, chunk_bytes=args.chunk_size)
            return 0
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Invalid JSON in %s: %s", file_path, e)
            print(f"Error: Invalid JSON: {e}", file=sys.stderr)
            return 1
        except CborldError as e:
            logger.error("Analysis of %s failed: %s", file_path, e)
            print(f"Error analyzing file: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
