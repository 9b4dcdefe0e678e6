"""Command line entry point for netlayout.

Reads a Layout, validates it, and writes the validated Layout with its
derived ``roots`` and ``child2parent`` so an output backend can consume it.

Usage:
    python -m netlayout [layout_file] [-o OUTPUT] [-v]

Arguments:
    layout_file: Path to the YAML or JSON layout (default: stdin)
"""

import argparse
import logging
import sys

import yaml
from pydantic import ValidationError

from netlayout.io import read_layout, write_layout

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_READ_ERROR = 1
EXIT_INVALID_LAYOUT = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.

    Logs go to stderr so they never mix with a layout written to stdout.

    Args:
        verbose: If True, use DEBUG level. Otherwise, use INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def validate_layout(src: str | None, dest: str | None = None) -> int:
    """Read, validate and write a layout.

    Args:
        src: Layout file to read, None or "-" for stdin
        dest: Where to write the validated layout, None or "-" for stdout

    Returns:
        Exit code
    """
    try:
        layout = read_layout(src)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return EXIT_READ_ERROR
    except yaml.YAMLError as e:
        logger.error("Failed to parse layout: %s", e)
        return EXIT_READ_ERROR
    except (ValidationError, ValueError) as e:
        logger.error("Malformed layout: %s", e)
        return EXIT_READ_ERROR

    error = layout.check()
    if error is not None:
        for line in str(error).splitlines():
            logger.error("%s", line)
        return EXIT_INVALID_LAYOUT

    write_layout(layout, dest)
    return EXIT_SUCCESS


def main() -> int:
    """Main entry point for netlayout.

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(
        description="Validate a network interface layout",
        prog="python -m netlayout",
    )
    parser.add_argument(
        "layout_file",
        nargs="?",
        default=None,
        help="Path to the layout file (default: read stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the validated layout here (default: stdout)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose)

    return validate_layout(args.layout_file, args.output)


if __name__ == "__main__":
    sys.exit(main())
