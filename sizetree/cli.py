"""
Command-line entry point: scan a directory and print or export its size tree.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from .models import SortKey, SortPolicy
from .scanner import build_tree
from .sorting import sort_tree
from .render import print_tree, write_lines
from .export import write_html

APP_NAME = "sizetree"
DEFAULT_TARGET = "."
DEFAULT_SORT = SortKey.NAME.value

logger = logging.getLogger(APP_NAME)

EXAMPLES = f"""\
Examples:
  {APP_NAME}                          Show current directory
  {APP_NAME} /path/to/dir             Show specified directory
  {APP_NAME} -sort size .             Sort by size
  {APP_NAME} -sort name -reverse .    Reverse sort by name
  {APP_NAME} -html output.html .      Output to HTML file
"""

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Show a directory tree with cumulative file sizes.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("directory", nargs="?", default=DEFAULT_TARGET,
                        help="Target directory path (default: current directory)")
    parser.add_argument("-sort", "--sort", dest="sort", default=DEFAULT_SORT, metavar="{name,size}",
                        help="Sort method: name (by name) or size (by size)")
    parser.add_argument("-reverse", "--reverse", dest="reverse", action="store_true",
                        help="Reverse sort order")
    parser.add_argument("-html", "--html", dest="html", default="", metavar="PATH",
                        help="Output to HTML file (e.g., output.html)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log skipped entries and scan statistics")
    return parser

def setup_logging(verbose: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    pkg_logger = logging.getLogger(APP_NAME)
    pkg_logger.handlers[:] = [handler]
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    pkg_logger.propagate = False

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    target = args.directory
    try:
        os.stat(target)
    except FileNotFoundError:
        logger.error("Error: Directory '%s' does not exist", target)
        return 1
    except OSError:
        # Reported with full detail by build_tree below.
        pass

    try:
        policy = SortPolicy(key=SortKey.parse(args.sort), reverse=args.reverse)
    except ValueError as e:
        logger.error("Error: %s", e)
        return 1

    try:
        root = build_tree(target)
    except OSError as e:
        logger.error("Error building file tree: %s", e)
        return 1

    sort_tree(root, policy)

    if args.html:
        try:
            write_html(root, target, args.html, policy)
        except OSError as e:
            logger.error("Error generating HTML: %s", e)
            return 1
        write_lines([f"HTML output saved to: {args.html}"])
    else:
        print_tree(root)
    return 0

if __name__ == "__main__":
    sys.exit(main())
