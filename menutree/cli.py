"""CLI entrypoint for the JSON website structure builder."""
from __future__ import annotations
import argparse
from pathlib import Path
from loguru import logger

from .builder import StructureBuilder
from .core.errors import MenuTreeError
from .core.logging import setup_logging
from .core.settings import load_settings

USAGE_TEXT = """
JSON Website Structure Builder
-------------------------------------------------------
Usage: menutree [Root folder] [Output file]
-------------------------------------------------------
Builds a JSON file containing the structure of folders.
Except the root folder, every folder that appears in
the structure must contain a '.menu' file holding a JSON
array of entries. The entry without a 'link' describes
the folder itself, entries with a 'link' become its
sub items. Files named '.template.<group>' render the
items of <group> into '.<group>.html'.
"""


def build_parser():
    p = argparse.ArgumentParser(prog="menutree", description="JSON Website Structure Builder")
    p.add_argument("paths", nargs="*", metavar="PATH", help="Root folder of the site, then the structure file to write")
    p.add_argument("--config", type=Path, help="Settings file (YAML)")
    p.add_argument(
        "--log-level",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        help="Override MENUTREE_LOG_LEVEL",
    )
    p.add_argument(
        "--plain-json",
        action="store_true",
        help="Write the structure file as plain JSON without escaping quotes",
    )
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if len(args.paths) != 2:
        print(USAGE_TEXT)
        return 2
    root, output = args.paths
    setup_logging(args.log_level)
    try:
        settings = load_settings(args.config)
        if args.plain_json:
            from dataclasses import replace
            settings = replace(settings, escape_quotes=False)
        StructureBuilder(root, output, settings).build()
    except MenuTreeError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
