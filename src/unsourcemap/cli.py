from __future__ import annotations

"""Command-line interface for unsourcemap.

By default the embedded original sources are printed to stdout. Use
`--save-path` to write them to disk instead.
"""

import argparse
import sys
from pathlib import Path

from .errors import UnsourcemapError
from .extract import extract_sources, print_sources
from .loader import fetch_source_map, parse_source_map, parse_source_map_from_string
from .types import SourceMap


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog="unsourcemap",
        description="Small command line utility to work with parsing JavaScript source map files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    unsourcemap -f app.js.map               # Print embedded sources
    unsourcemap -f app.js.map -S src/       # Write embedded sources to src/
    unsourcemap -u https://x/app.js.map -n  # Dry run - list sources
    unsourcemap -s '{"version":3,...}'      # Inline source map JSON
        """,
    )


def _load(args: argparse.Namespace) -> SourceMap | None:
    if args.file_path is not None:
        path = Path(args.file_path)
        if not path.is_file():
            print(f"Error: {path} not found", file=sys.stderr)
            return None
        return parse_source_map(path)
    if args.source_map is not None:
        return parse_source_map_from_string(args.source_map)
    return fetch_source_map(args.url)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("-f", "--file-path", help="Path to source map file")
    source.add_argument("-s", "--source-map", help="Source map content as a string")
    source.add_argument("-u", "--url", help="URL of source map")
    parser.add_argument("-S", "--save-path", help="Directory to save the original sources to")
    parser.add_argument("-v", "--verbose", action="store_true", help="List each file written (with -S)")
    parser.add_argument("-n", "--dry-run", action="store_true", help="List sources without printing or writing them")
    parser.add_argument(
        "--skip-ignored",
        action="store_true",
        help="Skip sources listed in the map's ignoreList",
    )

    args = parser.parse_args(argv)

    try:
        source_map = _load(args)
    except (UnsourcemapError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if source_map is None:
        return 1

    entries = source_map.sources_with_content()

    if args.dry_run:
        print(f"Decoded {len(source_map.mappings)} mappings")
        print(f"Would extract {len(entries)} source files")
        for entry in entries:
            marker = " [ignored]" if entry.ignored else ""
            print(f"  {entry.path} ({len(entry.content)} chars){marker}")
        return 0

    if not args.save_path:
        print_sources(source_map, skip_ignored=args.skip_ignored)
        return 0

    output_dir = Path(args.save_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    count = extract_sources(source_map, output_dir, verbose=args.verbose, skip_ignored=args.skip_ignored)
    print(f"Extracted {count} source files to {output_dir}/")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
