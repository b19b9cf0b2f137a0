from __future__ import annotations

"""Extraction helpers.

Embedded `sourcesContent` entries can either be printed or written to disk,
recreating the original project layout under an output directory.

This module is intentionally filesystem-focused and does not decode mappings.
"""

import sys
from pathlib import Path
from typing import TextIO

from .errors import UnsafePathError
from .paths import safe_join, source_output_path
from .types import SourceMap


def print_sources(source_map: SourceMap, *, stream: TextIO | None = None, skip_ignored: bool = False) -> int:
    """Print each embedded source with a `[FILE]` header.

    Returns the number of sources printed.
    """

    out = stream if stream is not None else sys.stdout
    printed = 0
    for entry in source_map.sources_with_content():
        if skip_ignored and entry.ignored:
            continue
        print(f"[FILE] {entry.path}\n\n {entry.content}\n", file=out)
        printed += 1
    return printed


def extract_sources(
    source_map: SourceMap,
    output_dir: Path,
    *,
    verbose: bool = False,
    skip_ignored: bool = False,
) -> int:
    """Write embedded sources below `output_dir`.

    Returns the number of files written.
    """

    extracted_count = 0
    source_root = source_map.document.source_root

    for entry in source_map.sources_with_content():
        if skip_ignored and entry.ignored:
            if verbose:
                print(f"  IGNORED: {entry.path}", file=sys.stderr)
            continue

        try:
            out_path = safe_join(output_dir, source_output_path(source_root, entry.path))
        except UnsafePathError as e:
            if verbose:
                print(f"  SKIP: {entry.path} ({e})", file=sys.stderr)
            continue

        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(entry.content, encoding="utf-8")
            extracted_count += 1
            if verbose:
                print(f"  {out_path.relative_to(output_dir)}")
        except OSError as e:
            if verbose:
                print(f"  FAILED: {entry.path} - {e}", file=sys.stderr)

    return extracted_count
