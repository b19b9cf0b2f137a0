from __future__ import annotations

"""Path normalization and safe filesystem joins.

Entries in a source map's `sources` list are whatever the bundler wrote:
absolute paths, `webpack://` URLs, Windows paths, and `../` chains out of
the project directory are all common.

This module provides:
- `source_output_path()` to prefix a source with the map's `sourceRoot`.
- `normalize_relative_path()` to turn those inputs into stable, relative paths.
- A `safe_join()` helper that prevents directory traversal when writing outputs.
"""

import re
from pathlib import Path, PurePosixPath

from .errors import UnsafePathError

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:$")


def source_output_path(source_root: str | None, source: str) -> str:
    """Prefix `source` with `source_root`, inserting a separator if needed."""

    if not source_root:
        return source
    if source_root.endswith("/") or source.startswith("/"):
        return source_root + source
    return f"{source_root}/{source}"


def normalize_relative_path(untrusted_path: str) -> str:
    """Normalize an untrusted path into a safe, relative, POSIX-like path.

    - Removes URL schemes ("file://", "webpack://", etc.)
    - Normalizes separators to '/'
    - Resolves '.' and '..' segments
    - Strips Windows drive letters

    Raises UnsafePathError for empty paths or any attempt to escape above the
    output directory.
    """

    path = untrusted_path

    if "://" in path:
        path = path.split("://", 1)[1]

    path = path.replace("\\", "/")
    path = path.lstrip("/")

    parts: list[str] = []
    attempted_escape = False
    for part in path.split("/"):
        if part in ("", "."):
            continue
        if _DRIVE_LETTER.match(part):
            continue
        if part == "..":
            if parts:
                parts.pop()
            else:
                attempted_escape = True
            continue
        parts.append(part)

    if attempted_escape:
        raise UnsafePathError(f"Path attempts to escape root: {untrusted_path!r}")

    if not parts:
        raise UnsafePathError(f"Unsafe/empty path: {untrusted_path!r}")

    return str(PurePosixPath(*parts))


def safe_join(base: Path, relative_path: str) -> Path:
    """Join an untrusted path to a base directory without allowing traversal."""

    rel = normalize_relative_path(relative_path)

    joined = base.joinpath(*PurePosixPath(rel).parts)

    base_resolved = base.resolve(strict=False)
    joined_resolved = joined.resolve(strict=False)

    # Symlinks inside `base` can still point elsewhere.
    if not joined_resolved.is_relative_to(base_resolved):
        raise UnsafePathError(f"Path escapes output directory: {relative_path!r}")

    return joined
