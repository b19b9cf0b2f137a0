from __future__ import annotations

"""Loading source map documents.

Source maps arrive as a file on disk, an inline JSON string, or a URL. All
three end up in `create_source_map()`, which checks the version before the
`mappings` field is decoded.

Files and downloads may be zstd-compressed; they are detected by the frame
magic rather than by file extension.
"""

import json
from pathlib import Path
from typing import Any

import httpx
import zstandard as zstd

from .errors import SourceMapFetchError, SourceMapFormatError, SourceMapVersionError
from .mapping import decode_mappings
from .types import SourceMap, SourceMapDocument

SUPPORTED_VERSION = 3

ZSTD_MAGIC = b"\x28\xb5\x2f\xfd"

# Prefix some servers prepend to JSON responses to defeat XSSI.
XSSI_PREFIX = ")]}'"


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise SourceMapFormatError(f"'{key}' must be a string")
    return value


def _string_list(raw: dict[str, Any], key: str, *, nullable: bool) -> list | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise SourceMapFormatError(f"'{key}' must be a list")
    for item in value:
        if item is None and nullable:
            continue
        if not isinstance(item, str):
            raise SourceMapFormatError(f"'{key}' entries must be strings")
    return value


def parse_document(raw: Any) -> SourceMapDocument:
    """Read the JSON envelope of a revision 3 source map."""

    if not isinstance(raw, dict):
        raise SourceMapFormatError("Source map must be a JSON object")

    if "version" not in raw:
        raise SourceMapFormatError("Missing 'version' field")
    if "sections" in raw:
        raise SourceMapFormatError("Index source maps ('sections') are not supported")

    mappings = raw.get("mappings")
    if not isinstance(mappings, str):
        raise SourceMapFormatError("'mappings' must be a string")

    ignore_list = raw.get("ignoreList")
    if ignore_list is not None:
        if not isinstance(ignore_list, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in ignore_list
        ):
            raise SourceMapFormatError("'ignoreList' must be a list of integers")

    return SourceMapDocument(
        version=raw["version"],
        sources=_string_list(raw, "sources", nullable=True) or [],
        names=_string_list(raw, "names", nullable=False) or [],
        mappings=mappings,
        file=_optional_str(raw, "file"),
        source_root=_optional_str(raw, "sourceRoot"),
        sources_content=_string_list(raw, "sourcesContent", nullable=True),
        ignore_list=ignore_list,
    )


def create_source_map(document: SourceMapDocument) -> SourceMap:
    version = document.version
    # 3.0 == 3 in Python; only the integer is a valid version.
    if isinstance(version, bool) or not isinstance(version, int) or version != SUPPORTED_VERSION:
        raise SourceMapVersionError(version)

    return SourceMap(document=document, mappings=decode_mappings(document.mappings))


def parse_source_map_from_string(text: str) -> SourceMap:
    text = text.lstrip("\ufeff")
    if text.startswith(XSSI_PREFIX):
        text = text.split("\n", 1)[1] if "\n" in text else ""

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceMapFormatError(f"Invalid JSON: {e}") from e

    return create_source_map(parse_document(raw))


def _decompress(data: bytes) -> bytes:
    dctx = zstd.ZstdDecompressor()
    try:
        # decompressobj() copes with frames that don't record their content size.
        return dctx.decompressobj().decompress(data)
    except zstd.ZstdError as e:
        raise SourceMapFormatError(f"Invalid zstd data: {e}") from e


def parse_source_map_from_bytes(data: bytes) -> SourceMap:
    if data.startswith(ZSTD_MAGIC):
        data = _decompress(data)

    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SourceMapFormatError(f"Source map is not valid UTF-8: {e}") from e

    return parse_source_map_from_string(text)


def parse_source_map(path: Path | str) -> SourceMap:
    return parse_source_map_from_bytes(Path(path).read_bytes())


def fetch_source_map(url: str, *, timeout: float = 30.0) -> SourceMap:
    try:
        resp = httpx.get(url, timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise SourceMapFetchError(f"Failed to fetch {url}: {e}") from e

    if resp.status_code >= 400:
        raise SourceMapFetchError(f"Failed to fetch {url}: HTTP {resp.status_code}")

    return parse_source_map_from_bytes(resp.content)
