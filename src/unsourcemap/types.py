from __future__ import annotations

"""Data model for decoded source maps.

`SourceMapDocument` mirrors the revision 3 JSON envelope. `Mapping` is one
decoded segment of its `mappings` field.
"""

import bisect
from dataclasses import dataclass, field


@dataclass(frozen=True)
class OriginalPosition:
    """Where a generated position came from.

    Segments carry the source index, line and column together, so they are
    grouped here rather than stored as independent optionals.
    """

    source_index: int
    original_line: int
    original_column: int
    name_index: int | None = None


@dataclass(frozen=True)
class Mapping:
    generated_line: int
    generated_column: int
    original: OriginalPosition | None = None

    @property
    def source_index(self) -> int | None:
        return self.original.source_index if self.original else None

    @property
    def original_line(self) -> int | None:
        return self.original.original_line if self.original else None

    @property
    def original_column(self) -> int | None:
        return self.original.original_column if self.original else None

    @property
    def name_index(self) -> int | None:
        return self.original.name_index if self.original else None


@dataclass(frozen=True)
class SourceEntry:
    index: int
    path: str
    content: str
    ignored: bool = False


@dataclass(frozen=True)
class SourceMapDocument:
    version: int
    sources: list[str | None]
    names: list[str]
    mappings: str
    file: str | None = None
    source_root: str | None = None
    sources_content: list[str | None] | None = None
    ignore_list: list[int] | None = None


def _lookup(items: list, index: int | None):
    if index is None or not 0 <= index < len(items):
        return None
    return items[index]


@dataclass(frozen=True)
class SourceMap:
    document: SourceMapDocument
    mappings: list[Mapping]
    _lines: dict[int, tuple[list[int], list[Mapping]]] | None = field(default=None, init=False, repr=False, compare=False)

    def sources_with_content(self) -> list[SourceEntry]:
        """Pair each source path with its embedded content, where present."""

        contents = self.document.sources_content
        if contents is None:
            return []

        ignored = set(self.document.ignore_list or ())
        entries: list[SourceEntry] = []
        for index, path in enumerate(self.document.sources):
            if index >= len(contents):
                break
            content = contents[index]
            if path is None or content is None:
                continue
            entries.append(SourceEntry(index=index, path=path, content=content, ignored=index in ignored))
        return entries

    def source_for(self, mapping: Mapping) -> str | None:
        return _lookup(self.document.sources, mapping.source_index)

    def name_for(self, mapping: Mapping) -> str | None:
        return _lookup(self.document.names, mapping.name_index)

    def original_position_for(self, line: int, column: int) -> Mapping | None:
        """Find the mapping covering a 0-based generated (line, column).

        That is the mapping on `line` with the largest generated column not
        after `column`. Returns None if there is none.
        """

        lines = self._lines
        if lines is None:
            by_line: dict[int, list[Mapping]] = {}
            for mapping in self.mappings:
                by_line.setdefault(mapping.generated_line, []).append(mapping)
            lines = {}
            for generated_line, line_mappings in by_line.items():
                # Sorted copy for bisect only; `mappings` keeps segment order.
                line_mappings.sort(key=lambda m: m.generated_column)
                lines[generated_line] = ([m.generated_column for m in line_mappings], line_mappings)
            # Assigned once, fully built.
            object.__setattr__(self, "_lines", lines)

        entry = lines.get(line)
        if entry is None:
            return None

        columns, line_mappings = entry
        index = bisect.bisect_right(columns, column)
        if index == 0:
            return None
        return line_mappings[index - 1]
