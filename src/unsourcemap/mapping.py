from __future__ import annotations

"""Reconstruction of mapping records from a `mappings` string.

Every field in a segment is a delta. The generated column restarts at 0 on
each generated line; the source index, original line, original column and
name index run across the whole string.
"""

from dataclasses import dataclass

from .types import Mapping, OriginalPosition
from .vlq import decode_vlq


@dataclass
class _DecoderState:
    generated_column: int = 0
    source_index: int = 0
    original_line: int = 0
    original_column: int = 0
    name_index: int = 0

    def apply(self, generated_line: int, values: list[int]) -> Mapping:
        self.generated_column += values[0]
        if len(values) == 1:
            return Mapping(generated_line=generated_line, generated_column=self.generated_column)

        # Short segments are read by position; absent deltas leave the totals as they are.
        deltas = values[1:4] + [0] * (4 - len(values))
        self.source_index += deltas[0]
        self.original_line += deltas[1]
        self.original_column += deltas[2]

        name_index = None
        if len(values) > 4:
            self.name_index += values[4]
            name_index = self.name_index

        return Mapping(
            generated_line=generated_line,
            generated_column=self.generated_column,
            original=OriginalPosition(
                source_index=self.source_index,
                original_line=self.original_line,
                original_column=self.original_column,
                name_index=name_index,
            ),
        )


def decode_mappings(mappings: str) -> list[Mapping]:
    """Decode a full `mappings` field into records, in segment order.

    Any malformed segment raises (see `decode_vlq`) and nothing is returned.
    """

    state = _DecoderState()
    result: list[Mapping] = []

    for generated_line, line in enumerate(mappings.split(";")):
        state.generated_column = 0

        for segment in line.split(","):
            values = decode_vlq(segment)
            if not values:
                continue
            result.append(state.apply(generated_line, values))

    return result
