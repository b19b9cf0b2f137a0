from __future__ import annotations

"""Base64 VLQ decoding.

Each character of a segment carries 6 bits: the low 5 are payload and bit 5
(0x20) is the continuation flag. Digits are little-endian, and the low bit of
the assembled value is the sign.
"""

from .errors import IncompleteSequenceError, InvalidCharacterError

BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

_DIGITS: dict[str, int] = {c: i for i, c in enumerate(BASE64_CHARS)}

VLQ_BASE_SHIFT = 5
VLQ_BASE_MASK = 0x1F
VLQ_CONTINUATION_BIT = 0x20


def decode_vlq(segment: str) -> list[int]:
    """Decode one segment into its signed integers.

    An empty segment decodes to an empty list. Raises InvalidCharacterError
    for characters outside the alphabet and IncompleteSequenceError when the
    last digit still has its continuation bit set.
    """

    values: list[int] = []
    value = 0
    shift = 0

    for position, char in enumerate(segment):
        digit = _DIGITS.get(char)
        if digit is None:
            raise InvalidCharacterError(char, position)

        value |= (digit & VLQ_BASE_MASK) << shift
        shift += VLQ_BASE_SHIFT

        if digit & VLQ_CONTINUATION_BIT:
            continue

        magnitude = value >> 1
        values.append(-magnitude if value & 1 else magnitude)
        value = 0
        shift = 0

    if shift != 0:
        raise IncompleteSequenceError(segment)

    return values
