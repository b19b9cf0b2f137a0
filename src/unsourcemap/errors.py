from __future__ import annotations


class UnsourcemapError(Exception):
    """Base exception for unsourcemap."""


class VLQError(UnsourcemapError):
    """Raised when a Base64 VLQ segment cannot be decoded."""


class InvalidCharacterError(VLQError):
    """Raised when a segment contains a character outside the Base64 alphabet."""

    def __init__(self, character: str, position: int) -> None:
        super().__init__(f"Invalid character in VLQ: {character!r} at offset {position}")
        self.character = character
        self.position = position


class IncompleteSequenceError(VLQError):
    """Raised when a segment ends on a continuation digit."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"Incomplete VLQ sequence: {segment!r}")
        self.segment = segment


class SourceMapError(UnsourcemapError):
    """Base for errors about the source map document itself."""


class SourceMapVersionError(SourceMapError):
    def __init__(self, version: object) -> None:
        super().__init__(f"Version info is incorrect! Must be 3. Found: {version!r}")
        self.version = version


class SourceMapFormatError(SourceMapError):
    """Raised when the document is not a well-formed source map envelope."""


class SourceMapFetchError(SourceMapError):
    """Raised when a source map can't be downloaded."""


class UnsafePathError(UnsourcemapError):
    """Raised when a source path is unsafe to write to disk."""
