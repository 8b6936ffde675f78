# ==============================================================================
# ERROR TAXONOMY
# ==============================================================================
# Failures while reading palettes, decoding archives or writing images are
# expected conditions for this tool (damaged discs, truncated copies, read-only
# output folders). They are returned as DecodeIssue values rather than raised,
# and printed to stderr with the usual [ERROR] tag when they are recorded.
#
# Usage:
#   issue = DecodeIssue(ErrorKind.OPEN, "SPRITES.IMG", "failed to open 'SPRITES.IMG'")
#   issue.report()
# ==============================================================================

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kinds of failure that can occur anywhere in the pipeline."""
    OPEN = "open"
    SEEK = "seek"
    SHORT_READ = "short_read"
    HEADER_READ = "header_read"
    PIXEL_READ = "pixel_read"
    ALLOCATION = "allocation"
    WRITE_OPEN = "write_open"
    NAME_TOO_LONG = "name_too_long"

    @property
    def is_short_read(self) -> bool:
        """True for every "read fewer bytes than required" kind."""
        return self in (ErrorKind.SHORT_READ, ErrorKind.HEADER_READ, ErrorKind.PIXEL_READ)


@dataclass
class DecodeIssue:
    """
    A single recorded failure.

    Attributes:
        kind:          What went wrong
        filename:      File being read or written when it happened
        message:       Human-readable diagnostic
        expected:      Bytes that were required (if relevant)
        actual:        Bytes that were actually available (if relevant)
        sprite_index:  Sprite position in the archive (per-sprite failures only)
    """
    kind: ErrorKind
    filename: str
    message: str
    expected: Optional[int] = None
    actual: Optional[int] = None
    sprite_index: Optional[int] = None

    def report(self, stream=None):
        """Print the issue as an [ERROR] line (stderr by default)."""
        print(f"[ERROR] {self.message}", file=stream or sys.stderr)

    def __str__(self) -> str:
        return self.message


def record(kind: ErrorKind, filename: str, message: str, **details) -> DecodeIssue:
    """Create an issue and report it immediately."""
    issue = DecodeIssue(kind, str(filename), message, **details)
    issue.report()
    return issue
