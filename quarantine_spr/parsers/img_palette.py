# ==============================================================================
# IMG PALETTE READER
# ==============================================================================
# Reads the 256-color palette embedded in Quarantine .IMG files.
#
# IMG FILE FORMAT (palette part only):
# ------------------------------------
#   Offset 0x00 - 0x0C: header bytes (not used here)
#   Offset 0x0D:        256 colors × 3 bytes (R, G, B) = 768 bytes
#
# The rest of the file is irrelevant for sprite extraction. Color values are
# full 8-bit channels and are used as-is; every byte value is legal.
#
# USAGE EXAMPLE:
# --------------
#   table, issue = read_palette("SPRITES.IMG")
#   if table is None:
#       print(issue)
#   else:
#       r, g, b = table.get_color(17)
# ==============================================================================

import os
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from ..core.config import PALETTE_COLOR_COUNT, PALETTE_DATA_OFFSET, PALETTE_SIZE_BYTES
from ..core.errors import DecodeIssue, ErrorKind, record


# ==============================================================================
# COLOR TABLE
# ==============================================================================

@dataclass(frozen=True)
class ColorTable:
    """
    Read-only table of 256 RGB colors.

    Attributes:
        data: 768 raw bytes, R G B per color in index order
    """
    data: bytes

    def __post_init__(self):
        if len(self.data) != PALETTE_SIZE_BYTES:
            raise ValueError(
                f"color table needs {PALETTE_SIZE_BYTES} bytes, got {len(self.data)}"
            )
        # Stored as immutable bytes so the lookup array can be shared safely
        object.__setattr__(self, 'data', bytes(self.data))

    def __len__(self) -> int:
        return PALETTE_COLOR_COUNT

    def get_color(self, index: int) -> Tuple[int, int, int]:
        """
        Get a color by palette index.

        Args:
            index: Color index (0-255)

        Returns:
            (R, G, B) tuple
        """
        o = index * 3
        return (self.data[o], self.data[o + 1], self.data[o + 2])

    def as_array(self) -> np.ndarray:
        """Lookup array of shape (256, 3), dtype uint8, read-only."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(PALETTE_COLOR_COUNT, 3)

    @classmethod
    def from_colors(cls, colors) -> 'ColorTable':
        """Build a table from 256 (R, G, B) tuples."""
        return cls(bytes(channel for color in colors for channel in color))


# ==============================================================================
# PALETTE READER
# ==============================================================================

def read_palette(filename: str,
                 offset: int = PALETTE_DATA_OFFSET) -> Tuple[Optional[ColorTable], Optional[DecodeIssue]]:
    """
    Read the color table from a palette-bearing file.

    Exactly one of the returned values is set: the table on success, the
    recorded issue on failure (OPEN, SEEK or SHORT_READ).

    Args:
        filename: Path to the .IMG (or any) file holding the palette
        offset: Byte offset of the first color

    Returns:
        Tuple of (ColorTable or None, DecodeIssue or None)
    """
    try:
        f = open(filename, 'rb')
    except OSError as e:
        return None, record(ErrorKind.OPEN, filename,
                            f"failed to open '{filename}': {e.strerror or e}")

    with f:
        try:
            size = os.fstat(f.fileno()).st_size
            if size < offset:
                return None, record(
                    ErrorKind.SEEK, filename,
                    f"unable to seek to offset 0x{offset:02X} in '{filename}' "
                    f"(file is {size} bytes)",
                    expected=offset, actual=size,
                )
            f.seek(offset)
        except OSError as e:
            return None, record(ErrorKind.SEEK, filename,
                                f"unable to seek to offset 0x{offset:02X} in '{filename}': {e}",
                                expected=offset)

        data = f.read(PALETTE_SIZE_BYTES)

    if len(data) != PALETTE_SIZE_BYTES:
        return None, record(
            ErrorKind.SHORT_READ, filename,
            f"unable to read {PALETTE_SIZE_BYTES} bytes from offset 0x{offset:02X} "
            f"in '{filename}' (got {len(data)})",
            expected=PALETTE_SIZE_BYTES, actual=len(data),
        )

    return ColorTable(data), None
