# ==============================================================================
# QUARANTINE SPR EXTRACTOR - CONFIGURATION MODULE
# ==============================================================================
# Format constants and per-run settings.
#
# The tool reads no configuration file and no environment variables; every
# setting comes from a DecodeOptions instance, which the CLI builds from its
# flags and library callers can construct directly.
#
# Usage:
#   from quarantine_spr.core.config import DecodeOptions
#   options = DecodeOptions(output_dir="out", planar=False)
# ==============================================================================

from dataclasses import dataclass
from typing import Optional


# ==============================================================================
# FORMAT CONSTANTS
# ==============================================================================

# The .IMG palette starts 13 bytes into the file
PALETTE_DATA_OFFSET = 0x0D

# 256 colors, 3 bytes each (R, G, B)
PALETTE_COLOR_COUNT = 256
PALETTE_SIZE_BYTES = PALETTE_COLOR_COUNT * 3

# VGA Mode X splits video memory into 4 planes
MODEX_PLANES = 4

# -----------------------------------------------------------------------------
# OUTPUT
# -----------------------------------------------------------------------------
PPM_EXTENSION = "ppm"

# Pixels written per text line in the P3 body
PIXELS_PER_LINE = 4

PPM_MAX_VALUE = 255

# Longest output file name accepted (NAME_MAX on common filesystems)
MAX_FILENAME_LEN = 255

# -----------------------------------------------------------------------------
# EXIT CODES
# -----------------------------------------------------------------------------
EXIT_OK = 0
EXIT_PALETTE_ERROR = 255   # -1 as an unsigned process status
EXIT_ARCHIVE_ERROR = 254   # -2 as an unsigned process status


# ==============================================================================
# DECODE OPTIONS
# ==============================================================================

@dataclass
class DecodeOptions:
    """
    Settings for one palette + archive run.

    Attributes:
        palette_offset: Byte offset of the color table in the palette file
        output_dir:     Directory for .ppm files (None = beside the archive)
        planar:         Re-interleave Mode X planar pixel data before writing
        quiet:          Suppress informational output
    """
    palette_offset: int = PALETTE_DATA_OFFSET
    output_dir: Optional[str] = None
    planar: bool = False
    quiet: bool = False

    @classmethod
    def from_args(cls, args) -> 'DecodeOptions':
        """Build options from a parsed argparse namespace."""
        return cls(
            palette_offset=getattr(args, 'palette_offset', PALETTE_DATA_OFFSET),
            output_dir=getattr(args, 'output_dir', None),
            planar=getattr(args, 'planar', False),
            quiet=getattr(args, 'quiet', False),
        )

    def info(self, text: str):
        """Print an informational line unless running quietly."""
        if not self.quiet:
            print(text)


def parse_offset(value: str) -> int:
    """
    Parse a byte offset given on the command line.

    Accepts decimal ("13") or prefixed hex/octal/binary ("0x0D").

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    offset = int(value, 0)
    if offset < 0:
        raise ValueError(f"offset must be non-negative: {value}")
    return offset
