# ==============================================================================
# PPM WRITER
# ==============================================================================
# Writes decoded sprites as plain-text Netpbm pixmaps (P3).
#
# Output layout:
#   P3
#   <width> <height>
#   255
#   rrr ggg bbb   rrr ggg bbb   rrr ggg bbb   rrr ggg bbb
#   ...
#
# Channel values are zero-padded to 3 digits and a line break is emitted
# before every 4th pixel. There is no trailing newline. Output is fully
# deterministic: the same pixels and palette always give the same bytes.
# ==============================================================================

from typing import Optional, Tuple

import numpy as np

from ..core.config import PIXELS_PER_LINE, PPM_MAX_VALUE
from ..core.errors import DecodeIssue, ErrorKind, record
from ..core.paths import FilenameTooLongError, Paths
from .img_palette import ColorTable


def render_ppm(pixels, width: int, height: int, palette: ColorTable) -> str:
    """
    Render indexed pixels as P3 text.

    Each pixel byte is a direct index into the 256-entry palette, so no
    lookup can fall out of range.

    Args:
        pixels: width × height palette indices (bytes-like)
        width: Sprite width in pixels
        height: Sprite height in pixels
        palette: Color table to resolve indices through

    Returns:
        The complete file contents
    """
    if len(pixels) != width * height:
        raise ValueError(
            f"expected {width * height} pixels for {width}x{height}, got {len(pixels)}"
        )

    idx = np.frombuffer(pixels, dtype=np.uint8)
    rgb = palette.as_array()[idx]

    parts = [f"P3\n{width} {height}\n{PPM_MAX_VALUE}"]
    for i, (r, g, b) in enumerate(rgb.tolist()):
        if i % PIXELS_PER_LINE == 0:
            parts.append("\n")
        parts.append(f"{r:03d} {g:03d} {b:03d}   ")
    return "".join(parts)


def write_ppm(archive_path: str,
              sprite_index: int,
              palette: ColorTable,
              pixels,
              width: int,
              height: int,
              output_dir: Optional[str] = None) -> Tuple[Optional[str], Optional[DecodeIssue]]:
    """
    Write one sprite to <base>_<NNN>.ppm.

    An existing file with the same name is overwritten.

    Args:
        archive_path: Path of the archive the sprite came from (name base)
        sprite_index: Position of the sprite in the archive
        palette: Color table
        pixels: Indexed pixel data
        width: Sprite width
        height: Sprite height
        output_dir: Optional directory to write into instead of beside the archive

    Returns:
        Tuple of (written path or None, DecodeIssue or None)
    """
    try:
        target = Paths.sprite_output_path(archive_path, sprite_index, output_dir)
    except FilenameTooLongError as e:
        return None, record(ErrorKind.NAME_TOO_LONG, archive_path,
                            f"refusing to write sprite {sprite_index}: {e}",
                            sprite_index=sprite_index)

    body = render_ppm(pixels, width, height, palette)

    try:
        with open(target, 'w', encoding='ascii', newline='\n') as f:
            f.write(body)
    except OSError as e:
        return None, record(ErrorKind.WRITE_OPEN, target,
                            f"unable to open '{target}' for writing: {e.strerror or e}",
                            sprite_index=sprite_index)

    return target, None
