# ==============================================================================
# PARSERS MODULE
# ==============================================================================
# File format readers and writers for Quarantine sprite extraction.
#
# Supported formats:
#   - IMG: palette source (256 RGB colors at offset 0x0D)
#   - SPR: sprite archives (indexed-color bitmaps)
#   - PPM: plain-text Netpbm output (P3)
# ==============================================================================

from .img_palette import ColorTable, read_palette
from .spr_decoder import (
    DecodedSprite,
    DecodeReport,
    SPRDecoder,
    SpriteHeader,
    decode_spr,
    linearize_planar,
)
from .ppm_writer import render_ppm, write_ppm

__all__ = [
    # IMG palette
    'ColorTable', 'read_palette',

    # SPR decoder
    'SPRDecoder', 'SpriteHeader', 'DecodedSprite', 'DecodeReport',
    'decode_spr', 'linearize_planar',

    # PPM writer
    'render_ppm', 'write_ppm',
]
