# ==============================================================================
# QUARANTINE SPR EXTRACTOR - SOURCE PACKAGE
# ==============================================================================
# Extracts sprites from Quarantine (1994) .SPR archives as .ppm images,
# using the palette stored in the companion .IMG file.
#
# Subpackages:
#   - core: configuration, error values, output paths
#   - parsers: IMG palette reader, SPR decoder, PPM writer
#
# Entry points:
#   - main.py: script launcher
#   - quarantine_spr/cli.py: command-line interface
# ==============================================================================

__version__ = "1.0.0"
__description__ = "Sprite extractor for Quarantine (1994) SPR archives"

from .core import DecodeOptions, ErrorKind
from .parsers import ColorTable, SPRDecoder, decode_spr, read_palette

__all__ = [
    '__version__',
    '__description__',

    # Core
    'DecodeOptions',
    'ErrorKind',

    # Parsers
    'ColorTable',
    'SPRDecoder',
    'decode_spr',
    'read_palette',
]
