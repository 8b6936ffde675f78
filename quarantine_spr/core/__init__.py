# ==============================================================================
# CORE MODULE INIT
# ==============================================================================
# Shared building blocks for the extractor:
#   - Config: format constants, exit codes, DecodeOptions
#   - Errors: ErrorKind / DecodeIssue result values
#   - Paths: output file naming
#
# Usage:
#   from quarantine_spr.core import DecodeOptions, ErrorKind
# ==============================================================================

from .config import (
    EXIT_ARCHIVE_ERROR,
    EXIT_OK,
    EXIT_PALETTE_ERROR,
    PALETTE_DATA_OFFSET,
    PALETTE_SIZE_BYTES,
    DecodeOptions,
    parse_offset,
)
from .errors import DecodeIssue, ErrorKind
from .paths import FilenameTooLongError, Paths

__all__ = [
    # Configuration
    'DecodeOptions',
    'parse_offset',
    'PALETTE_DATA_OFFSET',
    'PALETTE_SIZE_BYTES',
    'EXIT_OK',
    'EXIT_PALETTE_ERROR',
    'EXIT_ARCHIVE_ERROR',

    # Errors
    'ErrorKind',
    'DecodeIssue',

    # Paths
    'Paths',
    'FilenameTooLongError',
]
