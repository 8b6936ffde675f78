# ==============================================================================
# QUARANTINE SPR EXTRACTOR - PATH UTILITIES
# ==============================================================================
# Output file naming for extracted sprites.
#
# Each sprite is written as <base>_<NNN>.ppm where:
#   - <base> is the archive path as given (files land beside the archive),
#     or the archive's file name inside an explicit output directory
#   - NNN is the sprite's position in the archive, zero-padded to 3 digits,
#     counting empty sprites too
#
# Usage:
#   from quarantine_spr.core.paths import Paths
#   target = Paths.sprite_output_path("data/ROBOT.SPR", 7)
#   # -> "data/ROBOT.SPR_007.ppm"
# ==============================================================================

import os
from typing import Optional

from .config import MAX_FILENAME_LEN, PPM_EXTENSION


class FilenameTooLongError(ValueError):
    """Raised when a computed output file name exceeds MAX_FILENAME_LEN."""


class Paths:
    """Centralized output path handling."""

    @classmethod
    def sprite_filename(cls, base: str, sprite_index: int,
                        extension: str = PPM_EXTENSION) -> str:
        """
        Build the output name for one sprite.

        Args:
            base: Archive path or name the output is derived from
            sprite_index: Position of the sprite in the archive
            extension: File extension without the dot

        Returns:
            "<base>_<index:03d>.<extension>"

        Raises:
            FilenameTooLongError: If the final path component would encode
                to more than MAX_FILENAME_LEN bytes
        """
        name = f"{base}_{sprite_index:03d}.{extension}"
        leaf = os.path.basename(name)
        # Filesystems limit the encoded length, not the character count
        leaf_size = len(os.fsencode(leaf))
        if leaf_size > MAX_FILENAME_LEN:
            raise FilenameTooLongError(
                f"output name for sprite {sprite_index} is {leaf_size} bytes "
                f"(limit {MAX_FILENAME_LEN}): '{leaf[:40]}...'"
            )
        return name

    @classmethod
    def sprite_output_path(cls, archive_path: str, sprite_index: int,
                           output_dir: Optional[str] = None) -> str:
        """
        Resolve where a sprite image should be written.

        Without output_dir the archive path itself is the base, so images
        sit next to the archive. With output_dir only the archive's file
        name is kept.
        """
        if output_dir:
            base = os.path.join(output_dir, os.path.basename(archive_path))
        else:
            base = archive_path
        return cls.sprite_filename(base, sprite_index)

    @classmethod
    def ensure_output_dir(cls, output_dir: Optional[str]):
        """Create the output directory if one was requested."""
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
