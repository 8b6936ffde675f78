# ==============================================================================
# SPR DECODER MODULE
# ==============================================================================
# Decoder for the .SPR sprite archives shipped with Quarantine (1994,
# Gametek / Imagexcel). SPR files hold indexed-color sprites only; colors
# come from the palette in the companion .IMG file.
#
# SPR FILE FORMAT:
# ----------------
#   Header:
#     - Sprite count N (1 byte, uint8)
#     - N × (width, height) pairs (1 byte each, uint8)
#
#   Pixel data:
#     - For each sprite with width > 0 and height > 0, in header order:
#       width × height bytes of palette indices, row-major
#     - Sprites with a zero dimension have no pixel data at all
#
# There is no offset table and no per-sprite length field, so the archive
# can only be read front to back. A truncated sprite leaves every later
# sprite misaligned; this is not recovered.
#
# USAGE EXAMPLE:
# --------------
#   table, issue = read_palette("SPRITES.IMG")
#   report = SPRDecoder(table).decode("SPRITES.SPR")
#   print(report.success, report.written)
# ==============================================================================

from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, List, Optional

import numpy as np

from ..core.config import MODEX_PLANES, DecodeOptions
from ..core.errors import DecodeIssue, ErrorKind, record
from ..core.paths import Paths
from .img_palette import ColorTable
from .ppm_writer import write_ppm


# ==============================================================================
# DATA CLASSES
# ==============================================================================

@dataclass
class SpriteHeader:
    """
    Width/height entry for one sprite in the archive header.

    Attributes:
        index:  Position of the sprite in the archive (0-based)
        width:  Width in pixels (0-255)
        height: Height in pixels (0-255)
    """
    index: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        """Empty sprites have no pixel data in the stream."""
        return self.width == 0 or self.height == 0

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass
class DecodedSprite:
    """A header paired with its pixel data, alive only while being written."""
    header: SpriteHeader
    pixels: bytes


@dataclass
class DecodeReport:
    """
    Outcome of decoding one archive.

    Attributes:
        filepath:     Archive that was decoded
        sprite_count: Sprite count read from the header (0 if unreadable)
        headers:      Parsed header entries
        written:      Paths of the images that were written, in order
        skipped:      Indices of empty sprites
        issues:       Every failure recorded along the way
    """
    filepath: str
    sprite_count: int = 0
    headers: List[SpriteHeader] = field(default_factory=list)
    written: List[str] = field(default_factory=list)
    skipped: List[int] = field(default_factory=list)
    issues: List[DecodeIssue] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True only when nothing at all went wrong."""
        return not self.issues

    def add_issue(self, issue: DecodeIssue):
        self.issues.append(issue)


# ==============================================================================
# MODE X
# ==============================================================================

def linearize_planar(planar: bytes, planes: int = MODEX_PLANES) -> bytes:
    """
    Re-interleave pixel data that was split into VGA Mode X planes.

    Planar data stores every 4th pixel together: all pixels of plane 0
    first, then plane 1, and so on. Pixel i of plane p belongs at linear
    position planes * i + p.

    If the pixel count is not a multiple of the plane count, the
    leftover bytes at the end are kept where they are.

    Args:
        planar: Pixel data in planar order
        planes: Number of planes (4 for Mode X)

    Returns:
        Pixel data in linear (row-major) order
    """
    arr = np.frombuffer(planar, dtype=np.uint8)
    per_plane = len(arr) // planes
    body = per_plane * planes

    linear = arr.copy()
    linear[:body] = arr[:body].reshape(planes, per_plane).T.ravel()
    return linear.tobytes()


# ==============================================================================
# SPR DECODER
# ==============================================================================

class SPRDecoder:
    """
    Streams an SPR archive and writes one .ppm per non-empty sprite.

    Decoding is best-effort: a bad sprite is reported and skipped, and the
    remaining sprites are still attempted. Only a missing or truncated
    header aborts the archive.

    Usage:
        decoder = SPRDecoder(color_table)
        report = decoder.decode("SPRITES.SPR")
        if not report.success:
            ...
    """

    def __init__(self, palette: ColorTable, options: Optional[DecodeOptions] = None):
        self.palette = palette
        self.options = options or DecodeOptions()

    # ==========================================================================
    # PUBLIC METHODS
    # ==========================================================================

    def decode(self, filepath: str) -> DecodeReport:
        """
        Decode an archive and write its sprites.

        Args:
            filepath: Path to the .SPR file

        Returns:
            DecodeReport; report.success is False if any step failed
        """
        filepath = str(filepath)
        report = DecodeReport(filepath=filepath)

        try:
            f = open(filepath, 'rb')
        except OSError as e:
            report.add_issue(record(ErrorKind.OPEN, filepath,
                                    f"failed to open '{filepath}': {e.strerror or e}"))
            return report

        with f:
            headers = self.read_headers(f, report)
            if headers is None:
                return report

            try:
                Paths.ensure_output_dir(self.options.output_dir)
            except OSError as e:
                report.add_issue(record(
                    ErrorKind.WRITE_OPEN, self.options.output_dir,
                    f"unable to create output directory '{self.options.output_dir}': {e.strerror or e}",
                ))
                return report

            for sprite in self.iter_sprites(f, headers, report):
                self._emit(sprite, report)

        return report

    def read_headers(self, stream: BinaryIO, report: DecodeReport) -> Optional[List[SpriteHeader]]:
        """
        Read the sprite count and the width/height table.

        Leaves the stream positioned at the first sprite's pixel data.

        Returns:
            List of SpriteHeader, or None if the header could not be read
        """
        name = report.filepath

        count_byte = stream.read(1)
        if len(count_byte) != 1:
            report.add_issue(record(ErrorKind.HEADER_READ, name,
                                    f"failed to read sprite count field in header of '{name}'",
                                    expected=1, actual=len(count_byte)))
            return None

        count = count_byte[0]
        report.sprite_count = count
        self.options.info(f"Number of sprites in file: {count}")

        header_size = count * 2
        try:
            table = bytearray(header_size)
        except MemoryError:
            report.add_issue(record(ErrorKind.ALLOCATION, name,
                                    f"failed to allocate {header_size} bytes to buffer header data",
                                    expected=header_size))
            return None

        got = stream.readinto(table) or 0
        if got != header_size:
            report.add_issue(record(ErrorKind.HEADER_READ, name,
                                    f"failed to read {header_size} bytes of header data "
                                    f"from '{name}' (got {got})",
                                    expected=header_size, actual=got))
            return None

        headers = [
            SpriteHeader(index=i, width=table[i * 2], height=table[i * 2 + 1])
            for i in range(count)
        ]
        report.headers = headers
        return headers

    def iter_sprites(self, stream: BinaryIO, headers: List[SpriteHeader],
                     report: DecodeReport) -> Iterator[DecodedSprite]:
        """
        Yield each readable non-empty sprite in archive order.

        Empty sprites are recorded in report.skipped without touching the
        stream. Allocation failures and short reads are recorded and the
        sprite is dropped; iteration carries on with the next header.
        """
        name = report.filepath

        for header in headers:
            if header.is_empty:
                report.skipped.append(header.index)
                continue

            pixel_count = header.pixel_count
            try:
                buffer = bytearray(pixel_count)
            except MemoryError:
                report.add_issue(record(ErrorKind.ALLOCATION, name,
                                        f"failed to allocate {pixel_count} bytes for sprite "
                                        f"at index {header.index}",
                                        expected=pixel_count, sprite_index=header.index))
                continue

            got = stream.readinto(buffer) or 0
            if got != pixel_count:
                report.add_issue(record(ErrorKind.PIXEL_READ, name,
                                        f"failed to read {pixel_count} bytes of pixel data for "
                                        f"sprite {header.index} from '{name}' (got {got})",
                                        expected=pixel_count, actual=got,
                                        sprite_index=header.index))
                continue

            pixels = bytes(buffer)
            if self.options.planar:
                pixels = linearize_planar(pixels)

            yield DecodedSprite(header, pixels)

    # ==========================================================================
    # INTERNAL
    # ==========================================================================

    def _emit(self, sprite: DecodedSprite, report: DecodeReport):
        header = sprite.header
        target, issue = write_ppm(report.filepath, header.index, self.palette,
                                  sprite.pixels, header.width, header.height,
                                  output_dir=self.options.output_dir)
        if issue:
            report.add_issue(issue)
        else:
            report.written.append(target)


def decode_spr(filepath: str, palette: ColorTable,
               options: Optional[DecodeOptions] = None) -> DecodeReport:
    """Decode one archive with a fresh SPRDecoder."""
    return SPRDecoder(palette, options).decode(filepath)
