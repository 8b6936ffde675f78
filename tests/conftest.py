"""
Shared pytest fixtures for the extractor tests
"""

from pathlib import Path

import pytest

from quarantine_spr.parsers.img_palette import ColorTable


def make_colors():
    """256 distinct-ish colors so lookups are easy to verify."""
    return [(i, 255 - i, (i * 7) % 256) for i in range(256)]


def build_spr(headers, payloads):
    """Assemble SPR bytes from (width, height) pairs and pixel payloads."""
    data = bytearray([len(headers)])
    for width, height in headers:
        data += bytes([width, height])
    for payload in payloads:
        data += bytes(payload)
    return bytes(data)


@pytest.fixture
def colors():
    return make_colors()


@pytest.fixture
def color_table(colors):
    return ColorTable.from_colors(colors)


@pytest.fixture
def palette_file(tmp_path, color_table):
    """An .IMG file with 13 junk header bytes, the palette, and trailing data."""
    path = tmp_path / "SPRITES.IMG"
    path.write_bytes(b"IMAGEXCEL\x00\x01\x02\x03" + color_table.data + b"\xaa" * 64)
    return path


@pytest.fixture
def write_spr(tmp_path):
    """Factory writing an SPR archive into tmp_path."""
    def _write(headers, payloads, name="SPRITES.SPR") -> Path:
        path = tmp_path / name
        path.write_bytes(build_spr(headers, payloads))
        return path
    return _write


def read_ppm_text(path):
    """Parse a P3 file into (width, height, maxval, [(r, g, b), ...])."""
    return parse_ppm(Path(path).read_text(encoding="ascii"))


def parse_ppm(text):
    tokens = text.split()
    assert tokens[0] == "P3"
    width, height, maxval = int(tokens[1]), int(tokens[2]), int(tokens[3])
    values = [int(t) for t in tokens[4:]]
    pixels = [tuple(values[i:i + 3]) for i in range(0, len(values), 3)]
    return width, height, maxval, pixels
