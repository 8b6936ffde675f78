import builtins
import io
import os

from conftest import build_spr, read_ppm_text
from quarantine_spr.core.config import DecodeOptions
from quarantine_spr.core.errors import ErrorKind
from quarantine_spr.parsers import spr_decoder
from quarantine_spr.parsers.spr_decoder import (
    DecodeReport,
    SPRDecoder,
    SpriteHeader,
    decode_spr,
    linearize_planar,
)


def ppm_files(directory):
    return sorted(name for name in os.listdir(directory) if name.endswith(".ppm"))


# ==============================================================================
# HEADER / STREAM PARSING
# ==============================================================================

def test_two_sprites_one_empty_consumes_exactly_the_payload(color_table):
    # 1 count byte + 4 header bytes + 4 pixel bytes, then unrelated trailing data
    stream = io.BytesIO(build_spr([(2, 2), (0, 3)], [[1, 2, 3, 4]]) + b"\xee\xee")
    decoder = SPRDecoder(color_table, DecodeOptions(quiet=True))
    report = DecodeReport(filepath="mem.spr")

    headers = decoder.read_headers(stream, report)
    assert stream.tell() == 5
    assert headers == [SpriteHeader(0, 2, 2), SpriteHeader(1, 0, 3)]

    sprites = list(decoder.iter_sprites(stream, headers, report))
    assert stream.tell() == 9
    assert [s.header.index for s in sprites] == [0]
    assert sprites[0].pixels == bytes([1, 2, 3, 4])
    assert report.skipped == [1]
    assert report.success


def test_zero_width_or_height_is_skipped_without_reading(color_table):
    stream = io.BytesIO(build_spr([(0, 5), (5, 0), (1, 1)], [[9]]))
    decoder = SPRDecoder(color_table, DecodeOptions(quiet=True))
    report = DecodeReport(filepath="mem.spr")

    headers = decoder.read_headers(stream, report)
    sprites = list(decoder.iter_sprites(stream, headers, report))

    assert [s.header.index for s in sprites] == [2]
    assert sprites[0].pixels == b"\x09"
    assert report.skipped == [0, 1]
    assert report.issues == []


def test_empty_stream_is_header_read_error(color_table, capsys):
    report = DecodeReport(filepath="empty.spr")

    headers = SPRDecoder(color_table).read_headers(io.BytesIO(b""), report)

    assert headers is None
    assert report.issues[0].kind is ErrorKind.HEADER_READ
    assert "sprite count" in capsys.readouterr().err


def test_truncated_header_table_is_header_read_error(color_table):
    report = DecodeReport(filepath="short.spr")
    stream = io.BytesIO(bytes([3, 1, 1, 2]))

    headers = SPRDecoder(color_table, DecodeOptions(quiet=True)).read_headers(stream, report)

    assert headers is None
    issue = report.issues[0]
    assert issue.kind is ErrorKind.HEADER_READ
    assert (issue.expected, issue.actual) == (6, 3)
    assert report.sprite_count == 3


def test_sprite_count_is_printed(color_table, capsys):
    SPRDecoder(color_table).read_headers(io.BytesIO(b"\x00"), DecodeReport(filepath="x"))

    assert "Number of sprites in file: 0" in capsys.readouterr().out


# ==============================================================================
# FULL DECODE
# ==============================================================================

def test_zero_sprites_writes_nothing_and_succeeds(write_spr, color_table, tmp_path):
    path = write_spr([], [])

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert report.success
    assert report.sprite_count == 0
    assert ppm_files(tmp_path) == []


def test_reference_scenario_writes_single_000_file(write_spr, color_table, colors, tmp_path):
    path = write_spr([(2, 2), (0, 3)], [[1, 2, 3, 4]])

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert report.success
    assert ppm_files(tmp_path) == ["SPRITES.SPR_000.ppm"]
    width, height, _, pixels = read_ppm_text(tmp_path / "SPRITES.SPR_000.ppm")
    assert (width, height) == (2, 2)
    assert pixels == [colors[i] for i in (1, 2, 3, 4)]


def test_one_file_per_non_empty_sprite_with_matching_dimensions(write_spr, color_table, colors, tmp_path):
    headers = [(3, 2), (0, 0), (1, 4), (7, 0), (2, 1)]
    payloads = [list(range(6)), [50, 51, 52, 53], [254, 255]]
    path = write_spr(headers, payloads)

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert report.success
    assert ppm_files(tmp_path) == [
        "SPRITES.SPR_000.ppm",
        "SPRITES.SPR_002.ppm",
        "SPRITES.SPR_004.ppm",
    ]
    assert report.skipped == [1, 3]
    for index, payload in zip((0, 2, 4), payloads):
        width, height, _, pixels = read_ppm_text(tmp_path / f"SPRITES.SPR_{index:03d}.ppm")
        assert (width, height) == headers[index]
        assert pixels == [colors[p] for p in payload]


def test_truncated_second_sprite_keeps_first_file(write_spr, color_table, tmp_path, capsys):
    path = write_spr([(2, 2), (3, 3)], [[1, 2, 3, 4], [5, 6]])

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert not report.success
    assert ppm_files(tmp_path) == ["SPRITES.SPR_000.ppm"]
    issue = report.issues[0]
    assert issue.kind is ErrorKind.PIXEL_READ
    assert issue.kind.is_short_read
    assert (issue.expected, issue.actual, issue.sprite_index) == (9, 2, 1)
    assert "9 bytes of pixel data" in capsys.readouterr().err


def test_truncation_does_not_stop_later_sprites_from_being_attempted(write_spr, color_table):
    path = write_spr([(4, 4), (1, 1), (1, 1)], [[0] * 3])

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert [i.sprite_index for i in report.issues] == [0, 1, 2]
    assert report.written == []


def test_missing_archive_is_open_error(color_table, tmp_path):
    report = decode_spr(str(tmp_path / "absent.spr"), color_table)

    assert not report.success
    assert report.issues[0].kind is ErrorKind.OPEN


def test_decode_is_idempotent(write_spr, color_table, tmp_path):
    path = write_spr([(5, 3)], [list(range(100, 115))])
    target = tmp_path / "SPRITES.SPR_000.ppm"

    decode_spr(str(path), color_table, DecodeOptions(quiet=True))
    first = target.read_bytes()
    decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert target.read_bytes() == first


def test_output_dir_is_created(write_spr, color_table, tmp_path):
    path = write_spr([(1, 1)], [[7]])
    out = tmp_path / "nested" / "out"

    report = decode_spr(str(path), color_table, DecodeOptions(output_dir=str(out), quiet=True))

    assert report.success
    assert ppm_files(out) == ["SPRITES.SPR_000.ppm"]


def test_unusable_output_dir_fails_archive(write_spr, color_table, tmp_path):
    path = write_spr([(1, 1)], [[7]])
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    report = decode_spr(str(path), color_table, DecodeOptions(output_dir=str(blocker), quiet=True))

    assert not report.success
    assert report.issues[0].kind is ErrorKind.WRITE_OPEN


# ==============================================================================
# MODE X
# ==============================================================================

def test_linearize_planar_interleaves_planes():
    # plane 0: a b, plane 1: c d, plane 2: e f, plane 3: g h
    assert linearize_planar(b"abcdefgh") == b"acegbdfh"


def test_linearize_planar_keeps_leftover_bytes():
    assert linearize_planar(b"abcdefghXY") == b"acegbdfhXY"


def test_planar_option_reorders_pixels(write_spr, color_table, colors, tmp_path):
    path = write_spr([(4, 2)], [[0, 1, 2, 3, 4, 5, 6, 7]])

    decode_spr(str(path), color_table, DecodeOptions(planar=True, quiet=True))

    _, _, _, pixels = read_ppm_text(tmp_path / "SPRITES.SPR_000.ppm")
    assert pixels == [colors[i] for i in (0, 2, 4, 6, 1, 3, 5, 7)]


# ==============================================================================
# ALLOCATION FAILURES
# ==============================================================================

def failing_bytearray(size_to_fail):
    """bytearray stand-in that runs out of memory for one buffer size."""
    def _bytearray(size=0, *args):
        if size == size_to_fail:
            raise MemoryError
        return builtins.bytearray(size, *args)
    return _bytearray


def test_sprite_allocation_failure_is_recorded_and_decoding_continues(
        monkeypatch, write_spr, color_table, tmp_path, capsys):
    # header table is 6 bytes, sprite 0 needs 4, sprite 1 needs 1
    path = write_spr([(2, 2), (1, 1), (0, 0)], [[1, 2, 3, 4], [5]])
    monkeypatch.setattr(spr_decoder, "bytearray", failing_bytearray(4), raising=False)

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert not report.success
    assert len(report.issues) == 1
    issue = report.issues[0]
    assert issue.kind is ErrorKind.ALLOCATION
    assert (issue.expected, issue.sprite_index) == (4, 0)
    assert ppm_files(tmp_path) == ["SPRITES.SPR_001.ppm"]
    assert "failed to allocate 4 bytes" in capsys.readouterr().err


def test_header_allocation_failure_aborts_archive(monkeypatch, write_spr, color_table, tmp_path):
    # header table is 2 bytes, the only sprite needs 9
    path = write_spr([(3, 3)], [list(range(9))])
    monkeypatch.setattr(spr_decoder, "bytearray", failing_bytearray(2), raising=False)

    report = decode_spr(str(path), color_table, DecodeOptions(quiet=True))

    assert not report.success
    assert [i.kind for i in report.issues] == [ErrorKind.ALLOCATION]
    assert report.headers == []
    assert ppm_files(tmp_path) == []
