import io

import pytest

from goldfish.font import (
    BoundingBox,
    UnsupportedFontError,
    load_font,
    load_font_file,
    parse_bdf,
)
from goldfish.log import get_default_stream, set_default_stream

SAMPLE = "\n".join(
    [
        "STARTFONT 2.1",
        "FONT sample",
        "FONTBOUNDINGBOX 8 8 0 -2",
        'COPYRIGHT "Public domain"',
        "FOUNDRY Nobody",
        "CHARS 3",
        "STARTCHAR A",
        "ENCODING 65",
        "DWIDTH 6 0",
        "BBX 4 2 1 0",
        "BITMAP",
        "90",
        "F0",
        "ENDCHAR",
        "STARTCHAR wide",
        "ENCODING 66",
        "DWIDTH 9 0",
        "BBX 8 1 0 0",
        "BITMAP",
        "A5",
        "ENDCHAR",
        "STARTCHAR control",
        "ENCODING 31",
        "DWIDTH 4 0",
        "BBX 1 1 0 0",
        "BITMAP",
        "80",
        "ENDCHAR",
        "ENDFONT",
    ]
).encode("ascii")


def alpha(glyph, x, y):
    return glyph.pixels[(y * glyph.bbox.width + x) * 4 + 3]


@pytest.fixture
def log_stream():
    previous = get_default_stream()
    stream = io.StringIO()
    set_default_stream(stream)
    yield stream
    set_default_stream(previous)


def test_font_bounding_box_and_count():
    font = parse_bdf(SAMPLE, "sample.bdf")
    assert font.bbox == BoundingBox(8, 8, 0, -2)
    assert font.count == 3
    assert len(font.glyphs) == 3


def test_glyph_lookup():
    font = parse_bdf(SAMPLE)
    glyph = font.get(65)
    assert glyph.code == 65
    assert glyph.dwidth == (6, 0)
    assert glyph.bbox == BoundingBox(4, 2, 1, 0)
    assert font.get(67) is None


def test_control_codes_never_match():
    font = parse_bdf(SAMPLE)
    assert any(g.code == 31 for g in font.glyphs)
    assert font.get(31) is None


def test_bitmap_rows_decoded():
    glyph = parse_bdf(SAMPLE).get(65)
    assert len(glyph.pixels) == 4 * 2 * 4
    assert [alpha(glyph, x, 0) for x in range(4)] == [255, 0, 0, 255]
    assert [alpha(glyph, x, 1) for x in range(4)] == [255, 255, 255, 255]


def test_wide_bitmap_row():
    glyph = parse_bdf(SAMPLE).get(66)
    assert [alpha(glyph, x, 0) for x in range(8)] == [255, 0, 255, 0, 0, 255, 0, 255]


def test_set_pixels_are_white():
    glyph = parse_bdf(SAMPLE).get(65)
    assert glyph.pixels[0:4] == b"\xff\xff\xff\xff"


def test_crlf_matches_lf():
    lf = parse_bdf(SAMPLE)
    crlf = parse_bdf(SAMPLE.replace(b"\n", b"\r\n"))
    assert crlf == lf


def test_data_after_nul_is_ignored():
    assert parse_bdf(SAMPLE + b"\0STARTCHAR junk") == parse_bdf(SAMPLE)


def test_too_many_glyphs_raises():
    data = b"CHARS 1\nSTARTCHAR a\nENDCHAR\nSTARTCHAR b\nENDCHAR\n"
    with pytest.raises(ValueError):
        parse_bdf(data)


def test_encoding_outside_char_raises():
    with pytest.raises(ValueError):
        parse_bdf(b"CHARS 1\nENCODING 65\n")


def test_truetype_rejected():
    with pytest.raises(UnsupportedFontError):
        load_font(b"\x00\x01\x00\x00\x00" + b"\x00" * 20, "x.ttf")


def test_load_font_parses_bdf():
    assert load_font(SAMPLE) == parse_bdf(SAMPLE)


def test_header_is_logged(log_stream):
    parse_bdf(SAMPLE, "sample.bdf")
    output = log_stream.getvalue()
    assert "sample.bdf: Public domain" in output
    assert "sample.bdf: Made by Nobody" in output
    assert "sample.bdf: 3 characters" in output


def test_load_font_file_from_resources():
    font = load_font_file("base:/fonts/sample.bdf", {"fonts/sample.bdf": SAMPLE})
    assert font == parse_bdf(SAMPLE)


def test_load_font_file_from_disk(tmp_path):
    path = tmp_path / "sample.bdf"
    path.write_bytes(SAMPLE)
    assert load_font_file(str(path)).get(66).dwidth == (9, 0)


def test_load_font_file_missing():
    with pytest.raises(FileNotFoundError):
        load_font_file("base:/fonts/none.bdf", {})