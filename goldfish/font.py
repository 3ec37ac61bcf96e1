"""Bitmap fonts loaded from BDF data."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from goldfish.file import open_file
from goldfish.log import log as _engine_log

_TTF_MAGIC = b"\x00\x01\x00\x00\x00"
_INT_PATTERN = re.compile(r"\s*([+-]?\d+)")


class UnsupportedFontError(ValueError):
    """The data is a font format that cannot be loaded."""


@dataclass
class BoundingBox:
    """Size and offset of a font or glyph cell."""

    width: int = 0
    height: int = 0
    x: int = 0
    y: int = 0


@dataclass
class Glyph:
    """One character of a bitmap font with RGBA pixels, row by row."""

    code: int = 0
    dwidth: Tuple[int, int] = (0, 0)
    bbox: BoundingBox = field(default_factory=BoundingBox)
    pixels: bytes = b""


@dataclass
class BitmapFont:
    """A font made of fixed glyph bitmaps."""

    bbox: BoundingBox = field(default_factory=BoundingBox)
    count: int = 0
    glyphs: List[Optional[Glyph]] = field(default_factory=list)

    def get(self, code: int) -> Optional[Glyph]:
        """Return the glyph for ``code``; control codes never match."""
        if code < 0x20:
            return None
        return next(
            (glyph for glyph in self.glyphs if glyph is not None and glyph.code == code),
            None,
        )


def _atoi(text: str) -> int:
    match = _INT_PATTERN.match(text)
    return int(match.group(1)) if match else 0


def _strip_quotes(token: str) -> str:
    if token.startswith('"'):
        token = token[1:]
    if token.endswith('"'):
        token = token[:-1]
    return token


def _split_args(line: str) -> List[str]:
    args: List[str] = []
    start = 0
    in_quote = False
    for pos, ch in enumerate(line + "\0"):
        if (not in_quote and ch == " ") or ch == "\0":
            args.append(_strip_quotes(line[start:pos]))
            start = pos + 1
        elif ch == '"':
            in_quote = not in_quote
    return args


def _log(message: str) -> None:
    _engine_log(None, message + "\n")


class _BdfParser:
    def __init__(self, path: str) -> None:
        self.path = path
        self.font = BitmapFont()
        self.glyph_index = 0
        self.line_index = -1
        self.buffer = bytearray()

    def _current(self) -> Glyph:
        if self.glyph_index >= len(self.font.glyphs):
            raise ValueError(f"{self.path}: more glyphs than CHARS declares")
        glyph = self.font.glyphs[self.glyph_index]
        if glyph is None:
            raise ValueError(f"{self.path}: glyph data outside STARTCHAR")
        return glyph

    def _bitmap_row(self, line: str, glyph: Glyph) -> None:
        width = glyph.bbox.width
        row = self.line_index * width * 4
        remaining = width
        for i, ch in enumerate(line.partition(" ")[0]):
            value = int(ch, 16) if ch in string.hexdigits else 0
            for j in range(min(4, remaining)):
                if (value >> (3 - j)) & 1:
                    offset = row + 16 * i + 4 * j
                    self.buffer[offset:offset + 4] = b"\xff\xff\xff\xff"
            remaining -= 4
        self.line_index += 1

    def feed(self, line: str) -> None:
        args = _split_args(line)
        name = args[0]
        if self.line_index != -1:
            glyph = self._current()
            if self.line_index < glyph.bbox.height:
                self._bitmap_row(line, glyph)
                return
        if name == "STARTCHAR":
            if self.glyph_index >= len(self.font.glyphs):
                raise ValueError(f"{self.path}: more glyphs than CHARS declares")
            self.font.glyphs[self.glyph_index] = Glyph()
        elif name == "ENDCHAR":
            self._current().pixels = bytes(self.buffer)
            self.buffer = bytearray()
            self.glyph_index += 1
            self.line_index = -1
        elif name == "BITMAP":
            self.line_index = 0
        elif len(args) == 2:
            self._two_args(name, args[1])
        elif len(args) == 3 and name == "DWIDTH":
            self._current().dwidth = (_atoi(args[1]), _atoi(args[2]))
        elif len(args) == 5:
            box = BoundingBox(*(_atoi(arg) for arg in args[1:5]))
            if name == "FONTBOUNDINGBOX":
                self.font.bbox = box
            elif name == "BBX":
                self._current().bbox = box
                self.buffer = bytearray(max(box.width * box.height * 4, 0))

    def _two_args(self, name: str, value: str) -> None:
        if name in ("COPYRIGHT", "NOTICE"):
            _log(f"{self.path}: {value}")
        elif name == "FOUNDRY":
            _log(f"{self.path}: Made by {value}")
        elif name == "CHARS":
            _log(f"{self.path}: {value} characters")
            self.font.count = _atoi(value)
            self.font.glyphs = [None] * max(self.font.count, 0)
        elif name == "ENCODING":
            self._current().code = _atoi(value)


def parse_bdf(data: bytes, path: str = "") -> BitmapFont:
    """Parse BDF font data; text after a NUL byte is ignored."""
    text = bytes(data).split(b"\0", 1)[0].decode("latin-1")
    parser = _BdfParser(path)
    for line in text.split("\n"):
        parser.feed(line[:-1] if line.endswith("\r") else line)
    return parser.font


def load_font(data: bytes, path: str = "") -> BitmapFont:
    """Load a font from memory; TrueType data is rejected."""
    if len(data) > 5 and bytes(data[:5]) == _TTF_MAGIC:
        raise UnsupportedFontError(f"{path}: TrueType fonts are not supported")
    return parse_bdf(data, path)


def load_font_file(path: str, resources: Optional[Mapping[str, bytes]] = None) -> BitmapFont:
    """Load a font from a file or a ``base:/`` resource."""
    with open_file(path, "r", resources) as handle:
        _log(f"{path}: {handle.size} bytes")
        data = handle.read()
    return load_font(data, path)