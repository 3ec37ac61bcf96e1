"""Drawing primitives and bitmap text layout on top of a renderer."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from goldfish.font import BitmapFont


@dataclass(frozen=True)
class Color:
    """An RGBA color."""

    r: float
    g: float
    b: float
    a: float = 255


class Dimension(enum.IntEnum):
    """Number of coordinates in each vertex."""

    D2 = 2
    D3 = 3


Point = Tuple[float, ...]


class RecordingRenderer:
    """A renderer that records every drawing call it receives."""

    def __init__(self, font: Optional[BitmapFont] = None) -> None:
        self.font = font
        self.calls: List[Tuple[Any, ...]] = []
        self.clips: List[Tuple[float, float, float, float]] = []

    @staticmethod
    def _check(points: Sequence[Sequence[float]], length: int) -> Tuple[Point, ...]:
        result = tuple(tuple(float(v) for v in point) for point in points)
        if any(len(point) != length for point in result):
            raise ValueError(f"each vertex needs {length} values")
        return result

    def clear(self) -> None:
        """Clear the frame."""
        self.calls.append(("clear",))

    def fill_polygon(self, color: Color, dim: Dimension, points: Sequence[Sequence[float]]) -> None:
        """Fill the polygon through ``points``."""
        self.calls.append(("fill_polygon", color, dim, self._check(points, int(dim))))

    def draw_texture_polygon(
        self, texture: Any, color: Color, dim: Dimension, points: Sequence[Sequence[float]]
    ) -> None:
        """Draw a textured polygon; each vertex is ``(u, v, x, y[, z])``."""
        self.calls.append(
            ("draw_texture_polygon", texture, color, dim, self._check(points, int(dim) + 2))
        )

    def points(self, color: Color, dim: Dimension, points: Sequence[Sequence[float]]) -> None:
        """Draw single points."""
        self.calls.append(("points", color, dim, self._check(points, int(dim))))

    def lines(self, color: Color, dim: Dimension, points: Sequence[Sequence[float]]) -> None:
        """Draw line segments from consecutive pairs of points."""
        checked = self._check(points, int(dim))
        if len(checked) % 2:
            raise ValueError("lines need pairs of points")
        self.calls.append(("lines", color, dim, checked))

    def clip_push(self, x: float, y: float, w: float, h: float) -> None:
        """Push a clipping rectangle."""
        self.clips.append((x, y, w, h))

    def clip_pop(self) -> None:
        """Pop the last clipping rectangle."""
        if not self.clips:
            raise IndexError("clip stack is empty")
        self.clips.pop()


def fill_rect(renderer: Any, x: float, y: float, w: float, h: float, color: Color) -> None:
    """Fill an axis-aligned rectangle."""
    renderer.fill_polygon(
        color, Dimension.D2, [(x, y), (x, y + h), (x + w, y + h), (x + w, y)]
    )


def draw_texture_2d(
    renderer: Any, x: float, y: float, w: float, h: float, texture: Any, color: Color
) -> None:
    """Draw ``texture`` stretched over a rectangle; nothing happens without one."""
    if texture is None:
        return
    renderer.draw_texture_polygon(
        texture,
        color,
        Dimension.D2,
        [(0.0, 0.0, x, y), (0.0, 1.0, x, y + h), (1.0, 1.0, x + w, y + h), (1.0, 0.0, x + w, y)],
    )


def _codes(string: str) -> Iterator[int]:
    # Bytes of the UTF-8 text, read as signed chars.
    for byte in string.encode("utf-8"):
        yield byte - 256 if byte >= 128 else byte


def _glyph_offset(font: BitmapFont, glyph: Any) -> Tuple[float, float]:
    fx = glyph.bbox.x
    fy = (font.bbox.height + font.bbox.y) - (glyph.bbox.height + glyph.bbox.y)
    return fx, fy


def text(
    renderer: Any,
    font: Optional[BitmapFont],
    x: float,
    y: float,
    size: float,
    string: str,
    color: Color,
) -> None:
    """Draw ``string`` on one line; the renderer's font is used when none is given."""
    if font is None:
        font = renderer.font
    if font is None:
        return
    zoom = size / font.bbox.height
    mx = 0.0
    for code in _codes(string):
        glyph = font.get(code)
        if glyph is None:
            continue
        fx, fy = _glyph_offset(font, glyph)
        draw_texture_2d(
            renderer,
            x + mx + fx * zoom,
            y + fy * zoom,
            zoom * glyph.bbox.width,
            zoom * glyph.bbox.height,
            glyph,
            color,
        )
        mx += zoom * glyph.dwidth[0]


def text_wrap(
    renderer: Any,
    font: Optional[BitmapFont],
    x: float,
    y: float,
    w: float,
    size: float,
    string: str,
    color: Color,
) -> float:
    """Draw ``string`` wrapped at width ``w`` and return the height used."""
    if font is None:
        font = renderer.font
    if font is None:
        return 0.0
    zoom = size / font.bbox.height
    mx = 0.0
    my = 0.0
    big = 0.0
    for code in _codes(string):
        glyph = font.get(code)
        if glyph is None:
            continue
        fx, fy = _glyph_offset(font, glyph)
        if mx + zoom * glyph.dwidth[0] >= w:
            mx = 0.0
            my += size
        big = max(big, my + size)
        draw_texture_2d(
            renderer,
            x + mx + fx * zoom,
            y + my + fy * zoom,
            zoom * glyph.bbox.width,
            zoom * glyph.bbox.height,
            glyph,
            color,
        )
        mx += zoom * glyph.dwidth[0]
    return big + size


def text_width(font: Optional[BitmapFont], size: float, string: str) -> float:
    """Width of ``string`` drawn at ``size``; zero without a font."""
    if font is None:
        return 0.0
    zoom = size / font.bbox.height
    return sum(
        zoom * glyph.dwidth[0]
        for glyph in (font.get(code) for code in _codes(string))
        if glyph is not None
    )


def text_height(font: Optional[BitmapFont], size: float, string: str) -> float:
    """Height of ``string`` drawn at ``size``; zero without a font."""
    if font is None:
        return 0.0
    return size