"""Frame pacing, window state and the mouse cursor shape."""

from __future__ import annotations

import time
from typing import Any, Callable, List, Mapping, Optional, Tuple

from goldfish.client import CloseState
from goldfish.graphic import Color, Dimension
from goldfish.input import InputState

FPS = 60

_MOUSE_OFFSETS = (
    (0, 0),
    (0, 16),
    (2, 12),
    (4, 8.5),
    (6.5, 6),
    (9, 3.5),
    (12, 1.5),
    (16, 0),
)
_OUTLINE_OFFSETS = (
    (-2, -2),
    (-2, 18),
    (1, 13),
    (3, 9),
    (7, 5),
    (10, 2),
    (14, 1),
    (18, -2),
)
_OUTLINE_COLOR = Color(0, 0, 0, 255)

Point = Tuple[float, float]


def cursor_polygons(mouse_x: float, mouse_y: float) -> Tuple[List[Point], List[Point]]:
    """Return the outline and fill polygons of the cursor at a mouse position."""
    outline = [(mouse_x + ox + 1.5, mouse_y + oy + 9) for ox, oy in _OUTLINE_OFFSETS]
    fill = [(mouse_x + ox, mouse_y + oy + 8) for ox, oy in _MOUSE_OFFSETS]
    return outline, fill


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class Draw:
    """Window state paced to a fixed frame rate.

    ``platform_step`` processes one frame and returns non-zero to stop;
    without one, frames are paced but nothing is processed.
    ``clock`` returns the current time in milliseconds.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        title: str = "",
        platform_step: Optional[Callable[["Draw"], int]] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.config = config
        self.title = title
        self.platform_step = platform_step
        self.clock = clock if clock is not None else _monotonic_ms
        self.x = 0
        self.y = 0
        self.width = config["width"]
        self.height = config["height"]
        self.draw_3d = False
        self.input: Optional[InputState] = None
        self.font: Any = None
        self.fps: float = -1
        self.last_draw: float = 0.0
        self.cursor = True
        self.close: int = CloseState.OPEN
        self.on_close: Optional[Callable[[], None]] = None
        self.light = (0.0, 10.0, 0.0, 1.0)
        self.camera = (0.0, 0.0, 1.0)
        self.lookat = (0.0, 0.0, 0.0)
        self.running = True

    def step(self) -> int:
        """Run a frame if enough time has passed; return non-zero to stop."""
        if self.fps == -1:
            self.fps = FPS
            self.last_draw = self.clock()
        now = self.clock()
        delta = now - self.last_draw
        ret = 0
        if delta > 1000.0 / FPS:
            self.fps = (self.fps + 1000.0 / delta) / 2
            if self.platform_step is not None:
                ret = self.platform_step(self)
            self.last_draw = now
        if ret != 0:
            return ret
        if self.close == CloseState.CLOSE_REQUESTED and self.on_close is not None:
            self.close = CloseState.OPEN
            self.on_close()
        return self.close

    def draw_cursor(
        self, renderer: Any, input_state: Optional[InputState], color: Color
    ) -> None:
        """Draw the mouse cursor with a black outline, if the cursor is shown."""
        if not self.cursor:
            return
        state = input_state if input_state is not None else self.input
        if state is None:
            return
        outline, fill = cursor_polygons(state.mouse_x, state.mouse_y)
        renderer.fill_polygon(_OUTLINE_COLOR, Dimension.D2, outline)
        renderer.fill_polygon(color, Dimension.D2, fill)

    def set_input(self, input_state: Optional[InputState]) -> None:
        """Attach the input state the cursor follows."""
        self.input = input_state