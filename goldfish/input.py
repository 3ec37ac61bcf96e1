"""Mouse input state shared between the window and the GUI."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MouseButton(enum.IntFlag):
    """Bits of :attr:`InputState.mouse_flag`."""

    LEFT = 1


@dataclass
class InputState:
    """Mouse position and buttons; a position of -1 means unknown."""

    mouse_x: float = -1
    mouse_y: float = -1
    mouse_flag: int = 0

    def left_pressed(self) -> bool:
        """True while the left mouse button is held."""
        return bool(self.mouse_flag & MouseButton.LEFT)