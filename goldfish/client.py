"""The client: window, audio and input together, with staged shutdown."""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Callable, Optional

from goldfish.audio import AudioMixer
from goldfish.input import InputState
from goldfish.log import log as _engine_log

if TYPE_CHECKING:
    from goldfish.draw import Draw


class CloseState(enum.IntEnum):
    """Stages of closing the window."""

    OPEN = 0
    CLOSE_REQUESTED = 1
    SHUTDOWN_REQUESTED = 2
    SHUTDOWN_PENDING = 3
    SHUTDOWN_COMPLETE = 4


def _default_log(message: str) -> None:
    _engine_log(None, message + "\n")


class Client:
    """Owns the drawing interface, an audio mixer and the input state."""

    def __init__(self, draw: "Draw", log: Optional[Callable[[str], None]] = None) -> None:
        self.log = log if log is not None else _default_log
        self.draw = draw
        self.audio = AudioMixer()
        self.input = InputState()
        draw.set_input(self.input)

    def step(self) -> int:
        """Step the window; a requested shutdown becomes pending."""
        status = self.draw.step()
        if self.draw.close == CloseState.SHUTDOWN_REQUESTED:
            self.draw.close = CloseState.SHUTDOWN_PENDING
        return status

    def shutdown(self) -> None:
        """Begin shutting down, or finish once the window has acknowledged it."""
        if self.draw.close < CloseState.SHUTDOWN_REQUESTED:
            self.draw.close = CloseState.SHUTDOWN_REQUESTED
        elif self.draw.close == CloseState.SHUTDOWN_PENDING:
            self.log("Client shutdown complete")
            self.draw.close = CloseState.SHUTDOWN_COMPLETE