"""Engine log output with an optional process-wide default stream."""

from __future__ import annotations

from typing import Optional, TextIO


class _DefaultStream:
    stream: Optional[TextIO] = None


_default = _DefaultStream()


def set_default_stream(stream: Optional[TextIO]) -> None:
    """Set the stream every message is also written to."""
    _default.stream = stream


def get_default_stream() -> Optional[TextIO]:
    """Return the process-wide default stream, or None."""
    return _default.stream


class EngineLog:
    """A per-engine log stream."""

    def __init__(self, stream: Optional[TextIO]) -> None:
        self.stream = stream

    def write(self, message: str) -> None:
        """Write a message to this log and to the default stream."""
        log(self, message)


def _emit(stream: TextIO, message: str) -> None:
    stream.write(message)
    stream.flush()


def log(engine_log: Optional[EngineLog], message: str) -> None:
    """Write ``message`` to the engine's stream and the default stream.

    A stream that is the default one receives the message only once.
    """
    default = _default.stream
    out = engine_log.stream if engine_log is not None else None
    if out is not None and out is not default:
        _emit(out, message)
    if default is not None:
        _emit(default, message)