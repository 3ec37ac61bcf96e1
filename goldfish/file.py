"""Files opened from the filesystem or from the ``base:/`` resource pack."""

from __future__ import annotations

import os
from typing import BinaryIO, Mapping, Optional

RESOURCE_PREFIX = "base:/"


class EngineFile:
    """A readable or writable engine file with a tracked size and position."""

    def __init__(
        self,
        stream: Optional[BinaryIO] = None,
        buffer: Optional[bytes] = None,
        size: int = 0,
    ) -> None:
        self._stream = stream
        self._buffer = buffer
        self.size = size
        self.pos = 0
        self.closed = False

    def read(self, size: Optional[int] = None) -> bytes:
        """Read up to ``size`` bytes, or everything left when ``size`` is None."""
        remaining = self.size - self.pos
        count = remaining if size is None else min(remaining, size)
        if count <= 0:
            return b""
        if self._buffer is not None:
            data = self._buffer[self.pos:self.pos + count]
        elif self._stream is not None:
            data = self._stream.read(count)
        else:
            data = b""
        self.pos += len(data)
        return data

    def write(self, data: bytes) -> int:
        """Write ``data`` and return its length."""
        if self._stream is not None:
            self._stream.write(data)
        self.pos += len(data)
        self.size += len(data)
        return len(data)

    def close(self) -> None:
        """Close the underlying stream and drop any buffered data."""
        if self._stream is not None:
            self._stream.close()
            self._stream = None
        self._buffer = None
        self.closed = True

    def __enter__(self) -> "EngineFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def open_file(
    path: str,
    mode: str = "r",
    resources: Optional[Mapping[str, bytes]] = None,
) -> EngineFile:
    """Open ``path`` in mode ``"r"`` or ``"w"``.

    Paths beginning with ``base:/`` are looked up in ``resources`` and can
    only be read.
    """
    if len(path) > len(RESOURCE_PREFIX) and path.startswith(RESOURCE_PREFIX):
        if resources is None:
            raise FileNotFoundError(f"no resource pack loaded for {path}")
        if mode != "r":
            raise ValueError(f"resource {path} can only be opened for reading")
        name = path[len(RESOURCE_PREFIX):]
        try:
            data = bytes(resources[name])
        except KeyError:
            raise FileNotFoundError(path) from None
        return EngineFile(buffer=data, size=len(data))

    if mode == "r":
        stream = open(path, "rb")
        size = os.fstat(stream.fileno()).st_size
        return EngineFile(stream=stream, size=size)
    if mode == "w":
        return EngineFile(stream=open(path, "wb"))
    raise ValueError(f"unsupported mode: {mode!r}")