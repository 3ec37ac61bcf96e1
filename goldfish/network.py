"""Socket helpers and four-character network identifiers."""

from __future__ import annotations

import socket
from typing import Union

_BUFFER_SIZE = 65535


def network_id(text: Union[str, bytes]) -> int:
    """Read the first four bytes of ``text`` as a big-endian unsigned integer.

    Shorter input is padded with NUL bytes.
    """
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    return int.from_bytes(raw[:4].ljust(4, b"\0"), "big")


def create_socket(kind: str) -> socket.socket:
    """Create an IPv4 ``"tcp"`` or ``"udp"`` socket with large buffers."""
    if kind == "tcp":
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
    elif kind == "udp":
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    else:
        raise ValueError(f"unknown socket kind: {kind!r}")
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_RCVBUF, _BUFFER_SIZE)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, _BUFFER_SIZE)
        if kind == "tcp":
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
    except OSError:
        sock.close()
        raise
    return sock


def close_socket(sock: socket.socket) -> None:
    """Close a socket."""
    sock.close()