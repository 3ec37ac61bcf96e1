"""Parsing and running of configuration commands."""

from __future__ import annotations

from typing import Callable, Iterable, List, MutableMapping, Optional

from goldfish.log import log as _engine_log

_SEPARATORS = " \t"
_TEXTURE_FILTERS = ("nearest", "linear")


def _unquote(token: str) -> str:
    if token.startswith('"'):
        token = token[1:]
    if token.endswith('"'):
        token = token[:-1]
    return token


def tokenize(line: str) -> List[str]:
    """Split a command line into arguments.

    Spaces and tabs separate arguments outside double quotes. One leading
    and one trailing quote are stripped from each argument. Whitespace
    after the first separator character is kept at the start of the next
    argument, and a trailing separator yields an empty last argument.
    """
    tokens: List[str] = []
    start = 0
    in_quote = False
    pos = 0
    end = len(line)
    while True:
        ch = line[pos] if pos < end else ""
        if ch == '"':
            in_quote = not in_quote
        if ch == "" or (not in_quote and ch in _SEPARATORS):
            tokens.append(_unquote(line[start:pos]))
            if ch == "":
                return tokens
            start = pos + 1
            pos += 1
            while pos < end and line[pos] in _SEPARATORS:
                pos += 1
            continue
        pos += 1


def _atoi(text: str) -> int:
    stripped = text.lstrip(" \t\n\r\v\f")
    sign = 1
    if stripped[:1] in ("+", "-"):
        if stripped[0] == "-":
            sign = -1
        stripped = stripped[1:]
    digits = []
    for ch in stripped:
        if not ch.isdigit() or not ch.isascii():
            break
        digits.append(ch)
    return sign * int("".join(digits)) if digits else 0


def _default_log(message: str) -> None:
    _engine_log(None, message + "\n")


def run_commands(
    config: MutableMapping[str, object],
    lines: Iterable[str],
    log: Optional[Callable[[str], None]] = None,
) -> None:
    """Run each command line against ``config``; lines starting with '#' are skipped."""
    emit = log if log is not None else _default_log
    for line in lines:
        if line.startswith("#"):
            continue
        emit(f"Command: {line}")
        args = tokenize(line)
        name = args[0]
        if name in ("width", "height"):
            if len(args) < 2:
                emit(f"{name}: Insufficient arguments")
            else:
                config[name] = _atoi(args[1])
        elif name == "texture":
            if len(args) < 2:
                emit(f"{name}: Insufficient arguments")
            elif args[1] not in _TEXTURE_FILTERS:
                emit(f"{name}: {args[1]}: Bad argument")
            else:
                config["texture"] = args[1]
        else:
            emit(f"{name}: Unknown command")