"""Reporting of failed engine assertions."""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

_BEGIN = "----- Begin GoldFish Assertion Error -----\n"
_END = "-----  End  GoldFish Assertion Error -----\n"


class EngineAssertionError(AssertionError):
    """An engine assertion failed; the message holds the full report."""


def assertion_message(expr: str, filename: str, line: int, funcname: str) -> str:
    """Build the report text for a failed assertion."""
    return (
        "GoldFish Assertion Error!\n"
        f"Expression: {expr}\n"
        f"File: {filename}:{line}\n"
        f"Function Name: {funcname}\n"
        "\n"
        "If you are the game developer, you fucked up something.\n"
        "If you are a player, simply report this to the game developer.\n"
    )


def report_assertion(
    engine: Any,
    expr: str,
    filename: str,
    line: int,
    funcname: str,
    stream: Optional[TextIO] = None,
) -> EngineAssertionError:
    """Print the report, flag the engine as failed and return the error."""
    message = assertion_message(expr, filename, line, funcname)
    out = stream if stream is not None else sys.stderr
    out.write(_BEGIN)
    out.write(message)
    out.write(_END)
    out.flush()
    if engine is not None:
        engine.error = True
    return EngineAssertionError(message)