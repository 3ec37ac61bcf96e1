"""The engine: configuration, start-up commands and the main loop."""

from __future__ import annotations

import sys
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from goldfish.client import Client
from goldfish.command import run_commands
from goldfish.file import open_file
from goldfish.image import Image, ImageDecodeError, load_image
from goldfish.log import EngineLog

ClientFactory = Callable[["Engine"], Client]


def parse_autoexec(text: str) -> List[str]:
    """Split an autoexec file into non-empty command lines.

    A line ends at the first carriage return; text after a NUL is ignored.
    """
    text = text.split("\0", 1)[0]
    lines = (line.split("\r", 1)[0] for line in text.split("\n"))
    return [line for line in lines if line]


def argv_to_commands(argv: Sequence[str]) -> List[str]:
    """Turn ``-name value ...`` arguments into command lines.

    The first element is the program name. Values are quoted; values
    before the first option are ignored.
    """
    commands: List[str] = []
    current: Optional[str] = None
    for arg in list(argv)[1:]:
        if arg.startswith("-"):
            if current is not None:
                commands.append(current)
            current = arg[1:]
        elif current is not None:
            current = f'{current} "{arg}"'
    if current is not None:
        commands.append(current)
    return commands


class Engine:
    """Holds the configuration, resources and, in GUI mode, the client.

    ``client`` is a factory called with the engine once configuration is
    complete; without one the engine runs without a GUI.
    """

    def __init__(
        self,
        resources: Optional[Mapping[str, bytes]],
        argv: Optional[Sequence[str]] = None,
        client: Optional[ClientFactory] = None,
        log: Optional[Callable[[str], None]] = None,
    ) -> None:
        if resources is None:
            raise FileNotFoundError("no resource pack")
        self._engine_log = EngineLog(sys.stderr)
        self.log = log if log is not None else self._default_log
        self.error = False
        self.resources = resources
        self.config: Dict[str, Any] = {
            "width": 800,
            "height": 600,
            "texture-filter": "linear",
        }
        self.icon = self._load_icon()

        try:
            with open_file("base:/autoexec.cfg", "r", resources) as handle:
                text = handle.read().decode("latin-1")
        except FileNotFoundError:
            text = None
        if text is not None:
            lines = parse_autoexec(text)
            if lines:
                run_commands(self.config, lines, self.log)

        if argv is not None:
            commands = argv_to_commands(argv)
            if commands:
                run_commands(self.config, commands, self.log)

        self.client: Optional[Client] = None
        if client is None:
            self.log("No GUI mode")
        else:
            self.log("GUI mode")
            self.client = client(self)
            self.log("Switching to graphical console")

    def _default_log(self, message: str) -> None:
        self._engine_log.write(message + "\n")

    def _load_icon(self) -> Optional[Image]:
        try:
            return load_image("base:/icon.png", self.resources)
        except (FileNotFoundError, ImageDecodeError):
            return None

    def loop(self) -> None:
        """Step the client until it asks to stop or an error is flagged.

        Without a client there is nothing to step and the call returns.
        """
        if self.client is None:
            return
        while not self.error:
            if self.client.step() != 0:
                break

    def shutdown(self) -> None:
        """Start shutting down the client."""
        if self.client is not None:
            self.client.shutdown()
        self.log("Engine shutdown complete")