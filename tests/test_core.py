import itertools

import pytest

from goldfish.client import Client, CloseState
from goldfish.core import Engine, argv_to_commands, parse_autoexec
from goldfish.draw import Draw


def test_parse_autoexec_strips_carriage_returns_and_blanks():
    assert parse_autoexec("width 10\r\n\nheight 20\n") == ["width 10", "height 20"]


def test_parse_autoexec_stops_at_nul():
    assert parse_autoexec("width 10\n\0height 20") == ["width 10"]


def test_argv_to_commands_quotes_values():
    argv = ["prog", "-width", "640", "-texture", "nearest"]
    assert argv_to_commands(argv) == ['width "640"', 'texture "nearest"']


def test_argv_to_commands_ignores_leading_values():
    assert argv_to_commands(["prog", "loose", "-flag"]) == ["flag"]


def test_argv_to_commands_empty():
    assert argv_to_commands(["prog"]) == []


def test_engine_defaults():
    messages = []
    engine = Engine({}, log=messages.append)
    assert engine.config == {"width": 800, "height": 600, "texture-filter": "linear"}
    assert engine.icon is None
    assert engine.client is None
    assert messages == ["No GUI mode"]


def test_engine_requires_resources():
    with pytest.raises(FileNotFoundError):
        Engine(None)


def test_autoexec_then_argv_override():
    resources = {"autoexec.cfg": b"width 1024\r\nheight 768\n"}
    engine = Engine(resources, ["prog", "-width", "640"], log=lambda m: None)
    assert engine.config["width"] == 640
    assert engine.config["height"] == 768


def _factory(platform):
    counter = itertools.count(0, 100)

    def build(engine):
        draw = Draw(engine.config, "game", platform, lambda: float(next(counter)))
        return Client(draw, lambda m: None)

    return build


def test_gui_mode_creates_client_from_config():
    messages = []
    engine = Engine({"autoexec.cfg": b"height 480"}, client=_factory(None), log=messages.append)
    assert engine.client.draw.height == 480
    assert messages[-2:] == ["GUI mode", "Switching to graphical console"]


def test_loop_stops_when_step_is_nonzero():
    frames = []

    def platform(draw):
        frames.append(draw)
        return 1

    engine = Engine({}, client=_factory(platform), log=lambda m: None)
    engine.loop()
    assert frames == [engine.client.draw]
    # One frame at 100 ms after the first tick: (60 + 1000 / 100) / 2.
    assert engine.client.draw.fps == 35.0
    assert engine.client.draw.last_draw == 100.0


def test_loop_stops_on_error():
    engine = Engine({}, client=_factory(None), log=lambda m: None)
    engine.error = True
    engine.loop()
    assert engine.client.draw.fps == -1


def test_shutdown_requests_client_shutdown():
    messages = []
    engine = Engine({}, client=_factory(None), log=messages.append)
    engine.shutdown()
    assert engine.client.draw.close == CloseState.SHUTDOWN_REQUESTED
    assert messages[-1] == "Engine shutdown complete"