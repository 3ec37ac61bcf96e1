import pytest

from goldfish.command import run_commands, tokenize


def test_tokenize_simple():
    assert tokenize("width 1024") == ["width", "1024"]


def test_tokenize_quoted_argument_keeps_spaces():
    assert tokenize('texture "a b"') == ["texture", "a b"]


def test_tokenize_tab_separator():
    assert tokenize("height\t480") == ["height", "480"]


def test_tokenize_extra_whitespace_kept_on_next_token():
    assert tokenize("a  b") == ["a", " b"]


def test_tokenize_trailing_separator_gives_empty_token():
    assert tokenize("a ")[-1] == ""


def _run(lines, config=None):
    config = {} if config is None else config
    messages = []
    run_commands(config, lines, messages.append)
    return config, messages


def test_width_and_height_set():
    config, _ = _run(["width 1024", "height 768"], {"width": 800, "height": 600})
    assert config["width"] == 1024
    assert config["height"] == 768


def test_width_parses_leading_digits():
    config, _ = _run(["width 12abc"])
    assert config["width"] == 12


def test_command_is_logged():
    _, messages = _run(["height 480"])
    assert messages[0] == "Command: height 480"


@pytest.mark.parametrize("name", ["width", "height", "texture"])
def test_insufficient_arguments(name):
    config, messages = _run([name])
    assert f"{name}: Insufficient arguments" in messages
    assert config == {}


def test_texture_accepts_known_filters():
    config, _ = _run(["texture nearest"])
    assert config["texture"] == "nearest"
    config, _ = _run(['texture "linear"'])
    assert config["texture"] == "linear"


def test_texture_rejects_unknown_filter():
    config, messages = _run(["texture cubic"])
    assert "texture: cubic: Bad argument" in messages
    assert "texture" not in config


def test_unknown_command():
    _, messages = _run(["jump 3"])
    assert messages[-1] == "jump: Unknown command"


def test_comment_lines_skipped():
    config, messages = _run(["# width 10", "width 20"])
    assert config["width"] == 20
    assert all("# width" not in m for m in messages)