import io

import pytest

from goldfish.log import EngineLog, get_default_stream, log, set_default_stream


@pytest.fixture
def default_stream():
    previous = get_default_stream()
    stream = io.StringIO()
    set_default_stream(stream)
    yield stream
    set_default_stream(previous)


def test_get_default_stream_returns_what_was_set(default_stream):
    assert get_default_stream() is default_stream


def test_engine_and_default_both_receive(default_stream):
    own = io.StringIO()
    log(EngineLog(own), "hello\n")
    assert own.getvalue() == "hello\n"
    assert default_stream.getvalue() == "hello\n"


def test_same_stream_written_once(default_stream):
    log(EngineLog(default_stream), "once\n")
    assert default_stream.getvalue() == "once\n"


def test_no_engine_goes_to_default(default_stream):
    log(None, "plain\n")
    assert default_stream.getvalue() == "plain\n"


def test_write_method_routes_like_log(default_stream):
    own = io.StringIO()
    EngineLog(own).write("a")
    EngineLog(own).write("b")
    assert own.getvalue() == "ab"
    assert default_stream.getvalue() == "ab"


def test_without_default_only_engine_stream():
    previous = get_default_stream()
    set_default_stream(None)
    try:
        own = io.StringIO()
        log(EngineLog(own), "solo")
        assert own.getvalue() == "solo"
        assert get_default_stream() is None
    finally:
        set_default_stream(previous)