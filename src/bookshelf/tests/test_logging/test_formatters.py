import json
import logging
import sys

from bookshelf.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(level=logging.INFO):
    # create a LogRecord that simulates formatting with args
    return logging.LogRecord("bookshelf", level, __file__, 10, "hello %s", ("tester",), None)


def test_json_formatter_basic_fields():
    rec = make_record()
    # simulate extra={"book_id": ..., "request_id": ...}
    rec.book_id = "b-1"
    rec.request_id = "req-1"

    data = json.loads(JsonFormatter(env="test", service="svc").format(rec))

    assert data["message"] == "hello tester"
    assert data["level"] == "INFO"
    assert data["logger"] == "bookshelf"
    assert data["service"] == "svc"
    assert data["env"] == "test"
    assert "timestamp" in data
    assert "version" in data
    assert data["request_id"] == "req-1"
    assert data["book_id"] == "b-1"


def test_json_formatter_skips_standard_record_attributes():
    data = json.loads(JsonFormatter(env="test", service="svc").format(make_record()))

    for attr in ("args", "msg", "levelno", "created", "thread"):
        assert attr not in data


def test_json_formatter_non_serializable_extra():
    rec = make_record()

    class X:
        def __repr__(self):
            return "<X>"

    rec.obj = X()

    data = json.loads(JsonFormatter(env="dev", service="svc").format(rec))

    # non-serializable obj is stringified
    assert isinstance(data["obj"], str)


def test_json_formatter_includes_exception():
    try:
        raise ValueError("bad thing")
    except ValueError:
        rec = logging.LogRecord("bookshelf", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

    data = json.loads(JsonFormatter(env="test", service="svc").format(rec))

    assert "ValueError: bad thing" in data["exc_info"]


def test_color_formatter_colors_level_and_restores_record():
    rec = make_record(logging.WARNING)
    fmt = ColorFormatter(fmt="%(levelname)s | %(request_id)s | %(message)s")

    out = fmt.format(rec)

    assert out.startswith(ColorFormatter.COLOR_CODES["WARNING"])
    assert "| - | hello tester" in out
    # the shared record is left untouched for other handlers
    assert rec.levelname == "WARNING"
