import json
import logging
import sys

from raas.core.logging.formatters import ColorFormatter, JsonFormatter


def make_record(msg: str = "hello %s", args=("tester",)) -> logging.LogRecord:
    return logging.LogRecord("raas.services", logging.INFO, __file__, 10, msg, args, None)


class TestJsonFormatter:

    def test_basic_fields_and_extras(self):
        record = make_record()
        record.entity = "Domain"
        record.request_id = "req-1"

        data = json.loads(JsonFormatter(env="testing", service="svc").format(record))

        assert data["message"] == "hello tester"
        assert data["level"] == "INFO"
        assert data["logger"] == "raas.services"
        assert data["service"] == "svc"
        assert data["env"] == "testing"
        assert data["request_id"] == "req-1"
        assert data["entity"] == "Domain"
        assert "timestamp" in data
        assert "version" in data

    def test_record_internals_are_not_copied(self):
        data = json.loads(JsonFormatter().format(make_record()))
        for internal in ("args", "msg", "levelno", "created", "thread"):
            assert internal not in data

    def test_non_serializable_extra_is_stringified(self):
        class Opaque:
            def __str__(self):
                return "<opaque>"

        record = make_record()
        record.obj = Opaque()

        data = json.loads(JsonFormatter(env="dev").format(record))
        assert data["obj"] == "<opaque>"

    def test_exception_is_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("raas", logging.ERROR, __file__, 1, "failed", (), None)
            record.exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(record))
        assert "ValueError: boom" in data["exc_info"]


class TestColorFormatter:

    def test_line_contains_level_name_message_and_extras(self):
        record = make_record()
        record.request_id = "rid-9"
        record.entity = "Rubric"

        line = ColorFormatter().format(record)

        assert "INFO" in line
        assert "raas.services" in line
        assert "rid-9" in line
        assert "hello tester" in line
        assert "entity=Rubric" in line
        assert ColorFormatter.COLOR_CODES["INFO"] in line
