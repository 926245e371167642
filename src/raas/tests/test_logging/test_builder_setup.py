import logging
import time
from pathlib import Path
from types import SimpleNamespace

import pytest

from raas.config import get_settings
from raas.core.logging.builder import get_queue_stats, make_dict_config, setup_logging, stop_queue_logging
from raas.core.logging.filters import reset_request_id, set_request_id
from raas.core.logging.handlers import APP_LOG_FILE, ERROR_LOG_FILE


def make_settings(**overrides) -> SimpleNamespace:
    """Duck-typed settings carrying only the logging knobs."""
    values = {
        "ENV": "testing",
        "LOG_LEVEL": "INFO",
        "LOG_FORMAT": "json",
        "LOG_TO_STDOUT": False,
        "LOG_DIR": None,
        "LOG_MAX_BYTES": 1_000_000,
        "LOG_BACKUP_COUNT": 1,
        "ENABLE_SQL_LOGGING": False,
        "LOG_USE_QUEUE": False,
        "LOG_QUEUE_MAX_SIZE": 0,
        "LOG_QUEUE_BLOCKING": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.fixture(autouse=True)
def restore_logging():
    """Each test installs its own configuration; put the session one back afterwards."""
    yield
    stop_queue_logging()
    setup_logging(get_settings())


class TestMakeDictConfig:

    def test_file_handlers_when_not_logging_to_stdout(self, tmp_path):
        cfg = make_dict_config(make_settings(LOG_DIR=tmp_path))

        assert set(cfg["handlers"]) == {"console", "file", "error_file"}
        assert cfg["handlers"]["file"]["filename"] == str(tmp_path / APP_LOG_FILE)
        assert cfg["handlers"]["error_file"]["filename"] == str(tmp_path / ERROR_LOG_FILE)
        assert cfg["handlers"]["error_file"]["level"] == "ERROR"
        assert cfg["loggers"][""]["handlers"] == ["console", "file", "error_file"]

    def test_stdout_mode_uses_error_console(self, tmp_path):
        cfg = make_dict_config(make_settings(LOG_TO_STDOUT=True, LOG_DIR=tmp_path))

        assert set(cfg["handlers"]) == {"console", "error_console"}

    def test_text_format_selects_standard_formatter(self):
        cfg = make_dict_config(make_settings(LOG_TO_STDOUT=True, LOG_FORMAT="text"))

        assert cfg["handlers"]["console"]["formatter"] == "standard"
        assert cfg["handlers"]["error_console"]["formatter"] == "json"

    def test_sql_logging_level_follows_flag(self):
        quiet = make_dict_config(make_settings(LOG_TO_STDOUT=True))
        loud = make_dict_config(make_settings(LOG_TO_STDOUT=True, ENABLE_SQL_LOGGING=True))

        assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
        assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


class TestSetupLogging:

    def test_creates_log_dir_and_writes_file(self, tmp_path):
        log_dir = tmp_path / "logs"
        assert not log_dir.exists()

        setup_logging(make_settings(LOG_DIR=log_dir))
        logging.getLogger("raas.test").info("written to file", extra={"entity": "Domain"})
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = (log_dir / APP_LOG_FILE).read_text(encoding="utf-8")
        assert "written to file" in text
        assert '"entity": "Domain"' in text

    def test_queue_listener_writes_file(self, tmp_path):
        settings = make_settings(LOG_DIR=tmp_path, LOG_LEVEL="DEBUG", LOG_USE_QUEUE=True)
        setup_logging(settings)
        assert get_queue_stats()["queue_present"] is True

        token = set_request_id("test-req-1")
        try:
            logger = logging.getLogger("raas.test.queue")
            for i in range(10):
                logger.info("queued message %d", i, extra={"iteration": i})
        finally:
            reset_request_id(token)

        time.sleep(0.05)
        stop_queue_logging()
        assert get_queue_stats()["queue_present"] is False

        text = (Path(tmp_path) / APP_LOG_FILE).read_text(encoding="utf-8")
        assert "queued message 0" in text
        assert "queued message 9" in text
        assert "iteration" in text
        assert "test-req-1" in text

    def test_bounded_non_blocking_queue(self, tmp_path):
        settings = make_settings(LOG_DIR=tmp_path, LOG_USE_QUEUE=True, LOG_QUEUE_MAX_SIZE=1000)
        setup_logging(settings)

        handler_names = {type(h).__name__ for h in logging.getLogger().handlers}
        assert "NonBlockingQueueHandler" in handler_names
