import logging
from logging.handlers import RotatingFileHandler

import pytest

from fakenews_detector.utils.logging import configure_logging, get_logger


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestConfigureLogging:
    def test_file_output_creates_directory(self, tmp_path, restore_root):
        path = tmp_path / "logs" / "detector.log"
        configure_logging(level="DEBUG", output="file", file_path=str(path), log_format="json")

        assert [type(h) for h in restore_root.handlers] == [RotatingFileHandler]
        get_logger("fnd.test").info("hello")
        restore_root.handlers[0].flush()
        assert '"message": "hello"' in path.read_text(encoding="utf-8")
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_env_defaults(self, monkeypatch, restore_root):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.delenv("LOG_OUTPUT", raising=False)
        configure_logging()
        assert restore_root.level == logging.WARNING
        assert len(restore_root.handlers) == 1
        assert isinstance(restore_root.handlers[0], logging.StreamHandler)
