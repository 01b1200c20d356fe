"""Unit tests for logging handler setup."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from logging.handlers import RotatingFileHandler

from portal.utils.logger import build_handlers


class TestBuildHandlers:
    def test_console_only_by_default(self):
        handlers = build_handlers("INFO")
        assert len(handlers) == 1
        assert not isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].level == logging.INFO

    def test_rotating_file_when_log_dir_set(self, tmp_path):
        log_dir = tmp_path / "logs"
        handlers = build_handlers("DEBUG", str(log_dir))
        try:
            file_handlers = [h for h in handlers if isinstance(h, RotatingFileHandler)]
            assert len(file_handlers) == 1
            assert file_handlers[0].baseFilename == str(log_dir / "portal.log")
            assert file_handlers[0].maxBytes == 5 * 1024 * 1024
            assert all(h.level == logging.DEBUG for h in handlers)
        finally:
            for handler in handlers:
                handler.close()
