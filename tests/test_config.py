"""
Tests for configuration dictionaries and logging setup.
"""

import logging

from iv_report.config import APP_CONFIG, REPORT_CONFIG, configure_logging


class TestConfig:

    def test_app_settings(self):
        assert set(APP_CONFIG) == {"app_name", "version", "log_level"}

    def test_report_settings(self):
        assert set(REPORT_CONFIG) == {"title", "company_name", "sections", "require_datasheet"}
        assert len(REPORT_CONFIG["sections"]) == 8

    def test_configure_logging_level(self, monkeypatch):
        """An explicit level is applied to the root logger."""
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)

        configure_logging("debug")

        assert root.level == logging.DEBUG
