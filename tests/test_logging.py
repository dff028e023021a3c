"""
Tests for logging setup
Run with: pytest tests/test_logging.py -v
"""

from fastapi.testclient import TestClient

from gardenplan.api.config import settings
from gardenplan.api.main import app
from gardenplan.utils.logger import LOG_FILE, get_logger, setup_logging


class TestSetupLogging:
    """Test sink configuration"""

    def teardown_method(self):
        setup_logging()

    def test_console_only_without_log_dir(self):
        """No file sink is created when no directory is configured"""
        assert setup_logging("debug") is None

    def test_file_sink_in_log_dir(self, tmp_path):
        """Messages are written to gardenplan.log in the configured directory"""
        log_dir = tmp_path / "logs"

        log_path = setup_logging("INFO", str(log_dir))
        get_logger("tests").info("bed placed")

        assert log_path == log_dir / LOG_FILE
        assert "bed placed" in log_path.read_text()

    def test_level_filters_file_sink(self, tmp_path):
        """Messages below the configured level are dropped"""
        log_path = setup_logging("WARNING", str(tmp_path))
        get_logger("tests").info("quiet")
        get_logger("tests").warning("loud")

        content = log_path.read_text()
        assert "loud" in content
        assert "quiet" not in content


class TestStartupLogging:
    """Test that the application applies logging settings on startup"""

    def teardown_method(self):
        setup_logging()

    def test_startup_uses_settings_log_dir(self, tmp_path, monkeypatch):
        """LOG_DIR from settings gets a log file when the app starts"""
        log_dir = tmp_path / "app-logs"
        monkeypatch.setattr(settings, "LOG_DIR", str(log_dir))
        monkeypatch.setattr(settings, "LOG_LEVEL", "INFO")

        with TestClient(app):
            pass

        assert (log_dir / LOG_FILE).exists()
