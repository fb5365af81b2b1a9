"""Tests for configuration loading and logging setup"""

import logging
from pathlib import Path

import pytest

from spot_dashboard.core import ConfigError, default_config, load_config
from spot_dashboard.core.logger import (
    ColoredConsoleFormatter,
    ErrorOnlyFilter,
    get_logger,
    setup_logging,
    shutdown_logging,
)
from spot_dashboard.spotify import TimeRange


def write_config(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestLoadConfig:
    """Tests for load_config()"""

    def test_defaults(self):
        config = default_config()

        assert config.session.login_path == "/login"
        assert config.session.token_file == Path("~/.spot-dashboard/token.json").expanduser().resolve()
        assert config.dashboard.limit == 1
        assert config.dashboard.time_range is TimeRange.SHORT_TERM
        assert config.spotify.requests_timeout == 10.0
        assert config.logging.directory is None
        assert config.logging.level == "INFO"

    def test_full_file(self, tmp_path):
        path = write_config(tmp_path, f"""
session:
  token_file: "{tmp_path / 'token.json'}"
  login_path: "/signin"
dashboard:
  limit: 5
  time_range: long_term
spotify:
  requests_timeout: 3
logging:
  directory: "{tmp_path / 'logs'}"
  level: debug
""")
        config = load_config(path)

        assert config.session.token_file == (tmp_path / "token.json").resolve()
        assert config.session.login_path == "/signin"
        assert config.dashboard.limit == 5
        assert config.dashboard.time_range is TimeRange.LONG_TERM
        assert config.spotify.requests_timeout == 3.0
        assert config.logging.directory == (tmp_path / "logs").resolve()
        assert config.logging.level == "DEBUG"

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(write_config(tmp_path, "")) == default_config()

    def test_missing_default_file_gives_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert load_config() == default_config()

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(write_config(tmp_path, "dashboard: [unclosed"))

    def test_not_a_dictionary(self, tmp_path):
        with pytest.raises(ConfigError, match="dictionary"):
            load_config(write_config(tmp_path, "- a\n- b\n"))

    @pytest.mark.parametrize("text", [
        "dashboard:\n  limit: 0\n",
        "dashboard:\n  limit: 51\n",
        "dashboard:\n  limit: true\n",
        "dashboard:\n  time_range: forever\n",
        "session:\n  login_path: login\n",
        "session:\n  token_file: ''\n",
        "spotify:\n  requests_timeout: -1\n",
        "logging:\n  level: LOUD\n",
        "dashboard: 5\n",
    ])
    def test_invalid_values(self, tmp_path, text):
        with pytest.raises(ConfigError):
            load_config(write_config(tmp_path, text))


class TestLogging:
    """Tests for setup_logging()"""

    def test_console_and_file_handlers(self, tmp_path, capsys):
        log_dir = tmp_path / "logs"
        setup_logging(log_dir, level="WARNING")
        try:
            logger = get_logger("spot_dashboard.test")
            logger.info("quiet on console")
            logger.error("shown everywhere")
        finally:
            shutdown_logging()

        err = capsys.readouterr().err
        assert "shown everywhere" in err
        assert "quiet on console" not in err

        full_log = next(log_dir.glob("log_full_*.log")).read_text(encoding="utf-8")
        error_log = next(log_dir.glob("log_errors_*.log")).read_text(encoding="utf-8")
        assert "quiet on console" in full_log
        assert "shown everywhere" in full_log
        assert "quiet on console" not in error_log
        assert "shown everywhere" in error_log

    def test_shutdown_only_removes_own_handlers(self):
        root = logging.getLogger()
        before = list(root.handlers)

        setup_logging()
        shutdown_logging()

        assert root.handlers == before

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logging(level="LOUD")
        shutdown_logging()

    def test_formatter_and_filter(self):
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "bad %s", ("thing",), None)

        assert "bad thing" in ColoredConsoleFormatter().format(record)
        assert ErrorOnlyFilter().filter(record)
        record.levelno = logging.WARNING
        assert not ErrorOnlyFilter().filter(record)
