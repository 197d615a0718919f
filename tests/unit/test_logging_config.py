import logging
from category_api.core import logging_config
from category_api.core.config import settings


def test_console_only_when_file_logging_disabled(monkeypatch):
    monkeypatch.setattr(settings, "LOG_TO_FILE", False)

    config = logging_config.build_logging_config()

    assert set(config["handlers"]) == {"console"}
    assert config["loggers"][""]["handlers"] == ["console"]
    assert config["loggers"]["access"]["handlers"] == ["console"]


def test_rotating_files_under_log_dir(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "LOG_TO_FILE", True)
    monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path))

    config = logging_config.build_logging_config()

    for kind in ("app", "access", "error"):
        assert (tmp_path / kind).is_dir()
    assert config["handlers"]["error_file"]["level"] == "ERROR"
    assert config["handlers"]["app_file"]["filename"].startswith(str(tmp_path / "app"))
    assert config["loggers"][""]["handlers"] == ["console", "app_file", "error_file"]
    assert config["loggers"]["access"]["handlers"] == ["access_file"]


def test_log_user_action(caplog):
    with caplog.at_level(logging.INFO, logger=logging_config.AUDIT_LOGGER):
        logging_config.log_user_action(7, "delete", "category", 42)

    assert "User 7 performed delete on category 42" in caplog.text
