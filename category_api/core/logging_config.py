import logging
import logging.config
import os
from datetime import datetime
from typing import Any
from category_api.core.config import settings

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 10
AUDIT_LOGGER = "category_api.audit"


def _rotating_handler(kind: str, level: str, formatter: str, current_date: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": formatter,
        "filename": os.path.join(settings.LOG_DIR, kind, f"{kind}-{current_date}.log"),
        "maxBytes": LOG_FILE_MAX_BYTES,
        "backupCount": LOG_FILE_BACKUPS,
        "encoding": "utf-8",
    }


def build_logging_config() -> dict:
    """Build the dictConfig for console and (optionally) rotating file logs"""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "default",
            "stream": "ext://sys.stdout",
        },
    }
    root_handlers = ["console"]
    access_handlers = ["console"]

    if settings.LOG_TO_FILE:
        current_date = datetime.now().strftime("%Y-%m-%d")
        for kind in ("app", "access", "error"):
            os.makedirs(os.path.join(settings.LOG_DIR, kind), exist_ok=True)

        handlers["app_file"] = _rotating_handler("app", settings.LOG_LEVEL, "detailed", current_date)
        handlers["error_file"] = _rotating_handler("error", "ERROR", "detailed", current_date)
        handlers["access_file"] = _rotating_handler("access", "INFO", "access", current_date)
        root_handlers += ["app_file", "error_file"]
        access_handlers = ["access_file"]

    timestamp = "%Y-%m-%d %H:%M:%S"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": timestamp,
            },
            "detailed": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s:%(lineno)d - %(message)s",
                "datefmt": timestamp,
            },
            "access": {
                "format": "%(asctime)s - %(message)s",
                "datefmt": timestamp,
            },
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "level": settings.LOG_LEVEL,
                "handlers": root_handlers,
            },
            "access": {"level": "INFO", "handlers": access_handlers, "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": access_handlers, "propagate": False},
            AUDIT_LOGGER: {"level": "INFO"},
            # SQL echo is controlled by DATABASE_ECHO, keep the engine logger quiet otherwise
            "sqlalchemy.engine": {"level": "WARNING"},
        },
    }

def setup_logging():
    """Setup application logging configuration"""
    logging.config.dictConfig(build_logging_config())

    logger = logging.getLogger(__name__)
    logger.info(f"🚀 {settings.PROJECT_NAME} - Logging configured")
    logger.info(f"📝 Log level: {settings.LOG_LEVEL}")
    if settings.LOG_TO_FILE:
        logger.info(f"🗂️  Logs directory: {settings.LOG_DIR}/")

def log_user_action(user_id: int, action: str, entity: str, entity_id: Any = None):
    """Log user actions for audit trail"""
    logging.getLogger(AUDIT_LOGGER).info(
        f"User {user_id} performed {action} on {entity} {entity_id or ''}".rstrip()
    )
