"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; builder.make_dict_config decides
which of them are wired in.

| Name            | Destination      | Levels       | Used when                           |
| --------------- | ---------------- | ------------ | ----------------------------------- |
| `console`       | stderr           | >= LOG_LEVEL | always                              |
| `file`          | LOG_DIR/app.log  | >= LOG_LEVEL | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_file`    | LOG_DIR/errors.log | >= ERROR   | LOG_TO_STDOUT=false and LOG_DIR set |
| `error_console` | stderr (JSON)    | >= ERROR     | otherwise                           |
"""

from pathlib import Path

from bookshelf.config.settings import Settings


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": ["request_id", "redact"],
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }


def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",  # error files stay structured regardless of LOG_FORMAT
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["request_id", "redact"],
    }
