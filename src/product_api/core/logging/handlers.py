"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict that builder.py plugs into
the "handlers" section. They are pure functions of Settings, so they can be
tested without touching the logging module.

| Name            | Destination  | Levels       | Used when                          |
| --------------- | ------------ | ------------ | ---------------------------------- |
| `console`       | stdout       | >= LOG_LEVEL | always                             |
| `file`          | `app.log`    | >= LOG_LEVEL | LOG_TO_STDOUT=false and LOG_DIR    |
| `error_file`    | `errors.log` | >= ERROR     | LOG_TO_STDOUT=false and LOG_DIR    |
| `error_console` | stderr       | >= ERROR     | otherwise                          |
"""

from pathlib import Path

from product_api.config.settings import Settings

_FILTERS = ["request_id", "redact"]


def _formatter_name(settings: Settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    """
    Stream handler writing to stdout, where container runtimes collect logs.

    Args:
        settings: Uses LOG_FORMAT (formatter choice) and LOG_LEVEL.
    """
    return {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stdout",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": _FILTERS,
    }


def _rotating_file(settings: Settings, filename: str, level: str, formatter: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": formatter,
        "level": level,
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": _FILTERS,
    }


def get_file_handler(settings: Settings) -> dict:
    return _rotating_file(settings, "app.log", settings.LOG_LEVEL, _formatter_name(settings))


def get_error_file_handler(settings: Settings) -> dict:
    # error files stay structured regardless of LOG_FORMAT
    return _rotating_file(settings, "errors.log", "ERROR", "json")


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "stream": "ext://sys.stderr",
        "formatter": "json",
        "level": "ERROR",
        "filters": _FILTERS,
    }
