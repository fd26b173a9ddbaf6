import logging
import json
import os
import datetime
from typing import Any, Optional
from threading import local

# Thread-local storage for context (the file being decoded)
_context = local()

LOG_LEVEL_ENV = "CODA_LOG_LEVEL"


class JSONFormatter(logging.Formatter):
    """
    Custom formatter that outputs JSON records.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "source": getattr(_context, "source", None),
        }

        # Add extra fields if they exist
        if hasattr(record, "extra_fields") and isinstance(record.extra_fields, dict):
            log_data.update(record.extra_fields)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def level_from_env(default: int = logging.INFO) -> int:
    """Reads CODA_LOG_LEVEL as a level name or number."""
    value = os.getenv(LOG_LEVEL_ENV, "").strip().upper()
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else default


def setup_logging(log_level: Optional[int] = None, log_file: Optional[str] = None):
    """
    Configure global logging settings.
    """
    if log_level is None:
        log_level = level_from_env()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Clear existing handlers
    if root_logger.handlers:
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    logging.debug("Logging infrastructure initialized.", extra={"extra_fields": {"status": "ready"}})


def set_source(source: Optional[str]):
    """Set the name of the file currently being decoded."""
    _context.source = source


def get_source() -> Optional[str]:
    return getattr(_context, "source", None)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """
    Adapter that allows passing extra context easily.
    """
    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.get("extra", {})
        if "extra_fields" not in extra:
            extra["extra_fields"] = {}

        # Merge keyword args into extra_fields if they aren't part of Logger.log
        standard_args = {'exc_info', 'stack_info', 'stacklevel', 'extra'}
        new_kwargs = {}
        for key, value in kwargs.items():
            if key in standard_args:
                new_kwargs[key] = value
            else:
                extra["extra_fields"][key] = value

        new_kwargs["extra"] = extra
        return msg, new_kwargs


def get_logger(name: str) -> ContextLoggerAdapter:
    """
    Return a structured logger for the given name.
    """
    return ContextLoggerAdapter(logging.getLogger(name), {})
