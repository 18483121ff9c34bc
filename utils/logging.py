import atexit
import json
import logging
import logging.handlers
import queue
from pathlib import Path

from config.config_loader import ConfigLoader

DEFAULT_LOG_FILE = "logs/bot.log"
RETAIN_DAYS = 30

_queue_listener: logging.handlers.QueueListener | None = None
_atexit_registered = False

# Structured ``extra=`` fields copied into every JSON record when present
EXTRA_FIELDS = (
    "user_id",
    "guild_id",
    "channel_id",
    "command_name",
    "category_id",
    "display_name",
)


class ErrorLevelFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per line: time, level, origin, message, known extras."""

    def __init__(self, datefmt: str | None = "%Y-%m-%d %H:%M:%S") -> None:
        super().__init__(datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "message": record.getMessage(),
        }
        payload.update(
            {field: getattr(record, field) for field in EXTRA_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging(log_file: str | None = None) -> None:
    """
    Route all logging through a queue to three JSON sinks:

    - ``logging.file`` (default logs/bot.log), rotated daily at UTC midnight
    - ``errors/errors.jsonl`` beside it, ERROR and above only
    - the console

    The level comes from ``logging.level``. Calling this again replaces the
    previous handlers and listener.
    """
    global _queue_listener

    logging_config = ConfigLoader.load_config().get("logging", {}) or {}
    level = getattr(
        logging, str(logging_config.get("level", "INFO")).upper(), logging.INFO
    )
    log_path = Path(log_file or logging_config.get("file") or DEFAULT_LOG_FILE)
    error_path = log_path.parent / "errors" / "errors.jsonl"
    error_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    if _queue_listener:
        _queue_listener.stop()
        _queue_listener = None

    formatter = CustomJsonFormatter()
    file_handler = _daily_handler(log_path, level, formatter)
    error_handler = _daily_handler(error_path, logging.ERROR, formatter)
    error_handler.namer = _error_log_namer  # type: ignore[assignment]
    error_handler.addFilter(ErrorLevelFilter())
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(maxsize=1000)
    queue_handler = logging.handlers.QueueHandler(log_queue)
    queue_handler.setLevel(level)
    root_logger.addHandler(queue_handler)

    _queue_listener = logging.handlers.QueueListener(
        log_queue,
        file_handler,
        console_handler,
        error_handler,
        respect_handler_level=True,
    )
    _queue_listener.start()
    _register_logging_shutdown()

    logging.getLogger("discord").setLevel(logging.WARNING)


def _daily_handler(
    path: Path, level: int, formatter: logging.Formatter
) -> logging.handlers.TimedRotatingFileHandler:
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(path),
        when="midnight",
        interval=1,
        backupCount=RETAIN_DAYS,
        utc=True,
        encoding="utf-8",
    )
    handler.suffix = "%Y-%m-%d"
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def _error_log_namer(default_name: str) -> str:
    """errors.jsonl.YYYY-MM-DD -> errors_YYYY-MM-DD.jsonl"""
    base, date_part = default_name.rsplit(".", 1)
    return str(Path(base).with_name(f"errors_{date_part}.jsonl"))


def _register_logging_shutdown() -> None:
    global _atexit_registered

    if _atexit_registered:
        return

    def _stop_listener() -> None:
        global _queue_listener
        if _queue_listener:
            _queue_listener.stop()
            _queue_listener = None

    atexit.register(_stop_listener)
    _atexit_registered = True


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


setup_logging()
