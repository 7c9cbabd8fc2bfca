import json
import logging
import sys
import traceback
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any


class CustomJSONEncoder(json.JSONEncoder):
    def default(self, o):
        if isinstance(o, datetime):
            return o.isoformat()
        if isinstance(o, Decimal):
            return str(o)
        return super().default(o)


class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, UTC).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        if record.exc_info and record.exc_info[0] is not None:
            log_entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'extra_data'):
            log_entry['data'] = record.extra_data

        return json.dumps(log_entry, ensure_ascii=False, cls=CustomJSONEncoder)


def configure_logging(log_directory: str | Path = "logs",
                      console_level: str = "INFO",
                      file_level: str = "DEBUG",
                      max_file_size: int = 10 * 1024 * 1024,
                      backup_count: int = 5) -> None:
    """
    Configure the root logger: a human readable console handler plus rotating
    JSON-lines files under ``log_directory`` (everything, and warnings only).
    """
    log_directory = Path(log_directory)
    log_directory.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(logging.DEBUG)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, console_level.upper()))
    console_format = '%(asctime)s | %(levelname)-8s | %(name)-20s | %(message)s'
    console_handler.setFormatter(logging.Formatter(console_format, datefmt='%H:%M:%S'))
    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        log_directory / "app.log",
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(getattr(logging, file_level.upper()))
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    error_handler = RotatingFileHandler(
        log_directory / "errors.log",
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.WARNING)
    error_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(error_handler)


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class EventType(Enum):
    PROVIDER_CALL = "provider_call"
    RATE_REFRESH = "rate_refresh"
    SNAPSHOT_STORE = "snapshot_store"


@dataclass
class LogEvent:
    event_type: EventType
    level: LogLevel
    message: str
    timestamp: datetime
    duration_ms: float | None = None
    context: dict[str, Any] | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        data['event_type'] = self.event_type.value
        data['level'] = self.level.value
        return data


class EventLogger:
    """Emits typed events with structured ``extra_data`` for the JSON log files."""

    def __init__(self, name: str = 'currency.events'):
        self.logger = logging.getLogger(name)

    def log_event(self, event: LogEvent) -> None:
        level_map = {
            LogLevel.DEBUG: logging.DEBUG,
            LogLevel.INFO: logging.INFO,
            LogLevel.WARNING: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
            LogLevel.CRITICAL: logging.CRITICAL,
        }
        self.logger.log(level_map[event.level], event.message, extra={"extra_data": event.to_dict()})

    def log_provider_call(self, provider_name: str, base_code: str, success: bool,
                          response_time_ms: float, status_code: int | None = None,
                          rate_count: int | None = None, error_message: str | None = None):
        event = LogEvent(
            event_type=EventType.PROVIDER_CALL,
            level=LogLevel.DEBUG if success else LogLevel.WARNING,
            message=f"Provider call to {provider_name} for {base_code}: {'SUCCESS' if success else 'FAILED'}",
            timestamp=datetime.now(UTC),
            duration_ms=response_time_ms,
            context={
                "provider": provider_name,
                "base_code": base_code,
                "status_code": status_code,
                "rate_count": rate_count,
            },
            error_context={"error_message": error_message} if error_message else None
        )
        self.log_event(event)

    def log_rate_refresh(self, base_code: str, success: bool, duration_ms: float,
                         rate_count: int | None = None, error: Exception | None = None,
                         serving_stale: bool = False):
        if success:
            message = f"Rate refresh for {base_code} succeeded ({rate_count} rates)"
        elif serving_stale:
            message = f"Rate refresh for {base_code} failed, serving stale snapshot: {error}"
        else:
            message = f"Rate refresh for {base_code} failed, no snapshot available: {error}"

        event = LogEvent(
            event_type=EventType.RATE_REFRESH,
            level=LogLevel.INFO if success else LogLevel.ERROR,
            message=message,
            timestamp=datetime.now(UTC),
            duration_ms=duration_ms,
            context={
                "base_code": base_code,
                "success": success,
                "rate_count": rate_count,
                "serving_stale": serving_stale,
            },
            error_context={
                "error_type": type(error).__name__,
                "error_message": str(error),
            } if error else None
        )
        self.log_event(event)

    def log_snapshot_store(self, operation: str, key: str, success: bool,
                           error_message: str | None = None):
        event = LogEvent(
            event_type=EventType.SNAPSHOT_STORE,
            level=LogLevel.DEBUG if success else LogLevel.WARNING,
            message=f"Snapshot {operation} for {key}: {'OK' if success else 'FAILED'}",
            timestamp=datetime.now(UTC),
            context={"operation": operation, "key": key},
            error_context={"error_message": error_message} if error_message else None
        )
        self.log_event(event)
