"""
Logging Configuration for Matchday.

Features:
- Compact coloured console output on stderr (stdout belongs to command output)
- Structured JSON lines for the file log
- Size-based rotation, plus a separate errors-only log
- Process-wide context fields (command, language) on every record
- API keys are masked before any handler sees them
"""

import sys
import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any, Set
import traceback


# Attributes every LogRecord has; anything else was passed via `extra`
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {'message', 'asctime'}

MASK = "***"


# ============================================
# FORMATTERS
# ============================================

class JSONFormatter(logging.Formatter):
    """
    One JSON object per line.

    Request fields logged by APIRequestLogger and LogContext values end up
    under "extra".
    """

    def __init__(self, include_extra: bool = True):
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}:{record.lineno}",
        }

        if record.exc_info and record.exc_info[0]:
            exc_type, exc_value, exc_tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc_value),
                "traceback": traceback.format_exception(exc_type, exc_value, exc_tb),
            }

        if self.include_extra:
            extra = {k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRS}
            if extra:
                entry["extra"] = extra

        return json.dumps(entry, default=str, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """`HH:MM:SS LEVEL logger: message`, coloured by level."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, '')
        clock = datetime.fromtimestamp(record.created).strftime('%H:%M:%S')
        name = record.name[len('matchday.'):] if record.name.startswith('matchday.') else record.name
        line = f"{color}{clock} {record.levelname:<7}{self.RESET} {name}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# ============================================
# FILTERS
# ============================================

class LogContext:
    """
    Process-wide fields attached to every record passing a ContextFilter.

    Example:
        LogContext.set(command="schedule", language="en")
    """

    _context: Dict[str, Any] = {}

    @classmethod
    def set(cls, **kwargs):
        cls._context.update(kwargs)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        return cls._context.get(key, default)

    @classmethod
    def clear(cls):
        cls._context.clear()

    @classmethod
    def get_all(cls) -> Dict[str, Any]:
        return cls._context.copy()


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in LogContext.get_all().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True


class SecretFilter(logging.Filter):
    """Replaces registered secrets (API keys) in messages and extra fields."""

    _secrets: Set[str] = set()

    @classmethod
    def register(cls, secret: Optional[str]):
        # Very short values would mask unrelated text
        if secret and len(secret) >= 6:
            cls._secrets.add(secret)

    @classmethod
    def clear(cls):
        cls._secrets.clear()

    @classmethod
    def redact(cls, text: str) -> str:
        for secret in cls._secrets:
            text = text.replace(secret, MASK)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        record.msg = self.redact(record.getMessage())
        record.args = None
        for key, value in list(record.__dict__.items()):
            if key not in _STANDARD_ATTRS and isinstance(value, str):
                setattr(record, key, self.redact(value))
        return True


# ============================================
# SETUP
# ============================================

def setup_logging(
    level: str = "INFO",
    json_logs: bool = False,
    log_dir: Optional[str] = None,
    log_file: str = "matchday.log",
    max_bytes: int = 2 * 1024 * 1024,  # 2MB
    backup_count: int = 3,
    enable_console: bool = True,
    enable_file: bool = True
) -> logging.Logger:
    """
    Configure the root logger. Existing root handlers are replaced.

    Args:
        level: Log level name
        json_logs: JSON lines instead of plain text in the main log file
        log_dir: Directory for log files; file logging is skipped when empty
        log_file: Main log file name
        max_bytes: Rotation size
        backup_count: Rotated files to keep
        enable_console: Log to stderr
        enable_file: Log to files under log_dir

    Returns:
        The root logger
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    filters = [SecretFilter(), ContextFilter()]

    def attach(handler: logging.Handler, formatter: logging.Formatter, handler_level: int = logging.DEBUG):
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        for f in filters:
            handler.addFilter(f)
        root.addHandler(handler)

    if enable_console:
        attach(logging.StreamHandler(sys.stderr), ConsoleFormatter())

    if enable_file and log_dir:
        log_path = Path(log_dir).expanduser()
        log_path.mkdir(parents=True, exist_ok=True)

        if json_logs:
            main_formatter = JSONFormatter()
        else:
            main_formatter = logging.Formatter('%(asctime)s %(levelname)-7s %(name)s: %(message)s')
        attach(
            logging.handlers.RotatingFileHandler(
                log_path / log_file, maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            ),
            main_formatter,
        )
        attach(
            logging.handlers.RotatingFileHandler(
                log_path / "errors.log", maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8'
            ),
            JSONFormatter(),
            logging.ERROR,
        )

    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ============================================
# API REQUEST LOGGER
# ============================================

class APIRequestLogger:
    """
    One log line per issued API request.

    Successful requests log at DEBUG, failures at WARNING. Request
    headers are never passed in, so the API key cannot leak from here.
    """

    def __init__(self, api_name: str, logger: Optional[logging.Logger] = None):
        self.api_name = api_name
        self.logger = logger or get_logger(f"matchday.api.{api_name}")

    def log_request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict] = None,
        response_status: Optional[int] = None,
        response_time_ms: Optional[float] = None,
        error: Optional[str] = None
    ):
        fields = {
            "api": self.api_name,
            "endpoint": endpoint,
            "method": method,
            "params": params or {},
            "response_status": response_status,
            "response_time_ms": response_time_ms,
        }
        timing = f" ({response_time_ms:.0f} ms)" if response_time_ms is not None else ""

        if error:
            fields["error"] = error
            self.logger.warning(f"{method} {endpoint} failed{timing}: {error}", extra=fields)
        else:
            self.logger.debug(f"{method} {endpoint} -> {response_status}{timing}", extra=fields)
