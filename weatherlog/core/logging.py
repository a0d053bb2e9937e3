import logging
import json
import sys
from datetime import datetime, timezone
from typing import Dict, Any, Optional

ROOT_LOGGER_NAME = "weatherlog"

# Attributes every LogRecord carries; anything else was passed through ``extra``
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


# Custom JSON formatter for structured logging
class JSONFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the log record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_record = self._format_record(record)
        return json.dumps(log_record)

    def _format_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Create a dictionary from a log record."""
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add any custom attributes
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in log_record or key.startswith("_"):
                continue
            if isinstance(value, (str, int, float, bool, type(None))):
                log_record[key] = value

        # Add traceback for exceptions
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return log_record


class RequestIDFilter(logging.Filter):
    """
    Filter that makes sure every record has a request_id, ``-`` outside a request.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        return True


class RequestLoggerAdapter(logging.LoggerAdapter):
    """Adapter that keeps per-call ``extra`` fields alongside the bound request id."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def setup_logging(logger_name: str = ROOT_LOGGER_NAME, log_level: str = "INFO") -> logging.Logger:
    """
    Set up structured logging with JSON formatting.

    Args:
        logger_name: Name for the logger
        log_level: Logging level to use

    Returns:
        Logger instance
    """
    logger = logging.getLogger(logger_name)

    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    # Clear any existing handlers
    logger.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIDFilter())
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(module_name: str, request_id: Optional[str] = None) -> logging.Logger:
    """
    Get a logger for a specific module, optionally bound to a request.

    Args:
        module_name: Name of the module (usually __name__)
        request_id: Current request ID

    Returns:
        Logger, or a LoggerAdapter carrying the request id
    """
    if not module_name.startswith(ROOT_LOGGER_NAME):
        module_name = f"{ROOT_LOGGER_NAME}.{module_name}"
    logger = logging.getLogger(module_name)

    if request_id:
        return RequestLoggerAdapter(logger, {"request_id": request_id})

    return logger
