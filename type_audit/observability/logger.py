"""
Structured JSON logging for type-audit

This module provides consistent structured logging across the application
using python-json-logger for easy parsing and analysis. Logs are written to
stderr so that reports printed on stdout stay machine-readable.
"""
import logging
import os
import sys
import time

from pythonjsonlogger import jsonlogger

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_LOGGER_NAME = "type-audit"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    Custom JSON formatter that adds additional context fields

    Adds: timestamp, level, logger_name, module and function
    """

    def add_fields(self, log_record: dict, record: logging.LogRecord, message_dict: dict) -> None:
        """
        Add custom fields to log record

        Args:
            log_record: Log record dictionary
            record: LogRecord object
            message_dict: Message dictionary
        """
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        if log_record.get("level"):
            log_record["level"] = log_record["level"].upper()
        else:
            log_record["level"] = record.levelname

        log_record["logger"] = record.name
        log_record["module"] = record.module
        log_record["function"] = record.funcName


def _build_formatter(format_type: str) -> logging.Formatter:
    if format_type == "json":
        return CustomJsonFormatter(
            fmt="%(timestamp)s %(level)s %(logger)s %(module)s %(function)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    # Plain text for terminals
    return logging.Formatter(
        fmt="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logger(
    name: str = DEFAULT_LOGGER_NAME,
    level: str | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Setup and configure a logger

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: "json" or "text" (defaults to LOG_FORMAT env or "json")

    Returns:
        Configured logger instance
    """
    log_level_str = level or os.getenv("LOG_LEVEL", "INFO")
    log_level = LOG_LEVELS.get(log_level_str.upper(), logging.INFO)
    format_type = (format_type or os.getenv("LOG_FORMAT", "json")).lower()

    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(_build_formatter(format_type))
    logger.addHandler(handler)

    # Prevent propagation to root logger
    logger.propagate = False

    return logger


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """
    Get a logger instance

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)

    # If logger has no handlers, set it up
    if not logger.handlers:
        return setup_logger(name)

    return logger


def configure_logging(
    level: str | None = None,
    format_type: str | None = None,
    prefix: str = "type_audit",
) -> None:
    """
    Reconfigure every already-created application logger.

    Module loggers are set up at import time from the environment; this
    applies CLI or config file settings to them afterwards.

    Args:
        level: Log level name
        format_type: "json" or "text"
        prefix: Logger name prefix to reconfigure
    """
    names = [
        name for name in logging.root.manager.loggerDict
        if name == DEFAULT_LOGGER_NAME or name.startswith(prefix)
    ]
    for name in names:
        setup_logger(name, level=level, format_type=format_type)


class log_operation:
    """
    Context manager that logs the start, end and elapsed time of a step.

    Usage:
        with log_operation("Aggregating types", logger=logger, source_id="events") as op:
            ...
        op.elapsed  # seconds
    """

    def __init__(self, operation_name: str, logger: logging.Logger | None = None, **extra_fields):
        self.operation_name = operation_name
        self.logger = logger or get_logger(DEFAULT_LOGGER_NAME)
        self.extra_fields = extra_fields
        self.elapsed: float | None = None
        self._started: float | None = None

    def _fields(self, **fields) -> dict:
        return {"operation": self.operation_name, **fields, **self.extra_fields}

    def __enter__(self):
        self._started = time.perf_counter()
        self.logger.info(f"Starting: {self.operation_name}", extra=self._fields())
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = time.perf_counter() - self._started
        duration = round(self.elapsed, 3)

        if exc_type is None:
            self.logger.info(
                f"Completed: {self.operation_name}",
                extra=self._fields(duration_seconds=duration, status="success"),
            )
        else:
            # Callers decide how to report the exception itself
            self.logger.error(
                f"Failed: {self.operation_name}",
                extra=self._fields(
                    duration_seconds=duration,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                ),
            )
        return False
