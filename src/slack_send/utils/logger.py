"""
Module: logger.py
Description: Structured logging configuration for slack-send.

Configures structlog to render GitHub Actions workflow commands so that
debug, warning and error entries show up in the job log with the right
annotations. Provides consistent logging across all modules with proper
context and structured data.

Key Components:
- Workflow command renderer for the Actions runner
- Log level processor
- get_logger() helper function
- get_sdk_logger() bridge for libraries expecting a stdlib logger

Dependencies: structlog, logging
"""

import logging
import sys

import structlog

# Log methods that map onto runner workflow commands
_COMMANDS = {
    "debug": "debug",
    "warning": "warning",
    "warn": "warning",
    "error": "error",
    "exception": "error",
    "critical": "error",
}


def escape_data(value) -> str:
    """
    Escape a value for use as workflow command data.

    Args:
        value: Value to escape (converted with str())

    Returns:
        Escaped string safe to print after a command prefix
    """
    return (
        str(value)
        .replace("%", "%25")
        .replace("\r", "%0D")
        .replace("\n", "%0A")
    )


def _add_log_level(logger, method_name, event_dict):
    """
    Add log level to event dictionary.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Updated event dictionary with level
    """
    event_dict["level"] = method_name
    return event_dict


def _render_workflow_command(logger, method_name, event_dict):
    """
    Render an event as a workflow command line.

    Info entries are printed as plain lines. Context values are appended
    as key=value pairs after the event message.

    Args:
        logger: Logger instance
        method_name: Log method name (info, error, etc.)
        event_dict: Current log event dictionary

    Returns:
        Rendered line for the runner
    """
    level = event_dict.pop("level", method_name)
    message = str(event_dict.pop("event", ""))
    exc_info = event_dict.pop("exception", None)

    parts = [message]
    parts.extend(f"{key}={value}" for key, value in event_dict.items())
    line = " ".join(part for part in parts if part)
    if exc_info:
        line = f"{line}\n{exc_info}"

    command = _COMMANDS.get(level)
    if command is None:
        return line
    return f"::{command}::{escape_data(line)}"


structlog.configure(
    processors=[
        _add_log_level,
        # Add exception information
        structlog.processors.format_exc_info,
        _render_workflow_command,
    ],
    logger_factory=structlog.PrintLoggerFactory(sys.stdout),
    wrapper_class=structlog.BoundLogger,
    # Left uncached so tests can capture entries from module level loggers
    cache_logger_on_first_use=False,
)


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.warning("Retrying request", attempt=2)
        ::warning::Retrying request attempt=2
    """
    return structlog.get_logger(name)


class _StructlogHandler(logging.Handler):
    """Forward stdlib log records into structlog."""

    def __init__(self, name: str):
        super().__init__()
        self._logger = get_logger(name)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
        except Exception:
            self.handleError(record)
            return
        if record.levelno >= logging.ERROR:
            self._logger.error(message, source=record.name)
        elif record.levelno >= logging.WARNING:
            self._logger.warning(message, source=record.name)
        elif record.levelno >= logging.INFO:
            self._logger.info(message, source=record.name)
        else:
            self._logger.debug(message, source=record.name)


def get_sdk_logger(debug: bool, name: str = "slack_send.sdk") -> logging.Logger:
    """
    Get a stdlib logger that writes through structlog.

    Args:
        debug: Whether the runner is in debug mode
        name: Logger name

    Returns:
        Logger at DEBUG level in debug mode, INFO otherwise
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    if not any(isinstance(handler, _StructlogHandler) for handler in logger.handlers):
        logger.addHandler(_StructlogHandler(name))
    return logger
