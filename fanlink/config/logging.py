"""Logging configuration and utilities using Loguru.

Key Components:
--------------
- Structured logging with Loguru
- Error handling decorator for service boundary operations
- Bridge for stdlib logging emitted by Flask, urllib3 and musicbrainzngs

Quick Start:
-----------
```python
from fanlink.config import get_logger
logger = get_logger(__name__)
logger.info("Resolving input", input_kind="isrc")
```
"""

import functools
import logging
from pathlib import Path
import sys
from typing import Any

from loguru import logger

from .settings import settings

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================


def setup_loguru_logger(verbose: bool = False) -> None:
    """Configure Loguru logger for the application.

    Args:
        verbose: Enable verbose logging with debug level and detailed tracebacks
    """
    logger.remove()

    log_file_path = Path(settings.logging.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"service": "fanlink", "module": "root"})

    console_level = "DEBUG" if verbose else settings.logging.console_level
    logger.add(
        sink=sys.stderr,
        level=console_level,
        format=(
            "<green>{time:HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:"
            "<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=verbose,
        diagnose=verbose,
    )

    enqueue_logs = not settings.logging.real_time_debug
    logger.add(
        sink=str(settings.logging.log_file),
        level=settings.logging.file_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {process}:{thread} | {extra[service]} | {extra[module]} | {name}:{function}:{line} | {message}",
        rotation="10 MB",
        retention="1 week",
        compression="zip",
        backtrace=True,
        diagnose=True,
        enqueue=enqueue_logs,
        catch=True,
        serialize=True,
    )

    configure_stdlib_logging()


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(name: str) -> Any:  # Use Any for Loguru logger type
    """Get a pre-configured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Loguru logger bound with module and service context
    """
    return logger.bind(
        module=name,
        service="fanlink",
    )


# =============================================================================
# ERROR HANDLING DECORATORS
# =============================================================================


def resilient_operation(operation_name=None):
    """Decorator for service boundary operations with standardized error logging.

    Logs the failure with traceback and re-raises, so callers decide whether the
    failure is fatal or absorbed.

    Example:
        >>> @resilient_operation("generate_link")
        >>> async def execute(self, raw_input):
        >>>     ...
    """

    def decorator(func):
        op_name = operation_name or func.__name__

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"Error in {op_name}: {e!s}")
                raise

        return wrapper

    return decorator


# =============================================================================
# THIRD-PARTY LOGGING INTEGRATION
# =============================================================================


class _LoguruBridgeHandler(logging.Handler):
    """Forward stdlib log records to Loguru, keeping the emitting module."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.bind(module=record.name).opt(exception=record.exc_info).log(
            level, record.getMessage()
        )


def configure_stdlib_logging() -> None:
    """Route werkzeug, flask, urllib3 and musicbrainzngs logs through Loguru."""
    handler = _LoguruBridgeHandler()
    for name in ("werkzeug", "flask.app", "urllib3", "musicbrainzngs"):
        third_party = logging.getLogger(name)
        third_party.handlers = [handler]
        third_party.propagate = False
    # musicbrainzngs warns on every unknown XML attribute
    logging.getLogger("musicbrainzngs").setLevel(logging.ERROR)
