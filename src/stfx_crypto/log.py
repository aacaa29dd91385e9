"""
Logging setup.

The library only emits debug-level lifecycle events (key generated,
key restored) tagged with a public ``key_id``. It never logs secrets,
plaintext, signatures, or anything on a failure path.

Library loggers are structlog wrappers around the stdlib ``stfx_crypto``
logger, which carries a ``NullHandler`` and sits at WARNING until
``configure_logging()`` is called. The host's global structlog
configuration is never touched, so importing or using the package is
silent by default. The CLI calls ``configure_logging()`` itself.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

LOGGER_NAME = "stfx_crypto"
DEFAULT_LOG_LEVEL = "WARNING"

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

_library_logger = logging.getLogger(LOGGER_NAME)
_library_logger.addHandler(logging.NullHandler())
_library_logger.setLevel(_LEVELS[DEFAULT_LOG_LEVEL])

# Handler installed by configure_logging(); replaced on every call.
_handler: Optional[logging.Handler] = None


def get_logger(name: str):
    """Return a structlog logger for a module under ``stfx_crypto``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def configure_logging(
    level: Optional[str] = None,
    fmt: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Send stfx_crypto log events to ``stream``.

    Args:
        level: level name; defaults to ``STFX_CRYPTO_LOG_LEVEL``
        fmt: ``console`` or ``json``; defaults to ``STFX_CRYPTO_LOG_FORMAT``
        stream: where to write; defaults to stderr so stdout stays clean

    Raises:
        ValueError: for an unknown level name
    """
    from .config import get_config

    global _handler

    config = get_config()
    level_name = (level or config.log_level).upper()
    if level_name not in _LEVELS:
        raise ValueError(f"Unknown log level: {level_name}")
    fmt = fmt or config.log_format

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    if _handler is not None:
        _library_logger.removeHandler(_handler)
    _library_logger.addHandler(handler)
    _library_logger.setLevel(_LEVELS[level_name])
    _handler = handler


def reset_logging() -> None:
    """Drop the configured handler and return to the silent default."""
    global _handler
    if _handler is not None:
        _library_logger.removeHandler(_handler)
        _handler = None
    _library_logger.setLevel(_LEVELS[DEFAULT_LOG_LEVEL])
