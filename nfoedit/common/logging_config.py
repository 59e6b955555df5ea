"""Logging configuration using structlog for structured logging."""

import logging
import logging.handlers
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog

from .config import LoggingConfig


def setup_logging(
    config: LoggingConfig,
    config_dir: Optional[Path] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Configure logging based on configuration.

    This function sets up both structlog and standard library logging to work
    together, with appropriate handlers, formatters, and log levels.

    Args:
        config: LoggingConfig object with logging settings
        config_dir: Directory for log file (if file logging enabled)
        stream: Stream for console output (default: sys.stderr). Never
            pass sys.stdout from the CLI, it carries command output.

    Example:
        >>> from nfoedit.common.config import LoggingConfig
        >>> config = LoggingConfig(level="DEBUG", format="text")
        >>> setup_logging(config, Path("/config"))
    """
    log_level = getattr(logging, config.level.upper())

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[],
        force=True,
    )

    for library, level in config.third_party.items():
        logging.getLogger(library).setLevel(getattr(logging, level.upper()))

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    handlers = []

    # Console output goes to stderr unless another stream is given
    console_handler = logging.StreamHandler(stream)
    console_handler.setLevel(log_level)
    handlers.append(console_handler)

    if config.file and config.file.enabled and config_dir is not None:
        log_path = config_dir / "nfoedit.log"
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # Rotates at midnight local time, keeps 7 backup files
        file_handler = logging.handlers.TimedRotatingFileHandler(
            filename=str(log_path),
            when="midnight",
            backupCount=7,
            encoding="utf-8",
        )
        file_handler.suffix = "%Y-%m-%d"
        file_handler.setLevel(log_level)
        handlers.append(file_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """
    Get a structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("nfo_file_written", path="movie.nfo")
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables that will be included in all subsequent log messages.

    Useful for tagging every log line of a batch run with the library root
    or the document currently being processed.

    Args:
        **kwargs: Key-value pairs to bind to the logging context

    Example:
        >>> bind_context(library_root="/media/movies")
        >>> logger.info("nfo_files_discovered")  # Will include library_root
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
