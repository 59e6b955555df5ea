"""Common utilities and shared components for nfoedit."""

from .config import (
    Config,
    FileLoggingConfig,
    LoggingConfig,
    NFOConfig,
    ScanConfig,
)
from .logging_config import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    "Config",
    "FileLoggingConfig",
    "LoggingConfig",
    "NFOConfig",
    "ScanConfig",
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
