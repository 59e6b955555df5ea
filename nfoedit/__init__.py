"""nfoedit package initialization."""

from pathlib import Path
from typing import Optional

import structlog

from .common.config import Config, FileLoggingConfig, LoggingConfig, NFOConfig, ScanConfig
from .common.logging_config import setup_logging
from .core.library import (
    DocumentResult,
    discover_nfo_files,
    load_nfo,
    read_document,
    save_nfo,
    write_document,
)
from .parsers import (
    Actor,
    MovieNFO,
    MovieNFOParser,
    MovieSet,
    RatingEntry,
    UniqueId,
    empty_nfo,
    is_always_array,
    parse_nfo,
    serialize_nfo,
)

__version__ = "0.1.0"
__all__ = [
    "Config",
    "FileLoggingConfig",
    "LoggingConfig",
    "NFOConfig",
    "ScanConfig",
    "configure",
    "get_config",
    "setup_logging",
    "Actor",
    "MovieNFO",
    "MovieSet",
    "RatingEntry",
    "UniqueId",
    "MovieNFOParser",
    "parse_nfo",
    "serialize_nfo",
    "empty_nfo",
    "is_always_array",
    "DocumentResult",
    "discover_nfo_files",
    "read_document",
    "write_document",
    "load_nfo",
    "save_nfo",
]

# Module-level logger (not configured yet)
logger = structlog.get_logger(__name__)

_config: Optional[Config] = None


def configure(config_path: Optional[Path] = None, config: Optional[Config] = None) -> Config:
    """
    Configure the nfoedit package.

    Call once at application startup to load configuration and set up
    logging.

    Path Resolution:
    - If config is provided, use it as-is
    - If config_path is provided, load from that file
    - Otherwise look for config.yaml in NFOEDIT_CONFIG_DIR (or
      ~/.config/nfoedit), then in the working directory, then use defaults

    Args:
        config_path: Path to YAML configuration file
        config: Pre-loaded Config object (takes precedence over config_path)

    Returns:
        The active configuration

    Example:
        >>> import nfoedit
        >>> nfoedit.configure(config_path=Path("config.yaml"))
    """
    global _config

    from .common.config import _get_default_config_dir

    if config is not None:
        _config = config
    elif config_path is not None:
        _config = Config.from_yaml(config_path)
    else:
        default_config_path = _get_default_config_dir() / "config.yaml"
        cwd_config_path = Path.cwd() / "config.yaml"

        if default_config_path.exists():
            _config = Config.from_yaml(default_config_path)
            config_path = default_config_path
        elif cwd_config_path.exists():
            _config = Config.from_yaml(cwd_config_path)
            config_path = cwd_config_path
        else:
            _config = Config()

    # Install handlers before anything else logs
    setup_logging(_config.logging, config_dir=_config.config_dir or _get_default_config_dir())
    _config.resolve_paths()

    logger.info(
        "nfoedit_configured",
        version=__version__,
        config_path=str(config_path) if config_path else None,
        config_dir=str(_config.config_dir),
    )
    return _config


def get_config() -> Config:
    """
    Get current configuration, initializing with defaults if needed.

    Example:
        >>> import nfoedit
        >>> nfoedit.get_config().nfo.indent
        2
    """
    global _config
    if _config is None:
        _config = Config()
        setup_logging(_config.logging)
    return _config
