"""Configuration models using Pydantic for validation."""

import os
from pathlib import Path
from typing import Dict, List, Optional

import structlog
import yaml
from pydantic import BaseModel, Field, field_validator
from ruamel.yaml import YAML

logger = structlog.get_logger(__name__)


# Directory names never descended into while scanning a library
DEFAULT_SKIP_DIRS = [
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "__pycache__",
    ".cache",
    ".vscode",
    ".idea",
    "dist",
    "dist-electron",
    ".next",
    ".nuxt",
    ".DS_Store",
    "vendor",
    "release",
]


class FileLoggingConfig(BaseModel):
    """Configuration for file-based logging.

    File logging uses daily rotation with 7-day retention.
    Log files are stored as nfoedit.log in config_dir, rotated daily
    with format nfoedit.log.YYYY-MM-DD.
    """

    enabled: bool = Field(
        default=False,
        description="Enable file logging (logs to nfoedit.log in config_dir)",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(
        default="INFO",
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    format: str = Field(
        default="text",
        description="Log format: json or text",
    )
    file: FileLoggingConfig = Field(
        default_factory=FileLoggingConfig,
        description="File logging configuration",
    )
    third_party: Dict[str, str] = Field(
        default_factory=dict,
        description="Log levels for third-party libraries (advanced)",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format."""
        valid_formats = ["json", "text"]
        v_lower = v.lower()
        if v_lower not in valid_formats:
            raise ValueError(f"Invalid format: {v}. Must be one of {valid_formats}")
        return v_lower


class NFOConfig(BaseModel):
    """Configuration for NFO document output."""

    indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Number of spaces per indentation level in written documents",
    )
    pretty: bool = Field(
        default=True,
        description="Pretty-print written documents (one element per line)",
    )


class ScanConfig(BaseModel):
    """Configuration for NFO file discovery."""

    extensions: List[str] = Field(
        default_factory=lambda: ["nfo"],
        description="File extensions treated as NFO documents (case-insensitive)",
    )
    skip_dirs: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_DIRS),
        description="Directory names that are never scanned",
    )
    skip_hidden: bool = Field(
        default=True,
        description="Skip directories whose name starts with a dot",
    )

    @field_validator("extensions")
    @classmethod
    def validate_extensions(cls, v: List[str]) -> List[str]:
        """Normalize extensions to lowercase without a leading dot."""
        normalized = [ext.strip().lstrip(".").lower() for ext in v]
        if not all(normalized):
            raise ValueError("Extensions must be non-empty")
        return normalized


def _get_default_config_dir() -> Path:
    """
    Get default config directory based on environment.

    Priority:
    1. NFOEDIT_CONFIG_DIR environment variable
    2. ~/.config/nfoedit
    """
    env_config_dir = os.environ.get("NFOEDIT_CONFIG_DIR")
    if env_config_dir:
        return Path(env_config_dir)

    return Path.home() / ".config" / "nfoedit"


class Config(BaseModel):
    """Main configuration class for nfoedit.

    Example:
        >>> config = Config.from_yaml(Path("config.yaml"))
        >>> config.nfo.indent
        2
    """

    config_dir: Optional[Path] = Field(
        default=None,
        description="Directory for logs (defaults to NFOEDIT_CONFIG_DIR or ~/.config/nfoedit)",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    nfo: NFOConfig = Field(
        default_factory=NFOConfig,
        description="NFO document output configuration",
    )
    scan: ScanConfig = Field(
        default_factory=ScanConfig,
        description="NFO file discovery configuration",
    )

    def resolve_paths(self) -> "Config":
        """
        Resolve config_dir from environment or defaults.

        Returns:
            Self with resolved paths (for chaining)
        """
        if self.config_dir is None:
            object.__setattr__(self, "config_dir", _get_default_config_dir())

        logger.debug("paths_resolved", config_dir=str(self.config_dir))
        return self

    def get_log_file_path(self) -> Path:
        """Get absolute log file path, resolved against config_dir."""
        config_dir = self.config_dir or _get_default_config_dir()
        return config_dir / "nfoedit.log"

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Config instance loaded from file

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If configuration values are invalid

        Example:
            >>> config = Config.from_yaml(Path("config.yaml"))
        """
        yaml_loader = YAML(typ="safe")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml_loader.load(f)

        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_string: str) -> "Config":
        """
        Load configuration from YAML string.

        Args:
            yaml_string: YAML configuration as string

        Returns:
            Config instance

        Example:
            >>> yaml_str = "nfo:\\n  indent: 4"
            >>> config = Config.from_yaml_string(yaml_str)
        """
        data = yaml.safe_load(yaml_string)
        return cls.model_validate(data or {})
