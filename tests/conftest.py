"""Shared pytest fixtures for all tests."""

import pytest
from pathlib import Path

from nfoedit.common.config import Config, LoggingConfig, NFOConfig, ScanConfig
from nfoedit.parsers import MovieNFOParser

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_config(tmp_path: Path) -> Config:
    """Provide a sample configuration for tests."""
    return Config(
        config_dir=tmp_path / "config",
        logging=LoggingConfig(
            level="DEBUG",
            format="text",
        ),
        nfo=NFOConfig(indent=2, pretty=True),
        scan=ScanConfig(),
    )


@pytest.fixture
def parser() -> MovieNFOParser:
    """Provide a movie parser with default output settings."""
    return MovieNFOParser()


@pytest.fixture
def sample_nfo_path() -> Path:
    """Path to the sample movie.nfo fixture."""
    return FIXTURES_DIR / "sample_movie.nfo"


@pytest.fixture
def sample_nfo_xml(sample_nfo_path: Path) -> str:
    """Content of the sample movie.nfo fixture."""
    return sample_nfo_path.read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point NFOEDIT_CONFIG_DIR at a temporary directory for every test."""
    config_dir = tmp_path / "nfoedit-config"
    monkeypatch.setenv("NFOEDIT_CONFIG_DIR", str(config_dir))
    return config_dir
