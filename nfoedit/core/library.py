"""NFO file discovery and document read/write for a media library."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import structlog

from ..common.config import ScanConfig
from ..parsers.models import MovieNFO
from ..parsers.movie_parser import MovieNFOParser

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DocumentResult:
    """Outcome of a document read or write."""

    success: bool
    path: Path
    content: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "path": str(self.path),
            "content": self.content,
            "error": self.error,
        }


def discover_nfo_files(root_path: Path, scan_config: Optional[ScanConfig] = None) -> List[Path]:
    """
    Discover NFO files below a directory.

    Matching is case-insensitive on the configured extensions. Directories in
    ``scan_config.skip_dirs`` and (by default) hidden directories are never
    entered. Unreadable directories are skipped.

    Args:
        root_path: Root directory to scan
        scan_config: Discovery options (default: ScanConfig())

    Returns:
        Sorted list of NFO file paths; empty if root_path is missing or not
        a directory
    """
    scan_config = scan_config or ScanConfig()
    root_path = Path(root_path)

    if not root_path.is_dir():
        logger.warning("scan_root_not_directory", root_path=str(root_path))
        return []

    suffixes = tuple(f".{ext}" for ext in scan_config.extensions)
    skip_dirs = set(scan_config.skip_dirs)

    def on_error(error: OSError) -> None:
        logger.warning("scan_directory_unreadable", path=error.filename, error=str(error))

    nfo_files = []
    for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_error):
        # Prune in place so os.walk never descends into skipped directories
        dirnames[:] = [
            name
            for name in dirnames
            if name not in skip_dirs and not (scan_config.skip_hidden and name.startswith("."))
        ]
        for filename in filenames:
            if filename.lower().endswith(suffixes):
                nfo_files.append(Path(dirpath) / filename)

    nfo_files.sort()

    logger.info("nfo_files_discovered", root_path=str(root_path), count=len(nfo_files))
    return nfo_files


def read_document(file_path: Path) -> DocumentResult:
    """
    Read a document as UTF-8 text.

    Returns:
        DocumentResult with ``content`` on success, ``error`` on failure
    """
    file_path = Path(file_path)
    try:
        content = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("document_read_failed", file_path=str(file_path), error=str(e))
        return DocumentResult(success=False, path=file_path, error=str(e))

    logger.debug("document_read", file_path=str(file_path), size=len(content))
    return DocumentResult(success=True, path=file_path, content=content)


def write_document(file_path: Path, content: str) -> DocumentResult:
    """
    Write a document as UTF-8 text, replacing any existing file.

    Returns:
        DocumentResult reporting success or the error message
    """
    file_path = Path(file_path)
    try:
        with open(file_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
    except OSError as e:
        logger.error("document_write_failed", file_path=str(file_path), error=str(e))
        return DocumentResult(success=False, path=file_path, error=str(e))

    logger.info("document_written", file_path=str(file_path), size=len(content))
    return DocumentResult(success=True, path=file_path)


def load_nfo(file_path: Path, parser: Optional[MovieNFOParser] = None) -> Optional[MovieNFO]:
    """
    Read and decode a movie NFO file.

    Returns:
        Decoded record, or None if the file could not be read
    """
    result = read_document(file_path)
    if not result.success:
        return None
    parser = parser or MovieNFOParser()
    return parser.parse_string(result.content or "")


def save_nfo(
    file_path: Path, record: MovieNFO, parser: Optional[MovieNFOParser] = None
) -> DocumentResult:
    """Encode a record and write it to ``file_path``."""
    parser = parser or MovieNFOParser()
    return write_document(file_path, parser.to_xml_string(record))
