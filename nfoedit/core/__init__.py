"""Core library operations."""

from .library import (
    DocumentResult,
    discover_nfo_files,
    load_nfo,
    read_document,
    save_nfo,
    write_document,
)

__all__ = [
    "DocumentResult",
    "discover_nfo_files",
    "read_document",
    "write_document",
    "load_nfo",
    "save_nfo",
]
