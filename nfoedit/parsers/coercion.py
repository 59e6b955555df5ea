"""Primitive value extraction shared by the NFO decoder."""

import re
from typing import Iterable, List, Optional

import structlog

from .nodes import Cdata, Compound, NodeList, PlainText, XMLNode

logger = structlog.get_logger(__name__)

# Optional sign followed by ASCII digits
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def get_string(node: Optional[XMLNode]) -> Optional[str]:
    """
    Extract an optional string from a parsed node.

    Missing nodes and empty text both map to None. A CDATA payload wins over
    plain text next to it. Compound nodes have no scalar value. For a run of
    repeated elements the first non-empty value is used.

    Args:
        node: Parsed node or None

    Returns:
        Non-empty string, or None when absent
    """
    if node is None:
        return None
    if isinstance(node, PlainText):
        return node.text or None
    if isinstance(node, Cdata):
        return node.payload or node.text or None
    if isinstance(node, NodeList):
        for item in node:
            value = get_string(item)
            if value is not None:
                return value
        return None
    if isinstance(node, Compound):
        return None
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def get_bool(node: Optional[XMLNode]) -> Optional[bool]:
    """
    Extract a tri-state boolean.

    ``"true"`` and ``"1"`` (case-insensitive) are True, any other non-empty
    value is False, and a missing or empty element stays None.
    """
    value = get_string(node)
    if value is None:
        return None
    return value.strip().lower() in ("true", "1")


def get_int(node: Optional[XMLNode], field: str = "value") -> Optional[int]:
    """
    Extract an optional integer.

    Only an optional sign followed by ASCII digits is accepted (surrounding
    whitespace ignored). Anything else, including ``1_0`` and non-ASCII
    digits, is logged and treated as absent.
    """
    value = get_string(node)
    if value is None:
        return None
    if not INTEGER_PATTERN.fullmatch(value.strip()):
        logger.warning("invalid_integer_value", field=field, value=value)
        return None
    return int(value.strip())


def to_string_list(nodes: Iterable[XMLNode]) -> List[str]:
    """
    Collect the string values of repeated elements.

    Blank and whitespace-only entries are dropped; order and duplicates are
    kept.
    """
    values = []
    for node in nodes:
        value = get_string(node)
        if value is not None and value.strip():
            values.append(value)
    return values
