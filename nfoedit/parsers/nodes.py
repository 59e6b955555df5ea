"""Parsed XML node variants handed from the DOM to the decoder.

A child element of an NFO document can be bare text, a CDATA block, a
compound element with named children, or a run of repeated elements.
``from_element`` converts a DOM element into exactly one of these variants
so the decoder can resolve every field by matching on the variant instead
of probing the DOM.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union
from xml.dom import Node
from xml.dom.minidom import Element

from .schema import is_always_array


@dataclass(frozen=True)
class PlainText:
    """Element holding only character data."""

    text: str
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Cdata:
    """Element holding at least one CDATA section.

    ``payload`` is the concatenation of every CDATA section, plus any text
    holding a carriage return, in document order; ``text`` is all plain
    character data found next to them.
    """

    payload: str
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Compound:
    """Element with child elements, kept in document order."""

    children: Tuple[Tuple[str, "XMLNode"], ...] = ()
    attributes: Dict[str, str] = field(default_factory=dict)
    text: str = ""

    def get_all(self, *names: str) -> "NodeList":
        """Return every child named in ``names``, interleaved in document order."""
        return NodeList(tuple(node for name, node in self.children if name in names))

    def get(self, name: str) -> Optional["XMLNode"]:
        """
        Look up a child element by name.

        Always-array names return a ``NodeList`` (possibly empty). Any other
        name returns its first occurrence, or None when missing.
        """
        if is_always_array(name):
            return self.get_all(name)
        for child_name, node in self.children:
            if child_name == name:
                return node
        return None


@dataclass(frozen=True)
class NodeList:
    """Repeated elements sharing a field."""

    items: Tuple["XMLNode", ...] = ()

    def __iter__(self) -> Iterator["XMLNode"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


XMLNode = Union[PlainText, Cdata, Compound, NodeList]


def from_element(element: Element) -> XMLNode:
    """Convert a DOM element (and its subtree) into a node variant."""
    attributes = {name: value for name, value in element.attributes.items()}
    text_parts = []
    cdata_parts = []
    has_cdata = False
    children = []

    for child in element.childNodes:
        if child.nodeType == Node.ELEMENT_NODE:
            children.append((child.tagName, from_element(child)))
        elif child.nodeType == Node.CDATA_SECTION_NODE:
            cdata_parts.append(child.data)
            has_cdata = True
        elif child.nodeType == Node.TEXT_NODE:
            text_parts.append(child.data)
            if "\r" in child.data:
                # A CR can only come from a character reference; CDATA cannot hold one
                cdata_parts.append(child.data)

    text = "".join(text_parts)
    if children:
        return Compound(children=tuple(children), attributes=attributes, text=text)
    if has_cdata:
        return Cdata(payload="".join(cdata_parts), text=text, attributes=attributes)
    return PlainText(text=text, attributes=attributes)
