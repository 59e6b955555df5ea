"""Parser for movie.nfo files."""

from typing import Any, Callable, Dict, List, Optional
from xml.dom.minidom import Element

from ..common.config import NFOConfig
from .coercion import get_bool, get_int, get_string, to_string_list
from .models import Actor, MovieNFO, MovieSet, RatingEntry, UniqueId
from .nfo_parser import NFOParser
from .nodes import Compound, XMLNode
from .schema import FIELD_SPECS, ROOT_ELEMENT, STRING_LIST_FIELDS, FieldKind, FieldSpec
from .xml_output import create_element, create_text

# Optional actor sub-elements, in output order
ACTOR_OPTIONAL_FIELDS = ("role", "type", "order", "thumb", "profile", "tmdbid")


def _cdata_chunks(text: str) -> List[str]:
    """Split text so that no chunk contains the ']]>' terminator."""
    parts = text.split("]]>")
    chunks = []
    for i, part in enumerate(parts):
        prefix = ">" if i > 0 else ""
        suffix = "]]" if i < len(parts) - 1 else ""
        chunks.append(prefix + part + suffix)
    return chunks


def _append_element(parent: Element, tag: str, inline: bool = False) -> Element:
    elem = create_element(parent.ownerDocument, tag, inline=inline)
    parent.appendChild(elem)
    return elem


def _append_text(parent: Element, tag: str, text: str) -> Element:
    """Append ``<tag>text</tag>`` to parent (an empty string still gets a text node)."""
    elem = _append_element(parent, tag)
    elem.appendChild(create_text(parent.ownerDocument, text))
    return elem


def _append_cdata(parent: Element, tag: str, text: str) -> Element:
    """
    Append ``<tag><![CDATA[text]]></tag>`` to parent.

    A carriage return cannot survive inside CDATA, so each one is written
    between sections as an escaped text node.
    """
    document = parent.ownerDocument
    elem = _append_element(parent, tag, inline=True)
    for i, line in enumerate(text.split("\r")):
        if i > 0:
            elem.appendChild(create_text(document, "\r"))
        for chunk in _cdata_chunks(line):
            if chunk:
                elem.appendChild(document.createCDATASection(chunk))
    return elem


class MovieNFOParser(NFOParser[MovieNFO]):
    """Parser for movie.nfo files with record editing helpers."""

    def __init__(self, config: Optional[NFOConfig] = None):
        """
        Initialize movie NFO parser.

        Args:
            config: Output formatting options (indentation, pretty-printing)
        """
        super().__init__(model_class=MovieNFO, root_element=ROOT_ELEMENT, config=config)

        self._decoders: Dict[FieldKind, Callable[[Compound, FieldSpec], Any]] = {
            FieldKind.SCALAR: self._decode_scalar,
            FieldKind.CDATA: self._decode_scalar,
            FieldKind.BOOLEAN: self._decode_bool,
            FieldKind.SEQUENCE: self._decode_sequence,
            FieldKind.ACTORS: self._decode_actors,
            FieldKind.UNIQUEIDS: self._decode_uniqueids,
            FieldKind.RATINGS: self._decode_ratings,
            FieldKind.SET: self._decode_set,
            FieldKind.FANART: self._decode_fanart,
        }
        self._encoders: Dict[FieldKind, Callable[[Element, FieldSpec, Any], None]] = {
            FieldKind.SCALAR: self._encode_scalar,
            FieldKind.CDATA: self._encode_cdata,
            FieldKind.BOOLEAN: self._encode_bool,
            FieldKind.SEQUENCE: self._encode_sequence,
            FieldKind.ACTORS: self._encode_actors,
            FieldKind.UNIQUEIDS: self._encode_uniqueids,
            FieldKind.RATINGS: self._encode_ratings,
            FieldKind.SET: self._encode_set,
            FieldKind.FANART: self._encode_fanart,
        }

    # Decoding

    def _xml_to_dict(self, root: Compound) -> dict:
        """Convert movie XML to dictionary."""
        return {spec.attribute: self._decoders[spec.kind](root, spec) for spec in FIELD_SPECS}

    def _decode_scalar(self, root: Compound, spec: FieldSpec) -> Optional[str]:
        return get_string(root.get(spec.element))

    def _decode_bool(self, root: Compound, spec: FieldSpec) -> Optional[bool]:
        return get_bool(root.get(spec.element))

    def _decode_sequence(self, root: Compound, spec: FieldSpec) -> List[str]:
        # writer and credits both feed writers, interleaved in document order
        return to_string_list(root.get_all(*spec.elements))

    def _decode_actors(self, root: Compound, spec: FieldSpec) -> List[Actor]:
        actors = []
        for node in root.get_all(*spec.elements):
            if not isinstance(node, Compound):
                continue
            name = get_string(node.get("name")) or ""
            if not name.strip():
                continue
            actors.append(
                Actor(
                    name=name,
                    role=get_string(node.get("role")),
                    type=get_string(node.get("type")),
                    thumb=get_string(node.get("thumb")),
                    profile=get_string(node.get("profile")),
                    tmdbid=get_string(node.get("tmdbid")),
                    order=get_int(node.get("order"), field="actor.order"),
                )
            )
        return actors

    def _decode_uniqueids(self, root: Compound, spec: FieldSpec) -> List[UniqueId]:
        uniqueids = []
        for node in root.get_all(*spec.elements):
            value = get_string(node) or ""
            if value == "":
                continue
            uniqueids.append(
                UniqueId(
                    type=node.attributes.get("type") or "custom",
                    value=value,
                    default=node.attributes.get("default") == "true",
                )
            )
        return uniqueids

    def _decode_ratings(self, root: Compound, spec: FieldSpec) -> List[RatingEntry]:
        block = root.get(spec.element)
        if not isinstance(block, Compound):
            return []

        ratings = []
        for node in block.get_all("rating"):
            value: Optional[str] = None
            votes: Optional[str] = None
            if isinstance(node, Compound):
                value = get_string(node.get("value"))
                votes = get_string(node.get("votes"))
            ratings.append(
                RatingEntry(
                    name=node.attributes.get("name", ""),
                    value=value or "",
                    votes=votes,
                    default=node.attributes.get("default") == "true",
                )
            )
        return ratings

    def _decode_set(self, root: Compound, spec: FieldSpec) -> Optional[MovieSet]:
        node = root.get(spec.element)
        if node is None:
            return None

        if isinstance(node, Compound):
            name = get_string(node.get("name"))
            overview = get_string(node.get("overview"))
        else:
            # <set>Name</set> shorthand
            name = get_string(node)
            overview = None

        if not name:
            return None
        return MovieSet(name=name, overview=overview)

    def _decode_fanart(self, root: Compound, spec: FieldSpec) -> Optional[str]:
        node = root.get(spec.element)
        if isinstance(node, Compound):
            return get_string(node.get("thumb"))
        return get_string(node)

    # Encoding

    def _dict_to_xml(self, parent: Element, data: dict) -> None:
        """Convert movie dictionary to XML elements in canonical order."""
        for spec in FIELD_SPECS:
            value = data.get(spec.attribute)
            if value is None or value == "" or value == []:
                continue
            self._encoders[spec.kind](parent, spec, value)

    def _encode_scalar(self, parent: Element, spec: FieldSpec, value: str) -> None:
        _append_text(parent, spec.element, value)

    def _encode_cdata(self, parent: Element, spec: FieldSpec, value: str) -> None:
        _append_cdata(parent, spec.element, value)

    def _encode_bool(self, parent: Element, spec: FieldSpec, value: bool) -> None:
        _append_text(parent, spec.element, "true" if value else "false")

    def _encode_sequence(self, parent: Element, spec: FieldSpec, values: List[str]) -> None:
        for value in values:
            _append_text(parent, spec.element, value)

    def _encode_actors(self, parent: Element, spec: FieldSpec, actors: List[dict]) -> None:
        for actor in actors:
            elem = _append_element(parent, spec.element)
            # name is always written
            _append_text(elem, "name", actor.get("name", ""))
            for key in ACTOR_OPTIONAL_FIELDS:
                value = actor.get(key)
                if value is not None and value != "":
                    _append_text(elem, key, str(value))

    def _encode_uniqueids(self, parent: Element, spec: FieldSpec, uniqueids: List[dict]) -> None:
        for uniqueid in uniqueids:
            elem = _append_text(parent, spec.element, uniqueid["value"])
            elem.setAttribute("type", uniqueid.get("type") or "custom")
            if uniqueid.get("default"):
                elem.setAttribute("default", "true")

    def _encode_ratings(self, parent: Element, spec: FieldSpec, ratings: List[dict]) -> None:
        block = _append_element(parent, spec.element)
        for rating in ratings:
            elem = _append_element(block, "rating")
            elem.setAttribute("name", rating.get("name", ""))
            if rating.get("default"):
                elem.setAttribute("default", "true")
            _append_text(elem, "value", rating.get("value", ""))
            if rating.get("votes"):
                _append_text(elem, "votes", rating["votes"])

    def _encode_set(self, parent: Element, spec: FieldSpec, movie_set: dict) -> None:
        if not movie_set.get("name"):
            return
        elem = _append_element(parent, spec.element)
        _append_text(elem, "name", movie_set["name"])
        if movie_set.get("overview"):
            _append_text(elem, "overview", movie_set["overview"])

    def _encode_fanart(self, parent: Element, spec: FieldSpec, value: str) -> None:
        elem = _append_element(parent, spec.element)
        _append_text(elem, "thumb", value)

    # Editing

    def _check_list_field(self, field_name: str) -> None:
        if field_name not in STRING_LIST_FIELDS:
            raise ValueError(
                f"Invalid list field: {field_name}. Must be one of {list(STRING_LIST_FIELDS)}"
            )

    def add_value(self, model: MovieNFO, field_name: str, value: str) -> MovieNFO:
        """
        Append a value to a string list field (genres, tags, studios, ...).

        Args:
            model: Current model instance
            field_name: Name of a string list field
            value: Value to add (surrounding whitespace is trimmed)

        Returns:
            New model instance. The input is returned unchanged when the
            trimmed value is blank or already present.

        Raises:
            ValueError: If field_name is not a string list field
        """
        self._check_list_field(field_name)

        trimmed = value.strip()
        current = getattr(model, field_name)
        if not trimmed or trimmed in current:
            return model

        self.logger.info("adding_value", field=field_name, value=trimmed)
        return self.update_field(model, field_name, [*current, trimmed])

    def remove_value(self, model: MovieNFO, field_name: str, index: int) -> MovieNFO:
        """
        Remove the entry at ``index`` from a string list field.

        Args:
            model: Current model instance
            field_name: Name of a string list field
            index: Position of the entry to remove

        Returns:
            New model instance (unchanged input if index is out of range)

        Raises:
            ValueError: If field_name is not a string list field
        """
        self._check_list_field(field_name)

        current = getattr(model, field_name)
        if not 0 <= index < len(current):
            return model

        self.logger.info("removing_value", field=field_name, index=index)
        return self.update_field(
            model, field_name, [v for i, v in enumerate(current) if i != index]
        )

    def _toggle_default(self, model: MovieNFO, field_name: str, index: int) -> MovieNFO:
        entries = getattr(model, field_name)
        if not 0 <= index < len(entries):
            return model

        self.logger.info("toggling_default", field=field_name, index=index)
        # Rebuilt from a dump, so the result shares no list with the input
        return self.update_field(
            model,
            field_name,
            [
                {**entry.model_dump(), "default": (not entry.default) if i == index else False}
                for i, entry in enumerate(entries)
            ],
        )

    def toggle_default_uniqueid(self, model: MovieNFO, index: int) -> MovieNFO:
        """
        Toggle the default flag of one unique ID, clearing it on all others.

        Args:
            model: Current model instance
            index: Position of the unique ID to toggle

        Returns:
            New model instance with at most one default unique ID
        """
        return self._toggle_default(model, "uniqueids", index)

    def toggle_default_rating(self, model: MovieNFO, index: int) -> MovieNFO:
        """
        Toggle the default flag of one rating, clearing it on all others.

        Args:
            model: Current model instance
            index: Position of the rating to toggle

        Returns:
            New model instance with at most one default rating
        """
        return self._toggle_default(model, "ratings", index)


_default_parser = MovieNFOParser()


def parse_nfo(xml_content: str) -> MovieNFO:
    """Decode movie NFO text into a record (never raises for malformed input)."""
    return _default_parser.parse_string(xml_content)


def serialize_nfo(data: MovieNFO) -> str:
    """Encode a record as canonical movie NFO text."""
    return _default_parser.to_xml_string(data)


def empty_nfo() -> MovieNFO:
    """Return a record with every scalar absent and every sequence empty."""
    return MovieNFO()
