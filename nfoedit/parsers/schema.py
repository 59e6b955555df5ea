"""Element classification and canonical ordering for movie NFO documents.

Both the decoder and the encoder in ``movie_parser`` walk ``FIELD_SPECS``;
nothing else in the package lists element names, so the two directions
cannot drift apart.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

ROOT_ELEMENT = "movie"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

# Elements that always decode to a sequence, even for zero or one occurrence
ALWAYS_ARRAY_FIELDS = frozenset(
    {
        "tag",
        "genre",
        "actor",
        "uniqueid",
        "director",
        "writer",
        "credits",
        "studio",
        "country",
    }
)

# Free-text elements always written as CDATA
CDATA_FIELDS = ("plot", "outline", "originalplot")


class FieldKind(Enum):
    """Structural kind of a record field."""

    SCALAR = "scalar"
    CDATA = "cdata"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    ACTORS = "actors"
    UNIQUEIDS = "uniqueids"
    RATINGS = "ratings"
    SET = "set"
    FANART = "fanart"


@dataclass(frozen=True)
class FieldSpec:
    """
    Mapping between one record attribute and its document element(s).

    Attributes:
        attribute: Field name on ``MovieNFO``
        elements: Element names read on decode. The first one is the
            element written on encode.
        kind: Structural kind driving coercion in both directions
    """

    attribute: str
    elements: Tuple[str, ...]
    kind: FieldKind

    @property
    def element(self) -> str:
        """Element name written by the encoder."""
        return self.elements[0]


def _spec(
    attribute: str, kind: FieldKind = FieldKind.SCALAR, elements: Tuple[str, ...] = ()
) -> FieldSpec:
    return FieldSpec(attribute=attribute, elements=elements or (attribute,), kind=kind)


# Canonical output order, grouped by record section
FIELD_SPECS: Tuple[FieldSpec, ...] = (
    # Core info
    _spec("title"),
    _spec("originaltitle"),
    _spec("sorttitle"),
    _spec("tagline"),
    _spec("premiered"),
    _spec("releasedate"),
    _spec("release"),
    _spec("mpaa"),
    _spec("customrating"),
    # Plot
    _spec("plot", FieldKind.CDATA),
    _spec("outline", FieldKind.CDATA),
    _spec("originalplot", FieldKind.CDATA),
    # Cast
    _spec("actors", FieldKind.ACTORS, ("actor",)),
    _spec("year"),
    _spec("runtime"),
    # Collection / series
    _spec("set", FieldKind.SET),
    _spec("series"),
    # Production
    _spec("studios", FieldKind.SEQUENCE, ("studio",)),
    _spec("maker"),
    _spec("publisher"),
    _spec("label"),
    # Classification and credits
    _spec("tags", FieldKind.SEQUENCE, ("tag",)),
    _spec("genres", FieldKind.SEQUENCE, ("genre",)),
    _spec("countries", FieldKind.SEQUENCE, ("country",)),
    _spec("directors", FieldKind.SEQUENCE, ("director",)),
    _spec("writers", FieldKind.SEQUENCE, ("writer", "credits")),
    # Identifiers
    _spec("num"),
    _spec("javdbsearchid"),
    _spec("uniqueids", FieldKind.UNIQUEIDS, ("uniqueid",)),
    # Media
    _spec("poster"),
    _spec("cover"),
    _spec("trailer"),
    _spec("thumb"),
    _spec("fanart", FieldKind.FANART),
    # Advanced
    _spec("lockdata", FieldKind.BOOLEAN),
    _spec("locktitle", FieldKind.BOOLEAN),
    _spec("watched", FieldKind.BOOLEAN),
    _spec("playcount"),
    _spec("dateadded"),
    _spec("lastplayed"),
    _spec("userrating"),
    _spec("criticrating"),
    _spec("ratings", FieldKind.RATINGS),
)


def is_always_array(element_name: str) -> bool:
    """Return True if ``element_name`` always decodes to a sequence."""
    return element_name in ALWAYS_ARRAY_FIELDS


def fields_of_kind(*kinds: FieldKind) -> Tuple[str, ...]:
    """Return record attribute names whose kind is one of ``kinds``, in canonical order."""
    return tuple(spec.attribute for spec in FIELD_SPECS if spec.kind in kinds)


# Optional string fields of MovieNFO (plain scalars, CDATA text and fanart)
STRING_FIELDS = fields_of_kind(FieldKind.SCALAR, FieldKind.CDATA, FieldKind.FANART)

BOOLEAN_FIELDS = fields_of_kind(FieldKind.BOOLEAN)

# Sequences of plain strings (editable with add_value/remove_value)
STRING_LIST_FIELDS = fields_of_kind(FieldKind.SEQUENCE)
