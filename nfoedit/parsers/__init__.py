"""NFO document parsers for movie metadata."""

from .models import Actor, MovieNFO, MovieSet, RatingEntry, UniqueId
from .movie_parser import MovieNFOParser, empty_nfo, parse_nfo, serialize_nfo
from .nfo_parser import NFOParser
from .schema import ALWAYS_ARRAY_FIELDS, FIELD_SPECS, FieldKind, FieldSpec, is_always_array

__all__ = [
    "Actor",
    "MovieNFO",
    "MovieSet",
    "RatingEntry",
    "UniqueId",
    "NFOParser",
    "MovieNFOParser",
    "parse_nfo",
    "serialize_nfo",
    "empty_nfo",
    "ALWAYS_ARRAY_FIELDS",
    "FIELD_SPECS",
    "FieldKind",
    "FieldSpec",
    "is_always_array",
]
