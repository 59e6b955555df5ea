"""Pydantic models for movie NFO data structures."""

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from .schema import STRING_FIELDS


def _empty_to_none(v: Any) -> Any:
    return None if v == "" else v


class Actor(BaseModel):
    """One <actor> entry."""

    name: str = Field(description="Actor name")
    role: Optional[str] = Field(default=None, description="Character played")
    type: Optional[str] = Field(default=None, description="Credit type (e.g. Actor, GuestStar)")
    thumb: Optional[str] = Field(default=None, description="Headshot image URL or path")
    profile: Optional[str] = Field(default=None, description="Profile page URL")
    tmdbid: Optional[str] = Field(default=None, description="TMDB person ID")
    order: Optional[int] = Field(default=None, description="Billing order")

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("role", "type", "thumb", "profile", "tmdbid", mode="before")
    @classmethod
    def normalize_empty(cls, v: Any) -> Any:
        """Treat empty strings as absent."""
        return _empty_to_none(v)


class UniqueId(BaseModel):
    """One <uniqueid> entry."""

    type: str = Field(default="custom", description="Provider of the identifier (imdb, tmdb, ...)")
    value: str = Field(description="Identifier value")
    default: bool = Field(default=False, description="Whether this is the preferred identifier")

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }


class RatingEntry(BaseModel):
    """One <rating> entry inside <ratings>."""

    name: str = Field(default="", description="Rating source name")
    value: str = Field(default="", description="Rating value, kept as written")
    votes: Optional[str] = Field(default=None, description="Vote count")
    default: bool = Field(default=False, description="Whether this is the preferred rating")

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("votes", mode="before")
    @classmethod
    def normalize_votes(cls, v: Any) -> Any:
        """Treat empty vote counts as absent."""
        return _empty_to_none(v)


class MovieSet(BaseModel):
    """Collection (<set>) a movie belongs to."""

    name: str = Field(description="Collection name")
    overview: Optional[str] = Field(default=None, description="Collection description")

    model_config = {
        "extra": "ignore",
        "frozen": True,
    }

    @field_validator("overview", mode="before")
    @classmethod
    def normalize_overview(cls, v: Any) -> Any:
        """Treat an empty overview as absent."""
        return _empty_to_none(v)


class MovieNFO(BaseModel):
    """Model for movie.nfo documents.

    Scalars are None when absent, booleans are tri-state (None, True,
    False) and sequences are empty lists when absent. Instances are
    immutable; use ``MovieNFOParser.update_field`` or ``model_copy`` to
    derive a changed record.
    """

    # Core info
    title: Optional[str] = Field(default=None, description="Movie title")
    originaltitle: Optional[str] = Field(default=None, description="Title in original language")
    sorttitle: Optional[str] = Field(default=None, description="Title used for sorting")
    year: Optional[str] = Field(default=None, description="Release year")
    premiered: Optional[str] = Field(default=None, description="Premiere date (YYYY-MM-DD)")
    releasedate: Optional[str] = Field(default=None, description="Release date")
    release: Optional[str] = Field(default=None, description="Release date (alternate element)")
    runtime: Optional[str] = Field(default=None, description="Runtime in minutes")
    mpaa: Optional[str] = Field(default=None, description="Content rating")
    tagline: Optional[str] = Field(default=None, description="Short tagline")

    # Plot
    plot: Optional[str] = Field(default=None, description="Full plot")
    outline: Optional[str] = Field(default=None, description="Short plot outline")
    originalplot: Optional[str] = Field(default=None, description="Plot in original language")

    # Classification
    genres: List[str] = Field(default_factory=list, description="Genres")
    tags: List[str] = Field(default_factory=list, description="Tags")
    countries: List[str] = Field(default_factory=list, description="Production countries")

    # Credits
    directors: List[str] = Field(default_factory=list, description="Directors")
    writers: List[str] = Field(default_factory=list, description="Writers (writer and credits)")
    actors: List[Actor] = Field(default_factory=list, description="Cast")

    # Production
    studios: List[str] = Field(default_factory=list, description="Studios")
    maker: Optional[str] = Field(default=None, description="Maker")
    publisher: Optional[str] = Field(default=None, description="Publisher")
    label: Optional[str] = Field(default=None, description="Label")

    # Collection / series
    set: Optional[MovieSet] = Field(default=None, description="Collection")
    series: Optional[str] = Field(default=None, description="Series name")

    # Identifiers
    num: Optional[str] = Field(default=None, description="Product number")
    javdbsearchid: Optional[str] = Field(default=None, description="Search ID")
    uniqueids: List[UniqueId] = Field(default_factory=list, description="Provider identifiers")

    # Media
    poster: Optional[str] = Field(default=None, description="Poster image")
    cover: Optional[str] = Field(default=None, description="Cover image")
    fanart: Optional[str] = Field(default=None, description="Fanart image")
    thumb: Optional[str] = Field(default=None, description="Thumbnail image")
    trailer: Optional[str] = Field(default=None, description="Trailer URL")

    # Advanced
    lockdata: Optional[bool] = Field(default=None, description="Lock metadata against scrapers")
    locktitle: Optional[bool] = Field(default=None, description="Lock title against scrapers")
    watched: Optional[bool] = Field(default=None, description="Watched flag")
    playcount: Optional[str] = Field(default=None, description="Play count")
    dateadded: Optional[str] = Field(default=None, description="Date added to library")
    lastplayed: Optional[str] = Field(default=None, description="Last played date")
    userrating: Optional[str] = Field(default=None, description="User rating")
    criticrating: Optional[str] = Field(default=None, description="Critic rating")
    customrating: Optional[str] = Field(default=None, description="Custom rating")
    ratings: List[RatingEntry] = Field(default_factory=list, description="Rating block entries")

    model_config = {
        "extra": "ignore",  # Ignore unknown elements
        "frozen": True,  # Records change by replacement only
    }

    @field_validator(*STRING_FIELDS, mode="before")
    @classmethod
    def normalize_empty_strings(cls, v: Any) -> Any:
        """Treat empty strings as absent."""
        return _empty_to_none(v)

    @field_validator("set")
    @classmethod
    def drop_unnamed_set(cls, v: Optional[MovieSet]) -> Optional[MovieSet]:
        """A collection without a name is treated as absent."""
        if v is not None and not v.name:
            return None
        return v
