"""Unit tests for movie NFO decoding."""

import pytest
from pydantic import ValidationError

from nfoedit.parsers import (
    Actor,
    MovieNFO,
    MovieSet,
    UniqueId,
    empty_nfo,
    parse_nfo,
)


def _movie(body: str) -> str:
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<movie>{body}</movie>'


class TestMovieNFO:
    """Tests for MovieNFO model."""

    def test_default_values(self):
        """Test default values for all fields."""
        nfo = MovieNFO()
        assert nfo.title is None
        assert nfo.watched is None
        assert nfo.set is None
        assert nfo.genres == []
        assert nfo.actors == []
        assert nfo.ratings == []

    def test_empty_nfo(self):
        """Test empty_nfo returns an all-absent record."""
        assert empty_nfo() == MovieNFO()

    def test_empty_strings_are_absent(self):
        """Test empty scalar strings normalize to None."""
        nfo = MovieNFO(title="", plot="", fanart="")
        assert nfo.title is None
        assert nfo.plot is None
        assert nfo.fanart is None

    def test_ignores_unknown_fields(self):
        """Test that unknown fields are ignored."""
        nfo = MovieNFO(title="Heat", unknown_field="value")
        assert nfo.title == "Heat"
        assert not hasattr(nfo, "unknown_field")

    def test_records_are_immutable(self):
        """Test that records cannot be mutated in place."""
        nfo = MovieNFO(title="Heat")
        with pytest.raises(ValidationError):
            nfo.title = "Ronin"

    def test_unnamed_set_is_absent(self):
        """Test a set without a name is dropped."""
        assert MovieNFO(set=MovieSet(name="")).set is None

    def test_uniqueid_defaults(self):
        """Test UniqueId defaults."""
        uid = UniqueId(value="tt1")
        assert uid.type == "custom"
        assert uid.default is False


class TestParseSample:
    """Tests decoding the sample fixture document."""

    @pytest.fixture
    def nfo(self, parser, sample_nfo_xml):
        """Decoded sample document."""
        return parser.parse_string(sample_nfo_xml)

    def test_scalars(self, nfo):
        """Test scalar fields."""
        assert nfo.title == "The Grand Heist"
        assert nfo.originaltitle == "Le Grand Casse"
        assert nfo.sorttitle == "Grand Heist, The"
        assert nfo.year == "2019"
        assert nfo.runtime == "124"
        assert nfo.poster == "poster.jpg"
        assert nfo.playcount == "0"

    def test_cdata_plot(self, nfo):
        """Test CDATA plot keeps its line breaks."""
        assert nfo.plot == (
            "A retired safecracker is pulled back for one last job.\n"
            "The vault is older than the bank around it."
        )
        assert nfo.outline == "One last job."

    def test_sequences(self, nfo):
        """Test repeated elements decode in document order."""
        assert len(nfo.genres) == 6
        assert len(nfo.tags) == 6
        assert nfo.genres[0] == "Crime"
        assert nfo.tags[-1] == "rain"
        assert nfo.countries == ["France"]
        assert nfo.studios == ["Lumen Pictures", "Nord Films"]
        assert nfo.directors == ["Claire Martin"]

    def test_writers_include_credits(self, nfo):
        """Test writers come from writer and credits elements."""
        assert nfo.writers == ["Claire Martin", "Paul Girard"]

    def test_actors(self, nfo):
        """Test actors decode and blank names are dropped."""
        assert len(nfo.actors) == 2
        assert nfo.actors[0] == Actor(
            name="Jean Dupont",
            role="Victor",
            order=0,
            thumb="https://example.org/jean.jpg",
        )
        assert nfo.actors[1].name == "Marie Leclerc"
        assert nfo.actors[1].order == 1
        assert nfo.actors[1].thumb is None

    def test_set(self, nfo):
        """Test compound set."""
        assert nfo.set == MovieSet(
            name="Heist Collection",
            overview="Films about improbable robberies.",
        )

    def test_uniqueids(self, nfo):
        """Test unique IDs with attributes."""
        assert nfo.uniqueids == [
            UniqueId(type="imdb", value="tt1234567", default=True),
            UniqueId(type="tmdb", value="98765", default=False),
        ]

    def test_ratings(self, nfo):
        """Test ratings block."""
        assert len(nfo.ratings) == 2
        assert nfo.ratings[0].name == "imdb"
        assert nfo.ratings[0].value == "7.4"
        assert nfo.ratings[0].votes == "15230"
        assert nfo.ratings[0].default is True
        assert nfo.ratings[1].votes is None
        assert nfo.ratings[1].default is False

    def test_fanart_nested_thumb(self, nfo):
        """Test fanart decodes from the nested thumb."""
        assert nfo.fanart == "https://example.org/fanart.jpg"

    def test_booleans(self, nfo):
        """Test tri-state booleans."""
        assert nfo.watched is False
        assert nfo.lockdata is True
        assert nfo.locktitle is None

    def test_parse_file(self, parser, sample_nfo_path):
        """Test parsing from file."""
        nfo = parser.parse_file(sample_nfo_path)
        assert nfo.title == "The Grand Heist"


class TestParseEdgeCases:
    """Tests for tolerant decoding."""

    @pytest.mark.parametrize(
        "xml",
        [
            "",
            "not xml at all",
            "<movie><title>Unclosed</movie>",
            '<?xml version="1.0"?><tvshow><title>Wrong root</title></tvshow>',
        ],
    )
    def test_invalid_documents_decode_empty(self, xml):
        """Test malformed input yields an empty record instead of raising."""
        assert parse_nfo(xml) == MovieNFO()

    def test_empty_root(self):
        """Test empty movie element."""
        assert parse_nfo("<movie></movie>") == MovieNFO()
        assert parse_nfo("<movie/>") == MovieNFO()

    def test_single_sequence_entries_are_lists(self):
        """Test single occurrences of always-array elements decode to lists."""
        nfo = parse_nfo(
            _movie(
                "<genre>Drama</genre><tag>noir</tag><studio>A24</studio>"
                "<director>D</director><country>Japan</country>"
                "<actor><name>Solo</name></actor>"
                '<uniqueid type="imdb">tt1</uniqueid>'
            )
        )
        assert nfo.genres == ["Drama"]
        assert nfo.tags == ["noir"]
        assert nfo.studios == ["A24"]
        assert nfo.directors == ["D"]
        assert nfo.countries == ["Japan"]
        assert [a.name for a in nfo.actors] == ["Solo"]
        assert len(nfo.uniqueids) == 1

    def test_blank_sequence_entries_dropped(self):
        """Test empty sequence entries are filtered."""
        nfo = parse_nfo(_movie("<genre></genre><genre> </genre><genre>Drama</genre>"))
        assert nfo.genres == ["Drama"]

    def test_empty_scalars_are_absent(self):
        """Test empty scalar elements decode as absent."""
        nfo = parse_nfo(_movie("<title></title><plot><![CDATA[]]></plot><year/>"))
        assert nfo.title is None
        assert nfo.plot is None
        assert nfo.year is None

    def test_scalar_whitespace_preserved(self):
        """Test scalar text is not trimmed."""
        nfo = parse_nfo(_movie("<title> Heat </title>"))
        assert nfo.title == " Heat "

    def test_repeated_scalar_first_wins(self):
        """Test the first occurrence of a repeated scalar is used."""
        nfo = parse_nfo(_movie("<title>First</title><title>Second</title>"))
        assert nfo.title == "First"

    def test_writers_interleaved(self):
        """Test writer and credits keep document order."""
        nfo = parse_nfo(_movie("<credits>B</credits><writer>A</writer><credits>C</credits>"))
        assert nfo.writers == ["B", "A", "C"]

    def test_actor_without_name_dropped(self):
        """Test actors without a name are skipped."""
        nfo = parse_nfo(
            _movie("<actor><role>Nobody</role></actor><actor><name>Somebody</name></actor>")
        )
        assert [a.name for a in nfo.actors] == ["Somebody"]

    def test_text_actor_dropped(self):
        """Test an actor element without children is skipped."""
        nfo = parse_nfo(_movie("<actor>Just Text</actor>"))
        assert nfo.actors == []

    def test_actor_invalid_order(self):
        """Test a non-numeric actor order becomes absent."""
        nfo = parse_nfo(_movie("<actor><name>A</name><order>first</order></actor>"))
        assert nfo.actors[0].order is None

    def test_uniqueid_without_attributes(self):
        """Test a bare uniqueid keeps its value with the custom type."""
        nfo = parse_nfo(_movie("<uniqueid>abc</uniqueid>"))
        assert nfo.uniqueids == [UniqueId(type="custom", value="abc", default=False)]

    def test_uniqueid_empty_type(self):
        """Test an empty type attribute falls back to custom."""
        nfo = parse_nfo(_movie('<uniqueid type="">abc</uniqueid>'))
        assert nfo.uniqueids[0].type == "custom"

    def test_uniqueid_default_literal(self):
        """Test only the literal 'true' marks a default unique ID."""
        nfo = parse_nfo(
            _movie(
                '<uniqueid type="a" default="TRUE">1</uniqueid>'
                '<uniqueid type="b" default="1">2</uniqueid>'
                '<uniqueid type="c" default="true">3</uniqueid>'
            )
        )
        assert [u.default for u in nfo.uniqueids] == [False, False, True]

    def test_uniqueid_empty_value_dropped(self):
        """Test unique IDs without a value are skipped."""
        nfo = parse_nfo(_movie('<uniqueid type="imdb"></uniqueid>'))
        assert nfo.uniqueids == []

    def test_uniqueid_cdata_value(self):
        """Test a CDATA unique ID value."""
        nfo = parse_nfo(_movie('<uniqueid type="tmdb"><![CDATA[603]]></uniqueid>'))
        assert nfo.uniqueids[0].value == "603"

    def test_duplicate_defaults_tolerated(self):
        """Test several default unique IDs are decoded as-is."""
        nfo = parse_nfo(
            _movie(
                '<uniqueid type="a" default="true">1</uniqueid>'
                '<uniqueid type="b" default="true">2</uniqueid>'
            )
        )
        assert all(u.default for u in nfo.uniqueids)

    def test_single_rating(self):
        """Test a single rating decodes as a one-element list."""
        nfo = parse_nfo(_movie('<ratings><rating name="imdb"><value>8.0</value></rating></ratings>'))
        assert len(nfo.ratings) == 1
        assert nfo.ratings[0].value == "8.0"

    def test_rating_without_children(self):
        """Test a rating without value children keeps empty value."""
        nfo = parse_nfo(_movie('<ratings><rating name="x"/></ratings>'))
        assert nfo.ratings[0].name == "x"
        assert nfo.ratings[0].value == ""

    def test_set_text_shorthand(self):
        """Test a bare-text set becomes a name-only set."""
        nfo = parse_nfo(_movie("<set>Bourne</set>"))
        assert nfo.set == MovieSet(name="Bourne")

    def test_set_empty_name(self):
        """Test a set with an empty name is absent."""
        nfo = parse_nfo(_movie("<set><name></name><overview>x</overview></set>"))
        assert nfo.set is None

    def test_fanart_plain_text(self):
        """Test fanart given as plain text."""
        nfo = parse_nfo(_movie("<fanart>https://example.org/f.jpg</fanart>"))
        assert nfo.fanart == "https://example.org/f.jpg"

    def test_fanart_nested_cdata(self):
        """Test fanart nested thumb given as CDATA."""
        nfo = parse_nfo(_movie("<fanart><thumb><![CDATA[f.jpg]]></thumb></fanart>"))
        assert nfo.fanart == "f.jpg"

    def test_boolean_variants(self):
        """Test boolean spellings."""
        nfo = parse_nfo(_movie("<watched>1</watched><lockdata>TRUE</lockdata><locktitle>no</locktitle>"))
        assert nfo.watched is True
        assert nfo.lockdata is True
        assert nfo.locktitle is False

    def test_empty_boolean_is_absent(self):
        """Test an empty boolean element decodes as None."""
        nfo = parse_nfo(_movie("<watched></watched>"))
        assert nfo.watched is None

    def test_byte_order_mark(self, parser, tmp_path):
        """Test files starting with a UTF-8 BOM parse."""
        nfo_file = tmp_path / "movie.nfo"
        nfo_file.write_bytes("\ufeff<movie><title>BOM</title></movie>".encode("utf-8"))
        assert parser.parse_file(nfo_file).title == "BOM"

    def test_parse_file_missing(self, parser, tmp_path):
        """Test parsing a missing file raises."""
        with pytest.raises(FileNotFoundError):
            parser.parse_file(tmp_path / "missing.nfo")


class TestUpdateField:
    """Tests for field replacement."""

    def test_update_field(self, parser):
        """Test field update returns a new record."""
        nfo = MovieNFO(title="Original")
        updated = parser.update_field(nfo, "title", "Updated")

        assert updated.title == "Updated"
        assert nfo.title == "Original"  # Original unchanged

    def test_update_to_empty_clears(self, parser):
        """Test setting an empty string clears a scalar."""
        updated = parser.update_field(MovieNFO(title="Heat"), "title", "")
        assert updated.title is None

    def test_update_unknown_field(self, parser):
        """Test unknown fields are rejected."""
        with pytest.raises(ValueError):
            parser.update_field(MovieNFO(), "not_a_field", "x")

    def test_update_invalid_value(self, parser):
        """Test updates are validated."""
        with pytest.raises(ValidationError):
            parser.update_field(MovieNFO(), "genres", "not-a-list")
