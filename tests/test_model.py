"""Tests for Key, KeySlice and SectionMap."""

from pygini import Key, KeySlice, SectionMap


def test_key_slice_refuses_duplicates_and_empty_keys() -> None:
    """Test add() keeps keys unique and non-empty."""
    pairs = KeySlice()
    assert pairs.add("a", "1") is True
    assert pairs.add("a", "2") is False
    assert pairs.add("", "3") is False
    assert list(pairs) == [Key("a", "1")]


def test_key_slice_from_iterable_dedupes() -> None:
    """Test building from pairs applies first-occurrence-wins."""
    pairs = KeySlice([Key("a", "1"), Key("b", "2"), Key("a", "3")])
    assert pairs == [Key("a", "1"), Key("b", "2")]
    assert pairs[1] == Key("b", "2")
    assert pairs.get("missing") == ""
    assert pairs.has("b")


def test_key_dict_form() -> None:
    """Test keys convert to and from the {"k", "v"} form."""
    key = Key("host", "db")
    assert key.to_dict() == {"k": "host", "v": "db"}
    assert Key.from_dict({"k": "port", "v": 5432}) == Key("port", "5432")


def test_section_map_has_default_section() -> None:
    """Test a new map already holds an empty default section."""
    sections = SectionMap()
    assert list(sections) == [""]
    assert len(sections.header) == 0


def test_deleting_default_section_empties_it() -> None:
    """Test the default section can be cleared but never removed."""
    sections = SectionMap()
    sections.header.add("a", "1")
    del sections[""]
    assert "" in sections
    assert len(sections.header) == 0


def test_open_section_drops_previous_content() -> None:
    """Test open_section() starts a section over."""
    sections = SectionMap()
    sections.open_section("s").add("a", "1")
    sections.open_section("s").add("b", "2")
    assert sections["s"].to_dict() == {"b": "2"}


def test_lookup_and_existence() -> None:
    """Test lookup() returns '' for absent data, has_key() tells apart."""
    sections = SectionMap()
    sections["s"] = [Key("empty", ""), Key("k", "v")]
    assert sections.lookup("s", "k") == "v"
    assert sections.lookup("s", "empty") == ""
    assert sections.lookup("s", "absent") == ""
    assert sections.lookup("nope", "k") == ""
    assert sections.has_key("s", "empty")
    assert not sections.has_key("s", "absent")
    assert not sections.has_key("nope", "k")


def test_section_names_sorted_without_default() -> None:
    """Test section_names() is sorted and skips the default section."""
    sections = SectionMap()
    for name in ("b", "A", "a", "_x"):
        sections.open_section(name)
    assert sections.section_names() == ["A", "_x", "a", "b"]


def test_keys_of_absent_section_is_empty() -> None:
    """Test keys_of() gives an empty KeySlice for unknown sections."""
    assert len(SectionMap().keys_of("nope")) == 0
