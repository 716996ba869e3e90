"""Tests for writing a SectionMap back to text."""

from io import StringIO

from pygini import Key, ParseOptions, SectionMap, dumps, parse_text
from pygini.parser import write_stream

DEFAULTS = ParseOptions()


def reparse(text: str, options: ParseOptions = DEFAULTS) -> SectionMap:
    ret = SectionMap()
    parse_text(text, ret, options)
    return ret


def test_default_section_first_then_sorted_sections() -> None:
    """Test layout: default pairs, then named sections sorted."""
    sections = reparse("b = 2\na = 1\n[zeta]\nz = 26\n[alpha]\nx = 1\n")
    assert dumps(sections, DEFAULTS) == (
        "b = 2\n"
        "a = 1\n"
        "\n"
        "[alpha]\n"
        "x = 1\n"
        "\n"
        "[zeta]\n"
        "z = 26\n"
    )


def test_only_default_section_has_no_header() -> None:
    """Test no blank leading line and no header for header-less files."""
    text = dumps(reparse("a = 1\nb = 2\n"), DEFAULTS)
    assert text == "a = 1\nb = 2\n"
    assert not text.startswith("\n")
    assert "[" not in text


def test_no_leading_blank_line_without_default_pairs() -> None:
    """Test the first named section is not preceded by a blank line."""
    assert dumps(reparse("[s]\nk = v\n"), DEFAULTS) == "[s]\nk = v\n"


def test_empty_section_keeps_header() -> None:
    """Test a section without pairs is still written."""
    sections = SectionMap()
    sections.open_section("empty")
    assert dumps(sections, DEFAULTS) == "[empty]\n"


def test_empty_map_writes_nothing() -> None:
    """Test an empty map serializes to an empty string."""
    assert dumps(SectionMap(), DEFAULTS) == ""


def test_custom_separators_written() -> None:
    """Test the configured separators are used on output."""
    options = ParseOptions(line_sep="\r\n", kv_sep=":")
    sections = SectionMap()
    sections.header.add("a", "1")
    sections["s"] = [Key("b", "2")]
    assert dumps(sections, options) == "a : 1\r\n\r\n[s]\r\nb : 2\r\n"


def test_write_stream_into_text_buffer() -> None:
    """Test write_stream() writes to any text stream."""
    buf = StringIO()
    write_stream(reparse("k = v\n"), buf, DEFAULTS)
    assert buf.getvalue() == "k = v\n"


def test_round_trip_keeps_content() -> None:
    """Test parse -> dump -> parse reproduces every section's pairs."""
    source = (
        "; comment\n"
        "name = demo\n"
        "empty =\n"
        "url = http://host/?a=b\n"
        "[net]\n"
        "host = \"127.0.0.1\"\n"
        "port = 80\n"
        "[Misc]\n"
        "flag = on\n"
        "quoted = \"'nested'\"\n"
        "odd = 'x\"\n"
        "tail = a\"\"\n"
    )
    first = reparse(source)
    second = reparse(dumps(first, DEFAULTS))
    assert second.to_dict() == first.to_dict()
    assert second.to_dict() == {
        "": {"name": "demo", "empty": "", "url": "http://host/?a=b"},
        "net": {"host": "127.0.0.1", "port": "80"},
        "Misc": {
            "flag": "on", "quoted": "'nested'", "odd": "x", "tail": "a\"",
        },
    }


def test_round_trip_custom_separators() -> None:
    """Test the round trip also holds with non-default separators."""
    options = ParseOptions(line_sep="|", kv_sep="->")
    first = reparse("a -> 1|[s]|b->2|", options)
    second = reparse(dumps(first, options), options)
    assert second.to_dict() == {"": {"a": "1"}, "s": {"b": "2"}}


def test_values_with_edge_quotes_wrapped() -> None:
    """Test a value starting or ending with a quote gets one more layer."""
    sections = SectionMap()
    sections.header.add("c", "'nested'")
    sections.header.add("d", "plain")
    assert dumps(sections, DEFAULTS) == "c = \"'nested'\"\nd = plain\n"


def test_values_not_wrapped_without_trimming() -> None:
    """Test nothing is added when the reader keeps quotes anyway."""
    options = ParseOptions(trim_quotes=False)
    sections = SectionMap()
    sections.header.add("c", "'nested'")
    assert dumps(sections, options) == "c = 'nested'\n"
