"""Tests for the opening-tag scanner."""

import pytest

from bare_xml.shared.errors import InvalidNameError, MalformedXMLError
from bare_xml.tokenization import find_tag_end, parse_tag, split_tag_tokens


class TestSplitTagTokens:
    """Test quote-aware whitespace splitting."""

    def test_splits_on_whitespace(self) -> None:
        """Test unquoted tokens split on runs of whitespace."""
        assert split_tag_tokens("a  b\t\nc") == ["a", "b", "c"]

    def test_keeps_quoted_whitespace(self) -> None:
        """Test whitespace inside quotes does not split and quotes are dropped."""
        assert split_tag_tokens("a x=\"1 2\" y='3' z") == ["a", "x=1 2", "y=3", "z"]

    def test_other_quote_inside_span_is_kept(self) -> None:
        """Test a span opened by one quote character is only closed by the same one."""
        assert split_tag_tokens("a title=\"it's\"") == ["a", "title=it's"]

    def test_empty_quoted_value(self) -> None:
        """Test an empty quoted value still yields a token."""
        assert split_tag_tokens('a x=""') == ["a", "x="]

    def test_unterminated_quote_raises(self) -> None:
        """Test an unterminated quote is malformed."""
        with pytest.raises(MalformedXMLError, match="unterminated quote"):
            split_tag_tokens('a x="1')

    def test_blank_body(self) -> None:
        """Test a blank body has no tokens."""
        assert split_tag_tokens("   ") == []


class TestFindTagEnd:
    """Test locating the end of a tag."""

    def test_finds_first_unquoted_bracket(self) -> None:
        """Test a > inside quotes does not end the tag."""
        text = '<a title="1 > 0">body'
        assert find_tag_end(text, 0) == text.rindex(">")

    def test_missing_bracket(self) -> None:
        """Test -1 is returned for an unterminated tag."""
        assert find_tag_end("<a", 0) == -1
        assert find_tag_end('<a x=">', 0) == -1

    def test_respects_end_bound(self) -> None:
        """Test the search stops at the end index."""
        assert find_tag_end("<a>", 0, 2) == -1


class TestParseTag:
    """Test building bare elements from opening tags."""

    def test_attribute_forms(self) -> None:
        """Test quoted, single-quoted and valueless attributes, in order."""
        element = parse_tag("<a x=\"1 2\" y='3' z>")

        assert element.name == "a"
        assert element.attribute_names() == ["x", "y", "z"]
        assert element.get_attribute("x") == "1 2"
        assert element.get_attribute("y") == "3"
        assert element.has_attribute("z")
        assert element.attributes["z"] is None
        assert element.is_empty()

    def test_unquoted_value(self) -> None:
        """Test a value without quotes."""
        element = parse_tag("<font size=2>")
        assert element.get_attribute("size") == "2"

    def test_self_closing_tag(self) -> None:
        """Test the trailing slash is not part of the name or attributes."""
        assert parse_tag("<br/>").name == "br"
        element = parse_tag("<img src=a.png/>")
        assert element.name == "img"
        assert element.get_attribute("src") == "a.png"

    def test_value_splits_on_first_equals(self) -> None:
        """Test only the first = separates name from value."""
        element = parse_tag('<a expr="x=y"/>')
        assert element.get_attribute("expr") == "x=y"

    def test_empty_value_differs_from_no_value(self) -> None:
        """Test an empty string value is kept as an empty string."""
        element = parse_tag('<a x="" y>')
        assert element.attributes == {"x": "", "y": None}

    def test_values_are_unescaped(self) -> None:
        """Test entities in attribute values are unescaped."""
        element = parse_tag('<a title="Tom &amp; Jerry &quot;live&quot;">')
        assert element.get_attribute("title") == 'Tom & Jerry "live"'

    def test_collapses_repeated_whitespace(self) -> None:
        """Test many whitespace characters between attributes act as one."""
        element = parse_tag("<a    x=1 \n\t  y=2   >")
        assert element.attributes == {"x": "1", "y": "2"}

    def test_missing_name_raises(self) -> None:
        """Test a tag with no name is malformed."""
        with pytest.raises(MalformedXMLError, match="no name"):
            parse_tag("<>")
        with pytest.raises(MalformedXMLError):
            parse_tag("< />")

    def test_invalid_attribute_name_raises(self) -> None:
        """Test an attribute name with an escape character is rejected."""
        with pytest.raises(InvalidNameError) as excinfo:
            parse_tag('<a b&c="1">')
        assert excinfo.value.kind == "attribute"
        assert excinfo.value.name == "b&c"

    def test_empty_attribute_name_raises(self) -> None:
        """Test a token starting with = has no usable name."""
        with pytest.raises(InvalidNameError):
            parse_tag("<a =1>")
