"""Tests for the Node tree model."""

import copy

import pytest

from bare_xml.shared.errors import InvalidNameError
from bare_xml.tree import DocumentRoot, Node, TextRun, is_valid_name


def build_sample() -> Node:
    """Build <root name="Bob" soil="moist">I was'a growin'<b>deep</b></root>."""
    root = Node("root")
    root.set_attribute("name", "Bob")
    root.set_attribute("soil", "moist")
    root.add_text("I was'a growin'")
    bold = root.add_child(Node("b"))
    bold.add_text("deep")
    return root


class TestNames:
    """Test tag and attribute name validation."""

    @pytest.mark.parametrize("name", ["ok-name", "a1", "font", "x:y", "_a.b"])
    def test_valid_names(self, name: str) -> None:
        """Test names without whitespace or escape characters are accepted."""
        assert Node(name).name == name
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", [
        "bad name", "a<b", "a>b", "a'b", 'a"b', "a&b", "a/b", "tab\tname", "",
    ])
    def test_invalid_names(self, name: str) -> None:
        """Test names with whitespace, escape characters or no characters fail."""
        with pytest.raises(InvalidNameError):
            Node(name)
        assert not is_valid_name(name)

    def test_invalid_name_error_details(self) -> None:
        """Test the error carries the offending name and its kind."""
        with pytest.raises(InvalidNameError) as excinfo:
            Node("bad name")
        assert excinfo.value.name == "bad name"
        assert excinfo.value.kind == "tag"
        assert isinstance(excinfo.value, ValueError)

    def test_rename_validates(self) -> None:
        """Test renaming an element checks the new name."""
        node = Node("a")
        node.name = "b"
        assert node.name == "b"

        with pytest.raises(InvalidNameError):
            node.name = "c d"
        assert node.name == "b"

    def test_invalid_attribute_name(self) -> None:
        """Test set_attribute rejects invalid names."""
        node = Node("a")
        with pytest.raises(InvalidNameError) as excinfo:
            node.set_attribute("x y", "1")
        assert excinfo.value.kind == "attribute"
        assert node.attribute_names() == []


class TestAttributes:
    """Test the attribute accessors."""

    def test_set_and_get(self) -> None:
        """Test attributes can be created, read and replaced."""
        node = Node("font")
        node.set_attribute("face", "serif")
        assert node.get_attribute("face") == "serif"

        node.set_attribute("face", "sans")
        assert node.get_attribute("face") == "sans"
        assert node.attribute_names() == ["face"]

    def test_missing_attribute(self) -> None:
        """Test a missing attribute returns the default."""
        node = Node("a")
        assert node.get_attribute("nope") is None
        assert node.get_attribute("nope", "fallback") == "fallback"
        assert not node.has_attribute("nope")

    def test_valueless_attribute(self) -> None:
        """Test an attribute without a value is present but has no value."""
        node = Node("input")
        node.set_attribute("disabled")
        assert node.has_attribute("disabled")
        assert node.get_attribute("disabled") is None
        assert node.attributes == {"disabled": None}

    def test_value_must_be_string(self) -> None:
        """Test non-string values are rejected."""
        with pytest.raises(TypeError):
            Node("a").set_attribute("n", 1)  # type: ignore[arg-type]

    def test_remove_and_clear(self) -> None:
        """Test removing one or all attributes."""
        node = build_sample()
        node.remove_attribute("name")
        node.remove_attribute("missing")
        assert node.attribute_names() == ["soil"]

        node.clear_attributes()
        assert node.attributes == {}

    def test_attributes_property_is_a_copy(self) -> None:
        """Test mutating the snapshot does not change the element."""
        node = build_sample()
        snapshot = node.attributes
        snapshot["name"] = "Alice"
        assert node.get_attribute("name") == "Bob"


class TestContent:
    """Test content item accessors and mutators."""

    def test_mixed_content_order(self) -> None:
        """Test text and elements are kept in the order they were added."""
        node = Node("font")
        node.add_text("Greetings ")
        bold = node.add_child(Node("b"))
        node.add_text("!")

        assert node.count_children() == 3
        assert node.get_child(0) == TextRun("Greetings ")
        assert node.get_child(1) is bold
        assert node.children() == [TextRun("Greetings "), bold, TextRun("!")]
        assert node.text_children() == ["Greetings ", "!"]
        assert node.element_children() == [bold]

    def test_filtered_lists_are_shallow(self) -> None:
        """Test text_children and element_children only look at direct content."""
        root = build_sample()
        assert root.text_children() == ["I was'a growin'"]
        assert [e.name for e in root.element_children()] == ["b"]

    def test_get_child_out_of_range(self) -> None:
        """Test asking for a missing index raises IndexError."""
        with pytest.raises(IndexError):
            Node("a").get_child(0)

    def test_empty(self) -> None:
        """Test an element without content is empty."""
        node = Node("br")
        assert node.is_empty()
        node.add_text("x")
        assert not node.is_empty()

    def test_add_child_type_checks(self) -> None:
        """Test only nodes can be added as element children."""
        node = Node("a")
        with pytest.raises(TypeError, match="Child must be a Node instance"):
            node.add_child("text")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            node.add_text(None)  # type: ignore[arg-type]

    def test_cannot_contain_itself(self) -> None:
        """Test an element cannot be appended to itself."""
        node = Node("a")
        with pytest.raises(ValueError):
            node.add_child(node)

    def test_cannot_nest_document_root(self) -> None:
        """Test a document root cannot become an element child."""
        with pytest.raises(TypeError):
            Node("a").add_child(DocumentRoot())

    def test_insert_child(self) -> None:
        """Test inserting text and elements at a position."""
        node = Node("a")
        node.add_text("end")
        node.insert_child(0, "start")
        middle = node.insert_child(1, Node("m"))

        assert node.children() == [TextRun("start"), middle, TextRun("end")]
        with pytest.raises(IndexError):
            node.insert_child(5, "x")

    def test_remove_child_at(self) -> None:
        """Test removing by index returns the removed item."""
        node = build_sample()
        removed = node.remove_child_at(0)
        assert removed == TextRun("I was'a growin'")
        assert node.count_children() == 1

    def test_remove_child_by_identity(self) -> None:
        """Test elements and text runs are removed by identity."""
        node = Node("a")
        first = node.add_text("same")
        second = node.add_text("same")
        child = node.add_child(Node("b"))

        assert node.remove_child(second) is True
        assert node.get_child(0) is first
        assert node.remove_child(child) is True
        assert node.remove_child(Node("b")) is False
        assert node.children() == [TextRun("same")]

    def test_remove_child_by_text(self) -> None:
        """Test a plain string removes the first run with that text."""
        node = Node("a")
        node.add_text("x")
        node.add_text("y")
        assert node.remove_child("y") is True
        assert node.remove_child("z") is False
        assert node.text_children() == ["x"]

    def test_contains_and_clear(self) -> None:
        """Test membership checks and clearing content."""
        node = build_sample()
        bold = node.element_children()[0]
        assert node.contains_child(bold)
        assert node.contains_child("I was'a growin'")
        assert not node.contains_child(Node("b"))

        node.clear_children()
        assert node.is_empty()


class TestSearch:
    """Test recursive search and text extraction."""

    def test_find_all_document_order(self) -> None:
        """Test matches are returned in document order across the subtree."""
        root = Node("root")
        outer = root.add_child(Node("a"))
        middle = outer.add_child(Node("b"))
        inner = middle.add_child(Node("a"))
        last = root.add_child(Node("a"))

        assert root.find_all("a") == [outer, inner, last]
        assert [id(e) for e in root.find_all("a")] == [id(outer), id(inner), id(last)]
        assert root.find("b") is middle
        assert root.find("missing") is None

    def test_find_all_case_sensitivity(self) -> None:
        """Test case-insensitive search matches both spellings."""
        root = Node("root")
        upper = root.add_child(Node("A"))
        lower = root.add_child(Node("a"))

        insensitive = root.find_all("a", case_sensitive=False)
        assert len(insensitive) == 2
        assert insensitive[0] is upper and insensitive[1] is lower

        sensitive = root.find_all("a")
        assert len(sensitive) == 1 and sensitive[0] is lower
        assert root.find("A", case_sensitive=False) is upper

    def test_find_all_excludes_self(self) -> None:
        """Test the element searched from is not part of its own results."""
        node = Node("a")
        assert node.find_all("a") == []

    def test_iter_elements(self) -> None:
        """Test descendants are visited depth first."""
        root = Node("r")
        a = root.add_child(Node("a"))
        a.add_child(Node("a1"))
        root.add_child(Node("b"))
        assert [e.name for e in root.iter_elements()] == ["a", "a1", "b"]

    def test_all_text(self) -> None:
        """Test text from every level is concatenated depth first."""
        root = build_sample()
        assert root.all_text() == "I was'a growin'deep"
        assert Node("empty").all_text() == ""


class TestCopyAndEquality:
    """Test deep copies and structural equality."""

    def test_clone_is_equal_but_independent(self) -> None:
        """Test mutating a clone never affects the original."""
        original = build_sample()
        clone = original.clone()

        assert clone == original
        assert clone is not original

        clone.set_attribute("name", "Alice")
        clone.element_children()[0].set_attribute("style", "x")
        clone.element_children()[0].add_text("er")
        clone.add_child(Node("extra"))

        assert original.get_attribute("name") == "Bob"
        assert original.element_children()[0].attributes == {}
        assert original.element_children()[0].text_children() == ["deep"]
        assert original.count_children() == 2

    def test_copy_module_makes_deep_copies(self) -> None:
        """Test copy.copy and copy.deepcopy both give independent trees."""
        original = build_sample()
        for duplicate in (copy.copy(original), copy.deepcopy(original)):
            assert duplicate == original
            assert duplicate.element_children()[0] is not original.element_children()[0]

    def test_clone_of_document_root(self) -> None:
        """Test cloning keeps the subclass."""
        root = DocumentRoot()
        root.add_child(Node("a"))
        assert isinstance(root.clone(), DocumentRoot)

    def test_equality(self) -> None:
        """Test equality compares name, attributes and content."""
        assert Node("a") == Node("a")
        assert Node("a") != Node("b")

        left, right = Node("a"), Node("a")
        left.set_attribute("x", "1")
        left.set_attribute("y")
        right.set_attribute("y")
        right.set_attribute("x", "1")
        assert left == right

        right.add_text("t")
        assert left != right
        assert Node("a") != "a"

    def test_nodes_are_unhashable(self) -> None:
        """Test mutable nodes cannot be used as dictionary keys."""
        with pytest.raises(TypeError):
            hash(Node("a"))


class TestConversion:
    """Test conversion helpers."""

    def test_to_dict(self) -> None:
        """Test conversion to plain data."""
        assert build_sample().to_dict() == {
            "name": "root",
            "attributes": {"name": "Bob", "soil": "moist"},
            "content": [
                "I was'a growin'",
                {"name": "b", "attributes": {}, "content": ["deep"]},
            ],
        }

    def test_repr(self) -> None:
        """Test the debugging representation."""
        assert repr(build_sample()) == "Node('root', attributes=2, children=2)"

    def test_text_run_str(self) -> None:
        """Test a text run converts to its text."""
        assert str(TextRun("hi")) == "hi"
