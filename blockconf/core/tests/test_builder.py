"""Unit tests for blockconf.core.builder module."""

from unittest.mock import Mock

import pytest

from blockconf.core.builder import CompletedBlock, TreeBuilder
from blockconf.core.errors import StructuralParsingError
from blockconf.plugins.base import ConfigurationPlugin


@pytest.fixture
def plugin() -> Mock:
    """Create a mock plugin binding."""
    return Mock(spec=ConfigurationPlugin)


class TestTreeBuilderState:
    """Tests for the idle and building states."""

    def test_new_builder_is_idle(self) -> None:
        """Test that a fresh builder has an empty stack."""
        builder = TreeBuilder()

        assert builder.is_idle
        assert builder.depth == 0

    def test_open_element_moves_to_building(self, plugin: Mock) -> None:
        """Test that pushing a node leaves the idle state."""
        # Arrange
        builder = TreeBuilder()

        # Act
        builder.open_element("configuration", (("id", "a"),), plugin)
        builder.open_element("value")

        # Assert
        assert not builder.is_idle
        assert builder.depth == 2

    def test_append_text_while_idle_is_ignored(self) -> None:
        """Test that stray text outside any element is dropped."""
        # Arrange
        builder = TreeBuilder()

        # Act
        builder.append_text("stray")

        # Assert
        assert builder.is_idle


class TestTreeBuilderAssembly:
    """Tests for assembling configuration blocks."""

    def test_close_configuration_returns_completed_block(self, plugin: Mock) -> None:
        """Test that closing a bound frame completes the block."""
        # Arrange
        builder = TreeBuilder()
        builder.open_element("configuration", (("id", "k"),), plugin)
        builder.open_element("value")
        builder.append_text("1")
        assert builder.close_element("value") is None

        # Act
        completed = builder.close_element("configuration")

        # Assert
        assert isinstance(completed, CompletedBlock)
        assert completed.plugin is plugin
        assert completed.node.get_attribute("id") == "k"
        assert completed.node.child_text("value") == "1"
        assert completed.node.frozen
        assert builder.is_idle

    def test_text_goes_to_top_node_only(self, plugin: Mock) -> None:
        """Test that text is routed to the innermost open element."""
        # Arrange
        builder = TreeBuilder()
        builder.open_element("configuration", (), plugin)
        builder.append_text("outer-")
        builder.open_element("inner")
        builder.append_text("foo")
        builder.append_text("bar")
        builder.close_element("inner")
        builder.append_text("tail")

        # Act
        completed = builder.close_element("configuration")

        # Assert
        assert completed is not None
        assert completed.node.text == "outer-tail"
        assert completed.node.child_text("inner") == "foobar"

    def test_duplicate_attributes_keep_last_value(self, plugin: Mock) -> None:
        """Test that the last declared attribute value wins."""
        # Arrange
        builder = TreeBuilder()
        builder.open_element("configuration", (), plugin)

        # Act
        node = builder.open_element("server", (("port", "1"), ("port", "2")))

        # Assert
        assert node.get_attribute("port") == "2"

    def test_nested_configuration_is_not_attached_to_parent(self, plugin: Mock) -> None:
        """Test that an inner block completes on its own."""
        # Arrange
        builder = TreeBuilder()
        inner_plugin = Mock(spec=ConfigurationPlugin)
        builder.open_element("configuration", (("id", "outer"),), plugin)
        builder.open_element("configuration", (("id", "inner"),), inner_plugin)

        # Act
        inner = builder.close_element("configuration")
        outer = builder.close_element("configuration")

        # Assert
        assert inner is not None and inner.plugin is inner_plugin
        assert outer is not None and outer.plugin is plugin
        assert outer.node.children == ()


class TestTreeBuilderStructuralErrors:
    """Tests for malformed nesting."""

    def test_close_with_empty_stack_raises(self) -> None:
        """Test that an end event with nothing open is rejected."""
        builder = TreeBuilder()

        with pytest.raises(StructuralParsingError, match="no matching open element"):
            builder.close_element("orphan")

    def test_close_plain_element_without_parent_raises(self) -> None:
        """Test that a plain element closed at the bottom of the stack is rejected."""
        # Arrange
        builder = TreeBuilder()
        builder.open_element("stray")

        # Act & Assert
        with pytest.raises(StructuralParsingError, match="no enclosing parent"):
            builder.close_element("stray")

    def test_close_mismatched_tag_raises(self, plugin: Mock) -> None:
        """Test that an end tag must match the open node."""
        # Arrange
        builder = TreeBuilder()
        builder.open_element("configuration", (), plugin)
        builder.open_element("value")

        # Act & Assert
        with pytest.raises(StructuralParsingError, match="does not match"):
            builder.close_element("other")
