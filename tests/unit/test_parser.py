"""Unit tests for the parser module."""

import pytest

from levelpath.models import LevelMapError, NodeSpec
from levelpath.parser import ParseError, Parser, parse_level_map


class TestParser:
    """Tests for Parser class."""

    def test_parse_rows(self, map_text):
        """Each non-comment line becomes one row."""
        graph = Parser().parse(map_text)
        assert graph.rows == (
            (NodeSpec("Start", "flag", unlocked=True),),
            (NodeSpec("Left", "forest"), NodeSpec("Right", "waves")),
            (NodeSpec("Boss", "castle"),),
        )

    def test_default_icon(self):
        graph = Parser().parse("Level one")
        assert graph.rows[0][0] == NodeSpec("Level one", "star", unlocked=False)

    def test_custom_default_icon(self):
        graph = Parser(default_icon="circle").parse("A | B (square)")
        assert [n.icon for n in graph.nodes()] == ["circle", "square"]

    def test_unlocked_without_icon(self):
        graph = Parser().parse("Dunkirk *")
        assert graph.rows[0][0].unlocked is True
        assert graph.rows[0][0].label == "Dunkirk"

    def test_unlocked_without_space(self):
        graph = Parser().parse("A(movie)*")
        assert graph.rows[0][0] == NodeSpec("A", "movie", unlocked=True)

    def test_blank_icon_uses_default(self):
        graph = Parser().parse("A ( )")
        assert graph.rows[0][0].icon == "star"

    def test_skips_blank_lines_and_comments(self):
        graph = Parser().parse("\n# intro\nA\n\n   # more\nB | C\n")
        assert graph.row_lengths() == [1, 2]

    def test_whitespace_around_separator(self):
        graph = Parser().parse("The Dark Knight   |   The Prestige")
        assert [n.label for n in graph.nodes()] == ["The Dark Knight", "The Prestige"]

    def test_too_many_nodes(self):
        with pytest.raises(ParseError, match="Line 2: A row holds at most 2 nodes"):
            Parser().parse("A\nB | C | D")

    def test_empty_label(self):
        with pytest.raises(ParseError, match="Empty node label"):
            Parser().parse("A |")

    def test_icon_only(self):
        with pytest.raises(ParseError, match="Empty node label"):
            Parser().parse("(movie)")

    def test_unbalanced_parentheses(self):
        with pytest.raises(ParseError, match="Unbalanced"):
            Parser().parse("A (movie")

    def test_text_after_icon(self):
        with pytest.raises(ParseError, match="Invalid node format"):
            Parser().parse("A (movie) extra")

    def test_no_rows(self):
        with pytest.raises(ParseError, match="No rows found"):
            Parser().parse("# only a comment\n\n")

    def test_parse_error_is_level_map_error(self):
        assert issubclass(ParseError, LevelMapError)


class TestParseLevelMap:
    """Tests for the parse_level_map convenience function."""

    def test_parse_level_map(self):
        graph = parse_level_map("A *\nB | C")
        assert graph.node_count == 3
        assert graph.rows[0][0].unlocked
