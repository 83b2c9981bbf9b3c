"""
Parser module for level maps.

Reads the plain-text level map format into a LevelGraph. Each non-empty line
is one row, top to bottom; nodes within a row are separated by "|". A node is
written as its label, an optional icon identifier in parentheses and an
optional trailing "*" marking it unlocked:

    # Chapter one
    Inception (movie) *
    Interstellar (public) | Tenet (access_time)
    The Dark Knight (shield_moon)
"""

import re
from typing import List

from .models import MAX_ROW_LENGTH, LevelGraph, LevelMapError, NodeSpec

DEFAULT_ICON = "star"


class ParseError(LevelMapError):
    """Raised when input parsing fails."""

    pass


class Parser:
    """Parses level map text into a LevelGraph."""

    # Label, optional "(icon)", optional "*"
    NODE_PATTERN = re.compile(
        r"^(?P<label>[^()*]*?)\s*(?:\((?P<icon>[^()]*)\))?\s*(?P<unlocked>\*)?$"
    )

    def __init__(self, default_icon: str = DEFAULT_ICON):
        self.default_icon = default_icon

    def parse(self, input_text: str) -> LevelGraph:
        """
        Parse input text and return a LevelGraph.

        Args:
            input_text: Multi-line string, one row per line

        Returns:
            LevelGraph with one row per non-empty, non-comment line

        Raises:
            ParseError: If input format is invalid
        """
        rows: List[List[NodeSpec]] = []

        for line_num, line in enumerate(input_text.strip().split("\n"), 1):
            stripped = line.strip()

            # Skip empty lines and comments
            if not stripped or stripped.startswith("#"):
                continue

            parts = stripped.split("|")
            if len(parts) > MAX_ROW_LENGTH:
                raise ParseError(
                    f"Line {line_num}: A row holds at most {MAX_ROW_LENGTH} "
                    f"nodes, got {len(parts)}: {stripped}"
                )

            rows.append([self._parse_node(part.strip(), line_num) for part in parts])

        if not rows:
            raise ParseError("No rows found in input")

        return LevelGraph.from_rows(rows)

    def _parse_node(self, text: str, line_num: int) -> NodeSpec:
        """
        Parse a single node description.

        Raises:
            ParseError: If the node text is malformed or has no label.
        """
        if text.count("(") != text.count(")"):
            raise ParseError(f"Line {line_num}: Unbalanced parentheses in '{text}'")

        match = self.NODE_PATTERN.match(text)
        if not match:
            raise ParseError(f"Line {line_num}: Invalid node format: '{text}'")

        label = match.group("label").strip()
        if not label:
            raise ParseError(f"Line {line_num}: Empty node label")

        icon = match.group("icon")
        icon = icon.strip() if icon and icon.strip() else self.default_icon

        return NodeSpec(label, icon, unlocked=match.group("unlocked") is not None)


def parse_level_map(input_text: str) -> LevelGraph:
    """
    Convenience function to parse level map input.

    Args:
        input_text: Multi-line string, one row per line

    Returns:
        LevelGraph
    """
    parser = Parser()
    return parser.parse(input_text)
