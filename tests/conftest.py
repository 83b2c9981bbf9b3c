"""Pytest configuration and shared fixtures for levelpath tests."""

import pytest

from levelpath import (
    LayoutConstants,
    LevelGraph,
    LevelLayout,
    LevelMapGenerator,
    NodeSpec,
    PathRouter,
)


def graph_from_lengths(*lengths):
    """Build a graph whose rows have the given cardinalities."""
    rows = []
    counter = 0
    for length in lengths:
        row = []
        for _ in range(length):
            row.append(NodeSpec(chr(ord("A") + counter % 26)))
            counter += 1
        rows.append(row)
    return LevelGraph.from_rows(rows)


def assert_slots_covered_once(graph, result):
    """Every adjacent pair is drawn by exactly one primitive."""
    slots = [d.slot for d in result.decisions]
    assert slots == list(range(max(graph.node_count - 1, 0)))
    used = {d.primitive_index for d in result.decisions}
    assert used == set(range(len(result.primitives)))


@pytest.fixture
def make_graph():
    """Factory building a graph from row cardinalities."""
    return graph_from_lengths


@pytest.fixture
def assert_covered():
    """Checker for the one-primitive-per-slot invariant."""
    return assert_slots_covered_once


@pytest.fixture
def constants():
    """Default layout constants."""
    return LayoutConstants()


@pytest.fixture
def layout_engine(constants):
    """Default LevelLayout instance."""
    return LevelLayout(constants)


@pytest.fixture
def router(constants):
    """Default fan-style PathRouter instance."""
    return PathRouter(constants)


@pytest.fixture
def generator():
    """Default LevelMapGenerator instance."""
    return LevelMapGenerator()


@pytest.fixture
def single_to_double():
    """[[A], [B, C]]"""
    return graph_from_lengths(1, 2)


@pytest.fixture
def double_to_single():
    """[[A, B], [C]]"""
    return graph_from_lengths(2, 1)


@pytest.fixture
def single_chain():
    """[[A], [B], [C]]"""
    return graph_from_lengths(1, 1, 1)


@pytest.fixture
def map_text():
    """Small map in the text format."""
    return """
    # World one
    Start (flag) *
    Left (forest) | Right (waves)
    Boss (castle)
    """
