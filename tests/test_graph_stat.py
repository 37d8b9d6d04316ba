import pytest

from influmax.graph import build_graph
from influmax.graph_stat import compute_statistics

LINES = [
    "4 2",
    "a b 0.1 0.1",
    "b a 0.1 0.1",
    "b c 0.1 0.1",
    "c b 0.1 0.1",
]


@pytest.fixture
def stats():
    return compute_statistics(build_graph(LINES))


def test_counts_from_input(stats):
    assert stats.vertices == 4
    assert stats.edges == 2


def test_components(stats):
    assert stats.components == 2
    assert stats.largest_component == 3
    assert stats.components * stats.average_component_size == pytest.approx(stats.vertices)


def test_degrees(stats):
    assert stats.max_degree == 2
    assert stats.average_degree * stats.vertices == pytest.approx(4)


def test_density_consistent(stats):
    g = build_graph(LINES)
    assert stats.density * g.n * (g.n - 1) == pytest.approx(g.m)


def test_format_lines(stats):
    text = stats.format()
    lines = text.splitlines()
    assert len(lines) == 8
    assert lines[0] == "number of vertices:\t4"
    assert lines[1] == "number of edges:\t2"
    assert lines[5] == f"# of connected component:\t{stats.components}"
    assert text.endswith("\n")


def test_single_component_graph():
    lines = ["2 1", "x y 0.5 0.5", "y x 0.5 0.5"]
    s = compute_statistics(build_graph(lines))
    assert s.components == 1
    assert s.largest_component == s.vertices