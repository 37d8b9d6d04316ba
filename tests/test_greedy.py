import pytest

from influmax.graph import build_graph
from influmax.greedy import Greedy
from influmax.seed_io import read_seeds_with_influence_file

COVERAGE = {0: {0, 1, 2}, 1: {1}, 2: {2, 3}, 3: {3}}


class CoverageCascade:
    def __init__(self):
        self.calls = 0

    def run(self, num_iter, seeds):
        self.calls += 1
        covered = set()
        for s in seeds:
            covered |= COVERAGE[s]
        return float(len(covered))


@pytest.fixture
def graph():
    return build_graph(["4 2", "a b 1 1", "b a 1 1", "c d 1 1", "d c 1 1"])


def test_build_picks_by_marginal_gain(graph, tmp_path):
    out = tmp_path / "greedy.txt"
    algo = Greedy(str(out))
    cascade = CoverageCascade()
    algo.build(graph, 2, cascade)
    assert algo.seeds == [0, 2]
    assert sum(algo.influence) == pytest.approx(cascade.run(1, algo.seeds))
    assert algo.influence == sorted(algo.influence, reverse=True)
    assert algo.seed(1) == algo.seeds[1]


def test_build_writes_readable_file(graph, tmp_path):
    out = tmp_path / "greedy.txt"
    algo = Greedy(str(out))
    algo.build(graph, 3, CoverageCascade())
    seeds, influence = read_seeds_with_influence_file(str(out), graph)
    assert seeds == algo.seeds
    assert influence == pytest.approx(algo.influence)


def test_build_rejects_too_many_seeds(graph, tmp_path):
    algo = Greedy(str(tmp_path / "g.txt"))
    with pytest.raises(ValueError):
        algo.build(graph, 5, CoverageCascade())


def test_build_ranking_orders_by_single_spread(graph, tmp_path):
    algo = Greedy(str(tmp_path / "rank.txt"))
    algo.build_ranking(graph, 2, CoverageCascade())
    assert algo.seeds == [0, 2]
    assert algo.influence == sorted(algo.influence, reverse=True)
    assert algo.influence[0] == pytest.approx(len(COVERAGE[0]))


def test_build_ranking_rejects_non_positive_k(graph, tmp_path):
    algo = Greedy(str(tmp_path / "rank.txt"))
    with pytest.raises(ValueError):
        algo.build_ranking(graph, 0, CoverageCascade())


def test_build_from_file_round_trip(graph, tmp_path):
    out = tmp_path / "greedy.txt"
    first = Greedy(str(out))
    first.build(graph, 2, CoverageCascade())
    second = Greedy(str(tmp_path / "other.txt"))
    second.build_from_file(graph, str(out))
    assert second.seeds == first.seeds
    assert second.top == 2
    assert second.influence == pytest.approx(first.influence)
    with pytest.raises(IndexError):
        second.seed(2)