import pytest

from influmax.cascades import IndependentCascade
from influmax.graph import build_graph
from influmax.rng import RandomSource
from influmax.simulate import Simulator

LINES = [
    "4 3",
    "a b 0.5 0.5",
    "b a 0.5 0.5",
    "b c 0.5 0.5",
    "c b 0.5 0.5",
    "c d 0.5 0.5",
    "d c 0.5 0.5",
]


class RecordingCascade:
    def __init__(self):
        self.calls = []

    def run(self, num_iter, seeds):
        seeds = list(seeds)
        self.calls.append((num_iter, seeds))
        return len(seeds) * 1.5


def _silent_cascade():
    cascade = IndependentCascade(RandomSource(3))
    cascade.build(build_graph(LINES), 0.0)
    return cascade


def test_size_limited_by_seed_count():
    sim = Simulator([1, 2, 3], simulate_size=10)
    assert sim.size == 3
    sim = Simulator([1, 2, 3], simulate_size=2)
    assert sim.size == 2


def test_callable_seeds():
    sim = Simulator(lambda i: i * 2, simulate_size=3)
    assert sim.seeds == [0, 2, 4]
    assert sim.size == 3


def test_empty_simulator():
    sim = Simulator()
    assert sim.seeds == []
    assert sim.simulate(RecordingCascade()) == 0.0


def test_simulate_prefixes(capsys):
    cascade = RecordingCascade()
    sim = Simulator([5, 6, 7], iterations=4)
    result = sim.simulate(cascade)
    assert result == 4.5
    assert cascade.calls == [(4, [5]), (4, [5, 6]), (4, [5, 6, 7])]
    assert capsys.readouterr().out.splitlines()[0].startswith("01 \t")


def test_simulate_writes_file(tmp_path):
    target = tmp_path / "spread.txt"
    sim = Simulator([0, 1], filename=str(target))
    sim.simulate(RecordingCascade())
    assert target.read_text(encoding="utf-8") == "1\t1.5\n2\t3\n"


def test_simulate_once():
    cascade = RecordingCascade()
    sim = Simulator([3, 2, 1], simulate_size=2, iterations=7)
    assert sim.simulate_once(cascade) == 3.0
    assert cascade.calls == [(7, [3, 2])]


def test_simulate_once_to_file(tmp_path, capsys):
    target = tmp_path / "once.txt"
    sim = Simulator([0, 1, 2], filename=str(target))
    result = sim.simulate_once_to_file(RecordingCascade())
    assert result == 4.5
    assert target.read_text(encoding="utf-8") == "3\t4.5\n"
    assert "seed set size = 3" in capsys.readouterr().out


def test_zero_ratio_cascade_spread_equals_seed_count():
    sim = Simulator([0, 2], iterations=5)
    assert sim.simulate_once(_silent_cascade()) == pytest.approx(2.0)
    assert sim.simulate(_silent_cascade()) == pytest.approx(2.0)