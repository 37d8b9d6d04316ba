"""Reverse-reachable-set influence maximisation: shared machinery and RRInfl."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable, Sequence

from influmax.algo_base import SeedAlgorithm
from influmax.graph import Graph
from influmax.reverse_cascade import ReverseGeneralCascade
from influmax.timer import EventTimer


def log_n_choose_k(n: int, k: int) -> float:
    """Natural logarithm of the binomial coefficient C(n, k)."""
    if not (n >= k >= 0):
        raise ValueError(f"log_n_choose_k requires n >= k >= 0, got n={n}, k={k}")
    return sum(math.log(n - i) for i in range(k)) - sum(
        math.log(i) for i in range(1, k + 1)
    )


def vectors_intersection(v1: Iterable[int], v2: Iterable[int]) -> list[int]:
    """Sorted multiset intersection of two sequences."""
    return sorted((Counter(v1) & Counter(v2)).elements())


class RRInflBase(SeedAlgorithm):
    """Collects RR sets and solves max coverage on them greedily."""

    DEFAULT_OUTPUT_FILE = "rr_infl.txt"
    DEFAULT_TIME_FILE = "time_rr_infl.txt"

    def __init__(self, output_file: str | None = None, time_file: str | None = None) -> None:
        super().__init__()
        self.output_file = output_file if output_file is not None else self.DEFAULT_OUTPUT_FILE
        self.time_file = time_file if time_file is not None else self.DEFAULT_TIME_FILE
        self.m = 0
        self.table: list[list[int]] = []
        self.targets: list[int] = []
        self.degrees: list[int] = []
        self.degree_rr_indices: list[list[int]] = []
        self.source_set: set[int] = set()

    def add_rr_simulation(self, num_iter: int, cascade: ReverseGeneralCascade) -> list[int]:
        """Append num_iter RR sets rooted at random nodes; return edges examined per set."""
        edge_visits: list[int] = []
        for _ in range(num_iter):
            target = cascade.gen_random_node()
            _, rr_sets, visited = cascade.reverse_propagate(1, target)
            self.table.append(rr_sets[0])
            self.targets.append(target)
            edge_visits.append(visited)
        return edge_visits

    def rebuild_rr_indices(self) -> None:
        """Count, for every node, the RR sets it belongs to."""
        self.degrees = [0] * self.n
        self.degree_rr_indices = [[] for _ in range(self.n)]
        for i, rr in enumerate(self.table):
            for source in rr:
                self.degrees[source] += 1
                self.degree_rr_indices[source].append(i)
        self.source_set = {v for v, d in enumerate(self.degrees) if d >= 0}

    def run_greedy(self, seed_size: int) -> tuple[float, list[int], list[float]]:
        """Greedy max coverage over the RR sets.

        Returns the estimated spread, the chosen seeds and the cumulative
        spread estimate after each seed. Ties go to the highest node index.
        """
        if not self.table:
            raise ValueError("no RR sets to run greedy on")
        enabled = [True] * len(self.table)
        candidates = set(self.source_set)
        seeds: list[int] = []
        estimates: list[float] = []
        spread = 0.0
        for _ in range(seed_size):
            if not candidates:
                raise ValueError("seed_size exceeds the number of candidate nodes")
            best = max(candidates, key=lambda v: (self.degrees[v], v))
            seeds.append(best)
            spread += self.n * self.degrees[best] / len(self.table)
            estimates.append(spread)
            candidates.discard(best)
            self.degrees[best] = -1
            for idx in self.degree_rr_indices[best]:
                if not enabled[idx]:
                    continue
                for rr in self.table[idx]:
                    if rr != best:
                        self.degrees[rr] -= 1
                enabled[idx] = False
        return spread, seeds, estimates

    def estimate_influence(self, seeds: Sequence[int]) -> tuple[float, list[float]]:
        """Estimated spread of seeds and the cumulative estimate after each seed."""
        if not self.table:
            raise ValueError("no RR sets to estimate influence from")
        covered: set[int] = set()
        cumulative: list[float] = []
        spread = 0.0
        for sd in seeds:
            covered.update(self.degree_rr_indices[sd])
            spread = self.n * len(covered) / len(self.table)
            cumulative.append(spread)
        return spread, cumulative

    def set_results(self, seeds: Sequence[int], cumu_spread: Sequence[float]) -> None:
        """Store the first top seeds with their marginal spreads."""
        self.seeds = list(seeds[: self.top])
        self.influence = [
            cumu_spread[i] - cumu_spread[i - 1] if i > 0 else cumu_spread[i]
            for i in range(self.top)
        ]


class RRInfl(RRInflBase):
    """Fixed-number-of-rounds RR-set influence maximisation."""

    DEFAULT_OUTPUT_FILE = "rr_infl.txt"
    DEFAULT_TIME_FILE = "time_rr_infl.txt"

    def default_rounds(self, n: int, m: int, epsilon: float = 0.2) -> float:
        """Number of RR sets needed for error epsilon (at least 1)."""
        return max(144.0 * (n + m) / epsilon**3 * math.log(max(n, 1)), 1.0)

    def build_in_error(
        self, graph: Graph, k: int, cascade: ReverseGeneralCascade, epsilon: float = 0.1
    ) -> None:
        """Select k seeds using as many rounds as epsilon requires."""
        self.n = graph.n
        self.m = graph.m
        num_iter = math.ceil(self.default_rounds(self.n, self.m, epsilon))
        self._build(graph, k, cascade, num_iter)

    def build(
        self, graph: Graph, k: int, cascade: ReverseGeneralCascade, num_iter: int = 1000000
    ) -> None:
        """Select k seeds from num_iter RR sets."""
        self.n = graph.n
        self.m = graph.m
        self._build(graph, k, cascade, num_iter)

    def _build(
        self, graph: Graph, k: int, cascade: ReverseGeneralCascade, num_iter: int
    ) -> None:
        self.n = graph.n
        self.m = graph.m
        self.top = k
        self.influence = [0.0] * k
        self.seeds = [0] * k
        cascade.build(graph)

        print(f"#round = {num_iter}")
        self.table = []
        self.targets = []

        timer = EventTimer()
        timer.set_event("start")
        self.add_rr_simulation(num_iter, cascade)
        timer.set_event("step1")

        self.rebuild_rr_indices()
        timer.set_event("step2")

        spread, seeds, estimates = self.run_greedy(k)
        self.set_results(seeds, estimates)
        timer.set_event("end")

        print(f"  final (estimated) spread = {spread:g}\t round = {num_iter}")

        self.write_to_file(self.output_file, graph)
        with open(self.time_file, "w", encoding="utf-8") as fh:
            fh.write(f"{timer.time_span('start', 'end'):g}\n")
            fh.write(f"Gen graph: {timer.time_span('start', 'step1'):g}\n")
            fh.write(f"Build RR: {timer.time_span('step1', 'step2'):g}\n")
            fh.write(f"Greedy: {timer.time_span('step2', 'end'):g}\n")