"""Greedy seed selection by Monte-Carlo simulation, with lazy-forward evaluation."""

from __future__ import annotations

import heapq
from collections.abc import Iterable
from typing import Protocol

from influmax.algo_base import SeedAlgorithm
from influmax.graph import NUM_ITER, Graph


class _Runnable(Protocol):
    def run(self, num_iter: int, seeds: Iterable[int]) -> float: ...


class Greedy(SeedAlgorithm):
    """Selects seeds by marginal gain in simulated spread."""

    def __init__(self, output_file: str = "greedy.txt") -> None:
        super().__init__()
        self.output_file = output_file

    def build(self, graph: Graph, k: int, cascade: _Runnable) -> None:
        """Choose k seeds greedily, re-evaluating gains only when they may be stale."""
        n = graph.n
        if not 0 <= k <= n:
            raise ValueError(f"k must be between 0 and n = {n}, got {k}")
        self.n = n
        self.top = k

        # Entries are (-gain, node, round in which the gain was computed).
        heap = [(-(n + 1.0), v, -1) for v in range(n)]
        heapq.heapify(heap)
        chosen: list[int] = []
        influence: list[float] = []
        old = 0.0
        for i in range(k):
            while heap[0][2] != i:
                _, v, _ = heap[0]
                gain = cascade.run(NUM_ITER, chosen + [v]) - old
                heapq.heapreplace(heap, (-gain, v, i))
            neg_gain, node, _ = heapq.heappop(heap)
            chosen.append(node)
            influence.append(-neg_gain)
            old += -neg_gain

        self.seeds = chosen
        self.influence = influence
        self.write_to_file(self.output_file, graph)

    def build_ranking(self, graph: Graph, k: int, cascade: _Runnable) -> None:
        """Rank nodes by their individual simulated spread and keep the top k."""
        if k <= 0:
            raise ValueError(f"k must be positive, got {k}")
        self.n = graph.n
        self.top = k
        influence = [0.0] * k
        seeds = [0] * k
        for node in range(self.n):
            spread = cascade.run(NUM_ITER, [node])
            # The admission threshold is the node id held in the last slot.
            if spread <= seeds[k - 1]:
                continue
            influence[k - 1] = spread
            seeds[k - 1] = node
            j = k - 2
            while j >= 0 and spread > influence[j]:
                seeds[j + 1], influence[j + 1] = seeds[j], influence[j]
                seeds[j], influence[j] = node, spread
                j -= 1
        self.seeds = seeds
        self.influence = influence
        self.write_to_file(self.output_file, graph)

    def build_from_file(self, graph: Graph, filename: str) -> None:
        """Load previously selected seeds from filename."""
        self.read_from_file(filename, graph)