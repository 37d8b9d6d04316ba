"""Reverse general cascade: sampling reverse-reachable (RR) sets."""

from __future__ import annotations

from collections import deque

from influmax.edges import ProbTransform
from influmax.errors import GraphNotBuiltError
from influmax.graph import Graph
from influmax.rng import RandomSource


class ReverseGeneralCascade:
    """Generates RR sets by propagating backwards with edge probability w2."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.random = rng if rng is not None else RandomSource()
        self.graph: Graph | None = None
        self.n = 0
        self.m = 0

    def build(self, graph: Graph) -> None:
        """Attach the graph to sample from."""
        self.graph = graph
        self.n = graph.n
        self.m = graph.m

    def gen_random_node(self) -> int:
        """Uniformly random node index in [0, n-1]."""
        return self.random.rand_int(0, self.n - 1)

    def _require_graph(self) -> Graph:
        if self.graph is None:
            raise GraphNotBuiltError("Please Build Graph first. (gf==NULL)")
        return self.graph

    @staticmethod
    def _check_iterations(num_iter: int) -> None:
        if num_iter <= 0:
            raise ValueError("num_iter must be positive")

    def _sample(
        self, graph: Graph, transform: ProbTransform, target: int
    ) -> tuple[list[tuple[int, int]], int]:
        """One RR set as (node, depth) pairs, plus the number of edges examined."""
        active = {target}
        rr = [(target, 0)]
        queue = deque(rr)
        visited = 0
        while queue:
            node, depth = queue.popleft()
            for e in graph.neighbors(node):
                if e.v in active:
                    continue
                visited += 1
                if self.random.rand_bernoulli(transform.prob(e.w2)):
                    active.add(e.v)
                    entry = (e.v, depth + 1)
                    rr.append(entry)
                    queue.append(entry)
        return rr, visited

    def _samples(self, num_iter: int, target: int):
        graph = self._require_graph()
        self._check_iterations(num_iter)
        transform = ProbTransform(graph.edge_form)
        for _ in range(num_iter):
            yield self._sample(graph, transform, target)

    def reverse_propagate(
        self, num_iter: int, target: int
    ) -> tuple[float, list[list[int]], int]:
        """Sample num_iter RR sets rooted at target.

        Returns the mean RR-set size, the RR sets and the total number of
        edges examined.
        """
        rr_sets: list[list[int]] = []
        edges_visited = 0
        for rr, visited in self._samples(num_iter, target):
            rr_sets.append([node for node, _ in rr])
            edges_visited += visited
        total = sum(len(rr) for rr in rr_sets)
        return total / num_iter, rr_sets, edges_visited

    def reverse_propagate_timed(
        self, num_iter: int, target: int, node_number: int
    ) -> tuple[float, list[tuple[list[int], int]], int]:
        """Like reverse_propagate, but each RR set carries a random time in [0, node_number]."""
        rr_sets: list[tuple[list[int], int]] = []
        edges_visited = 0
        for rr, visited in self._samples(num_iter, target):
            label = self.random.rand_int(0, node_number)
            rr_sets.append(([node for node, _ in rr], label))
            edges_visited += visited
        total = sum(len(rr) for rr, _ in rr_sets)
        return total / num_iter, rr_sets, edges_visited

    def reverse_propagate_with_distance(
        self, num_iter: int, target: int
    ) -> tuple[float, list[list[tuple[int, int]]], int]:
        """Like reverse_propagate, but each entry is (node, hops from target)."""
        rr_sets: list[list[tuple[int, int]]] = []
        edges_visited = 0
        for rr, visited in self._samples(num_iter, target):
            rr_sets.append(rr)
            edges_visited += visited
        total = sum(len(rr) for rr in rr_sets)
        return total / num_iter, rr_sets, edges_visited