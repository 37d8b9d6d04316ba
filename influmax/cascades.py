"""Forward diffusion models estimating the expected spread of a seed set."""

from __future__ import annotations

import heapq
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Iterable

from influmax.edges import ContEdge, ProbTransform
from influmax.errors import GraphNotBuiltError
from influmax.graph import Graph
from influmax.rng import RandomSource


class Cascade(ABC):
    """A diffusion model run by Monte-Carlo simulation on a graph."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        self.random = rng if rng is not None else RandomSource()
        self.graph: Graph | None = None
        self.n = 0
        self.m = 0

    def _build(self, graph: Graph) -> None:
        self.graph = graph
        self.n = graph.n
        self.m = graph.m

    def _require_graph(self) -> Graph:
        if self.graph is None:
            raise GraphNotBuiltError("Please Build Graph first. (gf==NULL)")
        return self.graph

    @staticmethod
    def _check_iterations(num_iter: int) -> None:
        if num_iter <= 0:
            raise ValueError("num_iter must be positive")

    @abstractmethod
    def run(self, num_iter: int, seeds: Iterable[int]) -> float:
        """Average number of activated nodes over num_iter simulations."""


class _BernoulliCascade(Cascade):
    def _edge_probability(self, edge) -> float:
        raise TypeError(f"{type(self).__name__} defines no edge probability")

    def _simulate(self, graph: Graph, seeds: list[int]) -> int:
        active = set(seeds)
        queue = deque(seeds)
        count = len(seeds)
        while queue:
            u = queue.popleft()
            for e in graph.neighbors(u):
                if e.v in active:
                    continue
                if self.random.rand_bernoulli(self._edge_probability(e)):
                    active.add(e.v)
                    queue.append(e.v)
                    count += 1
        return count

    def run(self, num_iter: int, seeds: Iterable[int]) -> float:
        graph = self._require_graph()
        self._check_iterations(num_iter)
        seed_list = list(seeds)
        total = sum(self._simulate(graph, seed_list) for _ in range(num_iter))
        return total / num_iter


class IndependentCascade(_BernoulliCascade):
    """Independent cascade where every edge fires with the same ratio."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        super().__init__(rng)
        self.ratio = 0.0

    def build(self, graph: Graph, ratio: float) -> None:
        self._build(graph)
        self.ratio = ratio

    def _edge_probability(self, edge) -> float:
        return self.ratio

    def run(self, num_iter: int, seeds: Iterable[int]) -> float:
        return super().run(num_iter, seeds)


class GeneralCascade(_BernoulliCascade):
    """General cascade where each edge fires with its own probability w1."""

    def __init__(self, rng: RandomSource | None = None) -> None:
        super().__init__(rng)
        self._transform = ProbTransform(0)

    def build(self, graph: Graph) -> None:
        self._build(graph)
        self._transform = ProbTransform(graph.edge_form)

    def _edge_probability(self, edge) -> float:
        return self._transform.prob(edge.w1)

    def run(self, num_iter: int, seeds: Iterable[int]) -> float:
        return super().run(num_iter, seeds)


class ContinuousGeneralCascade(Cascade):
    """Continuous-time cascade with Weibull-distributed transmission delays.

    Seeds are counted once when scheduled and again when activated.
    """

    def __init__(self, rng: RandomSource | None = None) -> None:
        super().__init__(rng)
        self.max_time = 0.0

    def build(self, graph: Graph, max_time: float) -> None:
        self._build(graph)
        self.max_time = max_time

    def _simulate(self, graph: Graph, seeds: list[int]) -> int:
        active: set[int] = set()
        order = 0
        queue: list[tuple[float, int, int]] = []
        for s in seeds:
            queue.append((0.0, order, s))
            order += 1
        heapq.heapify(queue)
        count = len(seeds)

        while queue:
            cur_time, _, cur_id = queue[0]
            if cur_time > self.max_time:
                break
            heapq.heappop(queue)
            if cur_id in active:
                continue
            active.add(cur_id)
            count += 1
            for e in graph.neighbors(cur_id):
                if e.v in active:
                    continue
                if not isinstance(e, ContEdge):
                    raise TypeError("continuous cascade requires ContEdge edges")
                new_time = cur_time + self.random.rand_weibull(e.u_a, e.u_b)
                if new_time < self.max_time:
                    heapq.heappush(queue, (new_time, order, e.v))
                    order += 1
        return count

    def run(self, num_iter: int, seeds: Iterable[int]) -> float:
        graph = self._require_graph()
        self._check_iterations(num_iter)
        seed_list = list(seeds)
        total = sum(self._simulate(graph, seed_list) for _ in range(num_iter))
        return total / num_iter