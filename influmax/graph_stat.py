"""Basic statistics of a graph: size, density, degrees and connected components."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass

from influmax.graph import Graph


@dataclass(frozen=True)
class GraphStatistics:
    """Summary numbers describing a graph."""

    vertices: int
    edges: int
    density: float
    average_degree: float
    max_degree: int
    components: int
    largest_component: int
    average_component_size: float

    def format(self) -> str:
        """Render the statistics as tab-separated report lines."""
        lines = [
            f"number of vertices:\t{self.vertices}",
            f"number of edges:\t{self.edges}",
            f"density:\t{self.density:g}",
            f"average degree:\t{self.average_degree:g}",
            f"maximal degree:\t{self.max_degree}",
            f"# of connected component:\t{self.components}",
            f"largest component size:\t{self.largest_component}",
            f"average component size:\t{self.average_component_size:g}",
        ]
        return "".join(line + "\n" for line in lines)


def compute_statistics(graph: Graph) -> GraphStatistics:
    """Compute size, density, degree and component statistics of graph."""
    n, m = graph.n, graph.m
    density = m / n / (n - 1) if n > 1 else math.nan
    degrees = [graph.degree(i) for i in range(n)]
    total_degree = float(sum(degrees))
    max_degree = max((d for d in degrees if d > 0), default=0)
    average_degree = total_degree / n if n else math.nan

    used = [False] * n
    components = 0
    largest = 0
    for start in range(n):
        if used[start]:
            continue
        components += 1
        size = 0
        used[start] = True
        queue = deque([start])
        while queue:
            node = queue.popleft()
            size += 1
            for e in graph.neighbors(node):
                if not used[e.v]:
                    used[e.v] = True
                    queue.append(e.v)
        largest = max(largest, size)

    average_component = n / components if components else math.nan
    return GraphStatistics(
        vertices=n,
        edges=m // 2,
        density=density,
        average_degree=average_degree,
        max_degree=max_degree,
        components=components,
        largest_component=largest,
        average_component_size=average_component,
    )