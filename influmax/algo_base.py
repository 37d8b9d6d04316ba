"""Common state for seed-selection algorithms."""

from __future__ import annotations

from influmax.graph import Graph
from influmax.seed_io import read_seeds_with_influence_file, write_seeds_file


class SeedAlgorithm:
    """Holds the chosen seeds and their (marginal) influence."""

    def __init__(self) -> None:
        self.n = 0
        self.top = 0
        self.seeds: list[int] = []
        self.influence: list[float] = []

    def seed(self, i: int) -> int:
        """The i-th chosen seed."""
        if not 0 <= i < self.top:
            raise IndexError(f"seed index out of range: {i}")
        return self.seeds[i]

    def write_to_file(self, filename: str, graph: Graph) -> None:
        """Write the seeds and their influence to filename."""
        write_seeds_file(filename, self.seeds, self.influence, graph)

    def read_from_file(self, filename: str, graph: Graph) -> None:
        """Load seeds and influence previously written to filename."""
        seeds, influence = read_seeds_with_influence_file(filename, graph)
        self.n = graph.n
        self.seeds = seeds
        self.influence = influence
        self.top = len(seeds)