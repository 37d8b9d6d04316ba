"""Monte-Carlo evaluation of a seed list under a diffusion model."""

from __future__ import annotations

import contextlib
from collections.abc import Callable, Iterable
from typing import Protocol, TextIO

from influmax.graph import NUM_ITER, SET_SIZE


class _Runnable(Protocol):
    def run(self, num_iter: int, seeds: Iterable[int]) -> float: ...


class Simulator:
    """Evaluates the spread of growing prefixes of a seed list."""

    def __init__(
        self,
        seeds: Iterable[int] | Callable[[int], int] | None = None,
        filename: str = "",
        simulate_size: int = SET_SIZE,
        iterations: int = NUM_ITER,
    ) -> None:
        self.filename = filename
        self.iterations = iterations
        if seeds is None:
            self.seeds: list[int] = []
            self.size = 0
        elif callable(seeds):
            self.seeds = [seeds(i) for i in range(simulate_size)]
            self.size = simulate_size
        else:
            self.seeds = list(seeds)
            self.size = min(len(self.seeds), simulate_size)

    def _output(self) -> contextlib.AbstractContextManager[TextIO | None]:
        if self.filename:
            return open(self.filename, "w", encoding="utf-8")
        return contextlib.nullcontext()

    def simulate(self, cascade: _Runnable) -> float:
        """Spread of every prefix of the seeds; returns the spread of the full set."""
        spread = 0.0
        with self._output() as out:
            for t in range(self.size):
                spread = cascade.run(self.iterations, self.seeds[: t + 1])
                print(f"{t + 1:02d} \t {spread:10g}")
                if out is not None:
                    out.write(f"{t + 1}\t{spread:g}\n")
        return spread

    def simulate_once(self, cascade: _Runnable) -> float:
        """Spread of the whole seed set."""
        return cascade.run(self.iterations, self.seeds[: self.size])

    def simulate_once_to_file(self, cascade: _Runnable) -> float:
        """Spread of the whole seed set, also printed and written to the file."""
        with self._output() as out:
            spread = cascade.run(self.iterations, self.seeds[: self.size])
            print(f"seed set size = {self.size}, spread = {spread:10g}")
            if out is not None:
                out.write(f"{self.size}\t{spread:g}\n")
        return spread