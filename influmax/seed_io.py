"""Reading and writing seed lists.

Seed files start with the number of seeds, followed by one line per seed
holding the node label and, optionally, its influence. Lines that start
with '#' are comments.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Protocol, TextIO

from influmax.graph import is_empty_or_comment_line
from influmax.errors import InvalidInputFormatError


class _NodeNames(Protocol):
    def map_node_name_to_index(self, name: str) -> int: ...

    def map_index_to_node_name(self, idx: int) -> str: ...


def _is_comment_line(line: str) -> bool:
    return line.startswith("#")


def _parse_count(line: str) -> int:
    tokens = line.split()
    try:
        count = int(tokens[0])
    except (IndexError, ValueError):
        raise InvalidInputFormatError(f"Invalid seed count line: {line!r}") from None
    if count <= 0:
        raise InvalidInputFormatError(f"Seed count must be positive, got {count}")
    return count


def _lookup(graph: _NodeNames, name: str) -> int:
    try:
        return graph.map_node_name_to_index(name)
    except KeyError:
        raise InvalidInputFormatError(f"Unknown seed node: {name!r}") from None


def _read_entries(
    stream: Iterable[str],
    graph: _NodeNames,
    skip_line: Callable[[str], bool],
    with_influence: bool,
) -> list[tuple[int, float]]:
    expected: int | None = None
    entries: list[tuple[int, float]] = []
    for raw in stream:
        line = raw.rstrip("\r\n")
        if skip_line(line):
            continue
        if expected is None:
            expected = _parse_count(line)
            continue
        if len(entries) >= expected:
            break
        tokens = line.split()
        if not tokens:
            raise InvalidInputFormatError("Seed line is empty")
        idx = _lookup(graph, tokens[0])
        influence = -1.0
        if with_influence and len(tokens) > 1:
            try:
                influence = float(tokens[1])
            except ValueError:
                raise InvalidInputFormatError(
                    f"Invalid influence value: {tokens[1]!r}"
                ) from None
        entries.append((idx, influence))

    wanted = expected or 0
    if len(entries) != wanted:
        raise InvalidInputFormatError(
            f"Seed input is incorrect! Expect #seeds = {wanted}, "
            f"find #seeds = {len(entries)}"
        )
    return entries


def read_seeds(stream: Iterable[str], graph: _NodeNames) -> list[int]:
    """Read seed node indices; blank and comment lines are skipped."""
    entries = _read_entries(stream, graph, is_empty_or_comment_line, with_influence=False)
    return [idx for idx, _ in entries]


def read_seeds_with_influence(
    stream: Iterable[str], graph: _NodeNames
) -> tuple[list[int], list[float]]:
    """Read seed indices and their influence (-1 where none is given)."""
    entries = _read_entries(stream, graph, _is_comment_line, with_influence=True)
    return [idx for idx, _ in entries], [infl for _, infl in entries]


def write_seeds(
    stream: TextIO,
    seeds: Sequence[int],
    influence: Sequence[float],
    graph: _NodeNames,
) -> None:
    """Write the seed count, then "label<TAB>influence" per seed."""
    stream.write(f"{len(seeds)}\n")
    for seed, infl in zip(seeds, influence[: len(seeds)], strict=True):
        stream.write(f"{graph.map_index_to_node_name(seed)}\t{infl:g}\n")


def read_seeds_file(filename: str, graph: _NodeNames) -> list[int]:
    with open(filename, encoding="utf-8") as fh:
        return read_seeds(fh, graph)


def read_seeds_with_influence_file(
    filename: str, graph: _NodeNames
) -> tuple[list[int], list[float]]:
    with open(filename, encoding="utf-8") as fh:
        return read_seeds_with_influence(fh, graph)


def write_seeds_file(
    filename: str,
    seeds: Sequence[int],
    influence: Sequence[float],
    graph: _NodeNames,
) -> None:
    with open(filename, "w", encoding="utf-8") as fh:
        write_seeds(fh, seeds, influence, graph)