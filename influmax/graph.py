"""Graphs stored as sorted adjacency arrays, and reading them from text."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from influmax.edges import Edge, EdgeForm, Node
from influmax.errors import InvalidInputFormatError

STR_LEN = 200
NUM_ITER = 10
SET_SIZE = 100
EPS = 1e-10
ISOLATED_NODE_PREFIX = "isolated_"


def is_empty_or_comment_line(line: str) -> bool:
    """True for empty lines and lines starting with '#'."""
    return not line or line[0] == "#"


class Graph:
    """Directed graph whose edges are sorted by (u, v) and indexed per node."""

    def __init__(self, edge_type: type[Edge] = Edge) -> None:
        self.edge_type = edge_type
        self.n = 0
        self.m = 0
        self.degrees: list[int] = []
        self.index: list[int] = []
        self.edges: list[Edge] = []
        self.edge_form = EdgeForm.NORMAL_EDGE
        self._name_to_index: dict[str, int] = {}
        self._nodes: list[Node] = []

    def insert_node(self, node: Node) -> int:
        """Register node if its label is new; return its index."""
        existing = self._name_to_index.get(node.label)
        if existing is not None:
            return existing
        idx = len(self._nodes)
        self._nodes.append(node)
        self._name_to_index[node.label] = idx
        return idx

    def map_index_to_node_name(self, idx: int) -> str:
        if not 0 <= idx < len(self._nodes):
            raise IndexError(f"node index out of range: {idx}")
        return self._nodes[idx].label

    def map_node_name_to_index(self, name: str) -> int:
        return self._name_to_index[name]

    def real_node_count(self) -> int:
        """Number of nodes actually registered from the input."""
        return len(self._nodes)

    def degree(self, node: int) -> int:
        return self.degrees[node]

    def neighbor_count(self, node: int) -> int:
        if node == 0:
            return self.index[node] + 1
        return self.index[node] - self.index[node - 1]

    def edge(self, node: int, idx: int) -> Edge:
        if node == 0:
            return self.edges[idx]
        return self.edges[self.index[node - 1] + 1 + idx]

    def neighbors(self, node: int) -> Iterator[Edge]:
        """Yield the outgoing edges of node."""
        for i in range(self.neighbor_count(node)):
            yield self.edge(node, i)


def _parse_n_m(line: str) -> tuple[int, int]:
    parts = line.split()
    try:
        n, m = int(parts[0]), int(parts[1])
    except (IndexError, ValueError):
        raise InvalidInputFormatError(f"Invalid node/edge count line: {line!r}") from None
    if n < 0 or m < 0:
        raise InvalidInputFormatError(f"Negative node/edge count: {line!r}")
    return n, m


def read_graph(stream: Iterable[str], edge_type: type[Edge] = Edge) -> Graph:
    """Read "n m" followed by 2*m edge lines; comment and blank lines are skipped."""
    g = Graph(edge_type)
    header_read = False
    count = 0
    expected = 0

    for raw in stream:
        line = raw.rstrip("\r\n")
        if is_empty_or_comment_line(line):
            continue
        if not header_read:
            g.n, g.m = _parse_n_m(line)
            expected = 2 * g.m
            g.degrees = [0] * g.n
            header_read = True
            continue
        if count >= expected:
            break
        e = edge_type()
        e.deserialize(line.split(), g)
        if not 0 <= e.u < g.n or not 0 <= e.v < g.n:
            raise InvalidInputFormatError(
                f"Graph has more distinct nodes than declared n = {g.n}"
            )
        g.edges.append(e)
        g.degrees[e.u] += 1
        count += 1

    i = 1
    while g.real_node_count() < g.n:
        g.insert_node(Node(f"{ISOLATED_NODE_PREFIX}{i}"))
        i += 1

    if count != expected:
        raise InvalidInputFormatError(
            f"Graph input is incorrect! Expect #edges = {expected}, find #edges = {count}"
        )
    return g


def build_graph(stream: Iterable[str], edge_type: type[Edge] = Edge) -> Graph:
    """Read a graph, sort and merge duplicate edges, and build the node index."""
    g = read_graph(stream, edge_type)
    g.edges.sort(key=lambda e: (e.u, e.v))

    merged: list[Edge] = []
    for e in g.edges:
        if merged and merged[-1].u == e.u and merged[-1].v == e.v:
            merged[-1].c += 1
        else:
            merged.append(e)
    g.edges = merged
    if g.m != 0:
        g.m = len(merged)

    g.index = [0] * g.n
    for i, e in enumerate(g.edges[: g.m]):
        g.index[e.u] = i
    for i in range(1, g.n):
        g.index[i] = max(g.index[i], g.index[i - 1])
    return g