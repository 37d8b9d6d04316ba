"""Nodes, edges and edge-probability transforms."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

from influmax.errors import InvalidInputFormatError

_INF_POS_MIN = 1e-32


@dataclass
class Node:
    """A graph node identified by its label."""

    label: str = ""


class _NodeRegistry(Protocol):
    def insert_node(self, node: Node) -> int: ...


class EdgeForm(IntEnum):
    """How edge weights are stored."""

    NORMAL_EDGE = 0
    LOG_NEG_EDGE = 1


def _next_label(tokens: Iterator[str]) -> str:
    try:
        return next(tokens)
    except StopIteration:
        raise InvalidInputFormatError("Edge line is missing a node label") from None


def _next_float(tokens: Iterator[str], default: float) -> float:
    token = next(tokens, None)
    if token is None:
        return default
    try:
        return float(token)
    except ValueError:
        raise InvalidInputFormatError(f"Invalid edge weight: {token!r}") from None


@dataclass
class Edge:
    """Discrete directed edge u -> v with weights for both directions."""

    u: int = -1
    v: int = -1
    c: int = 1
    w1: float = 0.0
    w2: float = 0.0

    def _read_endpoints(self, tokens: Iterator[str], graph: _NodeRegistry) -> None:
        su = Node(_next_label(tokens))
        sv = Node(_next_label(tokens))
        self.u = graph.insert_node(su)
        self.v = graph.insert_node(sv)

    def deserialize(self, tokens: Iterable[str], graph: _NodeRegistry) -> None:
        """Read "u_label v_label w1 w2", registering the labels in graph."""
        it = iter(tokens)
        self._read_endpoints(it, graph)
        self.w1 = _next_float(it, self.w1)
        self.w2 = _next_float(it, self.w2)

    def serialize(self) -> str:
        return f"{self.u}\t{self.v}\t{self.w1:g}\t{self.w2:g}"


@dataclass
class ContEdge(Edge):
    """Continuous-time edge with Weibull parameters for both directions."""

    u_a: float = 0.0
    u_b: float = 0.0
    v_a: float = 0.0
    v_b: float = 0.0

    def deserialize(self, tokens: Iterable[str], graph: _NodeRegistry) -> None:
        """Read "u_label v_label u_a u_b v_a v_b w1 w2"."""
        it = iter(tokens)
        self._read_endpoints(it, graph)
        self.u_a = _next_float(it, self.u_a)
        self.u_b = _next_float(it, self.u_b)
        self.v_a = _next_float(it, self.v_a)
        self.v_b = _next_float(it, self.v_b)
        self.w1 = _next_float(it, self.w1)
        self.w2 = _next_float(it, self.w2)

    def serialize(self) -> str:
        return (
            f"{self.u}\t{self.v}\t"
            f"{self.u_a:g}\t{self.u_b:g}\t"
            f"{self.v_a:g}\t{self.v_b:g}\t"
            f"{self.w1:g}\t{self.w2:g}"
        )


def identical_conv(w: float) -> float:
    """w -> w"""
    return w


def neg_exp_conv(w: float) -> float:
    """w -> exp(-w)"""
    return math.exp(-w)


def max_pos_conv(w: float) -> float:
    """w -> max(w, 1e-32)"""
    return w if w > _INF_POS_MIN else _INF_POS_MIN


def log_neg_conv(w: float) -> float:
    """w -> -log(w), clamped away from zero."""
    return -math.log(max_pos_conv(w))


class ProbTransform:
    """Converts stored edge weights to probabilities according to the edge form."""

    def __init__(self, edge_form: int) -> None:
        try:
            form = EdgeForm(edge_form)
        except ValueError:
            raise ValueError("EdgeFormType not support!") from None
        self._prob: Callable[[float], float]
        self._log_neg: Callable[[float], float]
        if form is EdgeForm.NORMAL_EDGE:
            self._prob = identical_conv
            self._log_neg = log_neg_conv
        else:
            self._prob = neg_exp_conv
            self._log_neg = identical_conv

    def prob(self, w: float) -> float:
        """Probability represented by weight w."""
        return self._prob(w)

    def log_neg_prob(self, w: float) -> float:
        """Negative logarithm of the probability represented by w."""
        return self._log_neg(w)