"""Influence maximization: cascade simulation and greedy, RR-set, TIM+ and IMM seed selection."""

__version__ = "2.2.0"