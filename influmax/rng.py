"""Random sources for the diffusion models, plus closed-form PDF/CDF helpers."""

from __future__ import annotations

import math
import random


class RandomSource:
    """Draws values from the distributions the diffusion models need."""

    def __init__(self, seed: int | None = None) -> None:
        self._engine = random.Random(seed)

    def rand_int(self, a: int, b: int) -> int:
        """Uniform integer in the closed range [a, b]."""
        return self._engine.randint(a, b)

    def rand_unit(self) -> float:
        """Uniform float in [0, 1)."""
        return self._engine.random()

    def rand_bernoulli(self, p: float) -> bool:
        """True with probability p."""
        return self._engine.random() < p

    def rand_exp(self, a: float) -> float:
        """Exponential variate with rate a."""
        return self._engine.expovariate(a)

    def rand_weibull(self, a: float, b: float) -> float:
        """Weibull variate with shape a and scale b."""
        return self._engine.weibullvariate(b, a)


def exp_pdf(x: float, a: float) -> float:
    """Density of the exponential distribution with rate a."""
    return a * math.exp(-a * x)


def exp_cdf(x: float, a: float) -> float:
    """Cumulative distribution of the exponential distribution with rate a."""
    return 1.0 - math.exp(-a * x)


def weibull_pdf(x: float, a: float, b: float) -> float:
    """Density of the Weibull distribution with scale a and shape b."""
    return (b / a) * (x / a) ** (b - 1) * math.exp(-((x / a) ** b))


def weibull_cdf(x: float, a: float, b: float) -> float:
    """Cumulative distribution of the Weibull distribution with scale a and shape b."""
    return 1.0 - math.exp(-((x / a) ** b))