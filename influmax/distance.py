"""Distance weighting used when accounting for propagation depth."""


def distance_function(x: int) -> float:
    """Reciprocal of x, or 0 when x is 0."""
    return 1.0 / x if x else 0.0