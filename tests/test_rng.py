import math

import pytest

from influmax.rng import (
    RandomSource,
    exp_cdf,
    exp_pdf,
    weibull_cdf,
    weibull_pdf,
)


def test_same_seed_gives_same_sequence():
    first = RandomSource(42)
    second = RandomSource(42)
    assert [first.rand_unit() for _ in range(20)] == [second.rand_unit() for _ in range(20)]


def test_rand_int_is_inclusive_and_bounded():
    rng = RandomSource(7)
    draws = {rng.rand_int(2, 5) for _ in range(500)}
    assert draws == {2, 3, 4, 5}


def test_rand_int_rejects_empty_range():
    with pytest.raises(ValueError):
        RandomSource(1).rand_int(5, 2)


def test_rand_unit_in_range():
    rng = RandomSource(3)
    assert all(0.0 <= rng.rand_unit() < 1.0 for _ in range(200))


def test_bernoulli_extremes():
    rng = RandomSource(11)
    assert not any(rng.rand_bernoulli(0.0) for _ in range(100))
    assert all(rng.rand_bernoulli(1.0) for _ in range(100))


def test_bernoulli_frequency():
    rng = RandomSource(5)
    hits = sum(rng.rand_bernoulli(0.3) for _ in range(20000))
    assert abs(hits / 20000 - 0.3) < 0.02


def test_exponential_mean_matches_rate():
    rng = RandomSource(9)
    rate = 2.0
    samples = [rng.rand_exp(rate) for _ in range(20000)]
    assert all(s >= 0 for s in samples)
    assert abs(sum(samples) / len(samples) - 1.0 / rate) < 0.02


def test_weibull_samples_positive_and_scaled():
    rng = RandomSource(13)
    samples = [rng.rand_weibull(1.0, 3.0) for _ in range(20000)]
    assert all(s >= 0 for s in samples)
    # shape 1 reduces to an exponential with mean equal to the scale
    assert abs(sum(samples) / len(samples) - 3.0) < 0.15


def test_exp_cdf_starts_at_zero_and_tends_to_one():
    assert exp_cdf(0.0, 2.0) == 0.0
    assert exp_cdf(50.0, 2.0) == pytest.approx(1.0)


def test_exp_pdf_at_zero_equals_rate():
    assert exp_pdf(0.0, 3.0) == pytest.approx(3.0)


def test_weibull_shape_one_is_exponential():
    for x in (0.1, 0.5, 2.0, 4.0):
        assert weibull_cdf(x, 2.0, 1.0) == pytest.approx(exp_cdf(x, 0.5))
        assert weibull_pdf(x, 2.0, 1.0) == pytest.approx(exp_pdf(x, 0.5))


@pytest.mark.parametrize("x", [0.3, 1.0, 1.7])
def test_weibull_pdf_is_derivative_of_cdf(x):
    h = 1e-6
    numeric = (weibull_cdf(x + h, 1.5, 2.5) - weibull_cdf(x - h, 1.5, 2.5)) / (2 * h)
    assert numeric == pytest.approx(weibull_pdf(x, 1.5, 2.5), rel=1e-5)


def test_weibull_cdf_monotone():
    values = [weibull_cdf(x / 10, 1.0, 2.0) for x in range(1, 40)]
    assert values == sorted(values)
    assert all(0.0 <= v <= 1.0 for v in values)
    assert not math.isnan(values[0])