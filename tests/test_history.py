import datetime as dt

import numpy as np
import pytest

from findash_core.services.history import NOISE_BAND, synthesize_history

TODAY = dt.date(2024, 11, 18)


class _FixedNoise:
    def __init__(self, value: float):
        self.value = value

    def uniform(self, low, high, size):
        return np.full(size, self.value)


def test_one_point_per_month_ending_today():
    points = synthesize_history(4, 1000.0, 0.08, rng=np.random.default_rng(1), today=TODAY)
    assert [p.date for p in points] == [
        dt.date(2024, 8, 18),
        dt.date(2024, 9, 18),
        dt.date(2024, 10, 18),
        dt.date(2024, 11, 18),
    ]


@pytest.mark.parametrize("months", [0, -3])
def test_no_elapsed_months_gives_empty_history(months):
    assert synthesize_history(months, 1000.0, 0.08, today=TODAY) == []


def test_zero_noise_is_exact_compounding():
    points = synthesize_history(3, 1200.0, 0.12, rng=_FixedNoise(0.0), today=TODAY)
    assert [p.value for p in points] == pytest.approx([1212.0, 1224.12, 1236.3612])


def test_seeded_generator_is_reproducible():
    a = synthesize_history(24, 10000.0, 0.08, rng=np.random.default_rng(7), today=TODAY)
    b = synthesize_history(24, 10000.0, 0.08, rng=np.random.default_rng(7), today=TODAY)
    assert a == b


@pytest.mark.parametrize("rate", [0.0, 0.04, 0.15])
def test_values_stay_in_noise_envelope(rate):
    v0 = 5000.0
    points = synthesize_history(36, v0, rate, rng=np.random.default_rng(42), today=TODAY)
    spread = (abs(rate) + NOISE_BAND) / 12
    for k, p in enumerate(points, start=1):
        assert v0 * (1 - spread) ** k <= p.value * (1 + 1e-12)
        assert p.value <= v0 * (1 + spread) ** k * (1 + 1e-12)


def test_dates_are_ascending():
    points = synthesize_history(30, 100.0, 0.05, rng=np.random.default_rng(3), today=dt.date(2024, 3, 31))
    dates = [p.date for p in points]
    assert dates == sorted(dates)
    assert dates[-1] == dt.date(2024, 3, 31)
