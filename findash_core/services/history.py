from __future__ import annotations

import datetime as dt
from typing import List, Optional

import numpy as np

from findash_core.domain.models import HistoryPoint
from findash_core.services.periods import add_months

# Annualised noise band applied on top of the expected return each month.
NOISE_BAND = 0.01


def synthesize_history(
    months_elapsed: int,
    initial_value: float,
    annual_return_rate: float,
    rng: Optional[np.random.Generator] = None,
    today: Optional[dt.date] = None,
) -> List[HistoryPoint]:
    """
    Monthly value history from purchase to now, one point per elapsed month.

    Each month grows the previous value by (rate + noise) / 12 with noise drawn
    uniformly from [-NOISE_BAND, NOISE_BAND). Pass a seeded generator (or any
    object with a numpy-style ``uniform``) for reproducible output.
    """
    if months_elapsed <= 0:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    today = today or dt.date.today()

    noise = rng.uniform(-NOISE_BAND, NOISE_BAND, size=months_elapsed)

    value = float(initial_value)
    history: List[HistoryPoint] = []
    for i in range(months_elapsed):
        value = value * (1 + (annual_return_rate + float(noise[i])) / 12)
        history.append(HistoryPoint(date=add_months(today, -(months_elapsed - i - 1)), value=value))
    return history
