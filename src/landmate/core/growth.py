"""Escalation growth primitives, stateless and without agreement knowledge."""

import math
from typing import Optional


def _clean(value: Optional[float]) -> float:
    """Documents frequently omit fields; missing or NaN inputs count as zero."""
    if value is None or math.isnan(value):
        return 0.0
    return value


def compounding_growth(base: Optional[float], rate: Optional[float], periods: float) -> float:
    """Compound escalation: base * (1 + rate) ** periods."""
    return _clean(base) * (1 + _clean(rate)) ** _clean(periods)


def linear_growth(base: Optional[float], rate: Optional[float], periods: float) -> float:
    """Linear escalation: base * (1 + rate * periods)."""
    return _clean(base) * (1 + _clean(rate) * _clean(periods))


def round_to(value: float, precision: int = 4) -> float:
    return round(value, precision)
