"""Monetary rounding helpers."""

import math


def round_money(value: float) -> float:
    """Round to cents with halves rounded towards positive infinity."""
    return math.floor(value * 100 + 0.5) / 100
