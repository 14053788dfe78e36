"""Statistical primitives shared by every journal analysis.

All functions are pure and total: empty or degenerate input returns a
documented default (usually 0.0) instead of NaN or raising.  Standard
deviation and variance are population statistics (divide by n).

Grading
-------
A single A-F table is used by every composite score::

    >= 90  A
    >= 80  B
    >= 70  C
    >= 60  D
    else   F
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence

import numpy as np

from ..core.enums import Grade

# z-score for a two-sided 95% interval
Z_95 = 1.96

_GRADE_THRESHOLDS: list[tuple[float, Grade]] = [
    (90.0, Grade.A),
    (80.0, Grade.B),
    (70.0, Grade.C),
    (60.0, Grade.D),
]


def score_to_grade(score: float) -> Grade:
    """Convert a numeric score (0-100) to a letter grade."""
    for threshold, grade in _GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return Grade.F


def round_score(value: float) -> int:
    """Round half up, the way displayed scores are rounded."""
    if not math.isfinite(value):
        return 0
    return int(math.floor(value + 0.5))


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` for a zero denominator."""
    if denominator == 0:
        return default
    return numerator / denominator


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean; 0.0 for an empty sequence."""
    if len(xs) == 0:
        return 0.0
    return float(np.mean(np.asarray(xs, dtype=float)))


def variance(xs: Sequence[float]) -> float:
    """Population variance; 0.0 when fewer than two values."""
    if len(xs) < 2:
        return 0.0
    return float(np.var(np.asarray(xs, dtype=float)))


def std_dev(xs: Sequence[float]) -> float:
    """Population standard deviation; 0.0 when fewer than two values."""
    if len(xs) < 2:
        return 0.0
    return float(np.std(np.asarray(xs, dtype=float)))


def coefficient_of_variation(xs: Sequence[float]) -> float:
    """``std_dev / |mean|``.

    A zero mean is replaced by 1 as the denominator.
    """
    m = mean(xs)
    return std_dev(xs) / abs(m if m != 0 else 1.0)


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson r; 0.0 on empty input, length mismatch or zero variance."""
    n = len(xs)
    if n == 0 or n != len(ys):
        return 0.0
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    dx = x - x.mean()
    dy = y - y.mean()
    denom = math.sqrt(float(np.sum(dx * dx)) * float(np.sum(dy * dy)))
    if denom == 0:
        return 0.0
    return float(np.clip(np.sum(dx * dy) / denom, -1.0, 1.0))


def _counts(category_counts: Mapping[str, int] | Iterable[int]) -> list[int]:
    if isinstance(category_counts, Mapping):
        values = category_counts.values()
    else:
        values = category_counts
    return [c for c in values if c > 0]


def shannon_entropy(category_counts: Mapping[str, int] | Iterable[int]) -> float:
    """``-sum(p * log2 p)`` over a frequency table."""
    counts = _counts(category_counts)
    total = sum(counts)
    if total == 0:
        return 0.0
    p = np.asarray(counts, dtype=float) / total
    return float(-np.sum(p * np.log2(p)))


def normalized_entropy(category_counts: Mapping[str, int] | Iterable[int]) -> float:
    """Entropy divided by ``log2(k)``; 0.0 when there are fewer than 2 categories."""
    counts = _counts(category_counts)
    if len(counts) < 2:
        return 0.0
    return shannon_entropy(counts) / math.log2(len(counts))


def linear_scale(
    value: float,
    lo: float,
    hi: float,
    out_lo: float = 0.0,
    out_hi: float = 100.0,
) -> float:
    """Map ``value`` from [lo, hi] onto [out_lo, out_hi], clamped."""
    if hi == lo:
        return out_lo
    ratio = clamp((value - lo) / (hi - lo), 0.0, 1.0)
    return out_lo + ratio * (out_hi - out_lo)


def confidence_interval_95(
    score: float,
    std: float,
    n: int,
    lo: float = 0.0,
    hi: float = 100.0,
) -> tuple[float, float]:
    """``score +/- 1.96 * std / sqrt(n)`` clamped to [lo, hi]."""
    if n <= 0:
        return (clamp(score, lo, hi), clamp(score, lo, hi))
    margin = Z_95 * (std / math.sqrt(n))
    return (max(lo, score - margin), min(hi, score + margin))
