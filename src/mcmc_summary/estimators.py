"""Location, scale and quantile estimators for posterior draws.

Every estimator takes a keyword-only ``omit_invalid`` flag. Non-finite
draws are only dropped when it is set; otherwise they propagate into the
result so that a broken parameter stays visible.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Sequence, Tuple

import numpy as np
from scipy.stats import median_abs_deviation

from .errors import InvalidProbability


def _prepare(x, omit_invalid: bool) -> np.ndarray:
    arr = np.asarray(x, dtype=float).ravel()
    if omit_invalid:
        arr = arr[np.isfinite(arr)]
    return arr


def mean(x, *, omit_invalid: bool = False) -> float:
    arr = _prepare(x, omit_invalid)
    if arr.size == 0:
        return float("nan")
    return float(np.mean(arr))


def sd(x, *, omit_invalid: bool = False) -> float:
    """Sample standard deviation (``ddof=1``)."""
    arr = _prepare(x, omit_invalid)
    if arr.size < 2:
        return float("nan")
    with np.errstate(invalid="ignore"):
        return float(np.std(arr, ddof=1))


def median(x, *, omit_invalid: bool = False) -> float:
    arr = _prepare(x, omit_invalid)
    if arr.size == 0:
        return float("nan")
    return float(np.median(arr))


def mad(x, *, omit_invalid: bool = False) -> float:
    """Median absolute deviation, scaled to match the sd of a normal."""
    arr = _prepare(x, omit_invalid)
    if arr.size == 0:
        return float("nan")
    return float(median_abs_deviation(arr, scale="normal"))


def quantiles(
    x, probs: Sequence[float], *, omit_invalid: bool = False
) -> np.ndarray:
    """Linearly interpolated sample quantiles at ``probs``."""
    probs = check_probs(probs)
    arr = _prepare(x, omit_invalid)
    if arr.size == 0:
        return np.full(len(probs), np.nan)
    if np.any(np.isnan(arr)):
        return np.full(len(probs), np.nan)
    with np.errstate(invalid="ignore"):
        return np.quantile(arr, probs)


def check_probs(probs) -> np.ndarray:
    """Validate a sequence of probabilities and return it as an array."""
    arr = np.atleast_1d(np.asarray(probs, dtype=float))
    if arr.ndim != 1 or arr.size == 0:
        raise InvalidProbability("probs must be a non-empty 1-D sequence.")
    if not np.all((arr >= 0) & (arr <= 1)):
        raise InvalidProbability(
            f"All probabilities must lie in [0, 1]; got {arr.tolist()}."
        )
    return arr


def interval_probs(prob: float) -> Tuple[float, float]:
    """Tail probabilities of the central interval covering ``prob``."""
    if (
        isinstance(prob, bool)
        or not isinstance(prob, Real)
        or not (0 <= prob <= 1)
    ):
        raise InvalidProbability(
            f"'prob' must be a single numeric value in [0, 1]; got {prob!r}."
        )
    prob = float(prob)
    return (1 - prob) / 2, 1 - (1 - prob) / 2


class Location(Enum):
    MEAN = "mean"
    MEDIAN = "median"

    def compute(self, x, *, omit_invalid: bool = False) -> float:
        if self is Location.MEAN:
            return mean(x, omit_invalid=omit_invalid)
        return median(x, omit_invalid=omit_invalid)


class Scale(Enum):
    SD = "sd"
    MAD = "mad"

    def compute(self, x, *, omit_invalid: bool = False) -> float:
        if self is Scale.SD:
            return sd(x, omit_invalid=omit_invalid)
        return mad(x, omit_invalid=omit_invalid)


@dataclass(frozen=True)
class EstimatorPair:
    location: Location
    scale: Scale


STANDARD = EstimatorPair(Location.MEAN, Scale.SD)
ROBUST = EstimatorPair(Location.MEDIAN, Scale.MAD)


def select_estimators(robust: bool) -> EstimatorPair:
    """``(median, mad)`` when ``robust`` else ``(mean, sd)``."""
    return ROBUST if robust else STANDARD
