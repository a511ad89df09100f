"""Relative frequency tables of discrete posterior draws."""

from __future__ import annotations

import warnings
from typing import Optional, Sequence

import numpy as np
import xarray as xr

from ..errors import EmptyInput, InvalidRank
from ..logger import logger


def _format_level(level) -> str:
    value = float(level)
    if value.is_integer():
        return str(int(value))
    return f"{value:g}"


def posterior_table(
    x,
    levels: Optional[Sequence[float]] = None,
    *,
    labels: Optional[Sequence[str]] = None,
    names: Optional[Sequence[str]] = None,
) -> xr.DataArray:
    """Tabulate the relative frequency of each value per column of ``x``.

    Mostly useful for posterior predictions of ordinal or categorical
    models, where each column holds the draws for one observation.

    Parameters
    ----------
    x
        Draws of shape ``(draw, observation)``; a 1-D array is treated as a
        single observation.
    levels
        Values to tabulate. Defaults to the sorted unique finite values of
        ``x``. Draws outside ``levels`` are not counted.
    labels
        Names of the levels used in the column labels, e.g. the categories
        of an ordinal response. Ignored unless one is given per level.
    names
        Labels of the observation axis.

    Returns
    -------
    xarray.DataArray
        Dims ``("observation", "level")``; level labels read
        ``"P(Y = <level>)"``.
    """
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, None]
    if arr.ndim != 2:
        raise InvalidRank(f"'x' must be of dimension 1 or 2; got {arr.ndim}.")
    if arr.size == 0:
        raise EmptyInput("No posterior samples supplied.")

    finite = np.isfinite(arr)
    if not np.all(finite):
        n_bad = int(np.sum(~finite))
        msg = f"{n_bad} non-finite draw(s) will be ignored in 'posterior_table'."
        logger.warning(msg)
        warnings.warn(msg, RuntimeWarning, stacklevel=2)

    if levels is None:
        levels = np.unique(arr[finite])
    levels = np.asarray(levels, dtype=float)

    counts = np.zeros((arr.shape[1], levels.size))
    for k, level in enumerate(levels):
        counts[:, k] = np.sum(arr == level, axis=0)
    totals = counts.sum(axis=1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        freqs = counts / totals

    if labels is None or len(labels) != len(levels):
        labels = [_format_level(level) for level in levels]
    coords = {"level": [f"P(Y = {label})" for label in labels]}
    if names is not None:
        coords["observation"] = [str(n) for n in names]
    return xr.DataArray(freqs, dims=("observation", "level"), coords=coords)
