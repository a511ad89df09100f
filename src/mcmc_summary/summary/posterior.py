"""Summaries of arbitrary posterior draw arrays."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import xarray as xr

from ..datatypes import Draws
from ..errors import EmptyInput, InvalidRank
from ..estimators import check_probs, interval_probs, quantiles, select_estimators


def quantile_labels(probs: Sequence[float]) -> List[str]:
    return [f"Q{p * 100:g}" for p in probs]


def _as_array(x, names, pars):
    if isinstance(x, Draws):
        selected = x.select(pars)
        return x.as_matrix(selected), selected
    if isinstance(x, xr.DataArray):
        if names is None and x.ndim >= 2:
            names = [str(v) for v in x[x.dims[1]].values]
        x = x.values
    return np.asarray(x, dtype=float), names


def _summarize_matrix(x: np.ndarray, probs, estimators, omit_invalid) -> np.ndarray:
    out = np.empty((x.shape[1], 2 + len(probs)))
    for j in range(x.shape[1]):
        col = x[:, j]
        out[j, 0] = estimators.location.compute(col, omit_invalid=omit_invalid)
        out[j, 1] = estimators.scale.compute(col, omit_invalid=omit_invalid)
        out[j, 2:] = quantiles(col, probs, omit_invalid=omit_invalid)
    return out


def posterior_summary(
    x,
    probs: Sequence[float] = (0.025, 0.975),
    robust: bool = False,
    *,
    names: Optional[Sequence[str]] = None,
    pars: Optional[Sequence[str]] = None,
    omit_invalid: bool = False,
) -> xr.DataArray:
    """Point estimates, estimation errors and quantiles of posterior draws.

    Parameters
    ----------
    x
        Draws of shape ``(draw, parameter)`` or ``(draw, parameter, extra)``,
        e.g. posterior predictions per observation, or a :class:`Draws`
        object whose chains are pooled.
    probs
        Quantile probabilities to report.
    robust
        Use median and MAD instead of mean and standard deviation.
    names
        Labels of the parameter axis.
    pars
        Regular expressions selecting parameters when ``x`` is a
        :class:`Draws`.
    omit_invalid
        Drop non-finite draws before estimating. Off by default, so a
        non-finite draw shows up as ``nan`` in the affected row.

    Returns
    -------
    xarray.DataArray
        Dims ``("parameter", "statistic")`` or
        ``("parameter", "statistic", "extra")`` with statistics
        ``Estimate``, ``Est.Error`` and ``Q<100 p>`` for each ``p``.
    """
    probs = check_probs(probs)
    arr, names = _as_array(x, names, pars)
    if arr.size == 0:
        raise EmptyInput("No posterior samples supplied.")
    if arr.ndim not in (2, 3):
        raise InvalidRank(f"'x' must be of dimension 2 or 3; got {arr.ndim}.")

    estimators = select_estimators(robust)
    statistics = ["Estimate", "Est.Error", *quantile_labels(probs)]
    coords = {"statistic": statistics}
    if names is not None:
        coords["parameter"] = [str(n) for n in names]

    if arr.ndim == 2:
        out = _summarize_matrix(arr, probs, estimators, omit_invalid)
        return xr.DataArray(
            out, dims=("parameter", "statistic"), coords=coords
        )

    out = np.stack(
        [
            _summarize_matrix(arr[:, :, k], probs, estimators, omit_invalid)
            for k in range(arr.shape[2])
        ],
        axis=2,
    )
    return xr.DataArray(
        out, dims=("parameter", "statistic", "extra"), coords=coords
    )


def posterior_interval(
    x,
    prob: float = 0.95,
    *,
    names: Optional[Sequence[str]] = None,
    pars: Optional[Sequence[str]] = None,
) -> xr.DataArray:
    """Central posterior interval bounds covering ``prob`` per parameter."""
    probs = interval_probs(prob)
    arr, names = _as_array(x, names, pars)
    if arr.size == 0:
        raise EmptyInput("No posterior samples supplied.")
    if arr.ndim != 2:
        raise InvalidRank(f"'x' must be of dimension 2; got {arr.ndim}.")
    bounds = np.quantile(arr, probs, axis=0).T
    coords = {"bound": [f"{p * 100:g}%" for p in probs]}
    if names is not None:
        coords["parameter"] = [str(n) for n in names]
    return xr.DataArray(bounds, dims=("parameter", "bound"), coords=coords)
