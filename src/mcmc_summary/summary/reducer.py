"""Per-parameter summary rows with convergence diagnostics."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
import xarray as xr

from ..datatypes import Draws
from ..diagnostics.convergence import convergence_diagnostics
from ..estimators import interval_probs, mean, quantiles, sd
from ..logger import logger

RHAT = "Rhat"
BULK_ESS = "Bulk_ESS"
TAIL_ESS = "Tail_ESS"
ESS_COLUMNS = (BULK_ESS, TAIL_ESS)


def interval_labels(prob: float) -> List[str]:
    return [f"l-{prob * 100:g}% CI", f"u-{prob * 100:g}% CI"]


def summary_columns(prob: float) -> List[str]:
    return ["Estimate", "Est.Error", *interval_labels(prob), RHAT, *ESS_COLUMNS]


def summarize_parameters(
    draws: Draws,
    pars: Optional[Sequence[str]] = None,
    prob: float = 0.95,
) -> xr.DataArray:
    """Summarize the draws of every parameter in ``pars``.

    Parameters
    ----------
    draws
        Posterior draws of shape ``(iteration, chain, parameter)``.
    pars
        Exact parameter names, in the order the rows should appear.
        Defaults to all parameters of ``draws``.
    prob
        Probability mass of the central uncertainty interval.

    Returns
    -------
    xarray.DataArray
        Dims ``("parameter", "statistic")`` with columns ``Estimate``,
        ``Est.Error``, the interval bounds, ``Rhat``, ``Bulk_ESS`` and
        ``Tail_ESS``. Boolean coordinates ``valid`` (all draws finite) and
        ``diagnostics_defined`` (raw diagnostics finite) label each row.

    Notes
    -----
    Undefined diagnostics of valid parameters, such as those of a constant
    offset, are replaced by ``Rhat = 1`` and ``ESS = S`` where ``S`` is the
    total number of draws. Invalid parameters keep their raw ``nan``
    diagnostics.
    """
    probs = interval_probs(prob)
    names = draws.select() if pars is None else list(pars)
    sims = draws.subset(names)
    n_total = draws.n_draws
    logger.debug(
        f"summarize_parameters: {len(names)} parameters, "
        f"{draws.n_chains} chains x {draws.n_iterations} iterations"
    )

    values = np.full((len(names), 7), np.nan)
    valid = np.zeros(len(names), dtype=bool)
    defined = np.zeros(len(names), dtype=bool)
    for i in range(len(names)):
        sims_i = sims[:, :, i]
        valid[i] = bool(np.all(np.isfinite(sims_i)))
        values[i, 0] = mean(sims_i)
        values[i, 1] = sd(sims_i)
        values[i, 2:4] = quantiles(sims_i, probs)
        diag = convergence_diagnostics(sims_i)
        defined[i] = diag.is_defined
        values[i, 4] = diag.rhat
        values[i, 5] = np.round(diag.ess_bulk)
        values[i, 6] = np.round(diag.ess_tail)

    rhat_col, bulk_col, tail_col = values[:, 4], values[:, 5], values[:, 6]
    rhat_col[valid & ~np.isfinite(rhat_col)] = 1.0
    bulk_col[valid & ~np.isfinite(bulk_col)] = n_total
    tail_col[valid & ~np.isfinite(tail_col)] = n_total
    n_fallback = int(np.sum(valid & ~defined))
    if n_fallback:
        logger.debug(
            f"summarize_parameters: undefined diagnostics replaced for "
            f"{n_fallback} parameter(s)"
        )

    return xr.DataArray(
        values,
        dims=("parameter", "statistic"),
        coords={
            "parameter": names,
            "statistic": summary_columns(prob),
            "valid": ("parameter", valid),
            "diagnostics_defined": ("parameter", defined),
        },
        attrs={"prob": float(prob), "n_draws": n_total},
    )


def relabel(table: xr.DataArray, labels: Sequence[str]) -> xr.DataArray:
    """Replace the parameter labels of ``table`` with display names."""
    labels = list(labels)
    if len(labels) != table.sizes["parameter"]:
        raise ValueError(
            f"Got {len(labels)} labels for {table.sizes['parameter']} rows."
        )
    return table.assign_coords(parameter=labels)


def select_rows(
    table: xr.DataArray,
    names: Sequence[str],
    labels: Optional[Sequence[str]] = None,
) -> xr.DataArray:
    """Rows of ``table`` for ``names`` in that order, optionally relabelled."""
    position = {str(p): i for i, p in enumerate(table["parameter"].values)}
    rows = table.isel(parameter=[position[n] for n in names])
    if labels is not None:
        rows = relabel(rows, labels)
    return rows
