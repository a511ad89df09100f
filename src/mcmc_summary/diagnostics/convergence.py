"""Rank-normalized split-Rhat and bulk/tail effective sample sizes.

Implements the diagnostics of Vehtari, Gelman, Simpson, Carpenter and
Bürkner (2019), "Rank-normalization, folding, and localization: An improved
R-hat for assessing convergence of MCMC" (arXiv:1903.08008).

All public functions take the draws of a single parameter as a matrix of
shape ``(iteration, chain)`` with warmup already removed. Undefined
diagnostics are returned as ``nan``; replacing them is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import arviz as az
import numpy as np
from scipy import stats

MIN_ITERATIONS = 4


def _as_chains(x) -> np.ndarray:
    """``(iteration, chain)`` -> ``(chain, draw)``; 1-D input is one chain."""
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, None]
    if arr.ndim != 2:
        raise ValueError(
            "Diagnostics expect draws of shape (iteration, chain); "
            f"got shape {arr.shape}."
        )
    return arr.T


def is_constant(x) -> bool:
    """True when every draw equals the first one exactly."""
    arr = np.asarray(x, dtype=float)
    return bool(np.all(arr == arr.flat[0]))


def _undefined(chains: np.ndarray) -> bool:
    if not np.all(np.isfinite(chains)):
        return True
    if chains.shape[1] < MIN_ITERATIONS:
        return True
    return is_constant(chains)


def split_chains(chains: np.ndarray) -> np.ndarray:
    """Split every chain in half; the middle draw of odd chains is dropped."""
    half = chains.shape[1] // 2
    return np.vstack((chains[:, :half], chains[:, -half:]))


def fold(chains: np.ndarray) -> np.ndarray:
    return np.abs(chains - np.median(chains))


def z_scale(chains: np.ndarray) -> np.ndarray:
    """Rank-normalize pooled draws to standard normal scores."""
    ranks = stats.rankdata(chains.ravel(), method="average")
    ranks = (ranks - 3 / 8) / (ranks.size - 2 * 3 / 8 + 1)
    return stats.norm.ppf(ranks).reshape(chains.shape)


def _rhat(chains: np.ndarray) -> float:
    """Classic potential scale reduction on ``(chain, draw)`` input."""
    n_draw = chains.shape[1]
    chain_mean = np.mean(chains, axis=1)
    chain_var = np.var(chains, axis=1, ddof=1)
    between = n_draw * np.var(chain_mean, ddof=1) if chains.shape[0] > 1 else 0.0
    within = np.mean(chain_var)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.sqrt((between / within + n_draw - 1) / n_draw))


def _ess(chains: np.ndarray) -> float:
    """Autocorrelation based ESS of ``(chain, draw)`` input.

    Combines within- and between-chain variance and truncates the
    autocorrelation sum with Geyer's initial positive and initial monotone
    sequence estimators.
    """
    chains = np.asarray(chains, dtype=float)
    if not np.all(np.isfinite(chains)):
        return float("nan")
    n_chain, n_draw = chains.shape
    if is_constant(chains):
        return float(chains.size)

    acov = az.autocov(chains, axis=1)
    chain_mean = chains.mean(axis=1)
    mean_var = np.mean(acov[:, 0]) * n_draw / (n_draw - 1.0)
    var_plus = mean_var * (n_draw - 1.0) / n_draw
    if n_chain > 1:
        var_plus += np.var(chain_mean, ddof=1)

    rho_hat = np.zeros(n_draw)
    rho_even = 1.0
    rho_hat[0] = rho_even
    rho_odd = 1.0 - (mean_var - np.mean(acov[:, 1])) / var_plus
    rho_hat[1] = rho_odd

    # initial positive sequence
    t = 1
    while t < (n_draw - 3) and (rho_even + rho_odd) > 0.0:
        rho_even = 1.0 - (mean_var - np.mean(acov[:, t + 1])) / var_plus
        rho_odd = 1.0 - (mean_var - np.mean(acov[:, t + 2])) / var_plus
        if (rho_even + rho_odd) >= 0:
            rho_hat[t + 1] = rho_even
            rho_hat[t + 2] = rho_odd
        t += 2

    max_t = t - 2
    if rho_even > 0:
        rho_hat[max_t + 1] = rho_even

    # initial monotone sequence
    t = 1
    while t <= max_t - 2:
        if (rho_hat[t + 1] + rho_hat[t + 2]) > (rho_hat[t - 1] + rho_hat[t]):
            rho_hat[t + 1] = (rho_hat[t - 1] + rho_hat[t]) / 2.0
            rho_hat[t + 2] = rho_hat[t + 1]
        t += 2

    n_total = n_chain * n_draw
    tau_hat = (
        -1.0
        + 2.0 * np.sum(rho_hat[: max_t + 1])
        + np.sum(rho_hat[max_t + 1 : max_t + 2])
    )
    tau_hat = max(tau_hat, 1 / np.log10(n_total))
    if np.isnan(rho_hat).any():
        return float("nan")
    return float(n_total / tau_hat)


def rhat_bulk(x) -> float:
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    return _rhat(z_scale(split_chains(chains)))


def rhat_tail(x) -> float:
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    return _rhat(z_scale(split_chains(fold(chains))))


def rhat(x) -> float:
    """Maximum of the bulk and tail (folded) rank-normalized split-Rhat."""
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    return max(rhat_bulk(x), rhat_tail(x))


def ess_bulk(x) -> float:
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    return _ess(z_scale(split_chains(chains)))


def ess_quantile(x, prob: float) -> float:
    """ESS of the indicator ``x <= quantile(x, prob)`` on split chains."""
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    threshold = np.quantile(chains, prob)
    return _ess(split_chains(chains <= threshold))


def ess_tail(x, probs: Tuple[float, float] = (0.05, 0.95)) -> float:
    """Minimum of the 5% and 95% quantile ESS."""
    chains = _as_chains(x)
    if _undefined(chains):
        return float("nan")
    low, high = probs
    return min(ess_quantile(x, low), ess_quantile(x, high))


@dataclass(frozen=True)
class ConvergenceDiagnostics:
    rhat: float
    ess_bulk: float
    ess_tail: float

    @property
    def is_defined(self) -> bool:
        return bool(
            np.isfinite(self.rhat)
            and np.isfinite(self.ess_bulk)
            and np.isfinite(self.ess_tail)
        )


def convergence_diagnostics(x) -> ConvergenceDiagnostics:
    """Rhat, bulk ESS and tail ESS of one parameter's draws."""
    return ConvergenceDiagnostics(
        rhat=rhat(x), ess_bulk=ess_bulk(x), ess_tail=ess_tail(x)
    )
