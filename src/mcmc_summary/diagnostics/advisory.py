"""Non-fatal warnings about the reliability of a fit."""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from ..logger import logger

DIVERGENCE_URL = (
    "http://mc-stan.org/misc/warnings.html"
    "#divergent-transitions-after-warmup"
)


def rhat_message(rhats, threshold: float = 1.05) -> Optional[str]:
    vals = np.asarray(rhats, dtype=float)
    vals = vals[np.isfinite(vals)]
    if vals.size == 0 or not np.any(vals > threshold):
        return None
    return (
        "Parts of the model have not converged "
        f"(some Rhats are > {threshold:g}). Be careful when analysing the "
        "results! We recommend running more iterations and/or setting "
        "stronger priors."
    )


def divergence_message(
    n_divergent: int, adapt_delta: Optional[float] = None
) -> Optional[str]:
    if n_divergent <= 0:
        return None
    if adapt_delta is None:
        hint = "Increasing adapt_delta may help."
    else:
        hint = f"Increasing adapt_delta above {adapt_delta:g} may help."
    return (
        f"There were {n_divergent} divergent transitions after warmup. "
        f"{hint} See {DIVERGENCE_URL}"
    )


def convergence_messages(
    rhats,
    n_divergent: int = 0,
    adapt_delta: Optional[float] = None,
    threshold: float = 1.05,
) -> List[str]:
    """Collect advisory messages and log each of them as a warning."""
    messages = [
        msg
        for msg in (
            rhat_message(rhats, threshold),
            divergence_message(n_divergent, adapt_delta),
        )
        if msg is not None
    ]
    for msg in messages:
        logger.warning(msg)
    return messages
