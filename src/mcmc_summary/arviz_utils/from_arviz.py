"""Extracts posterior draws from arviz InferenceData objects"""

from itertools import product
from typing import Any, Dict, List, Optional, Sequence, Tuple

import arviz as az
import numpy as np

from ..datatypes import Draws
from ..logger import logger


def _flatten_variable(
    name: str, values: np.ndarray
) -> Tuple[List[str], np.ndarray]:
    """Split a ``(chain, draw, *shape)`` variable into scalar parameters.

    Non-scalar variables get 1-based element indices, ``x[1]``, ``x[1,2]``.
    """
    n_chain, n_draw = values.shape[:2]
    shape = values.shape[2:]
    if not shape:
        return [name], values[:, :, None]
    names = [
        f"{name}[{','.join(str(i + 1) for i in idx)}]"
        for idx in product(*(range(n) for n in shape))
    ]
    return names, values.reshape(n_chain, n_draw, -1)


def _sampler_attrs(idata: az.InferenceData) -> Dict[str, Any]:
    """Attributes of the posterior group overlaid with the global ones."""
    attrs = dict(getattr(idata.posterior, "attrs", {}) or {})
    attrs.update(getattr(idata, "attrs", {}) or {})
    return attrs


def _count_warmup(idata: az.InferenceData, attrs, thin: int) -> int:
    if hasattr(idata, "warmup_posterior"):
        return int(idata.warmup_posterior.sizes.get("draw", 0)) * thin
    return int(attrs.get("num_warmup", 0))


def get_divergences(idata: az.InferenceData) -> Optional[np.ndarray]:
    """Divergence indicators as ``(draw, chain)`` or ``None`` if absent."""
    if not hasattr(idata, "sample_stats"):
        return None
    if "diverging" not in idata.sample_stats:
        return None
    div = idata.sample_stats["diverging"].transpose("chain", "draw")
    return np.asarray(div).T.astype(int)


def draws_from_inference_data(
    idata: az.InferenceData,
    var_names: Optional[Sequence[str]] = None,
    algorithm: str = "sampling",
) -> Draws:
    """Build :class:`Draws` from the posterior group of ``idata``.

    Sampler information is read from the attributes when present:
    ``thin``, ``num_warmup`` (unless a ``warmup_posterior`` group is
    stored), ``sampler_type`` and ``target_accept_prob``.
    """
    posterior = idata.posterior
    if var_names is None:
        var_names = list(posterior.data_vars)

    names: List[str] = []
    blocks = []
    for var in var_names:
        arr = posterior[var]
        extra = [d for d in arr.dims if d not in ("chain", "draw")]
        var_par_names, values = _flatten_variable(
            str(var),
            np.asarray(arr.transpose("chain", "draw", *extra), dtype=float),
        )
        names.extend(var_par_names)
        blocks.append(values)
    if not blocks:
        raise ValueError("InferenceData posterior contains no variables.")

    # (chain, draw, parameter) -> (draw, chain, parameter)
    samples = np.transpose(np.concatenate(blocks, axis=2), (1, 0, 2))

    attrs = _sampler_attrs(idata)
    thin = int(attrs.get("thin", 1))
    warmup = _count_warmup(idata, attrs, thin)
    adapt_delta = attrs.get("target_accept_prob")
    logger.debug(
        f"draws_from_inference_data: {len(names)} parameters from "
        f"{len(var_names)} variables"
    )
    return Draws(
        samples=samples,
        names=names,
        warmup=warmup,
        thin=thin,
        algorithm=algorithm,
        sampler=str(attrs.get("sampler_type", "")),
        divergent=get_divergences(idata),
        adapt_delta=None if adapt_delta is None else float(adapt_delta),
    )
