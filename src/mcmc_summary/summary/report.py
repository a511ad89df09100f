"""Assemble the grouped summary of a fitted model."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import xarray as xr

from ..configs import ClassifierConfig, SummaryConfig
from ..datatypes import Draws, FitMetadata
from ..diagnostics.advisory import convergence_messages
from ..estimators import interval_probs
from ..logger import logger
from .classifier import Classification, ParsedParameter, classify_parameters
from .reducer import RHAT, select_rows, summarize_parameters


@dataclass
class SummaryReport:
    """Grouped summary tables plus descriptive information about a fit.

    Tables are :class:`xarray.DataArray` objects with dims
    ``("parameter", "statistic")`` indexed by display names. Optional
    blocks are ``None`` when the model has no such parameters.
    """

    formula: Optional[str] = None
    family: Optional[str] = None
    data_name: Optional[str] = None
    group: List[str] = field(default_factory=list)
    nobs: Optional[int] = None
    ngrps: Dict[str, int] = field(default_factory=dict)
    autocor: Optional[str] = None
    prior: Any = None
    algorithm: str = "sampling"
    chains: Optional[int] = None
    iter: Optional[int] = None
    warmup: Optional[int] = None
    thin: Optional[int] = None
    sampler: str = ""
    prob: float = 0.95
    fixed: Optional[xr.DataArray] = None
    spec_pars: Optional[xr.DataArray] = None
    rescor_pars: Optional[xr.DataArray] = None
    cor_pars: Optional[xr.DataArray] = None
    random: Dict[str, xr.DataArray] = field(default_factory=dict)
    splines: Optional[xr.DataArray] = None
    mo: Optional[xr.DataArray] = None
    gp: Optional[xr.DataArray] = None
    messages: List[str] = field(default_factory=list)

    @property
    def has_samples(self) -> bool:
        return bool(self.sampler)

    @property
    def total_draws(self) -> Optional[int]:
        """Post-warmup draws across chains."""
        if self.chains is None or self.iter is None:
            return None
        warmup = self.warmup or 0
        thin = self.thin or 1
        return int(math.ceil((self.iter - warmup) / thin * self.chains))


def _block_table(
    table: xr.DataArray, members: List[ParsedParameter]
) -> xr.DataArray:
    return select_rows(
        table, [p.name for p in members], [p.label for p in members]
    )


def assemble_report(
    report: SummaryReport,
    table: xr.DataArray,
    classification: Classification,
) -> SummaryReport:
    """Slice the full summary table into the blocks of ``classification``."""
    blocks = classification.blocks
    # always present, possibly without rows
    report.fixed = _block_table(table, blocks.get("fixed", []))
    report.spec_pars = _block_table(table, blocks.get("spec_pars", []))
    report.cor_pars = _block_table(table, blocks.get("cor_pars", []))
    for name in ("rescor_pars", "splines", "mo", "gp"):
        members = blocks.get(name, [])
        if members:
            setattr(report, name, _block_table(table, members))
    report.random = {
        g: _block_table(table, members)
        for g, members in classification.random.items()
        if members
    }
    return report


def summarize_fit(
    draws: Optional[Draws],
    metadata: Optional[FitMetadata] = None,
    prob: Optional[float] = None,
    *,
    priors: bool = False,
    config: Optional[SummaryConfig] = None,
) -> SummaryReport:
    """Create the grouped summary of a fitted model.

    Parameters
    ----------
    draws
        Posterior draws, or ``None`` for a model without samples.
    metadata
        Descriptive information and the grouping factors of the model.
    prob
        Probability mass of the uncertainty intervals; defaults to
        ``config.prob``.
    priors
        Include ``metadata.prior`` in the report.
    config
        Summary and classifier configuration.

    Raises
    ------
    InvalidProbability
        If ``prob`` is not within ``[0, 1]``.
    ClassificationGap
        If a parameter name matches no summary block or several of them.
    """
    config = config or SummaryConfig()
    metadata = metadata or FitMetadata()
    prob = config.prob if prob is None else prob
    interval_probs(prob)

    report = SummaryReport(
        formula=metadata.formula,
        family=metadata.family,
        data_name=metadata.data_name,
        group=metadata.group,
        nobs=metadata.nobs,
        ngrps=dict(metadata.ngrps),
        autocor=metadata.autocor,
        prob=float(prob),
    )
    if draws is None:
        logger.info("The model does not contain posterior samples.")
        return report

    report.algorithm = draws.algorithm
    report.chains = draws.n_chains
    report.iter = draws.iter
    report.warmup = draws.warmup
    report.thin = draws.thin
    report.sampler = draws.sampler or draws.algorithm
    if priors:
        report.prior = metadata.prior

    classifier_config: ClassifierConfig = config.classifier
    if metadata.dpars is not None:
        classifier_config = classifier_config.with_dpars(metadata.dpars)
    classification = classify_parameters(
        draws.names, report.group, classifier_config
    )
    logger.debug(
        f"summarize_fit: excluded {len(classification.excluded)} of "
        f"{len(draws.names)} parameters"
    )

    excluded = set(classification.excluded)
    pars = [n for n in draws.names if n not in excluded]
    table = summarize_parameters(draws, pars, prob)
    if draws.algorithm == "sampling":
        report.messages = convergence_messages(
            table.sel(statistic=RHAT).values,
            n_divergent=draws.n_divergent,
            adapt_delta=draws.adapt_delta,
            threshold=config.rhat_threshold,
        )
    return assemble_report(report, table, classification)
