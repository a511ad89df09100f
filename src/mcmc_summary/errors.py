"""Exceptions raised by the summary routines."""

from __future__ import annotations

from typing import Sequence


class SummaryError(ValueError):
    """Base class for all mcmc_summary errors."""


class InvalidProbability(SummaryError):
    """A coverage or quantile probability lies outside ``[0, 1]``."""


class EmptyInput(SummaryError):
    """No posterior samples were supplied."""


class InvalidRank(SummaryError):
    """The sample array has an unsupported number of dimensions."""


class ClassificationGap(SummaryError):
    """Parameter names that no naming rule (or more than one) claims."""

    def __init__(
        self,
        unmatched: Sequence[str] = (),
        ambiguous: Sequence[str] = (),
        duplicated: Sequence[str] = (),
    ):
        self.unmatched = list(unmatched)
        self.ambiguous = list(ambiguous)
        self.duplicated = list(duplicated)
        parts = []
        if self.unmatched:
            parts.append(f"unmatched: {', '.join(self.unmatched)}")
        if self.ambiguous:
            parts.append(f"matched by several rules: {', '.join(self.ambiguous)}")
        if self.duplicated:
            parts.append(f"duplicated: {', '.join(self.duplicated)}")
        super().__init__(
            "Parameter names do not follow the known naming conventions ("
            + "; ".join(parts)
            + ")."
        )
