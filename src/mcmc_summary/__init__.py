from .configs import ClassifierConfig, SummaryConfig
from .datatypes import Draws, FitMetadata
from .errors import (
    ClassificationGap,
    EmptyInput,
    InvalidProbability,
    InvalidRank,
    SummaryError,
)
from .formatting import format_report, format_table
from .summary import (
    SummaryReport,
    classify_parameters,
    posterior_interval,
    posterior_summary,
    posterior_table,
    summarize_fit,
    summarize_parameters,
)

__all__ = [
    "ClassificationGap",
    "ClassifierConfig",
    "Draws",
    "EmptyInput",
    "FitMetadata",
    "InvalidProbability",
    "InvalidRank",
    "SummaryConfig",
    "SummaryError",
    "SummaryReport",
    "classify_parameters",
    "format_report",
    "format_table",
    "posterior_interval",
    "posterior_summary",
    "posterior_table",
    "summarize_fit",
    "summarize_parameters",
]
