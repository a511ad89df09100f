from .classifier import (
    Classification,
    ParameterKind,
    ParsedParameter,
    classify_parameters,
    parse_parameter_name,
    partition_parameters,
)
from .posterior import posterior_interval, posterior_summary
from .reducer import summarize_parameters
from .report import SummaryReport, summarize_fit
from .table import posterior_table

__all__ = [
    "Classification",
    "ParameterKind",
    "ParsedParameter",
    "SummaryReport",
    "classify_parameters",
    "parse_parameter_name",
    "partition_parameters",
    "posterior_interval",
    "posterior_summary",
    "posterior_table",
    "summarize_fit",
    "summarize_parameters",
]
