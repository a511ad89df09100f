"""Plain-text rendering of summary tables and reports."""

from __future__ import annotations

from typing import List, Sequence

import numpy as np
import xarray as xr

from .summary.reducer import ESS_COLUMNS
from .summary.report import SummaryReport


def _format_value(value: float, digits: int) -> str:
    if not np.isfinite(value):
        return "NA" if np.isnan(value) else ("Inf" if value > 0 else "-Inf")
    return f"{value:.{digits}f}"


def format_table(
    table: xr.DataArray,
    digits: int = 2,
    no_digits: Sequence[str] = ESS_COLUMNS,
) -> str:
    """Right-aligned text table; ``no_digits`` columns are shown as integers."""
    if not isinstance(digits, (int, np.integer)) or isinstance(digits, bool):
        raise ValueError("'digits' should be a single integer value.")
    rows = [str(r) for r in table[table.dims[0]].values]
    cols = [str(c) for c in table[table.dims[1]].values]
    values = np.asarray(table.values, dtype=float)
    cells = [
        [
            _format_value(values[i, j], 0 if col in no_digits else digits)
            for j, col in enumerate(cols)
        ]
        for i in range(len(rows))
    ]
    row_width = max([len(r) for r in rows], default=0)
    widths = [
        max([len(col)] + [len(cells[i][j]) for i in range(len(rows))])
        for j, col in enumerate(cols)
    ]
    lines = [
        " " * row_width
        + "".join(f" {col:>{w}}" for col, w in zip(cols, widths))
    ]
    for row, row_cells in zip(rows, cells):
        lines.append(
            f"{row:<{row_width}}"
            + "".join(f" {cell:>{w}}" for cell, w in zip(row_cells, widths))
        )
    return "\n".join(lines)


def _has_rows(table) -> bool:
    return table is not None and table.sizes.get("parameter", 0) > 0


def format_report(report: SummaryReport, digits: int = 2) -> str:
    """Render a :class:`SummaryReport` as a human-readable text block."""
    out: List[str] = []
    if report.family:
        out.append(f" Family: {report.family}")
    if report.formula:
        out.append(f"Formula: {report.formula}")
    data_line = f"   Data: {report.data_name or 'unknown'}"
    if report.nobs is not None:
        data_line += f" (Number of observations: {report.nobs})"
    out.append(data_line)

    if not report.has_samples:
        out.append("\nThe model does not contain posterior samples.")
        return "\n".join(out)

    out.append(
        f"Samples: {report.chains} chains, each with iter = {report.iter}; "
        f"warmup = {report.warmup}; thin = {report.thin};\n"
        f"         total post-warmup samples = {report.total_draws}\n"
    )

    if report.prior is not None:
        out.append(f"Priors: \n{report.prior}\n")

    sections = [
        ("Smooth Terms:", report.splines),
        ("Gaussian Process Terms:", report.gp),
        ("Correlation Structures:", report.cor_pars),
    ]
    for title, table in sections:
        if _has_rows(table):
            out.append(f"{title} \n{format_table(table, digits)}\n")

    if report.random:
        out.append("Group-Level Effects: ")
        for g, table in report.random.items():
            levels = report.ngrps.get(g, "?")
            out.append(f"~{g} (Number of levels: {levels}) ")
            out.append(f"{format_table(table, digits)}\n")

    sections = [
        ("Population-Level Effects:", report.fixed),
        ("Simplex Parameters:", report.mo),
        ("Family Specific Parameters:", report.spec_pars),
        ("Residual Correlations:", report.rescor_pars),
    ]
    for title, table in sections:
        if _has_rows(table):
            out.append(f"{title} \n{format_table(table, digits)}\n")

    footer = f"Samples were drawn using {report.sampler}. "
    if report.algorithm == "sampling":
        footer += (
            "For each parameter, Bulk_ESS\n"
            "and Tail_ESS are effective sample size measures, "
            "and Rhat is the potential\n"
            "scale reduction factor on split chains "
            "(at convergence, Rhat = 1)."
        )
    out.append(footer)
    return "\n".join(out)
