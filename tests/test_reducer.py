import numpy as np
import pytest

from mcmc_summary.datatypes import Draws
from mcmc_summary.errors import InvalidProbability
from mcmc_summary.summary.reducer import (
    relabel,
    select_rows,
    summarize_parameters,
    summary_columns,
)


@pytest.fixture
def draws(rng):
    samples = rng.normal(size=(1000, 4, 3))
    samples[:, :, 1] = 2.5
    return Draws(samples, ["b_x", "b_Intercept", "sigma"], warmup=1000)


def test_columns():
    assert summary_columns(0.95) == [
        "Estimate",
        "Est.Error",
        "l-95% CI",
        "u-95% CI",
        "Rhat",
        "Bulk_ESS",
        "Tail_ESS",
    ]
    assert summary_columns(0.9)[2:4] == ["l-90% CI", "u-90% CI"]


def test_constant_parameter_row(draws):
    for prob in (0.5, 0.95):
        table = summarize_parameters(draws, prob=prob)
        row = table.sel(parameter="b_Intercept").values
        np.testing.assert_allclose(row, [2.5, 0.0, 2.5, 2.5, 1.0, 4000, 4000])
        assert bool(table["valid"].sel(parameter="b_Intercept"))
        assert not bool(table["diagnostics_defined"].sel(parameter="b_Intercept"))


def test_well_behaved_parameter(draws):
    table = summarize_parameters(draws)
    row = table.sel(parameter="b_x")
    assert abs(float(row.sel(statistic="Estimate"))) < 0.1
    assert float(row.sel(statistic="Est.Error")) == pytest.approx(1.0, abs=0.05)
    assert float(row.sel(statistic="Rhat")) < 1.01
    for col in ("Bulk_ESS", "Tail_ESS"):
        ess = float(row.sel(statistic=col))
        assert ess > 0 and ess == np.round(ess)
    assert bool(table["diagnostics_defined"].sel(parameter="b_x"))


def test_tiny_non_mixing_parameter_is_not_masked(rng):
    samples = rng.normal(size=(500, 4, 1)) * 1e-17
    samples[:, 2:, 0] += 5e-17
    table = summarize_parameters(Draws(samples, ["b_tiny"]))
    assert float(table.sel(parameter="b_tiny", statistic="Rhat")) > 1.5
    assert bool(table["diagnostics_defined"].sel(parameter="b_tiny"))


def test_input_order_is_preserved(draws):
    table = summarize_parameters(draws, ["sigma", "b_x"])
    assert list(table["parameter"].values) == ["sigma", "b_x"]


def test_intervals_are_ordered_and_nested(draws):
    widths = []
    for prob in (0.2, 0.5, 0.8, 0.95):
        row = summarize_parameters(draws, ["b_x"], prob=prob).values[0]
        lower, upper = row[2], row[3]
        assert lower <= upper
        widths.append(upper - lower)
    assert np.all(np.diff(widths) > 0)


def test_invalid_parameter_keeps_raw_diagnostics(rng):
    samples = rng.normal(size=(200, 2, 2))
    samples[5, 0, 0] = np.nan
    samples[7, 1, 1] = np.inf
    table = summarize_parameters(Draws(samples, ["a", "b"]))
    assert not table["valid"].values.any()
    for name in ("a", "b"):
        row = table.sel(parameter=name)
        assert np.isnan(float(row.sel(statistic="Rhat")))
        assert np.isnan(float(row.sel(statistic="Bulk_ESS")))
        assert np.isnan(float(row.sel(statistic="Tail_ESS")))
    assert np.isnan(float(table.sel(parameter="a", statistic="Estimate")))


@pytest.mark.parametrize("prob", [-0.5, 1.01])
def test_invalid_probability(draws, prob):
    with pytest.raises(InvalidProbability):
        summarize_parameters(draws, prob=prob)


def test_select_and_relabel(draws):
    table = summarize_parameters(draws)
    rows = select_rows(table, ["b_Intercept", "b_x"], ["Intercept", "x"])
    assert list(rows["parameter"].values) == ["Intercept", "x"]
    np.testing.assert_allclose(
        rows.values[1], table.sel(parameter="b_x").values
    )
    with pytest.raises(ValueError):
        relabel(rows, ["only_one"])
