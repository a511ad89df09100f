import arviz as az
import numpy as np
import pytest
from click.testing import CliRunner

from mcmc_summary import cli
from mcmc_summary.logger import set_level


@pytest.fixture
def netcdf(tmp_path, rng, monkeypatch):
    path = tmp_path / "fit.nc"
    path.touch()
    idata = az.from_dict(
        posterior={
            "b_Intercept": rng.normal(size=(2, 200)),
            "sigma": np.abs(rng.normal(size=(2, 200))) + 1.0,
            "sd_subject__Intercept": np.abs(rng.normal(size=(2, 200))),
        }
    )
    idata.posterior.attrs["sampler_type"] = "NUTS"
    monkeypatch.setattr(cli.az, "from_netcdf", lambda _: idata)
    yield path
    set_level("DEBUG")


def test_summary_command(netcdf):
    result = CliRunner().invoke(
        cli.main,
        ["--log-level", "ERROR", "summary", str(netcdf), "--group", "subject:8"],
    )
    assert result.exit_code == 0, result.output
    assert "Population-Level Effects:" in result.output
    assert "~subject (Number of levels: 8)" in result.output
    assert "Samples were drawn using NUTS." in result.output


def test_posterior_command(netcdf):
    result = CliRunner().invoke(
        cli.main,
        ["--log-level", "ERROR", "posterior", str(netcdf), "--prob", "0.1",
         "--prob", "0.9", "--pars", "^b_"],
    )
    assert result.exit_code == 0, result.output
    header, row = result.output.strip().splitlines()
    assert header.split() == ["Estimate", "Est.Error", "Q10", "Q90"]
    assert row.split()[0] == "b_Intercept"


def test_parse_groups():
    assert cli._parse_groups(["a:3", "b"]) == {"a": 3, "b": None}


def test_posterior_command_omit_invalid(netcdf, monkeypatch):
    values = np.linspace(0.0, 1.0, 20).reshape(1, 20)
    values[0, 3] = np.nan
    idata = az.from_dict(posterior={"b_Intercept": values})
    monkeypatch.setattr(cli.az, "from_netcdf", lambda _: idata)
    args = ["--log-level", "ERROR", "posterior", str(netcdf)]

    result = CliRunner().invoke(cli.main, args)
    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[1].split()[1:] == ["NA"] * 4

    result = CliRunner().invoke(cli.main, args + ["--omit-invalid"])
    assert result.exit_code == 0, result.output
    assert "NA" not in result.output.strip().splitlines()[1]
