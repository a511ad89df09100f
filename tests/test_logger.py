import pytest

from mcmc_summary import logger as log_mod


class _Level:
    name = "WARNING"


def _record(name):
    return {"name": name, "level": _Level(), "message": "hello"}


def test_format_names_the_source_module():
    fmt = log_mod._format(_record("mcmc_summary.summary.report"))
    assert "<blue>MCMCSummary</blue>" in fmt
    assert "<cyan>summary.report</cyan>" in fmt
    assert "{message}" in fmt and "{exception}" in fmt
    assert "hello" not in fmt


def test_source_outside_package():
    assert log_mod._source("tests.test_logger") == "tests.test_logger"
    assert log_mod._source(None) == "mcmc_summary"


@pytest.mark.parametrize(
    "value, expected", [(None, "INFO"), ("debug", "DEBUG"), ("  ", "INFO")]
)
def test_default_level_from_environment(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv(log_mod.LEVEL_ENV, raising=False)
    else:
        monkeypatch.setenv(log_mod.LEVEL_ENV, value)
    assert log_mod.default_level() == expected
