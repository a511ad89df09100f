import numpy as np
import pytest

from mcmc_summary.errors import InvalidProbability
from mcmc_summary.estimators import (
    ROBUST,
    STANDARD,
    Location,
    Scale,
    interval_probs,
    mad,
    mean,
    median,
    quantiles,
    sd,
    select_estimators,
)


def test_basic_estimators():
    x = np.array([1.0, 2.0, 3.0, 4.0, 10.0])
    assert mean(x) == pytest.approx(4.0)
    assert sd(x) == pytest.approx(np.std(x, ddof=1))
    assert median(x) == pytest.approx(3.0)
    # median(|x - 3|) = 1, scaled to normal consistency
    assert mad(x) == pytest.approx(1.482602218505602)
    np.testing.assert_allclose(quantiles(x, [0.0, 0.5, 1.0]), [1.0, 3.0, 10.0])


def test_quantiles_interpolate_linearly():
    x = np.arange(1.0, 11.0)
    np.testing.assert_allclose(quantiles(x, [0.25, 0.975]), [3.25, 9.775])


def test_non_finite_propagate_unless_omitted():
    x = np.array([1.0, np.nan, 3.0, np.inf])
    assert np.isnan(mean(x))
    assert np.isnan(median(x))
    assert np.all(np.isnan(quantiles(x, [0.1, 0.9])))

    assert mean(x, omit_invalid=True) == pytest.approx(2.0)
    assert median(x, omit_invalid=True) == pytest.approx(2.0)
    assert sd(x, omit_invalid=True) == pytest.approx(np.sqrt(2.0))
    np.testing.assert_allclose(
        quantiles(x, [0.0, 1.0], omit_invalid=True), [1.0, 3.0]
    )


def test_empty_after_omission_is_nan():
    x = np.array([np.nan, np.inf])
    assert np.isnan(mean(x, omit_invalid=True))
    assert np.isnan(sd(x, omit_invalid=True))
    assert np.isnan(mad(x, omit_invalid=True))


@pytest.mark.parametrize("prob,expected", [(0.95, (0.025, 0.975)), (0.5, (0.25, 0.75)), (1.0, (0.0, 1.0)), (0.0, (0.5, 0.5))])
def test_interval_probs(prob, expected):
    np.testing.assert_allclose(interval_probs(prob), expected)


@pytest.mark.parametrize("prob", [-0.1, 1.5, float("nan"), "0.9", True, None])
def test_interval_probs_rejects_invalid(prob):
    with pytest.raises(InvalidProbability):
        interval_probs(prob)


def test_quantiles_reject_invalid_probs():
    with pytest.raises(InvalidProbability):
        quantiles(np.arange(5.0), [0.5, 1.2])


def test_estimator_selection():
    assert select_estimators(robust=False) is STANDARD
    assert select_estimators(robust=True) is ROBUST
    assert STANDARD.location is Location.MEAN and STANDARD.scale is Scale.SD
    assert ROBUST.location is Location.MEDIAN and ROBUST.scale is Scale.MAD

    x = np.array([0.0, 1.0, 2.0, 100.0])
    assert Location.MEAN.compute(x) == pytest.approx(25.75)
    assert Location.MEDIAN.compute(x) == pytest.approx(1.5)
    assert Scale.MAD.compute(x) < Scale.SD.compute(x)
