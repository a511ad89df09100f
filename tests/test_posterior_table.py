import numpy as np
import pytest

from mcmc_summary.errors import EmptyInput, InvalidRank
from mcmc_summary.summary.table import posterior_table


def test_rows_sum_to_one(rng):
    x = rng.integers(1, 5, size=(1000, 6)).astype(float)
    out = posterior_table(x)
    assert out.dims == ("observation", "level")
    assert list(out["level"].values) == [
        "P(Y = 1)",
        "P(Y = 2)",
        "P(Y = 3)",
        "P(Y = 4)",
    ]
    np.testing.assert_allclose(out.sum(dim="level"), 1.0)


def test_relative_frequencies():
    x = np.array([[1, 2], [1, 2], [2, 2], [3, 1]])
    out = posterior_table(x, names=["obs1", "obs2"])
    np.testing.assert_allclose(
        out.values, [[0.5, 0.25, 0.25], [0.25, 0.75, 0.0]]
    )
    assert list(out["observation"].values) == ["obs1", "obs2"]


def test_explicit_levels_and_labels():
    x = np.array([[0], [0], [1], [3]])
    out = posterior_table(x, levels=[0, 1, 2], labels=["low", "mid", "high"])
    assert list(out["level"].values) == ["P(Y = low)", "P(Y = mid)", "P(Y = high)"]
    # draws outside the requested levels are not counted
    np.testing.assert_allclose(out.values[0], [2 / 3, 1 / 3, 0.0])

    mismatched = posterior_table(x, levels=[0, 1], labels=["only"])
    assert list(mismatched["level"].values) == ["P(Y = 0)", "P(Y = 1)"]


def test_non_finite_draws_warn_and_are_dropped():
    x = np.array([[1.0], [np.nan], [2.0], [2.0]])
    with pytest.warns(RuntimeWarning, match="non-finite"):
        out = posterior_table(x)
    np.testing.assert_allclose(out.values[0], [1 / 3, 2 / 3])


def test_vector_is_one_observation():
    out = posterior_table(np.array([1, 1, 2, 2]))
    assert out.shape == (1, 2)


def test_errors():
    with pytest.raises(EmptyInput):
        posterior_table(np.empty((0, 2)))
    with pytest.raises(InvalidRank):
        posterior_table(np.ones((2, 2, 2)))
