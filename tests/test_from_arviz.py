import arviz as az
import numpy as np
import pytest

from mcmc_summary.arviz_utils import draws_from_inference_data, get_divergences


@pytest.fixture
def idata(rng):
    diverging = np.zeros((2, 50), dtype=bool)
    diverging[1, 10] = True
    data = az.from_dict(
        posterior={
            "theta": rng.normal(size=(2, 50, 3)),
            "mu": rng.normal(size=(2, 50)),
        },
        sample_stats={"diverging": diverging},
    )
    data.posterior.attrs.update(
        {
            "sampler_type": "NUTS",
            "thin": 2,
            "num_warmup": 100,
            "target_accept_prob": 0.9,
        }
    )
    return data


def test_draws_from_inference_data(idata):
    draws = draws_from_inference_data(idata)
    assert draws.names == ["theta[1]", "theta[2]", "theta[3]", "mu"]
    assert draws.samples.shape == (50, 2, 4)
    np.testing.assert_allclose(
        draws.samples[:, 1, 1], idata.posterior["theta"].values[1, :, 1]
    )
    assert draws.sampler == "NUTS"
    assert draws.thin == 2
    assert draws.warmup == 100
    assert draws.iter == 200
    assert draws.adapt_delta == pytest.approx(0.9)
    assert draws.n_divergent == 1


def test_selected_variables(idata):
    draws = draws_from_inference_data(idata, var_names=["mu"], algorithm="fullrank")
    assert draws.names == ["mu"]
    assert draws.algorithm == "fullrank"


def test_matrix_variable_names(rng):
    data = az.from_dict(posterior={"L": rng.normal(size=(1, 5, 2, 2))})
    draws = draws_from_inference_data(data)
    assert draws.names == ["L[1,1]", "L[1,2]", "L[2,1]", "L[2,2]"]
    assert draws.sampler == ""
    assert draws.divergent is None


def test_get_divergences(idata):
    div = get_divergences(idata)
    assert div.shape == (50, 2)
    assert div[10, 1] == 1 and div.sum() == 1
