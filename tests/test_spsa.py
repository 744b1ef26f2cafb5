"""SPSA optimizer step."""

import numpy as np
import pytest

from pypaoa import spsa_step
from pypaoa.spsa import spsa_gains


def test_constant_objective_reports_constant():
    for theta in ([0.1, 0.9, 0.5], [0.0, 1.0], np.random.default_rng(0).random(12)):
        _, cost = spsa_step(theta, 0, lambda p: -3.5, rng=0)
        assert cost == -3.5


def test_gain_schedule():
    ak, ck = spsa_gains(0, 0.1, 0.1, 0.602, 0.101, 10)

    assert ak == pytest.approx(0.1 / 11 ** 0.602)
    assert ck == pytest.approx(0.1)

    ak, ck = spsa_gains(9, 0.1, 0.1, 0.602, 0.101, 10)
    assert ak == pytest.approx(0.1 / 20 ** 0.602)
    assert ck == pytest.approx(0.1 / 10 ** 0.101)


def noisy_objective(rng):
    weights = rng.normal(size=8) * 50

    def objective(p):
        return float(weights[:len(p)] @ p) + rng.normal() * 10

    return objective


@pytest.mark.parametrize("seed", range(5))
def test_params_stay_in_unit_interval(seed):
    rng = np.random.default_rng(seed)
    objective = noisy_objective(rng)
    theta = rng.choice([0.0, 1.0, 0.5, 0.01, 0.99], size=8)

    for k in range(50):
        theta, _ = spsa_step(theta, k, objective, a=5.0, c=0.5, rng=rng)
        assert np.all(theta >= 0.0)
        assert np.all(theta <= 1.0)


def test_evaluation_points_are_clipped():
    seen = []

    def objective(p):
        seen.append(np.array(p))
        return float(np.sum(p))

    spsa_step([0.0, 1.0, 0.95], 0, objective, c=0.5, rng=1)

    assert len(seen) == 3
    for p in seen:
        assert np.all((p >= 0.0) & (p <= 1.0))


def test_descends_one_dimensional_quadratic():
    theta = np.array([0.2])

    for k in range(60):
        theta, cost = spsa_step(theta, k, lambda p: float((p[0] - 0.8) ** 2), a=1.0, rng=k)

    assert theta[0] == pytest.approx(0.8, abs=0.02)
    assert cost == pytest.approx((theta[0] - 0.8) ** 2)


def test_default_hyperparameters_match_explicit():
    objective = lambda p: float(np.sum((p - 0.3) ** 2))

    default, _ = spsa_step([0.6, 0.2], 3, objective, rng=11)
    explicit, _ = spsa_step([0.6, 0.2], 3, objective, a=0.1, c=0.1, alpha=0.602, gamma=0.101, A=10, rng=11)

    assert np.array_equal(default, explicit)


def test_empty_params():
    params, cost = spsa_step([], 0, lambda p: 2.0, rng=0)

    assert len(params) == 0
    assert cost == 2.0
