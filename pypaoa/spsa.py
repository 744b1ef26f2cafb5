import numpy as np

from .paoa_util import get_rng


SPSA_DEFAULTS = {'a': 0.1, 'c': 0.1, 'alpha': 0.602, 'gamma': 0.101, 'A': 10}


def spsa_gains(iteration, a, c, alpha, gamma, A):
    k = iteration
    ak = a / ((k + 1 + A) ** alpha)
    ck = c / ((k + 1) ** gamma)

    return ak, ck


def spsa_step(
    params,
    iteration,
    objective,
    a=None,
    c=None,
    alpha=None,
    gamma=None,
    A=None,
    rng=None
):
    """
    One SPSA update of `params`, minimizing the (noisy) `objective`.

    Two evaluations at params +/- c_k * delta, with delta a random +/-1 vector,
    estimate the gradient in every direction at once. Gains decay as
    a_k = a / (k + 1 + A)^alpha and c_k = c / (k + 1)^gamma. Parameters are
    probabilities, so every evaluation point is clipped to [0, 1].

    Returns (new_params, cost), with cost = objective(new_params).
    """
    if a is None:
        a = SPSA_DEFAULTS['a']
    if c is None:
        c = SPSA_DEFAULTS['c']
    if alpha is None:
        alpha = SPSA_DEFAULTS['alpha']
    if gamma is None:
        gamma = SPSA_DEFAULTS['gamma']
    if A is None:
        A = SPSA_DEFAULTS['A']

    rng = get_rng(rng)
    theta = np.asarray(params, dtype=np.float64)
    ak, ck = spsa_gains(iteration, a, c, alpha, gamma, A)
    delta = np.where(rng.random(len(theta)) < 0.5, 1.0, -1.0)

    cost_plus = objective(np.clip(theta + ck * delta, 0.0, 1.0))
    cost_minus = objective(np.clip(theta - ck * delta, 0.0, 1.0))

    gradient = (cost_plus - cost_minus) / (2.0 * ck * delta)
    new_params = np.clip(theta - ak * gradient, 0.0, 1.0)
    cost = objective(new_params)

    return new_params, cost
