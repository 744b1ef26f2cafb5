import numpy as np
from collections import namedtuple
from numba import njit

from .paoa_util import InvalidParameter, get_rng, paoa_context, to_edge_array


dtype = paoa_context.dtype

ALGORITHMS = ('reduced', 'minimum', 'standard')
NEUTRAL_PARAM = 0.5

Gate = namedtuple('Gate', ['bit_indices', 'matrix'])


class Circuit:
    """Ordered, read-only gate sequence: layer-major, then edge order."""

    def __init__(self, bit_indices, matrices):
        self.bit_indices = np.ascontiguousarray(bit_indices, dtype=np.int64).reshape(-1, 2)
        self.matrices = np.ascontiguousarray(matrices).reshape(-1, 4, 4)
        self.bit_indices.setflags(write=False)
        self.matrices.setflags(write=False)

    def __len__(self):
        return len(self.bit_indices)

    def __getitem__(self, i):
        u, v = self.bit_indices[i]
        return Gate((int(u), int(v)), self.matrices[i])

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    def __repr__(self):
        return f"Circuit(gates={len(self)})"


def param_count(algorithm, layers, n_edges):
    if algorithm == 'reduced':
        return layers * n_edges
    if algorithm == 'minimum':
        return 2 * layers
    if algorithm == 'standard':
        return 4 * layers * n_edges

    raise InvalidParameter(f"Unknown PAOA algorithm '{algorithm}'! (Use one of {ALGORITHMS}.)")


def random_params(algorithm, layers, n_edges, rng=None):
    rng = get_rng(rng)

    return rng.random(param_count(algorithm, layers, n_edges))


def read_params(params, count):
    # Slots past the end read as the neutral (unbiased) probability
    values = np.full(count, NEUTRAL_PARAM, dtype=np.float64)
    if params is None:
        return values
    params = np.asarray(params, dtype=np.float64).ravel()
    m = min(count, len(params))
    values[:m] = np.clip(params[:m], 0.0, 1.0)

    return values


@njit
def reduced_matrices(params, n_edges, layers):
    matrices = np.zeros((layers * n_edges, 4, 4), dtype=dtype)
    for g in range(layers * n_edges):
        p = params[g]
        q = 1.0 - p
        matrices[g, 1, 0] = p
        matrices[g, 2, 0] = q
        matrices[g, 2, 3] = p
        matrices[g, 1, 3] = q
        matrices[g, 1, 1] = p
        matrices[g, 2, 2] = p
        matrices[g, 1, 2] = q
        matrices[g, 2, 1] = q

    return matrices


@njit
def minimum_matrices(params, n_edges, layers):
    matrices = np.zeros((layers * n_edges, 4, 4), dtype=dtype)
    for l in range(layers):
        p1 = params[2 * l]
        p2 = params[2 * l + 1]
        for e in range(n_edges):
            g = l * n_edges + e
            matrices[g, 1, 0] = p1
            matrices[g, 2, 0] = 1.0 - p1
            matrices[g, 2, 3] = p1
            matrices[g, 1, 3] = 1.0 - p1
            matrices[g, 1, 1] = p2
            matrices[g, 2, 2] = p2
            matrices[g, 1, 2] = 1.0 - p2
            matrices[g, 2, 1] = 1.0 - p2

    return matrices


@njit
def standard_matrices(params, n_edges, layers):
    matrices = np.zeros((layers * n_edges, 4, 4), dtype=dtype)
    for g in range(layers * n_edges):
        for col in range(4):
            val = params[4 * g + col]
            matrices[g, 1, col] = val
            matrices[g, 2, col] = 1.0 - val

    return matrices


def layered_bit_indices(edges, layers):
    return np.tile(edges, (layers, 1)) if len(edges) else np.empty((0, 2), dtype=np.int64)


def reduced_paoa_circuit(edges, params, layers):
    edges = to_edge_array(edges)
    p = read_params(params, param_count('reduced', layers, len(edges)))

    return Circuit(layered_bit_indices(edges, layers), reduced_matrices(p, len(edges), layers))


def minimum_paoa_circuit(edges, params, layers):
    edges = to_edge_array(edges)
    p = read_params(params, param_count('minimum', layers, len(edges)))

    return Circuit(layered_bit_indices(edges, layers), minimum_matrices(p, len(edges), layers))


def standard_paoa_circuit(edges, params, layers):
    edges = to_edge_array(edges)
    p = read_params(params, param_count('standard', layers, len(edges)))

    return Circuit(layered_bit_indices(edges, layers), standard_matrices(p, len(edges), layers))


def get_circuit_generator(algorithm):
    if algorithm == 'reduced':
        return reduced_paoa_circuit
    if algorithm == 'minimum':
        return minimum_paoa_circuit
    if algorithm == 'standard':
        return standard_paoa_circuit

    raise InvalidParameter(f"Unknown PAOA algorithm '{algorithm}'! (Use one of {ALGORITHMS}.)")


def build_circuit(algorithm, graph, params, layers):
    return get_circuit_generator(algorithm)(graph, params, layers)
