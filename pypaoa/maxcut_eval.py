import numpy as np
from numba import njit, prange

from .paoa_util import check_bit_indices, to_edge_array


@njit
def compute_cut(bits, edges):
    cut = 0
    for e in range(edges.shape[0]):
        if bits[edges[e, 0]] != bits[edges[e, 1]]:
            cut += 1

    return cut


@njit(parallel=True)
def compute_cuts(solutions, edges):
    cuts = np.empty(solutions.shape[0], dtype=np.int64)
    for s in prange(solutions.shape[0]):
        cuts[s] = compute_cut(solutions[s], edges)

    return cuts


def as_solutions(solutions):
    solutions = np.asarray(solutions, dtype=np.uint8)
    if solutions.ndim == 1:
        return solutions.reshape(1, -1)

    return solutions


def cut_size(bits, edges):
    bits = np.asarray(bits, dtype=np.uint8).ravel()
    edges = to_edge_array(edges)
    check_bit_indices(len(bits), edges)

    return int(compute_cut(bits, edges))


def average_cut_size(solutions, edges):
    # Mean over a non-empty batch; an empty batch is the caller's mistake.
    solutions = as_solutions(solutions)
    edges = to_edge_array(edges)
    check_bit_indices(solutions.shape[1], edges)
    cuts = compute_cuts(solutions, edges)

    return float(cuts.sum() / len(cuts))


def best_cut(solutions, edges):
    solutions = as_solutions(solutions)
    edges = to_edge_array(edges)
    check_bit_indices(solutions.shape[1], edges)
    cuts = compute_cuts(solutions, edges)
    best = np.argmax(cuts)

    return solutions[best], int(cuts[best])
