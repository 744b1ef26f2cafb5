import numpy as np
from collections import namedtuple
from numba import njit, prange

from .paoa_util import check_bit_indices, get_rng


StepInfo = namedtuple('StepInfo', ['active_edge', 'matrix', 'input_state', 'output_state', 'probs', 'bits_before', 'bits_after'])


@njit
def sample_state(probs, r):
    cumulative = 0.0
    for k in range(4):
        cumulative += probs[k]
        if r <= cumulative:
            return k

    # Only reachable through rounding in an unnormalized column
    return 3


@njit
def apply_gate(bits, i, j, matrix, r):
    input_state = 2 * bits[i] + bits[j]
    output_state = sample_state(matrix[:, input_state], r)
    bits[i] = (output_state >> 1) & 1
    bits[j] = output_state & 1

    return output_state


@njit(parallel=True)
def run_circuit_kernel(starting_bits, bit_indices, matrices, draws):
    num_trials = draws.shape[0]
    n_gates = bit_indices.shape[0]
    results = np.empty((num_trials, starting_bits.shape[0]), dtype=np.uint8)
    for t in prange(num_trials):
        bits = starting_bits.copy()
        for g in range(n_gates):
            apply_gate(bits, bit_indices[g, 0], bit_indices[g, 1], matrices[g], draws[t, g])
        results[t] = bits

    return results


def as_bits(bits):
    return np.array(bits, dtype=np.uint8).ravel()


def run_circuit(starting_bits, circuit, num_trials, rng=None):
    """
    Run `num_trials` independent passes of `circuit` from the same starting bits.

    Uniform draws are taken up front, trial by trial in gate order, so a
    seeded generator gives the same outcomes as stepping one trial by hand.

    Returns a (num_trials, n) uint8 array of final assignments.
    """
    rng = get_rng(rng)
    starting_bits = as_bits(starting_bits)
    check_bit_indices(len(starting_bits), circuit.bit_indices)
    draws = rng.random((num_trials, len(circuit)))

    return run_circuit_kernel(starting_bits, circuit.bit_indices, circuit.matrices, draws)


class CircuitStepper:
    """
    Pull-based, single-pass execution of a circuit.

    Each next() applies exactly one gate and returns its StepInfo.
    The stepper cannot be rewound; build a fresh one to replay.
    """

    def __init__(self, starting_bits, circuit, rng=None):
        self.circuit = circuit
        self.bits = as_bits(starting_bits)
        check_bit_indices(len(self.bits), circuit.bit_indices)
        self.position = 0
        self._rng = get_rng(rng)

    def __iter__(self):
        return self

    def __len__(self):
        return len(self.circuit) - self.position

    @property
    def remaining(self):
        return len(self)

    def __next__(self):
        if self.position >= len(self.circuit):
            raise StopIteration

        i, j = (int(x) for x in self.circuit.bit_indices[self.position])
        matrix = self.circuit.matrices[self.position]
        self.position += 1

        bits_before = self.bits
        input_state = 2 * int(bits_before[i]) + int(bits_before[j])
        probs = matrix[:, input_state].copy()
        output_state = int(sample_state(probs, float(self._rng.random())))

        bits_after = bits_before.copy()
        bits_after[i] = (output_state >> 1) & 1
        bits_after[j] = output_state & 1
        self.bits = bits_after

        return StepInfo((i, j), matrix.copy(), input_state, output_state, probs, bits_before.copy(), bits_after.copy())


def run_circuit_step_by_step(starting_bits, circuit, rng=None):
    return CircuitStepper(starting_bits, circuit, rng=rng)
