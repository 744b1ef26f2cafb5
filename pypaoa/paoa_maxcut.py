import networkx as nx
import numpy as np
from collections import namedtuple

from .circuit_runner import run_circuit, run_circuit_step_by_step
from .graph_generators import as_graph_data
from .maxcut_eval import average_cut_size, best_cut, cut_size
from .paoa_circuit import build_circuit, random_params
from .paoa_util import InvalidParameter, get_cut, get_rng, random_bits
from .spsa import spsa_step


OptimizationState = namedtuple('OptimizationState', ['params', 'iteration', 'best_cost', 'avg_cost', 'best_solution', 'history'])


def snapshot(params, iteration, history, best_solution=None):
    params = np.array(params, dtype=np.float64)
    params.setflags(write=False)
    if best_solution is not None:
        best_solution = np.array(best_solution, dtype=np.uint8)
        best_solution.setflags(write=False)
    best_cost = max(cost for _, cost in history) if history else 0.0
    avg_cost = history[-1][1] if history else 0.0

    return OptimizationState(params, iteration, best_cost, avg_cost, best_solution, tuple(history))


def make_objective(graph, algorithm, layers, num_trials, rng=None):
    graph = as_graph_data(graph)
    rng = get_rng(rng)

    def objective(params):
        circuit = build_circuit(algorithm, graph, params, layers)
        starting_bits = random_bits(graph.n_nodes, rng)
        results = run_circuit(starting_bits, circuit, num_trials, rng)
        # SPSA minimizes, and we want the largest cut
        return -average_cut_size(results, graph)

    return objective


def train_paoa(
    G,
    algorithm='reduced',
    layers=1,
    num_trials=40,
    iterations=100,
    params=None,
    callback=None,
    callback_every=None,
    rng=None,
    **spsa_kwargs
):
    graph = as_graph_data(G)
    rng = get_rng(rng)

    if callback_every is None:
        callback_every = 5
    if callback_every < 1:
        raise InvalidParameter("callback_every must be at least 1!")

    if params is None:
        params = random_params(algorithm, layers, graph.n_edges, rng)

    objective = make_objective(graph, algorithm, layers, num_trials, rng)
    history = []
    for i in range(iterations):
        params, cost = spsa_step(params, i, objective, rng=rng, **spsa_kwargs)
        history.append((i, -cost))
        if callback is not None and (i % callback_every) == 0:
            callback(snapshot(params, i, history))

    circuit = build_circuit(algorithm, graph, params, layers)
    results = run_circuit(random_bits(graph.n_nodes, rng), circuit, num_trials, rng)
    solution, _ = best_cut(results, graph)

    state = snapshot(params, iterations, history, solution)
    if callback is not None:
        callback(state)

    return state


def inspect_paoa(G, params, algorithm='reduced', layers=1, starting_bits=None, rng=None):
    graph = as_graph_data(G)
    rng = get_rng(rng)
    if starting_bits is None:
        starting_bits = random_bits(graph.n_nodes, rng)
    circuit = build_circuit(algorithm, graph, params, layers)

    return run_circuit_step_by_step(starting_bits, circuit, rng)


def paoa_maxcut(
    G,
    algorithm=None,
    layers=None,
    num_trials=None,
    iterations=None,
    rng=None
):
    if algorithm is None:
        algorithm = 'reduced'

    if layers is None:
        layers = 1

    if num_trials is None:
        num_trials = 40

    if iterations is None:
        iterations = 100

    graph = as_graph_data(G)
    nodes = list(G.nodes()) if isinstance(G, nx.Graph) else list(range(graph.n_nodes))

    state = train_paoa(graph, algorithm=algorithm, layers=layers, num_trials=num_trials, iterations=iterations, rng=rng)
    solution = state.best_solution
    cut_value = cut_size(solution, graph)
    bit_string, l, r = get_cut(solution, nodes)

    return bit_string, cut_value, (l, r)
