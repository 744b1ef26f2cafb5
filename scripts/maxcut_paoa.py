# PAOA MAXCUT: generate a graph, lay it out, train the stochastic circuit with SPSA

from pypaoa import generate_graph, precalculate_layout, train_paoa, cut_size
from pypaoa.paoa_util import get_cut
import argparse
import numpy as np
import time


def print_progress(state):
    print(f"Iteration {state.iteration}: cut {state.avg_cost:.3f} (best {state.best_cost:.3f})")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Train a PAOA circuit for MAXCUT with SPSA.")
    parser.add_argument("-g", "--graph", type=str, default="random_regular", help="complete, erdos_renyi, or random_regular")
    parser.add_argument("-n", "--nodes", type=int, default=12, help="Number of nodes in the graph.")
    parser.add_argument("-d", "--degree", type=int, default=3, help="Degree, for random_regular graphs.")
    parser.add_argument("-p", "--prob", type=float, default=0.3, help="Edge probability, for erdos_renyi graphs.")
    parser.add_argument("-a", "--algorithm", type=str, default="reduced", help="reduced, minimum, or standard")
    parser.add_argument("-l", "--layers", type=int, default=1, help="Circuit layers.")
    parser.add_argument("-t", "--trials", type=int, default=40, help="Trials per objective evaluation.")
    parser.add_argument("-i", "--iterations", type=int, default=100, help="SPSA iterations.")
    parser.add_argument("-s", "--seed", type=int, default=None, help="Random seed.")
    args = parser.parse_args()

    rng = np.random.default_rng(args.seed)

    start = time.perf_counter()
    G = generate_graph(args.graph, args.nodes, p=args.prob, degree=args.degree, rng=rng)
    precalculate_layout(G, 800, 600, 300)
    seconds = time.perf_counter() - start
    print(f"{seconds} seconds to generate and lay out the graph")
    print(f"Random seed: {args.seed}")
    print(f"Node count: {G.n_nodes}")
    print(f"Edge count: {G.n_edges}")

    start = time.perf_counter()
    state = train_paoa(
        G,
        algorithm=args.algorithm,
        layers=args.layers,
        num_trials=args.trials,
        iterations=args.iterations,
        callback=print_progress,
        rng=rng
    )
    seconds = time.perf_counter() - start

    bit_string, l, r = get_cut(state.best_solution, list(range(G.n_nodes)))
    print(f"Seconds to train: {seconds}")
    print(f"Final expected cut: {state.history[-1][1]}")
    print(f"Best expected cut: {state.best_cost}")
    print(f"Bipartite cut bit string: {bit_string}")
    print(f"Cut size: {cut_size(state.best_solution, G)} of {G.n_edges} edges")
