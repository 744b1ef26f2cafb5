# Step-by-step replay of a trained PAOA circuit

from pypaoa import cut_size, generate_random_regular_graph, inspect_paoa, train_paoa
import numpy as np
import sys


if __name__ == "__main__":
    n_nodes = int(sys.argv[1]) if len(sys.argv) > 1 else 8
    degree = int(sys.argv[2]) if len(sys.argv) > 2 else 3
    algorithm = sys.argv[3] if len(sys.argv) > 3 else "reduced"
    seed = int(sys.argv[4]) if len(sys.argv) > 4 else None

    rng = np.random.default_rng(seed)
    G = generate_random_regular_graph(n_nodes, degree, rng=rng)
    state = train_paoa(G, algorithm=algorithm, iterations=50, rng=rng)
    print(f"Trained parameters: {np.round(state.params, 3)}")

    for n, step in enumerate(inspect_paoa(G, state.params, algorithm=algorithm, rng=rng)):
        u, v = step.active_edge
        before = "".join(str(b) for b in step.bits_before)
        after = "".join(str(b) for b in step.bits_after)
        print(
            f"Step {n + 1}: edge ({u}, {v}) state {step.input_state:02b} -> {step.output_state:02b}"
            f" p={np.round(step.probs, 3)} {before} ({cut_size(step.bits_before, G)}) -> {after} ({cut_size(step.bits_after, G)})"
        )
