import numpy as np
from numba import njit

from .graph_generators import as_graph_data


SPREAD_FACTOR = 2.5
REPULSION_SCALE = 2.0
ATTRACTION_SCALE = 0.5
CENTER_PULL = 0.01
PADDING = 40.0
FROZEN_ALPHA = 0.005


@njit
def force_layout_kernel(positions, fixed, edges, width, height, alpha):
    if alpha <= FROZEN_ALPHA:
        return

    n = positions.shape[0]
    # sqrt(area / n) is the textbook spacing; the spread factor keeps it sparse
    k = np.sqrt((width * height) / (n + 1)) * SPREAD_FACTOR
    repulsion = k * k * REPULSION_SCALE
    center_force = CENTER_PULL * alpha

    forces = np.zeros((n, 2), dtype=np.float64)

    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            d2 = dx * dx + dy * dy
            if d2 == 0.0:
                d2 = 0.1
            dist = np.sqrt(d2)

            f = (repulsion / d2) * alpha
            fx = (dx / dist) * f
            fy = (dy / dist) * f

            forces[i, 0] += fx
            forces[i, 1] += fy
            forces[j, 0] -= fx
            forces[j, 1] -= fy

    for e in range(edges.shape[0]):
        u = edges[e, 0]
        v = edges[e, 1]
        dx = positions[u, 0] - positions[v, 0]
        dy = positions[u, 1] - positions[v, 1]
        dist = np.sqrt(dx * dx + dy * dy)
        if dist == 0.0:
            dist = 0.1

        # Softened spring, so edges stretch instead of collapsing
        f = ((dist * dist) / k) * alpha * ATTRACTION_SCALE
        fx = (dx / dist) * f
        fy = (dy / dist) * f

        forces[u, 0] -= fx
        forces[u, 1] -= fy
        forces[v, 0] += fx
        forces[v, 1] += fy

    cx = width / 2
    cy = height / 2
    for i in range(n):
        if fixed[i]:
            continue

        forces[i, 0] += (cx - positions[i, 0]) * center_force
        forces[i, 1] += (cy - positions[i, 1]) * center_force

        positions[i, 0] = max(PADDING, min(width - PADDING, positions[i, 0] + forces[i, 0]))
        positions[i, 1] = max(PADDING, min(height - PADDING, positions[i, 1] + forces[i, 1]))


def write_back_positions(G, graph):
    if G is graph:
        return
    for node, (x, y) in zip(G.nodes(), graph.positions):
        G.nodes[node]['pos'] = (float(x), float(y))


def step_force_layout(G, width, height, alpha):
    graph = as_graph_data(G)
    force_layout_kernel(graph.positions, graph.fixed, graph.edges, float(width), float(height), float(alpha))
    write_back_positions(G, graph)

    return graph


def precalculate_layout(G, width, height, iterations=None):
    """
    Run the force layout to convergence, synchronously.

    Temperature alpha cools linearly from 1 towards 0 over the iteration budget,
    so early steps rearrange globally and late steps only settle.
    Positions of `G` are updated in place (the 'pos' node attribute, for a networkx graph).
    """
    if iterations is None:
        iterations = 400

    graph = as_graph_data(G)
    width = float(width)
    height = float(height)
    for i in range(iterations):
        alpha = 1.0 - (i / iterations)
        force_layout_kernel(graph.positions, graph.fixed, graph.edges, width, height, alpha)
    write_back_positions(G, graph)

    return graph


layout_graph = precalculate_layout
