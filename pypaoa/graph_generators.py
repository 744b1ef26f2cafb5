import math
import networkx as nx
import numpy as np

from .paoa_util import Edge, GenerationRetryExhausted, InvalidParameter, Node, get_rng


CENTER_X = 400.0
CENTER_Y = 300.0
START_RADIUS = 300.0


class GraphData:
    def __init__(self, positions, edges, fixed=None):
        self.positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        n = len(self.positions)
        self.fixed = np.zeros(n, dtype=np.bool_) if fixed is None else np.array(fixed, dtype=np.bool_)
        self.edges = np.array(edges, dtype=np.int64).reshape(-1, 2)
        self.edges.setflags(write=False)

        seen = set()
        for u, v in self.edges:
            if not ((0 <= u < n) and (0 <= v < n)):
                raise InvalidParameter(f"Edge ({u}, {v}) references a node outside 0..{n - 1}!")
            if u == v:
                raise InvalidParameter(f"Edge ({u}, {v}) is a self-loop!")
            key = (u, v) if u < v else (v, u)
            if key in seen:
                raise InvalidParameter(f"Edge ({u}, {v}) is a duplicate!")
            seen.add(key)

    @property
    def n_nodes(self):
        return len(self.positions)

    @property
    def n_edges(self):
        return len(self.edges)

    @property
    def nodes(self):
        return [Node(i, float(x), float(y), bool(f)) for i, ((x, y), f) in enumerate(zip(self.positions, self.fixed))]

    def edge_list(self):
        return [Edge(int(u), int(v)) for u, v in self.edges]

    def set_fixed(self, node, fixed=True):
        self.fixed[node] = fixed

    def to_networkx(self):
        G = nx.Graph()
        for node in self.nodes:
            G.add_node(node.id, pos=(node.x, node.y), fixed=node.fixed)
        G.add_edges_from(self.edge_list())

        return G

    def __repr__(self):
        return f"GraphData(n_nodes={self.n_nodes}, n_edges={self.n_edges})"


def circle_positions(n):
    positions = np.empty((n, 2), dtype=np.float64)
    for i in range(n):
        angle = 2 * math.pi * i / n
        positions[i, 0] = CENTER_X + START_RADIUS * math.cos(angle)
        positions[i, 1] = CENTER_Y + START_RADIUS * math.sin(angle)

    return positions


def init_nodes(n, edges):
    return GraphData(circle_positions(n), edges)


def as_graph_data(G):
    if isinstance(G, GraphData):
        return G
    if not isinstance(G, nx.Graph):
        raise InvalidParameter("Expected a GraphData or a networkx.Graph!")

    nodes = list(G.nodes())
    index = {node: i for i, node in enumerate(nodes)}
    edges = [(index[u], index[v]) for u, v in G.edges() if u != v]
    positions = circle_positions(len(nodes))
    fixed = np.zeros(len(nodes), dtype=np.bool_)
    for node, i in index.items():
        pos = G.nodes[node].get('pos')
        if pos is not None:
            positions[i] = pos
        fixed[i] = bool(G.nodes[node].get('fixed', False))

    return GraphData(positions, edges, fixed)


def generate_complete_graph(n):
    u, v = np.triu_indices(n, 1)

    return init_nodes(n, np.column_stack((u, v)))


def generate_erdos_renyi(n, p, rng=None):
    if not (0.0 <= p <= 1.0):
        raise InvalidParameter("Erdos-Renyi edge probability p must be in [0, 1]!")
    rng = get_rng(rng)
    u, v = np.triu_indices(n, 1)
    keep = rng.random(len(u)) < p

    return init_nodes(n, np.column_stack((u[keep], v[keep])))


def try_generate_regular_edges(n, d, rng):
    points = rng.permutation(np.repeat(np.arange(n, dtype=np.int64), d))
    edges = []
    edge_set = set()
    for i in range(0, n * d, 2):
        u = int(points[i])
        v = int(points[i + 1])
        if u == v:
            return None
        key = (u, v) if u < v else (v, u)
        if key in edge_set:
            return None
        edge_set.add(key)
        edges.append((u, v))

    return edges


def sample_regular_edges(n, d, rng, max_attempts):
    for _ in range(max_attempts):
        edges = try_generate_regular_edges(n, d, rng)
        if edges is not None:
            return edges

    raise GenerationRetryExhausted(f"No simple {d}-regular pairing found in {max_attempts} attempts.")


def cycle_fallback_edges(n, d):
    offsets = [1, 2] if d > 2 else [1]
    edges = []
    edge_set = set()
    for i in range(n):
        for offset in offsets:
            j = (i + offset) % n
            key = (i, j) if i < j else (j, i)
            if i == j or key in edge_set:
                continue
            edge_set.add(key)
            edges.append((i, j))

    return edges


def generate_random_regular_graph(n, d, rng=None, max_attempts=100):
    if (n * d) & 1:
        raise InvalidParameter("n * d must be even!")
    if d >= n:
        raise InvalidParameter("Degree must be less than n!")
    if d < 0:
        raise InvalidParameter("Degree must be non-negative!")

    rng = get_rng(rng)
    try:
        edges = sample_regular_edges(n, d, rng, max_attempts)
    except GenerationRetryExhausted:
        print(f"[WARN]: generate_random_regular_graph() fell back to a cycle graph after {max_attempts} attempts.")
        edges = cycle_fallback_edges(n, d)

    return init_nodes(n, edges)


def generate_graph(kind, n, p=None, degree=None, rng=None):
    if kind == 'complete':
        return generate_complete_graph(n)

    if kind in ('erdos_renyi', 'erdos'):
        if p is None:
            p = 0.3
        return generate_erdos_renyi(n, p, rng=rng)

    if kind in ('random_regular', 'regular'):
        if degree is None:
            degree = 3
        return generate_random_regular_graph(n, degree, rng=rng)

    raise InvalidParameter(f"Unknown graph kind '{kind}'! (Use 'complete', 'erdos_renyi', or 'random_regular'.)")
