import networkx as nx
import numpy as np
import os
from collections import namedtuple


class InvalidParameter(ValueError):
    pass


class GenerationRetryExhausted(RuntimeError):
    pass


class PAOAContext:
    def __init__(self, d, s):
        self.dtype = d
        self.seed = s


dtype_bits = int(os.getenv('PYPAOA_FPPOW', '6'))
if dtype_bits <= 5:
    dtype = np.float32
else:
    dtype = np.float64

seed_env = os.getenv('PYPAOA_SEED')
seed = int(seed_env) if seed_env else None

paoa_context = PAOAContext(dtype, seed)

_default_rng = np.random.default_rng(seed)


Node = namedtuple('Node', ['id', 'x', 'y', 'fixed'])
Edge = namedtuple('Edge', ['source', 'target'])


def set_seed(s):
    global _default_rng
    _default_rng = np.random.default_rng(s)
    paoa_context.seed = s


def get_rng(rng=None):
    """
    Resolve the random source for a call:
    - None: the shared default generator
    - int: a fresh generator seeded with it
    - anything else (a numpy Generator or a compatible stand-in) is used as-is
    """
    if rng is None:
        return _default_rng
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(rng)

    return rng


def random_bits(n, rng=None):
    rng = get_rng(rng)

    return (rng.random(n) < 0.5).astype(np.uint8)


def to_edge_array(edges):
    if isinstance(edges, nx.Graph):
        nodes = list(edges.nodes())
        index = {node: i for i, node in enumerate(nodes)}
        return np.array([(index[u], index[v]) for u, v in edges.edges() if u != v], dtype=np.int64).reshape(-1, 2)
    if hasattr(edges, 'edges') and isinstance(edges.edges, np.ndarray):
        return edges.edges

    return np.asarray(edges, dtype=np.int64).reshape(-1, 2)


def check_bit_indices(n_bits, edges):
    if len(edges) and edges.max() >= n_bits:
        raise InvalidParameter(f"Edge references node {edges.max()}, but the assignment only has {n_bits} bits!")
    if len(edges) and edges.min() < 0:
        raise InvalidParameter("Edge references a negative node index!")


def get_cut(solution, nodes):
    bit_string = ""
    l, r = [], []
    for i in range(len(solution)):
        if solution[i]:
            bit_string += "1"
            r.append(nodes[i])
        else:
            bit_string += "0"
            l.append(nodes[i])

    return bit_string, l, r
