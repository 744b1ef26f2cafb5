from .paoa_util import Edge, GenerationRetryExhausted, InvalidParameter, Node, get_rng, paoa_context, random_bits, set_seed
from .graph_generators import GraphData, as_graph_data, generate_complete_graph, generate_erdos_renyi, generate_graph, generate_random_regular_graph
from .force_layout import layout_graph, precalculate_layout, step_force_layout
from .paoa_circuit import Circuit, Gate, build_circuit, get_circuit_generator, minimum_paoa_circuit, param_count, random_params, reduced_paoa_circuit, standard_paoa_circuit
from .circuit_runner import CircuitStepper, StepInfo, run_circuit, run_circuit_step_by_step
from .maxcut_eval import average_cut_size, best_cut, cut_size
from .spsa import spsa_step
from .paoa_maxcut import OptimizationState, inspect_paoa, make_objective, paoa_maxcut, train_paoa
