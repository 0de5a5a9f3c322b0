"""Graph handle, loaders/writer and structural transforms."""

from dynbatch.graph.io import (
    check_input_file,
    load_graph,
    output_path,
    read_edgelist,
    read_matrix_market,
    read_snap_temporal,
    write_edgelist,
)
from dynbatch.graph.transforms import (
    apply_transform,
    clear_weights,
    loop_deadends,
    loop_vertices,
    set_weights,
    symmetrize,
    transpose,
    unsymmetrize,
)
from dynbatch.graph.types import DiGraph

__all__ = [
    "DiGraph",
    "apply_transform",
    "check_input_file",
    "clear_weights",
    "load_graph",
    "loop_deadends",
    "loop_vertices",
    "output_path",
    "read_edgelist",
    "read_matrix_market",
    "read_snap_temporal",
    "set_weights",
    "symmetrize",
    "transpose",
    "unsymmetrize",
    "write_edgelist",
]
