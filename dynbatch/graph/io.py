"""Graph loaders (matrix-market, edgelist, snap-temporal) and the edge-list writer."""

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

import networkx as nx
import numpy as np
import scipy.io
import scipy.sparse

from dynbatch.config.options import InputFormat
from dynbatch.errors import ConfigurationError, InputFileNotFound, OutputFileCreateFailed
from dynbatch.graph.types import DEFAULT_WEIGHT, WEIGHT_ATTR, DiGraph

log = logging.getLogger(__name__)


def check_input_file(path: str | Path) -> None:
    """Raise InputFileNotFound unless path is a readable regular file."""
    p = Path(path)
    if not p.is_file() or not os.access(p, os.R_OK):
        raise InputFileNotFound(str(path))


def read_matrix_market(path: str | Path) -> DiGraph:
    """Read a Matrix Market coordinate file.

    Keys are the file's 1-based row/column indices and every vertex
    1..rows is present even when isolated. Symmetric files come back from
    scipy with both triangles filled, so both directions are inserted.
    Pattern files get weight 1; real values are truncated to int.
    """
    matrix = scipy.sparse.coo_matrix(scipy.io.mmread(str(path)))
    g = nx.DiGraph()
    g.add_nodes_from(range(1, max(matrix.shape) + 1))
    g.add_weighted_edges_from(
        zip(
            (matrix.row + 1).tolist(),
            (matrix.col + 1).tolist(),
            matrix.data.astype(np.int64).tolist(),
        ),
        weight=WEIGHT_ATTR,
    )
    return DiGraph(g)


def _data_rows(path: str | Path, min_columns: int) -> list[list[str]]:
    """Whitespace-split rows of a text graph file, # and % comments removed."""
    rows = []
    with open(path) as f:
        for line in f:
            fields = line.split("#", 1)[0].split("%", 1)[0].split()
            if not fields:
                continue
            if len(fields) < min_columns:
                raise ValueError(
                    f"{path}: expected at least {min_columns} columns, got {len(fields)}"
                )
            rows.append(fields)
    return rows


def _parse_weighted(lines: Iterable[str]) -> DiGraph:
    """Build a graph from `u v w` lines; a repeated pair keeps the last weight."""
    g = nx.parse_edgelist(
        lines,
        comments=None,
        create_using=nx.DiGraph,
        nodetype=int,
        data=((WEIGHT_ATTR, int),),
    )
    return DiGraph(g)


def read_edgelist(path: str | Path) -> DiGraph:
    """Read `u v [w]` lines. Vertices are the endpoints that appear.

    A repeated (u, v) keeps the last weight; missing weights default to 1.
    """
    rows = _data_rows(path, 2)
    return _parse_weighted(
        " ".join(row if len(row) > 2 else [*row, str(DEFAULT_WEIGHT)]) for row in rows
    )


def read_snap_temporal(path: str | Path) -> DiGraph:
    """Read SNAP temporal `u v t` lines, inserting edges in timestamp order.

    Timestamps only order the insertions; repeated interactions collapse
    into one edge of weight 1.
    """
    rows = _data_rows(path, 3)
    rows.sort(key=lambda row: int(row[2]))
    return _parse_weighted(f"{row[0]} {row[1]} {DEFAULT_WEIGHT}" for row in rows)


_LOADERS: dict[InputFormat, Callable[[str | Path], DiGraph]] = {
    InputFormat.MATRIX_MARKET: read_matrix_market,
    InputFormat.EDGELIST: read_edgelist,
    InputFormat.SNAP_TEMPORAL: read_snap_temporal,
}


def load_graph(fmt: InputFormat, path: str | Path) -> DiGraph:
    """Load a graph from disk.

    Args:
        fmt: Input format, already resolved from configuration.
        path: Source file.

    Returns:
        The loaded DiGraph.

    Raises:
        InputFileNotFound: If path is missing or unreadable.
        ConfigurationError: If the file cannot be parsed as fmt.
    """
    check_input_file(path)
    # networkx reports unparsable keys and weights as TypeError and a wrong
    # column count as IndexError.
    try:
        graph = _LOADERS[fmt](path)
    except (ValueError, TypeError, IndexError) as exc:
        raise ConfigurationError(f"Malformed {fmt} graph file {path}: {exc}", str(path)) from exc
    log.info("Loaded %s graph from %s: order=%d, size=%d", fmt, path, graph.order(), graph.size())
    return graph


def output_path(directory: str, prefix: str, counter: int) -> str:
    """Snapshot name <directory><prefix>_<counter>; directory is a plain prefix."""
    return f"{directory}{prefix}_{counter}"


def write_edgelist(path: str | Path, graph: DiGraph, weighted: bool = True) -> None:
    """Write `<order> <size>` then one `u v [w]` line per edge.

    Raises:
        OutputFileCreateFailed: If the file cannot be created.
    """
    try:
        f = open(path, "w")
    except OSError as exc:
        raise OutputFileCreateFailed(str(path)) from exc
    with f:
        f.write(f"{graph.order()} {graph.size()}\n")
        for u, v, w in graph.all_edges():
            if weighted:
                f.write(f"{u} {v} {w}\n")
            else:
                f.write(f"{u} {v}\n")
