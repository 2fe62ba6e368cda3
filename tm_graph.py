# Utilities to build and draw the control-state graph of the addition machine

from __future__ import annotations

from typing import Dict, Set, Tuple

import networkx as nx

from tm_states import ALPHABET, ONE, SPACE, State, move_name
from tm_tape import BLANK
from turing_machine import TuringMachine, UnexpectedSymbol


def _show(symbol: str) -> str:
    return "' '" if symbol == SPACE else symbol


# -----------------------------------------------------------------------------
# Graph Construction
# -----------------------------------------------------------------------------

def _try_step(state: State, symbol: str, neighbour: str, carry: int) -> Tuple[State, str] | None:
    """Run one step of a scratch machine and describe the transition taken."""
    tm = TuringMachine("")
    tm.tape.write(0, symbol)
    tm.tape.write(-1, neighbour)
    tm.state = state
    tm.carry = carry
    try:
        t = tm.step()
    except UnexpectedSymbol:
        return None
    written = t.write if t.write is not None else symbol
    move = "J" if t.jump is not None else move_name(t.move)
    return tm.state, f"{_show(symbol)}/{_show(written)},{move}"


def build_state_graph() -> nx.DiGraph:
    """Return a DiGraph of the control states with transitions as edges.

    Edges are discovered by stepping a scratch machine for every state,
    head symbol, left neighbour and carry value, so the graph always
    reflects the transition logic actually executed.
    """
    g = nx.DiGraph()
    for state in State:
        g.add_node(str(state), terminal=state is State.HALT)

    labels: Dict[Tuple[str, str], Set[str]] = {}
    for state in State:
        if state is State.HALT:
            continue
        for symbol in ALPHABET:
            for neighbour in (BLANK, ONE):
                for carry in (0, 1):
                    taken = _try_step(state, symbol, neighbour, carry)
                    if taken is None:
                        continue
                    target, label = taken
                    labels.setdefault((str(state), str(target)), set()).add(label)

    for (src, dst), edge_labels in labels.items():
        g.add_edge(src, dst, label="\n".join(sorted(edge_labels)))
    return g


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

def save_state_graph_dot(g: nx.DiGraph, path: str) -> None:
    """Write ``g`` to ``path`` in GraphViz DOT format."""
    from networkx.drawing.nx_agraph import write_dot

    write_dot(g, path)


def visualize_state_graph(g: nx.DiGraph, path: str) -> None:
    """Plot ``g`` to the given file path using GraphViz layout."""
    import matplotlib.pyplot as plt
    from networkx.drawing.nx_agraph import graphviz_layout

    pos = graphviz_layout(g, prog="dot")
    plt.figure(figsize=(12, 8))
    nx.draw_networkx_nodes(g, pos, node_size=2200, node_color="lightblue")
    nx.draw_networkx_edges(
        g,
        pos,
        arrows=True,
        arrowsize=20,
        arrowstyle="->",
        connectionstyle="arc3,rad=0.1",
    )
    nx.draw_networkx_labels(g, pos, font_size=8)
    nx.draw_networkx_edge_labels(
        g,
        pos,
        edge_labels=nx.get_edge_attributes(g, "label"),
        font_size=6,
        bbox=dict(facecolor="white", edgecolor="none", pad=0.3),
    )
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
