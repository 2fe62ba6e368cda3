import networkx as nx
import pytest

from tm_graph import build_state_graph, save_state_graph_dot, visualize_state_graph
from tm_states import State


def test_every_state_is_a_node():
    g = build_state_graph()
    assert set(g.nodes) == {str(s) for s in State}
    assert g.nodes["Halt"]["terminal"]


def test_halt_has_no_outgoing_transitions():
    g = build_state_graph()
    assert g.out_degree("Halt") == 0


def test_every_state_can_reach_halt():
    g = build_state_graph()
    for node in g.nodes:
        assert nx.has_path(g, node, "Halt"), node


def test_edge_labels():
    g = build_state_graph()
    assert "_/_,L" in g.edges["ScanRight", "MarkRightDigit"]["label"]
    mark = g.edges["MarkRightDigit", "FindSpaceGoingLeft"]["label"].split("\n")
    assert "0/X,L" in mark and "1/X,L" in mark
    assert g.has_edge("MarkRightDigit", "PropagateCarry")
    assert g.has_edge("PropagateCarry", "FindStart")
    assert g.has_edge("WriteResult", "ReturnRight")
    assert "_/_,N" in g.edges["CleanupMarkers", "Halt"]["label"]
    assert not g.has_edge("ScanRight", "Halt")


def test_save_state_graph_dot(tmp_path):
    pytest.importorskip("pygraphviz")
    from networkx.drawing.nx_agraph import read_dot

    path = tmp_path / "states.dot"
    save_state_graph_dot(build_state_graph(), str(path))
    g = read_dot(str(path))
    assert set(g.nodes) == {str(s) for s in State}
    assert g.has_edge("CleanupMarkers", "Halt")


def test_visualize_state_graph(tmp_path):
    pytest.importorskip("pygraphviz")
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")

    path = tmp_path / "states.png"
    visualize_state_graph(build_state_graph(), str(path))
    assert path.stat().st_size > 0
