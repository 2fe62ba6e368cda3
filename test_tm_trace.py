import pytest

from tm_trace import TRACE_COLUMNS, record_trace, state_visits
from turing_machine import TuringMachine


def test_trace_has_one_row_per_step():
    tm = TuringMachine("1 1")
    trace = record_trace(tm)
    assert list(trace.columns) == TRACE_COLUMNS
    assert len(trace) == tm.steps
    assert trace["step"].tolist() == list(range(1, tm.steps + 1))
    assert trace.iloc[-1]["next_state"] == "Halt"
    assert trace.iloc[-1]["tape"] == "10"


def test_trace_first_row():
    trace = record_trace(TuringMachine("1 1"))
    first = trace.iloc[0]
    assert first["state"] == "ScanRight"
    assert first["position"] == 0
    assert first["read"] == "1"
    assert first["write"] == ""
    assert first["move"] == "R"


def test_trace_records_markers_and_carry():
    trace = record_trace(TuringMachine("1 1"))
    marks = trace[trace["write"] == "X"]
    assert set(marks["state"]) == {"MarkRightDigit", "AddDigits"}
    assert trace["carry"].max() == 1


def test_trace_stops_at_budget():
    trace = record_trace(TuringMachine("111 11"), max_steps=7)
    assert len(trace) == 7
    assert "Halt" not in trace["next_state"].tolist()


def test_trace_rejects_non_positive_budget():
    with pytest.raises(ValueError):
        record_trace(TuringMachine("1 1"), max_steps=0)


def test_state_visits():
    visits = state_visits(record_trace(TuringMachine("101 11")))
    assert visits.sum() > 0
    assert "CleanupMarkers" in visits.index
    assert "Halt" not in visits.index
