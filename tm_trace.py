"""Utilities for building a DataFrame of a machine run, one row per step."""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from tm_states import move_name
from turing_machine import DEFAULT_MAX_STEPS, TuringMachine

TRACE_COLUMNS = [
    "step",
    "state",
    "position",
    "read",
    "write",
    "move",
    "next_state",
    "carry",
    "tape",
]


def _tape_text(tm: TuringMachine) -> str:
    span = tm.tape.span()
    if span is None:
        return ""
    return tm.tape.window(*span)


def record_trace(tm: TuringMachine, max_steps: int = DEFAULT_MAX_STEPS) -> pd.DataFrame:
    """Run ``tm`` and return a DataFrame describing every step taken.

    The ``tape`` column holds the occupied window after the step; ``write``
    is empty when the step left the cell unchanged.
    """
    if max_steps <= 0:
        raise ValueError("max_steps must be a positive integer.")

    rows: List[Dict[str, object]] = []
    while not tm.halted and len(rows) < max_steps:
        state = tm.state
        position = tm.position
        read = tm.read()
        t = tm.step()
        rows.append(
            {
                "step": tm.steps,
                "state": str(state),
                "position": position,
                "read": read,
                "write": t.write if t.write is not None else "",
                "move": "J" if t.jump is not None else move_name(t.move),
                "next_state": str(tm.state),
                "carry": tm.carry,
                "tape": _tape_text(tm),
            }
        )
    return pd.DataFrame(rows, columns=TRACE_COLUMNS)


def state_visits(trace: pd.DataFrame) -> pd.Series:
    """Return the number of steps spent in each state, most visited first."""
    return trace["state"].value_counts()
