"""Control states, symbols and head moves of the binary addition machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tm_tape import BLANK

ZERO = "0"
ONE = "1"
MARKER = "X"
SPACE = " "

DIGITS = (ZERO, ONE)
ALPHABET = (ZERO, ONE, MARKER, SPACE, BLANK)

LEFT = -1
STAY = 0
RIGHT = 1


class State(Enum):
    """Phases of the column-by-column addition."""

    # Main cycle
    SCAN_RIGHT = "ScanRight"
    MARK_RIGHT_DIGIT = "MarkRightDigit"
    FIND_SPACE_GOING_LEFT = "FindSpaceGoingLeft"
    ADD_DIGITS = "AddDigits"
    SEEK_RESULT_AREA = "SeekResultArea"
    WRITE_RESULT = "WriteResult"
    RETURN_RIGHT = "ReturnRight"
    # Carry handling
    PROPAGATE_CARRY = "PropagateCarry"
    # Cleanup
    FIND_START = "FindStart"
    CLEANUP_MARKERS = "CleanupMarkers"
    HALT = "Halt"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Transition:
    """Outcome of one step: next state, optional symbol to write, head move.

    ``jump`` replaces the relative move with an absolute head position.
    """

    next_state: State
    write: Optional[str] = None
    move: int = STAY
    jump: Optional[int] = None


def move_name(delta: int) -> str:
    """Return ``L``, ``R`` or ``N`` for a head move."""
    if delta < 0:
        return "L"
    if delta > 0:
        return "R"
    return "N"
