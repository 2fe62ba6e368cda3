"""Single-tape Turing machine performing binary addition.

The input ``"<left> <right>"`` holds two binary numbers separated by a
space. Each pass consumes the rightmost unconsumed digit of both operands
(marking it ``X``), adds them with the carry and writes the sum digit to a
result area left of the operands, behind a space boundary. Result digits
grow leftward, so the finished number reads most significant digit first.
When both operands are consumed the markers and separators are erased and
only the result remains on the tape.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from tm_tape import Tape
from tm_states import (
    DIGITS,
    LEFT,
    MARKER,
    RIGHT,
    SPACE,
    State,
    Transition,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 500
TRACE_EVERY = 5
# FindStart gives up this many cells beyond the input length.
LEFT_MARGIN = 20

# Markers and blanks are produced by the machine, never read from the input.
INPUT_SYMBOLS = DIGITS + (SPACE,)


class UnexpectedSymbol(ValueError):
    """The head read a symbol the current state has no rule for."""

    def __init__(self, state: State, symbol: str, position: int) -> None:
        super().__init__(f"Unexpected {symbol!r} in {state} at position {position}")
        self.state = state
        self.symbol = symbol
        self.position = position


@dataclass(frozen=True)
class RunResult:
    """Outcome of :meth:`TuringMachine.run`."""

    halted: bool
    steps: int

    def __str__(self) -> str:
        if self.halted:
            return f"✓ Halted in {self.steps} steps"
        return f"⚠ Stopped at {self.steps} steps"


class TuringMachine:
    """Addition automaton owning its tape, head, state and scratch registers."""

    def __init__(self, input_str: str, left_margin: int = LEFT_MARGIN) -> None:
        for i, ch in enumerate(input_str):
            if ch not in INPUT_SYMBOLS:
                raise UnexpectedSymbol(State.SCAN_RIGHT, ch, i)
        self.tape = Tape(input_str)
        self.blank = self.tape.blank
        self.state = State.SCAN_RIGHT
        self.position = 0
        self.left_limit = -(len(input_str) + left_margin)
        self.steps = 0

        # Scratch registers for the column being added
        self.right_digit = 0
        self.left_digit = 0
        self.carry = 0
        self.result_digit = 0

    @property
    def halted(self) -> bool:
        return self.state is State.HALT

    def read(self) -> str:
        return self.tape.read(self.position)

    def write(self, symbol: str) -> None:
        self.tape.write(self.position, symbol)

    def _add_column(self) -> None:
        total = self.left_digit + self.right_digit + self.carry
        self.result_digit = total % 2
        self.carry = total // 2

    def _decide(self, c: str) -> Transition:
        """Apply register effects for reading ``c`` and return the transition."""
        state = self.state

        if state is State.SCAN_RIGHT:
            if c == self.blank:
                return Transition(State.MARK_RIGHT_DIGIT, move=LEFT)
            return Transition(State.SCAN_RIGHT, move=RIGHT)

        if state is State.MARK_RIGHT_DIGIT:
            if c == MARKER or c == self.blank:
                return Transition(State.MARK_RIGHT_DIGIT, move=LEFT)
            if c in DIGITS:
                self.right_digit = int(c)
                return Transition(State.FIND_SPACE_GOING_LEFT, write=MARKER, move=LEFT)
            if c == SPACE:
                # No more right digits
                self.right_digit = 0
                return Transition(State.PROPAGATE_CARRY, move=LEFT)
            raise UnexpectedSymbol(state, c, self.position)

        if state is State.FIND_SPACE_GOING_LEFT:
            if c == SPACE:
                return Transition(State.ADD_DIGITS, move=LEFT)
            return Transition(State.FIND_SPACE_GOING_LEFT, move=LEFT)

        if state is State.ADD_DIGITS:
            if c == MARKER:
                return Transition(State.ADD_DIGITS, move=LEFT)
            if c in DIGITS:
                self.left_digit = int(c)
                self._add_column()
                return Transition(State.SEEK_RESULT_AREA, write=MARKER, move=LEFT)
            if c == SPACE or c == self.blank:
                # Left number exhausted
                self.left_digit = 0
                self._add_column()
                return Transition(State.SEEK_RESULT_AREA)
            raise UnexpectedSymbol(state, c, self.position)

        if state is State.SEEK_RESULT_AREA:
            if c in DIGITS:
                return Transition(State.SEEK_RESULT_AREA, move=LEFT)
            if c == SPACE:
                return Transition(State.WRITE_RESULT, move=LEFT)
            if c == self.blank:
                # First result digit: open the result area
                return Transition(State.WRITE_RESULT, write=SPACE, move=LEFT)
            raise UnexpectedSymbol(state, c, self.position)

        if state is State.WRITE_RESULT:
            if c in DIGITS:
                return Transition(State.WRITE_RESULT, move=LEFT)
            if c == self.blank:
                return Transition(State.RETURN_RIGHT, write=str(self.result_digit), move=RIGHT)
            raise UnexpectedSymbol(state, c, self.position)

        if state is State.RETURN_RIGHT:
            if c == self.blank:
                return Transition(State.SCAN_RIGHT, move=LEFT)
            return Transition(State.RETURN_RIGHT, move=RIGHT)

        if state is State.PROPAGATE_CARRY:
            if c == MARKER:
                return Transition(State.PROPAGATE_CARRY, move=LEFT)
            if c in DIGITS:
                self.left_digit = int(c)
                self._add_column()
                return Transition(State.SEEK_RESULT_AREA, write=MARKER, move=LEFT)
            if c == SPACE or c == self.blank:
                if self.carry == 1:
                    # Both operands used up, emit the leading 1
                    self.left_digit = 0
                    self._add_column()
                    return Transition(State.SEEK_RESULT_AREA)
                return Transition(State.FIND_START)
            raise UnexpectedSymbol(state, c, self.position)

        if state is State.FIND_START:
            if self.position <= self.left_limit:
                return Transition(State.CLEANUP_MARKERS, jump=0)
            if self.tape.read(self.position - 1) == self.blank:
                return Transition(State.CLEANUP_MARKERS)
            return Transition(State.FIND_START, move=LEFT)

        if state is State.CLEANUP_MARKERS:
            if c == MARKER or c == SPACE:
                return Transition(State.CLEANUP_MARKERS, write=self.blank, move=RIGHT)
            if c == self.blank:
                return Transition(State.HALT)
            return Transition(State.CLEANUP_MARKERS, move=RIGHT)

        return Transition(State.HALT)

    def step(self) -> Transition:
        """Read the head symbol, write, move and change state once."""
        c = self.read()
        try:
            t = self._decide(c)
        except UnexpectedSymbol as e:
            logger.error("%s", e)
            raise
        if t.write is not None:
            self.write(t.write)
        if t.jump is not None:
            self.position = t.jump
        else:
            self.position += t.move
        self.state = t.next_state
        self.steps += 1
        return t

    def run(self, max_steps: int = DEFAULT_MAX_STEPS, verbose: bool = False, every: int = TRACE_EVERY) -> RunResult:
        """Step until :attr:`State.HALT` or ``max_steps`` steps have elapsed.

        Args:
            max_steps (int): Upper bound on the number of steps for this call.
            verbose (bool): Print a tape snapshot at step 0 and every ``every`` steps.
            every (int): Snapshot interval used when ``verbose`` is set.

        Returns:
            RunResult: ``halted`` is False when the budget ran out first.

        Raises:
            ValueError: If ``max_steps`` or ``every`` is not positive.
            UnexpectedSymbol: If the tape holds a symbol outside the alphabet.
        """
        if max_steps <= 0:
            raise ValueError("max_steps must be a positive integer.")
        if every <= 0:
            raise ValueError("every must be a positive integer.")

        steps = 0
        if verbose:
            print(f"Step 0:\n{self}\n")

        while not self.halted and steps < max_steps:
            self.step()
            steps += 1
            if verbose and steps % every == 0:
                print(f"Step {steps}:\n{self}\n")

        result = RunResult(halted=self.halted, steps=steps)
        if result.halted:
            logger.debug("halted after %d steps", steps)
        else:
            logger.warning("step budget of %d exhausted in state %s", max_steps, self.state)
        return result

    def get_result(self) -> str:
        """Return the tape between its outermost written cells, blanks trimmed."""
        span = self.tape.span()
        if span is None:
            return "0"
        return self.tape.window(*span).strip(self.blank)

    def __str__(self) -> str:
        span = self.tape.span() or (0, 0)
        lo = min(span[0], self.position - 2)
        hi = max(span[1], self.position + 2)
        cells = self.tape.window(lo, hi)
        head = "".join("^" if i == self.position else " " for i in range(lo, hi + 1))
        return f"  {cells}\n  {head}\n  {self.state} | carry={self.carry}"

    def __repr__(self) -> str:
        return f"TuringMachine(state={self.state}, position={self.position}, carry={self.carry})"


def to_dec(bin_str: str) -> int:
    """Interpret ``bin_str`` as a binary number, 0 if it is not one."""
    try:
        return int(bin_str, 2)
    except ValueError:
        return 0


def step_budget(input_len: int) -> int:
    """Generous step bound for an input of ``input_len`` characters."""
    return max(DEFAULT_MAX_STEPS, 8 * (input_len + 2) ** 2)


def add_binary(left: str, right: str, max_steps: Optional[int] = None) -> str:
    """Add two binary strings on a fresh machine and return the result string.

    Raises:
        RuntimeError: If the machine does not halt within ``max_steps``.
    """
    tm = TuringMachine(f"{left} {right}")
    if max_steps is None:
        max_steps = step_budget(len(left) + len(right) + 1)
    outcome = tm.run(max_steps)
    if not outcome.halted:
        raise RuntimeError(f"Machine did not halt within {max_steps} steps for {left!r} + {right!r}")
    return tm.get_result()
