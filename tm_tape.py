"""Sparse, bidirectionally infinite tape used by the Turing machine."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

BLANK = "_"


class Tape:
    """Mapping from integer positions to symbols.

    Unwritten cells read as :data:`BLANK`. Writing the blank symbol removes
    the cell, so the mapping never stores an explicit blank entry and its
    size stays proportional to the number of non-blank cells.
    """

    def __init__(self, content: str = "", blank: str = BLANK) -> None:
        self.blank = blank
        self._cells: Dict[int, str] = {}
        for i, ch in enumerate(content):
            self.write(i, ch)

    def read(self, position: int) -> str:
        """Return the symbol at ``position`` or the blank symbol."""
        return self._cells.get(position, self.blank)

    def write(self, position: int, symbol: str) -> None:
        """Store ``symbol`` at ``position``; blank erases the cell."""
        if symbol == self.blank:
            self._cells.pop(position, None)
        else:
            self._cells[position] = symbol

    def span(self) -> Optional[Tuple[int, int]]:
        """Return ``(min, max)`` of the occupied positions, or None if empty."""
        if not self._cells:
            return None
        return min(self._cells), max(self._cells)

    def window(self, start: int, stop: int) -> str:
        """Return the cells from ``start`` to ``stop`` inclusive as a string."""
        return "".join(self.read(i) for i in range(start, stop + 1))

    def occupied(self) -> Dict[int, str]:
        """Copy of the non-blank cells."""
        return dict(self._cells)

    def __contains__(self, position: int) -> bool:
        return position in self._cells

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._cells))

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Tape(cells={len(self._cells)}, span={self.span()})"
