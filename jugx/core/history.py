from __future__ import annotations

import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from tabulate import tabulate

from jugx.utils.util import format_amounts, is_integer

__all__ = ["HistoryEntry", "HistoryLog"]


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of the jar amounts after one accepted state change."""

    amounts: tuple[int, ...]
    description: str
    timestamp: float = field(default_factory=time.monotonic)
    wall_time: datetime = field(default_factory=datetime.now, compare=False)


class HistoryLog:
    """Ordered record of accepted state changes.

    Entries are only ever appended, except for :meth:`truncate` (rollback)
    and :meth:`clear` (new setup / reset). Truncation discards the later
    entries; there is no redo.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []

    def append(self, amounts: Sequence[int], description: str) -> HistoryEntry:
        entry = HistoryEntry(amounts=tuple(int(a) for a in amounts), description=description)
        self._entries.append(entry)
        return entry

    def truncate(self, index: int) -> HistoryEntry:
        """Keep entries ``0..index`` and return the entry at ``index``.

        Raises:
            IndexError: If ``index`` is not in ``[0, len(self))``. The log is
                left untouched.
        """
        self.check_index(index)
        index = int(index)
        del self._entries[index + 1 :]
        return self._entries[index]

    def check_index(self, index: int) -> None:
        if not is_integer(index):
            raise IndexError(f"History index must be an int, got {index!r}")
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"History index {index} out of range for {len(self._entries)} entries"
            )

    def clear(self) -> None:
        self._entries.clear()

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def last(self) -> HistoryEntry | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> HistoryEntry:
        return self._entries[index]

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(tuple(self._entries))

    def format_table(self, tablefmt: str = "simple") -> str:
        """Render the log as a table: step, amounts, description and clock time."""
        rows = [
            [step, format_amounts(entry.amounts), entry.description, entry.wall_time.strftime("%H:%M:%S")]
            for step, entry in enumerate(self._entries)
        ]
        return tabulate(rows, headers=["Step", "Amounts", "Description", "Time"], tablefmt=tablefmt)

    def __repr__(self) -> str:
        return f"HistoryLog(entries={len(self._entries)})"
