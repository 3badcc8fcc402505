# core/history_utils.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Deque, Iterator, List, Optional

MASK_CHAR = "•"

def mask(password: str) -> str:
    return MASK_CHAR * len(password)

@dataclass(frozen=True)
class HistoryEntry:
    password: str
    created_at: datetime

class PasswordHistory:
    """
    Recently generated passwords, newest first. Holds at most `capacity`
    entries; adding past capacity drops the oldest. In memory only.
    """

    def __init__(self, capacity: int = 7) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1 (got {capacity})")
        self.capacity = capacity
        self._entries: Deque[HistoryEntry] = deque(maxlen=capacity)

    def add(self, password: str, created_at: Optional[datetime] = None) -> HistoryEntry:
        entry = HistoryEntry(password=password, created_at=created_at or datetime.now())
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def rows(self, masked: bool = True) -> List[dict]:
        """Table rows for display: generation time and (optionally masked) password."""
        return [
            {
                "Time": e.created_at.strftime("%H:%M:%S"),
                "Password": mask(e.password) if masked else e.password,
            }
            for e in self._entries
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)
