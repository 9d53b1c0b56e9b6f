# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Bounded staging buffer: a fixed array of optional request slots plus one
#   rotating cursor.
#
# Design notes:
#   - Not a FIFO and not a priority queue. Insertion probes from the cursor,
#     wrapping once, and takes the first empty slot, so earlier-vacated slots
#     get refilled out of arrival order.
#   - Eviction takes whatever sits at the cursor (see policies.py).
#   - Dispatch removes by slot index via clear_slot().
#
# Usage:
#   from equipsim.queues import Buffer
#   buf = Buffer(10)
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List, Optional, Tuple

from .entities import Request
from .errors import InvariantError


class Buffer:
    """Fixed-capacity slot arena with a rotating insertion cursor.

    Parameters
    ----------
    capacity : int
        Number of slots (>= 1).

    Attributes
    ----------
    cursor : int
        Next slot to probe for insertion; also the eviction target.
    """
    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError("buffer capacity must be >= 1")
        self.capacity = capacity
        self._slots: List[Optional[Request]] = [None] * capacity
        self.cursor: int = 0

    @property
    def slots(self) -> Tuple[Optional[Request], ...]:
        """Read-only snapshot of the slot array."""
        return tuple(self._slots)

    def __len__(self) -> int:
        return sum(1 for r in self._slots if r is not None)

    def __contains__(self, request: Request) -> bool:
        return any(r is request for r in self._slots)

    def is_full(self) -> bool:
        return all(r is not None for r in self._slots)

    def is_empty(self) -> bool:
        return all(r is None for r in self._slots)

    def occupied_slots(self) -> List[Tuple[int, Request]]:
        """(index, request) pairs for every occupied slot, in slot order."""
        return [(i, r) for i, r in enumerate(self._slots) if r is not None]

    def try_insert(self, request: Request) -> bool:
        """Store request in the first empty slot found scanning from cursor."""
        if request.is_terminal:
            raise InvariantError("Terminal request", "request from source {0} is already {1}",
                                 request.source_id, request.status.value)
        if request in self:
            raise InvariantError("Duplicate request", "request from source {0} is already buffered",
                                 request.source_id)
        for i in range(self.capacity):
            idx = (self.cursor + i) % self.capacity
            if self._slots[idx] is None:
                self._slots[idx] = request
                self.cursor = (idx + 1) % self.capacity
                return True
        return False

    def take_at_cursor(self) -> Optional[Request]:
        """Remove and return the request at the cursor, if any."""
        req = self._slots[self.cursor]
        if req is not None:
            self._slots[self.cursor] = None
        return req

    def clear_slot(self, idx: int) -> Request:
        req = self._slots[idx]
        if req is None:
            raise InvariantError("Empty slot", "slot {0} holds no request", idx)
        self._slots[idx] = None
        return req
