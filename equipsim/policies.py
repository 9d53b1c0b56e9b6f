# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# policies.py
# -----------------------------------------------------------------------------
# Purpose:
#   Admission control (placement into the bounded buffer) and priority
#   selection (matching free equipment to buffered requests).
#
# Design notes:
#   - Placement never turns an arrival away: when the buffer is full the
#     request at the cursor is evicted (rejected) and the arrival takes a slot.
#   - Selection serves only the smallest source id with buffered work per
#     call; other sources wait for a later tick even if units stay free.
#   - Requests are marked processed and logged at assignment time.
#   - Equipment kind is never compared with the request's kind.
#
# Usage:
#   placer = PlacementDispatcher(buffer, log)
#   selector = SelectionDispatcher(equipment, buffer, log)
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from .entities import Request, RequestStatus
from .errors import InvariantError
from .simlogging import SimLogging

logger = SimLogging.get_logger(__name__)


class PlacementDispatcher:
    def __init__(self, buffer, log):
        self.buffer = buffer
        self.log = log

    def place(self, request: Request, current_time: float) -> Optional[Request]:
        """
        Admit request into the buffer.

        Returns the evicted (rejected) request when the buffer was full,
        otherwise None.
        """
        if self.buffer.try_insert(request):
            return None
        evicted = self.buffer.take_at_cursor()
        if evicted is not None:
            self.log.record(evicted, RequestStatus.REJECTED, current_time)
            logger.debug("t=%.3f evicted request of source %d at slot %d",
                         current_time, evicted.source_id, self.buffer.cursor)
        if not self.buffer.try_insert(request):
            raise InvariantError("Buffer full", "no slot freed for source {0} at t={1}",
                                 request.source_id, current_time)
        return evicted


def group_by_source(buffer) -> Dict[int, List[int]]:
    """Slot indices of buffered requests keyed by source id, in slot order."""
    groups: Dict[int, List[int]] = {}
    for idx, req in buffer.occupied_slots():
        groups.setdefault(req.source_id, []).append(idx)
    return groups


class SelectionDispatcher:
    def __init__(self, equipment, buffer, log):
        self.equipment = equipment
        self.buffer = buffer
        self.log = log

    def select(self, current_time: float) -> List[Tuple[object, Request]]:
        """Run one dispatch round; return the (unit, request) pairs assigned."""
        groups = group_by_source(self.buffer)
        if not groups:
            return []
        target = min(groups)
        slot_refs = groups[target]
        assigned: List[Tuple[object, Request]] = []
        for unit in self.equipment:
            if not unit.is_free:
                continue
            for idx in slot_refs:
                req = self.buffer.slots[idx]
                if req is None or req.source_id != target:
                    continue
                unit.assign(req, current_time)
                self.log.record(req, RequestStatus.PROCESSED, current_time)
                self.buffer.clear_slot(idx)
                assigned.append((unit, req))
                logger.debug("t=%.3f unit %d <- source %d (waited %.3f)",
                             current_time, unit.eid, target, req.wait_time)
                break
        return assigned
