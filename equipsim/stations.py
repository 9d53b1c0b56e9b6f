# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# stations.py
# -----------------------------------------------------------------------------
# Purpose:
#   Equipment units (single-capacity servers) and their construction from
#   config.
#
# Design notes:
#   - Busy time is credited in full at assignment, not integrated over time,
#     so a run that stops mid-service still counts the whole rental period.
#   - complete() only stamps the request's completion time; terminal status
#     is normally already written by the selection dispatcher.
#
# Usage:
#   from equipsim.stations import EquipmentUnit, make_equipment
# -----------------------------------------------------------------------------

from __future__ import annotations
from enum import Enum
from typing import Dict, List, Optional

from .entities import Request
from .errors import InvariantError


class UnitStatus(Enum):
    FREE = "free"
    BUSY = "busy"


class EquipmentUnit:
    """
    A single piece of equipment serving one request at a time.

    Parameters
    ----------
    eid : int
        Unit id (1-based in make_equipment).
    kind : str
        Equipment kind label; cosmetic, dispatch does not compare it.
    """
    def __init__(self, eid: int, kind: str):
        self.eid = eid
        self.kind = kind
        self.status = UnitStatus.FREE
        self.current_request: Optional[Request] = None
        self.completion_time: float = 0.0
        self.busy_time: float = 0.0

    @property
    def is_free(self) -> bool:
        return self.status is UnitStatus.FREE

    def assign(self, request: Request, current_time: float):
        if not self.is_free or self.current_request is not None:
            raise InvariantError("Equipment busy", "unit {0} assigned while busy until {1}",
                                 self.eid, self.completion_time)
        self.status = UnitStatus.BUSY
        self.current_request = request
        request.wait_time = current_time - request.arrival_time
        self.completion_time = current_time + request.service_duration
        self.busy_time += request.service_duration

    def complete(self, current_time: float) -> Optional[Request]:
        """Release the request if its service interval has elapsed.

        Returns the released request, or None when idle or not yet due. A
        released request that is still pending must be recorded as processed
        by the caller (RequestLog.record).
        """
        req = self.current_request
        if req is None or current_time < self.completion_time:
            return None
        if req.completion_time is not None:
            raise InvariantError("Completed twice", "request on unit {0} already completed at {1}",
                                 self.eid, req.completion_time)
        req.completion_time = current_time
        self.current_request = None
        self.status = UnitStatus.FREE
        return req

    def __repr__(self):
        return f"EquipmentUnit({self.eid}, {self.kind!r}, {self.status.value})"


def make_equipment(cfg: Dict, rng) -> List[EquipmentUnit]:
    """
    Create the equipment pool from config.

    Each unit gets a uniformly drawn kind from cfg["equipment"]["kinds"].
    """
    eq_cfg = cfg["equipment"]
    kinds = eq_cfg["kinds"]
    return [EquipmentUnit(i + 1, rng.category(kinds)) for i in range(eq_cfg["count"])]
