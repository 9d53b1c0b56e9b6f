# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# entities.py
# -----------------------------------------------------------------------------
# Purpose:
#   Entity definitions for the equipment allocation DES: Request, Project.
#   These objects carry the attributes needed for dispatch and statistics.
#
# Design notes:
#   - A Request is held by exactly one owner at a time (project, buffer,
#     equipment unit, log); owners hand it off, never share it.
#   - Terminal status (processed | rejected) is written only through
#     RequestLog.record in metrics.py.
#   - Projects are stateless generators; priority equals id, smaller is
#     more urgent.
#
# Usage:
#   from equipsim.entities import Request, Project, RequestStatus
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class RequestStatus(Enum):
    PENDING = "pending"
    PROCESSED = "processed"
    REJECTED = "rejected"


@dataclass(eq=False)
class Request:
    source_id: int
    equipment_kind: str              # 'excavator' | 'crane' | 'concrete_mixer'
    service_duration: float          # requested rental period
    priority: int
    arrival_time: float
    status: RequestStatus = RequestStatus.PENDING
    completion_time: Optional[float] = None   # stamped by the equipment unit
    wait_time: float = 0.0                    # set at hand-off to a unit

    @property
    def is_terminal(self) -> bool:
        return self.status is not RequestStatus.PENDING


@dataclass(frozen=True)
class Project:
    """A request source. Priority is fixed at creation and equals the id."""
    pid: int

    @property
    def priority(self) -> int:
        return self.pid

    def generate_request(self, current_time: float, rng, service_range: Sequence[float],
                         kinds: Sequence[str]) -> Request:
        """
        Draw a new pending Request stamped with current_time.

        Parameters
        ----------
        rng : RandomSource
            Shared variate source; the kind is drawn before the duration.
        service_range : (float, float)
            Bounds [a, b] of the uniform service duration.
        kinds : sequence of str
            Equipment kind labels.
        """
        kind = rng.category(kinds)
        duration = rng.uniform(service_range[0], service_range[1])
        return Request(
            source_id=self.pid,
            equipment_kind=kind,
            service_duration=duration,
            priority=self.priority,
            arrival_time=current_time,
        )


def make_projects(count: int):
    """Projects numbered 1..count."""
    return [Project(i + 1) for i in range(count)]
