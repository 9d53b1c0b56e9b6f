# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# metrics.py
# -----------------------------------------------------------------------------
# Purpose:
#   Record terminal requests and summarize KPIs: rejection probability,
#   wait/service/sojourn means and dispersions per source, utilization per
#   equipment unit, grand means and totals.
#
# Design notes:
#   - RequestLog.record is the single place a request becomes processed or
#     rejected; a second terminal transition is an InvariantError.
#   - Dispersions are population variances E[X^2] - E[X]^2 from running sums
#     over the non-rejected requests of a source.
#   - summarize() returns an immutable Summary; as_dict() gives a
#     JSON-serializable view for tabulation.
#
# Usage:
#   log = RequestLog(); ...; S = summarize(log, equipment, total_time)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .entities import Request, RequestStatus
from .errors import InvariantError


def _ratio(num: float, den: float) -> float:
    return num / den if den > 0 else 0.0


class RequestLog:
    """Append-only log of requests that reached a terminal status."""

    def __init__(self):
        self._entries: List[Request] = []

    def record(self, request: Request, status: RequestStatus, now: float):
        if status is RequestStatus.PENDING:
            raise InvariantError("Bad transition", "pending is not a terminal status")
        if request.is_terminal:
            raise InvariantError("Bad transition", "request from source {0} at t={1} is already {2}",
                                 request.source_id, now, request.status.value)
        request.status = status
        self._entries.append(request)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Request]:
        return iter(self._entries)

    def count(self, status: RequestStatus) -> int:
        return sum(1 for r in self._entries if r.status is status)


@dataclass(frozen=True)
class SourceStats:
    source_id: int
    total: int
    rejected: int
    p_reject: float
    mean_wait: float
    mean_service: float
    mean_sojourn: float
    var_wait: float
    var_service: float
    total_wait: float

    @property
    def completed(self) -> int:
        return self.total - self.rejected


@dataclass(frozen=True)
class EquipmentStats:
    eid: int
    kind: str
    busy_time: float
    utilization: float


@dataclass(frozen=True)
class Summary:
    sources: Tuple[SourceStats, ...]
    equipment: Tuple[EquipmentStats, ...]
    total_time: float
    mean_p_reject: float
    mean_utilization: float
    mean_sojourn: float
    completed: int
    rejected: int
    total_wait: float

    def source(self, source_id: int) -> Optional[SourceStats]:
        for s in self.sources:
            if s.source_id == source_id:
                return s
        return None

    def as_dict(self) -> Dict:
        out = asdict(self)
        out["sources"] = list(out["sources"])
        out["equipment"] = list(out["equipment"])
        return out


class _Accumulator:
    # running sums for one source
    __slots__ = ("total", "rejected", "wait", "wait_sq", "service", "service_sq")

    def __init__(self):
        self.total = 0
        self.rejected = 0
        self.wait = 0.0
        self.wait_sq = 0.0
        self.service = 0.0
        self.service_sq = 0.0

    def add(self, req: Request):
        self.total += 1
        if req.status is RequestStatus.REJECTED:
            self.rejected += 1
            return
        self.wait += req.wait_time
        self.wait_sq += req.wait_time * req.wait_time
        self.service += req.service_duration
        self.service_sq += req.service_duration * req.service_duration

    def stats(self, source_id: int) -> SourceStats:
        n = self.total - self.rejected
        mean_wait = _ratio(self.wait, n)
        mean_service = _ratio(self.service, n)
        # clamp: rounding can push E[X^2] - E[X]^2 a hair below zero
        var_wait = max(_ratio(self.wait_sq, n) - mean_wait * mean_wait, 0.0) if n > 0 else 0.0
        var_service = max(_ratio(self.service_sq, n) - mean_service * mean_service, 0.0) if n > 0 else 0.0
        return SourceStats(
            source_id=source_id,
            total=self.total,
            rejected=self.rejected,
            p_reject=_ratio(self.rejected, self.total),
            mean_wait=mean_wait,
            mean_service=mean_service,
            mean_sojourn=mean_wait + mean_service,
            var_wait=var_wait,
            var_service=var_service,
            total_wait=self.wait,
        )


def source_stats(requests: Iterable[Request]) -> List[SourceStats]:
    """Per-source statistics, ordered by source id."""
    acc: Dict[int, _Accumulator] = {}
    for req in requests:
        if not req.is_terminal:
            raise InvariantError("Pending in log", "request from source {0} has no terminal status",
                                 req.source_id)
        acc.setdefault(req.source_id, _Accumulator()).add(req)
    return [acc[sid].stats(sid) for sid in sorted(acc)]


def equipment_stats(equipment, total_time: float) -> List[EquipmentStats]:
    return [
        EquipmentStats(eid=u.eid, kind=u.kind, busy_time=u.busy_time,
                       utilization=_ratio(u.busy_time, total_time))
        for u in equipment
    ]


def summarize(log: Iterable[Request], equipment, total_time: float,
              num_sources: Optional[int] = None) -> Summary:
    """
    Summarize a finished run.

    Parameters
    ----------
    log : iterable of Request
        Terminal requests (RequestLog or any iterable).
    equipment : list[EquipmentUnit]
        Final equipment pool.
    total_time : float
        Simulated time at the end of the run.
    num_sources : int, optional
        Denominator for the grand means over sources; the configured project
        count. Defaults to the number of sources observed in the log.
    """
    src = source_stats(log)
    eq = equipment_stats(equipment, total_time)
    n_src = len(src) if num_sources is None else num_sources
    return Summary(
        sources=tuple(src),
        equipment=tuple(eq),
        total_time=total_time,
        mean_p_reject=_ratio(sum(s.p_reject for s in src), n_src),
        mean_utilization=_ratio(sum(e.utilization for e in eq), len(eq)),
        mean_sojourn=_ratio(sum(s.mean_sojourn for s in src), n_src),
        completed=sum(s.completed for s in src),
        rejected=sum(s.rejected for s in src),
        total_wait=sum(s.total_wait for s in src),
    )
