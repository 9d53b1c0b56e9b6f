# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# simulation.py
# -----------------------------------------------------------------------------
# Purpose:
#   Simulate a single replication: build projects, equipment, buffer and
#   dispatchers, run the tick loop until the backlog drains, and return
#   the summary.
#
# Design notes:
#   - Tick order: generate+place (while budget remains) -> completions ->
#     selection -> trace -> advance clock by an exponential gap. Completions
#     precede selection so units freed this tick can take work this tick.
#   - The run ends once the budget is spent, the buffer is empty and no unit
#     is busy.
#   - Replications and scenarios live outside, in experiments/.
#
# Usage:
#   from equipsim.simulation import run_simulation
#   summary = run_simulation(cfg)
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .arrivals import RandomSource, next_project
from .entities import make_projects, RequestStatus
from .metrics import RequestLog, Summary, summarize
from .policies import PlacementDispatcher, SelectionDispatcher
from .queues import Buffer
from .simlogging import SimLogging
from .stations import EquipmentUnit, make_equipment

logger = SimLogging.get_logger(__name__)


@dataclass
class SimulationResult:
    summary: Summary
    total_time: float
    ticks: int
    log: RequestLog
    equipment: List[EquipmentUnit]


class Simulation:
    """
    One replication of the equipment allocation model.

    Parameters
    ----------
    cfg : dict
        Validated config (see equipsim.config).
    rng : RandomSource, optional
        Variate source; defaults to one seeded from cfg["sim"]["seed"].
    tracer : callable, optional
        Called as tracer(current_time, buffer, equipment) after each tick's
        dispatch round.
    """
    def __init__(self, cfg: Dict, rng: Optional[RandomSource] = None,
                 tracer: Optional[Callable] = None):
        self.cfg = cfg
        self.rng = rng if rng is not None else RandomSource(cfg["sim"].get("seed"))
        self.tracer = tracer
        self.arrival_budget: int = cfg["sim"]["arrival_budget"]
        self.arrival_rate: float = cfg["sim"]["arrival_rate"]
        self.service_range = (cfg["service"]["min"], cfg["service"]["max"])
        self.kinds = cfg["equipment"]["kinds"]

        self.projects = make_projects(cfg["projects"]["count"])
        self.equipment = make_equipment(cfg, self.rng)
        self.buffer = Buffer(cfg["buffer"]["capacity"])
        self.log = RequestLog()
        self.placer = PlacementDispatcher(self.buffer, self.log)
        self.selector = SelectionDispatcher(self.equipment, self.buffer, self.log)

        self.t: float = 0.0
        self.generated: int = 0
        self.ticks: int = 0

    def is_complete(self) -> bool:
        if self.generated < self.arrival_budget:
            return False
        if not self.buffer.is_empty():
            return False
        return all(u.is_free for u in self.equipment)

    def step(self):
        now = self.t
        if self.generated < self.arrival_budget:
            project = next_project(self.projects, self.rng)
            req = project.generate_request(now, self.rng, self.service_range, self.kinds)
            self.placer.place(req, now)
            self.generated += 1

        for unit in self.equipment:
            done = unit.complete(now)
            # selection logs at assignment; only a directly assigned request is still pending
            if done is not None and not done.is_terminal:
                self.log.record(done, RequestStatus.PROCESSED, now)

        self.selector.select(now)

        if self.tracer is not None:
            self.tracer(now, self.buffer, self.equipment)

        self.t = now + self.rng.exponential(self.arrival_rate)
        self.ticks += 1

    def run(self) -> SimulationResult:
        logger.info("run start: %d projects, %d units, buffer %d, budget %d, seed %s",
                    len(self.projects), len(self.equipment), self.buffer.capacity,
                    self.arrival_budget, self.rng.seed)
        while not self.is_complete():
            self.step()
        summary = summarize(self.log, self.equipment, self.t, num_sources=len(self.projects))
        logger.info("run end: t=%.2f after %d ticks, %d completed, %d rejected",
                    self.t, self.ticks, summary.completed, summary.rejected)
        return SimulationResult(summary=summary, total_time=self.t, ticks=self.ticks,
                                log=self.log, equipment=self.equipment)


def run_simulation(cfg: Dict, tracer: Optional[Callable] = None) -> Summary:
    return Simulation(cfg, tracer=tracer).run().summary
