# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# report.py
# -----------------------------------------------------------------------------
# Purpose:
#   Text rendering around the engine: per-tick state dumps for step-by-step
#   tracing and the final source/equipment report.
#
# Design notes:
#   - Pure formatting over engine objects and Summary; nothing here feeds
#     back into the simulation.
#   - Tracer sleeps wall-clock time for human playback only.
#
# Usage:
#   print(format_report(summary))
#   Simulation(cfg, tracer=Tracer(0.5)).run()
# -----------------------------------------------------------------------------

from __future__ import annotations
import sys, time
from typing import List

from .metrics import Summary


def render_buffer(buffer) -> str:
    cells = [str(r.source_id) if r is not None else "-" for r in buffer.slots]
    return "Buffer: [" + " ".join(cells) + "]"


def render_state(current_time: float, buffer, equipment) -> str:
    lines = [f"t={current_time:.3f}", render_buffer(buffer)]
    for u in equipment:
        line = f"Equipment {u.eid} ({u.kind}): {u.status.value}"
        if not u.is_free:
            line += f" (completes at {u.completion_time:.2f})"
        lines.append(line)
    return "\n".join(lines)


class Tracer:
    """Per-tick state printer handed to Simulation.

    Parameters
    ----------
    step_delay_sec : float
        Wall-clock pause after each rendered tick.
    stream : file-like
        Destination, stdout by default.
    """
    def __init__(self, step_delay_sec: float = 0.0, stream=None):
        self.step_delay_sec = max(0.0, step_delay_sec)
        self.stream = stream if stream is not None else sys.stdout

    def __call__(self, current_time: float, buffer, equipment):
        self.stream.write("\n=== Step ===\n")
        self.stream.write(f"New request created at the following time: {current_time}\n")
        self.stream.write(render_state(current_time, buffer, equipment) + "\n")
        if self.step_delay_sec:
            time.sleep(self.step_delay_sec)


def format_report(S: Summary) -> str:
    out: List[str] = []
    out.append("=== Source Statistics ===")
    out.append(f"{'Project':>8} {'Total':>7} {'Rejected':>9} {'P(reject)':>10} "
               f"{'T(stay)':>9} {'T(service)':>11} {'T(buffer)':>10} "
               f"{'D(service)':>11} {'D(buffer)':>10}")
    for s in S.sources:
        out.append(f"{s.source_id:>8d} {s.total:>7d} {s.rejected:>9d} {s.p_reject:>10.2f} "
                   f"{s.mean_sojourn:>9.2f} {s.mean_service:>11.2f} {s.mean_wait:>10.2f} "
                   f"{s.var_service:>11.2f} {s.var_wait:>10.2f}")
    out.append("")
    out.append("=== Equipment Statistics ===")
    out.append(f"{'Unit':>8} {'Kind':>15} {'Utilization':>12} {'Busy time':>10}")
    for e in S.equipment:
        out.append(f"{e.eid:>8d} {e.kind:>15} {e.utilization:>12.2f} {e.busy_time:>10.2f}")
    out.append("")
    out.append(f"Mean P(reject): {S.mean_p_reject:.3f}  Mean utilization: {S.mean_utilization:.3f}  "
               f"Mean sojourn: {S.mean_sojourn:.2f}")
    out.append(f"Completed: {S.completed}  Rejected: {S.rejected}  "
               f"Total buffer time: {S.total_wait:.2f}  Simulated time: {S.total_time:.2f}")
    return "\n".join(out)
