"""
experiments/run_experiments.py

Experiment harness that loads the baseline config, applies scenario overrides,
runs multiple seeded replications, and reports KPIs with confidence intervals.
With trace.enabled set, one step-by-step replication is played back first.
"""

from __future__ import annotations
import copy, os, sys, math
from typing import Dict, List, Callable
from statistics import mean, stdev
try:
    # When executed as a module: python -m experiments.run_experiments
    from .scenarios import SCENARIOS  # type: ignore
except ImportError:  # pragma: no cover
    # When run as a script in VSCode/terminal
    ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    if ROOT not in sys.path:
        sys.path.insert(0, ROOT)
    from experiments.scenarios import SCENARIOS  # type: ignore

from scipy.stats import t

from equipsim.config import load_cfg, apply_overrides, validate
from equipsim.report import Tracer, format_report
from equipsim.simlogging import SimLogging
from equipsim.simulation import Simulation

logger = SimLogging.get_logger(__name__)

def mean_ci(values: List[float], confidence_level: float) -> tuple[float, float]:
    """Return (mean, half-width) using a t-distribution critical value (df = n-1)."""
    if not values:
        return 0.0, 0.0
    mu = mean(values)
    n = len(values)
    if n < 2:
        return mu, 0.0
    level = min(max(confidence_level, 0.0), 0.999999)
    alpha = 1.0 - level
    tcrit = t.ppf(1 - alpha / 2.0, n - 1)
    half = tcrit * (stdev(values) / math.sqrt(n))
    return mu, half

def series(results: List, extractor: Callable) -> List[float]:
    """Collect a numeric series from each replication summary."""
    return [float(extractor(res)) for res in results]

def run_traced(cfg: Dict):
    """Play back one replication tick by tick, then print its report."""
    trace_cfg = cfg.get("trace", {})
    tracer = Tracer(float(trace_cfg.get("step_delay_sec", 0.0)))
    result = Simulation(cfg, tracer=tracer).run()
    print()
    print(format_report(result.summary))

def main():
    """Entry point: drive all scenarios and replications, report KPIs."""
    cfg = load_cfg(sys.argv[1] if len(sys.argv) > 1 else None)
    SimLogging.set_level(cfg.get("logging", {}).get("level", "WARNING"))
    exp_cfg = cfg.get("experiments", {})
    replications = max(1, int(exp_cfg.get("replications", 1)))
    confidence = float(exp_cfg.get("confidence_level", 0.95))
    level_pct = confidence * 100.0
    default_seed = cfg.get("sim", {}).get("seed") or 0

    if cfg.get("trace", {}).get("enabled"):
        run_traced(cfg)

    for sc in SCENARIOS:
        sc_base_cfg = validate(apply_overrides(cfg, sc["overrides"]))
        results = []
        for rep in range(replications):
            sc_cfg = copy.deepcopy(sc_base_cfg)
            # Advance the seed per replication so replications remain iid.
            sc_cfg["sim"]["seed"] = default_seed + rep
            res = Simulation(sc_cfg).run()
            logger.info("scenario %s rep %d done (t=%.1f)", sc["name"], rep, res.total_time)
            results.append(res.summary)

        p_reject = mean_ci(series(results, lambda s: s.mean_p_reject), confidence)
        util = mean_ci(series(results, lambda s: s.mean_utilization * 100.0), confidence)
        sojourn = mean_ci(series(results, lambda s: s.mean_sojourn), confidence)
        completed = mean_ci(series(results, lambda s: s.completed), confidence)
        rejected = mean_ci(series(results, lambda s: s.rejected), confidence)
        sim_time = mean_ci(series(results, lambda s: s.total_time), confidence)
        top = mean_ci(series(results, lambda s: s.sources[0].p_reject if s.sources else 0.0), confidence)
        bottom = mean_ci(series(results, lambda s: s.sources[-1].p_reject if s.sources else 0.0), confidence)

        print(f"Scenario: {sc['name']} (replications={replications}, {level_pct:.1f}% CI, "
              f"seeds {default_seed}-{default_seed + replications - 1})")
        print(f"  Mean P(reject): {p_reject[0]:.3f} ± {p_reject[1]:.3f}")
        print(f"  P(reject) top-priority project: {top[0]:.3f} ± {top[1]:.3f}")
        print(f"  P(reject) lowest-priority project: {bottom[0]:.3f} ± {bottom[1]:.3f}")
        print(f"  Mean utilization: {util[0]:.1f}% ± {util[1]:.1f}%")
        print(f"  Mean sojourn: {sojourn[0]:.2f} ± {sojourn[1]:.2f}")
        print(f"  Completed/run: {completed[0]:.1f} ± {completed[1]:.1f}")
        print(f"  Rejected/run: {rejected[0]:.1f} ± {rejected[1]:.1f}")
        print(f"  Simulated time: {sim_time[0]:.1f} ± {sim_time[1]:.1f}")
        print(f"\n  Report for seed {default_seed}:")
        print(format_report(results[0]))
        print("-")

if __name__ == "__main__":
    main()
