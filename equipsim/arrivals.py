# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# arrivals.py
# -----------------------------------------------------------------------------
# Purpose:
#   Random variate source for the simulation: exponential tick gaps, uniform
#   service durations, uniform kind labels and uniform source picks.
#
# Design notes:
#   - One stream per replication; every draw goes through the same
#     random.Random in a fixed per-tick order (project pick -> kind ->
#     duration -> tick gap), so a seed reproduces a run exactly.
#   - No retries and no failure modes.
#
# Usage:
#   rng = RandomSource(seed=3)
#   gap = rng.exponential(2.0)
# -----------------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Optional, Sequence


class RandomSource:
    """Thin wrapper over one random.Random stream.

    Parameters
    ----------
    seed : int, optional
        Seed for the stream; None seeds from OS entropy.
    """
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def exponential(self, rate: float) -> float:
        return self._rng.expovariate(rate)

    def uniform(self, lo: float, hi: float) -> float:
        return self._rng.uniform(lo, hi)

    def category(self, labels: Sequence[str]) -> str:
        return labels[self._rng.randrange(len(labels))]

    def index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        return self._rng.randrange(n)


def next_project(projects, rng: RandomSource):
    # uniform pick among sources; each arrival belongs to one project
    return projects[rng.index(len(projects))]
