"""
experiments/scenarios.py

Holds scenario definitions (parameter overrides) to sweep during experiments.
Every override touches only the model parameters: buffer size, equipment
count, arrival rate and budget.
"""

from __future__ import annotations

BASELINE = {
    "name": "baseline",
    "overrides": {},  # override config keys here per scenario
}

SMALL_BUFFER = {
    "name": "small_buffer",
    "overrides": {
        "buffer": {"capacity": 4},
    },
}

EXTRA_EQUIPMENT = {
    "name": "extra_equipment",
    "overrides": {
        "equipment": {"count": 16},
    },
}

HEAVY_ARRIVALS = {
    "name": "heavy_arrivals",
    "overrides": {
        "sim": {
            "arrival_rate": 3.0,
            "arrival_budget": 4000,
        },
    },
}

SCENARIOS = [BASELINE, SMALL_BUFFER, EXTRA_EQUIPMENT, HEAVY_ARRIVALS]
