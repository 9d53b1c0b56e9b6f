# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# config.py
# -----------------------------------------------------------------------------
# Purpose:
#   Load, merge and validate the simulation configuration (nested dict, YAML).
#
# Design notes:
#   - DEFAULTS hold the reference parameterization; the YAML file only needs
#     to list what it changes.
#   - Scenario overrides are merged recursively on deep copies, so a base cfg
#     is never mutated by a scenario.
#
# Usage:
#   from equipsim.config import load_cfg, apply_overrides, validate
#   cfg = load_cfg()
# -----------------------------------------------------------------------------

from __future__ import annotations
import copy, os
from typing import Dict

import yaml

from .errors import ConfigError

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DEFAULT_CFG_PATH = os.path.join(ROOT, "config", "baseline.yaml")

DEFAULTS: Dict = {
    "sim": {
        "seed": None,             # None -> OS entropy
        "arrival_budget": 2500,   # total requests generated
        "arrival_rate": 2.0,      # lambda of the exponential tick gap
    },
    "projects": {"count": 10},
    "equipment": {
        "count": 12,
        "kinds": ["excavator", "crane", "concrete_mixer"],
    },
    "buffer": {"capacity": 10},
    "service": {"min": 6.0, "max": 8.0},
    "trace": {"enabled": False, "step_delay_sec": 0.5},
    "logging": {"level": "WARNING"},
    "experiments": {"replications": 5, "confidence_level": 0.95},
}


def apply_overrides(cfg: Dict, overrides: Dict) -> Dict:
    """Apply overrides (recursive merge) on top of a copy of cfg."""
    new = copy.deepcopy(cfg)

    def _merge(dst: Dict, src: Dict):
        for key, val in src.items():
            if isinstance(val, dict) and isinstance(dst.get(key), dict):
                _merge(dst[key], val)
            else:
                dst[key] = copy.deepcopy(val)

    _merge(new, overrides or {})
    return new


def load_cfg(path: str | None = None) -> Dict:
    """
    Read a YAML config and merge it over DEFAULTS.

    Parameters
    ----------
    path : str, optional
        YAML file; defaults to config/baseline.yaml at the repository root.
        A missing default file is not an error (DEFAULTS are used); a missing
        explicit path is.

    Returns
    -------
    dict
        Validated configuration.
    """
    if path is None:
        path = DEFAULT_CFG_PATH
        if not os.path.exists(path):
            return validate(copy.deepcopy(DEFAULTS))
    with open(path, "r") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ConfigError("Bad config", "{0} must hold a mapping at top level", path)
    return validate(apply_overrides(DEFAULTS, raw))


def _positive_int(cfg: Dict, section: str, key: str, allow_zero: bool = False) -> int:
    val = cfg.get(section, {}).get(key)
    if isinstance(val, bool) or not isinstance(val, int):
        raise ConfigError("Bad config", "{0}.{1} must be an integer, got {2!r}", section, key, val)
    if val < 0 or (val == 0 and not allow_zero):
        raise ConfigError("Bad config", "{0}.{1} out of range: {2}", section, key, val)
    return val


def validate(cfg: Dict) -> Dict:
    """Check the parameters the engine relies on; return cfg unchanged."""
    _positive_int(cfg, "projects", "count")
    _positive_int(cfg, "equipment", "count")
    _positive_int(cfg, "buffer", "capacity")
    _positive_int(cfg, "sim", "arrival_budget", allow_zero=True)

    rate = cfg["sim"].get("arrival_rate")
    if not isinstance(rate, (int, float)) or rate <= 0:
        raise ConfigError("Bad config", "sim.arrival_rate must be > 0, got {0!r}", rate)

    lo, hi = cfg["service"].get("min"), cfg["service"].get("max")
    if not isinstance(lo, (int, float)) or not isinstance(hi, (int, float)):
        raise ConfigError("Bad config", "service.min/max must be numbers")
    if lo <= 0 or lo > hi:
        raise ConfigError("Bad config", "service range [{0}, {1}] is invalid", lo, hi)

    kinds = cfg["equipment"].get("kinds")
    if not isinstance(kinds, (list, tuple)) or not all(isinstance(k, str) for k in kinds):
        raise ConfigError("Bad config", "equipment.kinds must be a list of labels, got {0!r}", kinds)
    if not kinds:
        raise ConfigError("Bad config", "equipment.kinds must not be empty")
    return cfg
