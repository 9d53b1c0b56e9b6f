# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# errors.py
# -----------------------------------------------------------------------------
# Purpose:
#   Exception classes for the equipment allocation simulation.
#
# Design notes:
#   - Rejections are data (a terminal request status), never exceptions.
#   - InvariantError marks an internal-consistency fault: a busy unit being
#     assigned again, a request reaching a second terminal status, a request
#     entering the buffer twice. The core never catches it.
#
# Usage:
#   from equipsim.errors import InvariantError, ConfigError
# -----------------------------------------------------------------------------

from __future__ import annotations

__all__ = ["SimException", "InvariantError", "ConfigError"]


class SimException(Exception):
    """
    Base exception with a short name and a formatted description.

    Parameters
    ----------
    name : str
        Short identifier of the fault (e.g. "Equipment busy").
    desc : str
        Description template; positional args are substituted via str.format.
    """
    def __init__(self, name: str, desc: str = "", *args):
        super().__init__(name, desc, *args)
        self.name = name
        try:
            self.desc = desc.format(*args)
        except IndexError:
            self.desc = desc + " (insufficient description parameters)"

    def __str__(self):
        if not self.desc:
            return self.name
        return f"{self.name}: {self.desc}"


class InvariantError(SimException):
    """Internal-consistency fault; indicates a bug, not a simulated outcome."""


class ConfigError(SimException):
    """Invalid simulation configuration."""
