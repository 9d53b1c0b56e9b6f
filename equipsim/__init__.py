"""
equipsim package initializer.

This package contains the simulation engine, primitives (buffer, equipment
units), admission and selection policies, and metric collection for the
construction-equipment allocation model: prioritized projects competing for
a shared equipment pool through a bounded request buffer.
"""
__all__ = [
    "entities", "queues", "stations", "arrivals", "policies",
    "metrics", "simulation", "report", "config", "errors", "simlogging",
]
