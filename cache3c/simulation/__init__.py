"""Simulation package shim.

Exposes the Simulation class at `cache3c.simulation` so callers can write
`from cache3c.simulation import Simulation`.
"""
from .simulation import Simulation

__all__ = ["Simulation"]
