"""Exceptions raised by the simulation core."""


class SimulationError(Exception):
    """Base class for simulation errors."""


class InvalidTuningError(SimulationError, ValueError):
    """A Tuning violates the ordering its constants depend on."""
