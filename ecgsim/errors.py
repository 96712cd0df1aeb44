class SimulationError(Exception):
    """Base class for ecgsim errors."""


class OutOfRange(SimulationError, IndexError):
    """Record index or cursor outside the generated records."""


class EntropyUnavailable(SimulationError, RuntimeError):
    """The cryptographic entropy source could not be read."""
