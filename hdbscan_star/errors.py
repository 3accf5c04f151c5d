"""Exception hierarchy for the HDBSCAN* engine."""


class HDBSCANError(Exception):
    """Base class for all errors raised by this package."""


class InvalidParameterError(HDBSCANError, ValueError):
    """A parameter or input array failed validation before computation."""


class InconsistentStateError(HDBSCANError, RuntimeError):
    """An operation was invoked before its prerequisite pass completed."""
