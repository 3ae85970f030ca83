"""Exception types raised by the simulation core."""


class InvalidArgument(ValueError):
    """Raised for malformed configuration or arguments (empty distributions,
    negative chargepoint counts, bad probability tables, ...)."""


class InvariantViolation(RuntimeError):
    """Raised when an object is used in a way its lifecycle does not allow."""
