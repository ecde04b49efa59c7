"""Error taxonomy for the win-check pipeline."""


class SouzuError(Exception):
    """Base class for every error raised by the rule engine."""


class ValidationError(SouzuError, ValueError):
    """Malformed input: bad tile, bad hand size, impossible kan declaration."""


class NoDecompositionFound(SouzuError):
    """A correctly sized hand that matches no winning shape.

    Callers treat this as a false win declaration.
    """

    def __init__(self, counts, message: str = "hand has no winning decomposition"):
        super().__init__(message)
        self.counts = tuple(counts)


class InternalInvariantViolation(SouzuError, RuntimeError):
    """A decomposition does not account for the tiles it claims to use."""
