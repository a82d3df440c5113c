"""Infrastructure-level failures surfaced to the domain."""


class StoreUnavailableError(Exception):
    """Raised when the backing database cannot be reached or refuses the operation."""
