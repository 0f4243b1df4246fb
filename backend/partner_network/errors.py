"""Error taxonomy for the discovery engine.

Callers map these to transport outcomes:
SeedNotFound -> not found, InvalidInput -> bad request,
StorageUnavailable -> server error.
"""


class DiscoveryError(Exception):
    """Base exception for discovery operations."""

    def __init__(self, message: str, code: str = "DISCOVERY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class SeedNotFound(DiscoveryError):
    """The requested seed person or company does not exist in the store."""

    def __init__(self, seed_id: str, kind: str = "person"):
        self.seed_id = seed_id
        self.kind = kind
        super().__init__(f"Seed {kind} not found: {seed_id}", code="SEED_NOT_FOUND")


class InvalidInput(DiscoveryError):
    """Malformed identifier supplied as a seed."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_INPUT")


class StorageUnavailable(DiscoveryError):
    """The ownership store could not complete a read."""

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Ownership store unavailable during {operation}{detail}",
            code="STORAGE_UNAVAILABLE",
        )
