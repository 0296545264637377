class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class InvalidStateError(DomainError):
    """Raised when a state transition is not allowed (e.g. following up twice)."""


class DataLoadError(DomainError):
    """Raised when the backing store could not be read.

    Kept distinct from an empty result: callers must not compute alerts
    over a partial snapshot.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
