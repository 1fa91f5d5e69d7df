class AppException(Exception):
    """Base application exception."""

    pass


class NotFoundError(AppException):
    """Resource not found exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class ForbiddenError(AppException):
    """Caller is authenticated but not allowed to perform the operation."""

    pass


class PersistenceError(AppException):
    """Store operation failed (constraint violation, transaction failure)."""

    pass


class ConcurrentModificationError(PersistenceError):
    """Row changed between read and write (optimistic version mismatch)."""

    pass


class InvalidStateTransitionError(AppException):
    """Requested state transition is not allowed from the current state."""

    pass


class NoPendingOrderError(InvalidStateTransitionError):
    """No PENDING order exists to complete."""

    pass
