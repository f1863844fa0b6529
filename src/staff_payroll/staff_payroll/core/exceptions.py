class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class AuthenticationError(DomainError):
    """Raised when no logged-in user can be resolved."""

    code = "unauthenticated"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "forbidden"


class NotFound(ValidationError):
    code = "not_found"


class InvalidDate(ValidationError):
    """Leave date is today or in the past."""

    code = "invalid_date"


class QuotaExceeded(ValidationError):
    """Approved leaves for the month already reached the quota."""

    code = "quota_exceeded"


class DuplicateRequest(ValidationError):
    """A non-rejected leave request already exists for the date."""

    code = "duplicate_request"


class OutOfRange(ValidationError):
    """Check-in point lies outside the store geofence."""

    code = "out_of_range"


class StoreFrozen(ValidationError):
    """Attendance for the store is administratively frozen."""

    code = "store_frozen"


class AlreadyMarked(ValidationError):
    """An attendance record already exists for the staff member and date."""

    code = "already_marked"


class InvalidTransition(ValidationError):
    """The attendance or leave record cannot move to the requested state."""

    code = "invalid_transition"


class AlreadyLocked(ValidationError):
    """The salary month is locked and may not be recomputed."""

    code = "already_locked"


class NonComputable(ValidationError):
    """The month has no working days, so no daily rate exists."""

    code = "non_computable"


class StaleStatement(ValidationError):
    """The advances a salary statement was built on changed before the lock."""

    code = "stale_statement"
