class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DomainError"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "ValidationError"


class DuplicateClockIn(DomainError):
    """A record already exists for this employee and local date."""

    code = "DuplicateClockIn"


class NoOpenClockIn(DomainError):
    code = "NoOpenClockIn"


class AlreadyClockedOut(DomainError):
    code = "AlreadyClockedOut"


class InvalidPeriod(ValidationError):
    """Period is not a YYYY-MM string with a month in 01..12."""

    code = "InvalidPeriod"


class NotFound(DomainError):
    code = "NotFound"
