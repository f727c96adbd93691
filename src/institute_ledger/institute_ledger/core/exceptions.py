class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record (e.g. a student) does not exist."""


class InvalidPayment(ValidationError):
    """Raised when a candidate payment fails an admission check.

    The payment must not be recorded; ``reason`` is safe to show to the user.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class MalformedRecord(ValidationError):
    """Raised by record normalizers for missing or unparseable fields.

    Engines catch it, count the record as skipped and carry on.
    """
