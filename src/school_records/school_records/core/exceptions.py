class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class StorageError(DomainError):
    """Raised when the active backend fails to read or write records."""


class AttachmentError(ValidationError):
    """Raised when an uploaded file is refused."""

    def __init__(self, filename: str, message: str):
        super().__init__(message)
        self.filename = filename


class AttachmentTypeError(AttachmentError):
    """The uploaded file is not a PDF."""


class AttachmentSizeError(AttachmentError):
    """The uploaded file exceeds the size ceiling."""
