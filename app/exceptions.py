from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids)
        code: machine-readable error code used in the response envelope
        http_status: HTTP status code the handlers respond with
    """

    http_status = 500
    code = "SERVICE_ERROR"
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is missing/malformed or a precondition is not met (400)."""

    http_status = 400
    code = "SERVICE_VALIDATION_ERROR"
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a referenced entity id does not resolve (404)."""

    http_status = 404
    code = "NOT_FOUND"
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when a uniqueness invariant is violated, e.g. a second profile (409)."""

    http_status = 409
    code = "CONFLICT"
    default_message = "Conflict"


class StorageError(ServiceError):
    """Raised when the database fails unexpectedly (500)."""

    code = "STORAGE_ERROR"
    default_message = "Storage failure"


class AttachmentError(ServiceError):
    """Raised when the attachment store cannot read, write or remove a file (500)."""

    code = "ATTACHMENT_ERROR"
    default_message = "Attachment storage failure"
