from fastapi import status


class ApiError(Exception):
    """Base class for errors that are reported to the client as-is.

    Every subclass carries the HTTP status it maps to; the message is
    safe to show to the caller.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data."


class Conflict(ApiError):
    # Duplicate resources are reported as plain bad requests
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized or resource not found."


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Internal(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"


class InvalidStatus(ValidationError):
    default_message = "Invalid status"


class DuplicateSubmission(Conflict):
    default_message = "Assignment already submitted"


class EmptyResult(NotFound):
    default_message = "No submissions found"
