from rest_framework import status
from rest_framework.exceptions import APIException


class NotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"


class InvalidState(APIException):
    """Raised when a record exists but does not accept the requested operation."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"


class AlreadyCompleted(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "This registration has already been paid."
    default_code = "already_completed"


class UpstreamFailure(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Payment initiation failed."
    default_code = "upstream_failure"


class Unauthorized(APIException):
    """
    Webhook authenticity failure.

    A missing or invalid signature is the caller's fault (400); a missing
    webhook secret is a server configuration fault and carries a 500.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Webhook signature verification failed."
    default_code = "unauthorized"

    def __init__(self, detail=None, code=None, status_code: int | None = None):
        super().__init__(detail=detail, code=code)
        if status_code is not None:
            self.status_code = status_code
