"""
Domain errors mapped to HTTP responses
"""

from fastapi import status


class RSVPError(Exception):
    """Base class for errors surfaced to API callers"""

    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(RSVPError):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"


class BadInput(RSVPError):
    http_status = status.HTTP_400_BAD_REQUEST
    code = "BAD_INPUT"


class NotFound(RSVPError):
    http_status = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


class Conflict(RSVPError):
    # Duplicate names are reported as bad input on the wire
    http_status = status.HTTP_400_BAD_REQUEST
    code = "CONFLICT"
