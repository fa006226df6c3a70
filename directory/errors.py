# directory/errors.py
"""Exceptions raised by the directory service.

Storage failures are translated into `StorageUnavailable` by
`directory.services`; the HTTP layer turns them into a generic 500 response
with `user_message` as the body.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Codes for client-facing error messages."""

    LISTINGS_UNAVAILABLE = "LISTINGS_UNAVAILABLE"
    COUNT_UNAVAILABLE = "COUNT_UNAVAILABLE"
    REGIONS_UNAVAILABLE = "REGIONS_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


USER_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.LISTINGS_UNAVAILABLE: "Failed to fetch listings",
    ErrorCode.COUNT_UNAVAILABLE: "Failed to fetch count",
    ErrorCode.REGIONS_UNAVAILABLE: "Failed to fetch regions",
    ErrorCode.INTERNAL_ERROR: "Internal server error",
}


class DirectoryError(Exception):
    """Base exception for all directory errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INTERNAL_ERROR):
        self.message = message
        self.code = code
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES.get(self.code, USER_MESSAGES[ErrorCode.INTERNAL_ERROR])


class StorageUnavailable(DirectoryError):
    """The record store failed or timed out."""

    pass
