# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BOLD = "\033[1m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    INVALID_SIGNATURE_NAME = ErrorInfo(
        "Only .signature files are supported", status.HTTP_400_BAD_REQUEST
    )
    INVALID_NAMESPACE = ErrorInfo("Invalid namespace", status.HTTP_400_BAD_REQUEST)
    INVALID_USERNAME = ErrorInfo("Invalid username", status.HTTP_400_BAD_REQUEST)
    SIGNATURE_NOT_FOUND = ErrorInfo(
        "Signature file not found", status.HTTP_404_NOT_FOUND
    )
    PAYLOAD_NOT_FOUND = ErrorInfo(
        "Transaction payload not found", status.HTTP_404_NOT_FOUND
    )
    USER_NOT_FOUND = ErrorInfo("User not found", status.HTTP_404_NOT_FOUND)
    SIGNATURE_REJECTED = ErrorInfo(
        "Signature does not verify against the payload",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    VERIFIER_UNAVAILABLE = ErrorInfo(
        "Signature verifier unavailable", status.HTTP_502_BAD_GATEWAY
    )
    LIST_FAILED = ErrorInfo(
        "Unable to list pending transactions", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    SIGNATURE_FETCH_FAILED = ErrorInfo(
        "Failed to fetch signature data", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    COMMIT_FAILED = ErrorInfo("Commit failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    REJECT_FAILED = ErrorInfo("Reject failed", status.HTTP_500_INTERNAL_SERVER_ERROR)
    USER_INDEX_FAILED = ErrorInfo(
        "Unable to load user list", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    USER_INDEX_CORRUPT = ErrorInfo(
        "user.json could not be parsed", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    USER_READ_FAILED = ErrorInfo(
        "Failed to read user", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    USER_CORRUPT = ErrorInfo(
        "User record could not be parsed", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    USER_SAVE_FAILED = ErrorInfo(
        "Failed to save user", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    USER_DELETE_FAILED = ErrorInfo(
        "Some user files could not be deleted", status.HTTP_500_INTERNAL_SERVER_ERROR
    )
