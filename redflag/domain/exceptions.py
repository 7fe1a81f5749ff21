"""Domain-specific exceptions"""

from typing import Any


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingInputError(DomainException):
    """A required input collection was not supplied"""

    def __init__(self, name: str):
        super().__init__(f"Missing required input: {name}")
        self.name = name


class InvalidRecordError(DomainException):
    """A raw row could not be converted into a ledger/bank/customer record"""

    pass


class UploadTooLargeError(DomainException):
    """Uploaded payload exceeds the configured size limit"""

    pass


def require_collection(value: Any, name: str) -> Any:
    """Fail fast when a required collection argument is None"""
    if value is None:
        raise MissingInputError(name)
    return value
