"""Transaction status classification"""

from enum import Enum


class TransactionStatus(str, Enum):
    """
    Outcome of an iDEAL transaction as last reported by the server.

    The server may introduce new status strings; anything not listed here
    classifies as UNKNOWN.
    """

    SUCCESS = "Success"
    CHECKED_BEFORE = "CheckedBefore"
    FAILURE = "Failure"
    EXPIRED = "Expired"
    CANCELLED = "Cancelled"
    UNKNOWN = "Unknown"

    @classmethod
    def from_raw(cls, raw: str) -> "TransactionStatus":
        """Classify a status string by exact match"""
        for status in cls:
            if status is not cls.UNKNOWN and status.value == raw:
                return status
        return cls.UNKNOWN
