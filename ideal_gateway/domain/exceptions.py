"""Domain-specific exceptions"""

from typing import Optional


class IdealError(Exception):
    """Base exception for the iDEAL client"""

    pass


class ConfigurationError(IdealError):
    """Client configuration is malformed or incomplete"""

    pass


class TransportError(IdealError):
    """iDEAL API is unreachable or answered with an unexpected HTTP status"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(IdealError):
    """iDEAL API response is not a well-formed document of the expected shape"""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
