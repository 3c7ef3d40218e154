"""
Error kinds raised by the services and switched on by the HTTP routes.
"""
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = 'validation'
    EXTERNAL_SERVICE = 'external_service'
    STORAGE = 'storage'


class LeadCheckError(Exception):
    """Base error. `kind` is fixed by the subclass raised at the failure site."""
    kind: ErrorKind = None

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(LeadCheckError):
    """Bad or missing input."""
    kind = ErrorKind.VALIDATION


class ExternalServiceError(LeadCheckError):
    """PageSpeed API unreachable, non-2xx, or malformed."""
    kind = ErrorKind.EXTERNAL_SERVICE


class StorageError(LeadCheckError):
    """Persistence failure."""
    kind = ErrorKind.STORAGE
