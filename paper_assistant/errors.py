from enum import Enum

import httpx
from pydantic import ValidationError


class ErrorKind(str, Enum):
    NETWORK = "network"
    DOWNSTREAM = "downstream"
    INVALID_INPUT = "invalid_input"


class ServiceError(Exception):
    """A failed remote operation, tagged with what went wrong."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.DOWNSTREAM):
        super().__init__(message)
        self.message = message
        self.kind = kind

    @property
    def retryable(self) -> bool:
        return self.kind is ErrorKind.NETWORK


def classify_error(exc: Exception) -> ErrorKind:
    if isinstance(exc, ServiceError):
        return exc.kind
    if isinstance(exc, httpx.TransportError):
        return ErrorKind.NETWORK
    # covers json.JSONDecodeError from reading a request body
    if isinstance(exc, (ValueError, ValidationError)):
        return ErrorKind.INVALID_INPUT
    return ErrorKind.DOWNSTREAM


def error_message(exc: Exception) -> str:
    if isinstance(exc, ServiceError):
        return exc.message
    return str(exc) or exc.__class__.__name__
