"""
Custom exceptions for kvbench operations.

Every fault carries an ErrorKind so callers can branch on the kind
instead of walking the class hierarchy.
"""

from enum import Enum


class ErrorKind(Enum):
    """Kinds of faults surfaced by kvbench."""

    THROTTLED = "throttled"
    SERVICE_FAULT = "service_fault"
    TRANSPORT_FAULT = "transport_fault"
    INVALID_ARGUMENT = "invalid_argument"
    PROVISIONING_FAILURE = "provisioning_failure"


class BenchStoreError(Exception):
    """Base exception for kvbench operations."""

    kind: ErrorKind | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ThrottledError(BenchStoreError):
    """Request reached DynamoDB but was rejected for exceeding provisioned capacity."""

    kind = ErrorKind.THROTTLED


class ServiceFaultError(BenchStoreError):
    """Request reached DynamoDB and was rejected for a non-capacity reason."""

    kind = ErrorKind.SERVICE_FAULT

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        error_type: str | None = None,
        request_id: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.error_code = error_code
        self.error_type = error_type
        self.request_id = request_id

    def __str__(self) -> str:
        return (
            f"{self.message} (Status Code: {self.status_code}; Error Code: {self.error_code}; "
            f"Request ID: {self.request_id})"
        )


class TransportFaultError(BenchStoreError):
    """Request never produced a definitive response (network, timeout, serialization)."""

    kind = ErrorKind.TRANSPORT_FAULT


class CredentialsUnavailableError(TransportFaultError):
    """No usable AWS credentials could be resolved."""

    pass


class InvalidArgumentError(BenchStoreError):
    """Caller precondition violated (duplicate keys, oversized batch, bad config)."""

    kind = ErrorKind.INVALID_ARGUMENT


class ProvisioningFailureError(BenchStoreError):
    """Table did not reach the awaited status in time, or the wait was interrupted."""

    kind = ErrorKind.PROVISIONING_FAILURE
