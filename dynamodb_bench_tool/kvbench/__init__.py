"""DynamoDB key-value benchmark session, batch coordinators and table lifecycle."""

from .core.error_classifier import classify_error
from .core.session import BenchSession
from .core.table_operations import TableLifecycleController
from .data_generator import DataGenerator, RandomValueGenerator
from .exceptions import (
    BenchStoreError,
    CredentialsUnavailableError,
    ErrorKind,
    InvalidArgumentError,
    ProvisioningFailureError,
    ServiceFaultError,
    ThrottledError,
    TransportFaultError,
)
from .models import BenchConfig, TableDescriptor, TableStatus

__all__ = [
    "BenchConfig",
    "BenchSession",
    "BenchStoreError",
    "CredentialsUnavailableError",
    "DataGenerator",
    "ErrorKind",
    "InvalidArgumentError",
    "ProvisioningFailureError",
    "RandomValueGenerator",
    "ServiceFaultError",
    "TableDescriptor",
    "TableLifecycleController",
    "TableStatus",
    "ThrottledError",
    "TransportFaultError",
    "classify_error",
]
