"""
Classification of botocore faults into kvbench exceptions.
"""

from botocore.exceptions import BotoCoreError, ClientError

from ..constants import THROTTLING_ERROR_CODES
from ..exceptions import BenchStoreError, ServiceFaultError, ThrottledError, TransportFaultError
from ..logging_config import get_logger

logger = get_logger(__name__)


def classify_error(fault: Exception) -> BenchStoreError:
    """
    Map a raw botocore fault onto Throttled, ServiceFault or TransportFault.

    Logs a diagnostic record for the fault. Does not raise and does not retry:
    the caller is expected to raise the returned exception.

    Args:
        fault: Exception surfaced by the DynamoDB or DAX client

    Returns:
        The classified exception
    """
    if isinstance(fault, BenchStoreError):
        return fault

    if isinstance(fault, ClientError):
        error = fault.response.get("Error", {})
        metadata = fault.response.get("ResponseMetadata", {})
        code = error.get("Code")
        message = error.get("Message") or str(fault)

        if code in THROTTLING_ERROR_CODES:
            logger.error(
                f"Caught {code}: request made it to DynamoDB but was throttled "
                "for consuming more capacity than provisioned"
            )
            return ThrottledError(message)

        status_code = metadata.get("HTTPStatusCode")
        request_id = metadata.get("RequestId")
        error_type = None
        if status_code is not None:
            error_type = "Service" if status_code >= 500 else "Client"

        logger.error(
            "Caught a service fault: request made it to DynamoDB but was rejected"
        )
        logger.error(f"Error Message:    {message}")
        logger.error(f"HTTP Status Code: {status_code}")
        logger.error(f"AWS Error Code:   {code}")
        logger.error(f"Error Type:       {error_type}")
        logger.error(f"Request ID:       {request_id}")
        return ServiceFaultError(
            message,
            status_code=status_code,
            error_code=code,
            error_type=error_type,
            request_id=request_id,
        )

    if isinstance(fault, BotoCoreError):
        logger.error(
            "Caught a transport fault: the client could not get a response from DynamoDB"
        )
        logger.error(f"Error Message: {fault}")
        return TransportFaultError(str(fault))

    raise TypeError(f"Cannot classify {type(fault).__name__}: {fault}")
