"""
Constants for kvbench operations.
"""

# Default table and attribute names
DEFAULT_TABLE_NAME = "ndbench-table"
DEFAULT_ATTRIBUTE_NAME = "id"

# Attribute holding the generated payload
ATTR_VALUE = "value"

# Environment variable selecting the credential source
DISCOVERY_ENV = "DISCOVERY_ENV"
DISCOVERY_ENV_AWS = "AWS"

# Client configuration defaults
DEFAULT_MAX_CONNECTIONS = 50
DEFAULT_MAX_REQUEST_TIMEOUT_MS = 60000
DEFAULT_MAX_RETRIES = 10
DEFAULT_READ_CAPACITY_UNITS = 5
DEFAULT_WRITE_CAPACITY_UNITS = 5

# Table lifecycle polling (in seconds)
TABLE_POLL_INTERVAL = 5.0
TABLE_MAX_WAIT = 600.0

# Batch drain behavior
DEFAULT_MAX_BATCH_ROUNDS = 10
MAX_BATCH_GET_KEYS = 100  # DynamoDB BatchGetItem limit
MAX_BATCH_WRITE_ITEMS = 25  # DynamoDB BatchWriteItem limit

# Data generator
DEFAULT_VALUE_SIZE = 128

# Error codes
THROTTLING_ERROR_CODES = frozenset(
    {
        "ProvisionedThroughputExceededException",
        "ThrottlingException",
        "RequestLimitExceeded",
    }
)
RESOURCE_NOT_FOUND = "ResourceNotFoundException"
RESOURCE_IN_USE = "ResourceInUseException"
