"""DynamoDB benchmark client driver."""

__version__ = "0.1.0"
