"""
Storage exceptions

Only the failures raised by this code base live here. Backend failures
(botocore ClientError, BotoCoreError) are passed through to callers untouched.
"""


class ConfigurationError(ValueError):
    """Invalid or incomplete storage configuration (fatal at startup)"""


class StorageConnectionError(ConnectionError):
    """Failed to establish a session with the object storage endpoint"""
