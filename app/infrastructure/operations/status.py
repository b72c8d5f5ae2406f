"""Operation status enumeration.

Outcome classes for a single provider call, used by channels to decide
whether a recipient was reached and how a failure should be reported.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Provider accepted the request
        TRANSIENT_ERROR: Retryable failure (network, timeout, 429, 5xx)
        PERMANENT_ERROR: Non-retryable failure (validation, bad request)
        UNAUTHORIZED: Provider rejected the credentials
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
