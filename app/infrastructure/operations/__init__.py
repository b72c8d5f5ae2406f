"""Operation result types and status enums.

Standardized result types for single provider calls, plus the classifier
mapping HTTP responses onto them.
"""

from infrastructure.operations.classifiers import classify_http_response
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_http_response",
]
