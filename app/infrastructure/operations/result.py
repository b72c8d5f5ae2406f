"""Operation result dataclass.

Uniform result for a single provider call (one SMS, one push batch),
carrying status, payload and error information.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of one provider call.

    Attributes:
        status: OperationStatus -- high-level outcome
        message: str -- human-friendly message for logs
        data: Optional[Any] -- parsed provider response, if any
        error_code: Optional[str] -- machine error code
        retry_after: Optional[int] -- seconds until retry when rate-limited
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Failure that may succeed on a later attempt (network, 429, 5xx)."""
        return cls(
            status=OperationStatus.TRANSIENT_ERROR,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
        )

    @classmethod
    def permanent_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        status: OperationStatus = OperationStatus.PERMANENT_ERROR,
    ) -> "OperationResult":
        """Failure that will not succeed on retry (bad request, rejected auth)."""
        return cls(status=status, message=message, error_code=error_code)
