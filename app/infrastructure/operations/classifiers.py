"""Classify provider HTTP responses into OperationResult.

Status code mapping:
- 2xx: SUCCESS, with the parsed JSON body (if any) as data
- 429: TRANSIENT_ERROR with retry_after from the Retry-After header
- 401/403: UNAUTHORIZED
- 5xx: TRANSIENT_ERROR
- Other: PERMANENT_ERROR
"""

from typing import Optional

import requests

from infrastructure.http.retry import parse_retry_after
from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60


def classify_http_response(
    response: requests.Response, provider: str
) -> OperationResult:
    """Classify a provider response.

    Args:
        response: Response returned by HttpClient.
        provider: Provider name used in messages (e.g. "twilio").

    Returns:
        OperationResult with status, message, error_code and retry_after.

    Example:
        response = client.post(url, data=form)
        result = classify_http_response(response, "twilio")
        if result.is_success:
            sid = result.data.get("sid")
    """
    status_code = response.status_code

    if 200 <= status_code < 300:
        return OperationResult.success(
            data=_json_or_none(response), message=f"{provider} accepted request"
        )

    if status_code == 429:
        return OperationResult.transient_error(
            f"{provider} rate limited",
            error_code="RATE_LIMITED",
            retry_after=_retry_after(response),
        )

    if status_code in (401, 403):
        return OperationResult.permanent_error(
            f"{provider} rejected credentials (HTTP {status_code})",
            error_code="UNAUTHORIZED",
            status=OperationStatus.UNAUTHORIZED,
        )

    if 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"{provider} server error (HTTP {status_code})",
            error_code="SERVER_ERROR",
        )

    return OperationResult.permanent_error(
        f"{provider} request failed (HTTP {status_code})",
        error_code=f"HTTP_{status_code}",
    )


def _json_or_none(response: requests.Response) -> Optional[dict]:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def _retry_after(response: requests.Response) -> int:
    seconds = parse_retry_after(response.headers.get("Retry-After"))
    return DEFAULT_RETRY_AFTER if seconds is None else seconds
