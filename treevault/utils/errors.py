"""Error message extraction for failed API calls"""
import logging

import httpx

logger = logging.getLogger(__name__)


def extract_error_detail(exc: BaseException, default: str) -> str:
    """Return the server's `detail` message for a failed request.

    Falls back to ``default`` for transport errors, non-JSON bodies and
    payloads without a usable ``detail`` string.
    """
    if not isinstance(exc, httpx.HTTPStatusError):
        return default

    response = exc.response

    try:
        payload = response.json()
    except ValueError:
        logger.debug(f"Error response is not JSON (status={response.status_code})")
        return default

    if isinstance(payload, dict):
        detail = payload.get("detail")
        if isinstance(detail, str) and detail.strip():
            return detail
    return default
