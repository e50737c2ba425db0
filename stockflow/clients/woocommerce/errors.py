import math
from enum import Enum
from typing import Any, NoReturn

import httpx


class ErrorKind(str, Enum):
    API = "api"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    NETWORK = "network"
    SERVER = "server"


class WooCommerceError(Exception):
    """
    Base class for all WooCommerce errors.

    `kind` discriminates the failure so callers can branch on it without
    chains of isinstance checks. `response` holds the decoded error body
    when the API returned one.
    """

    kind = ErrorKind.API

    def __init__(self, message: str, status_code: int | None = None, response: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class WooCommerceAuthenticationError(WooCommerceError):
    """Raised on 401: invalid or missing consumer credentials."""

    kind = ErrorKind.AUTHENTICATION

    def __init__(self, message: str = "Authentication failed", response: Any = None):
        super().__init__(message, 401, response)


class WooCommerceAuthorizationError(WooCommerceError):
    """Raised on 403: the key lacks the permission for this resource."""

    kind = ErrorKind.AUTHORIZATION

    def __init__(self, message: str = "Authorization failed - insufficient permissions", response: Any = None):
        super().__init__(message, 403, response)


class WooCommerceNotFoundError(WooCommerceError):
    """Raised on 404."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found", response: Any = None):
        super().__init__(message, 404, response)


class WooCommerceValidationError(WooCommerceError):
    """Raised on 400 and 422. `errors` maps field names to messages when the API sends them."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        status_code: int = 400,
        response: Any = None,
        errors: dict[str, str] | None = None,
    ):
        super().__init__(message, status_code, response)
        self.errors = errors


class WooCommerceRateLimitError(WooCommerceError):
    """Raised on 429. `retry_after` is in seconds, None when the server did not say."""

    kind = ErrorKind.RATE_LIMIT

    def __init__(self, message: str = "Rate limit exceeded", response: Any = None, retry_after: int | None = None):
        super().__init__(message, 429, response)
        self.retry_after = retry_after


class WooCommerceNetworkError(WooCommerceError):
    """Raised on timeouts and connection failures."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Network request failed", original_error: BaseException | None = None):
        super().__init__(message)
        self.original_error = original_error


class WooCommerceServerError(WooCommerceError):
    """Raised on 5xx responses."""

    kind = ErrorKind.SERVER

    def __init__(self, message: str = "WooCommerce API error", status_code: int = 500, response: Any = None):
        super().__init__(message, status_code, response)


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _field_errors(body: Any) -> dict[str, str] | None:
    if not isinstance(body, dict):
        return None
    data = body.get("data")
    if not isinstance(data, dict):
        return None
    params = data.get("params")
    return params if isinstance(params, dict) else None


def _retry_after(response: httpx.Response) -> int | None:
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        seconds = float(raw.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return int(seconds)


def raise_for_error_response(response: httpx.Response) -> NoReturn:
    """Maps a non-success response onto the error taxonomy and raises it."""
    body = _decode_body(response)
    message = (
        (body.get("message") if isinstance(body, dict) else None)
        or response.reason_phrase
        or "Request failed"
    )
    status = response.status_code

    if status == 401:
        raise WooCommerceAuthenticationError(message, body)
    if status == 403:
        raise WooCommerceAuthorizationError(message, body)
    if status == 404:
        raise WooCommerceNotFoundError(message, body)
    if status in (400, 422):
        raise WooCommerceValidationError(message, status, body, _field_errors(body))
    if status == 429:
        raise WooCommerceRateLimitError(message, body, _retry_after(response))
    if status >= 500:
        raise WooCommerceServerError(message, status, body)
    raise WooCommerceError(message, status, body)
