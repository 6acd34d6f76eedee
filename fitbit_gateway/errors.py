"""Error taxonomy shared by every Fitbit gateway."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional


class ErrorKind(IntEnum):
    """Numeric error codes, grouped by range per gateway."""

    # Endpoint gateway: 401 - 407
    REQUEST_FAILED = 401
    RESPONSE_UNDECODABLE = 402
    JSON_DECODE_FAILED = 403
    XML_DECODE_FAILED = 404
    UNSUPPORTED_FORMAT = 405
    RATE_LIMIT_OBJECT_FAILED = 407

    # Food gateway: 501 - 513
    FOODS_REQUEST_FAILED = 501
    RECENT_FOODS_REQUEST_FAILED = 502
    FREQUENT_FOODS_REQUEST_FAILED = 503
    FAVORITE_FOODS_REQUEST_FAILED = 504
    FOOD_LOG_CREATE_FAILED = 505
    FOOD_LOG_DELETE_FAILED = 506
    FAVORITE_FOOD_ADD_FAILED = 507
    FAVORITE_FOOD_DELETE_FAILED = 508
    MEALS_REQUEST_FAILED = 509
    FOOD_UNITS_REQUEST_FAILED = 510
    FOOD_SEARCH_FAILED = 511
    FOOD_REQUEST_FAILED = 512
    FOOD_CREATE_FAILED = 513

    # Water gateway: 1701 - 1704
    WATER_REQUEST_FAILED = 1701
    INVALID_WATER_UNIT = 1702
    WATER_LOG_CREATE_FAILED = 1703
    WATER_LOG_DELETE_FAILED = 1704


class FitbitAPIError(RuntimeError):
    """Raised when Fitbit API interactions fail.

    Carries the error ``kind`` (whose value is the numeric code), a readable
    message and the underlying failure, if any. Callers raise it with
    ``raise ... from cause`` so ``__cause__`` matches ``cause``.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.cause = cause

    @property
    def code(self) -> int:
        return int(self.kind)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class TransportError(RuntimeError):
    """Raised by a signed transport when the HTTP call does not succeed."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
