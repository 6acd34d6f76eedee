"""Request execution shared by every Fitbit resource gateway."""

from __future__ import annotations

import time
from datetime import date as date_type
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlencode

import structlog

from .config import GatewayConfiguration
from .decoding import JSON_FORMAT, SUPPORTED_FORMATS, decode_response
from .errors import ErrorKind, FitbitAPIError
from .rate_limit import RateLimiting
from .request_log import RequestDescriptor, RequestLogger, StructlogRequestLogger
from .timing import Timer
from .transport import SignedTransport

logger = structlog.get_logger(__name__)

TIMER_CATEGORY = "Fitbit_API"
REQUEST_TIMER = "API Request"
RATE_LIMIT_TIMER = "API Rate Limit Request"

CLIENT_AND_VIEWER_RATE_LIMIT_PATH = "account/clientAndViewerRateLimitStatus"
CLIENT_RATE_LIMIT_PATH = "account/clientRateLimitStatus"

AUTHENTICATED_USER = "-"


class EndpointGateway:
    """Perform API calls through a signed transport.

    Holds the transport, the response format and the target user. Resource
    gateways share one instance, and with it one configuration.
    """

    def __init__(
        self,
        configuration: GatewayConfiguration,
        stopwatch: Timer,
        *,
        request_logger: Optional[RequestLogger] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.configuration = configuration
        self.stopwatch = stopwatch
        self.request_logger: RequestLogger = request_logger or StructlogRequestLogger()
        self.service: Optional[SignedTransport] = None
        self.response_format: str = JSON_FORMAT
        self.user_id: str = AUTHENTICATED_USER
        self._clock = clock or time.perf_counter

    def set_service(self, service: SignedTransport) -> "EndpointGateway":
        self.service = service
        return self

    def set_response_format(self, response_format: str) -> "EndpointGateway":
        self.response_format = response_format
        return self

    def set_user_id(self, user_id: str) -> "EndpointGateway":
        self.user_id = user_id
        return self

    def request(
        self,
        resource: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Call ``resource`` and return the decoded response.

        ``resource`` is the endpoint path after ``/1/``, without the format
        suffix. GET parameters passed in ``body`` are moved to the query
        string.
        """
        timer = self.stopwatch
        timer.start(REQUEST_TIMER, TIMER_CATEGORY)

        if self.response_format not in SUPPORTED_FORMATS:
            timer.stop(REQUEST_TIMER)
            raise FitbitAPIError(
                ErrorKind.UNSUPPORTED_FORMAT,
                f"Could not handle a response format of {self.response_format}",
            )

        path = f"{resource}.{self.response_format}"
        body = dict(body or {})
        headers = dict(extra_headers or {})
        if method == "GET" and body:
            path = f"{path}?{urlencode(body)}"
            body = {}
        descriptor = RequestDescriptor(path=path, method=method, body=body, headers=headers)

        request_start = self._clock()
        try:
            raw = self.service.request(path, method, body, headers)
        except Exception as exc:
            self._log_call(descriptor, self._clock() - request_start, None, exc)
            timer.stop(REQUEST_TIMER)
            raise FitbitAPIError(
                ErrorKind.REQUEST_FAILED, "The service request failed.", exc
            ) from exc
        elapsed = self._clock() - request_start

        try:
            response = _decode_content(raw, self.response_format)
        except Exception as exc:
            timer.stop(REQUEST_TIMER)
            raise FitbitAPIError(
                ErrorKind.RESPONSE_UNDECODABLE,
                "The response from Fitbit could not be interpreted.",
                exc,
            ) from exc

        self._log_call(descriptor, elapsed, response, None)
        timer.stop(REQUEST_TIMER)
        return response

    def get_rate_limit(self) -> Optional[RateLimiting]:
        """Return both quota statuses, or None when they cannot be fetched."""
        timer = self.stopwatch
        timer.start(RATE_LIMIT_TIMER, TIMER_CATEGORY)
        try:
            client_and_viewer = self.request(CLIENT_AND_VIEWER_RATE_LIMIT_PATH)
            client = self.request(CLIENT_RATE_LIMIT_PATH)
        except FitbitAPIError as exc:
            timer.stop(RATE_LIMIT_TIMER)
            logger.warning("rate_limit_unavailable", error=str(exc))
            return None

        try:
            rate_limiting = RateLimiting.from_responses(client_and_viewer, client)
        except (KeyError, TypeError, ValueError) as exc:
            timer.stop(RATE_LIMIT_TIMER)
            raise FitbitAPIError(
                ErrorKind.RATE_LIMIT_OBJECT_FAILED,
                "Could not create the rate limiting object.",
                exc,
            ) from exc

        timer.stop(RATE_LIMIT_TIMER)
        return rate_limiting

    def _log_call(
        self,
        descriptor: RequestDescriptor,
        duration: float,
        response: Any,
        error: Optional[BaseException],
    ) -> None:
        try:
            self.request_logger.log_api_call(descriptor, duration, response, error)
        except Exception as exc:
            logger.debug("request_logging_failed", error=str(exc))


def format_date(value: date_type) -> str:
    """Return the ``YYYY-MM-DD`` form used in Fitbit resource paths."""
    return date_type(value.year, value.month, value.day).isoformat()


def _decode_content(raw: Optional[str | bytes], response_format: str) -> Any:
    # No-content answers (204 after a DELETE) have nothing to decode
    if raw is None or not raw.strip():
        return None
    return decode_response(raw, response_format)


class ResourceGateway:
    """Base for gateways exposing one resource family over an endpoint gateway."""

    def __init__(self, endpoint: EndpointGateway) -> None:
        self.endpoint = endpoint

    @property
    def configuration(self) -> GatewayConfiguration:
        return self.endpoint.configuration

    def _call(
        self,
        kind: ErrorKind,
        message: str,
        resource: str,
        method: str = "GET",
        body: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        try:
            return self.endpoint.request(resource, method, body)
        except Exception as exc:
            raise FitbitAPIError(kind, message, exc) from exc
