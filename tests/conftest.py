"""Shared fakes for the gateway tests."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pytest

from fitbit_gateway.config import GatewayConfiguration
from fitbit_gateway.gateway import EndpointGateway
from fitbit_gateway.request_log import RequestDescriptor
from fitbit_gateway.timing import Stopwatch
from fitbit_gateway.transport import OAuth2Transport


class FakeTransport:
    """Returns queued bodies, raising queued exceptions instead."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self._responses = list(responses or [])
        self.calls: List[Tuple[str, str, Dict[str, Any], Dict[str, str]]] = []

    def queue(self, *responses: Any) -> None:
        self._responses.extend(responses)

    def request(
        self,
        path: str,
        method: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> str:
        self.calls.append((path, method, dict(body), dict(headers)))
        if not self._responses:
            raise AssertionError("No more responses queued.")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response


class FakeHTTPResponse:
    def __init__(self, status_code: int, text: str = "") -> None:
        self.status_code = status_code
        self.text = text


class DummySession:
    """Stands in for ``requests.Session`` behind ``OAuth2Transport``."""

    def __init__(self) -> None:
        self._responses: List[FakeHTTPResponse] = []
        self.calls: List[Tuple[str, str]] = []

    def reply(self, status_code: int, text: str = "") -> None:
        self._responses.append(FakeHTTPResponse(status_code, text))

    def request(self, method: str, url: str, **kwargs: Any) -> FakeHTTPResponse:
        self.calls.append((method, url))
        if not self._responses:
            raise AssertionError("No more responses queued.")
        return self._responses.pop(0)


class RecordingRequestLogger:
    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.records: List[Tuple[RequestDescriptor, float, Any, Optional[BaseException]]] = []

    def log_api_call(
        self,
        request: RequestDescriptor,
        duration: float,
        response: Any,
        error: Optional[BaseException],
    ) -> None:
        self.records.append((request, duration, response, error))
        if self.fail:
            raise RuntimeError("log sink unavailable")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def request_logger() -> RecordingRequestLogger:
    return RecordingRequestLogger()


@pytest.fixture
def stopwatch() -> Stopwatch:
    return Stopwatch()


@pytest.fixture
def configuration() -> GatewayConfiguration:
    return GatewayConfiguration()


@pytest.fixture
def gateway(configuration, stopwatch, transport, request_logger) -> EndpointGateway:
    return (
        EndpointGateway(configuration, stopwatch, request_logger=request_logger)
        .set_service(transport)
        .set_response_format("json")
        .set_user_id("-")
    )


@pytest.fixture
def failing_request_logger() -> RecordingRequestLogger:
    return RecordingRequestLogger(fail=True)


@pytest.fixture
def session() -> DummySession:
    return DummySession()


@pytest.fixture
def token_file(tmp_path) -> Path:
    path = tmp_path / "tokens.json"
    payload = {
        "access_token": "token",
        "expires_at": (datetime.now(timezone.utc) + timedelta(hours=1)).isoformat(),
    }
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def signed_gateway(configuration, stopwatch, request_logger, token_file, session):
    """Endpoint gateway sending through ``OAuth2Transport`` and the dummy session."""
    return EndpointGateway(
        configuration, stopwatch, request_logger=request_logger
    ).set_service(OAuth2Transport(token_file, session=session))
