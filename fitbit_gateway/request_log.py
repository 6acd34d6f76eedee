"""Recording of API request/response pairs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol
from xml.etree import ElementTree as ET

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """What was sent to the transport for a single call."""

    path: str
    method: str
    body: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "method": self.method,
            "body": dict(self.body),
            "headers": dict(self.headers),
        }


class RequestLogger(Protocol):
    """Receives one record per logged API call.

    The gateway ignores anything an implementation raises, so a failing
    logger never affects the caller.
    """

    def log_api_call(
        self,
        request: RequestDescriptor,
        duration: float,
        response: Any,
        error: Optional[BaseException],
    ) -> None: ...


class StructlogRequestLogger:
    """Write each API call as a ``fitbit_api_call`` structlog event."""

    def __init__(self, bound_logger: Any = None) -> None:
        self._logger = bound_logger or logger

    def log_api_call(
        self,
        request: RequestDescriptor,
        duration: float,
        response: Any,
        error: Optional[BaseException],
    ) -> None:
        fields = request.as_dict()
        fields["duration"] = round(duration, 6)
        if error is not None:
            self._logger.warning("fitbit_api_call", error=str(error), **fields)
            return
        self._logger.info("fitbit_api_call", response=_summarize(response), **fields)


def _summarize(response: Any) -> Any:
    if isinstance(response, ET.Element):
        return ET.tostring(response, encoding="unicode")
    return response
