"""Rate limiting quota status value objects."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping
from xml.etree import ElementTree as ET

STATUS_FIELD = "rateLimitStatus"


@dataclass(frozen=True)
class QuotaStatus:
    """Allowance of one quota scope."""

    remaining_hits: int
    reset_time: datetime
    hourly_limit: int

    @classmethod
    def from_response(cls, response: Any) -> "QuotaStatus":
        """Read ``rateLimitStatus`` from a decoded JSON or XML response."""
        if isinstance(response, ET.Element):
            status = _xml_status(response)
        elif isinstance(response, Mapping):
            status = response[STATUS_FIELD]
        else:
            raise TypeError(f"Unexpected rate limit response: {type(response).__name__}")

        return cls(
            remaining_hits=int(status["remainingHits"]),
            reset_time=_parse_reset_time(status["resetTime"]),
            hourly_limit=int(status["hourlyLimit"]),
        )


@dataclass(frozen=True)
class RateLimiting:
    """Quota status for the client+viewer pair and for the client alone."""

    client_and_viewer: QuotaStatus
    client: QuotaStatus

    @classmethod
    def from_responses(cls, client_and_viewer: Any, client: Any) -> "RateLimiting":
        return cls(
            client_and_viewer=QuotaStatus.from_response(client_and_viewer),
            client=QuotaStatus.from_response(client),
        )

    @property
    def client_and_viewer_remaining_hits(self) -> int:
        return self.client_and_viewer.remaining_hits

    @property
    def client_remaining_hits(self) -> int:
        return self.client.remaining_hits

    @property
    def client_and_viewer_reset_time(self) -> datetime:
        return self.client_and_viewer.reset_time

    @property
    def client_reset_time(self) -> datetime:
        return self.client.reset_time

    @property
    def client_and_viewer_hourly_limit(self) -> int:
        return self.client_and_viewer.hourly_limit

    @property
    def client_hourly_limit(self) -> int:
        return self.client.hourly_limit


def _xml_status(root: ET.Element) -> Mapping[str, str]:
    node = root if root.tag == STATUS_FIELD else root.find(f".//{STATUS_FIELD}")
    if node is None:
        raise KeyError(STATUS_FIELD)
    return {child.tag: (child.text or "").strip() for child in node}


def _parse_reset_time(value: Any) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid reset time: {value!r}")
    return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
