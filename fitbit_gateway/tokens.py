"""OAuth token storage for the signed transport."""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Optional

if TYPE_CHECKING:
    from requests_oauth2client import BearerToken

UTC = timezone.utc


@dataclass(frozen=True)
class TokenData:
    """Access and refresh tokens as stored in the token file."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None
    scope: Optional[List[str]] = None
    token_type: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "TokenData":
        if "access_token" not in payload:
            raise ValueError("Token payload has no access_token")

        expires_at: Optional[datetime] = None
        if payload.get("expires_at"):
            expires_at = _parse_timestamp(payload["expires_at"])
        elif payload.get("expires_in"):
            expires_at = datetime.now(UTC) + timedelta(seconds=int(payload["expires_in"]))

        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=expires_at,
            scope=_normalize_scope(payload.get("scope")),
            token_type=payload.get("token_type"),
            user_id=payload.get("user_id"),
        )

    @classmethod
    def from_bearer_token(
        cls, token: "BearerToken", previous: Optional["TokenData"] = None
    ) -> "TokenData":
        """Convert a refreshed ``BearerToken``, keeping what it leaves out."""
        refreshed = cls(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            expires_at=token.expires_at,
            scope=_normalize_scope(token.scope),
            token_type=token.token_type,
        )
        if previous is None:
            return refreshed
        return replace(
            refreshed,
            refresh_token=refreshed.refresh_token or previous.refresh_token,
            scope=refreshed.scope or previous.scope,
            user_id=previous.user_id,
        )

    def as_serializable_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
        }
        if self.refresh_token:
            data["refresh_token"] = self.refresh_token
        if self.expires_at:
            data["expires_at"] = self.expires_at.astimezone(UTC).isoformat()
        if self.scope:
            data["scope"] = " ".join(self.scope)
        if self.user_id:
            data["user_id"] = self.user_id
        return data

    def will_expire_within(self, delta: timedelta = timedelta(minutes=1)) -> bool:
        """Return True when the token is expired or expiring soon."""
        if not self.expires_at:
            return False
        return self.expires_at <= datetime.now(tz=UTC) + delta


def _normalize_scope(value: Any) -> Optional[List[str]]:
    if isinstance(value, str):
        return [scope.strip() for scope in value.split() if scope.strip()] or None
    if isinstance(value, Iterable):
        return [str(item) for item in value] or None
    return None


def _parse_timestamp(value: str) -> datetime:
    dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not dt.tzinfo:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def load_token_file(path: str | Path) -> TokenData:
    token_path = Path(path).expanduser()
    with token_path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return TokenData.from_dict(payload)


def write_token_file(token: TokenData, path: str | Path) -> None:
    token_path = Path(path).expanduser()
    token_path.parent.mkdir(parents=True, exist_ok=True)
    with token_path.open("w", encoding="utf-8") as handle:
        json.dump(token.as_serializable_dict(), handle, indent=2)
        handle.write("\n")
