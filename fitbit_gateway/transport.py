"""Signed HTTP transport used by the endpoint gateway."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol
from urllib.parse import urljoin

import requests
import structlog
from requests_oauth2client import OAuth2Client

from .constants import FITBIT_API_BASE, FITBIT_API_VERSION
from .errors import TransportError
from .tokens import TokenData, load_token_file, write_token_file

logger = structlog.get_logger(__name__)

TOKEN_ENDPOINT = "https://api.fitbit.com/oauth2/token"
DEFAULT_BASE_URL = f"{FITBIT_API_BASE}/{FITBIT_API_VERSION}/"

_BODY_METHODS = {"POST", "PUT"}


class SignedTransport(Protocol):
    """Sends an authorized request and returns the raw response body.

    Returns None when the API answers without content, e.g. after a DELETE.
    """

    def request(
        self,
        path: str,
        method: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> Optional[str]: ...


class OAuth2Transport:
    """Bearer-token transport that refreshes and persists the OAuth token."""

    def __init__(
        self,
        token_file: str | Path,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
        oauth_client: Optional[OAuth2Client] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = 30.0,
    ) -> None:
        self.token_path = Path(token_file)
        self.session = session or requests.Session()
        self.client_id = client_id or os.environ.get("FB_CLIENT_ID")
        self.client_secret = client_secret or os.environ.get("FB_CLIENT_SECRET")
        self.base_url = base_url
        self.timeout = timeout
        self._oauth_client = oauth_client
        self._token: TokenData = load_token_file(self.token_path)

    @property
    def token(self) -> TokenData:
        return self._token

    def request(
        self,
        path: str,
        method: str,
        body: Mapping[str, Any],
        headers: Mapping[str, str],
    ) -> Optional[str]:
        url = urljoin(self.base_url, path)
        retry_auth = True

        while True:
            if self._token.will_expire_within():
                logger.info("token_expiring_refreshing")
                self.refresh_access_token()

            merged_headers = dict(headers)
            merged_headers["Authorization"] = f"Bearer {self._token.access_token}"

            response = self.session.request(
                method,
                url,
                data=dict(body) if method in _BODY_METHODS and body else None,
                headers=merged_headers,
                timeout=self.timeout,
            )

            if response.status_code == 401 and retry_auth and self._token.refresh_token:
                logger.info("token_expired_retrying", url=url)
                self.refresh_access_token()
                retry_auth = False
                continue

            if response.status_code >= 400:
                raise TransportError(
                    f"Fitbit API call failed with {response.status_code}: {response.text}",
                    status_code=response.status_code,
                    body=response.text,
                )

            if response.status_code == 204 or not response.text.strip():
                return None
            return response.text

    def refresh_access_token(self) -> None:
        """Exchange the refresh token for a new access token and save it."""
        if not self._token.refresh_token:
            raise TransportError("Refresh token is missing.")

        client = self._get_oauth_client()
        try:
            bearer = client.refresh_token(self._token.refresh_token)
        except Exception as exc:
            raise TransportError(f"Failed to refresh token: {exc}") from exc

        self._token = TokenData.from_bearer_token(bearer, previous=self._token)
        write_token_file(self._token, self.token_path)
        logger.info("token_refreshed", path=str(self.token_path))

    def _get_oauth_client(self) -> OAuth2Client:
        if self._oauth_client is None:
            if not self.client_id or not self.client_secret:
                raise TransportError(
                    "Refreshing tokens requires FB_CLIENT_ID and FB_CLIENT_SECRET."
                )
            self._oauth_client = OAuth2Client(
                token_endpoint=TOKEN_ENDPOINT,
                client_id=self.client_id,
                client_secret=self.client_secret,
            )
        return self._oauth_client
