"""Convenience wiring of the gateways around one signed transport."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import requests

from .config import GatewayConfiguration
from .decoding import JSON_FORMAT
from .food import FoodGateway
from .gateway import AUTHENTICATED_USER, EndpointGateway
from .rate_limit import RateLimiting
from .request_log import RequestLogger
from .timing import Stopwatch, Timer
from .transport import OAuth2Transport
from .water import WaterGateway


class FitbitClient:
    """Every resource gateway, sharing one endpoint gateway."""

    def __init__(self, gateway: EndpointGateway) -> None:
        self.gateway = gateway
        self.food = FoodGateway(gateway)
        self.water = WaterGateway(gateway)

    @classmethod
    def from_token_file(
        cls,
        token_file: str | Path,
        *,
        configuration: Optional[GatewayConfiguration] = None,
        response_format: str = JSON_FORMAT,
        user_id: str = AUTHENTICATED_USER,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        session: Optional[requests.Session] = None,
        stopwatch: Optional[Timer] = None,
        request_logger: Optional[RequestLogger] = None,
        **transport_options: Any,
    ) -> "FitbitClient":
        """Build a client whose requests are signed with the stored token."""
        transport = OAuth2Transport(
            token_file,
            client_id=client_id,
            client_secret=client_secret,
            session=session,
            **transport_options,
        )
        gateway = (
            EndpointGateway(
                configuration or GatewayConfiguration(),
                stopwatch or Stopwatch(),
                request_logger=request_logger,
            )
            .set_service(transport)
            .set_response_format(response_format)
            .set_user_id(user_id)
        )
        return cls(gateway)

    def get_rate_limit(self) -> Optional[RateLimiting]:
        return self.gateway.get_rate_limit()
