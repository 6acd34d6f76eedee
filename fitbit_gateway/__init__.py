"""Typed gateways over the Fitbit Web API."""

from __future__ import annotations

from .client import FitbitClient
from .config import GatewayConfiguration
from .constants import FITBIT_API_BASE, FITBIT_API_VERSION
from .errors import ErrorKind, FitbitAPIError, TransportError
from .food import FoodGateway
from .gateway import EndpointGateway
from .rate_limit import QuotaStatus, RateLimiting
from .timing import Stopwatch
from .water import WaterGateway

__all__ = [
    "FITBIT_API_BASE",
    "FITBIT_API_VERSION",
    "FitbitClient",
    "EndpointGateway",
    "ErrorKind",
    "FitbitAPIError",
    "FoodGateway",
    "GatewayConfiguration",
    "QuotaStatus",
    "RateLimiting",
    "Stopwatch",
    "TransportError",
    "WaterGateway",
]
