"""Fitbit Web API location."""

from __future__ import annotations

FITBIT_API_BASE = "https://api.fitbit.com"
FITBIT_API_VERSION = "1"
