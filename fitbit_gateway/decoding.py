"""Decode raw Fitbit response bodies."""

from __future__ import annotations

import json
from typing import Any
from xml.etree import ElementTree as ET

from .errors import ErrorKind, FitbitAPIError

JSON_FORMAT = "json"
XML_FORMAT = "xml"
SUPPORTED_FORMATS = (JSON_FORMAT, XML_FORMAT)


def decode_response(raw: str | bytes, response_format: str) -> Any:
    """Return the parsed JSON value or the root XML element of ``raw``."""
    if response_format == JSON_FORMAT:
        try:
            return json.loads(raw)
        except (ValueError, TypeError) as exc:
            raise FitbitAPIError(
                ErrorKind.JSON_DECODE_FAILED, "Could not decode JSON response.", exc
            ) from exc

    if response_format == XML_FORMAT:
        if isinstance(raw, str):
            # ElementTree rejects str input carrying an encoding declaration
            raw = raw.encode("utf-8")
        try:
            return ET.fromstring(raw)
        except (ET.ParseError, TypeError) as exc:
            raise FitbitAPIError(
                ErrorKind.XML_DECODE_FAILED, "Could not decode XML response.", exc
            ) from exc

    raise FitbitAPIError(
        ErrorKind.UNSUPPORTED_FORMAT,
        f"Could not handle a response format of {response_format}",
    )
