"""Immutable configuration shared by every gateway."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Tuple

DEFAULT_WATER_UNITS: Tuple[str, ...] = ("ml", "fl oz", "cup")

WATER_UNITS_KEY = "water_units"


@dataclass(frozen=True)
class GatewayConfiguration:
    """Named options consumed by the gateways.

    ``water_units`` is the whitelist checked before logging water. Any other
    keys found in the source mapping are kept, read-only, in ``extra``.
    """

    water_units: Tuple[str, ...] = DEFAULT_WATER_UNITS
    extra: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "GatewayConfiguration":
        """Create a configuration from a plain mapping of options."""
        units_value = payload.get(WATER_UNITS_KEY)
        if units_value is None:
            water_units = DEFAULT_WATER_UNITS
        elif isinstance(units_value, str):
            raise ValueError(f"{WATER_UNITS_KEY} must be a list of unit names")
        elif isinstance(units_value, Iterable):
            water_units = tuple(str(unit) for unit in units_value)
        else:
            raise ValueError(f"{WATER_UNITS_KEY} must be a list of unit names")

        extra = {key: value for key, value in payload.items() if key != WATER_UNITS_KEY}
        return cls(water_units=water_units, extra=MappingProxyType(extra))

    @classmethod
    def from_json_file(cls, path: str | Path) -> "GatewayConfiguration":
        """Load the configuration mapping from a JSON file."""
        config_path = Path(path).expanduser()
        with config_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected JSON format in {config_path}")
        return cls.from_mapping(payload)

    def is_valid_water_unit(self, unit: str | None) -> bool:
        return unit is not None and unit in self.water_units
