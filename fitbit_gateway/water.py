"""Water log entries."""

from __future__ import annotations

from datetime import date as date_type
from typing import Any, Optional

from .errors import ErrorKind, FitbitAPIError
from .gateway import ResourceGateway, format_date


class WaterGateway(ResourceGateway):
    """Read, create and delete water log entries of the authenticated user."""

    def get_water(self, date: date_type) -> Any:
        return self._call(
            ErrorKind.WATER_REQUEST_FAILED,
            "Could not get water records.",
            f"user/-/foods/log/water/date/{format_date(date)}",
        )

    def log_water(
        self, date: date_type, amount: float | str, water_unit: Optional[str] = None
    ) -> Any:
        """Log ``amount`` of water in ``water_unit``.

        The unit must be one of the configured ``water_units``; anything else,
        including no unit, is rejected before a request is made.
        """
        if not self.configuration.is_valid_water_unit(water_unit):
            raise FitbitAPIError(
                ErrorKind.INVALID_WATER_UNIT, "Invalid water unit provided."
            )

        parameters = {
            "date": format_date(date),
            "amount": amount,
            "unit": water_unit,
        }
        return self._call(
            ErrorKind.WATER_LOG_CREATE_FAILED,
            "Could not log water consumption.",
            "user/-/foods/log/water",
            "POST",
            parameters,
        )

    def delete_water(self, log_id: str | int) -> Any:
        return self._call(
            ErrorKind.WATER_LOG_DELETE_FAILED,
            "Could not delete water record.",
            f"user/-/foods/log/water/{log_id}",
            "DELETE",
        )
