"""Food logging, favorites and the foods database."""

from __future__ import annotations

from datetime import date as date_type
from typing import Any, Dict, Mapping, Optional

from .errors import ErrorKind
from .gateway import ResourceGateway, format_date


class FoodGateway(ResourceGateway):
    """Food log entries, favorite foods, meals and food search."""

    def get_foods(self, date: date_type) -> Any:
        """Food log entries of the configured user on ``date``."""
        return self._call(
            ErrorKind.FOODS_REQUEST_FAILED,
            "Food data request failed.",
            f"user/{self.endpoint.user_id}/foods/log/date/{format_date(date)}",
        )

    def get_recent_foods(self) -> Any:
        return self._call(
            ErrorKind.RECENT_FOODS_REQUEST_FAILED,
            "Recent food data request failed.",
            "user/-/foods/log/recent",
        )

    def get_frequent_foods(self) -> Any:
        return self._call(
            ErrorKind.FREQUENT_FOODS_REQUEST_FAILED,
            "Frequent food data request failed.",
            "user/-/foods/log/frequent",
        )

    def get_favorite_foods(self) -> Any:
        return self._call(
            ErrorKind.FAVORITE_FOODS_REQUEST_FAILED,
            "Favorite food data request failed.",
            "user/-/foods/log/favorite",
        )

    def log_food(
        self,
        date: date_type,
        food_id: Optional[str],
        meal_type_id: str,
        unit_id: str,
        amount: str,
        food_name: Optional[str] = None,
        calories: Optional[int] = None,
        brand_name: Optional[str] = None,
        nutrition: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Create a food log entry.

        Either ``food_id`` references the foods database (see
        :meth:`search_foods`), or ``food_name`` and ``calories`` describe a
        custom food, optionally with ``brand_name`` and ``nutrition`` values.
        ``unit_id`` must be valid for the food (see :meth:`get_food_units`).
        """
        parameters: Dict[str, Any] = {"date": format_date(date)}
        if food_name is not None:
            parameters["foodName"] = food_name
            parameters["calories"] = calories
            if brand_name is not None:
                parameters["brandName"] = brand_name
            if nutrition is not None:
                parameters.update(nutrition)
        else:
            parameters["foodId"] = food_id
        parameters["mealTypeId"] = meal_type_id
        parameters["unitId"] = unit_id
        parameters["amount"] = amount

        return self._call(
            ErrorKind.FOOD_LOG_CREATE_FAILED,
            "Create food log failed.",
            "user/-/foods/log",
            "POST",
            parameters,
        )

    def delete_food(self, log_id: str | int) -> Any:
        return self._call(
            ErrorKind.FOOD_LOG_DELETE_FAILED,
            "Delete food log failed.",
            f"user/-/foods/log/{log_id}",
            "DELETE",
        )

    def add_favorite_food(self, food_id: str | int) -> Any:
        return self._call(
            ErrorKind.FAVORITE_FOOD_ADD_FAILED,
            "Add favorite food failed.",
            f"user/-/foods/log/favorite/{food_id}",
            "POST",
        )

    def delete_favorite_food(self, food_id: str | int) -> Any:
        return self._call(
            ErrorKind.FAVORITE_FOOD_DELETE_FAILED,
            "Delete favorite food failed.",
            f"user/-/foods/log/favorite/{food_id}",
            "DELETE",
        )

    def get_meals(self) -> Any:
        return self._call(
            ErrorKind.MEALS_REQUEST_FAILED, "Meal request failed.", "user/-/meals"
        )

    def get_food_units(self) -> Any:
        return self._call(
            ErrorKind.FOOD_UNITS_REQUEST_FAILED, "Food Unit request failed.", "foods/units"
        )

    def search_foods(self, query: str) -> Any:
        return self._call(
            ErrorKind.FOOD_SEARCH_FAILED,
            f"Food search (for {query}) failed.",
            "foods/search",
            "GET",
            {"query": query},
        )

    def get_food(self, food_id: str | int) -> Any:
        """Details of a food from the database or the user's private foods."""
        return self._call(
            ErrorKind.FOOD_REQUEST_FAILED, "Food detail request failed.", f"foods/{food_id}"
        )

    def create_food(
        self,
        name: str,
        default_food_measurement_unit_id: str,
        default_serving_size: str,
        calories: int,
        description: Optional[str] = None,
        form_type: Optional[str] = None,
        nutrition: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Create a private food for the user.

        ``form_type`` is ``"LIQUID"`` or ``"DRY"``.
        """
        parameters: Dict[str, Any] = {
            "name": name,
            "defaultFoodMeasurementUnitId": default_food_measurement_unit_id,
            "defaultServingSize": default_serving_size,
            "calories": calories,
        }
        if description is not None:
            parameters["description"] = description
        if form_type is not None:
            parameters["formType"] = form_type
        if nutrition is not None:
            parameters.update(nutrition)

        return self._call(
            ErrorKind.FOOD_CREATE_FAILED, "Create food failed.", "foods", "POST", parameters
        )
