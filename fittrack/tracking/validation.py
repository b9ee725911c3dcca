"""
Profile and goal validation.

Validates onboarding and profile-screen values against allowed ranges
and reports field-level messages.
"""

from typing import Any, Dict, Optional, Tuple


class ProfileValidator:
    """
    Validates profile and goal values against allowed ranges.
    """

    PROFILE_RANGES: Dict[str, Tuple[float, float, str]] = {
        "height_cm": (50, 300, "Enter valid height (50-300 cm)"),
        "current_weight_kg": (20, 500, "Enter valid weight (20-500 kg)"),
        "age": (10, 120, "Enter valid age (10-120)"),
    }

    GOAL_RANGES: Dict[str, Tuple[float, float, str]] = {
        "target_weight_kg": (20, 500, "Enter valid target weight"),
        "daily_calorie_target": (500, 10000, "Enter valid calorie target (500-10000)"),
        "daily_water_goal_ml": (500, 10000, "Enter valid water goal (500-10000 ml)"),
        "sleep_goal_hours": (1, 24, "Enter valid sleep goal (1-24 hrs)"),
    }

    ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")

    @classmethod
    def _check_ranges(
        cls,
        values: Dict[str, Any],
        ranges: Dict[str, Tuple[float, float, str]],
    ) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        for field, (min_val, max_val, message) in ranges.items():
            value = values.get(field)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors[field] = message
            elif value < min_val or value > max_val:
                errors[field] = message
        return errors

    @classmethod
    def validate_profile(cls, values: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate profile fields.

        Args:
            values: dict with height_cm, current_weight_kg, age, activity_level

        Returns:
            dict of field -> message, empty when valid
        """
        errors = cls._check_ranges(values, cls.PROFILE_RANGES)
        level: Optional[str] = values.get("activity_level")
        if level is not None and level not in cls.ACTIVITY_LEVELS:
            errors["activity_level"] = f"Activity level must be one of: {', '.join(cls.ACTIVITY_LEVELS)}"
        return errors

    @classmethod
    def validate_goal(cls, values: Dict[str, Any]) -> Dict[str, str]:
        """
        Validate goal fields.

        Args:
            values: dict with target_weight_kg, daily_calorie_target,
                daily_water_goal_ml, sleep_goal_hours

        Returns:
            dict of field -> message, empty when valid
        """
        return cls._check_ranges(values, cls.GOAL_RANGES)

    @staticmethod
    def as_error_list(errors: Dict[str, str]) -> list:
        """Field errors in the shape ValidationException expects."""
        return [{"field": field, "message": message} for field, message in errors.items()]
