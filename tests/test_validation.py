"""Unit tests for ProfileValidator."""

from fittrack.tracking.validation import ProfileValidator


class TestValidateProfile:
    def test_valid_profile(self):
        errors = ProfileValidator.validate_profile({
            "height_cm": 180,
            "current_weight_kg": 80,
            "age": 30,
            "activity_level": "moderate",
        })
        assert errors == {}

    def test_bounds_are_inclusive(self):
        errors = ProfileValidator.validate_profile({
            "height_cm": 50,
            "current_weight_kg": 500,
            "age": 10,
        })
        assert errors == {}

    def test_missing_and_out_of_range(self):
        errors = ProfileValidator.validate_profile({"height_cm": 301, "age": 9})

        assert set(errors) == {"height_cm", "current_weight_kg", "age"}
        assert errors["height_cm"] == "Enter valid height (50-300 cm)"

    def test_unknown_activity_level(self):
        errors = ProfileValidator.validate_profile({
            "height_cm": 170,
            "current_weight_kg": 70,
            "age": 25,
            "activity_level": "couch",
        })
        assert list(errors) == ["activity_level"]

    def test_booleans_are_not_numbers(self):
        errors = ProfileValidator.validate_profile({
            "height_cm": True,
            "current_weight_kg": 70,
            "age": 25,
        })
        assert "height_cm" in errors


class TestValidateGoal:
    def test_valid_goal(self):
        errors = ProfileValidator.validate_goal({
            "target_weight_kg": 72,
            "daily_calorie_target": 2000,
            "daily_water_goal_ml": 2000,
            "sleep_goal_hours": 8,
        })
        assert errors == {}

    def test_reports_every_bad_field(self):
        errors = ProfileValidator.validate_goal({
            "target_weight_kg": 72,
            "daily_calorie_target": 400,
            "daily_water_goal_ml": 20000,
            "sleep_goal_hours": 0,
        })
        assert set(errors) == {"daily_calorie_target", "daily_water_goal_ml", "sleep_goal_hours"}

    def test_as_error_list(self):
        errors = ProfileValidator.as_error_list({"age": "Enter valid age (10-120)"})
        assert errors == [{"field": "age", "message": "Enter valid age (10-120)"}]
