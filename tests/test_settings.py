"""
Settings validation: bad enum codes reset to index 0, goals clamp to floors, valid values pass through.
"""

from __future__ import annotations

from watchface.core.error_codes import SETTING_RESET, USER_MESSAGES, user_message
from watchface.core.settings import Settings, load_settings, validate_settings
from watchface.core.types import ColorScheme, FieldMode, GaugeMode, HandBehavior


def test_defaults_are_valid() -> None:
    settings, warnings = validate_settings(Settings())
    assert warnings == []
    assert settings == Settings()


def test_out_of_range_gauge_mode_resets() -> None:
    settings, warnings = load_settings({"gauge_mode": 9})
    assert settings.gauge_mode == GaugeMode.BATTERY
    assert warnings == [f"{SETTING_RESET}:gauge_mode"]


def test_negative_enum_resets() -> None:
    settings, warnings = load_settings({"hand_behavior": -1, "color_scheme": 7})
    assert settings.hand_behavior == HandBehavior.SMOOTH
    assert settings.color_scheme == ColorScheme.DARK
    assert len(warnings) == 2


def test_valid_values_unchanged() -> None:
    raw = {
        "hand_behavior": 1,
        "gauge_mode": 4,
        "top_field": 2,
        "bottom_field": 5,
        "color_scheme": 1,
        "calorie_goal_overall": 3000,
        "calorie_goal_active": 900,
        "show_minute_hand": False,
    }
    settings, warnings = load_settings(raw)
    assert warnings == []
    assert settings.hand_behavior == HandBehavior.DISCRETE
    assert settings.gauge_mode == GaugeMode.CALORIES
    assert settings.top_field == FieldMode.HEART_RATE
    assert settings.bottom_field == FieldMode.ACTIVE_CALORIES
    assert settings.color_scheme == ColorScheme.LIGHT
    assert settings.calorie_goal_overall == 3000
    assert settings.calorie_goal_active == 900
    assert settings.show_minute_hand is False
    assert settings.visibility.minute_hand is False


def test_goals_below_floor_clamp() -> None:
    settings, warnings = load_settings({"calorie_goal_overall": 500, "calorie_goal_active": 100})
    assert settings.calorie_goal_overall == 1000
    assert settings.calorie_goal_active == 200
    assert sorted(warnings) == [
        f"{SETTING_RESET}:calorie_goal_active",
        f"{SETTING_RESET}:calorie_goal_overall",
    ]


def test_goal_at_floor_is_kept() -> None:
    settings, warnings = load_settings({"calorie_goal_overall": 1000})
    assert settings.calorie_goal_overall == 1000
    assert warnings == []


def test_non_numeric_goal_resets_to_default() -> None:
    settings, _ = load_settings({"calorie_goal_overall": "abc", "calorie_goal_active": None})
    assert settings.calorie_goal_overall == 2400
    assert settings.calorie_goal_active == 750


def test_string_codes_accepted() -> None:
    settings, warnings = load_settings({"gauge_mode": "2", "calorie_goal_overall": "1800"})
    assert settings.gauge_mode == GaugeMode.ACTIVE_MINUTES
    assert settings.calorie_goal_overall == 1800
    assert warnings == []


def test_bool_is_not_an_enum_code() -> None:
    settings, warnings = load_settings({"gauge_mode": True})
    assert settings.gauge_mode == GaugeMode.BATTERY
    assert warnings == [f"{SETTING_RESET}:gauge_mode"]


def test_non_bool_flag_resets_to_visible() -> None:
    settings, warnings = load_settings({"show_top_field": "no"})
    assert settings.show_top_field is True
    assert warnings == [f"{SETTING_RESET}:show_top_field"]


def test_unknown_keys_ignored() -> None:
    settings, warnings = load_settings({"nonsense": 1, "gauge_mode": 1})
    assert settings.gauge_mode == GaugeMode.STEPS
    assert warnings == []


def test_reset_warning_has_user_message() -> None:
    _, warnings = load_settings({"gauge_mode": 42})
    assert user_message(warnings[0]) == USER_MESSAGES[SETTING_RESET]
