"""
Structured fallback codes. Every anomaly in the engine has a defined fallback;
these keys are recorded in FrameReport.warnings and settings validation results.
"""

# Known fallback keys
SENSOR_UNAVAILABLE = "sensor_unavailable"
SETTING_RESET = "setting_reset"
LAYERS_UNAVAILABLE = "layers_unavailable"
PARTIAL_UPDATES_DISABLED = "partial_updates_disabled"

# Short descriptions for logs and preview reports
USER_MESSAGES: dict[str, str] = {
    SENSOR_UNAVAILABLE: "Sensor data unavailable; showing neutral value.",
    SETTING_RESET: "Setting out of range; default restored.",
    LAYERS_UNAVAILABLE: "Offscreen layers unavailable; drawing directly every frame.",
    PARTIAL_UPDATES_DISABLED: "Power budget exceeded; partial updates disabled for this session.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a short description for the given fallback key."""
    if not error_key:
        return fallback
    key = error_key.split(":", 1)[0]
    return USER_MESSAGES.get(key, fallback)


def with_detail(error_key: str, detail: str) -> str:
    """Key plus detail, e.g. 'setting_reset:gauge_mode'."""
    return f"{error_key}:{detail}"
