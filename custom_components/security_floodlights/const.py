"""Constants for the Security floodlights integration."""

DOMAIN = "security_floodlights"

# Configuration keys
CONF_SHOW_WIND_OVERRIDE_SWITCH = "show_wind_override_switch"
CONF_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE = (
    "wind_override_respects_group_override"  # Releasing wind override skips overridden groups
)
CONF_LIGHT_GROUPS = "light_groups"
CONF_GROUP_ID = "id"
CONF_MOTION_SENSOR_COUNT = "motion_sensor_count"
CONF_OCCUPANCY_TIMEOUT = "occupancy_timeout"  # Seconds before occupancy clears

# Default values
DEFAULT_NAME = "Security Floodlights"
DEFAULT_SHOW_WIND_OVERRIDE_SWITCH = True
DEFAULT_WIND_OVERRIDE_RESPECTS_GROUP_OVERRIDE = False
DEFAULT_MOTION_SENSOR_COUNT = 1
DEFAULT_OCCUPANCY_TIMEOUT = 300
MAX_MOTION_SENSOR_COUNT = 20

MANUFACTURER = "Security Floodlights"

# Persistence
STORAGE_KEY = f"{DOMAIN}.state"
STORAGE_VERSION = 1
STORAGE_SAVE_DELAY = 1
