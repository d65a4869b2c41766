"""Constants for the WebRF integration."""
from homeassistant.const import Platform

DOMAIN = "webrf"

PLATFORMS = [Platform.SWITCH]

# Configuration
CONF_URL = "url"
CONF_SCAN_INTERVAL = "scan_interval"

# API
API_PATH = "/api/v1/"
STATUS_OK = "ok"

# Default Values
DEFAULT_TIMEOUT = 10
DEFAULT_SCAN_INTERVAL = 0
RESET_DELAY = 3.0

# Attributes
ATTR_ACTION_ID = "action_id"
ATTR_ACTION_URL = "action_url"
ATTR_ENTRY_ID = "entry_id"
ATTR_NAME = "name"

# Services
SERVICE_SYNC = "sync"
SERVICE_REMOVE_ALL = "remove_all"

# Storage
STORAGE_KEY = f"{DOMAIN}.{{entry_id}}"
STORAGE_VERSION = 1
