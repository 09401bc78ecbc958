from .config import ORG_CONFIG

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_DIR = ""

# Tests inject fake repositories; the web apps are never called.
GAS_CONFIG = {
    "events_api_url": "",
    "login_api_url": "",
    "timeout": 1,
    "events_cache_seconds": 0,
    "members_cache_seconds": 0,
}
ORG_CONFIG = dict(ORG_CONFIG, timezone="Asia/Manila")
