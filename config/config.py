import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "ysp-console-secret"

    # Apps Script web apps (events + attendance share one deployment)
    GAS_EVENTS_API_URL = os.environ.get("GAS_EVENTS_API_URL", "")
    GAS_LOGIN_API_URL = os.environ.get("GAS_LOGIN_API_URL", "")
    GAS_TIMEOUT = float(os.environ.get("GAS_TIMEOUT", "15"))
    EVENTS_CACHE_SECONDS = float(os.environ.get("EVENTS_CACHE_SECONDS", "120"))
    MEMBERS_CACHE_SECONDS = float(os.environ.get("MEMBERS_CACHE_SECONDS", "300"))

    ORG_NAME = os.environ.get("ORG_NAME", "Youth Service Philippines")
    ORG_CHAPTER = os.environ.get("ORG_CHAPTER", "Tagum Chapter")
    ORG_TIMEZONE = os.environ.get("ORG_TIMEZONE", "Asia/Manila")
    QR_PREFIX = os.environ.get("QR_PREFIX", "")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_DIR = os.environ.get("LOG_DIR", "")


GAS_CONFIG = {
    "events_api_url": Config.GAS_EVENTS_API_URL,
    "login_api_url": Config.GAS_LOGIN_API_URL,
    "timeout": Config.GAS_TIMEOUT,
    "events_cache_seconds": Config.EVENTS_CACHE_SECONDS,
    "members_cache_seconds": Config.MEMBERS_CACHE_SECONDS,
}

ORG_CONFIG = {
    "name": Config.ORG_NAME,
    "chapter": Config.ORG_CHAPTER,
    "timezone": Config.ORG_TIMEZONE,
    "qr_prefix": Config.QR_PREFIX,
}
