import os

from .config import GAS_CONFIG, ORG_CONFIG

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

GAS_CONFIG = dict(GAS_CONFIG)
ORG_CONFIG = dict(ORG_CONFIG)
