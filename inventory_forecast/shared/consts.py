from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_CATEGORIES = (
    "ELECTRONICS",
    "CLOTHING",
    "GROCERIES",
    "AGRICULTURE",
    "HANDICRAFTS",
    "PHARMACY",
    "BOOKS",
    "SPORTS",
    "HOME_DECOR",
    "JEWELRY",
)
