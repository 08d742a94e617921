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


class EnumForecastCaller(str, Enum):
    """Logical callers of the heat forecast, each with its own strategy switch."""

    UPCOMING_HEATS = "upcoming_heats"
    PLANNED_LITTERS = "planned_litters"
    HEAT_PLANNING = "heat_planning"
    REMINDER_SYNC = "reminder_sync"
    DOG_SERVICES = "dog_services"
