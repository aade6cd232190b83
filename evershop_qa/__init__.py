"""Configuration, logging and test data for the Evershop admin UI suite."""

from .config import ConfigResolver, DefaultUser, EnvironmentProfile
from .context import SuiteContext, build_suite_context
from .exceptions import (
    ConfigError,
    LoggerConfigError,
    OverrideDecodeError,
    ProfileParseError,
    SuiteError,
    UnknownEnvironmentError,
)
from .factories import TestUser, UserType, get_user
from .logging_utils import ContextLogger, LoggerConfig, SuiteLogger
from .settings import BrowserSettings

__all__ = [
    "BrowserSettings",
    "ConfigError",
    "ConfigResolver",
    "ContextLogger",
    "DefaultUser",
    "EnvironmentProfile",
    "LoggerConfig",
    "LoggerConfigError",
    "OverrideDecodeError",
    "ProfileParseError",
    "SuiteContext",
    "SuiteError",
    "SuiteLogger",
    "TestUser",
    "UnknownEnvironmentError",
    "UserType",
    "build_suite_context",
    "get_user",
]
