"""Error taxonomy for the Evershop admin test suite."""

from __future__ import annotations


class SuiteError(Exception):
    """Base class for errors raised by the suite's own code."""


class ConfigError(SuiteError):
    """Environment configuration could not be resolved."""


class UnknownEnvironmentError(ConfigError):
    """APP_ENV names a tag outside dev|qa|stage, or one whose profile file is missing."""

    def __init__(self, env_name: str, valid: tuple[str, ...]) -> None:
        self.env_name = env_name
        self.valid = valid
        super().__init__(f"Unknown environment '{env_name}' (expected {'|'.join(valid)})")


class ProfileParseError(ConfigError):
    """A profile file exists but is not a usable profile."""


class OverrideDecodeError(ConfigError):
    """APP_PW is not valid base64-encoded UTF-8."""


class LoggerConfigError(SuiteError):
    """A logging variable holds an unsupported value."""
