"""Environment-aware configuration for the Evershop admin suite.

Profiles live in ``environments/app_env.<tag>.json``; ``APP_ENV`` picks the
tag (``qa`` when unset).  Local overrides come from process variables, which
may be seeded from ``.env.local`` (or ``.env``) in the working directory:

    APP_ENV=stage pytest -m e2e      # uses app_env.stage.json
    APP_URL=http://localhost:3000/admin APP_EMAIL=me@x.com APP_PW=<base64> pytest -m e2e

Credentials are all-or-nothing: ``APP_EMAIL`` and ``APP_PW`` must both be
set to replace the profile's default user.
"""

from __future__ import annotations

import base64
import binascii
import dataclasses
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, MutableMapping

from dotenv import dotenv_values

from .exceptions import OverrideDecodeError, ProfileParseError, UnknownEnvironmentError
from .logging_utils import ContextLogger

VALID_ENVIRONMENTS = ("dev", "qa", "stage")
DEFAULT_ENVIRONMENT = "qa"
PROFILE_DIR = Path(__file__).parent / "environments"
LOCAL_ENV_FILE = ".env.local"
DEFAULT_ENV_FILE = ".env"


@dataclass(frozen=True)
class DefaultUser:
    email: str
    password: str = field(repr=False)
    username: str | None = None


@dataclass(frozen=True)
class EnvironmentProfile:
    name: str
    base_url: str
    default_user: DefaultUser
    api_base_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EnvironmentProfile":
        """Build a profile from the camelCase JSON layout of a profile file."""
        try:
            user = data["defaultUser"]
            profile = cls(
                name=data["name"],
                base_url=data["baseUrl"],
                default_user=DefaultUser(
                    email=user["email"],
                    password=user["password"],
                    username=user.get("username"),
                ),
                api_base_url=data.get("apiBaseUrl"),
            )
        except (KeyError, TypeError) as exc:
            raise ProfileParseError(f"Profile is missing a required field: {exc}") from exc

        if not (profile.base_url and profile.default_user.email and profile.default_user.password):
            raise ProfileParseError(
                f"Profile '{profile.name}' needs a non-empty baseUrl, email and password"
            )
        return profile


def decode_password(encoded: str) -> str:
    """Decode a base64-encoded APP_PW value."""
    try:
        return base64.b64decode(encoded).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise OverrideDecodeError("APP_PW is not base64-encoded UTF-8") from exc


class ConfigResolver:
    """Resolve the active ``EnvironmentProfile``.

    With ``enable_cache`` the first resolved profile is kept on the resolver
    and returned on every later call.  Without it each call re-reads the
    profile file.  First access is not guarded against concurrent callers.
    """

    def __init__(
        self,
        log: ContextLogger,
        *,
        profile_dir: Path = PROFILE_DIR,
        working_dir: Path | None = None,
        environ: MutableMapping[str, str] | None = None,
        enable_cache: bool = True,
    ) -> None:
        self.log = log
        self.profile_dir = Path(profile_dir)
        self.working_dir = Path.cwd() if working_dir is None else Path(working_dir)
        self.environ = os.environ if environ is None else environ
        self.enable_cache = enable_cache
        self._cached: EnvironmentProfile | None = None

    def resolve(self) -> EnvironmentProfile:
        if not self.enable_cache:
            return self._load()
        if self._cached is None:
            self._cached = self._load()
        return self._cached

    def profile_path(self, env_name: str) -> Path:
        return self.profile_dir / f"app_env.{env_name}.json"

    def _load(self) -> EnvironmentProfile:
        env_name = self.environ.get("APP_ENV") or DEFAULT_ENVIRONMENT
        profile = self._read_profile(env_name)
        self._load_env_files()
        profile = self._apply_overrides(profile)

        self.log.info(f"Environment: {profile.name}")
        self.log.info(f"Base URL: {profile.base_url}")
        if profile.api_base_url:
            self.log.info(f"API Base URL: {profile.api_base_url}")
        return profile

    def _read_profile(self, env_name: str) -> EnvironmentProfile:
        path = self.profile_path(env_name)
        if env_name not in VALID_ENVIRONMENTS or not path.is_file():
            raise UnknownEnvironmentError(env_name, VALID_ENVIRONMENTS)

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ProfileParseError(f"Cannot parse {path}: {exc}") from exc
        return EnvironmentProfile.from_dict(data)

    def _load_env_files(self) -> None:
        """Seed unset variables from .env.local, or from .env when it is absent."""
        local_env = self.working_dir / LOCAL_ENV_FILE
        if local_env.is_file():
            self.log.info(f"Loading local environment from {local_env}")
            env_file = local_env
        else:
            env_file = self.working_dir / DEFAULT_ENV_FILE
            if not env_file.is_file():
                return

        for key, value in dotenv_values(env_file).items():
            if value is not None and key not in self.environ:
                self.environ[key] = value

    def _apply_overrides(self, profile: EnvironmentProfile) -> EnvironmentProfile:
        url = self.environ.get("APP_URL")
        if url:
            profile = dataclasses.replace(profile, base_url=url)

        email = self.environ.get("APP_EMAIL")
        encoded_password = self.environ.get("APP_PW")
        if email and encoded_password:
            # Replaces the whole user, so a profile username does not survive.
            profile = dataclasses.replace(
                profile,
                default_user=DefaultUser(email=email, password=decode_password(encoded_password)),
            )
        return profile
