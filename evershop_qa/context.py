"""Explicit suite context shared by fixtures and page objects."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import MutableMapping

from .config import ConfigResolver, EnvironmentProfile
from .logging_utils import SuiteLogger
from .settings import BrowserSettings


@dataclass
class SuiteContext:
    logger: SuiteLogger
    settings: BrowserSettings
    resolver: ConfigResolver
    profile: EnvironmentProfile

    def close(self) -> None:
        self.logger.close()


def build_suite_context(
    environ: MutableMapping[str, str] | None = None,
    working_dir: Path | None = None,
    **logger_kwargs,
) -> SuiteContext:
    """Build the logger, settings and resolved profile for one session."""
    env = os.environ if environ is None else environ
    suite_logger = SuiteLogger.from_env(env, **logger_kwargs)
    resolver = ConfigResolver(
        suite_logger.create_workflow_logger("config"),
        working_dir=working_dir,
        environ=env,
    )
    return SuiteContext(
        logger=suite_logger,
        settings=BrowserSettings.from_env(env),
        resolver=resolver,
        profile=resolver.resolve(),
    )
