"""Root conftest: shared fixtures available to all test layers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from evershop_qa.logging_utils import LoggerConfig, SuiteLogger

PROFILES = {
    "dev": {
        "name": "dev",
        "baseUrl": "http://localhost:3000/admin",
        "defaultUser": {"username": "admin", "email": "admin@dev.test", "password": "dev-pass"},
        "apiBaseUrl": "http://localhost:3000/api",
    },
    "qa": {
        "name": "qa",
        "baseUrl": "https://qa.example.com",
        "defaultUser": {"username": "qa-admin", "email": "admin@qa.test", "password": "qa-pass"},
    },
    "stage": {
        "name": "stage",
        "baseUrl": "https://stage.example.com",
        "defaultUser": {"email": "admin@stage.test", "password": "stage-pass"},
    },
}



@pytest.fixture()
def profile_dir(tmp_path: Path) -> Path:
    """Write one profile file per environment tag."""
    directory = tmp_path / "environments"
    directory.mkdir()
    for tag, data in PROFILES.items():
        (directory / f"app_env.{tag}.json").write_text(json.dumps(data), encoding="utf-8")
    return directory


@pytest.fixture()
def workdir(tmp_path: Path) -> Path:
    """Empty working directory with no .env files."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture()
def log_records():
    """Capture formatted console output of a SuiteLogger."""
    return []


@pytest.fixture()
def suite_logger(log_records):
    """SuiteLogger at trace level writing into ``log_records``."""
    logger = SuiteLogger(
        LoggerConfig(log_level="trace"), environ={}, console_sink=log_records.append
    )
    yield logger
    logger.close()
