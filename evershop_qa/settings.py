"""Browser and run settings for the e2e layer."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import MutableMapping

LOCAL_BROWSERS = ("chromium",)
CI_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass(frozen=True)
class BrowserSettings:
    ci: bool = False
    headless: bool = True
    browsers: tuple[str, ...] = LOCAL_BROWSERS
    navigation_timeout_ms: float = 60_000
    action_timeout_ms: float = 15_000
    expect_timeout_ms: float = 60_000
    viewport: dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    output_dir: Path = Path("reports/test-results")
    record_trace: bool = True
    record_video: bool = True
    screenshot_on_failure: bool = True

    @classmethod
    def from_env(cls, environ: MutableMapping[str, str] | None = None) -> "BrowserSettings":
        env = os.environ if environ is None else environ
        ci = bool(env.get("CI"))
        return cls(
            ci=ci,
            headless=env.get("HEADLESS", "true").lower() == "true",
            browsers=CI_BROWSERS if ci else LOCAL_BROWSERS,
        )

    def artifact_dir(self, test_name: str) -> Path:
        """Per-test directory for traces, videos and failure screenshots."""
        safe = "".join(ch if ch.isalnum() or ch in "-_." else "_" for ch in test_name)
        return self.output_dir / safe
