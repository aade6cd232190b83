"""Suite logging built on Loguru.

One ``SuiteLogger`` is constructed per test session and handed to every
consumer through the suite context.  It owns the Loguru sinks (pretty
console, serialized JSON file) and produces ``ContextLogger`` children that
carry a fixed ``{layer, name}`` tag.  Each section (test, page, workflow,
component) may override the global minimum level through its own variable.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, MutableMapping

from loguru import logger as loguru_logger

from .exceptions import LoggerConfigError

LEVELS = {
    "trace": "TRACE",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
}

SECTION_VARIABLES = {
    "test": "LOG_LEVEL_TEST",
    "page": "LOG_LEVEL_PAGE",
    "workflow": "LOG_LEVEL_WORKFLOW",
    "component": "LOG_LEVEL_COMPONENT",
}

LOG_FILE_PREFIX = "evershop-test-exec"
LOGURU_DEFAULT_HANDLER_ID = 0


def _check_level(level: str, variable: str) -> str:
    level = level.strip().lower()
    if level not in LEVELS:
        raise LoggerConfigError(
            f"{variable}={level!r} is not a log level (expected {'|'.join(LEVELS)})"
        )
    return level


@dataclass(frozen=True)
class LoggerConfig:
    console_logging: bool = True
    file_logging: bool = False
    log_level: str = "info"
    log_directory: Path = Path("./logs")
    section_levels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: MutableMapping[str, str] | None = None) -> "LoggerConfig":
        """Read the logging variables, falling back to the defaults above."""
        env = os.environ if environ is None else environ
        sections = {
            section: _check_level(env[variable], variable)
            for section, variable in SECTION_VARIABLES.items()
            if env.get(variable)
        }
        return cls(
            console_logging=env.get("CONSOLE_LOGGING") != "false",
            file_logging=env.get("FILE_LOGGING") == "true",
            log_level=_check_level(env.get("LOG_LEVEL") or "info", "LOG_LEVEL"),
            log_directory=Path(env.get("LOG_DIRECTORY") or "./logs"),
            section_levels=sections,
        )


def _level_no(level: str) -> int:
    return loguru_logger.level(LEVELS[level]).no


def _console_format(record: dict) -> str:
    fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{extra[layer]}</cyan>"
    if record["extra"].get("name"):
        fmt += "<cyan>:{extra[name]}</cyan>"
    fmt += " - <level>{message}</level>"
    if record["extra"].get("data") is not None:
        fmt += " {extra[data]}"
    return fmt + "\n{exception}"


class ContextLogger:
    """Leveled logging facade bound to one layer of the suite."""

    def __init__(self, bound: Any, level: str) -> None:
        self._logger = bound
        self.level = level

    def _emit(self, level: str, message: str, data: Any = None) -> None:
        target = self._logger.opt(depth=2)
        if isinstance(data, BaseException):
            target = self._logger.opt(depth=2, exception=data)
        elif data is not None:
            target = self._logger.bind(data=data).opt(depth=2)
        target.log(LEVELS[level], message)

    def trace(self, message: str, data: Any = None) -> None:
        self._emit("trace", message, data)

    def debug(self, message: str, data: Any = None) -> None:
        self._emit("debug", message, data)

    def info(self, message: str, data: Any = None) -> None:
        self._emit("info", message, data)

    def warn(self, message: str, data: Any = None) -> None:
        self._emit("warn", message, data)

    def error(self, message: str, data: Any = None) -> None:
        self._emit("error", message, data)

    def fatal(self, message: str, data: Any = None) -> None:
        self._emit("fatal", message, data)


class InterceptHandler(logging.Handler):
    """Route stdlib logging records into the Loguru sinks."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        loguru_logger.bind(layer="stdlib", name=record.name).log(level, record.getMessage())


class SuiteLogger(ContextLogger):
    """Process-wide logger for one test session.

    Sinks are installed once at construction.  Flipping file logging later
    only changes the ``FILE_LOGGING`` variable; the running sinks stay as
    they are until a new ``SuiteLogger`` is built.  Several loggers may be
    open at once; each one only removes the sinks it added.
    """

    _default_handler_removed = False

    def __init__(
        self,
        config: LoggerConfig,
        *,
        environ: MutableMapping[str, str] | None = None,
        console_sink: Any = None,
    ) -> None:
        self.config = config
        self._environ = os.environ if environ is None else environ
        self._min_level_no = _level_no(config.log_level)
        self._handler_ids: list[int] = []
        self.log_file: Path | None = None

        if not SuiteLogger._default_handler_removed:
            with contextlib.suppress(ValueError):
                loguru_logger.remove(LOGURU_DEFAULT_HANDLER_ID)
            SuiteLogger._default_handler_removed = True
        loguru_logger.configure(extra={"layer": "suite", "name": "", "data": None})
        console = console_sink if console_sink is not None else sys.stderr

        if config.console_logging:
            self._handler_ids.append(
                loguru_logger.add(
                    console, level="TRACE", format=_console_format, filter=self._passes_level
                )
            )
        if config.file_logging:
            config.log_directory.mkdir(parents=True, exist_ok=True)
            self.log_file = config.log_directory / f"{LOG_FILE_PREFIX}-{date.today().isoformat()}.log"
            self._handler_ids.append(
                loguru_logger.add(
                    str(self.log_file),
                    level="TRACE",
                    filter=self._passes_level,
                    serialize=True,
                    encoding="utf-8",
                )
            )
        if not self._handler_ids:
            self._handler_ids.append(
                loguru_logger.add(console, level="ERROR", format=_console_format)
            )

        logging.basicConfig(
            handlers=[InterceptHandler()],
            level=getattr(logging, LEVELS[config.log_level], logging.INFO),
            force=True,
        )
        super().__init__(loguru_logger.bind(layer="suite", name=""), config.log_level)

    @classmethod
    def from_env(
        cls, environ: MutableMapping[str, str] | None = None, **kwargs: Any
    ) -> "SuiteLogger":
        return cls(LoggerConfig.from_env(environ), environ=environ, **kwargs)

    def _passes_level(self, record: dict) -> bool:
        return record["level"].no >= record["extra"].get("min_level_no", self._min_level_no)

    def _child(self, section: str, layer: str, name: str) -> ContextLogger:
        level = self.config.section_levels.get(section)
        context: dict[str, Any] = {"layer": layer, "name": name}
        if level:
            context["min_level_no"] = _level_no(level)
        return ContextLogger(loguru_logger.bind(**context), level or self.config.log_level)

    def create_test_logger(self, test_name: str) -> ContextLogger:
        return self._child("test", "test", test_name)

    def create_page_logger(self, page_name: str) -> ContextLogger:
        return self._child("page", "page-object", page_name)

    def create_workflow_logger(self, workflow_name: str) -> ContextLogger:
        return self._child("workflow", "workflow", workflow_name)

    def create_component_logger(self, component_name: str) -> ContextLogger:
        return self._child("component", "component", component_name)

    def enable_file_logging(self) -> None:
        self._environ["FILE_LOGGING"] = "true"
        self.info("File logging enabled. Restart the test run for it to take effect.")

    def disable_file_logging(self) -> None:
        self._environ["FILE_LOGGING"] = "false"
        self.info("File logging disabled. Restart the test run for it to take effect.")

    def close(self) -> None:
        """Remove the sinks this logger installed."""
        for handler_id in self._handler_ids:
            # Already gone when something else reset Loguru.
            with contextlib.suppress(ValueError):
                loguru_logger.remove(handler_id)
        self._handler_ids.clear()
