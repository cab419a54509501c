"""Per-project configuration and environment-based runtime settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_settings import BaseSettings

from context_architect.constants import (
    CONFIG_FILENAME,
    DEFAULT_CONTEXT_FILE,
    DEFAULT_PROBE_BATCH_SIZE,
    DEFAULT_PROBE_MODEL,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and CONTEXT_ARCHITECT_* environment variables."""

    # Logging
    log_level: str = "WARNING"

    # Knowledge probe
    probe_batch_size: int = DEFAULT_PROBE_BATCH_SIZE

    @field_validator("log_level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator("probe_batch_size")
    @classmethod
    def _validate_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("probe_batch_size must be at least 1")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CONTEXT_ARCHITECT_",
        "extra": "ignore",
    }


class ProjectConfig(BaseModel):
    """Contents of ``.context-architect.json`` with defaults applied.

    Each field is validated on its own: a malformed value falls back to
    that field's default without discarding the rest of the file.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    context_files: tuple[str, ...] = (DEFAULT_CONTEXT_FILE,)
    reference_docs: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()
    probe_model: str = DEFAULT_PROBE_MODEL

    @field_validator(
        "context_files",
        "reference_docs",
        "ignore",
        "probe_model",
        mode="wrap",
    )
    @classmethod
    def _fallback_to_default(
        cls,
        value: Any,
        handler: ValidatorFunctionWrapHandler,
        info: ValidationInfo,
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            name = info.field_name or ""
            logger.debug(
                "Invalid %r in %s; using default", name, CONFIG_FILENAME
            )
            return cls.model_fields[name].default


def load_config(root: Path | str) -> ProjectConfig:
    """Load ``.context-architect.json`` from ``root``.

    Best-effort: a missing or unreadable file, invalid JSON, or a
    top-level value that is not an object all yield the defaults.
    """
    config_path = Path(os.path.abspath(root)) / CONFIG_FILENAME
    try:
        raw = config_path.read_bytes()
    except OSError:
        logger.debug("No readable %s at %s", CONFIG_FILENAME, config_path)
        return ProjectConfig()

    try:
        return ProjectConfig.model_validate_json(raw)
    except ValidationError as exc:
        logger.debug(
            "Ignoring malformed %s: %d error(s)",
            config_path,
            exc.error_count(),
        )
        return ProjectConfig()


def resolve_context_file(
    root: Path | str,
    cli_override: str | None,
    config: ProjectConfig,
) -> Path:
    """Resolve the primary context file path.

    Priority: CLI override > ``config.context_files[0]`` > ``CLAUDE.md``.
    The result is absolute and normalized; symlinks are left alone.
    """
    name = (
        cli_override
        or (config.context_files[0] if config.context_files else "")
        or DEFAULT_CONTEXT_FILE
    )
    return absolute_path(root, name)


def absolute_path(root: Path | str, relative: str) -> Path:
    """Join ``relative`` onto ``root`` and normalize to an absolute path."""
    return Path(os.path.abspath(os.path.join(root, relative)))
