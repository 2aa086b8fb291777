"""Docblock configuration via pydantic-settings (.env + DOCBLOCK_* env vars)."""

import re
import sys
from pathlib import Path

from loguru import logger
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import DEFAULT_FILE_PATTERN, DEFAULT_ROOT_DIR, DefaultStyle


class DocblockConfig(BaseSettings):
    """All configuration with layered resolution:
    .env file < environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DOCBLOCK_",
        extra="ignore",
    )

    # -- Traversal --
    root_dir: Path = Path(DEFAULT_ROOT_DIR)
    file_pattern: str = DEFAULT_FILE_PATTERN

    # -- Synthesis --
    default_style: DefaultStyle = DefaultStyle.SOURCE

    # -- Behavior --
    verbose: bool = False
    log_level: str = "INFO"
    log_file: Path | None = None

    @field_validator("file_pattern")
    @classmethod
    def _check_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid file pattern {value!r}: {e}") from e
        return value

    @property
    def file_regex(self) -> re.Pattern[str]:
        """Compiled, case-insensitive file name pattern."""
        return re.compile(self.file_pattern, re.IGNORECASE)

    def setup_logging(self) -> None:
        """Configure loguru for the tool."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<8} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        level = "DEBUG" if self.verbose else self.log_level.upper()
        logger.add(
            sys.stderr,
            format=log_format,
            level=level,
            filter=_default_extra,
        )

        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            logger.add(
                str(self.log_file),
                format=log_format,
                level="DEBUG",
                rotation="10 MB",
                retention="30 days",
                filter=_default_extra,
            )
