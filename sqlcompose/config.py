"""Builder configuration loaded from environment variables."""

from __future__ import annotations

import logging
import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._types import DEFAULT_INDENT, Dialect

logger = logging.getLogger(__name__)

_LABEL_PREFIX_RE = re.compile(r"^[A-Za-z0-9_]*$")


class Settings(BaseSettings):
    """Settings loaded from environment variables with the SQLCOMPOSE_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="SQLCOMPOSE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False

    # Dialect picked by get_driver() when no name is given
    default_dialect: str = Dialect.POSTGRESQL.value

    # Rendering
    indent_width: int = DEFAULT_INDENT
    quoting_enabled: bool = True

    # Binding labels are rendered as :_<prefix><n>_
    label_prefix: str = "b"

    @field_validator("indent_width")
    @classmethod
    def _non_negative_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("indent_width must be >= 0")
        return v

    @field_validator("label_prefix")
    @classmethod
    def _label_safe_prefix(cls, v: str) -> str:
        # Labels must survive the quoting tokenizer: no spaces, no quotes.
        if not _LABEL_PREFIX_RE.match(v):
            raise ValueError("label_prefix may only contain letters, digits and underscores")
        return v


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info(
            "Loaded sqlcompose settings: dialect=%s indent=%d quoting=%s",
            settings.default_dialect,
            settings.indent_width,
            settings.quoting_enabled,
        )

    return settings
