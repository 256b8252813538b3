"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode

from remarkscope.constants import DEFAULT_LOAD_CONCURRENCY
from remarkscope.remarks.schemas import LoadOptions

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and REMARKSCOPE_* environment variables."""

    # Acceptance policy
    source_dir: Path = Path(".")
    include_external: bool = False
    excluded_names: Annotated[list[str], NoDecode] = []
    toolchain_source_root: Path | None = None

    # Loading
    load_max_concurrency: int = Field(
        default=DEFAULT_LOAD_CONCURRENCY, ge=1
    )

    # Logging
    log_level: str = "INFO"

    @field_validator("excluded_names", mode="before")
    @classmethod
    def _parse_names(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("excluded_names")
    @classmethod
    def _warn_duplicates(cls, v: list[str]) -> list[str]:
        seen: set[str] = set()
        dupes: list[str] = []
        for name in v:
            if name in seen:
                dupes.append(name)
            seen.add(name)
        if dupes:
            logger.warning(
                "Duplicate names in REMARKSCOPE_EXCLUDED_NAMES: %s",
                ", ".join(dupes),
            )
        return v

    def load_options(self) -> LoadOptions:
        """Freeze the acceptance policy for one load."""
        return LoadOptions(
            include_external=self.include_external,
            source_dir=self.source_dir,
            excluded_names=frozenset(self.excluded_names),
            toolchain_source_root=self.toolchain_source_root,
        )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "REMARKSCOPE_",
        "extra": "ignore",
    }
