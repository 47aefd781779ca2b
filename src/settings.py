from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from src.models.configs import DEFAULT_MAX_HEADING_LENGTH, NoteEncoding, ToolConfig

load_dotenv(override=False)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() not in {"", "0", "false", "no", "off"}


class Settings(BaseModel):
    """Defaults taken from the environment (and a local .env file)."""

    note_encoding: NoteEncoding = Field(
        default_factory=lambda: os.getenv("OTL_NOTE_ENCODING", NoteEncoding.LATIN1.value)
    )
    max_heading_length: int = Field(
        default_factory=lambda: int(os.getenv("OTL_MAX_HEADING_LENGTH", str(DEFAULT_MAX_HEADING_LENGTH)))
    )
    show_selection: bool = Field(default_factory=lambda: _env_flag("OTL_SHOW_SELECTION"))
    child_hypothesis: bool = Field(default_factory=lambda: _env_flag("OTL_CHILD_HYPOTHESIS"))
    config_path: Path | None = Field(
        default_factory=lambda: Path(os.environ["OTL_CONFIG"]) if os.getenv("OTL_CONFIG") else None
    )

    model_config = {
        "frozen": True,
        "validate_default": True,
    }

    @field_validator("note_encoding", mode="before")
    @classmethod
    def _normalize_encoding(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower().replace("-", "")
        return value

    @field_validator("max_heading_length")
    @classmethod
    def _positive_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("OTL_MAX_HEADING_LENGTH must be a positive integer.")
        return value

    def to_tool_config(self) -> ToolConfig:
        return ToolConfig(
            note_encoding=self.note_encoding,
            max_heading_length=self.max_heading_length,
            show_selection=self.show_selection,
            child_hypothesis=self.child_hypothesis,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
