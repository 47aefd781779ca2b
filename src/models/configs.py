from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from src.analysis.validator import ValidatorConfig
    from src.codec.decoder import DecoderConfig
    from src.codec.encoder import EncoderConfig
    from src.render.base import RenderConfig


DEFAULT_MAX_HEADING_LENGTH = 4096


class NoteEncoding(str, Enum):
    UTF8 = "utf8"
    LATIN1 = "latin1"
    ASCII = "ascii"


class ToolConfig(BaseModel):
    """User-facing knobs, loaded from the environment or a config file."""

    note_encoding: NoteEncoding = NoteEncoding.LATIN1
    max_heading_length: int = Field(default=DEFAULT_MAX_HEADING_LENGTH, gt=0)
    show_selection: bool = False
    child_hypothesis: bool = Field(
        default=False,
        description="Check the unconfirmed 0x04 has-child bit hypothesis",
    )
    self_test: bool = False

    model_config = {
        "frozen": True,
        "extra": "forbid",
    }

    def decoder_config(self) -> "DecoderConfig":
        from src.codec.decoder import DecoderConfig

        return DecoderConfig(
            note_encoding=self.note_encoding,
            max_heading_length=self.max_heading_length,
        )

    def encoder_config(self) -> "EncoderConfig":
        from src.codec.encoder import EncoderConfig

        return EncoderConfig(note_encoding=self.note_encoding)

    def validator_config(self) -> "ValidatorConfig":
        from src.analysis.validator import ValidatorConfig

        return ValidatorConfig(child_hypothesis=self.child_hypothesis)

    def render_config(self) -> "RenderConfig":
        from src.render.base import RenderConfig

        return RenderConfig(show_selection=self.show_selection)


__all__ = [
    "DEFAULT_MAX_HEADING_LENGTH",
    "NoteEncoding",
    "ToolConfig",
]
