from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence

from src.models.node import OutlineNode
from src.models.record import FlatRecord


@dataclass(slots=True)
class RenderConfig:
    """Options shared by the text renderers."""

    show_selection: bool = False


class RecordRenderer(ABC):
    """Renders the flat record sequence directly, in file order."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    @abstractmethod
    def render(self, records: Sequence[FlatRecord]) -> str:
        """Return the rendered text, one newline-terminated line per output line."""


class TreeRenderer(ABC):
    """Renders a forest built by the tree builder."""

    def __init__(self, config: RenderConfig | None = None) -> None:
        self.config = config or RenderConfig()

    @abstractmethod
    def render(self, forest: Sequence[OutlineNode]) -> str:
        """Return the rendered text for every root in the forest."""


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


def note_lines(note: str) -> List[str]:
    """Split a note into display lines; a trailing line break adds no empty line."""

    lines = normalize_newlines(note).split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return lines


__all__ = [
    "RecordRenderer",
    "RenderConfig",
    "TreeRenderer",
    "normalize_newlines",
    "note_lines",
]
