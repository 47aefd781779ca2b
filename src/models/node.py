from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from src.models.record import FlatRecord, Flags


@dataclass(slots=True)
class OutlineNode:
    """Represents one outline entry reconstructed from the flat record stream."""

    text: str
    note: Optional[str] = None
    collapsed: bool = False
    flags: Flags = field(default_factory=Flags)
    synthetic: bool = False
    children: List["OutlineNode"] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: FlatRecord) -> "OutlineNode":
        return cls(
            text=record.text,
            note=record.note,
            collapsed=record.collapsed,
            flags=record.flags,
        )

    @classmethod
    def filler(cls) -> "OutlineNode":
        """Placeholder bridging a depth jump of more than one level."""

        return cls(text="", synthetic=True)

    def add_child(self, child: "OutlineNode") -> int:
        """Attach a child and return its index among the children."""

        self.children.append(child)
        return len(self.children) - 1


__all__ = ["OutlineNode"]
