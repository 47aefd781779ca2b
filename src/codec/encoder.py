from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import List, Sequence

from src.codec.errors import EncodeError
from src.codec.text import encode_heading, encode_note
from src.models.configs import NoteEncoding
from src.models.node import OutlineNode
from src.models.record import (
    ATTR_NEXT_SIBLING,
    ATTR_NOTE,
    ATTR_SELECTED,
    END_RUN,
    MAGIC,
    MARKER_COLLAPSED,
    MARKER_EXPANDED,
    PREAMBLE,
    TERMINATOR,
)
from src.tree.walk import next_sibling_flags, walk_real


logger = logging.getLogger(__name__)

_DELTA = struct.Struct("<h")
_NOTE_LENGTH = struct.Struct("<H")
_MAX_NOTE_LENGTH = 0xFFFF


@dataclass(slots=True)
class EncoderConfig:
    """Configuration for serializing an outline forest to OTL bytes."""

    note_encoding: NoteEncoding = NoteEncoding.LATIN1


class OutlineEncoder:
    """Serialize a forest back into the binary layout the decoder reads."""

    def __init__(self, config: EncoderConfig | None = None) -> None:
        self.config = config or EncoderConfig()

    def encode(self, forest: Sequence[OutlineNode]) -> bytes:
        entries = list(walk_real(forest))
        siblings = next_sibling_flags([depth for _, depth in entries])

        out = bytearray(MAGIC + PREAMBLE)
        previous = 0
        for (node, depth), has_next_sibling in zip(entries, siblings):
            out += self._encode_node(node, depth - previous, has_next_sibling)
            previous = depth
        out += END_RUN

        logger.debug("encoded %d records into %d bytes", len(entries), len(out))
        return bytes(out)

    def _encode_node(self, node: OutlineNode, delta: int, has_next_sibling: bool) -> bytes:
        attr = 0
        note_bytes = None
        if node.note is not None:
            attr |= ATTR_NOTE
            note_bytes = encode_note(node.note, self.config.note_encoding)
            if len(note_bytes) > _MAX_NOTE_LENGTH:
                raise EncodeError(
                    f"note of {node.text!r} is {len(note_bytes)} bytes; the format allows {_MAX_NOTE_LENGTH}"
                )
        if node.flags.selected:
            attr |= ATTR_SELECTED
        if has_next_sibling:
            attr |= ATTR_NEXT_SIBLING

        marker = MARKER_COLLAPSED if node.collapsed else MARKER_EXPANDED
        parts: List[bytes] = [
            encode_heading(node.text),
            bytes([TERMINATOR, attr, marker, TERMINATOR]),
            _DELTA.pack(delta),
        ]
        if note_bytes is not None:
            parts.append(_NOTE_LENGTH.pack(len(note_bytes)))
            parts.append(note_bytes)
        return b"".join(parts)


def encode_forest(
    forest: Sequence[OutlineNode],
    note_encoding: NoteEncoding = NoteEncoding.LATIN1,
) -> bytes:
    return OutlineEncoder(EncoderConfig(note_encoding=note_encoding)).encode(forest)


__all__ = ["EncoderConfig", "OutlineEncoder", "encode_forest"]
