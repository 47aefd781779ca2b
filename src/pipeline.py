from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Sequence

from src.analysis.validator import Diagnostic, OutlineValidator
from src.codec.decoder import OutlineDecoder
from src.codec.encoder import OutlineEncoder
from src.codec.errors import DecodeError
from src.models.configs import ToolConfig
from src.models.node import OutlineNode
from src.models.record import FlatRecord
from src.render.tree_text import PlainRenderer
from src.tree.builder import OutlineTreeBuilder
from src.tree.walk import walk_real


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RoundTripResult:
    """Outcome of encoding a forest and decoding it again."""

    ok: bool
    encoded_size: int
    expected: str
    actual: str
    error: Optional[str] = None


@dataclass(slots=True)
class PipelineResult:
    """Everything produced from one decoded document."""

    records: List[FlatRecord]
    forest: List[OutlineNode]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    round_trip: Optional[RoundTripResult] = None


class OutlinePipeline:
    """Coordinates decoding, validation, tree building and the round-trip self-test."""

    def __init__(
        self,
        config: ToolConfig | None = None,
        *,
        decoder: Optional[OutlineDecoder] = None,
        encoder: Optional[OutlineEncoder] = None,
        validator: Optional[OutlineValidator] = None,
        builder: Optional[OutlineTreeBuilder] = None,
    ) -> None:
        self.config = config or ToolConfig()
        self.decoder = decoder or OutlineDecoder(self.config.decoder_config())
        self.encoder = encoder or OutlineEncoder(self.config.encoder_config())
        self.validator = validator or OutlineValidator(self.config.validator_config())
        self.builder = builder or OutlineTreeBuilder()

    def process(self, data: bytes, *, validate: bool = False) -> PipelineResult:
        records = self.decoder.decode(data)
        diagnostics: List[Diagnostic] = []
        if validate:
            diagnostics = self.validator.validate(records)
            if diagnostics:
                logger.info("validator reported %d findings", len(diagnostics))

        forest = self.builder.build(records)
        result = PipelineResult(records=records, forest=forest, diagnostics=diagnostics)
        if self.config.self_test:
            result.round_trip = self.self_test(forest)
        return result

    def process_path(self, path: Path, *, validate: bool = False) -> PipelineResult:
        return self.process(path.read_bytes(), validate=validate)

    def self_test(self, forest: Sequence[OutlineNode]) -> RoundTripResult:
        """Encode, decode and rebuild; the plain rendering must come back unchanged.

        A re-encoded buffer that fails to decode is reported as a failed round
        trip with ``error`` set.
        """

        renderer = PlainRenderer()
        expected = renderer.render(forest)
        encoded = self.encoder.encode(forest)
        try:
            records = self._round_trip_decoder(forest).decode(encoded)
        except DecodeError as exc:
            logger.error("round trip could not decode %d re-encoded bytes: %s", len(encoded), exc)
            return RoundTripResult(ok=False, encoded_size=len(encoded), expected=expected, actual="", error=str(exc))
        actual = renderer.render(self.builder.build(records))

        ok = expected == actual
        if ok:
            logger.debug("round trip ok (%d bytes)", len(encoded))
        else:
            logger.error("round trip mismatch after re-encoding %d bytes", len(encoded))
        return RoundTripResult(ok=ok, encoded_size=len(encoded), expected=expected, actual=actual)

    def _round_trip_decoder(self, forest: Sequence[OutlineNode]) -> OutlineDecoder:
        # A heading byte with the high bit set decodes to two characters, and
        # the encoder writes one byte per character.
        longest = max((len(node.text) for node, _ in walk_real(forest)), default=0)
        if longest <= self.decoder.config.max_heading_length:
            return self.decoder
        return OutlineDecoder(replace(self.decoder.config, max_heading_length=longest))


__all__ = ["OutlinePipeline", "PipelineResult", "RoundTripResult"]
