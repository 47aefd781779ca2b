from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from src.models.record import FlatRecord, record_depths
from src.tree.walk import child_follows_flags, next_sibling_flags


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidatorConfig:
    """Which structural hypotheses to check."""

    child_hypothesis: bool = False


@dataclass(slots=True)
class Diagnostic:
    """Advisory finding about a record's attribute bits."""

    code: str
    message: str
    indices: List[int] = field(default_factory=list)

    def __str__(self) -> str:
        return f"warning[{self.code}]: {self.message}"


class OutlineValidator:
    """Compare attribute bits against structure recomputed from the depth deltas.

    Findings never abort anything; they exist to confirm or falsify what the
    bits are believed to mean.
    """

    def __init__(self, config: ValidatorConfig | None = None) -> None:
        self.config = config or ValidatorConfig()

    def validate(self, records: Sequence[FlatRecord]) -> List[Diagnostic]:
        depths = record_depths(records)
        diagnostics: List[Diagnostic] = []

        for index, (record, expected) in enumerate(zip(records, next_sibling_flags(depths))):
            actual = record.flags.has_next_sibling
            if actual != expected:
                diagnostics.append(
                    Diagnostic(
                        code="next-sibling",
                        message=f"record {index} {record.text!r}: next-sibling bit is {actual}, structure says {expected}",
                        indices=[index],
                    )
                )

        if self.config.child_hypothesis:
            for index, (record, expected) in enumerate(zip(records, child_follows_flags(depths))):
                actual = record.flags.has_child
                if actual != expected:
                    diagnostics.append(
                        Diagnostic(
                            code="has-child",
                            message=f"record {index} {record.text!r}: bit 0x04 is {actual}, child follows is {expected}",
                            indices=[index],
                        )
                    )

        for index, record in enumerate(records):
            unknown = record.unknown_bits
            if unknown:
                diagnostics.append(
                    Diagnostic(
                        code="unknown-bits",
                        message=f"record {index} {record.text!r}: unknown attribute bits 0x{unknown:02x} (attr=0x{record.attr:02x})",
                        indices=[index],
                    )
                )

        selected = [index for index, record in enumerate(records) if record.flags.selected]
        if len(selected) > 1:
            diagnostics.append(
                Diagnostic(
                    code="multiple-selected",
                    message=f"{len(selected)} records have the selection bit: {', '.join(map(str, selected))}",
                    indices=selected,
                )
            )

        logger.debug("validated %d records, %d findings", len(records), len(diagnostics))
        return diagnostics


__all__ = ["Diagnostic", "OutlineValidator", "ValidatorConfig"]
