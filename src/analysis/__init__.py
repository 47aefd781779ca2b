"""Structural validation and record-level diffing of decoded documents."""

from .diff import DiffEngine, DiffReport, RecordChange, RecordRef, render_report
from .validator import Diagnostic, OutlineValidator, ValidatorConfig

__all__ = [
    "Diagnostic",
    "DiffEngine",
    "DiffReport",
    "OutlineValidator",
    "RecordChange",
    "RecordRef",
    "ValidatorConfig",
    "render_report",
]
