"""OTL outline toolkit: decode, render, validate, re-encode and diff OTL documents."""

from .models.node import OutlineNode
from .models.record import FlatRecord, Flags

__all__ = ["FlatRecord", "Flags", "OutlineNode"]
