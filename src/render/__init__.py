"""Text renderers for decoded OTL records and outline trees."""

from .base import RecordRenderer, RenderConfig, TreeRenderer, note_lines
from .canonical import CanonicalRenderer
from .diagnostic import DumpRenderer, OffsetsRenderer
from .json_tree import JsonTreeRenderer, forest_to_dicts
from .tree_text import IndentedRenderer, PlainRenderer, render_indented, render_plain

__all__ = [
    "CanonicalRenderer",
    "DumpRenderer",
    "IndentedRenderer",
    "JsonTreeRenderer",
    "OffsetsRenderer",
    "PlainRenderer",
    "RecordRenderer",
    "RenderConfig",
    "TreeRenderer",
    "forest_to_dicts",
    "note_lines",
    "render_indented",
    "render_plain",
]
