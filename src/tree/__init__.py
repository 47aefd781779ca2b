"""Outline tree reconstruction and traversal."""

from .builder import OutlineTreeBuilder, build_tree
from .walk import child_follows_flags, next_sibling_flags, walk, walk_real

__all__ = [
    "OutlineTreeBuilder",
    "build_tree",
    "child_follows_flags",
    "next_sibling_flags",
    "walk",
    "walk_real",
]
