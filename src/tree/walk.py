from __future__ import annotations

from typing import Dict, Iterator, List, Sequence, Tuple

from src.models.node import OutlineNode


def walk(nodes: Sequence[OutlineNode], depth: int = 0) -> Iterator[Tuple[OutlineNode, int]]:
    """Depth-first pre-order traversal yielding every node with its depth.

    Iterative; nesting depth is bounded only by memory.
    """

    stack: List[Tuple[OutlineNode, int]] = [(node, depth) for node in reversed(nodes)]
    while stack:
        node, node_depth = stack.pop()
        yield node, node_depth
        stack.extend((child, node_depth + 1) for child in reversed(node.children))


def walk_real(nodes: Sequence[OutlineNode], depth: int = 0) -> Iterator[Tuple[OutlineNode, int]]:
    """Like walk, but fillers are spliced out; their children keep their depth."""

    for node, node_depth in walk(nodes, depth):
        if not node.synthetic:
            yield node, node_depth


def next_sibling_flags(depths: Sequence[int]) -> List[bool]:
    """For each depth, whether a later entry sits at the same depth before any shallower one."""

    flags = [False] * len(depths)
    open_levels: Dict[int, bool] = {}
    for index in range(len(depths) - 1, -1, -1):
        depth = depths[index]
        flags[index] = open_levels.get(depth, False)
        for deeper in [level for level in open_levels if level > depth]:
            del open_levels[deeper]
        open_levels[depth] = True
    return flags


def child_follows_flags(depths: Sequence[int]) -> List[bool]:
    """For each depth, whether the immediately following entry is exactly one level deeper."""

    return [
        index + 1 < len(depths) and depths[index + 1] == depth + 1
        for index, depth in enumerate(depths)
    ]


__all__ = ["child_follows_flags", "next_sibling_flags", "walk", "walk_real"]
