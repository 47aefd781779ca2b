from __future__ import annotations

import logging
from typing import Iterable, List

from src.models.node import OutlineNode
from src.models.record import FlatRecord


logger = logging.getLogger(__name__)


class OutlineTreeBuilder:
    """Rebuild the outline hierarchy from per-record relative depth deltas.

    The insertion context is an index path from an implicit root rather than a
    parent pointer. ``parents`` mirrors ``path`` with the node each prefix of
    the path resolves to, so ``parents[-1]`` is always the insertion parent.
    Depth jumps of more than one level are bridged with synthetic filler
    nodes, and a delta that would take the level below zero is clamped.
    """

    def build(self, records: Iterable[FlatRecord]) -> List[OutlineNode]:
        root = OutlineNode.filler()
        path: List[int] = []
        parents: List[OutlineNode] = [root]
        level = 0
        fillers = 0

        for record in records:
            level = max(0, level + record.delta)

            while len(path) > level:
                path.pop()
                parents.pop()
            while len(path) < level:
                self._push(path, parents, OutlineNode.filler())
                fillers += 1

            self._push(path, parents, OutlineNode.from_record(record))

        if fillers:
            logger.debug("synthesized %d filler nodes", fillers)
        return root.children

    @staticmethod
    def _push(path: List[int], parents: List[OutlineNode], node: OutlineNode) -> None:
        path.append(parents[-1].add_child(node))
        parents.append(node)


def build_tree(records: Iterable[FlatRecord]) -> List[OutlineNode]:
    return OutlineTreeBuilder().build(records)


__all__ = ["OutlineTreeBuilder", "build_tree"]
