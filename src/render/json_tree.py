from __future__ import annotations

import json
from dataclasses import asdict
from typing import Any, Dict, List, Sequence, Tuple, Union

from src.models.node import OutlineNode
from src.render.base import TreeRenderer


def _node_fields(node: OutlineNode) -> Dict[str, Any]:
    return {
        "text": node.text,
        "note": node.note,
        "collapsed": node.collapsed,
        "synthetic": node.synthetic,
        "flags": asdict(node.flags),
    }


def node_to_dict(node: OutlineNode) -> Dict[str, Any]:
    payload = {**_node_fields(node), "children": []}
    stack: List[Tuple[OutlineNode, Dict[str, Any]]] = [(node, payload)]
    while stack:
        current, target = stack.pop()
        for child in current.children:
            child_payload = {**_node_fields(child), "children": []}
            target["children"].append(child_payload)
            stack.append((child, child_payload))
    return payload


def forest_to_dicts(forest: Sequence[OutlineNode]) -> List[Dict[str, Any]]:
    return [node_to_dict(node) for node in forest]


def _push_nodes(stack: List[Union[OutlineNode, str]], nodes: Sequence[OutlineNode], closing: str) -> None:
    stack.append(closing)
    for position in range(len(nodes) - 1, -1, -1):
        stack.append(nodes[position])
        if position:
            stack.append(", ")


class JsonTreeRenderer(TreeRenderer):
    """Serialize the forest structure as a single line of JSON.

    Output matches ``json.dumps(forest_to_dicts(forest), ensure_ascii=False)``
    but is written with an explicit stack, so filler chains of any depth
    serialize.
    """

    def render(self, forest: Sequence[OutlineNode]) -> str:
        chunks: List[str] = ["["]
        stack: List[Union[OutlineNode, str]] = []
        _push_nodes(stack, forest, "]")
        while stack:
            item = stack.pop()
            if isinstance(item, str):
                chunks.append(item)
                continue
            head = json.dumps(_node_fields(item), ensure_ascii=False)
            chunks.append(head[:-1] + ', "children": [')
            _push_nodes(stack, item.children, "]}")
        chunks.append("\n")
        return "".join(chunks)


__all__ = ["JsonTreeRenderer", "forest_to_dicts", "node_to_dict"]
