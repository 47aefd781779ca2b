from __future__ import annotations

from typing import List, Sequence, Tuple

from src.models.node import OutlineNode
from src.render.base import TreeRenderer, note_lines
from src.tree.walk import walk_real


INDENT_STEP = "    "
PLAIN_INDENT = "  "


class IndentedRenderer(TreeRenderer):
    """Outline view honouring fold state: ``[+]``/``[-]`` markers, ``*`` for the selection."""

    def render(self, forest: Sequence[OutlineNode]) -> str:
        lines: List[str] = []
        stack: List[Tuple[OutlineNode, int]] = [(node, 0) for node in reversed(forest)]
        while stack:
            node, depth = stack.pop()
            if not node.synthetic:
                self._render_node(node, INDENT_STEP * depth, lines)
                if node.collapsed:
                    continue
            stack.extend((child, depth + 1) for child in reversed(node.children))
        return "".join(f"{line}\n" for line in lines)

    @staticmethod
    def _render_node(node: OutlineNode, prefix: str, lines: List[str]) -> None:
        fold = "[+]" if node.collapsed else "[-]"
        selected = "*" if node.flags.selected else " "
        lines.append(f"{prefix}{fold}{selected} {node.text}")
        if node.note is not None:
            lines.extend(f"{prefix}{INDENT_STEP}> {line}" for line in note_lines(node.note))


class PlainRenderer(TreeRenderer):
    """Every heading and note, ignoring fold state; two spaces per depth level."""

    def render(self, forest: Sequence[OutlineNode]) -> str:
        lines: List[str] = []
        for node, depth in walk_real(forest):
            lines.append(PLAIN_INDENT * depth + node.text)
            if node.note is not None:
                note_indent = PLAIN_INDENT * (depth + 1)
                lines.extend(note_indent + line for line in note_lines(node.note))
        return "".join(f"{line}\n" for line in lines)


def render_indented(forest: Sequence[OutlineNode]) -> str:
    return IndentedRenderer().render(forest)


def render_plain(forest: Sequence[OutlineNode]) -> str:
    return PlainRenderer().render(forest)


__all__ = ["IndentedRenderer", "PlainRenderer", "render_indented", "render_plain"]
