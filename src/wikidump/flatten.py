"""Flatten markup node trees into plain, readable text."""

from __future__ import annotations

from typing import Callable, Dict, Iterable

from wikidump.markup import Node, NodeKind


def _value(node: Node) -> str:
    return node.value


def _children(node: Node) -> str:
    return flatten(node.nodes)


def _heading(node: Node) -> str:
    return "\n" + flatten(node.nodes) + "\n"


def _list_items(node: Node) -> str:
    return "".join(flatten(item) for item in node.items)


# Kinds missing from this table (templates, images, tables, formatting
# markers and the like) contribute nothing.
_RULES: Dict[NodeKind, Callable[[Node], str]] = {
    NodeKind.TEXT: _value,
    NodeKind.PARAGRAPH_BREAK: lambda node: "\n",
    NodeKind.CHARACTER_ENTITY: _value,
    NodeKind.LINK: _children,
    NodeKind.EXTERNAL_LINK: _children,
    NodeKind.HEADING: _heading,
    NodeKind.ORDERED_LIST: _list_items,
    NodeKind.UNORDERED_LIST: _list_items,
    NodeKind.DEFINITION_LIST: _list_items,
    NodeKind.PREFORMATTED: _children,
}


def flatten(nodes: Iterable[Node]) -> str:
    """Concatenate the readable text of a node sequence.

    Args:
        nodes: Nodes produced by :class:`wikidump.markup.MarkupParser`.

    Returns:
        The text, without any cleanup applied.
    """
    return "".join(_RULES[node.kind](node) for node in nodes if node.kind in _RULES)


def remove_escape_artifacts(text: str) -> str:
    # mwparserfromhell output may carry literal "\t" sequences.
    return text.replace("\\t", "")


def remove_line_breaks(text: str) -> str:
    return text.replace("\n", "").replace("\r", "")


def clean_text(text: str, remove_newlines: bool = False) -> str:
    """Tidy flattened text: drop escape artifacts, optionally newlines, and trim."""
    text = remove_escape_artifacts(text)
    if remove_newlines:
        text = remove_line_breaks(text)
    return text.strip()
