"""Typed markup node trees built from mwparserfromhell output."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum
from itertools import groupby
from typing import Iterable, List, Sequence, Tuple, Union

import mwparserfromhell
from mwparserfromhell.nodes import (
    Argument,
    Comment,
    ExternalLink,
    Heading,
    HTMLEntity,
    Tag,
    Template,
    Text,
    Wikilink,
)

from wikidump.profiles import MarkupProfile


class NodeKind(Enum):
    TEXT = "text"
    PARAGRAPH_BREAK = "paragraph_break"
    CHARACTER_ENTITY = "character_entity"
    LINK = "link"
    EXTERNAL_LINK = "external_link"
    HEADING = "heading"
    IMAGE = "image"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    DEFINITION_LIST = "definition_list"
    PREFORMATTED = "preformatted"
    TEMPLATE = "template"
    BOLD = "bold"
    BOLD_ITALIC = "bold_italic"
    ITALIC = "italic"
    HORIZONTAL_DIVIDER = "horizontal_divider"
    MAGIC_WORD = "magic_word"
    REDIRECT = "redirect"
    COMMENT = "comment"
    TAG = "tag"
    START_TAG = "start_tag"
    END_TAG = "end_tag"
    PARAMETER = "parameter"
    CATEGORY = "category"
    TABLE = "table"


@dataclass(frozen=True)
class Node:
    """One node of a parsed markup tree.

    Attributes:
        kind: What the node represents.
        value: Literal text, decoded character, link target, URL or name,
            depending on ``kind``.
        nodes: Child nodes: link text, external link label, heading title
            or preformatted content.
        items: List items, each a node sequence. Only set on list kinds.
        level: Heading level.
    """

    kind: NodeKind
    value: str = ""
    nodes: Tuple["Node", ...] = ()
    items: Tuple[Tuple["Node", ...], ...] = ()
    level: int = 0


@dataclass(frozen=True)
class _ListMarker:
    markup: str


_Item = Union[Node, _ListMarker]

_LIST_KINDS = {
    "*": NodeKind.UNORDERED_LIST,
    "#": NodeKind.ORDERED_LIST,
    ";": NodeKind.DEFINITION_LIST,
    ":": NodeKind.DEFINITION_LIST,
}
_STYLE_KINDS = {"''": NodeKind.ITALIC, "'''": NodeKind.BOLD}
_STRAY_STYLE_KINDS = {**_STYLE_KINDS, "'''''": NodeKind.BOLD_ITALIC}
# Kinds that can put visible text on a line.
_READABLE_KINDS = frozenset(
    {NodeKind.TEXT, NodeKind.CHARACTER_ENTITY, NodeKind.LINK, NodeKind.EXTERNAL_LINK}
)

_BLANK = "blank"
_HEADING = "heading"
_LIST = "list"
_PREFORMATTED = "preformatted"
_PARAGRAPH = "paragraph"
_SILENT = "silent"

INLINE_RE = re.compile(r"__(?P<word>[A-Za-z]+)__|(?P<quotes>'{5}|'{3}|'{2})")


def _text(value: str) -> Node:
    return Node(NodeKind.TEXT, value=value)


def _is_blank(item: _Item) -> bool:
    return isinstance(item, Node) and item.kind is NodeKind.TEXT and not item.value.strip()


def _drop_markers(items: Iterable[_Item]) -> List[Node]:
    return [item for item in items if isinstance(item, Node)]


def _strip_edges(nodes: List[Node]) -> List[Node]:
    nodes = list(nodes)
    if nodes and nodes[0].kind is NodeKind.TEXT:
        nodes[0] = _text(nodes[0].value.lstrip())
    if nodes and nodes[-1].kind is NodeKind.TEXT:
        nodes[-1] = _text(nodes[-1].value.rstrip())
    return [node for node in nodes if not (node.kind is NodeKind.TEXT and not node.value)]


def _line_kind(line: List[_Item]) -> str:
    visible = [item for item in line if not _is_blank(item)]
    if not visible:
        return _BLANK
    first = line[0]
    if isinstance(first, _ListMarker):
        return _LIST
    if isinstance(visible[0], Node) and visible[0].kind is NodeKind.HEADING:
        return _HEADING
    if not any(isinstance(item, Node) and item.kind in _READABLE_KINDS for item in visible):
        return _SILENT
    if first.kind is NodeKind.TEXT and first.value.startswith(" "):
        return _PREFORMATTED
    return _PARAGRAPH


def _join_lines(lines: Sequence[List[_Item]]) -> List[Node]:
    joined: List[Node] = []
    for index, line in enumerate(lines):
        if index:
            joined.append(_text("\n"))
        joined.extend(_drop_markers(line))
    return joined


def _split_lines(items: Iterable[_Item]) -> List[List[_Item]]:
    lines: List[List[_Item]] = [[]]
    for item in items:
        if isinstance(item, Node) and item.kind is NodeKind.TEXT and "\n" in item.value:
            first, *rest = item.value.split("\n")
            if first:
                lines[-1].append(_text(first))
            for piece in rest:
                lines.append([_text(piece)] if piece else [])
        else:
            lines[-1].append(item)
    return lines


def _lists(lines: Sequence[List[_Item]]) -> List[Node]:
    nodes = []
    for kind, group in groupby(lines, key=lambda line: _LIST_KINDS[line[0].markup]):
        items = tuple(tuple(_strip_edges(_drop_markers(line))) for line in group)
        nodes.append(Node(kind, items=items))
    return nodes


def _preformatted(lines: Sequence[List[_Item]]) -> Node:
    unindented = []
    for line in lines:
        first, *rest = line
        unindented.append([_text(first.value[1:]), *rest])
    return Node(NodeKind.PREFORMATTED, nodes=tuple(_join_lines(unindented)))


def _blocks(items: Iterable[_Item]) -> List[Node]:
    nodes: List[Node] = []
    previous = None
    for kind, group in groupby(_split_lines(items), key=_line_kind):
        lines = list(group)
        if kind == _BLANK:
            continue
        if kind == _SILENT:
            # Lines of templates, dividers, images and the like neither start
            # nor split a paragraph.
            nodes.extend(_drop_markers(item for line in lines for item in line if not _is_blank(item)))
            continue
        if kind == _PARAGRAPH:
            # Paragraph groups are only ever separated by blank or silent lines here.
            if previous == _PARAGRAPH:
                nodes.append(Node(NodeKind.PARAGRAPH_BREAK))
            nodes.extend(_join_lines(lines))
        elif kind == _HEADING:
            for line in lines:
                nodes.extend(_drop_markers(item for item in line if not _is_blank(item)))
        elif kind == _LIST:
            nodes.extend(_lists(lines))
        else:
            nodes.append(_preformatted(lines))
        previous = kind
    return nodes


class MarkupParser:
    """Parse wiki markup into a tuple of :class:`Node` for a given profile."""

    def __init__(self, profile: MarkupProfile):
        self.profile = profile
        self._category_namespaces = frozenset(profile.category_namespaces)
        self._file_namespaces = frozenset(profile.file_namespaces)
        self._extension_tags = frozenset(profile.extension_tags)
        self._magic_words = frozenset(word.upper() for word in profile.magic_words)
        self._protocols = tuple(protocol.lower() for protocol in profile.protocols)
        words = "|".join(re.escape(word) for word in profile.redirect_magic_words)
        self._redirect_re = re.compile(
            r"\s*#\s*(?:%s)\s*:?\s*\[\[(?P<target>[^\]|]*)(?:\|[^\]]*)?\]\]" % words,
            re.IGNORECASE,
        )

    def parse(self, text: str) -> Tuple[Node, ...]:
        nodes: List[Node] = []
        match = self._redirect_re.match(text) if self.profile.redirect_magic_words else None
        if match:
            nodes.append(Node(NodeKind.REDIRECT, value=match.group("target").strip()))
            text = text[match.end():]
        code = mwparserfromhell.parse(text)
        nodes.extend(_blocks(self._inline(code.nodes)))
        return tuple(nodes)

    def _inline(self, wikicode_nodes) -> List[_Item]:
        items: List[_Item] = []
        for node in wikicode_nodes:
            if isinstance(node, Text):
                items.extend(self._split_text(node.value))
            elif isinstance(node, HTMLEntity):
                items.append(Node(NodeKind.CHARACTER_ENTITY, value=node.normalize()))
            elif isinstance(node, Wikilink):
                items.append(self._wikilink(node))
            elif isinstance(node, ExternalLink):
                items.extend(self._external_link(node))
            elif isinstance(node, Heading):
                title = _strip_edges(_drop_markers(self._inline(node.title.nodes)))
                items.append(Node(NodeKind.HEADING, nodes=tuple(title), level=node.level))
            elif isinstance(node, Template):
                items.append(Node(NodeKind.TEMPLATE, value=str(node.name).strip()))
            elif isinstance(node, Argument):
                items.append(Node(NodeKind.PARAMETER, value=str(node.name).strip()))
            elif isinstance(node, Comment):
                items.append(Node(NodeKind.COMMENT, value=str(node.contents)))
            elif isinstance(node, Tag):
                items.extend(self._tag(node))
        return self._attach_link_trails(items)

    def _split_text(self, value: str) -> List[Node]:
        """Split behaviour switches and unbalanced quote markup out of text."""
        nodes = []
        position = 0
        for match in INLINE_RE.finditer(value):
            if match.group("quotes"):
                node = Node(_STRAY_STYLE_KINDS[match.group("quotes")])
            else:
                word = match.group("word").upper()
                if word not in self._magic_words:
                    continue
                node = Node(NodeKind.MAGIC_WORD, value=word)
            if match.start() > position:
                nodes.append(_text(value[position:match.start()]))
            nodes.append(node)
            position = match.end()
        if position < len(value):
            nodes.append(_text(value[position:]))
        return nodes

    def _wikilink(self, node: Wikilink) -> Node:
        title = str(node.title).strip()
        if ":" in title and not title.startswith(":"):
            namespace = title.split(":", 1)[0].strip().lower()
            if namespace in self._file_namespaces:
                return Node(NodeKind.IMAGE, value=title)
            if namespace in self._category_namespaces:
                return Node(NodeKind.CATEGORY, value=title)
        target = title.lstrip(":")
        if node.text is not None:
            text = _drop_markers(self._inline(node.text.nodes))
        else:
            text = [_text(target)]
        return Node(NodeKind.LINK, value=target, nodes=tuple(text))

    def _external_link(self, node: ExternalLink) -> List[Node]:
        url = str(node.url).strip()
        if not node.brackets:
            return self._split_text(url)
        if not url.lower().startswith(self._protocols):
            return self._split_text(str(node))
        label = _drop_markers(self._inline(node.title.nodes)) if node.title is not None else []
        return [Node(NodeKind.EXTERNAL_LINK, value=url, nodes=tuple(label))]

    def _tag(self, node: Tag) -> List[_Item]:
        markup = node.wiki_markup
        name = str(node.tag).strip().lower()
        if markup in _LIST_KINDS:
            return [_ListMarker(markup)]
        if markup == "----" or name == "hr":
            return [Node(NodeKind.HORIZONTAL_DIVIDER)]
        if name == "table":
            return [Node(NodeKind.TABLE)]
        if name in self._extension_tags or node.self_closing or node.contents is None:
            return [Node(NodeKind.TAG, value=name)]

        if markup in _STYLE_KINDS:
            kind = _STYLE_KINDS[markup]
            contents = node.contents.nodes
            inner = contents[0] if len(contents) == 1 else None
            if (
                isinstance(inner, Tag)
                and inner.wiki_markup in _STYLE_KINDS
                and inner.wiki_markup != markup
                and inner.contents is not None
            ):
                kind = NodeKind.BOLD_ITALIC
                contents = inner.contents.nodes
            return [Node(kind), *self._inline(contents), Node(kind)]

        return [
            Node(NodeKind.START_TAG, value=name),
            *self._inline(node.contents.nodes),
            Node(NodeKind.END_TAG, value=name),
        ]

    def _attach_link_trails(self, items: List[_Item]) -> List[_Item]:
        attached: List[_Item] = []
        for item in items:
            previous = attached[-1] if attached else None
            if (
                isinstance(item, Node)
                and item.kind is NodeKind.TEXT
                and isinstance(previous, Node)
                and previous.kind is NodeKind.LINK
            ):
                rest = item.value.lstrip(self.profile.link_trail)
                trail = item.value[: len(item.value) - len(rest)]
                if trail:
                    attached[-1] = replace(previous, nodes=previous.nodes + (_text(trail),))
                    if not rest:
                        continue
                    item = _text(rest)
            attached.append(item)
        return attached
