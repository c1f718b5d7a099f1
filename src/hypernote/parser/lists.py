"""Nested list reconstruction.

Runs of list lines are collected per marker kind, parsed into flat
ListItem records and rebuilt into a tree from their indentation.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from ..config import LIST_INDENT_STEP


class ListKind(Enum):
    TASK = "task"
    UNORDERED = "ul"
    ORDERED = "ol"


# Tried in this order: a task line would also match the unordered pattern
LIST_PATTERNS = {
    ListKind.TASK: re.compile(r"^(\s*)- \[([ xX])\] (.*)$"),
    ListKind.UNORDERED: re.compile(r"^(\s*)- (.*)$"),
    ListKind.ORDERED: re.compile(r"^(\s*)(\d+)\. (.*)$"),
}

TASK_ICON = (
    '<svg class="task-icon" width="16" height="16" viewBox="0 0 16 16" fill="none">'
    '<rect x="2" y="2" width="12" height="12" rx="2" stroke="currentColor" stroke-width="1.5"/>'
    "{check}</svg>"
)
TASK_CHECK = (
    '<path d="M4.5 8L7 10.5L11.5 5.5" stroke="currentColor" stroke-width="1.5" '
    'stroke-linecap="round" stroke-linejoin="round"/>'
)


@dataclass
class ListItem:
    depth: int
    text: str
    checked: bool | None = None  # None for plain items
    number: int | None = None  # Ordered items only


@dataclass
class ListNode:
    item: ListItem
    children: list[ListNode] = field(default_factory=list)


def _indent_depth(indent: str) -> int:
    return len(indent.replace("\t", " " * LIST_INDENT_STEP))


def match_kind(line: str) -> ListKind | None:
    for kind, pattern in LIST_PATTERNS.items():
        if pattern.match(line):
            return kind
    return None


def parse_list_item(line: str, kind: ListKind) -> ListItem:
    match = LIST_PATTERNS[kind].match(line)
    if match is None:
        raise ValueError(f"Not a {kind.value} list line: {line!r}")

    depth = _indent_depth(match.group(1))
    if kind is ListKind.TASK:
        return ListItem(depth, match.group(3), checked=match.group(2).lower() == "x")
    if kind is ListKind.ORDERED:
        return ListItem(depth, match.group(3), number=int(match.group(2)))
    return ListItem(depth, match.group(2))


def extract_run(lines: list[str], start: int, kind: ListKind) -> list[str]:
    """Collect consecutive lines of one list kind starting at ``start``.

    A blank or non-matching line ends the run; lists do not continue
    across blank lines.
    """
    pattern = LIST_PATTERNS[kind]
    run = []
    for line in lines[start:]:
        if not line.strip() or not pattern.match(line):
            break
        run.append(line)
    return run


def _build_level(items: list[ListItem], start: int, parent_depth: int) -> tuple[list[ListNode], int]:
    """Build one nesting level.

    The level's depth is that of its first item. Items deeper than it become
    children of the preceding item; an item at or above ``parent_depth``
    belongs to an ancestor and ends the level without being consumed.
    """
    level_depth = items[start].depth
    nodes: list[ListNode] = []
    i = start

    while i < len(items):
        item = items[i]
        if item.depth <= parent_depth:
            break

        node = ListNode(item)
        nodes.append(node)
        i += 1

        if i < len(items) and items[i].depth > level_depth:
            node.children, i = _build_level(items, i, level_depth)

    return nodes, i


def build_list_tree(items: list[ListItem]) -> list[ListNode]:
    """Rebuild nesting from flat items.

    Any depth greater than the current level nests exactly one level, so
    skipped or uneven indentation still yields well-formed markup and no
    item is dropped.
    """
    if not items:
        return []
    nodes, _ = _build_level(items, 0, -1)
    return nodes


def _render_item(node: ListNode, kind: ListKind) -> str:
    item = node.item
    if kind is ListKind.TASK:
        css = ' class="done"' if item.checked else ""
        icon = TASK_ICON.format(check=TASK_CHECK if item.checked else "")
        html = f"<li{css}>{icon}{item.text}"
    else:
        html = f"<li>{item.text}"

    if node.children:
        html += _render_nodes(node.children, kind, top_level=False)
    return html + "</li>"


def _render_nodes(nodes: list[ListNode], kind: ListKind, top_level: bool) -> str:
    tag = "ol" if kind is ListKind.ORDERED else "ul"
    attrs = ""
    if kind is ListKind.TASK and top_level:
        attrs = ' class="task-list"'
    elif kind is ListKind.ORDERED:
        first = nodes[0].item.number
        if first is not None and first != 1:
            attrs = f' start="{first}"'

    inner = "".join(_render_item(node, kind) for node in nodes)
    return f"<{tag}{attrs}>{inner}</{tag}>"


def render_list(lines: list[str], kind: ListKind) -> str:
    items = [parse_list_item(line, kind) for line in lines]
    return _render_nodes(build_list_tree(items), kind, top_level=True)


def render_lists(text: str) -> str:
    """Replace every run of list lines with nested list markup.

    Each rendered run takes a single output line.
    """
    lines = text.split("\n")
    result: list[str] = []
    i = 0

    while i < len(lines):
        kind = match_kind(lines[i])
        if kind is None:
            result.append(lines[i])
            i += 1
            continue

        run = extract_run(lines, i, kind)
        result.append(render_list(run, kind))
        i += len(run)

    return "\n".join(result)
