"""Argument documentation recovered from inline code anchors."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Set

from ..markup import Node


def collect_argument_docs(anchors: Iterable[Node]) -> Dict[str, str]:
    """Map argument names to their documentation text.

    Each anchor is the inline code naming an argument (usually the text inside
    ``<li><code>name</code> - ...</li>``). Its documentation is the text that
    follows the anchor's enclosing element. Later anchors with the same name
    overwrite earlier ones; anchors without documentation are dropped.
    """
    docs: Dict[str, str] = {}
    for anchor in anchors:
        name: List[str] = []
        text = _collect(anchor, name, set()).strip()
        if not name or not text:
            continue
        docs[name[0]] = text
    return docs


def _collect(node: Optional[Node], name: List[str], visited: Set[int]) -> str:
    """Return the text following ``node``.

    ``name`` holds the argument name once captured; the first text reached in
    the whole walk becomes the name and everything after it is documentation.
    """
    if node is None or id(node) in visited:
        return ""
    visited.add(id(node))

    if node.is_element:
        return _collect(node.first_child, name, visited)

    parts: List[str] = []
    if not name:
        name.append(node.data)
    else:
        parts.append(node.data)

    enclosing = node.parent
    sibling = enclosing.next_sibling if enclosing is not None else None
    while sibling is not None:
        if id(sibling) not in visited:
            visited.add(id(sibling))
            if sibling.is_text:
                parts.append(sibling.data)
            elif sibling.first_child is not None:
                parts.append(_collect(sibling.first_child, name, visited))
        sibling = sibling.next_sibling
    return "".join(parts)


__all__ = ["collect_argument_docs"]
