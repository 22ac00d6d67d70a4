"""Markdown rendering and path-expression queries over the rendered page.

The extractors never touch lxml directly. Pages are rendered with
Python-Markdown, parsed with ``lxml.html`` and mirrored into a small ``Node``
tree in which text and tail strings are first-class text nodes, matching the
element/text shape the field-doc walk relies on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import markdown
from lxml import etree
from lxml import html as lxml_html

from .errors import ConfigError

_MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]
_EMPTY_DOCUMENT = "<html><body></body></html>"

ELEMENT = "element"
TEXT = "text"


def render_markdown(source: str) -> str:
    """Render documentation markdown to an HTML fragment."""
    return markdown.markdown(source, extensions=_MARKDOWN_EXTENSIONS)


@dataclass(eq=False)
class Node:
    """A node of the rendered page: either an element or a run of text."""

    kind: str
    data: str
    parent: Optional["Node"] = None
    children: List["Node"] = field(default_factory=list)
    position: int = 0

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    @property
    def is_element(self) -> bool:
        return self.kind == ELEMENT

    @property
    def first_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    @property
    def next_sibling(self) -> Optional["Node"]:
        if self.parent is None:
            return None
        following = self.position + 1
        siblings = self.parent.children
        return siblings[following] if following < len(siblings) else None

    def append(self, child: "Node") -> "Node":
        child.parent = self
        child.position = len(self.children)
        self.children.append(child)
        return child

    def text_content(self) -> str:
        if self.is_text:
            return self.data
        return "".join(child.text_content() for child in self.children)


class Document:
    """A rendered documentation page that can be queried with XPath."""

    def __init__(self, html_text: str) -> None:
        self._root = lxml_html.document_fromstring(html_text if html_text.strip() else _EMPTY_DOCUMENT)
        self._elements: Dict[etree._Element, Node] = {}
        self._texts: Dict[etree._Element, Node] = {}
        self._tails: Dict[etree._Element, Node] = {}
        self.root = self._mirror(self._root)

    @classmethod
    def from_markdown(cls, source: str) -> "Document":
        return cls(render_markdown(source))

    def query(self, expression: str) -> List[Node]:
        """Evaluate ``expression`` and return matching nodes in document order.

        Element results map to element nodes and text results to the text node
        holding them. Other string results (attribute values, string
        functions) become detached text nodes; numbers and booleans are dropped.
        """
        try:
            results = self._root.xpath(expression)
        except etree.XPathError as exc:
            raise ConfigError(f"invalid path expression {expression!r}: {exc}") from exc

        if not isinstance(results, list):
            results = [results]

        nodes: List[Node] = []
        for result in results:
            node = self._lookup(result)
            if node is not None:
                nodes.append(node)
        return nodes

    def _lookup(self, result: object) -> Optional[Node]:
        if isinstance(result, etree._Element):
            return self._elements.get(result)
        if not isinstance(result, str):
            return None

        owner = getattr(result, "getparent", None)
        parent = owner() if owner is not None else None
        if parent is not None:
            if getattr(result, "is_text", False) and parent in self._texts:
                return self._texts[parent]
            if getattr(result, "is_tail", False) and parent in self._tails:
                return self._tails[parent]
        return Node(kind=TEXT, data=str(result))

    def _mirror(self, element: etree._Element) -> Node:
        node = Node(kind=ELEMENT, data=str(element.tag))
        self._elements[element] = node

        if element.text:
            self._texts[element] = node.append(Node(kind=TEXT, data=element.text))

        for child in element:
            # Comments and processing instructions are not part of the page
            # text, but their tails are.
            if isinstance(child.tag, str):
                node.append(self._mirror(child))
            if child.tail:
                self._tails[child] = node.append(Node(kind=TEXT, data=child.tail))
        return node


__all__ = ["Document", "Node", "render_markdown"]
