"""HCL example snippet parsing.

Snippets are parsed with the python-hcl2 Lark parser, which records source
positions on every node. Each top-level ``resource`` block keeps its exact
source text and its top-level attributes as ``(name, expression)`` pairs whose
expression text is sliced from the snippet; the block body is also run through
python-hcl2's ``DictTransformer`` to produce the JSON manifest.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from hcl2 import parser as hcl2_parser
from hcl2.transformer import DictTransformer
from lark import Token, Tree
from lark.exceptions import LarkError

from .errors import ConfigParseError, ConversionError

BLOCK_RESOURCE = "resource"

_META_PREFIX = "__"
_NEW_LINE_OR_COMMENT = "new_line_or_comment"

Node = Union[Tree, Token]


@dataclass
class Attribute:
    """A top-level ``name = expression`` statement of a block body."""

    name: str
    expression: str
    node: Node = field(compare=False, repr=False)


@dataclass
class ConfigBlock:
    """A two-label configuration block (``<kind> "<type>" "<name>" { ... }``)."""

    type: str
    name: str
    body: Dict[str, Any] = field(default_factory=dict)
    source: str = ""
    kind: str = BLOCK_RESOURCE
    attributes: List[Attribute] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.type}.{self.name}"


def parse_snippet(snippet: str) -> List[ConfigBlock]:
    """Parse an example snippet and return its two-label ``resource`` blocks.

    Blocks are returned in source order. Raises ``ConfigParseError`` when the
    snippet is not valid HCL.
    """
    text = snippet if snippet.endswith("\n") else f"{snippet}\n"
    try:
        tree = hcl2_parser.hcl2.parse(text)
        return [_build_block(node, text) for node in _iter_resource_blocks(tree, text)]
    except (LarkError, ValueError) as exc:
        raise ConfigParseError(
            f"failed to parse example Terraform configuration: {exc}. Configuration:\n{snippet}",
            snippet=snippet,
        ) from exc


def to_manifest(block: ConfigBlock) -> str:
    """Render the block body as indented JSON."""
    try:
        return json.dumps(block.body, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ConversionError(
            f"failed to format {block.key} as JSON: {exc}"
        ) from exc


def node_span(node: Node) -> Optional[Tuple[int, int]]:
    """Return the ``(start, end)`` source offsets of a parse tree node."""
    if isinstance(node, Token):
        if node.start_pos is None or node.end_pos is None:
            return None
        return node.start_pos, node.end_pos
    meta = node.meta
    if getattr(meta, "empty", True):
        return None
    return meta.start_pos, meta.end_pos


def significant_children(node: Tree) -> List[Node]:
    """Children of ``node`` without the newline and comment runs between them."""
    return [
        child
        for child in node.children
        if not (isinstance(child, Tree) and child.data == _NEW_LINE_OR_COMMENT)
    ]


def _iter_resource_blocks(tree: Tree, text: str) -> Iterator[Tree]:
    body = _find_child(tree, "body") if tree.data != "body" else tree
    if body is None:
        return
    for node in significant_children(body):
        if not (isinstance(node, Tree) and node.data == "block"):
            continue
        header, _ = _split_block(node)
        if len(header) == 3 and _source_text(header[0], text) == BLOCK_RESOURCE:
            yield node


def _split_block(node: Tree) -> Tuple[List[Node], Optional[Tree]]:
    children = significant_children(node)
    last = children[-1] if children else None
    if isinstance(last, Tree) and last.data == "body":
        return children[:-1], last
    return children, None


def _build_block(node: Tree, text: str) -> ConfigBlock:
    header, body_node = _split_block(node)
    kind, block_type, block_name = (_unquote(_source_text(child, text)) for child in header)
    transformed = DictTransformer().transform(body_node) if body_node is not None else {}
    return ConfigBlock(
        type=block_type,
        name=block_name,
        body=_strip_meta(transformed) if isinstance(transformed, dict) else {},
        source=_source_text(node, text),
        kind=kind,
        attributes=list(_iter_attributes(body_node, text)) if body_node is not None else [],
    )


def _iter_attributes(body: Tree, text: str) -> Iterator[Attribute]:
    for node in significant_children(body):
        if not (isinstance(node, Tree) and node.data == "attribute"):
            continue
        # attribute: identifier "=" expression
        expression = node.children[-1]
        yield Attribute(
            name=_source_text(node.children[0], text),
            expression=_source_text(expression, text),
            node=expression,
        )


def _source_text(node: Node, text: str) -> str:
    span = node_span(node)
    if span is None:
        raise ConversionError(f"no source position recorded for {_describe(node)}")
    return text[span[0] : span[1]]


def _describe(node: Node) -> str:
    return f"token {node.type}" if isinstance(node, Token) else f"node {node.data}"


def _find_child(tree: Tree, name: str) -> Optional[Tree]:
    for child in tree.children:
        if isinstance(child, Tree) and child.data == name:
            return child
    return None


def _strip_meta(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            _unquote(str(key)): _strip_meta(item)
            for key, item in value.items()
            if not str(key).startswith(_META_PREFIX)
        }
    if isinstance(value, list):
        return [_strip_meta(item) for item in value]
    if isinstance(value, str):
        return _unquote(value)
    return value


def _unquote(value: str) -> str:
    # Some python-hcl2 releases keep the quotes of string literals and labels.
    if len(value) >= 2 and value[0] == '"' and value[-1] == '"' and '"' not in value[1:-1]:
        return value[1:-1]
    return value


__all__ = [
    "Attribute",
    "BLOCK_RESOURCE",
    "ConfigBlock",
    "node_span",
    "parse_snippet",
    "significant_children",
    "to_manifest",
]
