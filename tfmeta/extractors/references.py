"""Cross-block attribute references inside a matched example block."""

from __future__ import annotations

from enum import Enum
from typing import Dict

from lark import Token, Tree

from ..errors import ConflictingReferenceError
from ..hcl import ConfigBlock, Node, significant_children

_KEYWORDS = {"true", "false", "null"}

# python-hcl2 grammar rule names grouped by expression kind.
_STEP_RULES = {"get_attr_expr_term", "index_expr_term"}
_SPLAT_RULES = {"attr_splat_expr_term", "full_splat_expr_term"}
_NUMBER_RULES = {"int_lit", "float_lit"}
_STRING_RULES = {
    "string",
    "string_lit",
    "string_with_interpolation",
    "heredoc_template",
    "heredoc_template_trim",
}
_COLLECTION_RULES = {"tuple", "object"}
_CALL_RULES = {"function_call", "provider_function_call"}
_INDEX_RULES = {"index", "braces_index", "short_index"}


class ExpressionKind(Enum):
    """Syntactic kinds of attribute value expressions."""

    TRAVERSAL = "traversal"
    SPLAT = "splat"
    LITERAL = "literal"
    TEMPLATE = "template"
    COLLECTION = "collection"
    FUNCTION_CALL = "function_call"
    OTHER = "other"


def classify_expression(node: Node) -> ExpressionKind:
    """Return the kind of an attribute value expression node.

    A ``TRAVERSAL`` is a root identifier followed only by attribute steps and
    literal index keys (``a.b``, ``a.b[0]``, ``a["k"].c``); an index by any
    other expression makes the whole expression ``OTHER``.
    """
    if isinstance(node, Token):
        if node.startswith(('"', "<<")):
            return ExpressionKind.TEMPLATE if _has_interpolation(node) else ExpressionKind.LITERAL
        if node.isdigit() or node in _KEYWORDS:
            return ExpressionKind.LITERAL
        return ExpressionKind.OTHER

    rule = node.data
    if rule == "identifier":
        return ExpressionKind.LITERAL if _identifier(node) in _KEYWORDS else ExpressionKind.TRAVERSAL
    if rule in _STEP_RULES:
        return ExpressionKind.TRAVERSAL if traversal_length(node) else ExpressionKind.OTHER
    if rule in _SPLAT_RULES:
        return ExpressionKind.SPLAT
    if rule in _NUMBER_RULES:
        return ExpressionKind.LITERAL
    if rule in _STRING_RULES:
        return ExpressionKind.TEMPLATE if _has_interpolation(node) else ExpressionKind.LITERAL
    if rule in _COLLECTION_RULES:
        return ExpressionKind.COLLECTION
    if rule in _CALL_RULES:
        return ExpressionKind.FUNCTION_CALL
    return ExpressionKind.OTHER


def traversal_length(node: Node) -> int:
    """Return the number of segments of a static traversal, or 0 for anything else."""
    steps = 0
    while isinstance(node, Tree) and node.data in _STEP_RULES:
        if node.data == "index_expr_term" and not _is_literal_index(node.children[-1]):
            return 0
        steps += 1
        node = node.children[0]
    if isinstance(node, Tree) and node.data == "identifier" and _identifier(node) not in _KEYWORDS:
        return steps + 1
    return 0


def extract_references(
    block: ConfigBlock, resource_name: str, enabled: bool = True
) -> Dict[str, str]:
    """Map attribute names to the traversal expressions they are assigned.

    Only traversals of at least two segments (``root.attr...``) are
    references; every other expression kind is ignored. Raises
    ``ConflictingReferenceError`` when one attribute is assigned two different
    traversals.
    """
    references: Dict[str, str] = {}
    if not enabled:
        return references

    for attribute in block.attributes:
        kind = classify_expression(attribute.node)
        if kind is ExpressionKind.TRAVERSAL:
            if traversal_length(attribute.node) < 2:
                continue
            previous = references.get(attribute.name)
            if previous is not None and previous != attribute.expression:
                raise ConflictingReferenceError(
                    attribute.name, resource_name, previous, attribute.expression
                )
            references[attribute.name] = attribute.expression
        elif kind in (
            ExpressionKind.SPLAT,
            ExpressionKind.LITERAL,
            ExpressionKind.TEMPLATE,
            ExpressionKind.COLLECTION,
            ExpressionKind.FUNCTION_CALL,
            ExpressionKind.OTHER,
        ):
            continue
    return references


def _is_literal_index(step: Node) -> bool:
    if not isinstance(step, Tree) or step.data not in _INDEX_RULES:
        return False
    keys = significant_children(step)
    # Legacy ``a.0`` indexes are a run of digit tokens.
    if keys and all(isinstance(key, Token) and key.isdigit() for key in keys):
        return True
    return len(keys) == 1 and classify_expression(keys[0]) is ExpressionKind.LITERAL


def _identifier(node: Tree) -> str:
    return "".join(str(token) for token in node.scan_values(lambda value: isinstance(value, Token)))


def _has_interpolation(node: Node) -> bool:
    if isinstance(node, Token):
        return "${" in node or "%{" in node
    if any(subtree.data == "interpolation" for subtree in node.iter_subtrees()):
        return True
    return any(
        "${" in token or "%{" in token
        for token in node.scan_values(lambda value: isinstance(value, Token))
    )


__all__ = [
    "ExpressionKind",
    "classify_expression",
    "extract_references",
    "traversal_length",
]
