"""Extractors turning a rendered documentation page into resource metadata."""

from __future__ import annotations

from .examples import ExampleBlockResolver, ResolutionState, suffix_match
from .field_docs import collect_argument_docs
from .prelude import Prelude, parse_prelude
from .references import ExpressionKind, classify_expression, extract_references

__all__ = [
    "ExampleBlockResolver",
    "ExpressionKind",
    "Prelude",
    "ResolutionState",
    "classify_expression",
    "collect_argument_docs",
    "extract_references",
    "parse_prelude",
    "suffix_match",
]
