"""Matching example configuration blocks to the documented resource."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from ..hcl import ConfigBlock, to_manifest
from ..logging import get_logger
from ..models import ResourceExample
from .references import extract_references

SUFFIX_MATCH_LIMIT = 1

_logger = get_logger("examples")


@dataclass
class ResolutionState:
    """Page-scoped matching state shared by all snippets of one page.

    ``name`` starts as the page title and may be promoted once by a relaxed
    match; ``examples`` collects matches from every snippet of the page.
    """

    name: str
    examples: List[ResourceExample] = field(default_factory=list)


def suffix_match(label: str, resource_name: str, limit: int = SUFFIX_MATCH_LIMIT) -> bool:
    """Return True when ``label`` plausibly names the same resource as ``resource_name``.

    Suffixes of ``resource_name`` are formed by dropping up to ``limit``
    leading underscore-delimited segments (``-1`` for no limit); the label
    matches when it contains one of them. A label that is a leading
    underscore-delimited prefix of ``resource_name`` also matches, so
    ``widget_instance`` stands in for ``widget_instance_attachment``.
    """
    parts = resource_name.split("_")
    for dropped in range(len(parts)):
        if limit != -1 and dropped > limit:
            break
        if "_".join(parts[dropped:]) in label:
            return True
    return bool(label) and resource_name.startswith(f"{label}_")


class ExampleBlockResolver:
    """Turns the parsed example snippets of a page into resource examples."""

    def __init__(self, *, skip_references: bool = False) -> None:
        self.skip_references = skip_references

    def resolve(self, title_name: str, snippets: Iterable[Sequence[ConfigBlock]]) -> ResolutionState:
        """Resolve every snippet of a page in order and return the final state."""
        state = ResolutionState(name=title_name)
        for blocks in snippets:
            self.resolve_snippet(blocks, state)
        return state

    def resolve_snippet(
        self, blocks: Sequence[ConfigBlock], state: ResolutionState, exact: bool = True
    ) -> None:
        """Match the blocks of one snippet against ``state.name``.

        Blocks whose type differs from the resolved name are recorded as
        dependencies; each matching block becomes an example carrying a
        snapshot of the dependencies seen so far in the snippet. When the page
        still has no example after an exact pass, the snippet is retried once
        in relaxed mode, where the first block passing ``suffix_match``
        becomes the resolved name for the rest of the page.
        """
        dependencies: Dict[str, str] = {}
        matching_exact = exact
        for block in blocks:
            manifest = to_manifest(block)
            if block.type != state.name:
                if matching_exact or not suffix_match(block.type, state.name):
                    dependencies[block.key] = manifest
                    continue
                _logger.debug("Promoting resource name %s to %s", state.name, block.type)
                state.name = block.type
                matching_exact = True

            references = extract_references(
                block, state.name, enabled=not self.skip_references
            )
            state.examples.append(
                ResourceExample(
                    name=block.name,
                    manifest=manifest,
                    references=references,
                    dependencies=dict(dependencies),
                )
            )

        if not state.examples and exact:
            self.resolve_snippet(blocks, state, exact=False)


__all__ = ["ExampleBlockResolver", "ResolutionState", "suffix_match"]
