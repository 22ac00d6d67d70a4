"""Tests for example block resolution."""

from __future__ import annotations

import dataclasses
import json

import pytest

from tfmeta.errors import ConflictingReferenceError
from tfmeta.extractors.examples import ExampleBlockResolver, ResolutionState, suffix_match
from tfmeta.hcl import ConfigBlock, parse_snippet


def _block(block_type: str, name: str, **attributes: str) -> ConfigBlock:
    lines = [f'resource "{block_type}" "{name}" {{']
    lines.extend(f"  {key} = {value}" for key, value in attributes.items())
    lines.append("}")
    [block] = parse_snippet("\n".join(lines))
    return block


def test_exact_mode_collects_matches_and_dependencies() -> None:
    blocks = [
        _block("widget_instance", "example", size='"small"'),
        _block("widget_network", "net", cidr='"10.0.0.0/16"'),
        _block("widget_instance", "other", network_id="widget_network.net.id"),
    ]
    state = ResolutionState(name="widget_instance")

    ExampleBlockResolver().resolve_snippet(blocks, state)

    assert state.name == "widget_instance"
    assert [example.name for example in state.examples] == ["example", "other"]
    first, second = state.examples
    assert first.dependencies == {}
    assert json.loads(first.manifest) == {"size": "small"}
    assert set(second.dependencies) == {"widget_network.net"}
    assert json.loads(second.dependencies["widget_network.net"]) == {"cidr": "10.0.0.0/16"}
    assert second.references == {"network_id": "widget_network.net.id"}


def test_dependencies_are_snapshots_per_example() -> None:
    blocks = [
        _block("widget_instance", "first"),
        _block("widget_network", "net"),
        _block("widget_instance", "second"),
        _block("widget_disk", "data"),
        _block("widget_instance", "third"),
    ]
    state = ResolutionState(name="widget_instance")

    ExampleBlockResolver().resolve_snippet(blocks, state)

    assert [sorted(example.dependencies) for example in state.examples] == [
        [],
        ["widget_network.net"],
        ["widget_disk.data", "widget_network.net"],
    ]


def test_relaxed_mode_promotes_resource_name() -> None:
    blocks = [_block("widget_instance", "example", zone='"eu"')]
    state = ResolutionState(name="widget_instance_attachment")

    ExampleBlockResolver().resolve_snippet(blocks, state)

    assert state.name == "widget_instance"
    assert [example.name for example in state.examples] == ["example"]
    assert state.examples[0].dependencies == {}


def test_relaxed_mode_records_blocks_before_promotion_as_dependencies() -> None:
    blocks = [
        _block("widget_network", "net"),
        _block("azure_widget_disk", "data"),
        _block("widget_network", "other"),
        _block("azure_widget_disk", "extra"),
    ]
    state = ResolutionState(name="widget_disk")

    ExampleBlockResolver().resolve_snippet(blocks, state)

    # The first relaxed match fixes the name; later blocks match exactly.
    assert state.name == "azure_widget_disk"
    assert [example.name for example in state.examples] == ["data", "extra"]
    assert set(state.examples[0].dependencies) == {"widget_network.net"}
    assert set(state.examples[1].dependencies) == {"widget_network.net", "widget_network.other"}


def test_no_match_in_either_mode_leaves_examples_empty() -> None:
    blocks = [_block("widget_network", "net"), _block("widget_disk", "data")]
    state = ResolutionState(name="gadget_instance")

    ExampleBlockResolver().resolve_snippet(blocks, state)

    assert state.name == "gadget_instance"
    assert state.examples == []


def test_resolved_name_carries_across_snippets() -> None:
    snippets = [
        [_block("widget_instance", "first")],
        [_block("widget_instance_attachment", "ignored"), _block("widget_instance", "second")],
    ]

    state = ExampleBlockResolver().resolve("widget_instance_attachment", snippets)

    assert state.name == "widget_instance"
    assert [example.name for example in state.examples] == ["first", "second"]
    assert set(state.examples[1].dependencies) == {"widget_instance_attachment.ignored"}


def test_relaxed_fallback_only_runs_while_page_has_no_examples() -> None:
    snippets = [
        [_block("widget_instance", "first")],
        [_block("widget_instance_extra", "second")],
    ]

    state = ExampleBlockResolver().resolve("widget_instance", snippets)

    assert [example.name for example in state.examples] == ["first"]


def test_skip_references_records_no_references() -> None:
    blocks = [
        _block(
            "widget_instance",
            "example",
            network_id="widget_network.net.id",
        )
    ]
    state = ResolutionState(name="widget_instance")

    ExampleBlockResolver(skip_references=True).resolve_snippet(blocks, state)

    assert state.examples[0].references == {}


def test_conflicting_references_propagate() -> None:
    block = _block(
        "widget_instance",
        "example",
        network_id="widget_network.net.id",
        subnet_id="widget_network.other.id",
    )
    first, second = block.attributes
    block.attributes = [first, dataclasses.replace(second, name=first.name)]

    with pytest.raises(ConflictingReferenceError):
        ExampleBlockResolver().resolve_snippet([block], ResolutionState(name="widget_instance"))


@pytest.mark.parametrize(
    ("label", "resource_name", "expected"),
    [
        ("widget_instance", "widget_instance", True),
        ("azure_widget_instance", "widget_instance", True),
        ("widget_instance_v2", "cloud_instance_v2", True),
        ("widget_instance", "widget_instance_attachment", True),
        ("widget_network", "widget_instance", False),
        ("instance", "cloud_widget_instance", False),
    ],
)
def test_suffix_match(label: str, resource_name: str, expected: bool) -> None:
    assert suffix_match(label, resource_name) is expected


def test_suffix_match_without_limit_drops_more_segments() -> None:
    assert suffix_match("instance", "cloud_widget_instance", limit=-1) is True
