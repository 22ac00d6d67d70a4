"""Tests for provider metadata persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tfmeta.errors import ScrapeIOError
from tfmeta.models import ProviderMetadata, Resource, ResourceExample
from tfmeta.store import (
    dump_provider_metadata,
    load_provider_metadata,
    parse_provider_metadata,
    store_provider_metadata,
)


def _metadata() -> ProviderMetadata:
    example = ResourceExample(
        name="example",
        manifest='{\n  "name": "example"\n}',
        references={"network_id": "widget_network.net.id"},
        dependencies={"widget_network.net": '{\n  "cidr": "10.0.0.0/16"\n}'},
    )
    resource = Resource(
        subcategory="Compute",
        description="Manages a widget instance.",
        name="widget_instance",
        title_name="widget_instance",
        examples=[example],
        argument_docs={"name": "- (Required) The name."},
        import_statements=["terraform import widget_instance.example inst-123"],
    )
    return ProviderMetadata(name="example/widget", resources={"widget_instance": resource})


def test_store_and_load_preserve_metadata(tmp_path: Path) -> None:
    path = tmp_path / "out" / "provider-metadata.yaml"
    metadata = _metadata()

    store_provider_metadata(metadata, path)

    assert load_provider_metadata(path) == metadata


def test_dump_uses_camel_case_keys_and_literal_manifests() -> None:
    text = dump_provider_metadata(_metadata())
    payload = yaml.safe_load(text)

    entry = payload["resources"]["widget_instance"]
    assert list(entry) == [
        "subCategory",
        "description",
        "name",
        "titleName",
        "examples",
        "argumentDocs",
        "importStatements",
    ]
    assert "manifest: |-\n" in text
    assert entry["examples"][0]["references"] == {"network_id": "widget_network.net.id"}


def test_dump_omits_empty_optional_fields() -> None:
    resource = Resource(subcategory="Compute", name="widget_disk", title_name="widget_disk")
    resource.examples.append(ResourceExample(name="example", manifest="{}"))
    metadata = ProviderMetadata(name="example/widget", resources={"widget_disk": resource})

    entry = yaml.safe_load(dump_provider_metadata(metadata))["resources"]["widget_disk"]

    assert "description" not in entry
    assert entry["argumentDocs"] == {}
    assert entry["importStatements"] == []
    assert entry["examples"] == [{"name": "example", "manifest": "{}"}]


@pytest.mark.parametrize("text", ["name: [unclosed\n", "- just\n- a list\n"])
def test_parse_rejects_malformed_documents(text: str) -> None:
    with pytest.raises(ScrapeIOError):
        parse_provider_metadata(text)


def test_load_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ScrapeIOError):
        load_provider_metadata(tmp_path / "missing.yaml")
