"""YAML persistence for provider metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ScrapeIOError
from .models import ProviderMetadata, Resource, ResourceExample


class _MetadataDumper(yaml.SafeDumper):
    """Safe dumper that writes multi-line manifests as literal blocks."""


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_MetadataDumper.add_representer(str, _represent_str)


def dump_provider_metadata(metadata: ProviderMetadata) -> str:
    """Render provider metadata as a YAML document."""
    payload = {
        "name": metadata.name,
        "resources": {
            key: _resource_to_dict(resource) for key, resource in metadata.resources.items()
        },
    }
    return yaml.dump(
        payload,
        Dumper=_MetadataDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )


def store_provider_metadata(metadata: ProviderMetadata, path: Path) -> None:
    """Write provider metadata to ``path``."""
    text = dump_provider_metadata(metadata)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ScrapeIOError(f"failed to write provider metadata file: {path}: {exc}") from exc


def parse_provider_metadata(text: str) -> ProviderMetadata:
    """Build provider metadata from a YAML document produced by ``dump_provider_metadata``."""
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ScrapeIOError(f"failed to unmarshal provider metadata: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ScrapeIOError("failed to unmarshal provider metadata: root is not a mapping")

    resources: Dict[str, Resource] = {}
    raw_resources = payload.get("resources") or {}
    if not isinstance(raw_resources, dict):
        raise ScrapeIOError("failed to unmarshal provider metadata: resources is not a mapping")
    for key, entry in raw_resources.items():
        if isinstance(entry, dict):
            resources[str(key)] = _resource_from_dict(entry)

    return ProviderMetadata(name=str(payload.get("name") or ""), resources=resources)


def load_provider_metadata(path: Path) -> ProviderMetadata:
    """Read provider metadata previously written by ``store_provider_metadata``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ScrapeIOError(f"failed to read metadata file {path}: {exc}") from exc
    return parse_provider_metadata(text)


def _resource_to_dict(resource: Resource) -> Dict[str, Any]:
    data: Dict[str, Any] = {"subCategory": resource.subcategory}
    if resource.description:
        data["description"] = resource.description
    data["name"] = resource.name
    data["titleName"] = resource.title_name
    if resource.examples:
        data["examples"] = [_example_to_dict(example) for example in resource.examples]
    data["argumentDocs"] = dict(resource.argument_docs)
    data["importStatements"] = list(resource.import_statements)
    return data


def _example_to_dict(example: ResourceExample) -> Dict[str, Any]:
    data: Dict[str, Any] = {"name": example.name, "manifest": example.manifest}
    if example.references:
        data["references"] = dict(example.references)
    if example.dependencies:
        data["dependencies"] = dict(example.dependencies)
    return data


def _resource_from_dict(data: Dict[str, Any]) -> Resource:
    examples: List[ResourceExample] = []
    for entry in data.get("examples") or []:
        example = _example_from_dict(entry)
        if example is not None:
            examples.append(example)
    return Resource(
        subcategory=_str(data.get("subCategory")),
        description=_str(data.get("description")),
        name=_str(data.get("name")),
        title_name=_str(data.get("titleName")),
        examples=examples,
        argument_docs=_str_map(data.get("argumentDocs")),
        import_statements=[str(item) for item in data.get("importStatements") or []],
    )


def _example_from_dict(data: Any) -> Optional[ResourceExample]:
    if not isinstance(data, dict):
        return None
    return ResourceExample(
        name=_str(data.get("name")),
        manifest=_str(data.get("manifest")),
        references=_str_map(data.get("references")),
        dependencies=_str_map(data.get("dependencies")),
    )


def _str(value: Any) -> str:
    return "" if value is None else str(value)


def _str_map(value: Any) -> Dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(key): _str(item) for key, item in value.items()}


__all__ = [
    "dump_provider_metadata",
    "load_provider_metadata",
    "parse_provider_metadata",
    "store_provider_metadata",
]
