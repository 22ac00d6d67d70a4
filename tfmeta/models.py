"""Core data models for scraped provider metadata."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class ResourceExample:
    """An example configuration block matched to the documented resource."""

    name: str
    manifest: str
    references: Dict[str, str] = field(default_factory=dict)
    dependencies: Dict[str, str] = field(default_factory=dict)


@dataclass
class Resource:
    """Metadata scraped from a single resource documentation page."""

    subcategory: str = ""
    description: str = ""
    name: str = ""
    title_name: str = ""
    examples: List[ResourceExample] = field(default_factory=list)
    argument_docs: Dict[str, str] = field(default_factory=dict)
    import_statements: List[str] = field(default_factory=list)
    source_path: Optional[str] = field(default=None, compare=False, repr=False)


@dataclass
class ProviderMetadata:
    """All resources scraped for one provider, keyed by resolved resource name."""

    name: str
    resources: Dict[str, Resource] = field(default_factory=dict)
