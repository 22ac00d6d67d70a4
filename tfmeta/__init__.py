"""Scrape Terraform provider documentation into structured resource metadata."""

from .builder import ResourceMetadataBuilder
from .config import ScrapeConfig, XPathConfig, load_config
from .models import ProviderMetadata, Resource, ResourceExample
from .scraper import ProviderScraper
from .store import load_provider_metadata, store_provider_metadata

__all__ = [
    "ProviderMetadata",
    "ProviderScraper",
    "Resource",
    "ResourceExample",
    "ResourceMetadataBuilder",
    "ScrapeConfig",
    "XPathConfig",
    "load_config",
    "load_provider_metadata",
    "store_provider_metadata",
]
