"""Provider-wide scraping: walk a docs tree and aggregate resource metadata."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator

from .builder import ResourceMetadataBuilder
from .config import ScrapeConfig
from .errors import DuplicateResourceError, ScrapeError, ScrapeIOError
from .logging import get_logger
from .models import ProviderMetadata, Resource


def iter_documents(root: Path, extension: str) -> Iterator[Path]:
    """Yield documentation files under ``root`` with ``extension``, in sorted order.

    Raises ``ScrapeIOError`` when a directory of the tree cannot be listed.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        dirnames.sort()
        current_dir = Path(dirpath)
        for filename in sorted(filenames):
            if os.path.splitext(filename)[1] == extension:
                yield current_dir / filename


def _raise_walk_error(exc: OSError) -> None:
    raise ScrapeIOError(
        f"failed to traverse Terraform registry: {exc.filename or exc}: {exc.strerror or exc}"
    ) from exc


class ProviderScraper:
    """Scrapes every resource page of a provider into one ``ProviderMetadata``."""

    def __init__(
        self,
        config: ScrapeConfig | None = None,
        builder: ResourceMetadataBuilder | None = None,
    ) -> None:
        self.config = config or ScrapeConfig()
        self.builder = builder or ResourceMetadataBuilder(self.config)
        self.logger = get_logger("scraper")

    def scrape(self, root: Path | str | None = None) -> ProviderMetadata:
        """Scrape all documents below ``root`` (defaults to ``config.root``)."""
        root_value = root if root is not None else self.config.root
        if root_value is None:
            raise ScrapeIOError("no documentation root configured")
        root_path = Path(root_value).expanduser().resolve()
        if not root_path.is_dir():
            raise ScrapeIOError(
                f"cannot scrape Terraform registry: {root_path} is not a directory"
            )

        self.logger.info("Scraping %s documents under %s", self.config.extension, root_path)
        metadata = ProviderMetadata(name=self.config.provider)
        count = 0
        for path in iter_documents(root_path, self.config.extension):
            self.logger.debug("Scraping %s", path)
            self.add(metadata, self.scrape_file(path))
            count += 1

        self.logger.info(
            "Scraped %d documents into %d resources", count, len(metadata.resources)
        )
        return metadata

    def scrape_file(self, path: Path) -> Resource:
        """Scrape a single document, wrapping failures with the file path."""
        try:
            return self.builder.build(path)
        except ScrapeError as exc:
            raise exc.wrap(
                f"cannot scrape Terraform registry: failed to scrape resource metadata from {path}"
            ) from exc

    def add(self, metadata: ProviderMetadata, resource: Resource) -> None:
        """Insert ``resource`` under its resolved name; the last page wins on collision."""
        existing = metadata.resources.get(resource.name)
        if existing is not None:
            message = (
                f"resource {resource.name} scraped from {resource.source_path} "
                f"was already scraped from {existing.source_path}"
            )
            if self.config.fail_on_duplicate:
                raise DuplicateResourceError(message)
            self.logger.warning("%s; keeping the later page", message)
        metadata.resources[resource.name] = resource


__all__ = ["ProviderScraper", "iter_documents"]
