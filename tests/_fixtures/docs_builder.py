"""Helper utilities for writing throwaway provider documentation trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from tfmeta.config import ScrapeConfig
from tfmeta.models import ProviderMetadata
from tfmeta.scraper import ProviderScraper

FENCE = "```"


def resource_page(
    title: str,
    *,
    subcategory: str = "Compute",
    description: str = "Manages a resource.",
    body: str = "",
) -> str:
    """Return a registry-style markdown page for ``title``."""
    prelude = textwrap.dedent(
        f"""\
        ---
        subcategory: "{subcategory}"
        layout: "widget"
        page_title: "Widget: {title}"
        description: |-
          {description}
        ---

        # {title}

        """
    )
    return prelude + textwrap.dedent(body).lstrip("\n")


def hcl_example(config: str) -> str:
    """Wrap an HCL snippet in a terraform fenced code block."""
    return f"{FENCE}terraform\n{textwrap.dedent(config).strip()}\n{FENCE}\n"


class DocsBuilder:
    """Writes documentation pages into a temporary directory and scrapes them."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "docs"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the docs tree."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

    def scrape(self, config: ScrapeConfig | None = None) -> ProviderMetadata:
        """Scrape the docs tree with ``config`` (defaults to a plain config)."""
        config = config or ScrapeConfig(provider="example/widget")
        return ProviderScraper(config).scrape(self.root)

    def path(self) -> Path:
        """Return the docs root path."""
        return self.root


__all__ = ["DocsBuilder", "FENCE", "hcl_example", "resource_page"]
