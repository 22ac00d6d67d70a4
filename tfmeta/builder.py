"""Per-document scraping: one markdown page in, one Resource out."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from .config import ScrapeConfig
from .errors import ConfigParseError, MalformedPreludeError, ScrapeIOError
from .extractors import ExampleBlockResolver, collect_argument_docs, parse_prelude
from .hcl import ConfigBlock, parse_snippet
from .logging import get_logger
from .markup import Document
from .models import Resource


class ResourceMetadataBuilder:
    """Scrapes resource metadata from a single documentation page.

    The file name is not always the resource name, so the name recorded on the
    returned resource is the one resolved from the page's examples, falling
    back to the page title.
    """

    def __init__(self, config: ScrapeConfig | None = None) -> None:
        self.config = config or ScrapeConfig()
        self.logger = get_logger("builder")
        self._resolver = ExampleBlockResolver(
            skip_references=self.config.skip_example_references
        )

    def build(self, path: Path) -> Resource:
        """Read ``path`` and scrape it."""
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ScrapeIOError(f"failed to read markdown file {path}: {exc}") from exc
        return self.build_from_markdown(source, path=path)

    def build_from_markdown(self, source: str, path: Path | None = None) -> Resource:
        """Scrape a page given its markdown source."""
        document = Document.from_markdown(source)
        return self.build_from_document(document, path=path)

    def build_from_document(self, document: Document, path: Path | None = None) -> Resource:
        xpaths = self.config.xpaths
        resource = Resource(source_path=str(path) if path is not None else None)

        self._scrape_prelude(resource, document, xpaths.prelude)
        resource.argument_docs = collect_argument_docs(document.query(xpaths.field_doc))
        resource.import_statements = self._scrape_import_statements(
            document, xpaths.import_statement
        )

        snippets = self._parse_snippets(document, xpaths.code)
        state = self._resolver.resolve(resource.title_name, snippets)
        resource.examples = state.examples
        resource.name = state.name or resource.title_name

        self.logger.debug(
            "Scraped %s (%d examples, %d argument docs)",
            resource.name,
            len(resource.examples),
            len(resource.argument_docs),
        )
        return resource

    def _scrape_prelude(self, resource: Resource, document: Document, expression: str) -> None:
        nodes = document.query(expression)
        if not nodes:
            raise MalformedPreludeError("failed to parse prelude: no prelude found", raw="")
        prelude = parse_prelude(nodes[0].text_content())
        resource.title_name = prelude.title
        resource.description = prelude.description
        resource.subcategory = prelude.subcategory

    def _scrape_import_statements(self, document: Document, expression: str) -> List[str]:
        statements: List[str] = []
        for node in document.query(expression):
            statement = node.text_content().strip()
            if statement:
                statements.append(statement)
        return statements

    def _parse_snippets(self, document: Document, expression: str) -> List[Sequence[ConfigBlock]]:
        snippets: List[Sequence[ConfigBlock]] = []
        for node in document.query(expression):
            text = node.text_content()
            try:
                snippets.append(parse_snippet(text))
            except ConfigParseError as exc:
                if not self.config.skip_example_errors:
                    raise
                self.logger.warning("Skipping example snippet: %s", exc)
        return snippets


__all__ = ["ResourceMetadataBuilder"]
