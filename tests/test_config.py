"""Tests for tfmeta.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from tfmeta.config import (
    DEFAULT_CODE_XPATH,
    DEFAULT_IMPORT_XPATH,
    DEFAULT_OUTPUT,
    ScrapeConfig,
    XPathConfig,
    load_config,
)
from tfmeta.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, ScrapeConfig)
    assert config.provider == ""
    assert config.root is None
    assert config.output == Path(DEFAULT_OUTPUT)
    assert config.extension == ".markdown"
    assert config.skip_example_errors is False
    assert config.skip_example_references is False
    assert config.fail_on_duplicate is False
    assert config.xpaths == XPathConfig()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".tfmeta.yml"
    config_file.write_text(
        """
provider: hashicorp/widget
root: website/docs/r
output: build/provider-metadata.yaml
extension: md
skip:
  example_errors: true
  example_references: "yes"
fail_on_duplicate: true
xpaths:
  prelude: "//p/text()"
  field_doc: "//li/code/text()"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    base = tmp_path.resolve()
    assert config.provider == "hashicorp/widget"
    assert config.root == base / "website" / "docs" / "r"
    assert config.output == base / "build" / "provider-metadata.yaml"
    assert config.extension == ".md"
    assert config.skip_example_errors is True
    assert config.skip_example_references is True
    assert config.fail_on_duplicate is True
    assert config.xpaths.prelude == "//p/text()"
    assert config.xpaths.field_doc == "//li/code/text()"
    assert config.xpaths.code == DEFAULT_CODE_XPATH
    assert config.xpaths.import_statement == DEFAULT_IMPORT_XPATH


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".tfmeta.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path) == ScrapeConfig()


@pytest.mark.parametrize("content", ["- provider\n", "provider: [unclosed\n"])
def test_load_config_rejects_malformed_files(tmp_path: Path, content: str) -> None:
    (tmp_path / ".tfmeta.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
