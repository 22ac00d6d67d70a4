"""Configuration loading for tfmeta (.tfmeta.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".tfmeta.yml"
DEFAULT_EXTENSION = ".markdown"
DEFAULT_OUTPUT = "provider-metadata.yaml"

DEFAULT_CODE_XPATH = '//code[@class="language-terraform" or @class="language-hcl"]/text()'
DEFAULT_PRELUDE_XPATH = '//text()[contains(., "description") and contains(., "subcategory")]'
DEFAULT_FIELD_DOC_XPATH = "//ul/li//code[1]/text()"
DEFAULT_IMPORT_XPATH = '//code[@class="language-shell"]/text()'


@dataclass
class XPathConfig:
    """Path expressions selecting the nodes each extractor consumes."""

    code: str = DEFAULT_CODE_XPATH
    prelude: str = DEFAULT_PRELUDE_XPATH
    field_doc: str = DEFAULT_FIELD_DOC_XPATH
    import_statement: str = DEFAULT_IMPORT_XPATH


@dataclass
class ScrapeConfig:
    """Settings for one scrape run."""

    provider: str = ""
    root: Optional[Path] = None
    output: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT))
    extension: str = DEFAULT_EXTENSION
    skip_example_errors: bool = False
    skip_example_references: bool = False
    fail_on_duplicate: bool = False
    xpaths: XPathConfig = field(default_factory=XPathConfig)


def load_config(config_path: Path) -> ScrapeConfig:
    """Load scraper settings from ``.tfmeta.yml``.

    ``config_path`` may name the file itself or the directory holding it. A
    missing file yields the defaults. Relative ``root`` and ``output`` values
    are resolved against the directory of the configuration file.
    """
    config_file = _resolve_config_path(config_path)
    base = config_file.parent

    if not config_file.exists():
        return ScrapeConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    config = ScrapeConfig()
    config.provider = _as_str(data.get("provider")) or ""

    root = _as_str(data.get("root"))
    if root:
        config.root = base / Path(root).expanduser()
    output = _as_str(data.get("output"))
    if output:
        config.output = base / Path(output).expanduser()

    extension = _as_str(data.get("extension"))
    if extension:
        config.extension = extension if extension.startswith(".") else f".{extension}"

    skip_data = _as_dict(data.get("skip"))
    config.skip_example_errors = _as_bool(skip_data.get("example_errors")) or False
    config.skip_example_references = _as_bool(skip_data.get("example_references")) or False
    config.fail_on_duplicate = _as_bool(data.get("fail_on_duplicate")) or False

    xpath_data = _as_dict(data.get("xpaths"))
    if xpath_data:
        config.xpaths = XPathConfig(
            code=_as_str(xpath_data.get("code")) or DEFAULT_CODE_XPATH,
            prelude=_as_str(xpath_data.get("prelude")) or DEFAULT_PRELUDE_XPATH,
            field_doc=_as_str(xpath_data.get("field_doc")) or DEFAULT_FIELD_DOC_XPATH,
            import_statement=_as_str(xpath_data.get("import")) or DEFAULT_IMPORT_XPATH,
        )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
