"""CLI entrypoints for tfmeta commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ScrapeConfig, load_config
from .errors import ScrapeError
from .logging import configure_logging
from .scraper import ProviderScraper
from .store import load_provider_metadata, store_provider_metadata


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    kwargs["default"] = argparse.SUPPRESS if suppress_default else False
    parser.add_argument("-v", "--verbose", **kwargs)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tfmeta",
        description="Scrape Terraform provider documentation into resource metadata.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scrape_parser = subparsers.add_parser(
        "scrape",
        help="Scrape resource documentation pages into a metadata file.",
    )
    _add_verbose_option(scrape_parser, suppress_default=True)
    scrape_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Directory holding the resource documentation (defaults to the configured root).",
    )
    scrape_parser.add_argument(
        "--config",
        default=None,
        help="Path to a .tfmeta.yml file or the directory holding it.",
    )
    scrape_parser.add_argument("--provider", default=None, help="Provider name, e.g. hashicorp/aws.")
    scrape_parser.add_argument("-o", "--output", default=None, help="Metadata file to write.")
    scrape_parser.add_argument(
        "--extension",
        default=None,
        help="Extension of documentation files to scrape (default: .markdown).",
    )
    scrape_parser.add_argument(
        "--skip-example-errors",
        action="store_true",
        help="Log and skip example snippets that are not valid HCL.",
    )
    scrape_parser.add_argument(
        "--skip-example-references",
        action="store_true",
        help="Do not record attribute references of examples.",
    )
    scrape_parser.add_argument(
        "--fail-on-duplicate",
        action="store_true",
        help="Fail when two pages resolve to the same resource name.",
    )
    scrape_parser.add_argument("--log-file", default=None, help="Also write debug logs to this file.")

    show_parser = subparsers.add_parser(
        "show",
        help="Summarise a previously written metadata file.",
    )
    _add_verbose_option(show_parser, suppress_default=True)
    show_parser.add_argument("path", help="Metadata file to read.")

    return parser


def _resolve_config(args: argparse.Namespace) -> ScrapeConfig:
    config = load_config(Path(args.config)) if args.config else ScrapeConfig()
    if args.path:
        config.root = Path(args.path)
    if args.provider:
        config.provider = args.provider
    if args.output:
        config.output = Path(args.output)
    if args.extension:
        config.extension = args.extension if args.extension.startswith(".") else f".{args.extension}"
    if args.skip_example_errors:
        config.skip_example_errors = True
    if args.skip_example_references:
        config.skip_example_references = True
    if args.fail_on_duplicate:
        config.fail_on_duplicate = True
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tfmeta commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = getattr(args, "log_file", None)
    configure_logging(
        verbose=bool(getattr(args, "verbose", False)),
        log_file=Path(log_file) if log_file else None,
    )

    if args.command == "scrape":
        try:
            config = _resolve_config(args)
            if config.root is None:
                parser.exit(1, "tfmeta scrape: no documentation directory given\n")
            metadata = ProviderScraper(config).scrape()
            store_provider_metadata(metadata, config.output)
        except ScrapeError as exc:
            parser.exit(1, f"tfmeta scrape failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Provider metadata written to {_relativize(config.output)}")
    elif args.command == "show":
        try:
            metadata = load_provider_metadata(Path(args.path))
        except ScrapeError as exc:
            parser.exit(1, f"{exc}\n")
        print(f"{metadata.name or '(unnamed provider)'}: {len(metadata.resources)} resources")
        for name in sorted(metadata.resources):
            resource = metadata.resources[name]
            print(
                f"  {name} [{resource.subcategory}] "
                f"examples={len(resource.examples)} arguments={len(resource.argument_docs)}"
            )
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
