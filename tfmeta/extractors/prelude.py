"""Frontmatter ("prelude") parsing for resource documentation pages."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import MalformedPreludeError

KEY_PAGE_TITLE = "page_title"
KEY_DESCRIPTION = "description"
KEY_SUBCATEGORY = "subcategory"

_BLOCK_SCALAR_MARKER = "|-"


@dataclass
class Prelude:
    """Typed fields recovered from a page prelude."""

    title: str
    description: str
    subcategory: str


def parse_prelude(text: str) -> Prelude:
    """Parse the ``page_title``, ``description`` and ``subcategory`` keys.

    The prelude is YAML-like but not always valid YAML (titles contain
    unquoted colons), so it is scanned line by line:

    * ``page_title`` keeps only the text after the last colon, without quotes.
    * ``description`` starts with the text after the first colon and absorbs
      every line that follows it, joined with spaces, so block-scalar
      descriptions spanning several lines are recovered. The first ``|-``
      marker is removed.
    * ``subcategory`` keeps the text after the first colon, without quotes.

    Raises ``MalformedPreludeError`` when the title or the subcategory is
    missing. The description is optional.
    """
    title = ""
    description = ""
    subcategory = ""
    description_index = -1

    lines = text.split("\n")
    for index, line in enumerate(lines):
        parts = line.split(":")
        if len(parts) < 2:
            continue
        key = parts[0]
        if key == KEY_PAGE_TITLE:
            title = _unquote(parts[-1])
        elif key == KEY_DESCRIPTION:
            description = line.split(":", 1)[1]
            description_index = index
        elif key == KEY_SUBCATEGORY:
            subcategory = _unquote(line.split(":", 1)[1])

    if description_index > -1:
        description += " ".join(lines[description_index + 1 :])
    description = description.replace(_BLOCK_SCALAR_MARKER, "", 1).strip()

    if not title or not subcategory:
        raise MalformedPreludeError(
            "failed to parse prelude. "
            f"Description: {description}, Subcategory: {subcategory}, Title name: {title}. "
            f"Raw data:{text}",
            raw=text,
        )
    return Prelude(title=title, description=description, subcategory=subcategory)


def _unquote(value: str) -> str:
    return value.replace('"', "").strip()


__all__ = ["KEY_DESCRIPTION", "KEY_PAGE_TITLE", "KEY_SUBCATEGORY", "Prelude", "parse_prelude"]
