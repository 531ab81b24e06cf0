"""
JSDoc tag extraction.

Reads the structured documentation comments attached to declarations and
properties, and keeps the tags that translate to zod refinements. Malformed
tags are dropped: extraction never raises.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, fields
from typing import Any

# Formats that have a zod string check
FORMATS = ("email", "uuid", "url")

NUMERIC_TAGS = {
    "minimum": "minimum",
    "maximum": "maximum",
    "minLength": "min_length",
    "maxLength": "max_length",
}

_TAG_LINE = re.compile(r"^@([A-Za-z_][\w-]*)\s*(.*)$")
_INTEGER_PREFIX = re.compile(r"\s*([+-]?\d+)")
_COMMENT_LINE_PREFIX = re.compile(r"^\s*\*?\s?")


@dataclass
class JSDocTags:
    """JSDoc tags that can be converted to zod refinements."""

    minimum: int | None = None
    maximum: int | None = None
    default: Any = None
    min_length: int | None = None
    max_length: int | None = None
    format: str | None = None
    pattern: str | None = None

    # `default` can legitimately be null, so its presence is tracked apart
    has_default: bool = False

    def is_empty(self) -> bool:
        return not self.has_default and all(getattr(self, f.name) is None for f in fields(self) if f.name not in ("default", "has_default"))


def _parse_integer(text: str) -> int | None:
    """Parse the leading integer of a tag comment, like JavaScript parseInt."""
    match = _INTEGER_PREFIX.match(text)
    if not match:
        return None
    return int(match.group(1))


def _parse_default(text: str) -> Any:
    if text.startswith("'") and text.endswith("'") and len(text) >= 2:
        return text[1:-1]
    try:
        return json.loads(text)
    except ValueError:
        return text


def _comment_lines(comment: str) -> list[str]:
    """Strip the comment delimiters and the leading asterisks of each line."""
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]
    return [_COMMENT_LINE_PREFIX.sub("", line).rstrip() for line in body.splitlines()]


def _iter_tags(comment: str) -> list[tuple[str, str]]:
    """Split a comment into (tag name, tag comment) pairs."""
    tags: list[tuple[str, list[str]]] = []
    for line in _comment_lines(comment):
        stripped = line.strip()
        match = _TAG_LINE.match(stripped)
        if match:
            tags.append((match.group(1), [match.group(2)]))
        elif tags:
            tags[-1][1].append(stripped)
    return [(name, "\n".join(parts).strip()) for name, parts in tags]


def parse_jsdoc_tags(comments: list[str] | str | None) -> JSDocTags:
    """
    Parse the recognized tags out of one or more JSDoc comments.

    Args:
        comments: Raw comment texts (including the /** */ delimiters)

    Returns:
        JSDocTags with the recognized tags; the last occurrence of a tag wins
    """
    tags = JSDocTags()
    if not comments:
        return tags
    if isinstance(comments, str):
        comments = [comments]

    for comment in comments:
        for name, text in _iter_tags(comment):
            if name in NUMERIC_TAGS:
                value = _parse_integer(text)
                if value is not None:
                    setattr(tags, NUMERIC_TAGS[name], value)
            elif name == "format":
                if text in FORMATS:
                    tags.format = text
            elif name == "pattern":
                if text:
                    tags.pattern = text
            elif name == "default":
                if text:
                    tags.default = _parse_default(text)
                    tags.has_default = True
    return tags


def get_jsdoc_comments(node: Any) -> list[str]:
    """
    Collect the JSDoc comments placed right before a tree-sitter node.

    Only comments separate the node from the returned comments; regular
    `//` and `/* */` comments are skipped but do not stop the search.
    """
    comments: list[str] = []
    sibling = node.prev_sibling
    while sibling is not None and sibling.type == "comment":
        text = sibling.text.decode("utf8")
        if text.startswith("/**") and not text.startswith("/**/"):
            comments.insert(0, text)
        sibling = sibling.prev_sibling
    return comments


def normalize_comment(comment: str) -> str:
    """Re-indent a JSDoc comment so it can be printed at any indentation."""
    lines = comment.strip().splitlines()
    normalized = [lines[0].strip()]
    for line in lines[1:]:
        stripped = line.strip()
        normalized.append(f" {stripped}" if stripped.startswith("*") else stripped)
    return "\n".join(normalized)
