"""
Utility functions for the TypeScript to zod generator.
"""

import re

DEFAULT_SCHEMA_SUFFIX = "Schema"

# Split text into words, handling camelCase and acronym boundaries (HTTPServer -> HTTP, Server)
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def _normalize_separators(text: str) -> str:
    """Normalize separators (underscores, hyphens, dollars) to spaces."""
    return text.replace("_", " ").replace("-", " ").replace("$", " ")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries."""
    return _WORD_PATTERN.findall(text)


def to_lower_camel_case(text: str) -> str:
    """Convert PascalCase, snake_case or space-separated text to lowerCamelCase.

    Examples:
        "Superman" -> "superman"
        "BadassSuperman" -> "badassSuperman"
        "EVIL_PLAN" -> "evilPlan"
        "HTTPServer" -> "httpServer"
        "Vilain2Friends" -> "vilain2Friends"

    Args:
        text: The text to convert

    Returns:
        lowerCamelCase string
    """
    if not text:
        return ""
    words = _split_into_words(_normalize_separators(text))
    if not words:
        return ""
    return words[0].lower() + "".join(word.capitalize() for word in words[1:])
