"""
Configuration for the zod schema generator pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Callable

from ..utils import DEFAULT_SCHEMA_SUFFIX, to_lower_camel_case

# camelCase keys accepted in configuration files
_CAMEL_CASE_KEYS = {
    "maxRun": "max_run",
    "keepComments": "keep_comments",
    "skipParseJSDoc": "skip_parse_jsdoc",
    "addGenerationComment": "add_generation_comment",
    "namePattern": "name_pattern",
    "schemaNameSuffix": "schema_name_suffix",
}


def accept_all(name: str) -> bool:
    """Default name filter."""
    return True


def default_schema_name(name: str) -> str:
    """Default naming function: `BadassSuperman` -> `badassSupermanSchema`."""
    return to_lower_camel_case(name) + DEFAULT_SCHEMA_SUFFIX


def pattern_name_filter(pattern: str) -> Callable[[str], bool]:
    """Name filter keeping the names where the regular expression is found."""
    compiled = re.compile(pattern)
    return lambda name: compiled.search(name) is not None


def suffixed_schema_name(suffix: str) -> Callable[[str], str]:
    """Naming function: lower camel case type name followed by `suffix`."""
    return lambda name: to_lower_camel_case(name) + suffix


@dataclass
class CodeGeneratorConfig:
    """Configuration options for schema generation."""

    # Maximum number of dependency resolution passes
    max_run: int = 10

    # Predicate selecting the declarations that get a schema
    name_filter: Callable[[str], bool] = accept_all

    # Naming function for the generated schema constants
    get_schema_name: Callable[[str], str] = default_schema_name

    # Reproduce JSDoc comments in the schema file
    keep_comments: bool = False

    # Object schemas reject unknown keys (.strict())
    strict: bool = False

    # Ignore JSDoc tags (no refinements from @minimum, @format, ...)
    skip_parse_jsdoc: bool = False

    # Add generation comment at top of generated files
    add_generation_comment: bool = True

    # Serializable sources of name_filter / get_schema_name; when set they
    # replace the callables
    name_pattern: str = ""
    schema_name_suffix: str = DEFAULT_SCHEMA_SUFFIX

    def __post_init__(self):
        if self.name_pattern:
            self.name_filter = pattern_name_filter(self.name_pattern)
        if self.schema_name_suffix != DEFAULT_SCHEMA_SUFFIX:
            self.get_schema_name = suffixed_schema_name(self.schema_name_suffix)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary (e.g. a JSON config file)."""
        # Callables cannot come from a dictionary
        names = {f.name for f in fields(CodeGeneratorConfig)} - {"name_filter", "get_schema_name"}
        kwargs = {}
        for k, v in d.items():
            k = _CAMEL_CASE_KEYS.get(k, k)
            if k in names:
                kwargs[k] = v
        return CodeGeneratorConfig(**kwargs)

    def to_dict(self) -> dict:
        """Convert the serializable part of the config to a dictionary."""
        return {
            "max_run": self.max_run,
            "keep_comments": self.keep_comments,
            "strict": self.strict,
            "skip_parse_jsdoc": self.skip_parse_jsdoc,
            "add_generation_comment": self.add_generation_comment,
            "name_pattern": self.name_pattern,
            "schema_name_suffix": self.schema_name_suffix,
        }
