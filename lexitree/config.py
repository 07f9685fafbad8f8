#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Scanner configuration – an immutable value with built-in default tables.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Mapping, Optional, Tuple

from lexitree.errors import ConfigError

DEFAULT_KEYWORDS: Tuple[str, ...] = (
    "fn",
    "int",
    "float",
    "bool",
    "char",
    "string",
    "if",
    "else",
    "while",
    "for",
    "return",
    "print",
    "true",
    "false",
    "null",
    "undefined",
    "let",
    "const",
    "var",
)

# Longest first; the scanner takes the first operator that matches.
DEFAULT_OPERATORS: Tuple[str, ...] = (
    "==",
    "!=",
    "<=",
    ">=",
    "&&",
    "||",
    "++",
    "--",
    "+=",
    "-=",
    "*=",
    "/=",
    "+",
    "-",
    "*",
    "/",
    "%",
    "=",
    "<",
    ">",
    "!",
    "&",
    "|",
    "^",
    "~",
    "?",
    ":",
)

DEFAULT_DELIMITERS: Tuple[str, ...] = ("(", ")", "{", "}", "[", "]", ",", ";", ".")


def _table(value: Optional[Iterable[str]], default: Tuple[str, ...]) -> Tuple[str, ...]:
    if value is None:
        return default
    if isinstance(value, str):
        raise ConfigError(f"expected a list of strings, got the string {value!r}")
    table = tuple(value)
    for item in table:
        if not isinstance(item, str):
            raise ConfigError(f"table entries must be strings, got {item!r}")
    return table or default


@dataclass(frozen=True)
class ScannerConfig:
    """Options controlling what the scanner emits and how it classifies words.

    Unset or empty tables fall back to the defaults above. ``operators`` is
    kept sorted by descending length so that ``==`` wins over ``=``.
    """

    include_whitespace: bool = False
    include_comments: bool = False
    keywords: Tuple[str, ...] = DEFAULT_KEYWORDS
    operators: Tuple[str, ...] = DEFAULT_OPERATORS
    delimiters: Tuple[str, ...] = DEFAULT_DELIMITERS
    skip_unknown: bool = True
    case_sensitive: bool = True

    def __post_init__(self):
        keywords = _table(self.keywords, DEFAULT_KEYWORDS)
        operators = _table(self.operators, DEFAULT_OPERATORS)
        delimiters = _table(self.delimiters, DEFAULT_DELIMITERS)

        for op in operators:
            if not op:
                raise ConfigError("operators must not be empty strings")
        for delim in delimiters:
            if len(delim) != 1:
                raise ConfigError(f"delimiter {delim!r} must be a single character")

        # sorted() is stable: equal-length operators keep their given order
        operators = tuple(sorted(operators, key=len, reverse=True))

        object.__setattr__(self, "keywords", keywords)
        object.__setattr__(self, "operators", operators)
        object.__setattr__(self, "delimiters", delimiters)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "ScannerConfig":
        """Build a config from a plain dict, e.g. one loaded from a JSON file."""
        if not mapping:
            return cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigError(f"unknown scanner option(s): {', '.join(unknown)}")
        return cls(**dict(mapping))

    def replace(self, **changes: Any) -> "ScannerConfig":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


DEFAULT_CONFIG = ScannerConfig()
