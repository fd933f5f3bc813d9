"""Directive model and tag parser.

A tag is a comma-separated list of directives; each directive is a validator
name optionally followed by `:` and `|`-separated options:

    "not_empty,min:3,max:20"
    "numeric,min:1,max:100"
    "custom:a|b"

Whitespace around names and options is ignored. Options are kept as strings;
interpreting them is the validator's job.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from tagvalidate.core.errors import AppError, Ok, Result, sequence_results, tag_syntax_error

DIRECTIVE_SEPARATOR = ","
OPTION_MARKER = ":"
OPTION_SEPARATOR = "|"

_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


@dataclass(frozen=True, slots=True)
class Directive:
    """One validator invocation parsed from a tag."""
    name: str
    options: tuple[str, ...] = ()

    def __str__(self) -> str:
        if not self.options:
            return self.name
        return f"{self.name}{OPTION_MARKER}{OPTION_SEPARATOR.join(self.options)}"


def _parse_directive(tag: str, segment: str) -> Result[Directive, AppError]:
    name, marker, raw_options = segment.partition(OPTION_MARKER)
    name = name.strip()

    if not name:
        return tag_syntax_error(tag, "empty directive")
    if not _NAME.fullmatch(name):
        return tag_syntax_error(tag, f"invalid validator name '{name}'")
    if not marker:
        return Ok(Directive(name))

    options = tuple(option.strip() for option in raw_options.split(OPTION_SEPARATOR))
    if not any(options):
        return tag_syntax_error(tag, f"directive '{name}' has '{OPTION_MARKER}' but no options")
    if not all(options):
        return tag_syntax_error(tag, f"directive '{name}' has an empty option")
    return Ok(Directive(name, options))


def parse_tag(tag: str | None) -> Result[tuple[Directive, ...], AppError]:
    """Parse tag text into directives, in declared order.

    A missing or blank tag yields no directives. Any malformed segment fails
    the whole tag.
    """
    if tag is None or not tag.strip():
        return Ok(())
    segments = tag.split(DIRECTIVE_SEPARATOR)
    return sequence_results([_parse_directive(tag, segment) for segment in segments]).map(tuple)
