"""Line-oriented stylesheet feature extraction."""

from __future__ import annotations

from typing import Iterator, Sequence

from ..domain.models import RawOccurrence
from .stylesheet_patterns import STYLESHEET_RULES, StylesheetRule

STYLESHEET_KIND = "stylesheet"


def extract_declaration_value(line: str, start: int) -> str:
    """
    Return the declaration value following a match at ``start``.

    Scans forward to the next colon, then to the next semicolon or the line
    end. Minified lines holding several declarations can yield a neighbouring
    declaration's value; that approximation is accepted.
    """

    colon = line.find(":", start)
    if colon == -1:
        return ""
    semicolon = line.find(";", colon)
    end = len(line) if semicolon == -1 else semicolon
    return line[colon + 1 : end].strip()


def iter_stylesheet_occurrences(
    text: str, rules: Sequence[StylesheetRule] = STYLESHEET_RULES
) -> Iterator[RawOccurrence]:
    """Yield one occurrence per rule match, line by line, in table order."""

    for line_index, line in enumerate(text.split("\n")):
        for rule in rules:
            for match in rule.pattern.finditer(line):
                value = rule.value or extract_declaration_value(line, match.start())
                yield RawOccurrence(
                    kind=STYLESHEET_KIND,
                    display_name=rule.property,
                    line=line_index + 1,
                    column=match.start() + 1,
                    key=rule.key,
                    property=rule.property,
                    value=value,
                )


def extract_stylesheet_occurrences(text: str) -> list[RawOccurrence]:
    return list(iter_stylesheet_occurrences(text))
