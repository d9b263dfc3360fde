"""Formatter for the semi-structured details text of a step.

The generator writes details as a loose outline mixing four kinds of line:

    --- Where to find your SDK path ---
    1. Open Android Studio.
       a. Go to 'More Actions' -> 'SDK Manager'.
    Plain paragraph text.

Markers are not guaranteed to start a line, so the text is normalized
before it is split and classified.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

HEADER_MARKER = "---"

# Header text must not be empty, so a plain run of dashes never splits.
_HEADER_SPLIT = re.compile(r"(---+[^-\n].*?---+)")
# A marker must not be glued to a preceding word, digit or dot ("v2.0", "etc."),
# and must be followed by whitespace.
_NUMBERED_BREAK = re.compile(r"\s*(?<![\w.])(\d+\.)(?=\s)")
_LETTERED_BREAK = re.compile(r"\s*(?<![\w.])([a-z]\.)(?=\s)")

_LETTERED_LINE = re.compile(r"^([a-z])\.\s+(.*)$")
_NUMBERED_LINE = re.compile(r"^(\d+)\.\s+(.*)$")


@dataclass(frozen=True)
class Header:
    text: str


@dataclass(frozen=True)
class LetteredItem:
    letter: str
    text: str


@dataclass(frozen=True)
class NumberedItem:
    number: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    text: str


DetailBlock = Header | LetteredItem | NumberedItem | Paragraph


def _is_header(line: str) -> bool:
    return (
        len(line) >= 2 * len(HEADER_MARKER)
        and line.startswith(HEADER_MARKER)
        and line.endswith(HEADER_MARKER)
    )


def normalize_details(text: str) -> str:
    """Put every header, numbered item and lettered item on its own line."""
    parts: list[str] = []
    for segment in _HEADER_SPLIT.split(text):
        if _is_header(segment):
            parts.append(f"\n{segment}\n")
        else:
            segment = _NUMBERED_BREAK.sub(r"\n\1", segment)
            segment = _LETTERED_BREAK.sub(r"\n\1", segment)
            parts.append(segment)
    return "".join(parts)


def classify_line(line: str) -> DetailBlock:
    """Classify one stripped line. Priority: header, lettered, numbered, paragraph."""
    if _is_header(line):
        return Header(line.strip("-").strip())

    match = _LETTERED_LINE.match(line)
    if match:
        return LetteredItem(match.group(1), match.group(2))

    match = _NUMBERED_LINE.match(line)
    if match:
        return NumberedItem(int(match.group(1)), match.group(2))

    return Paragraph(line)


def format_details(text: str | None) -> Iterator[DetailBlock]:
    """Yield typed blocks for ``text`` in input order.

    Empty or whitespace-only input yields nothing, and so do lines made only
    of dashes.
    """
    if not text:
        return
    for raw_line in normalize_details(text).split("\n"):
        line = raw_line.strip()
        if not line:
            continue
        block = classify_line(line)
        # Dash-only separator lines and empty headers carry no text.
        if isinstance(block, Header) and not block.text:
            continue
        if isinstance(block, Paragraph) and not line.strip("-"):
            continue
        yield block
