"""
Heading-delimited sections of a contact document.

A section is a heading line (1–6 ``#``, whitespace, title) plus every line
up to the next heading of any level or the end of the text. Headings are
located by a line-indexed scan; the first line whose title matches
(case-insensitive) wins. Offsets returned here are character offsets into
the original text, so replace/append never disturb other sections.

Replace/append policy:
    - heading present → only the body is replaced; the heading line is kept
      as written (level and case), text before and after byte for byte
    - heading absent → the block is appended after a blank line
    - empty block → nothing is appended; an existing section is removed
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field

_HEADING_LINE = re.compile(r"(#{1,6})[ \t]+(.*?)[ \t]*")


@dataclass(frozen=True)
class HeadingMatch:
    """A located heading line.

    ``offset`` is where the line starts, ``end`` where it ends (before the
    line break), ``text`` the full heading line as written.
    """

    offset: int
    end: int
    level: int
    title: str
    text: str


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    position: int


def _iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, line)`` pairs, line breaks stripped."""
    offset = 0
    for raw in text.splitlines(keepends=True):
        yield offset, raw.rstrip("\r\n")
        offset += len(raw)


def _match_heading(line: str) -> re.Match[str] | None:
    return _HEADING_LINE.fullmatch(line)


def iter_headings(text: str) -> Iterator[HeadingMatch]:
    """Every heading line in document order."""
    for offset, line in _iter_lines(text):
        match = _match_heading(line)
        if match is None or not match.group(2):
            continue
        yield HeadingMatch(
            offset=offset,
            end=offset + len(line),
            level=len(match.group(1)),
            title=match.group(2),
            text=line,
        )


def locate_heading(text: str, name: str) -> HeadingMatch | None:
    """First heading whose title equals ``name``, ignoring case."""
    wanted = name.strip().casefold()
    for heading in iter_headings(text):
        if heading.title.casefold() == wanted:
            return heading
    return None


def _next_heading_offset(text: str, after: int) -> int:
    for offset, line in _iter_lines(text):
        if offset > after and _match_heading(line) is not None:
            return offset
    return len(text)


def section_bounds(text: str, name: str) -> tuple[HeadingMatch, int, int] | None:
    """``(heading, body_start, body_end)`` for a named section."""
    heading = locate_heading(text, name)
    if heading is None:
        return None
    return heading, heading.end, _next_heading_offset(text, heading.offset)


def find_section(text: str, name: str) -> str | None:
    """Stripped body of a named section, ``None`` if the heading is missing."""
    bounds = section_bounds(text, name)
    if bounds is None:
        return None
    _, start, end = bounds
    return text[start:end].strip()


def append_section(text: str, block: str) -> str:
    """Append ``block`` after a blank line. An empty block is a no-op."""
    if not block:
        return text
    head = text.rstrip()
    if not head:
        return f"{block}\n"
    return f"{head}\n\n{block}\n"


def replace_section(text: str, name: str, block: str) -> str:
    """Replace the body of the named section with the body of ``block``.

    ``block`` carries its own heading line, which is only used when the
    section has to be appended (see :func:`append_section`); an existing
    heading line is kept as written.
    """
    bounds = section_bounds(text, name)
    if bounds is None:
        return append_section(text, block)

    heading, _, end = bounds
    before = text[: heading.offset]
    after = text[end:]

    if not block:
        head = before.rstrip()
        if head and after:
            return f"{head}\n\n{after}"
        return f"{head}\n" if head else after

    body = block.partition("\n")[2]
    section = f"{heading.text}\n{body}" if body else heading.text
    if after:
        return f"{before}{section}\n\n{after}"
    return f"{before}{section}\n"


def extract_headings(text: str) -> list[Heading]:
    return [Heading(level=h.level, text=h.title, position=h.offset) for h in iter_headings(text)]


def ensure_section_order(text: str, headings: list[str]) -> str:
    """Move the named sections, in the given order, to the end of the text."""
    sections: list[str] = []
    remaining = text
    for name in headings:
        bounds = section_bounds(remaining, name)
        if bounds is None:
            continue
        heading, _, end = bounds
        sections.append(remaining[heading.offset:end].strip())
        remaining = remaining[: heading.offset] + remaining[end:]

    if not sections:
        return text
    parts = [remaining.strip(), *sections] if remaining.strip() else sections
    return "\n\n".join(parts) + "\n"


# ── Contact section ──────────────────────────────────────────────────────

_EMAIL = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_URL = re.compile(r"https?://\S+")
_PHONE = re.compile(r"\+?\(?\d[\d \-().]*\d")
_ADDRESS_HINT = re.compile(r"street|avenue|road|drive|lane|boulevard|st\.|ave\.|rd\.|dr\.", re.IGNORECASE)
_LABEL_PREFIX = re.compile(r"^(email|phone|url|address):", re.IGNORECASE)
_BULLET = re.compile(r"-\s+(.+)")


@dataclass
class ContactField:
    value: str
    type: str | None = None


@dataclass
class ContactSection:
    emails: list[ContactField] = field(default_factory=list)
    phones: list[ContactField] = field(default_factory=list)
    urls: list[ContactField] = field(default_factory=list)
    addresses: list[ContactField] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.emails or self.phones or self.urls or self.addresses)


def _label(line: str, start: int) -> str | None:
    label = _LABEL_PREFIX.sub("", line[:start].strip()).strip()
    return label or None


def _classify(line: str, section: ContactSection) -> None:
    if match := _EMAIL.search(line):
        section.emails.append(ContactField(match.group(0), _label(line, match.start())))
        return
    if match := _URL.search(line):
        section.urls.append(ContactField(match.group(0), _label(line, match.start())))
        return
    match = _PHONE.search(line)
    if match and sum(ch.isdigit() for ch in match.group(0)) >= 7:
        section.phones.append(ContactField(match.group(0).strip(), _label(line, match.start())))
        return
    if _ADDRESS_HINT.search(line):
        # Addresses keep the whole line; only an explicit "address:" prefix is dropped.
        section.addresses.append(ContactField(_LABEL_PREFIX.sub("", line).strip()))


def parse_contact_section(text: str, heading: str = "Contact") -> ContactSection:
    """Classify the bullets under the ``Contact`` heading."""
    section = ContactSection()
    body = find_section(text, heading)
    if not body:
        return section
    for _, line in _iter_lines(body):
        match = _BULLET.fullmatch(line.strip())
        if match:
            _classify(match.group(1).strip(), section)
    return section


def generate_contact_section(section: ContactSection, heading: str = "Contact") -> str:
    """Render a ``Contact`` section; empty data renders as ``""``."""
    if section.is_empty():
        return ""
    lines = [f"## {heading}", ""]
    for entry in [*section.emails, *section.phones, *section.urls, *section.addresses]:
        label = f"{entry.type} " if entry.type else ""
        lines.append(f"- {label}{entry.value}")
    return "\n".join(lines)


__all__ = [
    "HeadingMatch",
    "Heading",
    "iter_headings",
    "locate_heading",
    "section_bounds",
    "find_section",
    "append_section",
    "replace_section",
    "extract_headings",
    "ensure_section_order",
    "ContactField",
    "ContactSection",
    "parse_contact_section",
    "generate_contact_section",
]
