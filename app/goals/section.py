"""Line-oriented locate / parse / rewrite of the ``## Weekly Goals`` section.

A document is treated as a flat list of lines. The managed section is the
half-open range ``[start, end)`` from the first ``## Weekly Goals`` heading
to the next heading of any level (or end of document). Everything outside
that range is carried through a rewrite untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, Sequence

from app.goals.models import GoalRecord

SECTION_TITLE = "## Weekly Goals"

SECTION_HEADING_RE = re.compile(r"^\s*##\s+weekly goals\s*$", re.IGNORECASE)
HEADING_RE = re.compile(r"^#{1,6}\s+")
TITLE_RE = re.compile(r"^#\s+")
ITEM_RE = re.compile(r"^\s*-\s+\[([ xX])\]\s+(.*)$")


@dataclass(frozen=True, slots=True)
class ManagedSection:
    start: int  # index of the heading line
    end: int  # exclusive: next heading or len(lines)


@dataclass(frozen=True, slots=True)
class Document:
    """Document text split on ``\\n``, remembering how to join it back.

    A line keeps its own ``\\r`` when it had one, so notes with mixed line
    endings round-trip byte for byte. `eol` is the dominant terminator and
    is used for lines the writer adds.
    """

    lines: list[str]
    eol: str = "\n"
    trailing_newline: bool = True

    @classmethod
    def from_text(cls, text: str) -> Document:
        crlf = text.count("\r\n")
        eol = "\r\n" if crlf and crlf * 2 >= text.count("\n") else "\n"
        if not text:
            return cls(lines=[], eol=eol, trailing_newline=False)
        lines = text.split("\n")
        trailing = lines[-1] == ""
        if trailing:
            lines.pop()
        return cls(lines=lines, eol=eol, trailing_newline=trailing)

    def new_line(self, line: str) -> str:
        """`line` as it must be stored to end with the dominant terminator."""
        return line + "\r" if self.eol == "\r\n" else line

    def to_text(self) -> str:
        if not self.lines:
            return ""
        body = "\n".join(self.lines)
        return body + "\n" if self.trailing_newline else body


# ---------------------------------------------------------------------------
# Locate / parse
# ---------------------------------------------------------------------------


def locate(lines: Sequence[str]) -> ManagedSection | None:
    """Find the first ``## Weekly Goals`` section. Later duplicates are ignored."""
    start = -1
    for i, line in enumerate(lines):
        if SECTION_HEADING_RE.match(line):
            start = i
            break
    if start < 0:
        return None

    end = len(lines)
    for i in range(start + 1, len(lines)):
        if HEADING_RE.match(lines[i]):
            end = i
            break
    return ManagedSection(start=start, end=end)


def parse_items(lines: Iterable[str]) -> list[GoalRecord]:
    """Checkbox list items become goals; every other line is skipped."""
    goals: list[GoalRecord] = []
    for line in lines:
        m = ITEM_RE.match(line)
        if m:
            goals.append(GoalRecord(text=m.group(2).strip(), checked=m.group(1) in "xX"))
    return goals


def extract_goals(lines: Sequence[str]) -> list[GoalRecord]:
    section = locate(lines)
    if section is None:
        return []
    return parse_items(lines[section.start + 1 : section.end])


# ---------------------------------------------------------------------------
# Render / splice
# ---------------------------------------------------------------------------


def render_item(goal: GoalRecord) -> str:
    return f"- [{'x' if goal.checked else ' '}] {goal.text}"


def render(goals: Iterable[GoalRecord]) -> list[str]:
    return [SECTION_TITLE, *(render_item(g) for g in goals)]


def _has_content(lines: Sequence[str]) -> bool:
    return any(line.strip() for line in lines)


def apply(document: Document, goals: Sequence[GoalRecord], period: str) -> Document:
    """Return `document` with its managed section set to `goals`.

    - Existing section: lines ``[start, end)`` are replaced. Blank lines at
      the tail of the range separate it from what follows and are kept.
    - No section, first line is a ``# `` title: the section goes right
      under the title.
    - Otherwise a ``# <period>`` title is synthesized above the section
      and any previous content follows below.

    Without a section, lines that hold only whitespace are not content:
    when nothing else follows the title (or the note is blank), they are
    dropped and the note ends with the rendered section.
    """
    lines = document.lines
    blank = document.new_line("")
    rendered = [document.new_line(line) for line in render(goals)]

    section = locate(lines)
    if section is not None:
        tail = section.end
        while tail > section.start + 1 and not lines[tail - 1].strip():
            tail -= 1
        return replace(document, lines=[*lines[: section.start], *rendered, *lines[tail:]])

    if _has_content(lines) and TITLE_RE.match(lines[0]):
        head, rest = [lines[0]], lines[1:]
    else:
        head, rest = [document.new_line(f"# {period}")], lines

    new_lines = [*head, blank, *rendered]
    if not _has_content(rest):
        return replace(document, lines=new_lines, trailing_newline=True)
    if rest[0].strip():
        new_lines.append(blank)
    return replace(document, lines=[*new_lines, *rest])
