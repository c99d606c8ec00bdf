"""Gutter message model: normalisation, deterministic ordering and merging by location."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

_LOGGER = logging.getLogger("GutterMessage.Client")

_PARAGRAPH_SPLIT = re.compile(r"\r\n|\r|\n")

DEFAULT_BULLET = "* "


class Severity(IntEnum):
    """Diagnostic kind. The integer value is the tie-break rank (higher sorts first)."""

    INFO = 0
    WARN = 1
    ERROR = 2

    @classmethod
    def coerce(cls, value: Any) -> "Severity":
        """Accept a Severity, its ordinal (micro's INFO=0/WARN=1/ERROR=2) or its name."""
        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise ValueError(f"unknown severity: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"unknown severity: {value!r}") from None
        if isinstance(value, str):
            token = value.strip().upper()
            if token == "WARNING":
                token = "WARN"
            try:
                return cls[token]
            except KeyError:
                raise ValueError(f"unknown severity: {value!r}") from None
        raise ValueError(f"unknown severity: {value!r}")


@dataclass(frozen=True, order=True)
class Location:
    """Buffer position; ordering is by line, then column."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(f"location must be non-negative: ({self.line}, {self.column})")


@dataclass(frozen=True)
class RawMessage:
    """A diagnostic exactly as the host reports it."""

    text: str
    start: Location
    end: Location
    severity: Severity
    owner: str

    def __post_init__(self) -> None:
        if not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity.coerce(self.severity))


@dataclass(frozen=True)
class SortedMessage:
    """A RawMessage whose body has been split into paragraphs."""

    start: Location
    end: Location
    severity: Severity
    owner: str
    paragraphs: Tuple[str, ...]

    @classmethod
    def from_raw(cls, raw: RawMessage) -> "SortedMessage":
        return cls(
            start=raw.start,
            end=raw.end,
            severity=raw.severity,
            owner=raw.owner,
            paragraphs=tuple(_PARAGRAPH_SPLIT.split(raw.text)),
        )

    @property
    def header(self) -> str:
        return f"[{self.severity.name}] {self.owner}"


@dataclass(frozen=True)
class MergedEntry:
    """Every message sharing one start location, composed into a single text."""

    location: Location
    rendered_text: str
    messages: Tuple[SortedMessage, ...] = ()


OrderedIndex = Tuple[MergedEntry, ...]


def sort_key(message: SortedMessage) -> Tuple[int, int, int, str, Tuple[str, ...]]:
    """Key for the total order used when building the index.

    Location ascending, then severity descending (ERROR before WARN before
    INFO), then owner ascending. The body is the final key so that messages
    equal on every visible field still have a stable, input-independent order.
    """
    return (
        message.start.line,
        message.start.column,
        -int(message.severity),
        message.owner,
        message.paragraphs,
    )


def compare_messages(a: SortedMessage, b: SortedMessage) -> int:
    """Three-way comparison matching :func:`sort_key`; negative when ``a`` sorts first."""
    key_a = sort_key(a)
    key_b = sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def compose_entry_text(messages: Sequence[SortedMessage], bullet: str = DEFAULT_BULLET) -> str:
    """Render the messages of one location as header/body lines.

    Messages are grouped by (severity, owner) in order of first appearance.
    Each group gets a ``[SEVERITY] owner`` header followed by its body, or by
    one bulleted body per message when the group holds more than one.
    """
    groups: Dict[Tuple[Severity, str], List[SortedMessage]] = {}
    for message in messages:
        groups.setdefault((message.severity, message.owner), []).append(message)

    lines: List[str] = []
    for members in groups.values():
        lines.append(members[0].header)
        if len(members) == 1:
            lines.extend(members[0].paragraphs)
            continue
        for member in members:
            first, *rest = member.paragraphs
            lines.append(f"{bullet}{first}")
            lines.extend(rest)
    return "\n".join(lines)


def load(raw: Iterable[RawMessage], *, bullet: str = DEFAULT_BULLET) -> OrderedIndex:
    """Build the navigable index from the complete set of host messages.

    An empty input produces an empty index; callers report that as "no
    messages" rather than treating it as a failure.
    """
    ordered = sorted((SortedMessage.from_raw(item) for item in raw), key=sort_key)
    if not ordered:
        return ()

    entries: List[MergedEntry] = []
    run: List[SortedMessage] = [ordered[0]]
    for message in ordered[1:]:
        if message.start == run[0].start:
            run.append(message)
            continue
        entries.append(_merge_run(run, bullet))
        run = [message]
    entries.append(_merge_run(run, bullet))

    _LOGGER.debug("Loaded %d gutter messages into %d entries", len(ordered), len(entries))
    return tuple(entries)


def _merge_run(run: Sequence[SortedMessage], bullet: str) -> MergedEntry:
    return MergedEntry(
        location=run[0].start,
        rendered_text=compose_entry_text(run, bullet),
        messages=tuple(run),
    )


def find_at_line(index: Sequence[MergedEntry], line: int) -> Optional[int]:
    """Return the position of the first entry on ``line``, or ``None``."""
    for position, entry in enumerate(index):
        if entry.location.line == line:
            return position
    return None
