"""Greedy word wrap into a rectangular block of terminal cells (pure, no Qt)."""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Sequence, Tuple, Union


@dataclass(frozen=True)
class Word:
    """A run of text ending at (and including) one space, or at the end of a paragraph."""

    text: str


@dataclass(frozen=True)
class Break:
    """Hard line break between paragraphs."""


BREAK = Break()

Token = Union[Word, Break]


@dataclass(frozen=True)
class WrappedBlock:
    lines: Tuple[str, ...]
    width: int
    height: int

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@lru_cache(maxsize=4096)
def char_width(char: str) -> int:
    """Number of terminal cells ``char`` occupies."""
    code = ord(char)
    if code < 0x20 or 0x7F <= code < 0xA0:
        return 0
    if unicodedata.combining(char):
        return 0
    if unicodedata.category(char) in ("Mn", "Me", "Cf"):
        return 0
    if unicodedata.east_asian_width(char) in ("W", "F"):
        return 2
    return 1


def visual_width(text: str) -> int:
    return sum(char_width(char) for char in text)


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into words (trailing space kept) with a Break between lines."""
    tokens: List[Token] = []
    for number, paragraph in enumerate(text.split("\n")):
        if number:
            tokens.append(BREAK)
        pieces = paragraph.split(" ")
        for position, piece in enumerate(pieces):
            if position < len(pieces) - 1:
                tokens.append(Word(piece + " "))
            elif piece:
                tokens.append(Word(piece))
    return tokens


def wrap(source: Union[str, Sequence[Token]], max_width: int) -> WrappedBlock:
    """Fill lines greedily so none exceeds ``max_width - 1`` cells.

    The last column is kept free so the block never touches the right edge of
    the panel. A single word wider than that is never split; it gets a
    line of its own and the block grows past ``max_width``.
    """
    if max_width < 1:
        raise ValueError(f"max_width must be at least 1, got {max_width}")
    tokens = tokenize(source) if isinstance(source, str) else source
    usable = max_width - 1

    raw_lines: List[str] = []
    current: List[str] = []
    used = 0
    for token in tokens:
        if isinstance(token, Break):
            raw_lines.append("".join(current))
            current = []
            used = 0
            continue
        width = visual_width(token.text)
        if current and used + width > usable:
            raw_lines.append("".join(current))
            current = [token.text]
            used = width
            continue
        current.append(token.text)
        used += width
    raw_lines.append("".join(current))

    trimmed = [line.rstrip(" ") for line in raw_lines]
    widths = [visual_width(line) for line in trimmed]
    longest = max(widths)
    lines = tuple(line + " " * (longest - width) for line, width in zip(trimmed, widths))
    return WrappedBlock(lines=lines, width=longest, height=len(lines))
