"""Lexical analysis of `.cub` scene description files."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Iterable, List, Optional, Union

_CHUNK = re.compile(r"[^ \t\n]+")
_LEXEME = re.compile(r",|[^,]+")
_MAP_CHARS = frozenset("01NSEW")


class LexError(Exception):
    """Raised when a scene file cannot be read."""


class Category(Enum):
    """Token categories."""

    SEPARATOR = 0
    IDENTIFIER = 1
    LITERAL = 2


class Identifier(IntEnum):
    """Scene element identifiers."""

    EA = 0
    NO = 1
    WE = 2
    SO = 3
    F = 4
    C = 5


@dataclass
class Token:
    """A lexical token with its position in the file (both zero based)."""

    category: Category
    value: str
    line: int
    pos: int
    identifier: Optional[Identifier] = None
    valid_num: bool = False
    valid_map: bool = False

    @property
    def length(self) -> int:
        return len(self.value)


def _evaluate(value: str, line: int, pos: int) -> Token:
    if value in Identifier.__members__:
        return Token(Category.IDENTIFIER, value, line, pos, Identifier[value])
    if value == ",":
        return Token(Category.SEPARATOR, value, line, pos)
    return Token(
        Category.LITERAL,
        value,
        line,
        pos,
        valid_num=value.isascii() and value.isdigit(),
        valid_map=set(value) <= _MAP_CHARS,
    )


def scan_lines(lines: Iterable[str]) -> List[Token]:
    """Split lines into tokens on blanks, tabs and newlines, and on commas."""
    tokens: List[Token] = []
    for line_no, line in enumerate(lines):
        for chunk in _CHUNK.finditer(line):
            for lexeme in _LEXEME.finditer(chunk.group()):
                tokens.append(
                    _evaluate(lexeme.group(), line_no, chunk.start() + lexeme.start())
                )
    return tokens


def lex_file(path: Union[str, Path]) -> List[Token]:
    """Read a scene file and return its tokens."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape") as handle:
            return scan_lines(handle)
    except OSError as exc:
        raise LexError(f"Unable to open `{path}'") from exc