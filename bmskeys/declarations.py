"""Keysound declarations: the ``#WAVxx filename`` table of a chart."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Final

from bmskeys.chart_lines import Line, NoteLine
from bmskeys.errors import DeclarationError, KeysoundIdError
from bmskeys.keysound_id import decode, encode

DECLARATION_PREFIX: Final[str] = "#WAV"
FILENAME_OFFSET: Final[int] = 7

# "#WAV" + id (2) + separator, or end of line. "#WAVCMD ..." is not a declaration.
_DECLARATION = re.compile(r"^#WAV.{2}(?:\s|$)")


def is_declaration(raw: str) -> bool:
    return _DECLARATION.match(raw) is not None


@dataclass(frozen=True)
class KeysoundDeclaration:
    """
    Binds a keysound id to an audio file.

    Attributes:
        keysound_id: Decoded id from the two characters after ``#WAV``.
        filename:    Everything after the separator, unvalidated.
    """

    keysound_id: int
    filename: str

    @property
    def token(self) -> str:
        return encode(self.keysound_id)

    @property
    def text(self) -> str:
        return f"{DECLARATION_PREFIX}{self.token} {self.filename}".rstrip()

    def __str__(self) -> str:
        return self.text

    @classmethod
    def parse(cls, raw: str, line_number: int = 0) -> KeysoundDeclaration:
        """
        Parse a ``#WAVxx filename`` line.

        Raises:
            DeclarationError: If the line lacks the id or its separator, or the
                id is not base-36.
        """
        text = raw.rstrip()
        if not is_declaration(text):
            raise DeclarationError(line_number, text, "expected #WAVxx followed by a space")
        token = text[len(DECLARATION_PREFIX):FILENAME_OFFSET - 1]
        try:
            keysound_id = decode(token)
        except KeysoundIdError as exc:
            raise DeclarationError(line_number, text, str(exc)) from exc
        return cls(keysound_id=keysound_id, filename=text[FILENAME_OFFSET:])


class DeclarationTable:
    """
    Ordered keysound declarations.

    Duplicate ids are kept in file order so they round-trip; lookups see the
    last declaration for an id. ``remove`` drops every declaration of an id,
    ``discard`` only the given entries.
    """

    def __init__(self, declarations: Iterable[KeysoundDeclaration] = ()) -> None:
        self._declarations: list[KeysoundDeclaration] = list(declarations)

    def __iter__(self) -> Iterator[KeysoundDeclaration]:
        return iter(self._declarations)

    def __len__(self) -> int:
        return len(self._declarations)

    def __bool__(self) -> bool:
        return bool(self._declarations)

    def __contains__(self, keysound_id: object) -> bool:
        return isinstance(keysound_id, int) and self.contains(keysound_id)

    def add(self, declaration: KeysoundDeclaration) -> None:
        self._declarations.append(declaration)

    def lookup(self, keysound_id: int) -> KeysoundDeclaration | None:
        for declaration in reversed(self._declarations):
            if declaration.keysound_id == keysound_id:
                return declaration
        return None

    def contains(self, keysound_id: int) -> bool:
        return self.lookup(keysound_id) is not None

    def remove(self, keysound_id: int) -> list[KeysoundDeclaration]:
        """Drop every declaration of ``keysound_id`` and return what was dropped."""
        removed = [d for d in self._declarations if d.keysound_id == keysound_id]
        self._declarations = [d for d in self._declarations if d.keysound_id != keysound_id]
        return removed

    def discard(self, declarations: Iterable[KeysoundDeclaration]) -> list[KeysoundDeclaration]:
        """Drop exactly the given declaration objects, leaving same-id duplicates."""
        targets = {id(declaration) for declaration in declarations}
        removed = [d for d in self._declarations if id(d) in targets]
        self._declarations = [d for d in self._declarations if id(d) not in targets]
        return removed

    def filenames(self) -> set[str]:
        return {declaration.filename for declaration in self._declarations}

    def unused(self, lines: Iterable[Line]) -> list[KeysoundDeclaration]:
        """
        Declarations no note line refers to, in declaration order.

        Args:
            lines: The lines to search, normally the chart's tail.
        """
        notes = [line for line in lines if isinstance(line, NoteLine)]
        return [
            declaration
            for declaration in self._declarations
            if not any(note.uses_keysound(declaration.keysound_id) for note in notes)
        ]
