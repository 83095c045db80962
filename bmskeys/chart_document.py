"""ChartDocument: a whole BMS chart split into head, keysound table, and tail."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from loguru import logger

from bmskeys.chart_lines import Line, NoteLine, classify
from bmskeys.declarations import DeclarationTable, KeysoundDeclaration, is_declaration
from bmskeys.errors import ChannelProtectedError
from bmskeys.keysound_id import encode


@dataclass
class RewriteReport:
    """
    Outcome of ``ChartDocument.rewrite``.

    Attributes:
        old_id:   The id whose declaration was removed.
        new_id:   The id written in its place.
        replaced: Number of slots rewritten across all note lines.
        refused:  Protected-channel lines that still reference ``old_id``.
    """

    old_id: int
    new_id: int
    replaced: int = 0
    refused: list[NoteLine] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True when no reference to the old id was left behind."""
        return not self.refused


class ChartDocument:
    """
    In-memory chart, mutated in place and serialized on demand.

    The regions are found structurally: lines before the first ``#WAV``
    declaration form the head, declarations form the table, and every other
    line after the first declaration belongs to the tail.
    """

    def __init__(
        self,
        head: list[Line] | None = None,
        declarations: DeclarationTable | None = None,
        tail: list[Line] | None = None,
    ) -> None:
        self.head: list[Line] = head if head is not None else []
        self.declarations: DeclarationTable = (
            declarations if declarations is not None else DeclarationTable()
        )
        self.tail: list[Line] = tail if tail is not None else []

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, lines: Iterable[str]) -> ChartDocument:
        """
        Build a document from raw chart lines.

        Raises:
            DeclarationError: If any ``#WAV`` line has a bad id.
        """
        head: list[Line] = []
        declarations = DeclarationTable()
        tail: list[Line] = []

        for line_number, raw in enumerate(lines, start=1):
            raw = raw.rstrip()
            if is_declaration(raw):
                declarations.add(KeysoundDeclaration.parse(raw, line_number))
            elif declarations:
                tail.append(classify(raw))
            else:
                head.append(classify(raw))

        document = cls(head=head, declarations=declarations, tail=tail)
        logger.debug(
            "Parsed chart: {} head lines, {} keysounds, {} tail lines",
            len(head),
            len(declarations),
            len(tail),
        )
        return document

    @classmethod
    def from_text(cls, text: str) -> ChartDocument:
        return cls.parse(text.splitlines())

    @classmethod
    def empty(cls) -> ChartDocument:
        return cls()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def note_lines(self) -> Iterator[NoteLine]:
        for line in self.tail:
            if isinstance(line, NoteLine):
                yield line

    def keysound(self, keysound_id: int) -> KeysoundDeclaration | None:
        return self.declarations.lookup(keysound_id)

    def has_keysound(self, keysound_id: int) -> bool:
        return self.declarations.contains(keysound_id)

    def is_used(self, keysound_id: int) -> bool:
        """True if the id is declared and at least one note line references it."""
        if not self.has_keysound(keysound_id):
            return False
        return any(note.uses_keysound(keysound_id) for note in self.note_lines())

    def unused_keysounds(self) -> list[KeysoundDeclaration]:
        return self.declarations.unused(self.tail)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def remove_keysounds(self, keysound_ids: Iterable[int]) -> list[KeysoundDeclaration]:
        """Remove the declarations of every given id; note data is not touched."""
        removed: list[KeysoundDeclaration] = []
        for keysound_id in keysound_ids:
            removed.extend(self.declarations.remove(keysound_id))
        return removed

    def remove_declarations(
        self, declarations: Iterable[KeysoundDeclaration]
    ) -> list[KeysoundDeclaration]:
        """Remove these particular declarations; other declarations of the same id stay."""
        return self.declarations.discard(declarations)

    def rewrite(self, old_id: int, new_id: int) -> RewriteReport:
        """
        Point every playable reference to ``old_id`` at ``new_id``.

        The old declaration is removed first and unconditionally. Lines on
        protected channels keep their ``old_id`` slots; they are listed in the
        report's ``refused`` so callers can warn about the dangling references.
        Callers check ``has_keysound`` for both ids beforehand.
        """
        self.declarations.remove(old_id)
        report = RewriteReport(old_id=old_id, new_id=new_id)

        for note in self.note_lines():
            try:
                report.replaced += note.replace_keysounds(old_id, new_id)
            except ChannelProtectedError:
                if note.uses_keysound(old_id):
                    report.refused.append(note)

        if report.refused:
            logger.warning(
                "Keysound {} removed but still referenced by {} protected line(s)",
                encode(old_id),
                len(report.refused),
            )
        logger.debug(
            "Rewrote {} -> {}: {} slot(s)", encode(old_id), encode(new_id), report.replaced
        )
        return report

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def serialize(self) -> list[str]:
        lines = [line.text for line in self.head]
        lines.extend(declaration.text for declaration in self.declarations)
        lines.extend(line.text for line in self.tail)
        return lines

    def to_text(self) -> str:
        return "\n".join(self.serialize())
