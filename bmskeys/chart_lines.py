"""Chart line model: opaque lines, note lines, and the classifier between them."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Final

from bmskeys.errors import ChannelProtectedError, KeysoundIdError
from bmskeys.keysound_id import REST, TOKEN_WIDTH, decode, encode

# "#" + measure (3) + channel (2) + ":"
_NOTE_HEADER = re.compile(r"^#[A-Za-z0-9]{5}:")
_MEASURE_DIGITS = re.compile(r"[0-9]{3}")

BODY_OFFSET: Final[int] = 7

#: Channels decoding below this value ("10") carry BGM and control data.
NOTE_CHANNEL_FLOOR: Final[int] = decode("10")


def is_note_channel(channel: int) -> bool:
    """
    Return True if keysounds on ``channel`` may be rewritten.

    Every channel at or above "10" (36) is eligible, whatever its low digit.
    Channels below it, including the BGM lane "01", are protected.
    """
    return channel >= NOTE_CHANNEL_FLOOR


# ── Line variants ──────────────────────────────────────────────────────────────

class Line(ABC):
    """A single line of a chart, as it will be written back out."""

    @property
    @abstractmethod
    def text(self) -> str:
        """Canonical text of the line, without trailing whitespace."""

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class OpaqueLine(Line):
    """Headers, control statements, comments, and anything that is not a note line."""

    raw: str

    @property
    def text(self) -> str:
        return self.raw.rstrip()


@dataclass
class NoteLine(Line):
    """
    A parsed ``#MMMCC:`` line.

    Attributes:
        measure: Measure number, 0-999.
        channel: Decoded base-36 channel code.
        slots:   One keysound id per two-character token of the body.
    """

    measure: int
    channel: int
    slots: list[int] = field(default_factory=list)

    @property
    def text(self) -> str:
        body = "".join(encode(slot) for slot in self.slots)
        return f"#{self.measure:03d}{encode(self.channel)}:{body}"

    @property
    def is_note_channel(self) -> bool:
        return is_note_channel(self.channel)

    def keysounds_used(self) -> set[int]:
        """Distinct keysound ids in this line, without the "00" rest."""
        return {slot for slot in self.slots if slot != REST}

    def uses_keysound(self, keysound_id: int) -> bool:
        return keysound_id in self.slots

    def replace_keysounds(self, old_id: int, new_id: int) -> int:
        """
        Rewrite every ``old_id`` slot to ``new_id``.

        Returns:
            The number of slots rewritten (0 when ``old_id`` does not occur).

        Raises:
            ChannelProtectedError: If the line sits on a BGM/control channel.
                The slots are left untouched.
        """
        if not self.is_note_channel:
            raise ChannelProtectedError(self.channel)

        replaced = 0
        for index, slot in enumerate(self.slots):
            if slot == old_id:
                self.slots[index] = new_id
                replaced += 1
        return replaced


# ── Classifier ─────────────────────────────────────────────────────────────────

def _split_body(body: str) -> list[int] | None:
    """Decode a note body two characters at a time; None if it is malformed."""
    if len(body) % TOKEN_WIDTH:
        return None
    try:
        return [decode(body[i:i + TOKEN_WIDTH]) for i in range(0, len(body), TOKEN_WIDTH)]
    except KeysoundIdError:
        return None


def parse_note_line(raw: str) -> NoteLine | None:
    """Parse ``raw`` as a note line, or return None if it does not fit the grammar."""
    text = raw.rstrip()
    if not _NOTE_HEADER.match(text):
        return None

    measure = text[1:4]
    if not _MEASURE_DIGITS.fullmatch(measure):
        return None

    slots = _split_body(text[BODY_OFFSET:])
    if slots is None:
        return None

    return NoteLine(measure=int(measure), channel=decode(text[4:6]), slots=slots)


def classify(raw: str) -> Line:
    """
    Turn one raw chart line into a NoteLine or an OpaqueLine.

    Never raises: text that merely resembles the note grammar falls back to
    an OpaqueLine and is written back unchanged.
    """
    note = parse_note_line(raw)
    if note is not None:
        return note
    return OpaqueLine(raw)
