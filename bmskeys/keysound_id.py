"""Two-character base-36 keysound identifiers."""

import re
from typing import Final

from bmskeys.errors import KeysoundIdError

DIGITS: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE: Final[int] = 36
TOKEN_WIDTH: Final[int] = 2

#: Largest id a two-character token can hold ("ZZ").
MAX_ID: Final[int] = BASE**TOKEN_WIDTH - 1

#: The "00" slot value, meaning no sound.
REST: Final[int] = 0

# int(..., 36) also accepts signs, underscores and surrounding whitespace.
_NUMERAL = re.compile(r"[0-9A-Za-z]+")


def decode(token: str) -> int:
    """
    Decode a base-36 numeral into an integer, ignoring case.

    Any length is accepted; callers slicing chart text supply two characters.

    Raises:
        KeysoundIdError: If the token is empty or holds a non-alphanumeric character.
    """
    if not _NUMERAL.fullmatch(token):
        raise KeysoundIdError(f"Invalid keysound id '{token}'")
    return int(token.upper(), BASE)


def encode(keysound_id: int) -> str:
    """
    Encode an id as an upper-case, zero-padded two-character token.

    Raises:
        KeysoundIdError: If the id is outside [0, 1295].
    """
    if not 0 <= keysound_id <= MAX_ID:
        raise KeysoundIdError(f"Keysound id {keysound_id} does not fit in two base-36 digits")
    high, low = divmod(keysound_id, BASE)
    return DIGITS[high] + DIGITS[low]


def parse_id_list(text: str, separator: str = ",") -> list[int]:
    """Decode a separated list of tokens such as ``"0B,0C, 0D"``."""
    return [decode(part.strip()) for part in text.split(separator) if part.strip()]
