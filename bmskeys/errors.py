"""Exception types raised while reading and editing BMS charts."""


class BmsError(Exception):
    """Base class for every error raised by bmskeys."""


class KeysoundIdError(BmsError, ValueError):
    """A keysound token could not be decoded, or an id could not be encoded."""


class DeclarationError(BmsError, ValueError):
    """
    A ``#WAV`` declaration line is malformed.

    Fatal for the whole load; malformed note lines only degrade to opaque text.
    """

    def __init__(self, line_number: int, text: str, reason: str) -> None:
        self.line_number = line_number
        self.text = text
        self.reason = reason
        super().__init__(f"Line {line_number}: bad keysound declaration '{text}' ({reason})")


class ChannelProtectedError(BmsError):
    """A keysound replace targeted a background/control channel."""

    def __init__(self, channel: int) -> None:
        self.channel = channel
        super().__init__(f"Channel {channel} is not a playable note channel")


class ChartFileError(BmsError):
    """The chart file could not be read from disk."""


class UnknownKeysoundError(BmsError, LookupError):
    """One or more keysound ids are not declared in the chart."""

    def __init__(self, keysound_ids: list[int]) -> None:
        self.keysound_ids = keysound_ids
        super().__init__(f"{len(keysound_ids)} keysound id(s) are not declared in the chart")
