from collections.abc import Callable, Iterator
from dataclasses import dataclass

from .tables import COLS, FORWARD, INVALID, REVERSE

KANA_START = 0xFF61  # ｡
KANA_END = 0xFF9F    # ﾟ


@dataclass(frozen=True)
class Single:
    byte: int

    def __bytes__(self) -> bytes:
        return bytes((self.byte,))

    def __iter__(self) -> Iterator[int]:
        yield self.byte

    def __len__(self) -> int:
        return 1


@dataclass(frozen=True)
class Double:
    lead: int
    trail: int

    def __bytes__(self) -> bytes:
        return bytes((self.lead, self.trail))

    def __iter__(self) -> Iterator[int]:
        yield self.lead
        yield self.trail

    def __len__(self) -> int:
        return 2


EncodedChar = Single | Double

# what encode_lossy substitutes: ・
REPLACEMENT = Double(0x81, 0x45)


class InvalidSequence(ValueError):
    def __init__(self, seq: EncodedChar):
        super().__init__(f"invalid Shift-JIS sequence {bytes(seq).hex(' ').upper()}")
        self.seq = seq


def is_lead_byte(b: int) -> bool:
    return 0x81 <= b <= 0x9F or 0xE0 <= b <= 0xEF


def encode_char(ch: str) -> EncodedChar | None:
    """Encode one character, or return None if Shift-JIS has no code for it."""
    c = ord(ch)
    if c < 0x80:
        return Single(c)
    if KANA_START <= c <= KANA_END:
        return Single(c - KANA_START + 0xA1)
    pair = FORWARD.get(ch)
    if pair is None:
        return None
    return Double(pair[0], pair[1])


def decode_char(it: Iterator[int]) -> str | None:
    """Decode one character, pulling one or two bytes from ``it``.

    Returns None once ``it`` is exhausted. Raises InvalidSequence with the
    bytes consumed so far when they do not form a character.
    """
    b1 = next(it, None)
    if b1 is None:
        return None
    return decode_char_from(b1, lambda: next(it, None))


def decode_char_from(b1: int, next_byte: Callable[[], int | None]) -> str:
    """Decode a character whose first byte is already read.

    ``next_byte`` is only called when ``b1`` is a lead byte.
    """
    if b1 < 0x80:
        return chr(b1)
    if 0xA1 <= b1 <= 0xDF:
        return chr(KANA_START + b1 - 0xA1)
    if 0x81 <= b1 <= 0x9F:
        row = b1 - 0x81
    elif 0xE0 <= b1 <= 0xEF:
        row = b1 - 0xE0 + 0x1F
    else:
        raise InvalidSequence(Single(b1))

    b2 = next_byte()
    if b2 is None:
        raise InvalidSequence(Single(b1))
    if 0x40 <= b2 <= 0x7E:
        col = b2 - 0x40
    elif 0x80 <= b2 <= 0xFC:
        col = b2 - 0x80 + 0x3F
    else:
        raise InvalidSequence(Double(b1, b2))

    ch = REVERSE[row * 2 + col // COLS][col % COLS]
    if ch == INVALID:
        raise InvalidSequence(Double(b1, b2))
    return ch
