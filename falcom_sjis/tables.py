from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from .dat import TableError, read_forward, read_reverse

ROWS = 94
COLS = 94
FALLBACK = "・"
FALLBACK_CELLS = 2 * COLS  # lead 0xEF has no distinct mapping
SOURCE_CELLS = ROWS * COLS - FALLBACK_CELLS
INVALID = "�"

LEAD_BYTES = tuple(range(0x81, 0xA0)) + tuple(range(0xE0, 0xF0))
TRAIL_BYTES = tuple(range(0x40, 0x7F)) + tuple(range(0x80, 0xFD))

# Characters with two encodings in the source data (NEC row 13 / NEC-selected IBM).
# The first one in grid order is the one that gets encoded.
DUPLICATE_SYMBOLS = "√∠∩∪∫∵≒≡⊥￢"

Forward = Mapping[str, bytes]
Reverse = tuple[tuple[str, ...], ...]


def source_records() -> tuple[list[tuple[str, bytes]], list[str]]:
    """Raw mapping data, read off the cp932 codec for leads 0x81-0xEE."""
    forward: list[tuple[str, bytes]] = []
    reverse: list[str] = []
    for lead in LEAD_BYTES[:-1]:
        for trail in TRAIL_BYTES:
            pair = bytes((lead, trail))
            try:
                ch = pair.decode("cp932")
            except UnicodeDecodeError:
                reverse.append(INVALID)
                continue
            if len(ch) != 1:
                reverse.append(INVALID)
                continue
            reverse.append(ch)
            forward.append((ch, pair))
    return forward, reverse


def _check_pair(ch: str, pair: bytes) -> None:
    if not isinstance(ch, str) or len(ch) != 1:
        raise TableError(f"forward key must be one character: {ch!r}")
    if len(pair) != 2 or pair[0] not in LEAD_BYTES or pair[1] not in TRAIL_BYTES:
        raise TableError(f"{ch}(U+{ord(ch):04X}): bad pair {bytes(pair).hex(' ').upper()}")


def build_forward(records: Iterable[tuple[str, bytes]]) -> Forward:
    table: dict[str, bytes] = {}
    for ch, pair in records:
        _check_pair(ch, pair)
        table.setdefault(ch, bytes(pair))
    return MappingProxyType(table)


def build_reverse(chars: Sequence[str]) -> Reverse:
    if len(chars) != SOURCE_CELLS:
        raise TableError(f"reverse table needs {SOURCE_CELLS} cells, got {len(chars)}")
    for i, ch in enumerate(chars):
        if not isinstance(ch, str) or len(ch) != 1:
            raise TableError(f"reverse cell {i} must be one character: {ch!r}")
    cells = list(chars) + [FALLBACK] * FALLBACK_CELLS
    return tuple(tuple(cells[r * COLS:(r + 1) * COLS]) for r in range(ROWS))


def find_duplicates(records: Iterable[tuple[str, bytes]]) -> dict[str, list[bytes]]:
    seen: dict[str, list[bytes]] = {}
    for ch, pair in records:
        seen.setdefault(ch, []).append(bytes(pair))
    return {ch: pairs for ch, pairs in seen.items() if len(pairs) > 1}


def from_resources(utf8sjis: bytes, sjisutf8: bytes) -> tuple[Forward, Reverse]:
    return build_forward(read_forward(utf8sjis)), build_reverse(read_reverse(sjisutf8))


def load() -> tuple[Forward, Reverse]:
    forward, reverse = source_records()
    return build_forward(forward), build_reverse(reverse)


FORWARD, REVERSE = load()
