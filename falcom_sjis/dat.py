import struct
from collections.abc import Iterable

FWD_RECORD = 8  # char(4) + pair(2) + pad(2)
REV_RECORD = 4


class TableError(ValueError):
    pass


def u32(b: bytes, o: int) -> int: return struct.unpack_from("<I", b, o)[0]


def _count(data: bytes, name: str, record: int) -> int:
    if len(data) < 4:
        raise TableError(f"{name}: truncated header")
    n = u32(data, 0)
    want = 4 + n * record
    if len(data) != want:
        raise TableError(f"{name}: count {n} needs {want} bytes, got {len(data)}")
    return n


def _char(raw: bytes, name: str, off: int) -> str:
    try:
        s = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise TableError(f"{name}: bad utf-8 at 0x{off:X}: {raw.hex(' ')}") from None
    if not s or s[0] == "\x00" or s[1:].strip("\x00"):
        raise TableError(f"{name}: not a single character at 0x{off:X}: {raw.hex(' ')}")
    return s[0]


def _pad(ch: str) -> bytes:
    if len(ch) != 1:
        raise TableError(f"not a single character: {ch!r}")
    return ch.encode("utf-8", "surrogatepass").ljust(4, b"\x00")


def read_forward(data: bytes) -> list[tuple[str, bytes]]:
    """Parse utf8sjis.dat into ``(char, pair)`` records.

    The character field is a big-endian u32 whose little-endian bytes are the
    NUL-padded UTF-8 of the character, so on disk the UTF-8 is reversed.
    """
    n = _count(data, "utf8sjis", FWD_RECORD)
    out: list[tuple[str, bytes]] = []
    for i in range(n):
        off = 4 + i * FWD_RECORD
        ch = _char(data[off:off + 4][::-1], "utf8sjis", off)
        if data[off + 6:off + 8] != b"\x00\x00":
            raise TableError(f"utf8sjis: bad padding at 0x{off + 6:X}")
        out.append((ch, bytes(data[off + 4:off + 6])))
    return out


def read_reverse(data: bytes) -> list[str]:
    """Parse sjisutf8.dat into grid cells in row-major order."""
    n = _count(data, "sjisutf8", REV_RECORD)
    return [_char(data[o:o + 4], "sjisutf8", o) for o in range(4, 4 + n * REV_RECORD, REV_RECORD)]


def write_forward(records: Iterable[tuple[str, bytes]]) -> bytes:
    body = bytearray()
    n = 0
    for ch, pair in records:
        if len(pair) != 2:
            raise TableError(f"{ch!r}: pair must be 2 bytes, got {bytes(pair).hex(' ')}")
        body += _pad(ch)[::-1] + bytes(pair) + b"\x00\x00"
        n += 1
    return struct.pack("<I", n) + bytes(body)


def write_reverse(chars: Iterable[str]) -> bytes:
    body = b"".join(_pad(ch) for ch in chars)
    return struct.pack("<I", len(body) // REV_RECORD) + body
