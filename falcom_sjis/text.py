from .char import REPLACEMENT, EncodedChar, InvalidSequence, decode_char, encode_char

REPLACEMENT_BYTES = bytes(REPLACEMENT)


class EncodeError(ValueError):
    def __init__(self, text: str, index: int, position: int):
        self.char = text[index]
        self.index = index
        self.position = position  # utf-8 offset in the input
        super().__init__(f"{self.char}(U+{ord(self.char):04X}) at byte {position} cannot be encoded")


class DecodeError(ValueError):
    def __init__(self, position: int, seq: EncodedChar):
        self.position = position
        self.seq = seq
        super().__init__(f"invalid sequence {bytes(seq).hex(' ').upper()} at 0x{position:X}")


class ByteReader:
    """Byte iterator over a buffer that remembers how far it has read."""

    def __init__(self, data: bytes, pos: int = 0):
        self.data = data
        self.pos = pos

    def __iter__(self):
        return self

    def __next__(self) -> int:
        if self.pos >= len(self.data):
            raise StopIteration
        b = self.data[self.pos]
        self.pos += 1
        return b


def encode(text: str) -> bytes:
    """Encode ``text``; raise EncodeError at the first unencodable character."""
    out = bytearray()
    pos = 0
    for i, ch in enumerate(text):
        enc = encode_char(ch)
        if enc is None:
            raise EncodeError(text, i, pos)
        out += bytes(enc)
        pos += len(ch.encode("utf-8", "surrogatepass"))
    return bytes(out)


def encode_lossy(text: str) -> bytes:
    """Encode ``text``, writing ・ for anything unencodable."""
    out = bytearray()
    for ch in text:
        enc = encode_char(ch)
        out += REPLACEMENT_BYTES if enc is None else bytes(enc)
    return bytes(out)


def decode(data: bytes) -> str:
    """Decode ``data``; raise DecodeError where the first invalid sequence starts."""
    r = ByteReader(bytes(data))
    out: list[str] = []
    while True:
        start = r.pos
        try:
            ch = decode_char(r)
        except InvalidSequence as e:
            raise DecodeError(start, e.seq) from None
        if ch is None:
            return "".join(out)
        out.append(ch)


def decode_lossy(data: bytes) -> str:
    """Decode ``data``, writing one U+FFFD per byte that starts an invalid sequence.

    After a failure decoding resumes at the byte following the failed one, so
    a bad trail byte is retried as the start of the next character.
    """
    r = ByteReader(bytes(data))
    out: list[str] = []
    while True:
        start = r.pos
        try:
            ch = decode_char(r)
        except InvalidSequence:
            out.append("�")
            r.pos = start + 1
            continue
        if ch is None:
            return "".join(out)
        out.append(ch)


def unencodable(text: str) -> list[str]:
    return sorted({ch for ch in text if encode_char(ch) is None}, key=ord)
