"""
Registers the table-driven Shift-JIS codec with Python's ``codecs`` module
under the name 'falcom_sjis', so it works with str.encode, bytes.decode,
open() and the standard error handlers.

Decode errors cover one byte each, which makes errors='replace' behave like
text.decode_lossy.
"""
import codecs

from .char import InvalidSequence, decode_char, encode_char, is_lead_byte
from .text import ByteReader

NAME = "falcom_sjis"
ALIASES = {NAME, "falcom_shift_jis"}

_registered = False


def _encode(input: str, errors: str) -> bytes:
    handler = None
    out = bytearray()
    i, n = 0, len(input)
    while i < n:
        enc = encode_char(input[i])
        if enc is not None:
            out += bytes(enc)
            i += 1
            continue
        if handler is None:
            handler = codecs.lookup_error(errors)
        rep, i = handler(UnicodeEncodeError(NAME, input, i, i + 1, "character maps to <undefined>"))
        if i < 0:
            i += n
        out += rep if isinstance(rep, bytes) else _encode(rep, "strict")
    return bytes(out)


def _decode(input: bytes, errors: str, final: bool) -> tuple[str, int]:
    handler = None
    out: list[str] = []
    r = ByteReader(input)
    n = len(input)
    while r.pos < n:
        start = r.pos
        if not final and start == n - 1 and is_lead_byte(input[start]):
            break
        try:
            out.append(decode_char(r))
        except InvalidSequence as e:
            if handler is None:
                handler = codecs.lookup_error(errors)
            reason = f"invalid sequence {bytes(e.seq).hex(' ').upper()}"
            rep, pos = handler(UnicodeDecodeError(NAME, input, start, start + 1, reason))
            out.append(rep)
            r.pos = pos + n if pos < 0 else pos
    return "".join(out), r.pos


def encode(input: str, errors: str = "strict") -> tuple[bytes, int]:
    return _encode(input, errors), len(input)


def decode(input: bytes, errors: str = "strict") -> tuple[str, int]:
    return _decode(bytes(input), errors, True)


class Codec(codecs.Codec):
    def encode(self, input: str, errors: str = "strict") -> tuple[bytes, int]:
        return encode(input, errors)

    def decode(self, input: bytes, errors: str = "strict") -> tuple[str, int]:
        return decode(input, errors)


class IncrementalEncoder(codecs.IncrementalEncoder):
    def encode(self, input: str, final: bool = False) -> bytes:
        return _encode(input, self.errors)


class IncrementalDecoder(codecs.BufferedIncrementalDecoder):
    def _buffer_decode(self, input: bytes, errors: str, final: bool) -> tuple[str, int]:
        return _decode(bytes(input), errors, final)


class StreamWriter(Codec, codecs.StreamWriter):
    pass


class StreamReader(Codec, codecs.StreamReader):
    def decode(self, input: bytes, errors: str = "strict") -> tuple[str, int]:
        return _decode(bytes(input), errors, False)


_codec_info = codecs.CodecInfo(name=NAME,
                               encode=encode,
                               decode=decode,
                               incrementalencoder=IncrementalEncoder,
                               incrementaldecoder=IncrementalDecoder,
                               streamreader=StreamReader,
                               streamwriter=StreamWriter)


def _search(name: str) -> codecs.CodecInfo | None:
    if name.lower().replace("-", "_").replace(" ", "_") not in ALIASES:
        return None
    return _codec_info


def register() -> None:
    global _registered
    if not _registered:
        codecs.register(_search)
        _registered = True
