from .char import (
    REPLACEMENT,
    Double,
    EncodedChar,
    InvalidSequence,
    Single,
    decode_char,
    decode_char_from,
    encode_char,
)
from .dat import TableError
from .text import DecodeError, EncodeError, decode, decode_lossy, encode, encode_lossy, unencodable

__all__ = [
    "REPLACEMENT",
    "Double",
    "EncodedChar",
    "InvalidSequence",
    "Single",
    "decode_char",
    "decode_char_from",
    "encode_char",
    "TableError",
    "DecodeError",
    "EncodeError",
    "decode",
    "decode_lossy",
    "encode",
    "encode_lossy",
    "unencodable",
]
