import pytest

from falcom_sjis import Double, Single
from falcom_sjis.text import (
    DecodeError,
    EncodeError,
    decode,
    decode_lossy,
    encode,
    encode_lossy,
    unencodable,
)

FALCOM = "日本ファルコム"
FALCOM_SJIS = bytes([0x93, 0xFA, 0x96, 0x7B, 0x83, 0x74, 0x83, 0x40, 0x83, 0x8B, 0x83, 0x52, 0x83, 0x80])


# -----------------------------------------------------------
# encode
# -----------------------------------------------------------

def test_encode():
    assert encode(FALCOM) == FALCOM_SJIS


def test_encode_mixed_widths():
    assert encode("A ｱ\\日") == b"A \xb1\\\x93\xfa"


def test_encode_error_reports_utf8_offset():
    with pytest.raises(EncodeError) as e:
        encode("日本2=₂")
    assert e.value.position == len("日本2=".encode("utf-8"))
    assert e.value.index == 4
    assert e.value.char == "₂"


def test_encode_error_offset_after_kana():
    with pytest.raises(EncodeError) as e:
        encode("ｱ日€x")
    assert e.value.position == 6
    assert e.value.index == 2


def test_encode_error_is_value_error():
    with pytest.raises(ValueError):
        encode("€")


def test_encode_lossy():
    assert encode_lossy("日本2=₂") == b"\x93\xfa\x96\x7b2=\x81\x45"
    assert decode_lossy(encode_lossy("日本2=₂")) == "日本2=・"


def test_encode_empty():
    assert encode("") == b""
    assert encode_lossy("") == b""


# -----------------------------------------------------------
# decode
# -----------------------------------------------------------

def test_decode():
    assert decode(FALCOM_SJIS) == FALCOM


def test_decode_error_offset_and_bytes():
    data = bytes([0x93, 0xFA, 0x96, 0x7B, 0x32, 0x3D, 0x96, 0x7B, 0xEE, 0xEE, 0x83, 0x40])
    with pytest.raises(DecodeError) as e:
        decode(data)
    assert e.value.position == 8
    assert e.value.seq == Double(0xEE, 0xEE)


def test_decode_truncated_at_end():
    with pytest.raises(DecodeError) as e:
        decode(b"\x93\xfa\x93")
    assert e.value.position == 2
    assert e.value.seq == Single(0x93)


def test_decode_bad_lead():
    with pytest.raises(DecodeError) as e:
        decode(b"AB\xa0")
    assert e.value.position == 2
    assert e.value.seq == Single(0xA0)


def test_decode_lossy():
    data = bytes([0x93, 0xFA, 0x96, 0x7B, 0x83, 0x74, 0x83, 0x81, 0x40, 0x83, 0x8B, 0x83, 0x52, 0x83, 0x80])
    assert decode_lossy(data) == "日本フメ@ルコム"


def test_decode_lossy_advances_one_byte():
    with pytest.raises(DecodeError):
        decode(b"\x85\x40A")
    assert decode_lossy(b"\x85\x40A") == "�@A"


def test_decode_lossy_one_replacement_per_bad_byte():
    assert decode_lossy(b"\x80\xa0\xff") == "���"
    assert decode_lossy(b"A\x93") == "A�"


def test_decode_accepts_bytearray():
    assert decode(bytearray(FALCOM_SJIS)) == FALCOM
    assert decode_lossy(memoryview(FALCOM_SJIS)) == FALCOM


# -----------------------------------------------------------
# Properties
# -----------------------------------------------------------

@pytest.mark.parametrize("s", [FALCOM, "日本2=₂", "€ｱ😀≒\x00", "￤＇＂ⅰ"])
def test_lossy_round_trip_is_stable(s):
    once = decode_lossy(encode_lossy(s))
    assert decode_lossy(encode_lossy(once)) == once


def test_unencodable():
    assert unencodable("₂a€₂日") == ["₂", "€"]
    assert unencodable(FALCOM) == []


@pytest.mark.parametrize("s, position", [("§€", 2), ("ｱ§日€", 8), ("€", 0)])
def test_encode_error_offset_counts_utf8_width(s, position):
    with pytest.raises(EncodeError) as e:
        encode(s)
    assert e.value.position == position
    assert e.value.position == len(s[:e.value.index].encode("utf-8"))
