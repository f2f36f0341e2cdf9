"""Tests for the binary primitives."""

import io

import pytest

from cellanim.errors import FieldRangeError, StringEncodingError, TruncatedStreamError
from cellanim.utils.binary import (
    ByteOrder,
    padding_for,
    read_fixed_bytes,
    read_f32,
    read_i16,
    read_padded_string,
    read_u16,
    read_u32,
    write_fixed_bytes,
    write_i16,
    write_padded_string,
    write_u16,
)


def test_byte_order_is_explicit():
    assert read_u16(io.BytesIO(b"\x01\x02"), ByteOrder.LITTLE) == 0x0201
    assert read_u16(io.BytesIO(b"\x01\x02"), ByteOrder.BIG) == 0x0102


def test_signed_and_float_reads():
    assert read_i16(io.BytesIO(b"\xff\xfe"), ByteOrder.BIG) == -2
    assert read_f32(io.BytesIO(b"\x3f\x80\x00\x00"), ByteOrder.BIG) == 1.0


def test_short_read_is_fatal():
    stream = io.BytesIO(b"\x01\x02")
    with pytest.raises(TruncatedStreamError) as exc:
        read_u32(stream, ByteOrder.LITTLE)
    assert isinstance(exc.value, EOFError)
    assert exc.value.context == {"wanted": 4, "got": 2}


def test_fixed_bytes():
    assert read_fixed_bytes(io.BytesIO(b"abcd"), 3) == b"abc"

    out = io.BytesIO()
    write_fixed_bytes(out, b"xyz", 3)
    assert out.getvalue() == b"xyz"

    with pytest.raises(FieldRangeError):
        write_fixed_bytes(io.BytesIO(), b"xy", 3)


def test_write_out_of_range():
    with pytest.raises(FieldRangeError):
        write_u16(io.BytesIO(), 0x10000, ByteOrder.LITTLE)
    with pytest.raises(FieldRangeError):
        write_i16(io.BytesIO(), 40000, ByteOrder.BIG)


@pytest.mark.parametrize("length,padding", [(0, 3), (1, 2), (2, 1), (3, 0), (4, 3), (7, 0), (255, 0)])
def test_padding_for(length, padding):
    assert padding_for(length) == padding


def test_padded_string_layout():
    out = io.BytesIO()
    write_padded_string(out, "idle")
    assert out.getvalue() == b"\x04idle\x00\x00\x00"


@pytest.mark.parametrize("text", ["", "a", "abc", "walk_loop", "ジャンプ", "x" * 255])
def test_padded_string_is_aligned(text):
    out = io.BytesIO()
    write_padded_string(out, text)
    data = out.getvalue()

    assert len(data) % 4 == 0
    stream = io.BytesIO(data)
    assert read_padded_string(stream) == text
    assert stream.tell() == len(data)


def test_padded_string_invalid_utf8():
    with pytest.raises(StringEncodingError):
        read_padded_string(io.BytesIO(b"\x02\xff\xfe\x00"))


def test_padded_string_too_long():
    with pytest.raises(StringEncodingError):
        write_padded_string(io.BytesIO(), "x" * 256)


def test_padded_string_truncated_padding():
    with pytest.raises(TruncatedStreamError):
        read_padded_string(io.BytesIO(b"\x04idle\x00"))
