"""Tests for format detection."""

import io

import pytest

from cellanim.errors import NotBXCADError
from cellanim.formats import BCCAD, BRCAD, BXCADType, codec_for, identify, read_bxcad


def test_identify_known_formats(bccad_bytes, brcad_bytes):
    assert identify(io.BytesIO(bccad_bytes)) is BXCADType.BCCAD
    assert identify(io.BytesIO(brcad_bytes)) is BXCADType.BRCAD


def test_formats_are_not_confused(bccad_bytes, brcad_bytes):
    assert not BRCAD.is_format(io.BytesIO(bccad_bytes))
    assert not BCCAD.is_format(io.BytesIO(brcad_bytes))


@pytest.mark.parametrize("data", [b"", b"\x01\x02", b"not a bxcad file"])
def test_unknown(data):
    assert identify(io.BytesIO(data)) is BXCADType.UNKNOWN


def test_position_is_restored(bccad_bytes):
    prefix = b"\xaa\xbb"
    for data in (prefix + bccad_bytes, prefix + b"junk"):
        stream = io.BytesIO(data)
        stream.seek(len(prefix))
        identify(stream)
        assert stream.tell() == len(prefix)

    stream = io.BytesIO(prefix + bccad_bytes)
    stream.seek(len(prefix))
    assert identify(stream) is BXCADType.BCCAD


def test_read_bxcad(bccad_bytes, brcad_bytes):
    assert isinstance(read_bxcad(io.BytesIO(bccad_bytes)), BCCAD)
    assert isinstance(read_bxcad(io.BytesIO(brcad_bytes)), BRCAD)

    with pytest.raises(NotBXCADError):
        read_bxcad(io.BytesIO(b"junkjunk"))


def test_codec_for():
    assert codec_for(BXCADType.BCCAD) is BCCAD
    assert codec_for(BXCADType.BRCAD) is BRCAD
    with pytest.raises(NotBXCADError):
        codec_for(BXCADType.UNKNOWN)
