"""Tests for BRCAD labels."""

import io

import pytest

from cellanim.errors import BadLabelsFileError, LabelsEncodingError
from cellanim.formats import BRCAD, apply_labels


@pytest.fixture
def brcad(brcad_bytes):
    return BRCAD.from_bytes(brcad_bytes)


def _names(brcad):
    return [animation.name for animation in brcad.animations]


def test_define_names_animation(brcad):
    apply_labels(brcad, io.BytesIO(b"#define ATTACK 1\n"))
    assert _names(brcad) == [None, "ATTACK", None]


def test_index_out_of_range(brcad):
    with pytest.raises(BadLabelsFileError):
        apply_labels(brcad, io.BytesIO(b"#define ATTACK 5\n"))


def test_nothing_applied_on_failure(brcad):
    labels = b"#define IDLE 0\n#define ATTACK 5\n"
    with pytest.raises(BadLabelsFileError):
        apply_labels(brcad, io.BytesIO(labels))
    assert _names(brcad) == [None, None, None]


def test_comments_tabs_and_extra_tokens(brcad):
    labels = (
        b"// rcad labels\n"
        b"#define\tIDLE\t0 // standing\n"
        b"// #define HIDDEN 1\n"
        b"#ifndef GUARD\n"
        b"#define JUMP 2 extra tokens\n"
    )
    apply_labels(brcad, io.BytesIO(labels))
    assert _names(brcad) == ["IDLE", None, "JUMP"]


def test_only_newlines_end_lines(brcad):
    labels = b"#define IDLE 0\x0c#define JUMP 2\r\n#define ATTACK 1\r\n"
    apply_labels(brcad, io.BytesIO(labels))
    assert _names(brcad) == ["IDLE", "ATTACK", None]


def test_shift_jis_names(brcad):
    apply_labels(brcad, io.BytesIO("#define 攻撃 1\n".encode("cp932")))
    assert _names(brcad) == [None, "攻撃", None]


def test_invalid_shift_jis(brcad):
    with pytest.raises(LabelsEncodingError):
        apply_labels(brcad, io.BytesIO(b"#define IDLE 0\n\x82"))


@pytest.mark.parametrize("line", [
    b"#define IDLE\n",
    b"#define IDLE one\n",
    b"#define IDLE -1\n",
    "#define IDLE １\n".encode("cp932"),
])
def test_malformed_define(brcad, line):
    with pytest.raises(BadLabelsFileError):
        apply_labels(brcad, io.BytesIO(line))


def test_method_on_brcad(brcad):
    brcad.apply_labels(io.BytesIO(b"#define IDLE 0\n"))
    assert brcad.animations[0].name == "IDLE"
