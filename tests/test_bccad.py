"""Tests for the BCCAD codec."""

import io
import struct

import pytest

from cellanim.errors import EditableFormError, FieldRangeError, TruncatedStreamError
from cellanim.formats import BCCAD, Color, PosInTexture
from cellanim.formats.bccad import Animation, AnimationStep, Sprite, SpritePart


def test_round_trip_is_byte_exact(bccad_bytes):
    assert BCCAD.from_bytes(bccad_bytes).to_bytes() == bccad_bytes


def test_decoded_fields(bccad_bytes):
    bccad = BCCAD.from_bytes(bccad_bytes)

    assert bccad.timestamp is None
    assert (bccad.texture_width, bccad.texture_height) == (512, 256)
    assert len(bccad.sprites) == 1

    part = bccad.sprites[0].parts[0]
    assert part.texture_pos == PosInTexture(0, 0, 32, 32)
    assert (part.pos_x, part.pos_y) == (-10, 20)
    assert (part.scale_x, part.scale_y, part.rotation) == (1.0, 1.5, 90.0)
    assert part.flip_x and not part.flip_y
    assert part.multiply_color == Color(255, 128, 0)
    assert part.screen_color == Color(0, 0, 0)
    assert part.opacity == 200
    assert part.reserved1 == bytes(range(1, 13))
    assert part.designation_id == 3
    assert part.depth.top_left == 0.5
    assert part.depth.bottom_right == -0.5

    animation = bccad.animations[0]
    assert animation.name == "idle"
    assert animation.interpolation == 1
    step = animation.steps[0]
    assert (step.sprite, step.duration, step.pos_x, step.pos_y) == (0, 10, 5, -5)
    assert step.opacity == 255


def test_part_and_step_sizes():
    part = io.BytesIO()
    SpritePart().write(part)
    assert len(part.getvalue()) == 64

    step = io.BytesIO()
    AnimationStep().write(step)
    assert len(step.getvalue()) == 32


def test_non_canonical_timestamp_is_kept():
    data = struct.pack('<I', 20131008) + b"\x00" * 4 + struct.pack('<II', 0, 0) + b"\x00"
    bccad = BCCAD.from_bytes(data)

    assert bccad.timestamp == 20131008
    assert bccad.to_bytes() == data


def test_missing_timestamp_writes_canonical_revision():
    data = BCCAD(texture_width=64, texture_height=64).to_bytes()
    assert data[:4] == struct.pack('<I', 20131007)
    assert data[-1:] == b"\x00"


def test_every_truncation_is_fatal(bccad_bytes):
    for length in range(len(bccad_bytes)):
        with pytest.raises(TruncatedStreamError):
            BCCAD.from_bytes(bccad_bytes[:length])


def test_editable_round_trip(bccad_bytes):
    bccad = BCCAD.from_bytes(bccad_bytes)
    tree = bccad.to_editable()

    assert tree['timestamp'] is None
    assert tree['sprites'][0]['parts'][0]['reserved1'] == list(range(1, 13))
    assert tree['sprites'][0]['parts'][0]['multiply_color'] == {'red': 255, 'green': 128, 'blue': 0}
    assert BCCAD.from_editable(tree) == bccad


def test_editable_missing_field(bccad_bytes):
    tree = BCCAD.from_bytes(bccad_bytes).to_editable()
    del tree['sprites'][0]['parts'][0]['opacity']

    with pytest.raises(EditableFormError):
        BCCAD.from_editable(tree)


def test_editable_field_out_of_range(bccad_bytes):
    tree = BCCAD.from_bytes(bccad_bytes).to_editable()
    tree['animations'][0]['steps'][0]['pos_x'] = 40000

    with pytest.raises(EditableFormError):
        BCCAD.from_editable(tree)


def test_encode_rejects_out_of_range_values():
    bccad = BCCAD(sprites=[Sprite(parts=[SpritePart(opacity=300)])])
    with pytest.raises(FieldRangeError):
        bccad.to_bytes()


def test_encode_rejects_long_names():
    bccad = BCCAD(animations=[Animation(name="x" * 300)])
    with pytest.raises(ValueError):
        bccad.to_bytes()


def test_editable_rejects_long_names(bccad_bytes):
    tree = BCCAD.from_bytes(bccad_bytes).to_editable()
    tree['animations'][0]['name'] = "ジ" * 86

    with pytest.raises(EditableFormError):
        BCCAD.from_editable(tree)

    tree['animations'][0]['name'] = "ジ" * 85
    assert BCCAD.from_editable(tree).animations[0].name == "ジ" * 85
