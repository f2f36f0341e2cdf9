"""Shared fixtures: hand-built BCCAD and BRCAD files."""

import struct

import pytest

from cellanim.utils import close_logging


def _bccad_part() -> bytes:
    return b"".join([
        struct.pack('<HHHH', 0, 0, 32, 32),
        struct.pack('<hh', -10, 20),
        struct.pack('<fff', 1.0, 1.5, 90.0),
        struct.pack('<BB', 1, 0),
        bytes([255, 128, 0]),           # multiply color
        bytes([0, 0, 0]),               # screen color
        bytes([200]),                   # opacity
        bytes(range(1, 13)),            # reserved1
        bytes([3, 0]),                  # designation id, reserved2
        struct.pack('<ffff', 0.5, 0.0, 0.0, -0.5),
        b"\x00",                        # terminator
    ])


def _bccad_step() -> bytes:
    return b"".join([
        struct.pack('<HHhh', 0, 10, 5, -5),
        struct.pack('<ffff', 0.0, 1.0, 1.0, 0.0),
        bytes([255, 255, 255]),
        bytes([0, 0, 0]),
        struct.pack('<H', 255),
    ])


def build_bccad(timestamp: int = 20131007) -> bytes:
    return b"".join([
        struct.pack('<IHH', timestamp, 512, 256),
        struct.pack('<I', 1),                   # sprites
        struct.pack('<I', 1), _bccad_part(),    # parts
        struct.pack('<I', 1),                   # animations
        b"\x04idle\x00\x00\x00",
        struct.pack('<i', 1),                   # interpolation
        struct.pack('<I', 1), _bccad_step(),    # steps
        b"\x00",                                # terminator
    ])


def _brcad_part() -> bytes:
    return b"".join([
        struct.pack('>HHHH', 0, 0, 32, 32),
        struct.pack('>I', 0x00020000),          # variation 2
        struct.pack('>HH', 512, 512),
        struct.pack('>fff', 1.0, 1.0, 0.0),
        bytes([0, 1, 255]),
        b"\x00",
    ])


def _brcad_step() -> bytes:
    return b"".join([
        struct.pack('>HH', 0, 4),
        struct.pack('>I', 0xFFFF0002),          # x = -1, y = 2
        struct.pack('>fff', 1.0, 1.0, 0.0),
        bytes([255]),
        bytes([0, 0, 0]),
    ])


def build_brcad(animation_count: int = 3) -> bytes:
    animations = b"".join(struct.pack('>HH', 1, 0) + _brcad_step() for _ in range(animation_count))
    return b"".join([
        struct.pack('>II', 20100312, 0x01000000),
        struct.pack('>HHHH', 2, 0, 1024, 512),
        struct.pack('>HH', 1, 0),               # sprites, padding
        struct.pack('>HH', 1, 0), _brcad_part(),
        struct.pack('>HH', animation_count, 0),
        animations,
    ])


@pytest.fixture
def bccad_bytes() -> bytes:
    return build_bccad()


@pytest.fixture
def brcad_bytes() -> bytes:
    return build_brcad()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    close_logging()
