"""
BRCAD <-> BCCAD Conversion

Builds one format's document from the other's.

Structural remap:
- Fields both formats share are copied (texture region, position, scale,
  rotation, flips, opacity, sprite references, durations).
- BCCAD-only fields get neutral defaults when converting from BRCAD:
  white multiply color, black screen color, zero depth, zero reserved bytes,
  interpolation 0, and `anim_<index>` for animations without a label.
- BRCAD-only fields get zero defaults when converting from BCCAD:
  no variations, variation 0, zero padding.

Geometric remap (rescale=True only):
- BRCAD textures are twice the resolution of BCCAD ones, so texture regions
  and atlas dimensions are halved (BRCAD -> BCCAD) or doubled (BCCAD -> BRCAD)
- Part and step positions are scaled around the atlas pivot (512, 512)
- Part scale factors are halved or doubled to compensate

BRCAD stores part positions as u16 words holding two's complement int16
values; they are read signed and written back masked to 16 bits.

Values that do not fit the target field raise ConversionError; nothing is
clamped.
"""

from typing import Iterable, List, Tuple

import numpy as np

from ..constants import PIVOT_X, PIVOT_Y
from ..errors import ConversionError
from ..formats import bccad, brcad
from ..formats.base import Color, PosInTexture
from ..formats.bccad import BCCAD
from ..formats.brcad import BRCAD
from ..utils import logDebug
from ..utils.packed import PackedXY, HighByteFlag, HighHalfSelect

PIVOT = np.array([PIVOT_X, PIVOT_Y], dtype=np.int64)

U8 = (0, 0xFF)
U16 = (0, 0xFFFF)
I16 = (-0x8000, 0x7FFF)


def remap_positions(positions: np.ndarray, factor: float) -> np.ndarray:
    """
    Scale (N, 2) positions around the atlas pivot.

    Halving truncates toward zero: new = trunc((old - 512) * factor) + 512
    """
    offsets = (positions.astype(np.int64) - PIVOT) * factor
    return np.trunc(offsets).astype(np.int64) + PIVOT


def _check_range(values: np.ndarray, bounds: Tuple[int, int], what: str):
    low, high = bounds
    if values.size and (values.min() < low or values.max() > high):
        raise ConversionError(
            f"{what} out of range [{low}, {high}] after conversion: "
            f"min {int(values.min())}, max {int(values.max())}",
            {"field": what, "min": int(values.min()), "max": int(values.max())},
        )


def _part_geometry(parts: Iterable) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Collect (N, 4) texture rects, (N, 2) positions and (N, 2) scales."""
    parts = list(parts)
    rects = np.array([[p.texture_pos.x, p.texture_pos.y, p.texture_pos.width, p.texture_pos.height]
                      for p in parts], dtype=np.int64).reshape(-1, 4)
    positions = np.array([[p.pos_x, p.pos_y] for p in parts], dtype=np.int64).reshape(-1, 2)
    scales = np.array([[p.scale_x, p.scale_y] for p in parts], dtype=np.float64).reshape(-1, 2)
    return rects, positions, scales


def _signed_from_u16(values: np.ndarray) -> np.ndarray:
    """Read BRCAD part positions (stored as u16) as two's complement int16."""
    return np.where(values > 0x7FFF, values - 0x10000, values)


def _step_positions(steps: Iterable) -> np.ndarray:
    return np.array([[s.pos_x, s.pos_y] for s in steps], dtype=np.int64).reshape(-1, 2)


def _rect(row: np.ndarray) -> PosInTexture:
    x, y, width, height = (int(v) for v in row)
    return PosInTexture(x=x, y=y, width=width, height=height)


def _texture_size(width: int, height: int, factor: float) -> Tuple[int, int]:
    size = np.array([width, height], dtype=np.int64)
    size = size // 2 if factor < 1 else size * 2
    _check_range(size, U16, "texture size")
    return int(size[0]), int(size[1])


def bccad_from_brcad(source: BRCAD, rescale: bool = False) -> BCCAD:
    """
    Convert a BRCAD document to BCCAD.

    Args:
        source: Document to convert (left untouched)
        rescale: Halve texture geometry and remap positions around (512, 512)

    Raises:
        ConversionError: if a converted value does not fit its BCCAD field
    """
    texture_width, texture_height = source.texture_width, source.texture_height
    if rescale:
        texture_width, texture_height = _texture_size(texture_width, texture_height, 0.5)

    sprites: List[bccad.Sprite] = []
    for sprite in source.sprites:
        rects, positions, scales = _part_geometry(sprite.parts)
        positions = _signed_from_u16(positions)
        if rescale:
            rects = rects // 2
            positions = remap_positions(positions, 0.5)
            scales = scales / 2
        _check_range(positions, I16, "part position")

        sprites.append(bccad.Sprite(parts=[
            bccad.SpritePart(
                texture_pos=_rect(rect),
                pos_x=int(pos[0]),
                pos_y=int(pos[1]),
                scale_x=float(scale[0]),
                scale_y=float(scale[1]),
                rotation=part.rotation,
                flip_x=part.flip_x,
                flip_y=part.flip_y,
                multiply_color=Color.white(),
                screen_color=Color.black(),
                opacity=part.opacity,
            )
            for part, rect, pos, scale in zip(sprite.parts, rects, positions, scales)
        ]))

    animations: List[bccad.Animation] = []
    for index, animation in enumerate(source.animations):
        positions = _step_positions(animation.steps)
        if rescale:
            positions = remap_positions(positions, 0.5)
        _check_range(positions, I16, "step position")

        animations.append(bccad.Animation(
            name=animation.name if animation.name is not None else f"anim_{index}",
            interpolation=0,
            steps=[
                bccad.AnimationStep(
                    sprite=step.sprite,
                    duration=step.duration,
                    pos_x=int(pos[0]),
                    pos_y=int(pos[1]),
                    depth=0.0,
                    scale_x=step.scale_x,
                    scale_y=step.scale_y,
                    rotation=step.rotation,
                    multiply_color=Color.white(),
                    opacity=step.opacity,
                )
                for step, pos in zip(animation.steps, positions)
            ],
        ))

    logDebug(f"Converted BRCAD -> BCCAD: {len(sprites)} sprites, {len(animations)} animations"
             f"{' (rescaled)' if rescale else ''}")

    return BCCAD(
        timestamp=None,
        texture_width=texture_width,
        texture_height=texture_height,
        sprites=sprites,
        animations=animations,
    )


def brcad_from_bccad(source: BCCAD, rescale: bool = False) -> BRCAD:
    """
    Convert a BCCAD document to BRCAD.

    Args:
        source: Document to convert (left untouched)
        rescale: Double texture geometry and remap positions around (512, 512)

    Raises:
        ConversionError: if a converted value does not fit its BRCAD field
    """
    texture_width, texture_height = source.texture_width, source.texture_height
    if rescale:
        texture_width, texture_height = _texture_size(texture_width, texture_height, 2.0)

    sprites: List[brcad.Sprite] = []
    for sprite in source.sprites:
        rects, positions, scales = _part_geometry(sprite.parts)
        if rescale:
            rects = rects * 2
            positions = remap_positions(positions, 2.0)
            scales = scales * 2
        _check_range(rects, U16, "texture region")
        _check_range(positions, I16, "part position")
        positions = positions & 0xFFFF

        sprites.append(brcad.Sprite(padding=0, parts=[
            brcad.SpritePart(
                texture_pos=_rect(rect),
                variation_num=HighHalfSelect(),
                pos_x=int(pos[0]),
                pos_y=int(pos[1]),
                scale_x=float(scale[0]),
                scale_y=float(scale[1]),
                rotation=part.rotation,
                flip_x=part.flip_x,
                flip_y=part.flip_y,
                opacity=part.opacity,
            )
            for part, rect, pos, scale in zip(sprite.parts, rects, positions, scales)
        ]))

    animations: List[brcad.Animation] = []
    for animation in source.animations:
        positions = _step_positions(animation.steps)
        if rescale:
            positions = remap_positions(positions, 2.0)
        _check_range(positions, I16, "step position")
        _check_range(np.array([s.opacity for s in animation.steps], dtype=np.int64), U8, "step opacity")

        animations.append(brcad.Animation(
            name=animation.name,
            padding=0,
            steps=[
                brcad.AnimationStep(
                    sprite=step.sprite,
                    duration=step.duration,
                    pos=PackedXY(x=int(pos[0]), y=int(pos[1])),
                    scale_x=step.scale_x,
                    scale_y=step.scale_y,
                    rotation=step.rotation,
                    opacity=step.opacity,
                )
                for step, pos in zip(animation.steps, positions)
            ],
        ))

    logDebug(f"Converted BCCAD -> BRCAD: {len(sprites)} sprites, {len(animations)} animations"
             f"{' (rescaled)' if rescale else ''}")

    return BRCAD(
        timestamp=None,
        has_variations=HighByteFlag(),
        spritesheet_num=0,
        spritesheet_control=0,
        texture_width=texture_width,
        texture_height=texture_height,
        padding1=0,
        sprites=sprites,
        padding2=0,
        animations=animations,
    )
