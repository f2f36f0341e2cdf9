"""
BRCAD Format

Cell animation data used by Wii titles. Big-endian throughout.

File format:
- u32 timestamp (format revision, 20100312)
- u32 variations word (flag in the most significant byte)
- u16 spritesheet_num
- u16 spritesheet_control
- u16 texture_width
- u16 texture_height
- u16 sprite_count
- u16 padding
- For each sprite:
  - u16 part_count
  - u16 padding
  - For each part (32 bytes):
    - u16 x, y, width, height (region in the texture)
    - u32 variation word (selector in the upper 16 bits)
    - u16 pos_x, pos_y
    - f32 scale_x, scale_y, rotation
    - u8 flip_x, flip_y, opacity
    - u8 terminator (0)
- u16 animation_count
- u16 padding
- For each animation:
  - u16 step_count
  - u16 padding
  - For each step (24 bytes):
    - u16 sprite, u16 duration
    - u32 position (signed X in the upper half, signed Y in the lower half)
    - f32 scale_x, scale_y, rotation
    - u8 opacity
    - u8[3] reserved

Animation names are not stored in the file; they come from a separate
labels file (see labels.py).
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, List, Optional

from .base import (
    BXCAD, BXCADType, PosInTexture,
    int_field, float_field, bool_field, bytes_field, list_field, require, optional_field,
)
from ..constants import BRCAD_TIMESTAMP
from ..errors import EditableFormError
from ..utils import logDebug
from ..utils.binary import (
    ByteOrder,
    read_u8, read_u16, read_u32, read_f32, read_bool,
    write_u8, write_u16, write_u32, write_f32, write_bool,
    read_fixed_bytes, write_fixed_bytes,
)
from ..utils.packed import PackedXY, HighByteFlag, HighHalfSelect

ORDER = ByteOrder.BIG
STEP_RESERVED_SIZE = 3


@dataclass
class SpritePart:
    """A region of the texture placed inside a sprite."""
    texture_pos: PosInTexture = field(default_factory=PosInTexture)
    # Added to the document's texture index for this part when variations are on
    variation_num: HighHalfSelect = field(default_factory=HighHalfSelect)
    # Stored unsigned; the game reads them as int16
    pos_x: int = 0
    pos_y: int = 0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False
    opacity: int = 255

    @classmethod
    def read(cls, stream: BinaryIO) -> 'SpritePart':
        part = cls(
            texture_pos=PosInTexture.read(stream, ORDER),
            variation_num=HighHalfSelect(read_u32(stream, ORDER)),
            pos_x=read_u16(stream, ORDER),
            pos_y=read_u16(stream, ORDER),
            scale_x=read_f32(stream, ORDER),
            scale_y=read_f32(stream, ORDER),
            rotation=read_f32(stream, ORDER),
            flip_x=read_bool(stream),
            flip_y=read_bool(stream),
            opacity=read_u8(stream),
        )
        read_u8(stream)  # terminator
        return part

    def write(self, stream: BinaryIO):
        self.texture_pos.write(stream, ORDER)
        write_u32(stream, self.variation_num.raw, ORDER)
        write_u16(stream, self.pos_x, ORDER)
        write_u16(stream, self.pos_y, ORDER)
        write_f32(stream, self.scale_x, ORDER)
        write_f32(stream, self.scale_y, ORDER)
        write_f32(stream, self.rotation, ORDER)
        write_bool(stream, self.flip_x)
        write_bool(stream, self.flip_y)
        write_u8(stream, self.opacity)
        write_u8(stream, 0)  # terminator

    @classmethod
    def from_editable(cls, tree: Any) -> 'SpritePart':
        return cls(
            texture_pos=PosInTexture.from_editable(require(tree, 'texture_pos')),
            variation_num=HighHalfSelect.from_editable(require(tree, 'variation_num', 'unk')),
            pos_x=int_field(tree, 'pos_x', 'u16'),
            pos_y=int_field(tree, 'pos_y', 'u16'),
            scale_x=float_field(tree, 'scale_x'),
            scale_y=float_field(tree, 'scale_y'),
            rotation=float_field(tree, 'rotation'),
            flip_x=bool_field(tree, 'flip_x'),
            flip_y=bool_field(tree, 'flip_y'),
            opacity=int_field(tree, 'opacity', 'u8'),
        )


@dataclass
class Sprite:
    """A frame of animation, composed of parts drawn in order."""
    padding: int = 0
    parts: List[SpritePart] = field(default_factory=list)

    @classmethod
    def from_editable(cls, tree: Any) -> 'Sprite':
        return cls(
            padding=int_field(tree, 'padding', 'u16', 'unk'),
            parts=[SpritePart.from_editable(p) for p in list_field(tree, 'parts')],
        )


@dataclass
class AnimationStep:
    """One timeline entry: a sprite shown for `duration` with a transform."""
    sprite: int = 0
    duration: int = 1
    pos: PackedXY = field(default_factory=PackedXY)
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    opacity: int = 255
    reserved: bytes = bytes(STEP_RESERVED_SIZE)

    @property
    def pos_x(self) -> int:
        return self.pos.x

    @property
    def pos_y(self) -> int:
        return self.pos.y

    @classmethod
    def read(cls, stream: BinaryIO) -> 'AnimationStep':
        return cls(
            sprite=read_u16(stream, ORDER),
            duration=read_u16(stream, ORDER),
            pos=PackedXY.from_bytes(read_fixed_bytes(stream, 4), ORDER),
            scale_x=read_f32(stream, ORDER),
            scale_y=read_f32(stream, ORDER),
            rotation=read_f32(stream, ORDER),
            opacity=read_u8(stream),
            reserved=read_fixed_bytes(stream, STEP_RESERVED_SIZE),
        )

    def write(self, stream: BinaryIO):
        write_u16(stream, self.sprite, ORDER)
        write_u16(stream, self.duration, ORDER)
        stream.write(self.pos.to_bytes(ORDER))
        write_f32(stream, self.scale_x, ORDER)
        write_f32(stream, self.scale_y, ORDER)
        write_f32(stream, self.rotation, ORDER)
        write_u8(stream, self.opacity)
        write_fixed_bytes(stream, self.reserved, STEP_RESERVED_SIZE)

    @classmethod
    def from_editable(cls, tree: Any) -> 'AnimationStep':
        return cls(
            sprite=int_field(tree, 'sprite', 'u16'),
            duration=int_field(tree, 'duration', 'u16'),
            pos=PackedXY.from_editable(require(tree, 'pos', 'unk0')),
            scale_x=float_field(tree, 'scale_x'),
            scale_y=float_field(tree, 'scale_y'),
            rotation=float_field(tree, 'rotation'),
            opacity=int_field(tree, 'opacity', 'u8'),
            reserved=bytes_field(tree, 'reserved', STEP_RESERVED_SIZE, 'unk1'),
        )


@dataclass
class Animation:
    """
    A sequence of steps.

    `name` comes from the labels file and is None until one is applied.
    The game refers to animations by position, so never reorder them.
    """
    name: Optional[str] = None
    padding: int = 0
    steps: List[AnimationStep] = field(default_factory=list)

    @classmethod
    def from_editable(cls, tree: Any) -> 'Animation':
        name = optional_field(tree, 'name')
        if name is not None and not isinstance(name, str):
            raise EditableFormError(f"Animation name must be a string or null, got {name!r}")
        return cls(
            name=name,
            padding=int_field(tree, 'padding', 'u16', 'unk'),
            steps=[AnimationStep.from_editable(s) for s in list_field(tree, 'steps')],
        )


@dataclass
class BRCAD(BXCAD):
    """Contents of a BRCAD file."""

    BYTE_ORDER = ORDER
    TIMESTAMP = BRCAD_TIMESTAMP
    BXCAD_TYPE = BXCADType.BRCAD
    SPRITE_TYPE = Sprite

    # None means the known revision (TIMESTAMP)
    timestamp: Optional[int] = None
    # Whether the texture sheet has palette variations (textures must then be paletted)
    has_variations: HighByteFlag = field(default_factory=HighByteFlag)
    spritesheet_num: int = 0
    spritesheet_control: int = 0
    texture_width: int = 0
    texture_height: int = 0
    padding1: int = 0
    sprites: List[Sprite] = field(default_factory=list)
    padding2: int = 0
    animations: List[Animation] = field(default_factory=list)

    @classmethod
    def from_binary(cls, stream: BinaryIO) -> 'BRCAD':
        """
        Decode a BRCAD from a binary stream.

        Raises:
            TruncatedStreamError: if the stream ends before the document does
        """
        timestamp = read_u32(stream, ORDER)
        has_variations = HighByteFlag(read_u32(stream, ORDER))
        spritesheet_num = read_u16(stream, ORDER)
        spritesheet_control = read_u16(stream, ORDER)
        texture_width = read_u16(stream, ORDER)
        texture_height = read_u16(stream, ORDER)

        sprite_count = read_u16(stream, ORDER)
        padding1 = read_u16(stream, ORDER)
        sprites = []
        for _ in range(sprite_count):
            part_count = read_u16(stream, ORDER)
            padding = read_u16(stream, ORDER)
            parts = [SpritePart.read(stream) for _ in range(part_count)]
            sprites.append(Sprite(padding=padding, parts=parts))

        animation_count = read_u16(stream, ORDER)
        padding2 = read_u16(stream, ORDER)
        animations = []
        for _ in range(animation_count):
            step_count = read_u16(stream, ORDER)
            padding = read_u16(stream, ORDER)
            steps = [AnimationStep.read(stream) for _ in range(step_count)]
            animations.append(Animation(name=None, padding=padding, steps=steps))

        logDebug(f"Read BRCAD: {len(sprites)} sprites, {len(animations)} animations")

        return cls(
            timestamp=cls._timestamp_from_file(timestamp),
            has_variations=has_variations,
            spritesheet_num=spritesheet_num,
            spritesheet_control=spritesheet_control,
            texture_width=texture_width,
            texture_height=texture_height,
            padding1=padding1,
            sprites=sprites,
            padding2=padding2,
            animations=animations,
        )

    def to_binary(self, stream: BinaryIO):
        """Encode this BRCAD to a binary stream. Animation names are not written."""
        write_u32(stream, self._timestamp_for_file(), ORDER)
        write_u32(stream, self.has_variations.raw, ORDER)
        write_u16(stream, self.spritesheet_num, ORDER)
        write_u16(stream, self.spritesheet_control, ORDER)
        write_u16(stream, self.texture_width, ORDER)
        write_u16(stream, self.texture_height, ORDER)

        write_u16(stream, len(self.sprites), ORDER)
        write_u16(stream, self.padding1, ORDER)
        for sprite in self.sprites:
            write_u16(stream, len(sprite.parts), ORDER)
            write_u16(stream, sprite.padding, ORDER)
            for part in sprite.parts:
                part.write(stream)

        write_u16(stream, len(self.animations), ORDER)
        write_u16(stream, self.padding2, ORDER)
        for animation in self.animations:
            write_u16(stream, len(animation.steps), ORDER)
            write_u16(stream, animation.padding, ORDER)
            for step in animation.steps:
                step.write(stream)

    def apply_labels(self, labels: BinaryIO):
        """Name animations from a Shift-JIS labels file (see labels.apply_labels)."""
        from .labels import apply_labels
        apply_labels(self, labels)

    @classmethod
    def from_editable(cls, tree: Any) -> 'BRCAD':
        return cls(
            timestamp=cls._timestamp_from_editable(tree),
            has_variations=HighByteFlag.from_editable(require(tree, 'has_variations', 'unk0')),
            spritesheet_num=int_field(tree, 'spritesheet_num', 'u16'),
            spritesheet_control=int_field(tree, 'spritesheet_control', 'u16'),
            texture_width=int_field(tree, 'texture_width', 'u16'),
            texture_height=int_field(tree, 'texture_height', 'u16'),
            padding1=int_field(tree, 'padding1', 'u16', 'unk1'),
            sprites=[Sprite.from_editable(s) for s in list_field(tree, 'sprites')],
            padding2=int_field(tree, 'padding2', 'u16', 'unk2'),
            animations=[Animation.from_editable(a) for a in list_field(tree, 'animations')],
        )
