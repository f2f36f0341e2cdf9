"""
BCCAD Format

Cell animation data used by 3DS titles. Little-endian throughout.

File format:
- u32 timestamp (format revision, 20131007)
- u16 texture_width
- u16 texture_height
- u32 sprite_count
- For each sprite:
  - u32 part_count
  - For each part (64 bytes):
    - u16 x, y, width, height (region in the texture)
    - i16 pos_x, pos_y
    - f32 scale_x, scale_y, rotation
    - u8 flip_x, flip_y
    - u8[3] multiply_color, u8[3] screen_color
    - u8 opacity
    - u8[12] reserved
    - u8 designation_id, u8 reserved
    - f32 depth (top_left, bottom_left, top_right, bottom_right)
    - u8 terminator (0)
- u32 animation_count
- For each animation:
  - padded string name
  - i32 interpolation
  - u32 step_count
  - For each step (32 bytes):
    - u16 sprite, u16 duration
    - i16 pos_x, pos_y
    - f32 depth, scale_x, scale_y, rotation
    - u8[3] multiply_color, u8[3] reserved
    - u16 opacity
- u8 terminator (0)
"""

from dataclasses import dataclass, field
from typing import Any, BinaryIO, List, Optional

from .base import (
    BXCAD, BXCADType, Color, PosInTexture,
    int_field, float_field, bool_field, bytes_field, list_field, require,
)
from ..constants import BCCAD_TIMESTAMP, MAX_STRING_LENGTH
from ..errors import EditableFormError
from ..utils import logDebug
from ..utils.binary import (
    ByteOrder,
    read_u8, read_u16, read_u32, read_i16, read_i32, read_f32, read_bool,
    write_u8, write_u16, write_u32, write_i16, write_i32, write_f32, write_bool,
    read_fixed_bytes, write_fixed_bytes, read_padded_string, write_padded_string,
)

ORDER = ByteOrder.LITTLE
PART_RESERVED_SIZE = 12
STEP_RESERVED_SIZE = 3


@dataclass
class StereoDepth:
    """Stereoscopic depth at the four corners of a part."""
    top_left: float = 0.0
    bottom_left: float = 0.0
    top_right: float = 0.0
    bottom_right: float = 0.0

    @classmethod
    def from_editable(cls, tree: Any) -> 'StereoDepth':
        return cls(
            top_left=float_field(tree, 'top_left'),
            bottom_left=float_field(tree, 'bottom_left'),
            top_right=float_field(tree, 'top_right'),
            bottom_right=float_field(tree, 'bottom_right'),
        )


@dataclass
class SpritePart:
    """A region of the texture placed inside a sprite."""
    texture_pos: PosInTexture = field(default_factory=PosInTexture)
    pos_x: int = 0
    pos_y: int = 0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    flip_x: bool = False
    flip_y: bool = False
    multiply_color: Color = field(default_factory=Color.white)
    screen_color: Color = field(default_factory=Color.black)
    opacity: int = 255
    reserved1: bytes = bytes(PART_RESERVED_SIZE)
    # Marks parts the game code treats specially (effects, interactive pieces)
    designation_id: int = 0
    reserved2: int = 0
    depth: StereoDepth = field(default_factory=StereoDepth)

    @classmethod
    def read(cls, stream: BinaryIO) -> 'SpritePart':
        part = cls(
            texture_pos=PosInTexture.read(stream, ORDER),
            pos_x=read_i16(stream, ORDER),
            pos_y=read_i16(stream, ORDER),
            scale_x=read_f32(stream, ORDER),
            scale_y=read_f32(stream, ORDER),
            rotation=read_f32(stream, ORDER),
            flip_x=read_bool(stream),
            flip_y=read_bool(stream),
            multiply_color=Color.read(stream),
            screen_color=Color.read(stream),
            opacity=read_u8(stream),
            reserved1=read_fixed_bytes(stream, PART_RESERVED_SIZE),
            designation_id=read_u8(stream),
            reserved2=read_u8(stream),
            depth=StereoDepth(
                top_left=read_f32(stream, ORDER),
                bottom_left=read_f32(stream, ORDER),
                top_right=read_f32(stream, ORDER),
                bottom_right=read_f32(stream, ORDER),
            ),
        )
        read_u8(stream)  # terminator
        return part

    def write(self, stream: BinaryIO):
        self.texture_pos.write(stream, ORDER)
        write_i16(stream, self.pos_x, ORDER)
        write_i16(stream, self.pos_y, ORDER)
        write_f32(stream, self.scale_x, ORDER)
        write_f32(stream, self.scale_y, ORDER)
        write_f32(stream, self.rotation, ORDER)
        write_bool(stream, self.flip_x)
        write_bool(stream, self.flip_y)
        self.multiply_color.write(stream)
        self.screen_color.write(stream)
        write_u8(stream, self.opacity)
        write_fixed_bytes(stream, self.reserved1, PART_RESERVED_SIZE)
        write_u8(stream, self.designation_id)
        write_u8(stream, self.reserved2)
        write_f32(stream, self.depth.top_left, ORDER)
        write_f32(stream, self.depth.bottom_left, ORDER)
        write_f32(stream, self.depth.top_right, ORDER)
        write_f32(stream, self.depth.bottom_right, ORDER)
        write_u8(stream, 0)  # terminator

    @classmethod
    def from_editable(cls, tree: Any) -> 'SpritePart':
        return cls(
            texture_pos=PosInTexture.from_editable(require(tree, 'texture_pos')),
            pos_x=int_field(tree, 'pos_x', 'i16'),
            pos_y=int_field(tree, 'pos_y', 'i16'),
            scale_x=float_field(tree, 'scale_x'),
            scale_y=float_field(tree, 'scale_y'),
            rotation=float_field(tree, 'rotation'),
            flip_x=bool_field(tree, 'flip_x'),
            flip_y=bool_field(tree, 'flip_y'),
            multiply_color=Color.from_editable(require(tree, 'multiply_color')),
            screen_color=Color.from_editable(require(tree, 'screen_color')),
            opacity=int_field(tree, 'opacity', 'u8'),
            reserved1=bytes_field(tree, 'reserved1', PART_RESERVED_SIZE),
            designation_id=int_field(tree, 'designation_id', 'u8'),
            reserved2=int_field(tree, 'reserved2', 'u8'),
            depth=StereoDepth.from_editable(require(tree, 'depth')),
        )


@dataclass
class Sprite:
    """A frame of animation, composed of parts drawn in order."""
    parts: List[SpritePart] = field(default_factory=list)

    @classmethod
    def from_editable(cls, tree: Any) -> 'Sprite':
        return cls(parts=[SpritePart.from_editable(p) for p in list_field(tree, 'parts')])


@dataclass
class AnimationStep:
    """One timeline entry: a sprite shown for `duration` with a transform."""
    sprite: int = 0
    duration: int = 1
    pos_x: int = 0
    pos_y: int = 0
    depth: float = 0.0
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0
    multiply_color: Color = field(default_factory=Color.white)
    reserved: bytes = bytes(STEP_RESERVED_SIZE)
    opacity: int = 255

    @classmethod
    def read(cls, stream: BinaryIO) -> 'AnimationStep':
        return cls(
            sprite=read_u16(stream, ORDER),
            duration=read_u16(stream, ORDER),
            pos_x=read_i16(stream, ORDER),
            pos_y=read_i16(stream, ORDER),
            depth=read_f32(stream, ORDER),
            scale_x=read_f32(stream, ORDER),
            scale_y=read_f32(stream, ORDER),
            rotation=read_f32(stream, ORDER),
            multiply_color=Color.read(stream),
            reserved=read_fixed_bytes(stream, STEP_RESERVED_SIZE),
            opacity=read_u16(stream, ORDER),
        )

    def write(self, stream: BinaryIO):
        write_u16(stream, self.sprite, ORDER)
        write_u16(stream, self.duration, ORDER)
        write_i16(stream, self.pos_x, ORDER)
        write_i16(stream, self.pos_y, ORDER)
        write_f32(stream, self.depth, ORDER)
        write_f32(stream, self.scale_x, ORDER)
        write_f32(stream, self.scale_y, ORDER)
        write_f32(stream, self.rotation, ORDER)
        self.multiply_color.write(stream)
        write_fixed_bytes(stream, self.reserved, STEP_RESERVED_SIZE)
        write_u16(stream, self.opacity, ORDER)

    @classmethod
    def from_editable(cls, tree: Any) -> 'AnimationStep':
        return cls(
            sprite=int_field(tree, 'sprite', 'u16'),
            duration=int_field(tree, 'duration', 'u16'),
            pos_x=int_field(tree, 'pos_x', 'i16'),
            pos_y=int_field(tree, 'pos_y', 'i16'),
            depth=float_field(tree, 'depth'),
            scale_x=float_field(tree, 'scale_x'),
            scale_y=float_field(tree, 'scale_y'),
            rotation=float_field(tree, 'rotation'),
            multiply_color=Color.from_editable(require(tree, 'multiply_color')),
            reserved=bytes_field(tree, 'reserved', STEP_RESERVED_SIZE),
            opacity=int_field(tree, 'opacity', 'u16'),
        )


@dataclass
class Animation:
    """A named sequence of steps. The game refers to animations by name."""
    name: str = ""
    interpolation: int = 0
    steps: List[AnimationStep] = field(default_factory=list)

    @classmethod
    def from_editable(cls, tree: Any) -> 'Animation':
        name = require(tree, 'name')
        if not isinstance(name, str):
            raise EditableFormError(f"Animation name must be a string, got {name!r}")
        if len(name.encode('utf-8')) > MAX_STRING_LENGTH:
            raise EditableFormError(
                f"Animation name is longer than {MAX_STRING_LENGTH} bytes: {name[:32]!r}...",
                {"length": len(name.encode('utf-8'))},
            )
        return cls(
            name=name,
            interpolation=int_field(tree, 'interpolation', 'i32'),
            steps=[AnimationStep.from_editable(s) for s in list_field(tree, 'steps')],
        )


@dataclass
class BCCAD(BXCAD):
    """
    Contents of a BCCAD file.

    Texture dimensions are at most 1024 by hardware limitation; this is
    not checked.
    """

    BYTE_ORDER = ORDER
    TIMESTAMP = BCCAD_TIMESTAMP
    BXCAD_TYPE = BXCADType.BCCAD
    SPRITE_TYPE = Sprite

    # None means the known revision (TIMESTAMP)
    timestamp: Optional[int] = None
    texture_width: int = 0
    texture_height: int = 0
    sprites: List[Sprite] = field(default_factory=list)
    animations: List[Animation] = field(default_factory=list)

    @classmethod
    def from_binary(cls, stream: BinaryIO) -> 'BCCAD':
        """
        Decode a BCCAD from a binary stream.

        Raises:
            TruncatedStreamError: if the stream ends before the document does
            StringEncodingError: if an animation name is not valid UTF-8
        """
        timestamp = read_u32(stream, ORDER)
        texture_width = read_u16(stream, ORDER)
        texture_height = read_u16(stream, ORDER)

        sprite_count = read_u32(stream, ORDER)
        sprites = []
        for _ in range(sprite_count):
            part_count = read_u32(stream, ORDER)
            sprites.append(Sprite(parts=[SpritePart.read(stream) for _ in range(part_count)]))

        animation_count = read_u32(stream, ORDER)
        animations = []
        for _ in range(animation_count):
            name = read_padded_string(stream)
            interpolation = read_i32(stream, ORDER)
            step_count = read_u32(stream, ORDER)
            steps = [AnimationStep.read(stream) for _ in range(step_count)]
            animations.append(Animation(name=name, interpolation=interpolation, steps=steps))

        terminator = read_u8(stream)
        if terminator != 0:
            logDebug(f"BCCAD terminator byte is 0x{terminator:02X}, expected 0x00")

        logDebug(f"Read BCCAD: {len(sprites)} sprites, {len(animations)} animations")

        return cls(
            timestamp=cls._timestamp_from_file(timestamp),
            texture_width=texture_width,
            texture_height=texture_height,
            sprites=sprites,
            animations=animations,
        )

    def to_binary(self, stream: BinaryIO):
        """Encode this BCCAD to a binary stream."""
        write_u32(stream, self._timestamp_for_file(), ORDER)
        write_u16(stream, self.texture_width, ORDER)
        write_u16(stream, self.texture_height, ORDER)

        write_u32(stream, len(self.sprites), ORDER)
        for sprite in self.sprites:
            write_u32(stream, len(sprite.parts), ORDER)
            for part in sprite.parts:
                part.write(stream)

        write_u32(stream, len(self.animations), ORDER)
        for animation in self.animations:
            write_padded_string(stream, animation.name)
            write_i32(stream, animation.interpolation, ORDER)
            write_u32(stream, len(animation.steps), ORDER)
            for step in animation.steps:
                step.write(stream)

        write_u8(stream, 0)  # terminator

    @classmethod
    def from_editable(cls, tree: Any) -> 'BCCAD':
        return cls(
            timestamp=cls._timestamp_from_editable(tree),
            texture_width=int_field(tree, 'texture_width', 'u16'),
            texture_height=int_field(tree, 'texture_height', 'u16'),
            sprites=[Sprite.from_editable(s) for s in list_field(tree, 'sprites')],
            animations=[Animation.from_editable(a) for a in list_field(tree, 'animations')],
        )
