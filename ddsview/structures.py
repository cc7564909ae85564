"""Vertex, constant buffer and input state records shared by the renderer."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from ddsview.vecmath import IDENTITY, Matrix

_VERTEX = struct.Struct("<8f")
# Three matrices, four colours, light direction and count, two colours,
# camera position and specular power, six flags, pixelation, padding,
# then the trailing bytes that round the record up to 16-byte alignment.
_CONSTANT_BUFFER = struct.Struct("<48f16f3ff8f3ff6If3f8x")

_ZERO4 = (0.0, 0.0, 0.0, 0.0)
_ZERO3 = (0.0, 0.0, 0.0)


class KeyState(IntEnum):
    """Whether a key is released or held down."""

    UP = 0
    DOWN = 1


def _flatten(values: Iterable, count: int, name: str) -> list[float]:
    flat: list[float] = []
    for item in values:
        if isinstance(item, (int, float)):
            flat.append(float(item))
        else:
            flat.extend(float(v) for v in item)
    if len(flat) != count:
        raise ValueError(f"{name} needs {count} values, got {len(flat)}")
    return flat


@dataclass(frozen=True)
class SimpleVertex:
    """A vertex with position, normal and texture coordinates."""

    pos: tuple[float, float, float] = _ZERO3
    normal: tuple[float, float, float] = _ZERO3
    tex_c: tuple[float, float] = (0.0, 0.0)

    def __post_init__(self) -> None:
        for name, size in (("pos", 3), ("normal", 3), ("tex_c", 2)):
            if len(getattr(self, name)) != size:
                raise ValueError(f"{name} needs {size} components")

    def to_bytes(self) -> bytes:
        """Pack the vertex as eight little-endian 32-bit floats."""
        return _VERTEX.pack(*self.pos, *self.normal, *self.tex_c)

    def __lt__(self, other: object) -> bool:
        # Orders by raw bytes, descending; used only to key vertex deduplication.
        if not isinstance(other, SimpleVertex):
            return NotImplemented
        return self.to_bytes() > other.to_bytes()


@dataclass
class ConstantBuffer:
    """Per-frame shader constants."""

    projection: Matrix = IDENTITY
    view: Matrix = IDENTITY
    world: Matrix = IDENTITY
    diffuse_light: tuple[float, ...] = _ZERO4
    diffuse_material: tuple[float, ...] = _ZERO4
    ambient_light: tuple[float, ...] = _ZERO4
    ambient_material: tuple[float, ...] = _ZERO4
    light_dir: tuple[float, ...] = _ZERO3
    count: float = 0.0
    specular_light: tuple[float, ...] = _ZERO4
    specular_material: tuple[float, ...] = _ZERO4
    camera_position: tuple[float, ...] = _ZERO3
    spec_power: float = 0.0
    has_texture: bool = False
    wave_filter: bool = False
    light_on: bool = False
    wave_filter_x: bool = False
    pixelate_filter: bool = False
    gooch_shading: bool = False
    pixelation_amount: float = 0.0
    padding: tuple[float, ...] = field(default=_ZERO3)

    def to_bytes(self) -> bytes:
        """Pack the constants in the layout the shaders expect."""
        values: list = []
        for name in ("projection", "view", "world"):
            values += _flatten(getattr(self, name), 16, name)
        for name in ("diffuse_light", "diffuse_material", "ambient_light", "ambient_material"):
            values += _flatten(getattr(self, name), 4, name)
        values += _flatten(self.light_dir, 3, "light_dir")
        values.append(float(self.count))
        values += _flatten(self.specular_light, 4, "specular_light")
        values += _flatten(self.specular_material, 4, "specular_material")
        values += _flatten(self.camera_position, 3, "camera_position")
        values.append(float(self.spec_power))
        values += [
            int(self.has_texture),
            int(self.wave_filter),
            int(self.light_on),
            int(self.wave_filter_x),
            int(self.pixelate_filter),
            int(self.gooch_shading),
        ]
        values.append(float(self.pixelation_amount))
        values += _flatten(self.padding, 3, "padding")
        return _CONSTANT_BUFFER.pack(*values)