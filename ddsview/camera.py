"""A first-person camera that keeps its view and projection matrices current."""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ddsview.vecmath import (
    Matrix,
    Vector,
    add,
    look_at_lh,
    perspective_fov_lh,
    rotation_roll_pitch_yaw,
    transform_coord,
)

DEFAULT_VECTORS_PATH = Path("JSON Files") / "Starting Camera Vectors.json"

_JSON_KEYS = {
    "forward": "ForwardVector",
    "up": "UpVector",
    "right": "RightVector",
    "left": "LeftVector",
    "back": "BackVector",
}


def _component(vector: Any, name: str) -> float:
    value = vector[name]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"component {name!r} is not a number")
    return float(value)


@dataclass(frozen=True)
class StartingVectors:
    """The camera's direction vectors before any rotation is applied."""

    forward: Vector
    up: Vector
    right: Vector
    left: Vector
    back: Vector

    @classmethod
    def from_json(cls, document: Any) -> StartingVectors:
        """Build the vectors from a parsed JSON document."""
        try:
            root = document["StartingCameraVectors"]
            values = {
                name: tuple(_component(root[key], c) for c in "xyzw")
                for name, key in _JSON_KEYS.items()
            }
        except (KeyError, TypeError) as exc:
            raise ValueError(f"invalid starting camera vectors: {exc}") from exc
        return cls(**values)

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> StartingVectors:
        """Read the vectors from a JSON file."""
        with open(path, encoding="utf-8") as handle:
            document = json.load(handle)
        return cls.from_json(document)


class Camera:
    """Camera with a position and Euler rotation in radians."""

    def __init__(self, vectors: StartingVectors | None = None) -> None:
        self._start = vectors if vectors is not None else StartingVectors.load(
            DEFAULT_VECTORS_PATH
        )
        self._position: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
        self._projection: Matrix | None = None
        self._update_view()

    @property
    def starting_vectors(self) -> StartingVectors:
        return self._start

    @property
    def position(self) -> tuple[float, float, float]:
        return self._position

    @property
    def rotation(self) -> tuple[float, float, float]:
        return self._rotation

    @property
    def view_matrix(self) -> Matrix:
        return self._view

    @property
    def projection_matrix(self) -> Matrix | None:
        """The projection matrix, or None until set_projection is called."""
        return self._projection

    @property
    def forward(self) -> Vector:
        return self._forward

    @property
    def back(self) -> Vector:
        return self._back

    @property
    def left(self) -> Vector:
        return self._left

    @property
    def right(self) -> Vector:
        return self._right

    def set_projection(
        self, fov: float, aspect_ratio: float, near_z: float, far_z: float
    ) -> None:
        """Set a perspective projection; ``fov`` is the vertical field of view in degrees."""
        fov_radians = (fov / 360.0) * 2.0 * math.pi
        self._projection = perspective_fov_lh(fov_radians, aspect_ratio, near_z, far_z)

    def set_position(self, x: float, y: float, z: float) -> None:
        self._position = (float(x), float(y), float(z))
        self._update_view()

    def move(self, x: float, y: float, z: float) -> None:
        """Add an offset to the position."""
        self.move_by((x, y, z))

    def move_by(self, vector: Vector) -> None:
        """Add the x, y and z components of ``vector`` to the position."""
        if len(vector) < 3:
            raise ValueError("an offset needs at least 3 components")
        self._position = add(self._position, tuple(float(c) for c in vector[:3]))
        self._update_view()

    def set_rotation(self, x: float, y: float, z: float) -> None:
        self._rotation = (float(x), float(y), float(z))
        self._update_view()

    def rotate(self, x: float, y: float, z: float) -> None:
        """Add angles, in radians, to the rotation."""
        self._rotation = add(self._rotation, (float(x), float(y), float(z)))
        self._update_view()

    def _update_view(self) -> None:
        pitch, yaw, roll = self._rotation
        rotation = rotation_roll_pitch_yaw(pitch, yaw, roll)
        target = add(transform_coord(self._start.forward, rotation)[:3], self._position)
        up = transform_coord(self._start.up, rotation)
        self._view = look_at_lh(self._position, target, up)

        # Movement directions follow yaw only, so looking up or down keeps them level.
        heading = rotation_roll_pitch_yaw(0.0, yaw, 0.0)
        self._forward = transform_coord(self._start.forward, heading)
        self._back = transform_coord(self._start.back, heading)
        self._left = transform_coord(self._start.left, heading)
        self._right = transform_coord(self._start.right, heading)