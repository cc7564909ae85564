"""Left-handed 3D vector and matrix helpers using row vectors and row-major matrices."""

from __future__ import annotations

import math
from collections.abc import Sequence

Vector = tuple[float, ...]
Matrix = tuple[tuple[float, float, float, float], ...]

IDENTITY: Matrix = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0),
)

_FOV_EPSILON = 0.00001 * 2.0
_RANGE_EPSILON = 0.00001


def _xyz(vector: Sequence[float]) -> tuple[float, float, float]:
    if len(vector) < 3:
        raise ValueError(f"a 3D vector needs at least 3 components, got {len(vector)}")
    return float(vector[0]), float(vector[1]), float(vector[2])


def _dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a: Sequence[float], b: Sequence[float]) -> tuple[float, float, float]:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _normalize(v: Sequence[float]) -> tuple[float, float, float]:
    length = math.sqrt(_dot(v, v))
    if length == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / length, v[1] / length, v[2] / length)


def rotation_roll_pitch_yaw(pitch: float, yaw: float, roll: float) -> Matrix:
    """Rotation applying roll about Z, then pitch about X, then yaw about Y."""
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)
    cr, sr = math.cos(roll), math.sin(roll)
    return (
        (cr * cy + sr * sp * sy, sr * cp, sr * sp * cy - cr * sy, 0.0),
        (cr * sp * sy - sr * cy, cr * cp, sr * sy + cr * sp * cy, 0.0),
        (cp * sy, -sp, cp * cy, 0.0),
        (0.0, 0.0, 0.0, 1.0),
    )


def transform_coord(vector: Sequence[float], matrix: Matrix) -> Vector:
    """Transform the point (x, y, z, 1) by ``matrix`` and divide by the resulting w."""
    x, y, z = _xyz(vector)
    result = [
        x * matrix[0][j] + y * matrix[1][j] + z * matrix[2][j] + matrix[3][j]
        for j in range(4)
    ]
    w = result[3]
    return tuple(component / w for component in result)


def look_at_lh(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> Matrix:
    """Left-handed view matrix for a camera at ``eye`` looking at ``target``."""
    eye3 = _xyz(eye)
    target3 = _xyz(target)
    up3 = _xyz(up)
    direction = tuple(t - e for t, e in zip(target3, eye3))
    if not any(direction):
        raise ValueError("eye and target must differ")
    if not any(up3):
        raise ValueError("up direction must not be zero")
    if not all(math.isfinite(c) for c in direction + up3):
        raise ValueError("direction vectors must be finite")

    r2 = _normalize(direction)
    r0 = _normalize(_cross(up3, r2))
    r1 = _cross(r2, r0)
    neg_eye = tuple(-c for c in eye3)
    d0, d1, d2 = _dot(r0, neg_eye), _dot(r1, neg_eye), _dot(r2, neg_eye)
    return (
        (r0[0], r1[0], r2[0], 0.0),
        (r0[1], r1[1], r2[1], 0.0),
        (r0[2], r1[2], r2[2], 0.0),
        (d0, d1, d2, 1.0),
    )


def perspective_fov_lh(
    fov_y: float, aspect_ratio: float, near_z: float, far_z: float
) -> Matrix:
    """Left-handed perspective projection mapping depth to the range 0 to 1."""
    if near_z <= 0.0 or far_z <= 0.0:
        raise ValueError("near and far planes must be positive")
    if abs(fov_y) <= _FOV_EPSILON:
        raise ValueError("field of view must not be zero")
    if abs(aspect_ratio) <= _FOV_EPSILON:
        raise ValueError("aspect ratio must not be zero")
    if abs(far_z - near_z) <= _RANGE_EPSILON:
        raise ValueError("near and far planes must differ")

    half = 0.5 * fov_y
    height = math.cos(half) / math.sin(half)
    width = height / aspect_ratio
    depth_range = far_z / (far_z - near_z)
    return (
        (width, 0.0, 0.0, 0.0),
        (0.0, height, 0.0, 0.0),
        (0.0, 0.0, depth_range, 1.0),
        (0.0, 0.0, -depth_range * near_z, 0.0),
    )


def add(a: Sequence[float], b: Sequence[float]) -> Vector:
    """Add two vectors component by component."""
    if len(a) != len(b):
        raise ValueError(f"vectors differ in length: {len(a)} and {len(b)}")
    return tuple(x + y for x, y in zip(a, b))