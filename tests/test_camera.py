import json
import math

import pytest

from ddsview.camera import DEFAULT_VECTORS_PATH, Camera, StartingVectors
from ddsview.vecmath import IDENTITY, perspective_fov_lh, transform_coord

DOCUMENT = {
    "StartingCameraVectors": {
        "ForwardVector": {"x": 0.0, "y": 0.0, "z": 1.0, "w": 0.0},
        "UpVector": {"x": 0.0, "y": 1.0, "z": 0.0, "w": 0.0},
        "RightVector": {"x": 1.0, "y": 0.0, "z": 0.0, "w": 0.0},
        "LeftVector": {"x": -1.0, "y": 0.0, "z": 0.0, "w": 0.0},
        "BackVector": {"x": 0.0, "y": 0.0, "z": -1.0, "w": 0.0},
    }
}


@pytest.fixture
def vectors():
    return StartingVectors.from_json(DOCUMENT)


@pytest.fixture
def camera(vectors):
    return Camera(vectors)


def test_from_json_reads_every_vector(vectors):
    assert vectors.forward == (0.0, 0.0, 1.0, 0.0)
    assert vectors.up == (0.0, 1.0, 0.0, 0.0)
    assert vectors.right == (1.0, 0.0, 0.0, 0.0)
    assert vectors.left == (-1.0, 0.0, 0.0, 0.0)
    assert vectors.back == (0.0, 0.0, -1.0, 0.0)


def test_from_json_rejects_missing_vector():
    document = {"StartingCameraVectors": dict(DOCUMENT["StartingCameraVectors"])}
    del document["StartingCameraVectors"]["UpVector"]
    with pytest.raises(ValueError):
        StartingVectors.from_json(document)


def test_from_json_rejects_non_numeric_component():
    document = json.loads(json.dumps(DOCUMENT))
    document["StartingCameraVectors"]["ForwardVector"]["x"] = "zero"
    with pytest.raises(ValueError):
        StartingVectors.from_json(document)


def test_load_round_trips_through_file(tmp_path, vectors):
    path = tmp_path / "vectors.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    assert StartingVectors.load(path) == vectors


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        StartingVectors.load(tmp_path / "absent.json")


def test_default_camera_reads_default_path(tmp_path, monkeypatch, vectors):
    monkeypatch.chdir(tmp_path)
    DEFAULT_VECTORS_PATH.parent.mkdir(parents=True)
    DEFAULT_VECTORS_PATH.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    assert Camera().starting_vectors == vectors


def test_initial_state(camera):
    assert camera.position == (0.0, 0.0, 0.0)
    assert camera.rotation == (0.0, 0.0, 0.0)
    assert camera.projection_matrix is None
    for row, expected in zip(camera.view_matrix, IDENTITY):
        assert row == pytest.approx(expected, abs=1e-9)
    assert camera.forward[:3] == pytest.approx((0.0, 0.0, 1.0))


def test_move_accumulates(camera):
    camera.move(1.0, 2.0, 3.0)
    camera.move(0.5, 0.5, 0.5)
    assert camera.position == pytest.approx((1.5, 2.5, 3.5))


def test_move_by_uses_only_xyz(camera):
    camera.set_position(1.0, 1.0, 1.0)
    camera.move_by((1.0, 2.0, 3.0, 9.0))
    assert camera.position == pytest.approx((2.0, 3.0, 4.0))


def test_move_by_rejects_short_vector(camera):
    with pytest.raises(ValueError):
        camera.move_by((1.0, 2.0))


def test_view_maps_position_to_origin_and_forward_to_z(camera, vectors):
    camera.set_position(1.0, -2.0, 3.0)
    camera.set_rotation(0.3, 0.5, 0.1)
    view = camera.view_matrix
    assert transform_coord(camera.position, view) == pytest.approx((0.0, 0.0, 0.0, 1.0), abs=1e-9)
    ahead = transform_coord(vectors.forward, view)
    assert math.hypot(*ahead[:3]) == pytest.approx(math.dist(vectors.forward[:3], camera.position))


def test_rotate_accumulates_like_set_rotation(vectors):
    a = Camera(vectors)
    a.rotate(0.1, 0.2, 0.3)
    a.rotate(0.2, 0.3, 0.1)
    b = Camera(vectors)
    b.set_rotation(0.3, 0.5, 0.4)
    assert a.rotation == pytest.approx(b.rotation)
    for row_a, row_b in zip(a.view_matrix, b.view_matrix):
        assert row_a == pytest.approx(row_b, abs=1e-9)


def test_movement_vectors_follow_yaw_only(vectors):
    level = Camera(vectors)
    level.set_rotation(0.0, 0.7, 0.0)
    tilted = Camera(vectors)
    tilted.set_rotation(1.1, 0.7, -0.4)
    assert tilted.forward == pytest.approx(level.forward)
    assert tilted.right == pytest.approx(level.right)


def test_yaw_turns_forward_in_horizontal_plane(camera):
    camera.set_rotation(0.0, math.pi / 2, 0.0)
    forward = camera.forward[:3]
    assert forward[1] == pytest.approx(0.0, abs=1e-9)
    assert math.hypot(*forward) == pytest.approx(1.0)
    assert forward[2] == pytest.approx(0.0, abs=1e-9)
    assert camera.back[:3] == pytest.approx(tuple(-c for c in forward), abs=1e-9)
    assert camera.left[:3] == pytest.approx(tuple(-c for c in camera.right[:3]), abs=1e-9)


def test_set_projection_uses_degrees(camera):
    camera.set_projection(90.0, 1.5, 0.1, 100.0)
    expected = perspective_fov_lh(math.pi / 2, 1.5, 0.1, 100.0)
    for row, row_e in zip(camera.projection_matrix, expected):
        assert row == pytest.approx(row_e)


def test_set_projection_rejects_bad_planes(camera):
    with pytest.raises(ValueError):
        camera.set_projection(60.0, 1.0, 0.0, 100.0)