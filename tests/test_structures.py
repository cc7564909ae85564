import struct

import pytest

from ddsview.structures import ConstantBuffer, KeyState, SimpleVertex


def test_key_state_from_pressed_flag():
    assert KeyState(int(True)) is KeyState.DOWN
    assert KeyState(int(False)) is KeyState.UP


def test_vertex_bytes_round_trip():
    vertex = SimpleVertex((1.5, -2.0, 3.25), (0.0, 1.0, 0.0), (0.5, 0.75))
    data = vertex.to_bytes()
    assert len(data) == 8 * struct.calcsize("<f")
    assert struct.unpack("<8f", data) == (1.5, -2.0, 3.25, 0.0, 1.0, 0.0, 0.5, 0.75)


def test_vertex_rejects_wrong_lengths():
    with pytest.raises(ValueError):
        SimpleVertex((1.0, 2.0), (0.0, 1.0, 0.0), (0.0, 0.0))
    with pytest.raises(ValueError):
        SimpleVertex((1.0, 2.0, 3.0), (0.0, 1.0, 0.0), (0.0, 0.0, 0.0))


def test_vertex_ordering_is_descending_by_bytes():
    zero = SimpleVertex()
    other = SimpleVertex(pos=(1.0, 0.0, 0.0))
    assert other < zero
    assert not zero < other
    assert not zero < SimpleVertex()


def test_vertices_deduplicate_in_sorted_keys():
    a = SimpleVertex(pos=(1.0, 2.0, 3.0))
    b = SimpleVertex(pos=(4.0, 5.0, 6.0))
    keys = sorted({a, b, SimpleVertex(pos=(1.0, 2.0, 3.0))})
    assert len(keys) == 2
    assert keys[0].to_bytes() > keys[1].to_bytes()


def test_constant_buffer_size_and_tail():
    data = ConstantBuffer().to_bytes()
    assert len(data) == 368
    assert len(data) % 16 == 0
    assert data[-8:] == bytes(8)


def test_constant_buffer_starts_with_matrices():
    projection = tuple(tuple(float(r * 4 + c) for c in range(4)) for r in range(4))
    data = ConstantBuffer(projection=projection).to_bytes()
    flat = tuple(v for row in projection for v in row)
    assert struct.unpack_from("<16f", data, 0) == flat


def test_constant_buffer_flags_follow_camera_position():
    buffer = ConstantBuffer(
        camera_position=(1.0, 2.0, 3.0),
        spec_power=8.0,
        has_texture=True,
        light_on=True,
    )
    data = buffer.to_bytes()
    marker = struct.pack("<4f", 1.0, 2.0, 3.0, 8.0)
    start = data.index(marker) + len(marker)
    assert struct.unpack_from("<6I", data, start) == (1, 0, 1, 0, 0, 0)
    assert start == 320


def test_constant_buffer_rejects_bad_matrix():
    with pytest.raises(ValueError):
        ConstantBuffer(world=((1.0, 0.0), (0.0, 1.0))).to_bytes()


def test_constant_buffer_rejects_bad_colour():
    with pytest.raises(ValueError):
        ConstantBuffer(diffuse_light=(1.0, 1.0, 1.0)).to_bytes()