import struct

import pytest

from ddsview.dxgi import DDSError, DXGIFormat
from ddsview.formats import (
    DDPF_ALPHA,
    DDPF_FOURCC,
    DDPF_LUMINANCE,
    DDPF_RGB,
    PixelFormat,
    format_from_pixel_format,
    make_fourcc,
)


def _rgb(bits, r, g, b, a):
    return PixelFormat(flags=DDPF_RGB, rgb_bit_count=bits, r_mask=r, g_mask=g, b_mask=b, a_mask=a)


def _fourcc(code):
    return PixelFormat(flags=DDPF_FOURCC, fourcc=code)


def test_make_fourcc_matches_dds_magic():
    assert make_fourcc("DDS ") == 0x20534444


def test_make_fourcc_str_and_bytes_agree():
    assert make_fourcc("DXT5") == make_fourcc(b"DXT5")


def test_make_fourcc_is_little_endian():
    assert make_fourcc("DX10").to_bytes(4, "little") == b"DX10"


@pytest.mark.parametrize("code", ["DXT", "DXT10", "", b"abc"])
def test_make_fourcc_rejects_wrong_length(code):
    with pytest.raises(ValueError):
        make_fourcc(code)


def test_parse_round_trip():
    pf = _rgb(32, 0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000)
    raw = pf.to_bytes()
    assert len(raw) == 32
    assert PixelFormat.parse(raw) == pf


def test_parse_reads_fields_in_order():
    raw = struct.pack("<8I", 32, DDPF_FOURCC, make_fourcc("DXT1"), 0, 1, 2, 3, 4)
    pf = PixelFormat.parse(raw + b"\xff" * 8)
    assert pf.size == 32
    assert pf.flags == DDPF_FOURCC
    assert pf.fourcc == make_fourcc("DXT1")
    assert pf.masks == (1, 2, 3, 4)


def test_parse_too_short_raises():
    with pytest.raises(DDSError):
        PixelFormat.parse(b"\x00" * 31)


def test_is_dx10():
    assert _fourcc(make_fourcc("DX10")).is_dx10
    assert not _fourcc(make_fourcc("DXT1")).is_dx10
    assert not PixelFormat(fourcc=make_fourcc("DX10")).is_dx10


@pytest.mark.parametrize(
    "bits, masks, expected",
    [
        (32, (0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000), DXGIFormat.R8G8B8A8_UNORM),
        (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000), DXGIFormat.B8G8R8A8_UNORM),
        (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0x00000000), DXGIFormat.B8G8R8X8_UNORM),
        (32, (0x3FF00000, 0x000FFC00, 0x000003FF, 0xC0000000), DXGIFormat.R10G10B10A2_UNORM),
        (32, (0x0000FFFF, 0xFFFF0000, 0, 0), DXGIFormat.R16G16_UNORM),
        (32, (0xFFFFFFFF, 0, 0, 0), DXGIFormat.R32_FLOAT),
        (16, (0x7C00, 0x03E0, 0x001F, 0x8000), DXGIFormat.B5G5R5A1_UNORM),
        (16, (0xF800, 0x07E0, 0x001F, 0x0000), DXGIFormat.B5G6R5_UNORM),
        (16, (0x0F00, 0x00F0, 0x000F, 0xF000), DXGIFormat.B4G4R4A4_UNORM),
    ],
)
def test_rgb_masks(bits, masks, expected):
    assert format_from_pixel_format(_rgb(bits, *masks)) == expected


@pytest.mark.parametrize(
    "bits, masks",
    [
        (32, (0x000000FF, 0x0000FF00, 0x00FF0000, 0)),
        (32, (0x000003FF, 0x000FFC00, 0x3FF00000, 0xC0000000)),
        (24, (0x00FF0000, 0x0000FF00, 0x000000FF, 0)),
        (16, (0x7C00, 0x03E0, 0x001F, 0)),
        (16, (0x0F00, 0x00F0, 0x000F, 0)),
    ],
)
def test_rgb_without_dxgi_equivalent_is_unknown(bits, masks):
    assert format_from_pixel_format(_rgb(bits, *masks)) == DXGIFormat.UNKNOWN


@pytest.mark.parametrize(
    "bits, masks, expected",
    [
        (8, (0xFF, 0, 0, 0), DXGIFormat.R8_UNORM),
        (16, (0xFFFF, 0, 0, 0), DXGIFormat.R16_UNORM),
        (16, (0xFF, 0, 0, 0xFF00), DXGIFormat.R8G8_UNORM),
        (8, (0x0F, 0, 0, 0xF0), DXGIFormat.UNKNOWN),
    ],
)
def test_luminance(bits, masks, expected):
    pf = PixelFormat(flags=DDPF_LUMINANCE, rgb_bit_count=bits, r_mask=masks[0],
                     g_mask=masks[1], b_mask=masks[2], a_mask=masks[3])
    assert format_from_pixel_format(pf) == expected


def test_alpha_only():
    assert format_from_pixel_format(PixelFormat(flags=DDPF_ALPHA, rgb_bit_count=8)) == DXGIFormat.A8_UNORM
    assert format_from_pixel_format(PixelFormat(flags=DDPF_ALPHA, rgb_bit_count=16)) == DXGIFormat.UNKNOWN


@pytest.mark.parametrize(
    "code, expected",
    [
        ("DXT1", DXGIFormat.BC1_UNORM),
        ("DXT2", DXGIFormat.BC2_UNORM),
        ("DXT3", DXGIFormat.BC2_UNORM),
        ("DXT4", DXGIFormat.BC3_UNORM),
        ("DXT5", DXGIFormat.BC3_UNORM),
        ("ATI1", DXGIFormat.BC4_UNORM),
        ("BC4U", DXGIFormat.BC4_UNORM),
        ("BC4S", DXGIFormat.BC4_SNORM),
        ("ATI2", DXGIFormat.BC5_UNORM),
        ("BC5U", DXGIFormat.BC5_UNORM),
        ("BC5S", DXGIFormat.BC5_SNORM),
        ("RGBG", DXGIFormat.R8G8_B8G8_UNORM),
        ("GRGB", DXGIFormat.G8R8_G8B8_UNORM),
        ("YUY2", DXGIFormat.YUY2),
        ("DX10", DXGIFormat.UNKNOWN),
    ],
)
def test_fourcc_codes(code, expected):
    assert format_from_pixel_format(_fourcc(make_fourcc(code))) == expected


@pytest.mark.parametrize(
    "number, expected",
    [
        (36, DXGIFormat.R16G16B16A16_UNORM),
        (110, DXGIFormat.R16G16B16A16_SNORM),
        (111, DXGIFormat.R16_FLOAT),
        (112, DXGIFormat.R16G16_FLOAT),
        (113, DXGIFormat.R16G16B16A16_FLOAT),
        (114, DXGIFormat.R32_FLOAT),
        (115, DXGIFormat.R32G32_FLOAT),
        (116, DXGIFormat.R32G32B32A32_FLOAT),
        (117, DXGIFormat.UNKNOWN),
    ],
)
def test_legacy_d3d_format_numbers(number, expected):
    assert format_from_pixel_format(_fourcc(number)) == expected


def test_rgb_flag_takes_precedence_over_fourcc():
    pf = PixelFormat(flags=DDPF_RGB | DDPF_FOURCC, fourcc=make_fourcc("DXT1"), rgb_bit_count=32)
    assert format_from_pixel_format(pf) == DXGIFormat.UNKNOWN


def test_no_flags_is_unknown():
    assert format_from_pixel_format(PixelFormat(fourcc=make_fourcc("DXT1"))) == DXGIFormat.UNKNOWN