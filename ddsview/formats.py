"""Legacy DDS pixel format descriptions and their mapping to DXGI formats."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from ddsview.dxgi import DDSError, DXGIFormat

DDPF_ALPHA = 0x00000002
DDPF_FOURCC = 0x00000004
DDPF_RGB = 0x00000040
DDPF_LUMINANCE = 0x00020000

PIXEL_FORMAT_SIZE = 32

_PIXEL_FORMAT = struct.Struct("<8I")


def make_fourcc(code: str | bytes) -> int:
    """Pack a four-character code into a little-endian 32-bit integer."""
    raw = code.encode("ascii") if isinstance(code, str) else bytes(code)
    if len(raw) != 4:
        raise ValueError(f"a four-character code needs exactly 4 bytes, got {len(raw)}")
    return int.from_bytes(raw, "little")


DX10_FOURCC = make_fourcc("DX10")


@dataclass(frozen=True)
class PixelFormat:
    """The pixel format block of a DDS header."""

    size: int = PIXEL_FORMAT_SIZE
    flags: int = 0
    fourcc: int = 0
    rgb_bit_count: int = 0
    r_mask: int = 0
    g_mask: int = 0
    b_mask: int = 0
    a_mask: int = 0

    @classmethod
    def parse(cls, data: bytes) -> PixelFormat:
        """Read a pixel format from the first 32 bytes of ``data``."""
        if len(data) < PIXEL_FORMAT_SIZE:
            raise DDSError(
                f"pixel format needs {PIXEL_FORMAT_SIZE} bytes, got {len(data)}"
            )
        return cls(*_PIXEL_FORMAT.unpack_from(data))

    def to_bytes(self) -> bytes:
        """Serialise the pixel format as it is stored in a DDS header."""
        return _PIXEL_FORMAT.pack(
            self.size,
            self.flags,
            self.fourcc,
            self.rgb_bit_count,
            self.r_mask,
            self.g_mask,
            self.b_mask,
            self.a_mask,
        )

    @property
    def masks(self) -> tuple[int, int, int, int]:
        """The red, green, blue and alpha bit masks."""
        return (self.r_mask, self.g_mask, self.b_mask, self.a_mask)

    @property
    def is_dx10(self) -> bool:
        """True when the format is given by a DX10 extended header."""
        return bool(self.flags & DDPF_FOURCC) and self.fourcc == DX10_FOURCC


# Keyed by (bit count, (r, g, b, a) masks). Many writers swap the red and blue
# masks for 10:10:10:2 data; the swapped layout is taken to mean R10G10B10A2.
_RGB_FORMATS: dict[tuple[int, tuple[int, int, int, int]], DXGIFormat] = {
    (32, (0x000000FF, 0x0000FF00, 0x00FF0000, 0xFF000000)): DXGIFormat.R8G8B8A8_UNORM,
    (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0xFF000000)): DXGIFormat.B8G8R8A8_UNORM,
    (32, (0x00FF0000, 0x0000FF00, 0x000000FF, 0x00000000)): DXGIFormat.B8G8R8X8_UNORM,
    (32, (0x3FF00000, 0x000FFC00, 0x000003FF, 0xC0000000)): DXGIFormat.R10G10B10A2_UNORM,
    (32, (0x0000FFFF, 0xFFFF0000, 0x00000000, 0x00000000)): DXGIFormat.R16G16_UNORM,
    (32, (0xFFFFFFFF, 0x00000000, 0x00000000, 0x00000000)): DXGIFormat.R32_FLOAT,
    (16, (0x7C00, 0x03E0, 0x001F, 0x8000)): DXGIFormat.B5G5R5A1_UNORM,
    (16, (0xF800, 0x07E0, 0x001F, 0x0000)): DXGIFormat.B5G6R5_UNORM,
    (16, (0x0F00, 0x00F0, 0x000F, 0xF000)): DXGIFormat.B4G4R4A4_UNORM,
}

_LUMINANCE_FORMATS: dict[tuple[int, tuple[int, int, int, int]], DXGIFormat] = {
    (8, (0x000000FF, 0, 0, 0)): DXGIFormat.R8_UNORM,
    (16, (0x0000FFFF, 0, 0, 0)): DXGIFormat.R16_UNORM,
    (16, (0x000000FF, 0, 0, 0x0000FF00)): DXGIFormat.R8G8_UNORM,
}

_FOURCC_FORMATS: dict[int, DXGIFormat] = {
    make_fourcc("DXT1"): DXGIFormat.BC1_UNORM,
    make_fourcc("DXT3"): DXGIFormat.BC2_UNORM,
    make_fourcc("DXT5"): DXGIFormat.BC3_UNORM,
    # Premultiplied alpha variants map onto the same block formats.
    make_fourcc("DXT2"): DXGIFormat.BC2_UNORM,
    make_fourcc("DXT4"): DXGIFormat.BC3_UNORM,
    make_fourcc("ATI1"): DXGIFormat.BC4_UNORM,
    make_fourcc("BC4U"): DXGIFormat.BC4_UNORM,
    make_fourcc("BC4S"): DXGIFormat.BC4_SNORM,
    make_fourcc("ATI2"): DXGIFormat.BC5_UNORM,
    make_fourcc("BC5U"): DXGIFormat.BC5_UNORM,
    make_fourcc("BC5S"): DXGIFormat.BC5_SNORM,
    make_fourcc("RGBG"): DXGIFormat.R8G8_B8G8_UNORM,
    make_fourcc("GRGB"): DXGIFormat.G8R8_G8B8_UNORM,
    make_fourcc("YUY2"): DXGIFormat.YUY2,
    # Legacy D3DFORMAT numbers stored in the fourcc field.
    36: DXGIFormat.R16G16B16A16_UNORM,
    110: DXGIFormat.R16G16B16A16_SNORM,
    111: DXGIFormat.R16_FLOAT,
    112: DXGIFormat.R16G16_FLOAT,
    113: DXGIFormat.R16G16B16A16_FLOAT,
    114: DXGIFormat.R32_FLOAT,
    115: DXGIFormat.R32G32_FLOAT,
    116: DXGIFormat.R32G32B32A32_FLOAT,
}


def format_from_pixel_format(pixel_format: PixelFormat) -> DXGIFormat:
    """Map a legacy pixel format to a DXGI format, or UNKNOWN if none fits."""
    key = (pixel_format.rgb_bit_count, pixel_format.masks)
    flags = pixel_format.flags
    if flags & DDPF_RGB:
        return _RGB_FORMATS.get(key, DXGIFormat.UNKNOWN)
    if flags & DDPF_LUMINANCE:
        return _LUMINANCE_FORMATS.get(key, DXGIFormat.UNKNOWN)
    if flags & DDPF_ALPHA:
        if pixel_format.rgb_bit_count == 8:
            return DXGIFormat.A8_UNORM
        return DXGIFormat.UNKNOWN
    if flags & DDPF_FOURCC:
        return _FOURCC_FORMATS.get(pixel_format.fourcc, DXGIFormat.UNKNOWN)
    return DXGIFormat.UNKNOWN