"""Parsing of DDS containers: magic number, main header and DX10 extension."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from enum import IntEnum

from ddsview.dxgi import DDSError
from ddsview.formats import PIXEL_FORMAT_SIZE, PixelFormat, make_fourcc

DDS_MAGIC = 0x20534444  # "DDS " read as a little-endian integer
MAGIC_SIZE = 4
HEADER_SIZE = 124
DX10_HEADER_SIZE = 20

# Header flags.
DDSD_HEIGHT = 0x00000002
DDSD_WIDTH = 0x00000004
DDSD_DEPTH = 0x00800000  # the texture is a volume

# caps2 flags.
DDSCAPS2_CUBEMAP = 0x00000200
DDSCAPS2_CUBEMAP_POSITIVEX = 0x00000600
DDSCAPS2_CUBEMAP_NEGATIVEX = 0x00000A00
DDSCAPS2_CUBEMAP_POSITIVEY = 0x00001200
DDSCAPS2_CUBEMAP_NEGATIVEY = 0x00002200
DDSCAPS2_CUBEMAP_POSITIVEZ = 0x00004200
DDSCAPS2_CUBEMAP_NEGATIVEZ = 0x00008200
DDSCAPS2_CUBEMAP_ALLFACES = (
    DDSCAPS2_CUBEMAP_POSITIVEX
    | DDSCAPS2_CUBEMAP_NEGATIVEX
    | DDSCAPS2_CUBEMAP_POSITIVEY
    | DDSCAPS2_CUBEMAP_NEGATIVEY
    | DDSCAPS2_CUBEMAP_POSITIVEZ
    | DDSCAPS2_CUBEMAP_NEGATIVEZ
)

# Resource misc flag marking a 2D texture array as a cube map.
RESOURCE_MISC_TEXTURECUBE = 0x4

# Bits of the DX10 header's miscFlags2 field that hold the alpha mode.
ALPHA_MODE_MASK = 0x7

_MAX_FILE_SIZE = 0xFFFFFFFF

_HEADER_HEAD = struct.Struct("<7I")
_HEADER_RESERVED = struct.Struct("<11I")
_HEADER_TAIL = struct.Struct("<5I")
_DX10_HEADER = struct.Struct("<5I")
_MAGIC = struct.Struct("<I")


class AlphaMode(IntEnum):
    """How the alpha channel of a texture is to be interpreted."""

    UNKNOWN = 0
    STRAIGHT = 1
    PREMULTIPLIED = 2
    OPAQUE = 3
    CUSTOM = 4


class ResourceDimension(IntEnum):
    """Resource dimensions as stored in a DX10 extended header."""

    UNKNOWN = 0
    BUFFER = 1
    TEXTURE1D = 2
    TEXTURE2D = 3
    TEXTURE3D = 4


@dataclass(frozen=True)
class DDSHeader:
    """The 124-byte main header of a DDS file."""

    size: int = HEADER_SIZE
    flags: int = DDSD_HEIGHT | DDSD_WIDTH
    height: int = 0
    width: int = 0
    pitch_or_linear_size: int = 0
    depth: int = 0
    mip_map_count: int = 0
    reserved1: tuple[int, ...] = (0,) * 11
    pixel_format: PixelFormat = field(default_factory=PixelFormat)
    caps: int = 0
    caps2: int = 0
    caps3: int = 0
    caps4: int = 0
    reserved2: int = 0

    @classmethod
    def parse(cls, data: bytes) -> DDSHeader:
        """Read a header from the first 124 bytes of ``data``."""
        if len(data) < HEADER_SIZE:
            raise DDSError(f"DDS header needs {HEADER_SIZE} bytes, got {len(data)}")
        view = memoryview(data)
        head = _HEADER_HEAD.unpack_from(view, 0)
        offset = _HEADER_HEAD.size
        reserved1 = _HEADER_RESERVED.unpack_from(view, offset)
        offset += _HEADER_RESERVED.size
        pixel_format = PixelFormat.parse(bytes(view[offset:offset + PIXEL_FORMAT_SIZE]))
        offset += PIXEL_FORMAT_SIZE
        caps, caps2, caps3, caps4, reserved2 = _HEADER_TAIL.unpack_from(view, offset)
        return cls(
            *head,
            reserved1=tuple(reserved1),
            pixel_format=pixel_format,
            caps=caps,
            caps2=caps2,
            caps3=caps3,
            caps4=caps4,
            reserved2=reserved2,
        )

    def to_bytes(self) -> bytes:
        """Serialise the header as it is stored in a DDS file."""
        if len(self.reserved1) != 11:
            raise ValueError("reserved1 must hold exactly 11 values")
        return b"".join(
            (
                _HEADER_HEAD.pack(
                    self.size,
                    self.flags,
                    self.height,
                    self.width,
                    self.pitch_or_linear_size,
                    self.depth,
                    self.mip_map_count,
                ),
                _HEADER_RESERVED.pack(*self.reserved1),
                self.pixel_format.to_bytes(),
                _HEADER_TAIL.pack(
                    self.caps, self.caps2, self.caps3, self.caps4, self.reserved2
                ),
            )
        )

    @property
    def is_volume(self) -> bool:
        """True when the header marks the texture as a volume."""
        return bool(self.flags & DDSD_DEPTH)

    @property
    def is_cubemap(self) -> bool:
        """True when caps2 marks the texture as a cube map."""
        return bool(self.caps2 & DDSCAPS2_CUBEMAP)


@dataclass(frozen=True)
class DX10Header:
    """The 20-byte extended header that follows the main one for DX10 files."""

    dxgi_format: int = 0
    resource_dimension: int = ResourceDimension.TEXTURE2D
    misc_flag: int = 0
    array_size: int = 1
    misc_flags2: int = 0

    @classmethod
    def parse(cls, data: bytes) -> DX10Header:
        """Read an extended header from the first 20 bytes of ``data``."""
        if len(data) < DX10_HEADER_SIZE:
            raise DDSError(
                f"DX10 header needs {DX10_HEADER_SIZE} bytes, got {len(data)}"
            )
        return cls(*_DX10_HEADER.unpack_from(data))

    def to_bytes(self) -> bytes:
        """Serialise the extended header as it is stored in a DDS file."""
        return _DX10_HEADER.pack(
            self.dxgi_format,
            self.resource_dimension,
            self.misc_flag,
            self.array_size,
            self.misc_flags2,
        )


@dataclass(frozen=True)
class DDSFile:
    """A parsed DDS container: its headers and the pixel data after them."""

    header: DDSHeader
    dx10: DX10Header | None = None
    data: bytes = b""

    @property
    def data_offset(self) -> int:
        """Offset of the pixel data from the start of the file."""
        offset = MAGIC_SIZE + HEADER_SIZE
        if self.dx10 is not None:
            offset += DX10_HEADER_SIZE
        return offset

    def to_bytes(self) -> bytes:
        """Serialise the container, magic number included."""
        parts = [_MAGIC.pack(DDS_MAGIC), self.header.to_bytes()]
        if self.dx10 is not None:
            parts.append(self.dx10.to_bytes())
        parts.append(self.data)
        return b"".join(parts)


def parse_dds(data: bytes) -> DDSFile:
    """Validate and split DDS data held in memory."""
    raw = bytes(data)
    if len(raw) < MAGIC_SIZE + HEADER_SIZE:
        raise DDSError("data is too short to hold a DDS header")
    (magic,) = _MAGIC.unpack_from(raw)
    if magic != DDS_MAGIC:
        raise DDSError("data does not start with the DDS magic number")

    header = DDSHeader.parse(raw[MAGIC_SIZE:MAGIC_SIZE + HEADER_SIZE])
    if header.size != HEADER_SIZE or header.pixel_format.size != PIXEL_FORMAT_SIZE:
        raise DDSError("DDS header sizes are invalid")

    offset = MAGIC_SIZE + HEADER_SIZE
    dx10 = None
    if header.pixel_format.is_dx10:
        if len(raw) < offset + DX10_HEADER_SIZE:
            raise DDSError("data is too short to hold a DX10 header")
        dx10 = DX10Header.parse(raw[offset:offset + DX10_HEADER_SIZE])
        offset += DX10_HEADER_SIZE

    return DDSFile(header=header, dx10=dx10, data=raw[offset:])


def read_dds_file(path: str | os.PathLike[str]) -> DDSFile:
    """Read and parse a DDS file from disk."""
    with open(path, "rb") as handle:
        handle.seek(0, os.SEEK_END)
        size = handle.tell()
        if size > _MAX_FILE_SIZE:
            raise DDSError("file is too large to load")
        handle.seek(0)
        raw = handle.read()
    if len(raw) < size:
        raise DDSError("file could not be read completely")
    return parse_dds(raw)


def alpha_mode(dds: DDSFile) -> AlphaMode:
    """Work out the alpha mode recorded in a DDS file."""
    pixel_format = dds.header.pixel_format
    if pixel_format.is_dx10:
        if dds.dx10 is None:
            return AlphaMode.UNKNOWN
        mode = dds.dx10.misc_flags2 & ALPHA_MODE_MASK
        if mode in (
            AlphaMode.STRAIGHT,
            AlphaMode.PREMULTIPLIED,
            AlphaMode.OPAQUE,
            AlphaMode.CUSTOM,
        ):
            return AlphaMode(mode)
        return AlphaMode.UNKNOWN
    if pixel_format.flags & 0x4 and pixel_format.fourcc in (
        make_fourcc("DXT2"),
        make_fourcc("DXT4"),
    ):
        return AlphaMode.PREMULTIPLIED
    return AlphaMode.UNKNOWN