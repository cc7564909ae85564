"""Turning parsed DDS containers into texture descriptions ready for upload."""

from __future__ import annotations

import os
from dataclasses import dataclass

from ddsview.dds import (
    DDSCAPS2_CUBEMAP_ALLFACES,
    DDSD_HEIGHT,
    RESOURCE_MISC_TEXTURECUBE,
    AlphaMode,
    DDSFile,
    ResourceDimension,
    alpha_mode,
    parse_dds,
    read_dds_file,
)
from ddsview.dxgi import (
    DDSError,
    DXGIFormat,
    UnsupportedFormatError,
    bits_per_pixel,
    make_srgb,
    surface_info,
)
from ddsview.formats import format_from_pixel_format

# Hardware limits; metadata beyond these is not trusted.
MAX_MIP_LEVELS = 15
MAX_TEXTURE1D_ARRAY_SIZE = 2048
MAX_TEXTURE1D_WIDTH = 16384
MAX_TEXTURE2D_ARRAY_SIZE = 2048
MAX_TEXTURE2D_DIMENSION = 16384
MAX_TEXTURECUBE_DIMENSION = 16384
MAX_TEXTURE3D_DIMENSION = 2048

_PALETTED = frozenset({DXGIFormat.AI44, DXGIFormat.IA44, DXGIFormat.P8, DXGIFormat.A8P8})


@dataclass(frozen=True)
class Subresource:
    """One mip level of one array item, with its pixel bytes and pitches."""

    array_index: int
    mip_level: int
    data: bytes
    row_pitch: int
    slice_pitch: int


@dataclass(frozen=True)
class Texture:
    """A texture described by a DDS file, laid out into subresources."""

    dimension: ResourceDimension
    width: int
    height: int
    depth: int
    mip_levels: int
    array_size: int
    format: int
    is_cubemap: bool
    alpha_mode: AlphaMode
    subresources: tuple[Subresource, ...]

    @property
    def cube_count(self) -> int:
        """Number of cubes held by a cube map texture, 0 otherwise."""
        return self.array_size // 6 if self.is_cubemap else 0


def fill_subresources(
    width: int,
    height: int,
    depth: int,
    mip_count: int,
    array_size: int,
    fmt: int,
    maxsize: int,
    data: bytes,
) -> tuple[int, int, int, int, tuple[Subresource, ...]]:
    """Split pixel data into subresources, dropping mips larger than ``maxsize``.

    Returns the width, height and depth of the largest kept mip, the number of
    mips skipped per array item, and the kept subresources in order.
    """
    raw = bytes(data)
    top_width = top_height = top_depth = 0
    skipped = 0
    offset = 0
    subresources: list[Subresource] = []

    for item in range(array_size):
        w, h, d = width, height, depth
        level = 0
        for _ in range(mip_count):
            info = surface_info(w, h, fmt)
            size = info.num_bytes * d
            fits = (
                mip_count <= 1
                or not maxsize
                or (w <= maxsize and h <= maxsize and d <= maxsize)
            )
            if offset + size > len(raw):
                raise DDSError("pixel data ends before all surfaces are read")
            if fits:
                if not top_width:
                    top_width, top_height, top_depth = w, h, d
                subresources.append(
                    Subresource(
                        array_index=item,
                        mip_level=level,
                        data=raw[offset:offset + size],
                        row_pitch=info.row_bytes,
                        slice_pitch=info.num_bytes,
                    )
                )
                level += 1
            elif item == 0:
                skipped += 1
            offset += size
            w, h, d = max(1, w >> 1), max(1, h >> 1), max(1, d >> 1)

    if not subresources:
        raise DDSError("no surfaces could be taken from the pixel data")
    return top_width, top_height, top_depth, skipped, tuple(subresources)


def _describe(dds: DDSFile) -> tuple[ResourceDimension, int, int, int, int, int, bool]:
    header = dds.header
    width, height, depth = header.width, header.height, header.depth
    array_size = 1
    is_cubemap = False

    if header.pixel_format.is_dx10:
        ext = dds.dx10
        if ext is None:
            raise DDSError("DX10 header is missing")
        array_size = ext.array_size
        if array_size == 0:
            raise DDSError("DX10 header gives an array size of zero")
        fmt = ext.dxgi_format
        if fmt in _PALETTED or bits_per_pixel(fmt) == 0:
            raise UnsupportedFormatError(f"format {fmt} is not supported")

        try:
            dimension = ResourceDimension(ext.resource_dimension)
        except ValueError:
            dimension = ResourceDimension.UNKNOWN
        if dimension is ResourceDimension.TEXTURE1D:
            if header.flags & DDSD_HEIGHT and height != 1:
                raise DDSError("1D texture must have a height of 1")
            height = depth = 1
        elif dimension is ResourceDimension.TEXTURE2D:
            if ext.misc_flag & RESOURCE_MISC_TEXTURECUBE:
                array_size *= 6
                is_cubemap = True
            depth = 1
        elif dimension is ResourceDimension.TEXTURE3D:
            if not header.is_volume:
                raise DDSError("3D texture lacks the volume flag")
            if array_size > 1:
                raise UnsupportedFormatError("3D texture arrays are not supported")
        else:
            raise UnsupportedFormatError(
                f"resource dimension {ext.resource_dimension} is not supported"
            )
    else:
        fmt = format_from_pixel_format(header.pixel_format)
        if fmt is DXGIFormat.UNKNOWN:
            raise UnsupportedFormatError("pixel format has no DXGI equivalent")
        if header.is_volume:
            dimension = ResourceDimension.TEXTURE3D
        else:
            if header.is_cubemap:
                if header.caps2 & DDSCAPS2_CUBEMAP_ALLFACES != DDSCAPS2_CUBEMAP_ALLFACES:
                    raise UnsupportedFormatError("cube map must define all six faces")
                array_size = 6
                is_cubemap = True
            depth = 1
            dimension = ResourceDimension.TEXTURE2D

    return dimension, int(fmt), width, height, depth, array_size, is_cubemap


def _check_bounds(
    dimension: ResourceDimension,
    width: int,
    height: int,
    depth: int,
    array_size: int,
    is_cubemap: bool,
) -> None:
    if dimension is ResourceDimension.TEXTURE1D:
        too_big = array_size > MAX_TEXTURE1D_ARRAY_SIZE or width > MAX_TEXTURE1D_WIDTH
    elif dimension is ResourceDimension.TEXTURE2D:
        limit = MAX_TEXTURECUBE_DIMENSION if is_cubemap else MAX_TEXTURE2D_DIMENSION
        too_big = (
            array_size > MAX_TEXTURE2D_ARRAY_SIZE or width > limit or height > limit
        )
    else:
        too_big = (
            array_size > 1
            or width > MAX_TEXTURE3D_DIMENSION
            or height > MAX_TEXTURE3D_DIMENSION
            or depth > MAX_TEXTURE3D_DIMENSION
        )
    if too_big:
        raise UnsupportedFormatError("texture dimensions exceed hardware limits")


def texture_from_dds(dds: DDSFile, maxsize: int = 0, force_srgb: bool = False) -> Texture:
    """Validate a parsed DDS file and lay its pixel data out as a texture."""
    mip_count = dds.header.mip_map_count or 1
    dimension, fmt, width, height, depth, array_size, is_cubemap = _describe(dds)

    if mip_count > MAX_MIP_LEVELS:
        raise UnsupportedFormatError(f"{mip_count} mip levels exceed the limit")
    _check_bounds(dimension, width, height, depth, array_size, is_cubemap)

    top_w, top_h, top_d, skipped, subresources = fill_subresources(
        width, height, depth, mip_count, array_size, fmt, maxsize, dds.data
    )
    if force_srgb:
        fmt = make_srgb(fmt)
    try:
        fmt = DXGIFormat(fmt)
    except ValueError:
        pass

    return Texture(
        dimension=dimension,
        width=top_w,
        height=top_h,
        depth=top_d,
        mip_levels=mip_count - skipped,
        array_size=array_size,
        format=fmt,
        is_cubemap=is_cubemap,
        alpha_mode=alpha_mode(dds),
        subresources=subresources,
    )


def load_texture_from_memory(
    data: bytes, maxsize: int = 0, force_srgb: bool = False
) -> Texture:
    """Parse DDS bytes and describe the texture they hold."""
    return texture_from_dds(parse_dds(data), maxsize, force_srgb)


def load_texture_from_file(
    path: str | os.PathLike[str], maxsize: int = 0, force_srgb: bool = False
) -> Texture:
    """Read a DDS file and describe the texture it holds."""
    return texture_from_dds(read_dds_file(path), maxsize, force_srgb)