# ddsview

`ddsview` reads DirectDraw Surface (`.dds`) texture files and works out how
their pixel data is laid out: format, dimension, array size and one
subresource per mip level and array item. It has no dependencies and needs no
graphics device. It also includes a small left-handed camera with the vector
maths it needs.

## Installation

```
pip install ddsview
```

## Reading a DDS container

```python
from ddsview.dds import read_dds_file, alpha_mode

dds = read_dds_file("brick.dds")
print(dds.header.width, dds.header.height, dds.header.mip_map_count)
print(dds.dx10)          # DX10Header, or None for legacy files
print(len(dds.data))     # pixel bytes after the headers
print(alpha_mode(dds))   # an AlphaMode member
```

`parse_dds(data)` does the same for bytes already in memory. It checks the
`"DDS "` magic number, the header and pixel-format sizes, and, when the pixel
format says `DX10`, that the extended header is present. `DDSFile`,
`DDSHeader` and `DX10Header` can be written back with `to_bytes()`.

Malformed input raises `DDSError`. Textures the loader cannot handle raise
`UnsupportedFormatError`, a subclass of `DDSError`. Both are defined in
`ddsview.dxgi`, and `DDSError` is a `ValueError`.

## Building a texture description

```python
from ddsview.texture import load_texture_from_file

texture = load_texture_from_file("brick.dds", maxsize=0, force_srgb=False)
print(texture.dimension, texture.format, texture.width, texture.height)
print(texture.mip_levels, texture.array_size, texture.is_cubemap, texture.cube_count)
for sub in texture.subresources:
    print(sub.array_index, sub.mip_level, sub.row_pitch, sub.slice_pitch, len(sub.data))
```

`load_texture_from_memory(data, ...)` takes bytes instead, and
`texture_from_dds(dds, ...)` takes a `DDSFile` that is already parsed.
The loader does the following:

- It works out the DXGI format, from the DX10 header or from the legacy pixel
  format block. Paletted formats and formats without a known size are
  rejected.
- It works out the resource dimension (`ResourceDimension.TEXTURE1D`,
  `TEXTURE2D` or `TEXTURE3D`). A 2D texture flagged as a cube has its array
  size multiplied by six. A legacy cube map must define all six faces.
- It enforces the Direct3D 11 limits: at most 15 mip levels, and bounds on
  width, height, depth and array size for each dimension.
- It splits the pixel data into `Subresource` records and raises `DDSError`
  if the data ends early.
- If `maxsize` is non-zero and there is more than one mip level, it skips the
  mip levels whose width, height or depth exceeds `maxsize`. The texture's
  size and `mip_levels` then describe what was kept.
- If `force_srgb` is true, it switches the format to its sRGB variant where
  one exists.

`fill_subresources(...)` exposes the splitting step on its own.

## Format helpers

`ddsview.dxgi` offers:

- the `DXGIFormat` enumeration
- `bits_per_pixel(fmt)`, which gives 0 for unknown formats
- `surface_info(width, height, fmt)`, which returns a `SurfaceInfo` with
  `num_bytes`, `row_bytes` and `num_rows`, covering block-compressed,
  packed and planar formats
- `make_srgb(fmt)`
- `is_block_compressed(fmt)`

`ddsview.formats` offers `PixelFormat` (with `parse` and `to_bytes`),
`format_from_pixel_format`, which maps a legacy pixel format block to a DXGI
format or `DXGIFormat.UNKNOWN`, and `make_fourcc`.

## Camera

```python
from ddsview.camera import Camera, StartingVectors

camera = Camera(StartingVectors.load("camera.json"))
camera.set_projection(90.0, 16 / 9, 0.01, 100.0)  # vertical field of view in degrees
camera.move(0.0, 0.0, -5.0)
camera.rotate(0.0, 0.5, 0.0)                      # pitch, yaw, roll in radians
print(camera.position, camera.view_matrix, camera.forward)
```

The starting vectors file is a JSON document with a `StartingCameraVectors`
object holding `ForwardVector`, `UpVector`, `RightVector`, `LeftVector` and
`BackVector` entries, each with numeric `x`, `y`, `z` and `w` fields.
`StartingVectors.from_json` accepts the parsed document; invalid documents
raise `ValueError`. `Camera()` with no argument reads
`JSON Files/Starting Camera Vectors.json` from the working directory.

The camera also has `set_position`, `set_rotation` and `move_by(vector)`.
`projection_matrix` is `None` until `set_projection` is called. The
`forward`, `back`, `left` and `right` directions follow the yaw only.

`ddsview.vecmath` holds the maths the camera uses, with row vectors and
row-major matrices: `rotation_roll_pitch_yaw`, `transform_coord`,
`look_at_lh`, `perspective_fov_lh` (depth mapped to 0 to 1) and `add`.

## Vertex and constant-buffer records

`ddsview.structures` defines `SimpleVertex` (position, normal, texture
coordinates), which packs to eight little-endian floats, and
`ConstantBuffer`, which packs the per-frame shader constants with
`to_bytes()`. It also defines `KeyState` with `UP` and `DOWN`.

## What it does not do

`ddsview` only describes textures. It does not create GPU resources, generate
mip levels, decode block-compressed pixels, or open a window and render.
There is no command-line program.