"""Read DDS textures, lay out their subresources, and drive a simple camera."""

__version__ = "0.1.0"
__all__ = ["camera", "dds", "dxgi", "formats", "structures", "texture", "vecmath"]