"""
Exporters for generated ocean maps.

- TGA height map (8 bit grayscale) and normal map (24 bit BGR), uncompressed,
  18 byte header, rows written bottom to top.
- Preview images in any format Pillow writes.
- Structured surface mesh through PyVista.
"""

import logging
import os
import struct

import numpy as np
import pyvista as pv
from PIL import Image

logger = logging.getLogger(__name__)

# id_length, color_map_type, image_type, color_map_spec, x_origin, y_origin,
# width, height, pixel_depth, image_descriptor
TGA_HEADER = struct.Struct("<BBB5sHHHHBB")
TGA_GRAYSCALE = 3
TGA_TRUE_COLOR = 2


def tga_header(width, height, image_type, pixel_depth):
    """Pack the 18 byte uncompressed TGA header.

    No image id, no color map, origin at (0, 0) and a zero descriptor byte
    (bottom-left origin, no alpha bits).

    Args:
        width, height: image size in pixels
        image_type: :data:`TGA_GRAYSCALE` or :data:`TGA_TRUE_COLOR`
        pixel_depth: bits per pixel, 8 or 24

    Returns:
        bytes
    """
    return TGA_HEADER.pack(0, 0, image_type, bytes(5), 0, 0, width, height, pixel_depth, 0)


def height_to_bytes(height, min_value=None, max_value=None):
    """Linearly remap heights from ``[min_value, max_value]`` to ``0..255``.

    A degenerate range is treated as a range of 1.
    """
    height = np.asarray(height, dtype=np.float32)
    if min_value is None:
        min_value = float(height.min())
    if max_value is None:
        max_value = float(height.max())

    height_range = max_value - min_value
    if height_range == 0:
        height_range = 1

    scaled = (height - np.float32(min_value)) / np.float32(height_range) * np.float32(255)
    return np.clip(scaled, 0, 255).astype(np.uint8)


def normal_to_bytes(normal):
    """Quantize ``[0, 1]`` normal map components to 8 bits, RGB order."""
    normal = np.asarray(normal, dtype=np.float32)
    return np.round(np.clip(normal, 0.0, 1.0) * 255).astype(np.uint8)


def encode_height_map(height, min_value=None, max_value=None):
    """Encode a height field as an 8 bit grayscale TGA file.

    Args:
        height: ``(Ny, Nx)`` height field
        min_value, max_value: height range mapped to 0 and 255, defaults to
            the range of ``height``

    Returns:
        bytes: header followed by ``Nx * Ny`` pixel bytes, row ``y = 0`` first
    """
    pixels = height_to_bytes(height, min_value, max_value)
    rows, cols = pixels.shape
    # row 0 first: the bottom row of the image
    return tga_header(cols, rows, TGA_GRAYSCALE, 8) + pixels.tobytes()


def encode_normal_map(normal):
    """Encode a ``(Ny, Nx, 3)`` normal map as a 24 bit TGA file.

    Returns:
        bytes: header followed by B, G, R triplets, row ``y = 0`` first
    """
    pixels = normal_to_bytes(normal)
    rows, cols, _ = pixels.shape
    bgr = np.ascontiguousarray(pixels[..., ::-1])
    return tga_header(cols, rows, TGA_TRUE_COLOR, 24) + bgr.tobytes()


def _write(path, data):
    try:
        with open(path, "wb") as f:
            f.write(data)
    except OSError:
        logger.error("Can't open file '%s'", path)
        raise
    logger.info("Wrote %s (%d bytes)", path, len(data))
    return path


def save_height_map(path, maps):
    """Write the height map of an :class:`OceanMaps` result to ``path``.

    Returns:
        str: ``path``

    Raises:
        OSError: if the file cannot be written
    """
    return _write(path, encode_height_map(maps.height, maps.min_value, maps.max_value))


def save_normal_map(path, maps):
    """Write the normal map of an :class:`OceanMaps` result to ``path``, see :func:`save_height_map`."""
    return _write(path, encode_normal_map(maps.normal))


def preview_image(maps, which="height"):
    """Pillow image of one map, top row of the image is the last grid row."""
    if which == "height":
        pixels = height_to_bytes(maps.height, maps.min_value, maps.max_value)
    elif which == "normal":
        pixels = normal_to_bytes(maps.normal)
    else:
        raise ValueError(f"Unknown map '{which}', expected 'height' or 'normal'")
    return Image.fromarray(np.ascontiguousarray(np.flipud(pixels)))


def save_preview(path, maps, which="height"):
    """Save :func:`preview_image` to ``path``; Pillow picks the format from the extension."""
    image = preview_image(maps, which)
    image.save(path)
    logger.info("Wrote %s preview %s", which, path)
    return path


def create_surface_mesh(maps):
    """Structured grid of the height field centered on the origin.

    Point data ``"Height"`` and ``"Normal"`` follow the grid's Fortran point order.
    """
    params = maps.params
    ny, nx = maps.shape
    x = np.linspace(-params.Lx / 2, params.Lx / 2, nx)
    y = np.linspace(-params.Ly / 2, params.Ly / 2, ny)
    xx, yy = np.meshgrid(x, y)
    height = maps.height.astype(float)

    grid = pv.StructuredGrid(xx, yy, height)
    grid["Height"] = height.ravel(order="F")
    grid["Normal"] = np.stack(
        [maps.normal[..., i].ravel(order="F") for i in range(3)], axis=1
    )
    return grid


def save_surface_mesh(path, maps):
    """Write the surface mesh through PyVista, format chosen by the extension.

    Polygonal formats (stl, ply, obj, vtp) get a triangulated surface.
    """
    grid = create_surface_mesh(maps)
    if os.path.splitext(path)[1].lower() in (".stl", ".ply", ".obj", ".vtp"):
        grid = grid.extract_surface().triangulate()
    grid.save(path)
    logger.info("Wrote surface mesh %s", path)
    return path
