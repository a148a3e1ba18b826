"""
Grayscale PNG output for rendered pixel buffers.
"""
import io
import logging

import numpy as np
import PIL.Image

logger = logging.getLogger(__name__)


def to_image(pixels, width, height):
    """
    Wrap a pixel buffer as an 8-bit grayscale (mode "L") PIL image.

    Args:
        pixels: uint8 array of shape (height, width), or any flat buffer of
            width * height bytes in row-major order, top row first
        width: Image width in pixels
        height: Image height in pixels
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixels, dtype=np.uint8)
    else:
        data = np.asarray(pixels, dtype=np.uint8)
    if data.size != width * height:
        raise ValueError(
            f"Pixel buffer holds {data.size} values, expected {width}x{height} = {width * height}"
        )
    return PIL.Image.fromarray(np.ascontiguousarray(data.reshape(height, width)))


def encode_png(pixels, width, height) -> bytes:
    """Encode a pixel buffer as a grayscale PNG byte stream."""
    buffer = io.BytesIO()
    to_image(pixels, width, height).save(buffer, format="PNG")
    return buffer.getvalue()


def write_image(path, pixels, width, height):
    """
    Write a pixel buffer to `path` as a grayscale PNG.

    Raises:
        OSError: The file cannot be created or written
    """
    to_image(pixels, width, height).save(path, format="PNG")
    logger.info("Wrote %dx%d image to %s", width, height, path)
