"""Image decoding and JPEG re-encoding."""

from __future__ import annotations

import io

from PIL import Image

from solvelt.explain.types import EncodingError

# Equivalent of a 0.7 compression factor
JPEG_QUALITY = 70

# Modes Pillow can write to JPEG without conversion
_JPEG_MODES = {"RGB", "L", "CMYK"}


def load_image(data: bytes) -> Image.Image:
    """Decode raw image bytes.

    Raises:
        PIL.UnidentifiedImageError: If the bytes are not a known image format.
        OSError: If the image data is truncated or corrupt.
    """
    image = Image.open(io.BytesIO(data))
    # Force decoding now so corrupt data fails here, not at encode time.
    image.load()
    return image


def encode_jpeg(image: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    """Re-encode an image as JPEG.

    Images JPEG cannot represent directly (alpha, palette) are converted to
    RGB first.

    Raises:
        EncodingError: If the image is empty or cannot be serialized.
    """
    if image.width == 0 or image.height == 0:
        raise EncodingError("Could not convert image to JPEG.")

    buffer = io.BytesIO()
    try:
        if image.mode not in _JPEG_MODES:
            image = image.convert("RGB")
        image.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise EncodingError("Could not convert image to JPEG.") from e
    return buffer.getvalue()
