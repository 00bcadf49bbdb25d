"""
Image loading for P-touch raster printing.

Loads a PNG (or anything Pillow reads) into an RGB bitmap. No scaling
or dithering is done; the image must already be black and white and
sized for the tape.
"""

from io import BytesIO
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from .errors import ImageError

# Image size limits to prevent memory exhaustion from malicious/malformed images
MAX_IMAGE_DIMENSION = 10000  # Maximum width or height in pixels
MAX_IMAGE_PIXELS = 10_000_000  # Maximum total pixels (10 megapixels)


class ImageSizeError(ImageError, ValueError):
    """Image dimensions exceed safety limits."""

    pass


def check_image_size(img: Image.Image) -> None:
    """
    Validate image dimensions.

    Raises:
        ImageSizeError: If image dimensions exceed safety limits
    """
    if img.width > MAX_IMAGE_DIMENSION or img.height > MAX_IMAGE_DIMENSION:
        raise ImageSizeError(
            f"Image dimensions ({img.width}x{img.height}) exceed maximum "
            f"({MAX_IMAGE_DIMENSION}x{MAX_IMAGE_DIMENSION})"
        )
    if img.width * img.height > MAX_IMAGE_PIXELS:
        raise ImageSizeError(
            f"Image pixel count ({img.width * img.height:,}) exceeds "
            f"maximum ({MAX_IMAGE_PIXELS:,})"
        )


def load_bitmap(source: Union[str, Path, bytes, Image.Image]) -> Image.Image:
    """
    Load an image from various sources.

    Args:
        source: File path, bytes, or PIL Image

    Returns:
        RGB PIL Image

    Raises:
        ImageSizeError: If image dimensions exceed safety limits
        ImageError: If the image cannot be loaded
    """
    try:
        if isinstance(source, Image.Image):
            img = source
        elif isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ImageError(f"Image file not found: {path}")
            img = Image.open(path)
        elif isinstance(source, bytes):
            img = Image.open(BytesIO(source))
        else:
            raise ImageError(f"Unsupported image type: {type(source)}")

        check_image_size(img)

        if img.mode != "RGB":
            img = img.convert("RGB")
        else:
            img.load()
        return img
    except ImageError:
        raise
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise ImageError(f"Failed to load image: {e}") from e
