"""P-touch Label Printer Raster Encoder for Linux/macOS."""

__version__ = "0.1.0"

from .commands import RasterCommand, build_preamble, build_terminator
from .encoder import RasterEncoder, assemble, encode_column
from .errors import (
    EncodeError,
    ImageError,
    PrinterError,
    SpoolError,
    UnknownTapeTypeError,
    UnsupportedDimensionError,
)
from .image import MAX_IMAGE_DIMENSION, MAX_IMAGE_PIXELS, ImageSizeError, load_bitmap
from .spool import Destination, list_destinations, spool_job
from .tape import TapeProfile, TapeType, calibration_profile, resolve_profile

__all__ = [
    "RasterEncoder",
    "RasterCommand",
    "assemble",
    "encode_column",
    "build_preamble",
    "build_terminator",
    "TapeType",
    "TapeProfile",
    "resolve_profile",
    "calibration_profile",
    "load_bitmap",
    "Destination",
    "list_destinations",
    "spool_job",
    "PrinterError",
    "EncodeError",
    "UnknownTapeTypeError",
    "UnsupportedDimensionError",
    "ImageError",
    "ImageSizeError",
    "SpoolError",
    "MAX_IMAGE_DIMENSION",
    "MAX_IMAGE_PIXELS",
]
