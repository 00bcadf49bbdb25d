"""
Exception classes for the P-touch raster printer tools.
"""

from typing import Optional


class PrinterError(Exception):
    """Base exception for all printer errors."""

    pass


class EncodeError(PrinterError):
    """Error building the raster stream."""

    pass


class UnknownTapeTypeError(EncodeError):
    """Tape type is not one of the supported tape widths."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown tape type: {value!r}")


class UnsupportedDimensionError(EncodeError):
    """Bitmap height cannot be printed on the given tape."""

    def __init__(self, height: int, tape_type: Optional[str] = None,
                 reason: Optional[str] = None):
        self.height = height
        self.tape_type = tape_type
        message = f"Unsupported bitmap height {height}"
        if tape_type is not None:
            message = f"{message} for tape type {tape_type!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ImageError(PrinterError):
    """Error loading an image for printing."""

    pass


class SpoolError(PrinterError):
    """Error handing a job to the print spooler."""

    pass
