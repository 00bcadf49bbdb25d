"""
Tape profiles for P-touch raster printing.

The print head has 128 pins, addressed as 16 bytes per printed column.
Each tape width uses a band of those pins; the profile says how many
filler bytes sit in front of the image bytes so the band lines up with
the tape.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Union

from .errors import UnknownTapeTypeError, UnsupportedDimensionError

# Data bytes per printed column (128 pins at 1 bpp)
FRAME_BYTES = 16

# Calibration frames are left-aligned after a fixed lead-in
CALIBRATION_LEADING_PADDING = 5

# Largest calibration height whose length byte still fits in one byte
MAX_CALIBRATION_HEIGHT = (0xFF - CALIBRATION_LEADING_PADDING + 1) * 8 + 7


class TapeType(str, Enum):
    """Supported tape widths (mm), plus the head calibration mode."""
    W6 = "6"
    W9 = "9"
    W9_PLUS = "9+"
    W12 = "12"
    W12_PLUS = "12+"
    W18 = "18"
    W18_PLUS = "18+"
    W24 = "24"
    CALIBRATION = "test"


@dataclass(frozen=True)
class TapeProfile:
    """Placement of a bitmap column inside one raster frame."""
    tape_type: TapeType
    height: int           # Bitmap height in pixels
    leading_padding: int  # Fill bytes before the image bytes
    calibration: bool = False

    @property
    def image_bytes(self) -> int:
        return self.height // 8

    @property
    def trailing_padding(self) -> int:
        """Fill bytes after the image; negative when the image overruns the head."""
        if self.calibration:
            return 0
        return FRAME_BYTES - self.leading_padding - self.image_bytes

    @property
    def frame_length(self) -> int:
        """Data bytes per column, excluding the 2-byte header."""
        return self.leading_padding + self.image_bytes + self.trailing_padding

    @property
    def length_byte(self) -> int:
        """Value sent after the 'G' header (frame length minus one)."""
        return self.frame_length - 1


# (tape type, height) -> leading padding
_PROFILES = {
    (TapeType.W6, 32): 7,
    (TapeType.W9, 48): 6,
    (TapeType.W9, 56): 6,
    (TapeType.W9_PLUS, 48): 6,
    (TapeType.W9_PLUS, 56): 6,
    (TapeType.W12, 64): 5,
    (TapeType.W12, 80): 4,
    (TapeType.W12_PLUS, 64): 5,
    (TapeType.W12_PLUS, 80): 4,
    (TapeType.W18, 96): 3,
    (TapeType.W18, 112): 2,
    (TapeType.W18_PLUS, 96): 3,
    (TapeType.W18_PLUS, 112): 2,
    (TapeType.W24, 128): 1,
}

PROFILE_TABLE = MappingProxyType(_PROFILES)


def parse_tape_type(value: Union[str, TapeType]) -> TapeType:
    """
    Convert a tape type string to a TapeType.

    Raises:
        UnknownTapeTypeError: If the value is not a known tape type
    """
    if isinstance(value, TapeType):
        return value
    try:
        return TapeType(str(value).strip())
    except ValueError:
        raise UnknownTapeTypeError(value) from None


def supported_heights(tape_type: Union[str, TapeType]) -> tuple:
    """List the bitmap heights accepted for a tape type."""
    tape = parse_tape_type(tape_type)
    return tuple(sorted(h for (t, h) in PROFILE_TABLE if t is tape))


def calibration_profile(height: int) -> TapeProfile:
    """
    Build the profile used for print head alignment.

    Any positive height is accepted, up to MAX_CALIBRATION_HEIGHT. Rows
    below the last full group of 8 are not sent.
    """
    tape = TapeType.CALIBRATION.value
    if height <= 0:
        raise UnsupportedDimensionError(height, tape, "height must be positive")
    if height > MAX_CALIBRATION_HEIGHT:
        raise UnsupportedDimensionError(
            height, tape, f"height must not exceed {MAX_CALIBRATION_HEIGHT}"
        )
    return TapeProfile(
        TapeType.CALIBRATION, height, CALIBRATION_LEADING_PADDING, calibration=True
    )


def resolve_profile(tape_type: Union[str, TapeType], height: int) -> TapeProfile:
    """
    Look up the profile for a tape type and bitmap height.

    The tape type is validated before the height.

    Raises:
        UnknownTapeTypeError: If the tape type is not recognised
        UnsupportedDimensionError: If the height is not valid for the tape
    """
    tape = parse_tape_type(tape_type)
    if tape is TapeType.CALIBRATION:
        return calibration_profile(height)

    leading = PROFILE_TABLE.get((tape, height))
    if leading is None:
        allowed = ", ".join(str(h) for h in supported_heights(tape))
        raise UnsupportedDimensionError(
            height, tape.value, f"expected one of {allowed}"
        )
    return TapeProfile(tape, height, leading)
