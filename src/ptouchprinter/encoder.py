"""
Raster Encoder for P-touch Printers.

Turns a bitmap into the raster stream the printer consumes: one
'G' frame per bitmap column, left to right, between the job preamble
and the print terminator.
"""

import sys
from typing import Iterable, Union

from PIL import Image

from .commands import RasterCommand, build_preamble, build_terminator
from .errors import UnsupportedDimensionError
from .tape import TapeProfile, TapeType, calibration_profile, parse_tape_type, resolve_profile

# Red channel values below this are printed
INK_THRESHOLD = 150

FILL_BYTE = 0x00
INVERSE_FILL_BYTE = 0xFF


def is_ink(pixel) -> bool:
    """
    Check whether a pixel should be printed.

    Only the red channel is compared; input is expected to be black and
    white already.
    """
    if isinstance(pixel, int):
        return pixel < INK_THRESHOLD
    return pixel[0] < INK_THRESHOLD


def pack_bits(bits: Iterable[bool]) -> bytes:
    """
    Pack bits into bytes, 8 per byte, first bit in the MSB.

    Raises:
        UnsupportedDimensionError: If the bit count is not a multiple of 8
    """
    result = bytearray()
    byte = 0
    bit_pos = 7
    count = 0

    for bit in bits:
        if bit:
            byte |= (1 << bit_pos)
        count += 1

        bit_pos -= 1
        if bit_pos < 0:
            result.append(byte)
            byte = 0
            bit_pos = 7

    if bit_pos != 7:
        raise UnsupportedDimensionError(count, reason="height must be a multiple of 8")

    return bytes(result)


def _rgb(bitmap: Image.Image) -> Image.Image:
    if bitmap.mode != "RGB":
        return bitmap.convert("RGB")
    return bitmap


def _column_bytes(bitmap: Image.Image, column: int, profile: TapeProfile,
                  inverse: bool) -> bytes:
    if bitmap.height != profile.height:
        raise UnsupportedDimensionError(
            bitmap.height, profile.tape_type.value,
            f"profile was resolved for height {profile.height}",
        )

    # Calibration heights need not be a multiple of 8; the partial
    # bottom group is dropped
    rows = profile.image_bytes * 8
    image = pack_bits(is_ink(bitmap.getpixel((column, y))) for y in range(rows))
    if len(image) != profile.image_bytes:
        raise UnsupportedDimensionError(bitmap.height, profile.tape_type.value)

    # Inverse only changes the filler, not the image bits
    fill = INVERSE_FILL_BYTE if inverse else FILL_BYTE
    frame = (
        bytes([fill]) * profile.leading_padding
        + image
        + bytes([fill]) * max(profile.trailing_padding, 0)
    )
    # 24 mm: the lead-in pushes the last image byte past the head
    return frame[:profile.frame_length]


def encode_column(bitmap: Image.Image, column: int, profile: TapeProfile,
                  inverse: bool = False) -> bytes:
    """
    Encode one bitmap column as a raster frame.

    The bitmap is read as-is: pass an RGB (or single-channel) image.
    Convert other modes once before encoding column by column.

    Args:
        bitmap: Source image
        column: Column index (0 = leftmost)
        profile: Tape profile resolved for this bitmap's height
        inverse: Fill padding with 0xFF instead of 0x00

    Returns:
        'G', length byte, leading fill, image bytes, trailing fill
    """
    cmd = RasterCommand()
    cmd.raster_column(
        profile.length_byte,
        _column_bytes(bitmap, column, profile, inverse),
    )
    return cmd.get_commands()


class RasterEncoder:
    """
    Build complete raster jobs for a P-touch printer.

    Holds the job options; each encode() call builds a fresh stream.
    """

    def __init__(self, auto_cut: bool = False, inverse: bool = False,
                 calibration: bool = False):
        """
        Initialize encoder.

        Args:
            auto_cut: Cut the tape after printing
            inverse: Fill frame padding with 0xFF
            calibration: Encode for print head alignment, ignoring tape profiles
        """
        self.auto_cut = auto_cut
        self.inverse = inverse
        self.calibration = calibration
        self._debug = False

    def set_debug(self, enabled: bool):
        """Enable/disable debug output."""
        self._debug = enabled

    def _log(self, message: str):
        """Print debug message if enabled."""
        if self._debug:
            print(f"[ptouch] {message}", file=sys.stderr)

    def profile_for(self, tape_type: Union[str, TapeType], height: int) -> TapeProfile:
        """Validate the tape type and height and return the frame layout."""
        tape = parse_tape_type(tape_type)
        if self.calibration:
            return calibration_profile(height)
        return resolve_profile(tape, height)

    def encode(self, bitmap: Image.Image, tape_type: Union[str, TapeType]) -> bytes:
        """
        Encode a bitmap as a complete print job.

        Args:
            bitmap: Image whose height matches the tape
            tape_type: Tape width ("6", "9", "9+", ... "24") or "test"

        Returns:
            Preamble, one frame per column, terminator

        Raises:
            UnknownTapeTypeError: If the tape type is not recognised
            UnsupportedDimensionError: If the height does not fit the tape
        """
        profile = self.profile_for(tape_type, bitmap.height)
        self._log(
            f"Tape {profile.tape_type.value}: {bitmap.width}x{bitmap.height} px, "
            f"padding {profile.leading_padding}/{profile.image_bytes}/"
            f"{profile.trailing_padding}"
        )
        if profile.trailing_padding < 0:
            self._log(
                f"Bottom {-profile.trailing_padding * 8} rows do not fit the "
                f"print head and are not printed"
            )

        bitmap = _rgb(bitmap)

        cmd = RasterCommand()
        cmd.setup_job(self.auto_cut)

        for column in range(bitmap.width):
            data = _column_bytes(bitmap, column, profile, self.inverse)
            cmd.raster_column(profile.length_byte, data)
            self._log(f"{column:5d}: {data.hex()}")

        cmd.print_last_page()

        job_data = cmd.get_commands()
        self._log(f"Print job size: {len(job_data)} bytes")
        return job_data


def assemble(
    bitmap: Image.Image,
    tape_type: Union[str, TapeType],
    auto_cut: bool = False,
    inverse: bool = False,
    calibration: bool = False,
    debug: bool = False,
) -> bytes:
    """
    Convenience function to encode a bitmap in one call.

    Args:
        bitmap: Image to print
        tape_type: Tape width or "test"
        auto_cut: Cut the tape after printing
        inverse: Fill frame padding with 0xFF
        calibration: Ignore tape profiles (print head alignment)
        debug: Print a per-column dump to stderr

    Returns:
        Complete raster stream as bytes
    """
    encoder = RasterEncoder(auto_cut=auto_cut, inverse=inverse, calibration=calibration)
    encoder.set_debug(debug)
    return encoder.encode(bitmap, tape_type)


def expected_length(width: int, profile: TapeProfile) -> int:
    """Length of a complete job for a bitmap of the given width."""
    frame = 2 + profile.frame_length
    return len(build_preamble()) + width * frame + len(build_terminator())
