"""
P-touch Raster Command Builder.

Builds the binary control sequences that bracket raster image data:
a reset/init preamble before the first column and a print/cut
terminator after the last one.

Reference: Brother P-touch raster command reference
"""

ESC = 0x1B

# Zero bytes sent ahead of the job to flush any half-received command
INVALIDATE_BYTES = 400

# Automatic feed margin in dots
DEFAULT_MARGIN_DOTS = 20

# Various-mode flag values for ESC i M
AUTO_CUT_ON = 0x40
AUTO_CUT_OFF = 0x00

# Raster graphics transfer
RASTER_TRANSFER = b"G"

# Print with feeding (last page). 0x0C would mean "more pages follow".
PRINT_LAST_PAGE = b"Z\x1a"


class RasterCommand:
    """
    Raster command builder.

    Collects commands for one print job. Each call appends one command;
    get_commands() returns the job so far.
    """

    def __init__(self):
        self._commands: list[bytes] = []

    def clear(self):
        """Clear all queued commands."""
        self._commands.clear()

    def get_commands(self) -> bytes:
        """Get all commands as a single byte string."""
        return b"".join(self._commands)

    def _add_raw(self, data: bytes):
        """Add raw bytes."""
        self._commands.append(bytes(data))

    def _add_esc(self, command: str, params: bytes = b""):
        """Add an ESC-prefixed command."""
        self._add_raw(bytes([ESC]) + command.encode("ascii") + params)

    # ---- Setup Commands ----

    def invalidate(self, count: int = INVALIDATE_BYTES):
        """Send zero bytes to reset a partially received command."""
        self._add_raw(bytes(count))

    def initialize(self):
        """Reset the printer (ESC @)."""
        self._add_esc("@")

    def status_request(self):
        """
        Request printer status (ESC i S).

        Needed before the first print after a reset even though the
        reply is never read.
        """
        self._add_esc("iS")

    def auto_cut(self, enabled: bool):
        """Set auto-cut mode (ESC i M)."""
        self._add_esc("iM", bytes([AUTO_CUT_ON if enabled else AUTO_CUT_OFF]))

    def margin(self, dots: int = DEFAULT_MARGIN_DOTS):
        """Set the feed margin in dots (ESC i d n1 n2)."""
        self._add_esc("id", bytes([dots & 0xFF, (dots >> 8) & 0xFF]))

    # ---- Raster Commands ----

    def raster_column(self, length_byte: int, data: bytes):
        """
        Transfer one column of raster data.

        Args:
            length_byte: Data length minus one
            data: Column bytes (padding and image)
        """
        self._add_raw(RASTER_TRANSFER + bytes([length_byte]) + data)

    # ---- Print Commands ----

    def print_last_page(self):
        """Print the buffered raster and feed/cut the tape."""
        self._add_raw(PRINT_LAST_PAGE)

    # ---- Convenience Methods ----

    def setup_job(self, auto_cut: bool = False):
        """Common preamble for a raster job."""
        self.invalidate()
        self.initialize()
        self.status_request()
        self.auto_cut(auto_cut)
        self.margin()


def build_preamble(auto_cut: bool = False) -> bytes:
    """Return the control bytes sent before the first column."""
    cmd = RasterCommand()
    cmd.setup_job(auto_cut)
    return cmd.get_commands()


def build_terminator() -> bytes:
    """Return the control bytes sent after the last column."""
    cmd = RasterCommand()
    cmd.print_last_page()
    return cmd.get_commands()
