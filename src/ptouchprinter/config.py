"""
Remembered defaults for the ptouch command.

The destination and tape type of the last successful job are kept in
~/.config/ptouchprinter/defaults so `ptouch print` can be run with just
an image path. Only real tape widths are remembered; calibration runs
never overwrite them.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import UnknownTapeTypeError
from .tape import TapeType, parse_tape_type

CONFIG_DIR = Path.home() / ".config" / "ptouchprinter"
DEFAULTS_FILE = CONFIG_DIR / "defaults"


@dataclass
class SavedDefaults:
    """Destination and tape type to use when none are given."""

    destination: Optional[str] = None
    tape: Optional[TapeType] = None

    @classmethod
    def from_dict(cls, data: dict) -> "SavedDefaults":
        """
        Build defaults from the stored mapping.

        Raises:
            UnknownTapeTypeError: If the stored tape is not a printable width
            TypeError: If a field has the wrong type
        """
        destination = data.get("destination")
        if destination is not None and not isinstance(destination, str):
            raise TypeError("destination must be a string")

        tape = data.get("tape")
        if tape is not None:
            tape = parse_tape_type(tape)
            if tape is TapeType.CALIBRATION:
                raise UnknownTapeTypeError(tape.value)

        return cls(destination=destination, tape=tape)

    def to_dict(self) -> dict:
        return {
            "destination": self.destination,
            "tape": self.tape.value if self.tape else None,
        }


def load_defaults() -> Optional[SavedDefaults]:
    """Load saved defaults.

    A file that cannot be read back into a usable destination or tape
    type counts as nothing saved.

    Returns:
        SavedDefaults if a valid file exists, None otherwise.
    """
    if not DEFAULTS_FILE.exists():
        return None

    try:
        data = json.loads(DEFAULTS_FILE.read_text())
        if not isinstance(data, dict):
            return None
        saved = SavedDefaults.from_dict(data)
    except (json.JSONDecodeError, UnknownTapeTypeError, TypeError):
        return None

    if saved.destination is None and saved.tape is None:
        return None
    return saved


def save_defaults(destination: Optional[str],
                  tape: Optional[Union[str, TapeType]]) -> SavedDefaults:
    """Remember the destination and tape type of a successful job.

    Args:
        destination: Spooler destination name
        tape: Tape type (e.g. "12"); the calibration tape is not stored

    Returns:
        The defaults as written.

    Raises:
        UnknownTapeTypeError: If the tape type is not recognised
    """
    tape = parse_tape_type(tape) if tape is not None else None
    if tape is TapeType.CALIBRATION:
        tape = None

    saved = SavedDefaults(destination=destination, tape=tape)
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    DEFAULTS_FILE.write_text(json.dumps(saved.to_dict(), indent=2))
    return saved


def clear_defaults() -> bool:
    """Clear saved defaults.

    Returns:
        True if defaults were cleared, False if none were saved.
    """
    if DEFAULTS_FILE.exists():
        DEFAULTS_FILE.unlink()
        return True
    return False
