"""
Print spooler glue.

Lists CUPS destinations and submits raster jobs through the ``lp``
command. The job is written to a temporary file in binary mode and
sent raw so no byte of the stream is translated.
"""

import re
import subprocess
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import SpoolError

LPSTAT = "lpstat"
LP = "lp"

DEFAULT_JOB_TITLE = "ptouch label"

# "request id is Brother_PT-2430PC-42 (1 file(s))"
REQUEST_ID_PATTERN = re.compile(r"request id is (\S+)")

# "system default destination: Brother_PT-2430PC"
DEFAULT_DEST_PATTERN = re.compile(r"system default destination:\s*(\S+)")


@dataclass
class Destination:
    """A print destination known to the spooler."""
    name: str
    is_default: bool = False

    def __str__(self) -> str:
        if self.is_default:
            return f"{self.name} (default)"
        return self.name


def _run(args: list[str]) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(args, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise SpoolError(f"{args[0]} not found; is CUPS installed?") from e


def default_destination() -> Optional[str]:
    """Get the system default destination, if one is set."""
    result = _run([LPSTAT, "-d"])
    match = DEFAULT_DEST_PATTERN.search(result.stdout or "")
    return match.group(1) if match else None


def list_destinations() -> list[Destination]:
    """
    List destinations accepting requests.

    Raises:
        SpoolError: If lpstat is missing or fails
    """
    result = _run([LPSTAT, "-a"])
    if result.returncode != 0:
        # lpstat exits non-zero when there are no destinations at all
        if "No destinations" in (result.stderr or ""):
            return []
        raise SpoolError(f"lpstat failed: {(result.stderr or '').strip()}")

    default = default_destination()
    destinations = []
    for line in result.stdout.splitlines():
        fields = line.split()
        if not fields:
            continue
        destinations.append(Destination(fields[0], fields[0] == default))
    return destinations


def spool_job(
    data: bytes,
    destination: str,
    title: str = DEFAULT_JOB_TITLE,
    copies: int = 1,
) -> Optional[str]:
    """
    Send a raster job to a print destination.

    Args:
        data: Complete raster stream
        destination: Spooler destination name
        title: Job title shown in the queue
        copies: Number of copies

    Returns:
        Spooler job id, or None if lp did not report one

    Raises:
        SpoolError: If lp is missing or rejects the job
    """
    with tempfile.NamedTemporaryFile(delete=False, suffix=".bin") as tmp:
        tmp.write(data)
    try:
        result = _run([
            LP, "-d", destination, "-o", "raw", "-n", str(copies),
            "-t", title, tmp.name,
        ])
    finally:
        Path(tmp.name).unlink(missing_ok=True)

    if result.returncode != 0:
        raise SpoolError(
            f"lp rejected job for {destination}: {(result.stderr or '').strip()}"
        )

    match = REQUEST_ID_PATTERN.search(result.stdout or "")
    return match.group(1) if match else None


def write_stream(data: bytes, path: Union[str, Path]) -> None:
    """Write a raster stream verbatim to a file, or to stdout for "-"."""
    if str(path) == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    Path(path).write_bytes(data)
