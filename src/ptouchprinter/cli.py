"""
Command-Line Interface for P-touch Printers.

Usage:
    ptouch destinations        - List print destinations
    ptouch print IMAGE         - Print a PNG label
    ptouch calibrate           - Print a head calibration pattern
    ptouch forget              - Clear remembered destination and tape
"""

import sys
from typing import Optional

import click

from . import config
from .encoder import RasterEncoder
from .errors import EncodeError, ImageError, PrinterError, SpoolError
from .image import load_bitmap
from .patterns import generate_calibration_pattern
from .spool import default_destination, list_destinations, spool_job, write_stream
from .tape import TapeType

TAPE_CHOICES = [t.value for t in TapeType if t is not TapeType.CALIBRATION]


def select_destination(destination: Optional[str] = None) -> Optional[str]:
    """Pick the print destination for a job.

    Order: explicit option, remembered destination, system default,
    the only available destination, then an interactive prompt.

    Args:
        destination: Destination given on the command line

    Returns:
        Selected destination name, or None if none could be selected
    """
    if destination:
        return destination

    saved = config.load_defaults()
    if saved and saved.destination:
        return saved.destination

    system_default = default_destination()
    if system_default:
        return system_default

    destinations = list_destinations()
    if not destinations:
        click.echo("No print destinations found.", err=True)
        return None

    # Auto-select when exactly one destination exists
    if len(destinations) == 1:
        selected = destinations[0]
        click.echo(f"Found 1 destination: {selected.name} - using automatically")
        return selected.name

    click.echo(f"\nFound {len(destinations)} destination(s):\n")
    for i, d in enumerate(destinations, 1):
        click.echo(f"  [{i}] {d}")

    click.echo()
    while True:
        try:
            choice = click.prompt(f"Select destination (1-{len(destinations)})", type=int)
            if 1 <= choice <= len(destinations):
                selected = destinations[choice - 1]
                click.echo(f"Selected: {selected.name}")
                return selected.name
            click.echo(f"Please enter a number between 1 and {len(destinations)}", err=True)
        except click.Abort:
            return None


def _submit(data: bytes, destination: Optional[str], output: Optional[str],
            copies: int, title: str) -> Optional[str]:
    """Write the job to OUTPUT, or spool it. Returns the destination used."""
    if output:
        write_stream(data, output)
        if output != "-":
            click.echo(f"Wrote {len(data)} bytes to {output}")
        return None

    destination = select_destination(destination)
    if destination is None:
        sys.exit(1)

    click.echo(f"Sending {len(data)} bytes to {destination}...")
    job_id = spool_job(data, destination, title=title, copies=copies)
    if job_id:
        click.echo(f"Print job submitted: {job_id}")
    else:
        click.echo("Print job submitted.")
    return destination


def _fail(kind: str, error: PrinterError):
    click.echo(f"{kind} error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.pass_context
def main(ctx, debug):
    """P-touch Label Printer CLI."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@main.command()
def destinations():
    """List print destinations known to the spooler."""
    try:
        found = list_destinations()
    except SpoolError as e:
        _fail("Spool", e)

    if not found:
        click.echo("No print destinations found.")
        return

    click.echo(f"Found {len(found)} destination(s):\n")
    for d in found:
        click.echo(f"  {d}")


@main.command("print")
@click.argument("image", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--tape",
    "-t",
    help=f"Tape type ({', '.join(TAPE_CHOICES)}); defaults to the last one used",
)
@click.option(
    "--destination",
    "-d",
    help="Print destination (if omitted, uses the remembered or default one)",
)
@click.option(
    "--auto-cut/--no-auto-cut",
    default=True,
    help="Cut the tape after printing (default on)",
)
@click.option("--inverse", is_flag=True, help="Fill unused print head pins")
@click.option("--copies", type=click.IntRange(1), default=1, help="Number of copies")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="Write the raster stream to a file ('-' for stdout) instead of printing",
)
@click.pass_context
def print_image(ctx, image, tape, destination, auto_cut, inverse, copies, output):
    """Print a PNG image.

    The image height must match the tape: 32 px (6 mm), 48 or 56 px (9 mm),
    64 or 80 px (12 mm), 96 or 112 px (18 mm), 128 px (24 mm, the bottom
    8 rows fall outside the print head).
    Dark pixels are printed.
    """
    if tape is None:
        saved = config.load_defaults()
        tape = saved.tape if saved else None
    if tape is None:
        click.echo("No tape type given; use --tape.", err=True)
        sys.exit(1)

    encoder = RasterEncoder(auto_cut=auto_cut, inverse=inverse)
    encoder.set_debug(ctx.obj["debug"])

    try:
        bitmap = load_bitmap(image)
        data = encoder.encode(bitmap, tape)
        used = _submit(data, destination, output, copies, title=click.format_filename(image))
    except ImageError as e:
        _fail("Image", e)
    except EncodeError as e:
        _fail("Encode", e)
    except SpoolError as e:
        _fail("Spool", e)

    if used:
        config.save_defaults(used, tape)


@main.command()
@click.option(
    "--height",
    default=64,
    help="Pattern height in pixels (rows past the last multiple of 8 are dropped)",
)
@click.option("--width", type=click.IntRange(1), default=64, help="Pattern width in pixels")
@click.option(
    "--destination",
    "-d",
    help="Print destination (if omitted, uses the remembered or default one)",
)
@click.option("--auto-cut/--no-auto-cut", default=True, help="Cut the tape after printing")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, allow_dash=True),
    help="Write the raster stream to a file ('-' for stdout) instead of printing",
)
@click.pass_context
def calibrate(ctx, height, width, destination, auto_cut, output):
    """Print a print head calibration pattern.

    Ignores the tape tables and places the pattern right after a fixed
    five byte lead-in, so any height up to 2015 px can be used. Rows below
    the last full group of 8 are not printed.

    Examples:
        ptouch calibrate
        ptouch calibrate --height 96 -o calib.bin
    """
    encoder = RasterEncoder(auto_cut=auto_cut, calibration=True)
    encoder.set_debug(ctx.obj["debug"])

    try:
        encoder.profile_for(TapeType.CALIBRATION, height)
        pattern = generate_calibration_pattern(width=width, height=height)
        data = encoder.encode(pattern, TapeType.CALIBRATION)
        _submit(data, destination, output, 1, title="ptouch calibration")
    except EncodeError as e:
        _fail("Encode", e)
    except SpoolError as e:
        _fail("Spool", e)


@main.command()
def forget():
    """Clear the remembered destination and tape type."""
    if config.clear_defaults():
        click.echo("Saved defaults cleared.")
    else:
        click.echo("No saved defaults.")


if __name__ == "__main__":
    main()
