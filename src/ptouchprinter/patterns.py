"""
Calibration pattern generator.

Used with calibration mode to check where the print head puts each row
of pixels relative to the tape edges.
"""

from PIL import Image, ImageDraw


def generate_calibration_pattern(
    width: int = 64,
    height: int = 64,
    tick_spacing: int = 8,
) -> Image.Image:
    """
    Generate a calibration pattern.

    The pattern includes:
    - One pixel border at the edges
    - Corner markers (filled squares)
    - Tick marks along the left edge every ``tick_spacing`` rows,
      doubled in length every fourth tick

    Args:
        width: Pattern width in pixels (columns printed)
        height: Pattern height in pixels (print head rows)
        tick_spacing: Rows between tick marks

    Returns:
        PIL Image with 1-bit pattern (mode "1")
    """
    img = Image.new("1", (width, height), color=1)  # White background
    draw = ImageDraw.Draw(img)

    draw.rectangle([0, 0, width - 1, height - 1], outline=0, width=1)

    corner_size = min(4, width, height)
    corners = [
        (0, 0),
        (width - corner_size, 0),
        (0, height - corner_size),
        (width - corner_size, height - corner_size),
    ]
    for cx, cy in corners:
        draw.rectangle([cx, cy, cx + corner_size - 1, cy + corner_size - 1], fill=0)

    for i, y in enumerate(range(tick_spacing, height, tick_spacing), 1):
        length = 8 if i % 4 == 0 else 4
        draw.line([(0, y), (min(length, width - 1), y)], fill=0)

    return img
