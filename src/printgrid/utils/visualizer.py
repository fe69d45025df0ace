"""
Module: utils.visualizer

Purpose:
    Debug visualization for placement results. Draws the canvas rectangle,
    every placed tile's bounding box with its sequence name, and the
    artwork pieces inside each tile, to help diagnose spacing and overlap
    issues without opening a document host.

Key Functions:
    - render_canvas_preview(): Create a preview image of one canvas
    - save_canvas_preview(): Save the preview to disk

Dependencies:
    - PIL: Image drawing
    - engine.transform: Clip-aware bounds

Used By:
    - Scripts and tests inspecting CanvasPlacement results
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, Tuple

from PIL import Image, ImageDraw, ImageFont

from printgrid.core.errors import EmptyBounds
from printgrid.core.models import BoundingBox, CanvasHandle
from printgrid.engine.transform import bounds_of
from printgrid.host.provider import CanvasHost

logger = logging.getLogger(__name__)

# Visualization constants
COLORS = {
    "canvas": (0, 0, 0, 255),         # Black - usable rectangle
    "tile": (255, 0, 0, 200),         # Red - placed tiles
    "piece": (0, 0, 255, 120),        # Blue - artwork inside tiles
}

BACKGROUND_COLOR = (255, 255, 255, 255)
LABEL_BG_COLOR = (0, 0, 0, 200)      # Black background for labels
LABEL_TEXT_COLOR = (255, 255, 255)    # White text
BOX_LINE_WIDTH = 2
FONT_SIZE = 14
DEFAULT_SCALE = 0.1                   # Pixels per point


def render_canvas_preview(
    host: CanvasHost,
    canvas: CanvasHandle,
    scale: float = DEFAULT_SCALE,
) -> Image.Image:
    """
    Create a preview image of a filled canvas.

    Draws:
    - Black: Canvas usable rectangle
    - Red: Each placed tile, labelled with its name
    - Blue: Artwork pieces inside each tile

    Args:
        host: Canvas host that owns the canvas
        canvas: Canvas to draw
        scale: Pixels per point

    Returns:
        New RGB image

    Example:
        >>> img = render_canvas_preview(host, placement.canvas, scale=0.2)
        >>> img.save("canvas_1.png")
    """
    if scale <= 0:
        raise ValueError(f"scale must be positive: {scale}")

    rect = canvas.rect
    size = (max(1, round(rect.width * scale)) + 1, max(1, round(rect.height * scale)) + 1)
    img = Image.new("RGBA", size, BACKGROUND_COLOR)
    overlay = Image.new("RGBA", size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(overlay)

    # Try to load font for labels
    try:
        font = ImageFont.truetype("Arial.ttf", FONT_SIZE)
    except (IOError, OSError):
        font = ImageFont.load_default()

    draw.rectangle(_to_pixels(rect, rect, scale), outline=COLORS["canvas"], width=BOX_LINE_WIDTH)

    drawn = 0
    for shape in host.children_of(canvas.container):
        try:
            box = bounds_of(host, shape)
        except EmptyBounds:
            logger.debug(f"Skipping shape without geometry: {shape!r}")
            continue
        for piece in _iter_pieces(host, shape):
            draw.rectangle(_to_pixels(piece, rect, scale), outline=COLORS["piece"], width=1)
        _draw_labelled_box(draw, _to_pixels(box, rect, scale), host.name_of(shape), COLORS["tile"], font)
        drawn += 1

    img = Image.alpha_composite(img, overlay)
    logger.debug(f"Rendered preview of {canvas.title!r}: {drawn} shape(s)")
    return img.convert("RGB")


def _iter_pieces(host: CanvasHost, shape: Any) -> Iterator[BoundingBox]:
    """Yield the bounds of every leaf (or clipped group) under `shape`."""
    if host.is_group(shape) and not host.is_clipped(shape):
        for child in host.children_of(shape):
            yield from _iter_pieces(host, child)
        return
    try:
        yield bounds_of(host, shape)
    except EmptyBounds:
        return


def _to_pixels(box: BoundingBox, origin: BoundingBox, scale: float) -> Tuple[int, int, int, int]:
    return (
        round((box.left - origin.left) * scale),
        round((box.top - origin.top) * scale),
        round((box.right - origin.left) * scale),
        round((box.bottom - origin.top) * scale),
    )


def _draw_labelled_box(
    draw: ImageDraw.ImageDraw,
    bbox: Tuple[int, int, int, int],
    label_text: str,
    color: Tuple[int, int, int, int],
    font: ImageFont.FreeTypeFont,
) -> None:
    """
    Draw a box with its label in the top-left corner.

    Args:
        draw: ImageDraw object
        bbox: (left, top, right, bottom) in pixels
        label_text: Text to display
        color: RGBA color tuple for box
        font: Font for label text
    """
    x0, y0, _, _ = bbox
    draw.rectangle(bbox, outline=color, width=BOX_LINE_WIDTH)
    if not label_text:
        return

    text_bbox = draw.textbbox((0, 0), label_text, font=font)
    text_width = text_bbox[2] - text_bbox[0]
    text_height = text_bbox[3] - text_bbox[1]

    draw.rectangle(
        (x0, y0, x0 + text_width + 4, y0 + text_height + 4),
        fill=LABEL_BG_COLOR,
    )
    draw.text((x0 + 2, y0 + 2), label_text, fill=LABEL_TEXT_COLOR, font=font)


def save_canvas_preview(
    host: CanvasHost,
    canvas: CanvasHandle,
    output_dir: Path,
    stem: str,
    scale: float = DEFAULT_SCALE,
) -> Path:
    """
    Create and save a canvas preview as PNG.

    Args:
        host: Canvas host that owns the canvas
        canvas: Canvas to draw
        output_dir: Directory to save into (created if missing)
        stem: File name without extension
        scale: Pixels per point

    Returns:
        Path to saved preview image

    Example:
        >>> path = save_canvas_preview(host, placement.canvas, Path("debug"), "canvas_1")
        >>> print(f"Preview saved: {path}")
    """
    img = render_canvas_preview(host, canvas, scale=scale)

    output_dir.mkdir(parents=True, exist_ok=True)
    preview_path = output_dir / f"{stem}_preview.png"
    img.save(preview_path, "PNG")

    logger.info(f"Saved canvas preview {preview_path.name} ({img.width}x{img.height}px)")
    return preview_path
