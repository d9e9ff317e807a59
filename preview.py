"""Pillow preview of a PixelLayout.

Draws the canvas, the on-canvas part of the image, optional zone outlines and
every text line at its computed position. Useful for eyeballing bench runs;
glyphs come from Pillow's default font, so widths only approximate the real
renderer.
"""

import io

from PIL import Image, ImageDraw, ImageFont

from models import CanvasConfig, PixelLayout, SafeZone

BACKGROUND = (255, 255, 255)
IMAGE_FILL = (200, 200, 200)
ZONE_OUTLINE = (70, 130, 220)
TEXT_FILL = (20, 20, 20)

# PixelLine.alignment -> Pillow text anchor (horizontal, ascender)
ANCHORS = {
    "left": "la",
    "center": "ma",
    "right": "ra",
}


def render_preview(layout: PixelLayout, config: CanvasConfig | None = None,
                   zones: list[SafeZone] | None = None) -> Image.Image:
    """Return an RGB image of *layout* on a canvas sized by *config*."""
    c = config or CanvasConfig()
    img = Image.new('RGB', (c.width, c.height), BACKGROUND)
    draw = ImageDraw.Draw(img)

    b = layout.image
    left, top = max(0, b.x), max(0, b.y)
    right, bottom = min(c.width, b.right), min(c.height, b.bottom)
    if right > left and bottom > top:
        draw.rectangle([left, top, right - 1, bottom - 1], fill=IMAGE_FILL)

    for zone in zones or []:
        draw.rectangle([zone.x, zone.y, zone.x + zone.width - 1, zone.y + zone.height - 1],
                       outline=ZONE_OUTLINE, width=2)

    for line in layout.text_lines:
        font = ImageFont.load_default(size=max(1, round(line.font_size)))
        draw.text((line.position.x, line.position.y), line.text, fill=TEXT_FILL,
                  font=font, anchor=ANCHORS.get(line.alignment, "la"))
    return img


def preview_png(layout: PixelLayout, config: CanvasConfig | None = None,
                zones: list[SafeZone] | None = None) -> bytes:
    """PNG bytes of :func:`render_preview`."""
    buf = io.BytesIO()
    render_preview(layout, config, zones).save(buf, format='PNG')
    return buf.getvalue()


def save_preview(layout: PixelLayout, path: str, config: CanvasConfig | None = None,
                 zones: list[SafeZone] | None = None):
    render_preview(layout, config, zones).save(path, format='PNG')
