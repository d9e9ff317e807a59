"""Safe-zone geometry: candidate text regions around a single image.

Zones are recomputed from scratch whenever the image moves; nothing here keeps
state between calls.
"""

import logging
import math

from models import CanvasConfig, ImageBounds, SafeZone, ZoneMetrics

logger = logging.getLogger(__name__)


def _clamp(value, lo, hi):
    return max(lo, min(hi, value))


def compute_safe_zones(image: ImageBounds, config: CanvasConfig | None = None) -> list[SafeZone]:
    """Return up to four zones (TOP, BOTTOM, LEFT, RIGHT) that avoid *image*.

    Only the on-canvas part of the image matters. An empty list means there is
    no room for text; that is a normal outcome.
    """
    c = config or CanvasConfig()

    # Visible extent of the image on each axis
    left = _clamp(image.x, 0, c.width)
    right = _clamp(image.right, 0, c.width)
    top = _clamp(image.y, 0, c.height)
    bottom = _clamp(image.bottom, 0, c.height)

    full_w = c.usable_width
    full_h = c.usable_height

    candidates = [
        ("TOP", c.margin, c.margin, full_w, top - c.margin - c.clearance),
        ("BOTTOM", c.margin, bottom + c.clearance, full_w,
         c.height - bottom - c.margin - c.clearance),
        ("LEFT", c.margin, c.margin, left - c.margin - c.clearance, full_h),
        ("RIGHT", right + c.clearance, c.margin,
         c.width - right - c.margin - c.clearance, full_h),
    ]

    zones: list[SafeZone] = []
    for zone_id, x, y, w, h in candidates:
        if w > c.min_zone_dimension and h > c.min_zone_dimension:
            zone = SafeZone(id=zone_id, x=x, y=y, width=w, height=h, area=w * h)
            logger.debug("%s zone: %sx%s at (%s, %s)", zone_id, w, h, x, y)
            zones.append(zone)

    logger.debug("Safe zones for image %s: %d", image, len(zones))
    return zones


def select_best_zone(zones: list[SafeZone], config: CanvasConfig | None = None) -> SafeZone | None:
    """Largest usable zone (wide enough for text), else the largest of all.

    Ties keep the first zone seen. Returns ``None`` only for an empty list.
    """
    if not zones:
        logger.debug("No safe zones to select from")
        return None

    c = config or CanvasConfig()
    usable = [z for z in zones if z.width >= c.usable_zone_width]
    if usable:
        best = max(usable, key=lambda z: z.area)
        logger.debug("Selected zone %s (%sx%s)", best.id, best.width, best.height)
        return best

    best = max(zones, key=lambda z: z.area)
    logger.warning("All zones narrower than %dpx, using largest: %s (%sx%s)",
                   c.usable_zone_width, best.id, best.width, best.height)
    return best


def zone_metrics(zone: SafeZone, config: CanvasConfig | None = None) -> ZoneMetrics:
    """Inner padding and the usable width/height left inside *zone*."""
    c = config or CanvasConfig()
    padding = c.narrow_inner_padding if zone.width < c.narrow_zone_width else c.inner_padding
    return ZoneMetrics(
        inner_padding=padding,
        max_width=zone.width - 2 * padding,
        available_height=zone.height - 2 * padding,
    )


def char_capacity(font_size: float, max_width: float, config: CanvasConfig | None = None) -> int:
    """How many average-width characters fit on one line of *max_width* pixels."""
    c = config or CanvasConfig()
    return math.floor(max_width / (font_size * c.avg_char_width_em))
