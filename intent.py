"""Intent validation and intent-to-pixel translation.

An intent is a zone choice, an alignment and an ordered list of single-line
text records. Validation checks that every line fits the zone's width without
wrapping and that the lines stack into the zone's height with a non-negative
gap. Translation turns a validated intent into absolute coordinates, spreading
the leftover height evenly between lines.
"""

import logging
import math

from models import (
    ALIGNMENTS, TEXT_ALIGN, CanvasConfig, ComputedMetrics, ImageBounds, LayoutIntent,
    Margins, PixelLayout, PixelLine, Position, SafeZone, ValidationResult,
)
from zones import char_capacity, zone_metrics

logger = logging.getLogger(__name__)


class IntentValidationError(ValueError):
    """Raised when an intent that does not fit its zone is translated."""

    def __init__(self, zone_id: str, reasons: list[str]):
        self.zone_id = zone_id
        self.reasons = list(reasons)
        super().__init__(f"Intent does not fit in zone {zone_id}: {' | '.join(self.reasons)}")


def _valid_font_size(font_size) -> bool:
    if isinstance(font_size, bool) or not isinstance(font_size, (int, float)):
        return False
    return math.isfinite(font_size) and font_size > 0


def _intent_lines(intent) -> tuple:
    lines = getattr(intent, "text_lines", None)
    return tuple(lines) if isinstance(lines, (list, tuple)) else ()


def _line_heights(lines, config: CanvasConfig) -> float:
    heights = (getattr(line, "font_size", None) for line in lines)
    return sum(fs * config.line_height for fs in heights if _valid_font_size(fs))


def _dynamic_gap(available_height: float, total_line_heights: float, total_lines: int) -> float:
    if total_lines > 1:
        return (available_height - total_line_heights) / (total_lines - 1)
    return 0.0


def validate_intent(intent: LayoutIntent, zone: SafeZone,
                    config: CanvasConfig | None = None) -> ValidationResult:
    """Check that *intent* fits *zone* without wrapping or negative spacing.

    Never raises, even for malformed intents from outside the fitter.
    ``reasons`` lists every problem found; ``computed`` is filled in whether or
    not the intent fits so near-misses can be compared.
    """
    c = config or CanvasConfig()
    reasons: list[str] = []
    lines = _intent_lines(intent)
    total_lines = len(lines)

    m = zone_metrics(zone, c)
    if m.max_width <= 0:
        reasons.append(f"zone too narrow after padding: maxWidth={m.max_width}")
    if m.available_height <= 0:
        reasons.append(f"zone too short after padding: availableHeight={m.available_height}")
    selected_zone = getattr(intent, "selected_zone", None)
    if selected_zone != zone.id:
        reasons.append(f"intent targets zone {selected_zone} but was validated against {zone.id}")
    alignment = getattr(intent, "alignment", None)
    if not isinstance(alignment, str) or alignment not in ALIGNMENTS:
        reasons.append(f"unknown alignment: {alignment!r}")
    if total_lines == 0:
        reasons.append("intent has no text lines")

    for i, line in enumerate(lines, start=1):
        text = getattr(line, "text", None)
        font_size = getattr(line, "font_size", None)
        if text is not None and not isinstance(text, str):
            reasons.append(f"line {i} text is not a string: {type(text).__name__}")
            continue
        text = (text or "").strip()
        if not text:
            reasons.append(f"line {i} is empty")
            continue
        if not _valid_font_size(font_size):
            reasons.append(f"line {i} has invalid font size: fontSize={font_size!r}")
            continue
        max_chars = char_capacity(font_size, m.max_width, c)
        if len(text) > max_chars:
            reasons.append(
                f"line {i} too long for maxWidth: len={len(text)} > maxChars={max_chars} "
                f"(font={font_size}, maxWidth={m.max_width})"
            )

    total_line_heights = _line_heights(lines, c)
    gap = _dynamic_gap(m.available_height, total_line_heights, total_lines)

    if not math.isfinite(gap):
        reasons.append(f"invalid gap computed: gap={gap}")
    elif gap < 0:
        reasons.append(f"negative gap computed: does not fit vertically (gap={round(gap, 1)}px)")
    elif total_lines == 1 and total_line_heights > m.available_height:
        reasons.append(
            f"does not fit vertically: lineHeight={round(total_line_heights, 1)} "
            f"> availableHeight={m.available_height}"
        )

    return ValidationResult(
        ok=not reasons,
        reasons=reasons,
        computed=ComputedMetrics(
            max_width=m.max_width,
            available_height=m.available_height,
            total_line_heights=(round(total_line_heights) if math.isfinite(total_line_heights)
                                else total_line_heights),
            dynamic_gap=round(gap, 1) if math.isfinite(gap) else gap,
            total_lines=total_lines,
            inner_padding=m.inner_padding,
        ),
    )


def translate_intent(intent: LayoutIntent, zone: SafeZone, image: ImageBounds,
                     config: CanvasConfig | None = None) -> PixelLayout:
    """Place every line of a validated *intent* at absolute canvas coordinates.

    Raises :class:`IntentValidationError` if the intent does not fit; callers
    must validate (or fit) first.
    """
    c = config or CanvasConfig()
    validation = validate_intent(intent, zone, c)
    if not validation.ok:
        logger.warning("Intent failed fit validation for zone %s: %s", zone.id, validation.reasons)
        raise IntentValidationError(zone.id, validation.reasons)

    padding = validation.computed.inner_padding
    if intent.alignment == "start":
        base_x = zone.x + padding
    elif intent.alignment == "end":
        base_x = zone.x + zone.width - padding
    else:
        base_x = zone.x + zone.width / 2
    text_align = TEXT_ALIGN[intent.alignment]

    # Recompute the exact gap; the validation copy is rounded for display
    available_height = zone.height - 2 * padding
    gap = _dynamic_gap(available_height, _line_heights(intent.text_lines, c), len(intent.text_lines))
    max_width = round(validation.computed.max_width)

    lines: list[PixelLine] = []
    y = zone.y + padding
    for line in intent.text_lines:
        lines.append(PixelLine(
            text=line.text,
            font_size=line.font_size,
            position=Position(x=round(base_x), y=round(y)),
            alignment=text_align,
            line_height=c.line_height,
            max_width=max_width,
            styles=list(line.styles) if isinstance(line.styles, (list, tuple)) else [],
        ))
        y += line.font_size * c.line_height + gap

    logger.debug("Translated %d lines into zone %s (gap=%.1fpx)", len(lines), zone.id, gap)
    return PixelLayout(
        text_lines=lines,
        image=image,
        margins=Margins(top=c.margin, right=c.margin, bottom=c.margin, left=c.margin),
    )
