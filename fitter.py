"""Deterministic text fitter.

Produces a validated intent for one zone from raw headline and body strings,
with no outside help. Font sizes start from a width-keyed base table and
shrink geometrically; at each size the text is greedily word-wrapped to the
estimated character budget and the result is checked by the validator. The
first size that validates wins.
"""

import logging
import re

from models import (
    CanvasConfig, FitFailure, FitMetrics, FitSuccess, FitterSettings,
    LayoutIntent, SafeZone, TextLine,
)
from intent import validate_intent
from zones import char_capacity, zone_metrics

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def split_long_word(word: str, max_chars: int) -> list[str]:
    """Break *word* into hyphenated chunks no longer than *max_chars*."""
    if len(word) <= max_chars:
        return [word]
    parts = []
    take = max(1, max_chars - 1)    # leave room for the hyphen
    i = 0
    while len(word) - i > max_chars:
        parts.append(word[i:i + take] + "-")
        i += take
    parts.append(word[i:])
    return parts


def wrap_text(text: str, max_chars: int) -> list[str]:
    """Greedy word wrap of *text* into lines of at most *max_chars* characters."""
    cleaned = _WHITESPACE.sub(" ", text or "").strip()
    if not cleaned:
        return []

    words: list[str] = []
    for word in cleaned.split(" "):
        words.extend(split_long_word(word, max_chars))

    lines: list[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= max_chars:
            current = candidate
            continue
        if current:
            lines.append(current)
        current = word
    if current:
        lines.append(current)
    return lines


class TextFitter:
    """Shrink-and-wrap fitter for a single zone.

    Stateless apart from its configuration, so one instance can be shared and
    identical inputs always give identical results.
    """

    def __init__(self, config: CanvasConfig | None = None, settings: FitterSettings | None = None):
        self.config = config or CanvasConfig()
        self.settings = settings or FitterSettings()

    # ------------------------------------------------------------------ #
    #  Public API                                                         #
    # ------------------------------------------------------------------ #

    def fit(self, headline: str, body: str, zone: SafeZone) -> FitSuccess | FitFailure:
        """Return the first validated intent for *zone*, or a tagged failure."""
        s = self.settings
        headline = (headline or "").strip()
        body = (body or "").strip()
        if not headline and not body:
            return FitFailure(zone_id=zone.id, reason=f"no text to fit in zone {zone.id}")

        base_headline, base_body = s.base_fonts(zone.width)
        max_width = zone_metrics(zone, self.config).max_width

        for iteration in range(s.max_iterations):
            headline_font, body_font = self._fonts_for(iteration, base_headline, base_body)

            headline_lines = wrap_text(headline, self._budget(headline_font, max_width))
            body_lines = wrap_text(body, self._budget(body_font, max_width))

            # Tiny fonts in narrow zones can explode the line count; shrink instead
            total = len(headline_lines) + len(body_lines)
            if total > s.max_total_lines and iteration < s.max_iterations - 1:
                continue

            intent = LayoutIntent(
                selected_zone=zone.id,
                alignment="start",
                text_lines=tuple(TextLine(text=t, font_size=headline_font) for t in headline_lines)
                + tuple(TextLine(text=t, font_size=body_font) for t in body_lines),
            )
            validation = validate_intent(intent, zone, self.config)
            if not validation.ok:
                continue

            logger.debug("Fit zone %s on iteration %d (headline=%d, body=%d, lines=%d)",
                         zone.id, iteration, headline_font, body_font, total)
            return FitSuccess(
                intent=intent,
                validation=validation,
                metrics=self._metrics(intent, validation, zone, headline_font, body_font),
                iteration=iteration,
            )

        reason = (f"could not fit text within zone {zone.id} "
                  f"within {s.max_iterations} scaling attempts")
        logger.debug(reason)
        return FitFailure(zone_id=zone.id, reason=reason)

    # ------------------------------------------------------------------ #
    #  Helpers                                                            #
    # ------------------------------------------------------------------ #

    def _fonts_for(self, iteration, base_headline, base_body):
        s = self.settings
        scale = s.shrink_factor ** iteration
        return (max(s.min_headline_font, round(base_headline * scale)),
                max(s.min_body_font, round(base_body * scale)))

    def _budget(self, font_size, max_width):
        return max(1, char_capacity(font_size, max_width, self.config))

    @staticmethod
    def _metrics(intent, validation, zone, headline_font, body_font):
        lines = intent.text_lines
        avg_font = sum(l.font_size for l in lines) / max(1, len(lines))
        return FitMetrics(
            headline_font=headline_font,
            body_font=body_font,
            total_lines=len(lines),
            avg_font=round(avg_font, 1),
            dynamic_gap=validation.computed.dynamic_gap,
            zone_id=zone.id,
            zone_width=zone.width,
            zone_height=zone.height,
            zone_area=zone.area,
        )


def fit_text_to_zone(headline: str, body: str, zone: SafeZone,
                     config: CanvasConfig | None = None,
                     settings: FitterSettings | None = None) -> FitSuccess | FitFailure:
    """Functional shortcut for :meth:`TextFitter.fit`."""
    return TextFitter(config, settings).fit(headline, body, zone)
