"""Best-effort bold/italic emphasis for already-wrapped lines.

Emphasis never touches geometry: text, font sizes and line count stay exactly
as the fitter (or advisor) left them. A missing or failing annotator just
means no styling.
"""

import logging
import math
from dataclasses import replace

from models import LayoutIntent, StyleRange

logger = logging.getLogger(__name__)


def _as_range(style) -> StyleRange | None:
    if isinstance(style, StyleRange):
        return style
    if isinstance(style, dict):
        return StyleRange(
            start=style.get("start"),
            end=style.get("end"),
            font_weight=style.get("fontWeight", style.get("font_weight")),
            font_style=style.get("fontStyle", style.get("font_style")),
        )
    return None


def _is_index(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value == int(value)


def sanitize_styles(text: str, styles) -> list[StyleRange]:
    """Keep only ranges with ``0 <= start < end <= len(text)``."""
    clean: list[StyleRange] = []
    if not isinstance(styles, (list, tuple)):
        return clean
    for raw in styles:
        style = _as_range(raw)
        if style is None or not (_is_index(style.start) and _is_index(style.end)):
            continue
        start, end = int(style.start), int(style.end)
        if start < 0 or end > len(text) or start >= end:
            continue
        clean.append(StyleRange(start, end, style.font_weight, style.font_style))
    return clean


def annotate_intent(intent: LayoutIntent, annotator) -> LayoutIntent:
    """Return a copy of *intent* with styles from ``annotator(texts)``.

    *annotator* receives the list of line texts and returns one style list per
    line. Exceptions are logged and the intent comes back unchanged.
    """
    if annotator is None:
        return intent

    texts = [line.text for line in intent.text_lines]
    try:
        styles_by_line = list(annotator(texts) or [])
    except Exception as e:
        logger.warning("Emphasis annotator failed; continuing without styles: %s", e)
        return intent

    lines = []
    for i, line in enumerate(intent.text_lines):
        styles = styles_by_line[i] if i < len(styles_by_line) else []
        lines.append(replace(line, styles=tuple(sanitize_styles(line.text, styles))))
    return replace(intent, text_lines=tuple(lines))
