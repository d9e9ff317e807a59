"""Data model classes and configuration for the safe-zone layout engine.

All layout math happens in canvas pixel space (1080 x 1440 by default).
"""

import math
from dataclasses import dataclass, field


# === Constants ===
ALIGNMENTS = ("start", "center", "end")

# Intent alignment -> renderer text alignment
TEXT_ALIGN = {
    "start": "left",
    "center": "center",
    "end": "right",
}


# === Configuration ===

@dataclass(frozen=True)
class CanvasConfig:
    """Fixed canvas geometry and text heuristics shared with the renderer."""
    width: int = 1080
    height: int = 1440
    margin: int = 40                  # Outer margin on all sides
    clearance: int = 80               # Min empty space between image and any zone
    line_height: float = 1.2          # Line box height = font_size * line_height
    avg_char_width_em: float = 0.56   # Estimated glyph width as a fraction of font size
    min_zone_dimension: int = 100     # Zones must exceed this on both axes
    usable_zone_width: int = 400      # Narrower zones are only a fallback for selection
    narrow_zone_width: int = 300      # Below this, zones get the narrow inner padding
    narrow_inner_padding: int = 20
    inner_padding: int = 40

    @property
    def usable_width(self) -> int:
        return self.width - 2 * self.margin

    @property
    def usable_height(self) -> int:
        return self.height - 2 * self.margin


@dataclass(frozen=True)
class FitterSettings:
    """Tuning for the deterministic text fitter.

    ``font_buckets`` maps zone width to base font sizes as
    ``(max_width_exclusive, headline, body)``; the last bucket has no upper bound.
    """
    font_buckets: tuple = (
        (260, 40, 28),
        (350, 48, 32),
        (500, 56, 36),
        (700, 64, 40),
        (None, 76, 48),
    )
    min_headline_font: int = 22
    min_body_font: int = 18
    max_iterations: int = 14
    shrink_factor: float = 0.92
    max_total_lines: int = 28

    def base_fonts(self, zone_width: float) -> tuple[int, int]:
        """Return ``(headline, body)`` base font sizes for a zone of *zone_width*."""
        for limit, headline, body in self.font_buckets:
            if limit is None or zone_width < limit:
                return headline, body
        _, headline, body = self.font_buckets[-1]
        return headline, body


# === Geometry ===

@dataclass(frozen=True)
class ImageBounds:
    """The placed image rectangle in canvas coordinates (may lie off-canvas)."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"ImageBounds.{name} must be a finite number, got {value!r}")
        if self.width < 0 or self.height < 0:
            raise ValueError(f"ImageBounds size must be non-negative, got {self.width}x{self.height}")

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class SafeZone:
    """An axis-aligned text region that keeps clear of the image."""
    id: str
    x: float
    y: float
    width: float
    height: float
    area: float


@dataclass(frozen=True)
class ZoneMetrics:
    """Usable interior of a zone once inner padding is removed."""
    inner_padding: int
    max_width: float
    available_height: float


# === Intent ===

@dataclass(frozen=True)
class StyleRange:
    """Half-open ``[start, end)`` emphasis range over a single line's text."""
    start: int
    end: int
    font_weight: str | None = None
    font_style: str | None = None

    def to_dict(self) -> dict:
        out = {"start": self.start, "end": self.end}
        if self.font_weight is not None:
            out["fontWeight"] = self.font_weight
        if self.font_style is not None:
            out["fontStyle"] = self.font_style
        return out


@dataclass(frozen=True)
class TextLine:
    """One non-wrapping line of text at a fixed font size."""
    text: str
    font_size: float
    styles: tuple[StyleRange, ...] = ()


@dataclass(frozen=True)
class LayoutIntent:
    """A proposed (not yet validated) arrangement of lines inside one zone."""
    selected_zone: str
    alignment: str = "start"
    text_lines: tuple[TextLine, ...] = ()


@dataclass
class ComputedMetrics:
    max_width: float
    available_height: float
    total_line_heights: int
    dynamic_gap: float
    total_lines: int
    inner_padding: int


@dataclass
class ValidationResult:
    """Outcome of checking an intent against a zone; ``computed`` is always set."""
    ok: bool
    reasons: list[str]
    computed: ComputedMetrics


# === Pixel output ===

@dataclass
class Position:
    x: int
    y: int


@dataclass
class Margins:
    top: int
    right: int
    bottom: int
    left: int


@dataclass
class PixelLine:
    """A line placed at absolute canvas coordinates."""
    text: str
    font_size: float
    position: Position
    alignment: str          # 'left', 'center' or 'right'
    line_height: float
    max_width: int
    styles: list[StyleRange] = field(default_factory=list)

    @property
    def bottom(self) -> float:
        return self.position.y + self.font_size * self.line_height


@dataclass
class PixelLayout:
    """Renderer-facing layout: one text element per line, plus image and margins."""
    text_lines: list[PixelLine]
    image: ImageBounds
    margins: Margins

    def to_dict(self) -> dict:
        """Plain mapping in the key style the rendering layer consumes."""
        return {
            "textLines": [
                {
                    "text": line.text,
                    "fontSize": line.font_size,
                    "position": {"x": line.position.x, "y": line.position.y},
                    "alignment": line.alignment,
                    "lineHeightMultiplier": line.line_height,
                    "maxWidth": line.max_width,
                    "styles": [s.to_dict() if isinstance(s, StyleRange) else dict(s)
                               for s in line.styles],
                }
                for line in self.text_lines
            ],
            "image": self.image.to_dict(),
            "margins": {
                "top": self.margins.top,
                "right": self.margins.right,
                "bottom": self.margins.bottom,
                "left": self.margins.left,
            },
        }


# === Fitting & ranking results ===

@dataclass
class FitMetrics:
    headline_font: int
    body_font: int
    total_lines: int
    avg_font: float
    dynamic_gap: float
    zone_id: str
    zone_width: float
    zone_height: float
    zone_area: float


@dataclass
class FitSuccess:
    """A validated intent produced for one zone."""
    intent: LayoutIntent
    validation: ValidationResult
    metrics: FitMetrics | None = None
    iteration: int = 0
    ok: bool = field(default=True, init=False)


@dataclass
class FitFailure:
    """No valid intent could be produced for a zone."""
    zone_id: str
    reason: str
    ok: bool = field(default=False, init=False)


@dataclass
class RankedCandidate:
    zone_id: str
    score: float
    metrics: FitMetrics


@dataclass
class ZoneFailure:
    zone_id: str
    reason: str


@dataclass
class ZoneRanking:
    """Best fit across zones, the full ranked list, and every zone that failed."""
    best: FitSuccess | None = None
    candidates: list[RankedCandidate] = field(default_factory=list)
    failures: list[ZoneFailure] = field(default_factory=list)


@dataclass
class LayoutOutcome:
    """Result of the end-to-end pipeline for one image and one piece of copy."""
    layout: PixelLayout | None = None
    zone: SafeZone | None = None
    source: str | None = None           # 'advisor' or 'deterministic'
    reasons: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.layout is not None
