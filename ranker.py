"""Zone ranking: fit the copy into every candidate zone and keep the best.

Score favours legibility (average font size) above everything else, then
breathing room between lines, then raw area, with a small bonus for
full-width TOP/BOTTOM bands and a penalty for skinny columns.
"""

import logging

from models import (
    CanvasConfig, FitterSettings, RankedCandidate, SafeZone, ZoneFailure, ZoneRanking,
)
from fitter import TextFitter

logger = logging.getLogger(__name__)

FONT_WEIGHT = 1000
GAP_WEIGHT = 20
AREA_DIVISOR = 1000
BAND_BONUS = 150                        # TOP / BOTTOM
BAND_ZONES = ("TOP", "BOTTOM")
WIDTH_PENALTIES = ((260, -200), (350, -80))  # (width_exclusive, penalty)


def width_penalty(width: float) -> int:
    for limit, penalty in WIDTH_PENALTIES:
        if width < limit:
            return penalty
    return 0


def score_fit(metrics, zone: SafeZone) -> float:
    """Ranking score of a successful fit in *zone*."""
    bonus = BAND_BONUS if zone.id in BAND_ZONES else 0
    return (metrics.avg_font * FONT_WEIGHT
            + metrics.dynamic_gap * GAP_WEIGHT
            + zone.area / AREA_DIVISOR
            + bonus
            + width_penalty(zone.width))


def rank_zones(headline: str, body: str, zones: list[SafeZone],
               config: CanvasConfig | None = None,
               settings: FitterSettings | None = None) -> ZoneRanking:
    """Fit every zone, sort successes by score and keep every failure."""
    fitter = TextFitter(config, settings)
    scored = []
    failures: list[ZoneFailure] = []

    for zone in zones:
        result = fitter.fit(headline, body, zone)
        if not result.ok:
            failures.append(ZoneFailure(zone_id=zone.id, reason=result.reason))
            continue
        scored.append((score_fit(result.metrics, zone), result))

    # sorted() is stable, so equal scores keep zone order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    candidates = [
        RankedCandidate(zone_id=fit.metrics.zone_id, score=round(score, 1), metrics=fit.metrics)
        for score, fit in scored
    ]
    if candidates:
        logger.debug("Zone ranking: %s",
                     ", ".join(f"{c.zone_id}={c.score}" for c in candidates))
    if failures:
        logger.debug("Zones that failed to fit: %s", [f.zone_id for f in failures])

    return ZoneRanking(
        best=scored[0][1] if scored else None,
        candidates=candidates,
        failures=failures,
    )
