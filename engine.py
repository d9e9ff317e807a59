"""LayoutEngine: the end-to-end pipeline from image bounds and copy to pixels.

    zones -> (advisor | deterministic fitter / ranker) -> validate
          -> emphasis -> translate

An optional advisor may propose an intent; whatever it returns must pass the
same validation as the deterministic path, and any failure falls back to the
ranker, which needs nothing external and always terminates.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout

from models import (
    CanvasConfig, FitFailure, FitSuccess, FitterSettings, ImageBounds,
    LayoutIntent, LayoutOutcome, SafeZone,
)
from emphasis import annotate_intent
from fitter import TextFitter
from intent import translate_intent, validate_intent
from ranker import rank_zones
from zones import compute_safe_zones, select_best_zone, zone_metrics

logger = logging.getLogger(__name__)


# === Intent strategies ===

class IntentStrategy:
    """Produces a validated intent for one zone, or a tagged failure."""

    name = "strategy"

    def produce_intent(self, headline: str, body: str, zone: SafeZone) -> FitSuccess | FitFailure:
        raise NotImplementedError


class DeterministicStrategy(IntentStrategy):
    """Local shrink-and-wrap fitting; always terminates."""

    name = "deterministic"

    def __init__(self, config: CanvasConfig | None = None, settings: FitterSettings | None = None):
        self.fitter = TextFitter(config, settings)

    def produce_intent(self, headline, body, zone):
        return self.fitter.fit(headline, body, zone)


class AdvisorStrategy(IntentStrategy):
    """Wraps an external ``advisor(headline, body, zone) -> LayoutIntent`` callable.

    Each attempt is bounded by *timeout* seconds. A call that overruns is
    abandoned, not cancelled: the worker thread keeps running in the background
    and its eventual result is ignored. Exceptions, timeouts and candidates that
    fail validation all become a :class:`FitFailure`.
    """

    name = "advisor"

    def __init__(self, advisor, config: CanvasConfig | None = None,
                 timeout: float = 25.0, max_attempts: int = 1):
        self.advisor = advisor
        self.config = config or CanvasConfig()
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)

    def produce_intent(self, headline, body, zone):
        reason = "advisor produced no intent"
        for attempt in range(1, self.max_attempts + 1):
            try:
                candidate = self._call(headline, body, zone)
                reason = _rejection(candidate, zone, self.config, "advisor")
                if reason is None:
                    validation = validate_intent(candidate, zone, self.config)
                    return FitSuccess(intent=candidate, validation=validation, iteration=attempt - 1)
            except FutureTimeout:
                reason = f"advisor timed out after {self.timeout}s"
            except Exception as e:
                reason = f"advisor failed: {e}"
            logger.warning("Advisor attempt %d/%d for zone %s: %s",
                           attempt, self.max_attempts, zone.id, reason)
        return FitFailure(zone_id=zone.id, reason=reason)

    def _call(self, headline, body, zone):
        executor = ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(self.advisor, headline, body, zone)
            return future.result(timeout=self.timeout)
        finally:
            # Returns immediately; an overrunning advisor thread is left to finish
            executor.shutdown(wait=False, cancel_futures=True)


def _rejection(candidate, zone: SafeZone, config: CanvasConfig, source: str) -> str | None:
    """Why *candidate* cannot be used for *zone*, or None if it validates."""
    if not isinstance(candidate, LayoutIntent):
        return f"{source} returned {type(candidate).__name__}, not a LayoutIntent"
    validation = validate_intent(candidate, zone, config)
    if not validation.ok:
        return f"{source} intent failed validation: " + " | ".join(validation.reasons)
    return None


# === Engine ===

class LayoutEngine:
    """Places headline/body text around one image without overlap.

    Holds the canvas configuration and fitter settings; every method is a
    pure function of its arguments and that configuration.
    """

    def __init__(self, config: CanvasConfig | None = None,
                 fitter_settings: FitterSettings | None = None,
                 advisor_timeout: float = 25.0, advisor_attempts: int = 1):
        self.config = config or CanvasConfig()
        self.fitter_settings = fitter_settings or FitterSettings()
        self.advisor_timeout = advisor_timeout
        self.advisor_attempts = advisor_attempts

    # ------------------------------------------------------------------ #
    #  Building blocks                                                    #
    # ------------------------------------------------------------------ #

    def safe_zones(self, image: ImageBounds) -> list[SafeZone]:
        return compute_safe_zones(image, self.config)

    def best_zone(self, zones: list[SafeZone]) -> SafeZone | None:
        return select_best_zone(zones, self.config)

    def metrics(self, zone: SafeZone):
        return zone_metrics(zone, self.config)

    def validate(self, intent: LayoutIntent, zone: SafeZone):
        return validate_intent(intent, zone, self.config)

    def translate(self, intent: LayoutIntent, zone: SafeZone, image: ImageBounds):
        return translate_intent(intent, zone, image, self.config)

    def fit(self, headline: str, body: str, zone: SafeZone):
        return TextFitter(self.config, self.fitter_settings).fit(headline, body, zone)

    def rank(self, headline: str, body: str, zones: list[SafeZone]):
        return rank_zones(headline, body, zones, self.config, self.fitter_settings)

    # ------------------------------------------------------------------ #
    #  Pipeline                                                           #
    # ------------------------------------------------------------------ #

    def layout(self, image: ImageBounds, headline: str, body: str,
               advisor=None, annotator=None) -> LayoutOutcome:
        """Compute a full pixel layout for *headline*/*body* around *image*.

        *advisor* may be an :class:`IntentStrategy` or a plain callable (wrapped
        in :class:`AdvisorStrategy`). *annotator* adds emphasis styles.
        """
        zones = self.safe_zones(image)
        if not zones:
            logger.warning("No safe zones around image %s", image)
            return LayoutOutcome(reasons=["no safe zones around image"])

        reasons: list[str] = []
        fit = zone = source = None

        if advisor is not None:
            strategy = advisor if isinstance(advisor, IntentStrategy) else AdvisorStrategy(
                advisor, self.config, self.advisor_timeout, self.advisor_attempts)
            target = self.best_zone(zones)
            try:
                result = strategy.produce_intent(headline, body, target)
            except Exception as e:
                result = FitFailure(zone_id=target.id, reason=f"{strategy.name} failed: {e}")
            if isinstance(result, FitSuccess):
                # Strategy output gets the same validation as the deterministic path
                rejection = _rejection(result.intent, target, self.config, strategy.name)
                if rejection is None:
                    fit, zone, source = result, target, strategy.name
                else:
                    result = FitFailure(zone_id=target.id, reason=rejection)
            elif not isinstance(result, FitFailure):
                result = FitFailure(zone_id=target.id,
                                    reason=f"{strategy.name} returned {type(result).__name__}")
            if fit is None:
                reasons.append(f"{result.zone_id}: {result.reason}")
                logger.warning("Advisor failed (%s); falling back to deterministic fit", result.reason)

        if fit is None:
            ranking = self.rank(headline, body, zones)
            if ranking.best is None:
                reasons.extend(f"{f.zone_id}: {f.reason}" for f in ranking.failures)
                return LayoutOutcome(reasons=reasons)
            fit, source = ranking.best, DeterministicStrategy.name
            zone = next(z for z in zones if z.id == fit.intent.selected_zone)

        intent = annotate_intent(fit.intent, annotator)
        layout = self.translate(intent, zone, image)
        logger.debug("Layout from %s in zone %s: %d lines", source, zone.id, len(layout.text_lines))
        return LayoutOutcome(layout=layout, zone=zone, source=source, reasons=reasons)
