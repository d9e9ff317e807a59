#!/usr/bin/env python3
"""Standalone layout benchmark / invariant checker.

Generates randomly placed images and random headline/body copy, runs the
LayoutEngine, and checks every produced layout for overlap with the image,
containment inside its zone and non-negative line spacing. Pure Python, no
renderer needed.

Usage:
    python layout_bench.py              # default 50 cases, random seed 42
    python layout_bench.py -n 200       # 200 cases
    python layout_bench.py --seed 7     # reproducible with a different seed
    python layout_bench.py --verbose    # print per-case details
    python layout_bench.py --preview out.png   # PNG of the first layout
"""

import argparse
import logging
import random
import statistics
import sys

from engine import LayoutEngine
from models import CanvasConfig, ImageBounds

# ---------------------------------------------------------------------------
# Case generation
# ---------------------------------------------------------------------------

# Typical image footprints on a 1080x1440 canvas (width, height)
IMAGE_POOLS = [
    # Full-bleed bands
    (1080, 440), (1080, 600), (1080, 720),
    # Centred photos
    (600, 600), (700, 500), (800, 800), (500, 700),
    # Side columns
    (480, 1440), (540, 1000), (400, 900),
    # Small insets
    (300, 300), (250, 400),
]

WORDS = (
    "sleep protein recovery metabolic insulin training zone fasting glucose "
    "strength mobility cortisol hydration deficit progressive overload habits "
    "consistency plateau maintenance electrolytes fiber micronutrients"
).split()


def generate_case(rng: random.Random, config: CanvasConfig):
    """Return ``(ImageBounds, headline, body)`` for one random case."""
    w, h = rng.choice(IMAGE_POOLS)
    w = int(w * rng.uniform(0.85, 1.0))
    h = int(h * rng.uniform(0.85, 1.0))
    x = rng.randint(-w // 4, config.width - (3 * w) // 4)
    y = rng.randint(-h // 4, config.height - (3 * h) // 4)
    headline = " ".join(rng.choice(WORDS) for _ in range(rng.randint(2, 8)))
    body = " ".join(rng.choice(WORDS) for _ in range(rng.randint(0, 40)))
    return ImageBounds(x=x, y=y, width=w, height=h), headline.capitalize(), body


# ---------------------------------------------------------------------------
# Invariant checks
# ---------------------------------------------------------------------------

def line_box(line):
    """``(left, top, right, bottom)`` of a line's text element."""
    x, y = line.position.x, line.position.y
    if line.alignment == "left":
        left = x
    elif line.alignment == "right":
        left = x - line.max_width
    else:
        left = x - line.max_width / 2
    return (left, y, left + line.max_width, y + line.font_size * line.line_height)


def check_layout(outcome, config: CanvasConfig) -> list[str]:
    """Return human-readable invariant violations for one outcome."""
    problems = []
    layout, zone = outcome.layout, outcome.zone
    img = layout.image

    # Image plus clearance, clamped to the canvas
    keep_out = (
        max(0, img.x) - config.clearance,
        max(0, img.y) - config.clearance,
        min(config.width, img.right) + config.clearance,
        min(config.height, img.bottom) + config.clearance,
    )

    prev_bottom = None
    for i, line in enumerate(layout.text_lines):
        left, top, right, bottom = line_box(line)
        if (left < keep_out[2] and right > keep_out[0] and
                top < keep_out[3] and bottom > keep_out[1]):
            problems.append(f"line {i + 1} overlaps image clearance")
        if (left < zone.x or right > zone.x + zone.width or
                top < zone.y or bottom > zone.y + zone.height + 0.5):
            problems.append(f"line {i + 1} escapes zone {zone.id}")
        if prev_bottom is not None and top < prev_bottom - 1:
            problems.append(f"line {i + 1} overlaps previous line")
        prev_bottom = bottom
    return problems


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def run_bench(n_cases: int, seed: int, verbose: bool, preview: str | None = None) -> bool:
    rng = random.Random(seed)
    config = CanvasConfig()
    engine = LayoutEngine(config)

    placed = no_room = unfit = 0
    violations: list[tuple[int, list[str]]] = []
    fonts: list[float] = []
    zone_counts: dict[str, int] = {}
    first_layout = None

    for i in range(n_cases):
        image, headline, body = generate_case(rng, config)
        outcome = engine.layout(image, headline, body)

        if not outcome.ok:
            if outcome.reasons == ["no safe zones around image"]:
                no_room += 1
            else:
                unfit += 1
            if verbose:
                print(f"  [{i:>3}] {image}  -> no layout: {outcome.reasons}")
            continue

        placed += 1
        zone_counts[outcome.zone.id] = zone_counts.get(outcome.zone.id, 0) + 1
        fonts.extend(line.font_size for line in outcome.layout.text_lines)
        if first_layout is None:
            first_layout = (outcome.layout, engine.safe_zones(image))

        problems = check_layout(outcome, config)
        if problems:
            violations.append((i, problems))
        if verbose:
            print(f"  [{i:>3}] {image}  -> {outcome.zone.id} "
                  f"lines={len(outcome.layout.text_lines)} "
                  f"{'FAIL ' + '; '.join(problems) if problems else 'ok'}")

    print("=" * 68)
    print("LAYOUT BENCHMARK REPORT")
    print("=" * 68)
    print(f"\nCases: {n_cases}   |   Placed: {placed}   |   "
          f"No room: {no_room}   |   Unfit: {unfit}")
    if fonts:
        print(f"\n--- Font sizes ---")
        print(f"  Mean: {statistics.mean(fonts):>6.1f} px   "
              f"Median: {statistics.median(fonts):>6.1f} px   "
              f"Min: {min(fonts):>4} px")
    if zone_counts:
        print(f"\n--- Zones chosen ---")
        for zone_id, count in sorted(zone_counts.items()):
            print(f"  {zone_id:<7} {count:>4}")

    print(f"\n--- Invariants ---")
    if violations:
        for i, problems in violations:
            print(f"  case {i}: {'; '.join(problems)}")
    print(f"  All layouts clear of image and inside zone: {'PASS' if not violations else 'FAIL'}")
    print("\n" + "=" * 68)

    if preview and first_layout is not None:
        from preview import save_preview
        layout, zones = first_layout
        save_preview(layout, preview, config, zones)
        print(f"Preview written to {preview}")

    return not violations


def main():
    parser = argparse.ArgumentParser(description="Layout engine benchmark")
    parser.add_argument("-n", "--num-cases", type=int, default=50,
                        help="Number of random cases to generate (default 50)")
    parser.add_argument("--seed", type=int, default=42,
                        help="Random seed for reproducibility (default 42)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print per-case details")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--preview", default=None,
                        help="Write a PNG preview of the first placed layout")
    args = parser.parse_args()

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    passed = run_bench(args.num_cases, args.seed, args.verbose, args.preview)
    sys.exit(0 if passed else 1)


if __name__ == "__main__":
    main()
