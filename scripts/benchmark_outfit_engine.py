#!/usr/bin/env python3
"""
Benchmark script for the outfit engine.

Builds a synthetic catalog, then measures generate / regenerate / swap
latency across weather contexts and reports p50/p95/mean.

Usage:
    PYTHONPATH=src python scripts/benchmark_outfit_engine.py
    PYTHONPATH=src python scripts/benchmark_outfit_engine.py --rounds 50 --items-per-slot 40
"""

import argparse
import os
import random
import statistics
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "src"))

COLORS = ["navy", "white", "grey", "black", "brown", "olive", "khaki", "burgundy", "blue", "cream"]
MATERIALS = ["cotton", "linen", "wool", "denim", "leather", "flannel", "nylon", None]
SEASONS = ["spring", "summer", "fall", "winter"]
CAPSULES = ["workweek", "weekend", "travel", "evening"]
SUBCATEGORIES = {
    "shirt": ["oxford", "tee", "polo", "sweater"],
    "pants": ["chinos", "jeans", "shorts", "trousers"],
    "shoes": ["loafers", "sneakers", "boots", "sandals"],
    "jacket": ["blazer", "parka", "coat", "overshirt"],
    "undershirt": ["undershirt"],
    "belt": ["belt"],
    "watch": ["watch"],
}


def build_catalog(items_per_slot: int, seed: int = 7):
    """Synthetic catalog with every slot filled and mixed metadata."""
    from wardrobe.models import WardrobeItem

    rng = random.Random(seed)
    catalog = []
    for slot, subs in SUBCATEGORIES.items():
        for i in range(items_per_slot):
            color = rng.choice(COLORS)
            sub = rng.choice(subs)
            catalog.append(WardrobeItem(
                id=f"{slot}-{i:03d}",
                slot=slot,
                name=f"{color.title()} {sub.title()}",
                subcategory=sub,
                color=color if rng.random() < 0.7 else None,
                material=rng.choice(MATERIALS),
                formality_score=rng.randint(1, 10) if rng.random() < 0.9 else None,
                capsule_tags=rng.sample(CAPSULES, k=rng.randint(0, 2)),
                season=rng.sample(SEASONS, k=rng.randint(0, 2)),
            ))
    return catalog


def percentile(data, p):
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def timed(fn, *args, **kwargs):
    t0 = time.perf_counter()
    result = fn(*args, **kwargs)
    return time.perf_counter() - t0, result


def main():
    parser = argparse.ArgumentParser(description="Benchmark outfit engine")
    parser.add_argument("--rounds", type=int, default=20, help="Rounds per context (default: 20)")
    parser.add_argument("--items-per-slot", type=int, default=15, help="Catalog items per slot (default: 15)")
    parser.add_argument("--exploration", type=float, default=0.8, help="Exploration level (default: 0.8)")
    args = parser.parse_args()

    from services.outfit_assembler import get_outfit_assembler
    from services.swap_engine import get_swap_engine
    from wardrobe.models import Slot
    from wardrobe.weather import describe_weather_context, normalize_weather_context

    catalog = build_catalog(args.items_per_slot)
    contexts = {
        "cold": normalize_weather_context(35, 40, 28, 0.1),
        "mild": normalize_weather_context(64, 70, 55, 0.5),
        "hot": normalize_weather_context(95, 99, 82, 0.0),
    }

    # ── Environment info ──
    print("=" * 65)
    print("  OUTFIT ENGINE BENCHMARK")
    print("=" * 65)
    print(f"  Catalog:     {len(catalog)} items ({args.items_per_slot} per slot)")
    print(f"  Rounds:      {args.rounds} per context")
    print(f"  Exploration: {args.exploration}")
    print("=" * 65)

    assembler = get_outfit_assembler()
    swapper = get_swap_engine()

    times = {"generate": [], "regenerate": [], "swap": []}

    for name, ctx in contexts.items():
        print(f"\n{'─' * 65}")
        print(f"  {name.upper()}: {describe_weather_context(ctx)}")
        print(f"{'─' * 65}")

        totals = []
        for r in range(args.rounds):
            seed = f"bench:{name}:{r}"
            elapsed, outfit = timed(
                assembler.generate_outfit, catalog, ctx,
                variation_seed=seed, exploration_level=args.exploration,
            )
            times["generate"].append(elapsed)
            totals.append(outfit.scores.overall.total)

            elapsed, _ = timed(
                assembler.regenerate_outfit, catalog, ctx,
                previous_outfit=outfit, variation_seed=f"{seed}:regen",
                exploration_level=args.exploration,
            )
            times["regenerate"].append(elapsed)

            if outfit.swappable.get(Slot.SHIRT):
                elapsed, _ = timed(swapper.swap_item, outfit, Slot.SHIRT, catalog, ctx)
                times["swap"].append(elapsed)

        print(
            f"  mean total {statistics.mean(totals):.3f} "
            f"| min {min(totals):.3f} | max {max(totals):.3f}"
        )

    # ── Summary ──
    print(f"\n{'=' * 65}")
    print("  RESULTS SUMMARY")
    print(f"{'=' * 65}")
    print(f"  {'Operation':<12} {'Mean':>8} {'P50':>8} {'P95':>8} {'Max':>8}  N")
    print(f"  {'─' * 60}")
    for op, samples in times.items():
        if not samples:
            continue
        print(
            f"  {op:<12} "
            f"{statistics.mean(samples) * 1000:6.2f}ms "
            f"{percentile(samples, 50) * 1000:6.2f}ms "
            f"{percentile(samples, 95) * 1000:6.2f}ms "
            f"{max(samples) * 1000:6.2f}ms "
            f" {len(samples)}"
        )


if __name__ == "__main__":
    main()
