"""
Generation performance check.

Times system synthesis and planet surface synthesis over a fixed set of
star cells and reports median/p90. System synthesis runs on every enter
and peek; surface synthesis on every landing.
"""

import gc
import sys
import time
from pathlib import Path
from typing import Callable

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from starcore.galaxy import Galaxy

SYSTEM_TARGET_MS = 50.0
# Surfaces are built once per landing, not every frame; a 129x129 map runs
# to a few hundred ms in pure Python
SURFACE_TARGET_MS = 500.0


def measure(fn: Callable[[], None], runs: int) -> dict:
    """Run fn `runs` times with GC disabled; return timing stats in ms."""
    fn()  # Warmup

    gc.collect()
    gc.disable()
    times_ns = []
    try:
        for _ in range(runs):
            start = time.perf_counter_ns()
            fn()
            times_ns.append(time.perf_counter_ns() - start)
    finally:
        gc.enable()

    times_ms = np.array(times_ns) / 1_000_000
    return {
        'runs': runs,
        'p50_ms': float(np.percentile(times_ms, 50)),
        'p90_ms': float(np.percentile(times_ms, 90)),
        'min_ms': float(np.min(times_ms)),
        'max_ms': float(np.max(times_ms)),
    }


def report(label: str, result: dict, target_ms: float) -> None:
    print(f"[{label}]")
    print(f"  p50: {result['p50_ms']:.3f}ms")
    print(f"  p90: {result['p90_ms']:.3f}ms")
    print(f"  min: {result['min_ms']:.3f}ms, max: {result['max_ms']:.3f}ms")
    if result['p50_ms'] >= target_ms:
        print(f"  [WARN] p50 {result['p50_ms']:.3f}ms >= {target_ms:.0f}ms target")
    else:
        headroom_pct = (target_ms - result['p50_ms']) / target_ms * 100
        print(f"  [OK] {headroom_pct:.1f}% headroom under {target_ms:.0f}ms target")
    print()


def main():
    print("=" * 80)
    print("starcore Generation Performance")
    print("=" * 80)
    print()

    galaxy = Galaxy("perf")
    stars = galaxy.stars_in_region(0, 0, 150, 150)[:20]
    print(f"Sample: {len(stars)} star cells, seed {galaxy.seed!r}")
    print()

    def build_systems():
        for x, y in stars:
            galaxy.generate_system(x, y)

    result = measure(build_systems, runs=5)
    per_system = {k: v / len(stars) if k.endswith('_ms') else v for k, v in result.items()}
    report("System synthesis (per system)", per_system, SYSTEM_TARGET_MS)

    # (x, y, planet index) of the first few solid planets
    solid = []
    for x, y in stars:
        for i, planet in enumerate(galaxy.generate_system(x, y).planets):
            if not planet.is_gaseous:
                solid.append((x, y, i))
    for x, y, i in solid[:3]:
        planet = galaxy.generate_system(x, y).planets[i]

        def build_surface(x=x, y=y, i=i):
            galaxy.generate_system(x, y).planets[i].ensure_surface_ready()

        report(f"Surface {planet.name} ({planet.type}, {planet.mineral_richness})",
               measure(build_surface, runs=3), SURFACE_TARGET_MS)

    print("=" * 80)


if __name__ == '__main__':
    main()
