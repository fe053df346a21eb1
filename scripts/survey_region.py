"""
Survey a rectangle of hyperspace.

Lists every star cell in the region with a preview of its system: name,
spectral type, planets and starbase. Nothing is entered; the previews are
the same systems a player would find on arrival.

Usage:
    python scripts/survey_region.py --seed "haunting beauty" --x -10 --y -10 --width 20 --height 20
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from starcore.galaxy import Galaxy
from starcore.loader import DEFAULT_DATA_ROOT, DataLoadError
from starcore.state_manager import GameStateManager


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List the star systems in a hyperspace region.")
    parser.add_argument("--seed", default=None, help="Master seed (defaults to the data pack's)")
    parser.add_argument("--x", type=int, default=0, help="Left edge of the region")
    parser.add_argument("--y", type=int, default=0, help="Top edge of the region")
    parser.add_argument("--width", type=int, default=20)
    parser.add_argument("--height", type=int, default=20)
    parser.add_argument("--data-root", type=Path, default=DEFAULT_DATA_ROOT,
                        help="Directory holding catalog/, world/ and schemas/")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        print("[WARN] Region is empty")
        return 1

    try:
        galaxy = Galaxy.from_data_pack(args.data_root, seed=args.seed)
    except DataLoadError as e:
        print(f"[WARN] Could not load data pack: {e}")
        return 1
    manager = GameStateManager(galaxy)

    stars = galaxy.stars_in_region(args.x, args.y, args.width, args.height)
    print("=" * 80)
    print(f"Seed {galaxy.seed!r}: region ({args.x}, {args.y}) {args.width}x{args.height}, "
          f"{len(stars)} stars")
    print("=" * 80)

    failures = 0
    for x, y in stars:
        system = manager.peek_at_system(x, y)
        if system is None:
            print(f"[WARN] ({x:5d}, {y:5d}) could not be resolved")
            failures += 1
            continue
        starbase = " +starbase" if system.starbase else ""
        print(f"[OK] ({x:5d}, {y:5d}) {system.name:<14} {system.star_type}  "
              f"{len(system.planets)} planets{starbase}")
        for planet in system.planets:
            print(f"       {planet.name:<18} {planet.type:<10} {planet.surface_temp:7.0f} K  "
                  f"{planet.mineral_richness}")

    print("=" * 80)
    return 1 if failures else 0


if __name__ == '__main__':
    sys.exit(main())
