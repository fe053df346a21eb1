"""
Galaxy context: presence queries, region surveys, nebula background.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.data_types import GalaxyConfig
from starcore.galaxy import Galaxy
from starcore.loader import DEFAULT_DATA_ROOT


def test_presence_repeatable():
    galaxy = Galaxy("abc")
    first = galaxy.is_star(10, 10)
    assert all(galaxy.is_star(10, 10) == first for _ in range(1000))
    assert Galaxy("abc").is_star(10, 10) == first


def test_stars_in_region_matches_is_star():
    galaxy = Galaxy("survey")
    stars = set(galaxy.stars_in_region(-40, -30, 80, 60))
    for x in range(-40, 40):
        for y in range(-30, 30):
            assert ((x, y) in stars) == galaxy.is_star(x, y)


def test_generate_system_repeatable():
    galaxy = Galaxy("repeat")
    x, y = galaxy.stars_in_region(0, 0, 100, 100)[0]
    assert galaxy.generate_system(x, y).signature() == galaxy.generate_system(x, y).signature()
    assert Galaxy("repeat").generate_system(x, y).signature() == galaxy.generate_system(x, y).signature()


def test_seed_overrides_config_without_mutating_it():
    config = GalaxyConfig(seed="from-config")
    galaxy = Galaxy("from-argument", config=config)
    assert galaxy.seed == "from-argument"
    assert config.seed == "from-config"
    assert Galaxy(config=config).seed == "from-config"


def test_nebula_intensity():
    galaxy = Galaxy("nebula")
    values = [galaxy.nebula_intensity(x, y) for x in range(0, 200, 7) for y in range(0, 200, 7)]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert values == [Galaxy("nebula").nebula_intensity(x, y) for x in range(0, 200, 7) for y in range(0, 200, 7)]


def test_reseed_clears_nebula_cache():
    galaxy = Galaxy("first")
    galaxy.nebula_intensity(13, 27)
    assert galaxy.nebula.memory

    galaxy.reseed("second")
    assert galaxy.seed == "second"
    assert galaxy.nebula.memory == {}
    assert galaxy.prng.seed_int == Galaxy("second").prng.seed_int


def test_from_data_pack():
    galaxy = Galaxy.from_data_pack(DEFAULT_DATA_ROOT)
    assert galaxy.seed == "haunting beauty"
    assert galaxy.config.map_base_size == 128
    assert Galaxy.from_data_pack(DEFAULT_DATA_ROOT, seed="override").seed == "override"
