"""
Data pack loading: YAML catalogs and world config, schema validation.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from starcore.loader import (
    DEFAULT_DATA_ROOT,
    DataLoadError,
    load_all_data,
    load_catalog,
    load_elements,
    load_galaxy_config,
    load_planet_types,
    load_spectral_types,
)

SCHEMA_DIR = DEFAULT_DATA_ROOT / "schemas"


def test_load_default_catalog():
    catalog = load_catalog(DEFAULT_DATA_ROOT)

    assert list(catalog.spectral_types) == ['O', 'B', 'A', 'F', 'G', 'K', 'M']
    assert set(catalog.planet_types) == {'Rock', 'Molten', 'Oceanic', 'Lunar', 'GasGiant', 'IceGiant', 'Frozen'}
    assert 'IRON' in catalog.elements
    assert catalog.elements['HYDROGEN'].is_gas
    assert catalog.exceptional_resources

    temps = [band.min_temp for band in catalog.planet_bands]
    assert temps == sorted(temps, reverse=True)
    print(f"[OK] Catalog: {len(catalog.spectral_types)} spectral types, "
          f"{len(catalog.planet_types)} planet types, {len(catalog.elements)} elements")


def test_spectral_weights_favour_cool_stars():
    catalog = load_catalog(DEFAULT_DATA_ROOT)
    assert catalog.spectral_types['M'].weight > catalog.spectral_types['O'].weight
    assert catalog.spectral_types['O'].temperature > catalog.spectral_types['M'].temperature


def test_load_galaxy_config():
    config = load_galaxy_config(DEFAULT_DATA_ROOT / "world" / "galaxy.yaml", SCHEMA_DIR)
    assert config.seed == "haunting beauty"
    assert config.star_density == 0.008
    assert config.max_planets == 9
    assert config.description


def test_load_all_data():
    data = load_all_data(DEFAULT_DATA_ROOT)
    assert set(data) == {'config', 'catalog'}
    assert data['catalog'].planet_bands


def test_missing_file(tmp_path):
    with pytest.raises(DataLoadError, match="File not found"):
        load_spectral_types(tmp_path / "nope.yaml", SCHEMA_DIR)


def test_yaml_parse_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("spectral_types: [unclosed\n")
    with pytest.raises(DataLoadError, match="YAML parse error"):
        load_spectral_types(path, SCHEMA_DIR)


def test_schema_rejects_unknown_spectral_key(tmp_path):
    path = tmp_path / "spectral_types.yaml"
    path.write_text(
        "spectral_types:\n"
        "  - {key: Z, weight: 1, temperature: 5000, mass: 1, radius: 1,"
        " brightness: 1, colour: '#FFFFFF', glyph: '*'}\n"
    )
    with pytest.raises(DataLoadError, match="Validation error"):
        load_spectral_types(path, SCHEMA_DIR)


def test_band_with_unknown_planet_type(tmp_path):
    path = tmp_path / "planet_types.yaml"
    path.write_text(
        "planet_types:\n"
        "  - {key: Rock, base_temp: 300, density_range: [3.0, 6.0],"
        " mineral_chance: 0.8, rich_chance: 0.2, poor_chance: 0.2}\n"
        "bands:\n"
        "  - {min_temp: -1, weights: {Rock: 1, Nope: 1}}\n"
    )
    with pytest.raises(DataLoadError, match="unknown planet types"):
        load_planet_types(path, SCHEMA_DIR)


def test_galaxy_config_rejects_unknown_parameter(tmp_path):
    path = tmp_path / "galaxy.yaml"
    path.write_text("seed: test\nparameters:\n  warp_factor: 9\n")
    with pytest.raises(DataLoadError, match="Validation error"):
        load_galaxy_config(path, SCHEMA_DIR)


def test_galaxy_config_defaults(tmp_path):
    path = tmp_path / "galaxy.yaml"
    path.write_text("seed: 1234\n")
    config = load_galaxy_config(path, SCHEMA_DIR)
    assert config.seed == "1234"
    assert config.star_check_hash_scale == 10000


def test_validation_skipped_without_schema(tmp_path):
    path = tmp_path / "galaxy.yaml"
    path.write_text("seed: loose\n")
    config = load_galaxy_config(path, tmp_path / "no-schemas")
    assert config.seed == "loose"


def test_empty_file_is_rejected(tmp_path):
    path = tmp_path / "elements.yaml"
    path.write_text("")
    with pytest.raises(DataLoadError, match="Expected a mapping"):
        load_elements(path, SCHEMA_DIR)
