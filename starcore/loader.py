"""
YAML data loader with schema validation.

Loads the content catalog (spectral types, planet types, elements) and the
galaxy world config from YAML files and validates them against JSON
schemas. Loading happens once at startup; generation itself performs no I/O.
"""

import yaml
import json
from pathlib import Path
from typing import Dict, Optional
import jsonschema

from .data_types import (
    SpectralType, PlanetType, PlanetTypeBand, ElementInfo, Catalog, GalaxyConfig
)

DEFAULT_DATA_ROOT = Path(__file__).parent.parent / "data"


class DataLoadError(Exception):
    """Raised when data loading or validation fails"""
    pass


def load_yaml(file_path: Path) -> dict:
    """Parse one data pack file; an empty file is an error"""
    if not file_path.exists():
        raise DataLoadError(f"File not found: {file_path}")

    try:
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataLoadError(f"YAML parse error in {file_path}: {e}")

    if not isinstance(data, dict):
        raise DataLoadError(f"Expected a mapping at the top of {file_path}")
    return data


def validate_against_schema(data: dict, schema_path: Path, data_path: Path):
    """Validate a parsed file; missing schemas are skipped"""
    if not schema_path.exists():
        return

    try:
        with open(schema_path, 'r') as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON schema {schema_path}: {e}")

    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        where = '/'.join(str(p) for p in e.absolute_path) or '<root>'
        raise DataLoadError(f"Validation error in {data_path} at {where}: {e.message}")


def load_spectral_types(file_path: Path, schema_dir: Optional[Path] = None) -> Dict[str, SpectralType]:
    """Load spectral type table, preserving declaration order"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "spectral_types.schema.json", file_path)

    return {
        entry['key']: SpectralType(**entry)
        for entry in data['spectral_types']
    }


def load_planet_types(file_path: Path, schema_dir: Optional[Path] = None) -> tuple:
    """
    Load planet type table and temperature bands.

    Returns:
        (planet_types dict, bands sorted hottest first, exceptional resources)
    """
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "planet_types.schema.json", file_path)

    planet_types = {
        entry['key']: PlanetType(**entry)
        for entry in data['planet_types']
    }

    bands = [PlanetTypeBand(**b) for b in data['bands']]
    for band in bands:
        unknown = set(band.weights) - set(planet_types)
        if unknown:
            raise DataLoadError(f"Band in {file_path} references unknown planet types: {sorted(unknown)}")
    bands.sort(key=lambda b: b.min_temp, reverse=True)

    return planet_types, bands, data.get('exceptional_resources', [])


def load_elements(file_path: Path, schema_dir: Optional[Path] = None) -> Dict[str, ElementInfo]:
    """Load mineable element table"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "elements.schema.json", file_path)

    return {
        entry['key']: ElementInfo(**entry)
        for entry in data['elements']
    }


def load_galaxy_config(file_path: Path, schema_dir: Optional[Path] = None) -> GalaxyConfig:
    """Load galaxy world configuration from YAML"""
    data = load_yaml(file_path)

    if schema_dir:
        validate_against_schema(data, schema_dir / "galaxy.schema.json", file_path)

    parameters = dict(data.get('parameters', {}))
    return GalaxyConfig(
        seed=str(data.get('seed', GalaxyConfig.seed)),
        description=data.get('description'),
        **parameters
    )


def load_catalog(data_root: Path = DEFAULT_DATA_ROOT, schema_dir: Optional[Path] = None) -> Catalog:
    """Load all catalog tables from data directory"""
    data_root = Path(data_root)
    if schema_dir is None:
        schema_dir = data_root / "schemas"

    spectral_types = load_spectral_types(data_root / "catalog" / "spectral_types.yaml", schema_dir)
    planet_types, bands, exceptional = load_planet_types(data_root / "catalog" / "planet_types.yaml", schema_dir)
    elements = load_elements(data_root / "catalog" / "elements.yaml", schema_dir)

    if not spectral_types:
        raise DataLoadError(f"No spectral types defined in {data_root}")

    return Catalog(
        spectral_types=spectral_types,
        planet_types=planet_types,
        planet_bands=bands,
        elements=elements,
        exceptional_resources=exceptional,
    )


_DEFAULT_CATALOG: Optional[Catalog] = None


def default_catalog() -> Catalog:
    """Catalog from the bundled data pack, loaded on first use"""
    global _DEFAULT_CATALOG
    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = load_catalog(DEFAULT_DATA_ROOT)
    return _DEFAULT_CATALOG


def load_all_data(data_root: Path = DEFAULT_DATA_ROOT, schema_dir: Optional[Path] = None) -> dict:
    """Load all generation data from data directory

    Returns dict with keys: config, catalog
    """
    data_root = Path(data_root)
    if schema_dir is None:
        schema_dir = data_root / "schemas"

    config = load_galaxy_config(data_root / "world" / "galaxy.yaml", schema_dir)
    catalog = load_catalog(data_root, schema_dir)

    return {
        'config': config,
        'catalog': catalog,
    }
