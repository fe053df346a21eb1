"""
Central configuration constants for starcore generation.

Defines default values, thresholds, and configuration parameters
used across multiple modules. World-specific overrides are loaded from
data/world/galaxy.yaml into GalaxyConfig (see loader.py).
"""

# ============================================================================
# Core Settings
# ============================================================================

DEFAULT_SEED = "haunting beauty"

# Warm-up advances applied to every fresh PRNG stream
PRNG_WARMUP_ROUNDS = 10


# ============================================================================
# Hyperspace Generation
# ============================================================================

# Approximate fraction of hyperspace cells containing a star
STAR_DENSITY = 0.008

# Modulus applied to the presence hash before comparing against density
STAR_CHECK_HASH_SCALE = 10000

# Nebula background sampling
NEBULA_SCALE = 0.05            # World cells -> noise lattice units
NEBULA_SPARSITY = 0.4          # Fraction of background left black
NEBULA_CACHE_PRECISION = 2     # Decimal places for Perlin sample cache keys


# ============================================================================
# System Generation
# ============================================================================

MAX_PLANETS_PER_SYSTEM = 9
SYSTEM_EDGE_RADIUS_FACTOR = 1.5   # Edge radius = outermost orbit * factor
MIN_EDGE_RADIUS = 50000.0         # Floor for systems with no (or very close) bodies

STARBASE_PROBABILITY = 0.2
STARBASE_ORBIT_DISTANCE = 75000.0

# Orbit spacing (system units)
FIRST_ORBIT_RANGE = (5000.0, 20000.0)
ORBIT_FACTOR_RANGE = (1.4, 1.9)
ORBIT_FACTOR_JITTER = 0.1
ORBIT_STEP_RANGE = (1000.0, 5000.0)
MIN_ORBIT_SEPARATION = 5000.0

# Effective-temperature reference for planet type bands
REFERENCE_ORBIT_DISTANCE = 50000.0   # Distance at which a G star gives REFERENCE_TEMP_K
REFERENCE_TEMP_K = 280.0
REFERENCE_SPECTRAL_TYPE = 'G'

# Orbital motion
BASE_ORBIT_SPEED = 1.0 / 50000.0

SYSTEM_NAME_PREFIXES = [
    'Alpha', 'Beta', 'Gamma', 'Delta', 'Epsilon', 'Zeta', 'Eta', 'Theta',
    'Iota', 'Kappa', 'Lambda', 'Mu', 'Nu', 'Xi', 'Omicron', 'Pi', 'Rho',
    'Sigma', 'Tau', 'Upsilon', 'Phi', 'Chi', 'Psi', 'Omega', 'Proxima',
    'Cygnus', 'Kepler', 'Gliese', 'HD', 'Trappist', 'Luyten', 'Wolf',
    'Ross', 'Barnard',
]


# ============================================================================
# State Machine / Player Placement
# ============================================================================

SYSTEM_ENTRY_RADIUS_FRACTION = 0.85   # Player placed at edge_radius * fraction on entry
SYSTEM_EXIT_RADIUS_FRACTION = 0.8     # Must be beyond edge_radius * fraction to leave
LANDING_DISTANCE = 3500.0             # Max distance to a body for landing
LIFTOFF_CLEARANCE = LANDING_DISTANCE * 1.1


# ============================================================================
# Planet Surface
# ============================================================================

PLANET_MAP_BASE_SIZE = 128        # Target heightmap size (actual is 2^k + 1)
PLANET_SURFACE_ROUGHNESS = 0.7    # Amplitude decays by 2^-roughness per iteration
PLANET_HEIGHT_LEVELS = 256        # Distinct altitude levels
HEIGHTMAP_INITIAL_RANGE = 128.0

# Element map synthesis
ELEMENT_CLUSTER_NOISE_SCALE = 0.08
ELEMENT_RICHNESS_NOISE_SCALE = 0.15
ELEMENT_BASE_SPARSITY = 0.005      # Base chance a cell holds any element
ELEMENT_RICHNESS_INFLUENCE = 0.3   # How much richness noise raises that chance
CLUSTERING_ELEMENTS = ['GOLD', 'PLATINUM', 'URANIUM']
UNIFORM_ELEMENTS = ['IRON', 'SILICON', 'CARBON']

GASEOUS_PLANET_TYPES = ('GasGiant', 'IceGiant')
CRATERED_PLANET_TYPES = ('Lunar',)

STARBASE_INTERIOR_SIZE = 1


# ============================================================================
# Mining
# ============================================================================

MINING_RATE_FACTOR = 5   # Base units per mining action (scaled by abundance)
MINING_YIELD_JITTER = (0.6, 1.4)


# ============================================================================
# Atmosphere
# ============================================================================

ATMOSPHERE_DENSITIES = ['None', 'Thin', 'Earth-like', 'Thick']

ATMOSPHERE_GASES = [
    'Hydrogen', 'Helium', 'Nitrogen', 'Oxygen', 'Carbon Dioxide', 'Argon',
    'Water Vapor', 'Methane', 'Ammonia', 'Neon', 'Xenon', 'Carbon Monoxide',
    'Ethane', 'Chlorine', 'Fluorine', 'Sulfur Dioxide',
]


# ============================================================================
# Mineral Richness Tiers
# ============================================================================

RICHNESS_NONE = 'None'
RICHNESS_ULTRA_POOR = 'UltraPoor'
RICHNESS_POOR = 'Poor'
RICHNESS_AVERAGE = 'Average'
RICHNESS_RICH = 'Rich'
RICHNESS_ULTRA_RICH = 'UltraRich'

# Base mineral ranges per tier (inclusive)
BASE_MINERAL_RANGES = {
    RICHNESS_ULTRA_POOR: (5, 20),
    RICHNESS_POOR: (15, 40),
    RICHNESS_AVERAGE: (30, 70),
    RICHNESS_RICH: (60, 120),
    RICHNESS_ULTRA_RICH: (100, 200),
}

# Multiplier on the per-cell element chance for each tier
RICHNESS_SPARSITY_FACTORS = {
    RICHNESS_NONE: 0.0,
    RICHNESS_ULTRA_POOR: 0.5,
    RICHNESS_POOR: 0.75,
    RICHNESS_AVERAGE: 1.0,
    RICHNESS_RICH: 1.5,
    RICHNESS_ULTRA_RICH: 2.0,
}


# ============================================================================
# Planet Physics
# ============================================================================

EARTH_DENSITY = 5.51        # g/cm^3
EARTH_DIAMETER_KM = 12742.0
EARTH_ESCAPE_VELOCITY = 11200.0   # m/s
BOLTZMANN_CONSTANT = 1.380649e-23  # J/K

GRAVITY_RANGE = (0.01, 10.0)
PLANET_DIAMETER_RANGE = (2000, 20000)   # km

# Gas likely escapes if thermal velocity * factor exceeds escape velocity
ESCAPE_THRESHOLD_FACTOR = 6.0

# Bond albedo per planet type; surface temperature scales with (1 - albedo)^0.25
PLANET_ALBEDOS = {
    'Molten': 0.08,
    'Rock': 0.25,
    'Oceanic': 0.15,
    'Lunar': 0.12,
    'GasGiant': 0.35,
    'IceGiant': 0.30,
    'Frozen': 0.70,
}
DEFAULT_ALBEDO = 0.30

# Approximate molecular masses (kg) for thermal escape checks
GAS_MOLECULAR_MASS_KG = {
    'Hydrogen': 3.347e-27,
    'Helium': 6.646e-27,
    'Methane': 2.663e-26,
    'Ammonia': 2.828e-26,
    'Water Vapor': 2.991e-26,
    'Neon': 3.351e-26,
    'Carbon Monoxide': 4.651e-26,
    'Nitrogen': 4.652e-26,
    'Ethane': 4.993e-26,
    'Oxygen': 5.313e-26,
    'Fluorine': 6.310e-26,
    'Argon': 6.634e-26,
    'Carbon Dioxide': 7.308e-26,
    'Sulfur Dioxide': 1.064e-25,
    'Chlorine': 1.177e-25,
    'Xenon': 2.180e-25,
}
