"""
starcore - deterministic procedural-generation core for a space exploration sim.

Every star system, planet and surface is a pure function of the galaxy seed
and integer coordinates; nothing is persisted.
"""

__version__ = "0.1.0"
