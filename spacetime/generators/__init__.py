"""
Generators - randomized unlock systems (discoveries, schematics, patents).
"""

from .discovery_generator import roll_for_discovery, available_discoveries, discovery_chance
from .schematic_generator import roll_for_schematic, version_schematics, generate_schematic
from .patent_generator import roll_for_patent

__all__ = [
    "roll_for_discovery",
    "available_discoveries",
    "discovery_chance",
    "roll_for_schematic",
    "version_schematics",
    "generate_schematic",
    "roll_for_patent",
]
