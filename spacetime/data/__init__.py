"""
Static definition tables (deposits, corporations, science).

Tables are read-only module constants; nothing in the engine mutates them.
"""

from .resources import (
    DEPOSIT_DEFINITIONS,
    RICHNESS_CAPS,
    MAX_POPULATION_LEVEL,
    EXTRACTION_DOMAINS,
    DOMAIN_TO_RESOURCE,
    RESOURCE_TO_DOMAIN,
    DOMAIN_REQUIRED_INPUTS,
    matching_deposits,
)
from .corporations import PRIMARY_DOMAINS, DOMAIN_TO_CORP_TYPE, PATENT_DEFINITIONS
from .science import (
    DISCOVERY_DEFINITIONS,
    SCHEMATIC_CATEGORY_DEFINITIONS,
    SCHEMATIC_NAME_PREFIXES,
)

__all__ = [
    "DEPOSIT_DEFINITIONS",
    "RICHNESS_CAPS",
    "MAX_POPULATION_LEVEL",
    "EXTRACTION_DOMAINS",
    "DOMAIN_TO_RESOURCE",
    "RESOURCE_TO_DOMAIN",
    "DOMAIN_REQUIRED_INPUTS",
    "matching_deposits",
    "PRIMARY_DOMAINS",
    "DOMAIN_TO_CORP_TYPE",
    "PATENT_DEFINITIONS",
    "DISCOVERY_DEFINITIONS",
    "SCHEMATIC_CATEGORY_DEFINITIONS",
    "SCHEMATIC_NAME_PREFIXES",
]
