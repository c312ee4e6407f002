"""
Formulas - stateless arithmetic primitives used by the simulation.
"""

from .production import (
    extraction_output,
    manufacturing_output,
    food_consumption,
    consumer_goods_consumption,
    transport_consumption,
)
from .modifiers import resolve_modifiers
from .tax import planet_tax, corp_tax

__all__ = [
    "extraction_output",
    "manufacturing_output",
    "food_consumption",
    "consumer_goods_consumption",
    "transport_consumption",
    "resolve_modifiers",
    "planet_tax",
    "corp_tax",
]
