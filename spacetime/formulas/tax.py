"""
Taxation formulas (BP income).
"""

MIN_TAXABLE_POPULATION = 5


def planet_tax(population_level: int, habitability: int) -> int:
    """Planet tax; small colonies pay nothing, hostile worlds pay less."""
    if population_level < MIN_TAXABLE_POPULATION:
        return 0
    habitability_cost = max(0, 10 - habitability) * max(1, population_level // 3)
    return max(0, (population_level * population_level) // 4 - habitability_cost)


def corp_tax(corp_level: int) -> int:
    return (corp_level * corp_level) // 5
