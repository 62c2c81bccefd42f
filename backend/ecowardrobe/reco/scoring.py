"""
Item scoring: utility from wear history, total desirability blended with the material eco-score.

utility = min(100, times_worn * 10)
total   = round_half_up(material_score * 0.4 + utility * 0.6)
"""
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Union

from ecowardrobe.schemas.wardrobe import Item

POINTS_PER_WEAR = 10
MAX_SCORE = 100
MATERIAL_WEIGHT = Decimal("0.4")
UTILITY_WEIGHT = Decimal("0.6")
HIGH_SCORE_THRESHOLD = 70


def round_half_up(value: Union[int, float, Decimal]) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def utility_score(item: Item) -> int:
    """10 points per wear, capped at 100."""
    return min(MAX_SCORE, item.times_worn * POINTS_PER_WEAR)


def total_score(item: Item) -> int:
    """40% material eco-score, 60% utility, rounded half-up."""
    blended = Decimal(item.material_score) * MATERIAL_WEIGHT + Decimal(utility_score(item)) * UTILITY_WEIGHT
    return round_half_up(blended)


def is_high_score(item: Item) -> bool:
    return total_score(item) > HIGH_SCORE_THRESHOLD


def rank_items(items: Iterable[Item]) -> List[Item]:
    """Items ordered by total score, best first. Ties keep their input order."""
    return sorted(items, key=total_score, reverse=True)
