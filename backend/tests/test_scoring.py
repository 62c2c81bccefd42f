"""Utility and total score formulas."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ecowardrobe.reco.scoring import is_high_score, rank_items, round_half_up, total_score, utility_score
from ecowardrobe.schemas import AnalysisResult


@pytest.mark.parametrize(
    ("times_worn", "expected"),
    [(0, 0), (1, 10), (7, 70), (10, 100), (15, 100)],
)
def test_utility_score_is_ten_points_per_wear_capped(make_item, times_worn: int, expected: int) -> None:
    assert utility_score(make_item(times_worn=times_worn)) == expected


@pytest.mark.parametrize(
    ("material_score", "times_worn", "expected"),
    [
        (80, 5, 62),
        (100, 0, 40),
        (0, 20, 60),
        (50, 5, 50),
        (62, 3, 43),  # 24.8 + 18
        (77, 0, 31),  # 30.8
        (100, 10, 100),
        (0, 0, 0),
    ],
)
def test_total_score_blends_material_and_utility(make_item, material_score: int, times_worn: int, expected: int) -> None:
    item = make_item(material_score=material_score, times_worn=times_worn)

    assert total_score(item) == expected


def test_scores_are_referentially_transparent(make_item) -> None:
    item = make_item(material_score=33, times_worn=4)

    assert total_score(item) == total_score(item) == total_score(make_item(material_score=33, times_worn=4))


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0.5, 1), (1.5, 2), (2.5, 3), (62.5, 63), (1.49, 1), (Decimal("72.5"), 73), (-2.5, -3), (4, 4)],
)
def test_round_half_up_rounds_ties_away_from_zero(value, expected: int) -> None:
    # Python's built-in round() would give 2 for 2.5 and 62 for 62.5
    assert round_half_up(value) == expected


def test_high_score_threshold_is_strictly_above_seventy(make_item) -> None:
    assert not is_high_score(make_item(material_score=100, times_worn=5))  # 70
    assert is_high_score(make_item(material_score=100, times_worn=6))  # 76


def test_rank_items_orders_by_total_score_and_keeps_ties_stable(make_item) -> None:
    low = make_item("low", material_score=10)
    tie_a = make_item("tie-a", material_score=50, times_worn=5)
    tie_b = make_item("tie-b", material_score=50, times_worn=5)
    high = make_item("high", material_score=90, times_worn=9)

    ranked = rank_items([low, tie_a, high, tie_b])

    assert [item.id for item in ranked] == ["high", "tie-a", "tie-b", "low"]


def test_fractional_material_score_from_recognition_rounds_half_up() -> None:
    analysis = AnalysisResult(
        name="Tee",
        category="tops",
        color="White",
        material="Hemp",
        texture="soft",
        vibe="calm",
        material_score=72.5,
    )

    assert analysis.material_score == 73
    assert analysis.category.value == "Tops"
