"""Shared fixtures: fixed clock, deterministic ids, in-memory persistence, fake stylist."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from ecowardrobe.core.exceptions import CollaboratorFailure, PersistenceFailure
from ecowardrobe.schemas import AnalysisResult, Category, Item, Recommendation
from ecowardrobe.storage import InMemoryKeyValueStore, WardrobeStore
from ecowardrobe.utils.profiler import Profiler

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


class SequentialIds:
    """Deterministic id generator: id-1, id-2, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self._counter = itertools.count(1)
        self._prefix = prefix

    def __call__(self) -> str:
        return f"{self._prefix}-{next(self._counter)}"


class FailingKeyValueStore(InMemoryKeyValueStore):
    """Reads work; writes fail while ``failing`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = True

    def save(self, key: str, blob: str) -> None:
        if self.failing:
            raise PersistenceFailure("disk full", key=key)
        super().save(key, blob)


class FakeStylist:
    """Stands in for GeminiStylist; records calls and returns canned answers."""

    def __init__(self) -> None:
        self.analysis = AnalysisResult(
            name="Waffle Knit Cardigan",
            category=Category.OUTERWEAR,
            color="Oat",
            material="Organic Cotton",
            texture="heavy-knit",
            vibe="earthy-bohemian",
            tags=["layering", "autumn"],
            material_score=82,
            sustainability_tip="Wash cold and dry flat.",
        )
        self.recommendations: List[Recommendation] = []
        self.failure: Optional[CollaboratorFailure] = None
        self.calls: List[str] = []
        self.profiler = Profiler()

    def _maybe_fail(self) -> None:
        if self.failure is not None:
            raise self.failure

    async def identify_clothing_item(self, image_data: str) -> AnalysisResult:
        self.calls.append("identify")
        with self.profiler.measure("identify"):
            self._maybe_fail()
        return self.analysis

    async def personalized_recommendations(self, mood, inventory) -> List[Recommendation]:
        self.calls.append("mood")
        with self.profiler.measure("mood"):
            self._maybe_fail()
        return list(self.recommendations)

    async def try_on_recommendations(self, analysis, inventory) -> List[Recommendation]:
        self.calls.append("try_on")
        with self.profiler.measure("try_on"):
            self._maybe_fail()
        return list(self.recommendations)


@pytest.fixture
def make_item():
    """Factory for items with sensible defaults."""

    def _make(
        item_id: str = "item-1",
        material_score: int = 50,
        times_worn: int = 0,
        category: Category = Category.TOPS,
        **overrides,
    ) -> Item:
        fields = dict(
            id=item_id,
            name=f"Piece {item_id}",
            category=category,
            color="Black",
            material="Linen",
            texture="sheer-flowing",
            vibe="minimalist-industrial",
            image_url="data:image/jpeg;base64,AAAA",
            material_score=material_score,
            times_worn=times_worn,
            tags=["basics"],
            added_at=FIXED_NOW,
        )
        fields.update(overrides)
        return Item(**fields)

    return _make


@pytest.fixture
def persistence() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def store(persistence) -> WardrobeStore:
    wardrobe = WardrobeStore(persistence, id_generator=SequentialIds(), clock=lambda: FIXED_NOW)
    wardrobe.load()
    return wardrobe


@pytest.fixture
def stylist() -> FakeStylist:
    return FakeStylist()


@pytest.fixture
def client(store, stylist):
    from ecowardrobe.dependencies import get_store, get_stylist
    from ecowardrobe.main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_stylist] = lambda: stylist
    yield TestClient(app)
    app.dependency_overrides.clear()
