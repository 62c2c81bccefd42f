"""Wardrobe store mutations and their invariants."""

from __future__ import annotations

from datetime import date

import pydantic
import pytest

from ecowardrobe.core.exceptions import DuplicateIdError, EmptySelectionError, PersistenceFailure
from ecowardrobe.schemas import Category, StyleMood
from ecowardrobe.storage import ITEMS_KEY, LOGS_KEY, InMemoryKeyValueStore, UnknownItem, WardrobeStore

from conftest import FIXED_NOW, FailingKeyValueStore, SequentialIds


def test_add_item_inserts_most_recent_first(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    store.add_item(make_item("b"))

    assert [item.id for item in store.items] == ["b", "a"]


def test_add_item_rejects_duplicate_id_without_changing_state(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    before = store.snapshot()

    with pytest.raises(DuplicateIdError):
        store.add_item(make_item("a", material_score=99))

    assert store.snapshot() == before


def test_catalog_item_assigns_fresh_id_and_zero_wear(store: WardrobeStore, stylist) -> None:
    item = store.catalog_item(stylist.analysis, "data:image/jpeg;base64,AAAA")

    assert item.id == "id-1"
    assert item.times_worn == 0
    assert item.last_worn_at is None
    assert item.added_at == FIXED_NOW
    assert item.material_score == 82
    assert store.get_item("id-1") == item


def test_remove_item_is_idempotent(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    store.add_item(make_item("b"))

    store.remove_item("a")
    once = store.snapshot()
    store.remove_item("a")

    assert store.snapshot() == once
    assert [item.id for item in store.items] == ["b"]


def test_remove_unknown_item_is_a_no_op(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    before = store.snapshot()

    store.remove_item("missing")

    assert store.snapshot() == before


def test_log_outfit_increments_only_present_items(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a", times_worn=2))
    store.add_item(make_item("b"))
    store.add_item(make_item("untouched"))

    log = store.log_outfit(["a", "b", "gone"], day="2026-03-13")

    assert store.get_item("a").times_worn == 3
    assert store.get_item("b").times_worn == 1
    assert store.get_item("a").last_worn_at == FIXED_NOW
    assert store.get_item("untouched").times_worn == 0
    assert store.get_item("untouched").last_worn_at is None
    assert store.logs == (log,)
    assert log.item_ids == ("a", "b", "gone")
    assert log.date == date(2026, 3, 13)


def test_log_outfit_with_empty_selection_changes_nothing(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    before = store.snapshot()

    with pytest.raises(EmptySelectionError):
        store.log_outfit([])

    assert store.snapshot() == before


def test_log_outfit_defaults_to_today_and_prepends(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))

    first = store.log_outfit(["a"])
    second = store.log_outfit(["a"], mood_name="Ethereal Utility")

    assert first.date == FIXED_NOW.date()
    assert store.logs == (second, first)
    assert second.mood_name == "Ethereal Utility"
    assert store.get_item("a").times_worn == 2


def test_repeated_id_in_one_selection_counts_once(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))

    log = store.log_outfit(["a", "a"])

    assert log.item_ids == ("a",)
    assert store.get_item("a").times_worn == 1


def test_log_outfit_with_invalid_date_changes_nothing(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    before = store.snapshot()

    with pytest.raises(pydantic.ValidationError):
        store.log_outfit(["a"], day="not-a-date")

    assert store.snapshot() == before


def test_removed_item_leaves_logs_alone_and_resolves_as_unknown(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    store.add_item(make_item("b"))
    log = store.log_outfit(["a", "b"])

    store.remove_item("a")

    assert store.logs == (log,)
    assert store.get_item("a") is None
    resolved = store.resolve_items(log.item_ids)
    assert resolved[0] == UnknownItem("a")
    assert resolved[1].id == "b"


def test_items_in_category_filters(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("shirt", category=Category.TOPS))
    store.add_item(make_item("boots", category=Category.SHOES))

    assert [item.id for item in store.items_in_category(Category.SHOES)] == ["boots"]
    assert len(store.items_in_category(None)) == 2


def test_moods_keep_creation_order_and_reject_duplicates(store: WardrobeStore) -> None:
    first = store.create_mood("Soft Armor", "Structured layers in muted tones", ["wool", "wool", "grey"])
    second = store.create_mood("Sunday Linen", "Loose and breathable", [])

    assert store.moods == (first, second)
    assert first.keywords == ("wool", "wool", "grey")
    with pytest.raises(DuplicateIdError):
        store.add_mood(StyleMood(id=first.id, name="Copy", description="Copy"))


def test_remove_mood_is_idempotent_and_leaves_items_and_logs(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    store.log_outfit(["a"])
    mood = store.create_mood("Soft Armor", "Structured layers")

    store.remove_mood(mood.id)
    once = store.snapshot()
    store.remove_mood(mood.id)

    assert store.snapshot() == once
    assert store.moods == ()
    assert len(store.items) == 1 and len(store.logs) == 1


def test_failed_write_keeps_in_memory_state(make_item) -> None:
    failing = FailingKeyValueStore()
    store = WardrobeStore(failing, id_generator=SequentialIds(), clock=lambda: FIXED_NOW)

    store.add_item(make_item("a"))
    store.log_outfit(["a"])

    assert store.get_item("a").times_worn == 1
    assert store.last_persistence_error is not None
    assert store.last_persistence_error.error_code == "PERSISTENCE_FAILURE"

    failing.failing = False
    store.remove_item("a")

    assert store.last_persistence_error is None
    assert failing.load("eco_wardrobe_items") == "[]"


def test_handed_out_entities_cannot_be_edited_in_place(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))
    store.log_outfit(["a"])
    store.create_mood("Soft Armor", "Structured layers", ["wool"])
    before = store.snapshot()

    with pytest.raises(AttributeError):
        store.items[0].tags.append("leak")
    with pytest.raises(AttributeError):
        store.logs[0].item_ids.append("leak")
    with pytest.raises(AttributeError):
        store.moods[0].keywords.append("leak")
    with pytest.raises(pydantic.ValidationError):
        store.items[0].times_worn = 99

    assert store.snapshot() == before


def test_log_date_is_keyword_only(store: WardrobeStore, make_item) -> None:
    store.add_item(make_item("a"))

    with pytest.raises(TypeError):
        store.log_outfit(date(2026, 3, 13), ["a"])

    assert store.logs == ()


class KeyFailingStore(InMemoryKeyValueStore):
    """Writes fail for one chosen key only."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_key = None

    def save(self, key: str, blob: str) -> None:
        if key == self.failing_key:
            raise PersistenceFailure("disk full", key=key)
        super().save(key, blob)


def test_interrupted_write_never_stores_wear_without_its_log(make_item) -> None:
    persistence = KeyFailingStore()
    store = WardrobeStore(persistence, id_generator=SequentialIds(), clock=lambda: FIXED_NOW)
    store.add_item(make_item("a"))

    persistence.failing_key = LOGS_KEY
    store.log_outfit(["a"])
    reloaded = WardrobeStore(persistence)
    reloaded.load()

    assert store.get_item("a").times_worn == 1
    assert reloaded.get_item("a").times_worn == 0
    assert reloaded.logs == ()


def test_interrupted_write_after_logs_never_overcounts_wear(make_item) -> None:
    persistence = KeyFailingStore()
    store = WardrobeStore(persistence, id_generator=SequentialIds(), clock=lambda: FIXED_NOW)
    store.add_item(make_item("a"))

    persistence.failing_key = ITEMS_KEY
    log = store.log_outfit(["a"])
    reloaded = WardrobeStore(persistence)
    reloaded.load()

    assert reloaded.logs == (log,)
    assert reloaded.get_item("a").times_worn == 0
