"""
In-memory wardrobe state (items, style moods, outfit logs) with a persisted mirror.

The store is the only owner of the three collections. Every successful
mutation swaps in new collections in one step and then writes all three
blobs through the persistence adapter. A failed write is logged and kept on
``last_persistence_error``; in-memory state stays authoritative.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple, Union

import pydantic
from pydantic import TypeAdapter

from ecowardrobe.core.exceptions import DuplicateIdError, EmptySelectionError, PersistenceFailure
from ecowardrobe.schemas import AnalysisResult, Category, Item, OutfitLog, StyleMood
from ecowardrobe.storage.persistence import KeyValueStore
from ecowardrobe.utils.ids import Clock, IdGenerator, new_id, utc_now

logger = logging.getLogger(__name__)

ITEMS_KEY = "eco_wardrobe_items"
LOGS_KEY = "eco_wardrobe_logs"
MOODS_KEY = "eco_wardrobe_moods"

_items_adapter = TypeAdapter(List[Item])
_logs_adapter = TypeAdapter(List[OutfitLog])
_moods_adapter = TypeAdapter(List[StyleMood])


@dataclass(frozen=True)
class UnknownItem:
    """Stand-in for an item id that no longer (or never) exists in the closet"""
    id: str


@dataclass(frozen=True)
class StoreSnapshot:
    items: Tuple[Item, ...]
    logs: Tuple[OutfitLog, ...]
    moods: Tuple[StyleMood, ...]


class WardrobeStore:
    """Owns closet items, style moods and outfit logs."""

    def __init__(
        self,
        persistence: KeyValueStore,
        id_generator: IdGenerator = new_id,
        clock: Clock = utc_now,
    ) -> None:
        self._persistence = persistence
        self._new_id = id_generator
        self._clock = clock
        self._items: List[Item] = []
        self._logs: List[OutfitLog] = []
        self._moods: List[StyleMood] = []
        self.last_persistence_error: Optional[PersistenceFailure] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Read all three collections; an absent key means an empty collection."""
        items = self._read(ITEMS_KEY, _items_adapter)
        logs = self._read(LOGS_KEY, _logs_adapter)
        moods = self._read(MOODS_KEY, _moods_adapter)
        self._items, self._logs, self._moods = items, logs, moods
        logger.info(f"Loaded wardrobe: {len(items)} items, {len(logs)} logs, {len(moods)} moods")

    def _read(self, key: str, adapter: TypeAdapter) -> list:
        blob = self._persistence.load(key)
        if blob is None:
            return []
        try:
            return adapter.validate_json(blob)
        except pydantic.ValidationError as e:
            raise PersistenceFailure(f"Stored '{key}' is malformed: {e.error_count()} errors", key=key) from e

    def save(self) -> bool:
        """
        Mirror the collections to the adapter in one batch. Returns False if a write failed.

        Logs go first: if a non-transactional adapter stops part way, the stored
        wear counts never run ahead of the stored logs.
        """
        blobs = {
            LOGS_KEY: _logs_adapter.dump_json(self._logs).decode("utf-8"),
            ITEMS_KEY: _items_adapter.dump_json(self._items).decode("utf-8"),
            MOODS_KEY: _moods_adapter.dump_json(self._moods).decode("utf-8"),
        }
        try:
            self._persistence.save_many(blobs)
        except PersistenceFailure as e:
            logger.warning(f"Wardrobe changes kept in memory only: {e.message}")
            self.last_persistence_error = e
            return False
        self.last_persistence_error = None
        return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(self._items)

    @property
    def logs(self) -> Tuple[OutfitLog, ...]:
        return tuple(self._logs)

    @property
    def moods(self) -> Tuple[StyleMood, ...]:
        return tuple(self._moods)

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(items=self.items, logs=self.logs, moods=self.moods)

    def today(self) -> date:
        return self._clock().date()

    def get_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self._items if item.id == item_id), None)

    def get_mood(self, mood_id: str) -> Optional[StyleMood]:
        return next((mood for mood in self._moods if mood.id == mood_id), None)

    def items_in_category(self, category: Optional[Category] = None) -> List[Item]:
        if category is None:
            return list(self._items)
        return [item for item in self._items if item.category == category]

    def resolve_items(self, item_ids: Iterable[str]) -> List[Union[Item, UnknownItem]]:
        """Look up each id; ids of removed items resolve to UnknownItem."""
        by_id = {item.id: item for item in self._items}
        return [by_id.get(item_id, UnknownItem(item_id)) for item_id in item_ids]

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(self, item: Item) -> Item:
        if self.get_item(item.id) is not None:
            raise DuplicateIdError("Item", item.id)
        self._items = [item] + self._items
        logger.info(f"Added item {item.id} ({item.category.value})")
        self.save()
        return item

    def catalog_item(self, analysis: AnalysisResult, image_url: str) -> Item:
        """Create a never-worn item from recognition output and add it."""
        item = Item.from_analysis(analysis, item_id=self._new_id(), image_url=image_url, added_at=self._clock())
        return self.add_item(item)

    def remove_item(self, item_id: str) -> None:
        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            logger.debug(f"remove_item: {item_id} not present")
            return
        self._items = remaining
        logger.info(f"Removed item {item_id}")
        self.save()

    # ------------------------------------------------------------------
    # Outfit logs
    # ------------------------------------------------------------------

    def log_outfit(
        self,
        item_ids: Iterable[str],
        *,
        day: Union[date, str, None] = None,
        mood_name: Optional[str] = None,
    ) -> OutfitLog:
        """
        Record that the selected items were worn on ``day`` (default: today).
        The selection comes first and the date is keyword-only, since it
        defaults to today.

        Every selected id still in the closet gets times_worn + 1 and
        last_worn_at = now; ids of removed items are kept in the log but
        otherwise ignored. The log and the wear counts change together.

        Raises:
            EmptySelectionError: no item ids were given
        """
        selected = list(dict.fromkeys(item_ids))
        if not selected:
            raise EmptySelectionError()

        log = OutfitLog(
            id=self._new_id(),
            date=day if day is not None else self.today(),
            item_ids=selected,
            mood_name=mood_name,
        )
        worn_at = self._clock()
        wanted = set(selected)
        items = [
            item.model_copy(update={"times_worn": item.times_worn + 1, "last_worn_at": worn_at})
            if item.id in wanted else item
            for item in self._items
        ]
        worn = sum(1 for item in self._items if item.id in wanted)

        self._items, self._logs = items, [log] + self._logs
        logger.info(f"Logged outfit {log.id} on {log.date.isoformat()}: {worn}/{len(selected)} items in closet")
        self.save()
        return log

    # ------------------------------------------------------------------
    # Style moods
    # ------------------------------------------------------------------

    def add_mood(self, mood: StyleMood) -> StyleMood:
        if self.get_mood(mood.id) is not None:
            raise DuplicateIdError("StyleMood", mood.id)
        self._moods = self._moods + [mood]
        logger.info(f"Added style mood {mood.id}")
        self.save()
        return mood

    def create_mood(
        self,
        name: str,
        description: str,
        keywords: Iterable[str] = (),
        mood_image_url: Optional[str] = None,
    ) -> StyleMood:
        mood = StyleMood(
            id=self._new_id(),
            name=name,
            description=description,
            keywords=tuple(keywords),
            mood_image_url=mood_image_url,
        )
        return self.add_mood(mood)

    def remove_mood(self, mood_id: str) -> None:
        remaining = [mood for mood in self._moods if mood.id != mood_id]
        if len(remaining) == len(self._moods):
            return
        self._moods = remaining
        logger.info(f"Removed style mood {mood_id}")
        self.save()
