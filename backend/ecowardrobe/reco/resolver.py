"""
Resolve recommendation item references against the current closet.

Items can be removed while a recommendation request is in flight, so a
reference may point at nothing; it resolves to ``known=False`` instead of
failing.
"""
from typing import Iterable, List

from ecowardrobe.schemas import Recommendation, ResolvedItem, ResolvedRecommendation
from ecowardrobe.storage.wardrobe_store import UnknownItem, WardrobeStore


def resolve_recommendation(store: WardrobeStore, recommendation: Recommendation) -> ResolvedRecommendation:
    refs = []
    for ref in store.resolve_items(recommendation.item_ids):
        if isinstance(ref, UnknownItem):
            refs.append(ResolvedItem(id=ref.id, known=False))
        else:
            refs.append(ResolvedItem(id=ref.id, known=True, item=ref))
    return ResolvedRecommendation(**recommendation.model_dump(), items=refs)


def resolve_recommendations(
    store: WardrobeStore, recommendations: Iterable[Recommendation]
) -> List[ResolvedRecommendation]:
    return [resolve_recommendation(store, rec) for rec in recommendations]
