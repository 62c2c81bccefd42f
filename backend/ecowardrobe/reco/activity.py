"""
Rolling 7-day wear calendar built from outfit logs.
"""
from datetime import date, timedelta
from typing import Iterable, List, Union

from ecowardrobe.schemas.outfit import DayStatus, OutfitLog

WINDOW_DAYS = 7


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def weekly_activity(today: Union[date, str], logs: Iterable[OutfitLog]) -> List[DayStatus]:
    """
    Count logged outfits for each of the 7 days ending at ``today``.

    Args:
        today: Last day of the window, as a date or ISO "YYYY-MM-DD" string.
            No clock is consulted and no timezone conversion is applied.
        logs: Outfit logs in any order.

    Returns:
        Exactly 7 DayStatus entries, oldest first; the last one is ``today``.
    """
    end = _as_date(today)
    days = [end - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]
    counts = {day: 0 for day in days}
    for log in logs:
        if log.date in counts:
            counts[log.date] += 1
    return [DayStatus(date=day, worn_count=counts[day]) for day in days]


def logs_for_day(day: Union[date, str], logs: Iterable[OutfitLog]) -> List[OutfitLog]:
    """Logs recorded on one calendar day, in their stored order."""
    target = _as_date(day)
    return [log for log in logs if log.date == target]
