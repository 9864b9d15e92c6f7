"""Expiry Classification - Pure functions for freshness of food items.

All functions are pure: same input always produces same output, no side effects.
Timezone and "now" are always explicit arguments.
"""

from datetime import date, datetime, tzinfo
from typing import Iterable, Mapping, Optional
from zoneinfo import ZoneInfo

from .models import (
    ClassifiedItem,
    ExpiryClassification,
    FoodItem,
    FreshnessCounts,
    FreshnessState,
)
from .translations import translate


EXPIRING_SOON_DAYS = 5

_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def as_timezone(tz: str | tzinfo) -> tzinfo:
    """Accept an IANA name or a tzinfo. Unknown names raise ValueError."""
    if isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {tz}") from e


def _parse_day(text: str) -> Optional[date]:
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        return None


def _parse_timestamp(raw: str) -> Optional[datetime]:
    for fmt in _TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    return None


def canonical_expiry_day(raw: Optional[str], tz: str | tzinfo) -> Optional[str]:
    """Canonicalize an expiry date string to a local calendar day.

    Timestamps (containing ``T``) are converted into the viewer's timezone;
    bare dates are taken as-is. When nothing parses, the first 10 characters
    are returned verbatim.

    Args:
        raw: Expiry date as sent by the backend
        tz: Viewer's timezone

    Returns:
        YYYY-MM-DD string, or None when no expiry is tracked
    """
    if not raw:
        return None

    if "T" in raw:
        parsed = _parse_timestamp(raw)
        if parsed is not None:
            return parsed.astimezone(as_timezone(tz)).date().isoformat()
    else:
        day = _parse_day(raw[:10])
        if day is not None:
            return day.isoformat()

    return raw[:10]


def local_date(now: datetime, tz: str | tzinfo) -> date:
    """The viewer's calendar day at ``now``. Naive datetimes are taken as local."""
    zone = as_timezone(tz)
    if now.tzinfo is None:
        now = now.replace(tzinfo=zone)
    return now.astimezone(zone).date()


def days_until_expiry(
    local_day: Optional[str], now: datetime, tz: str | tzinfo
) -> Optional[int]:
    """Signed civil-day difference from today to the expiry day (today = 0)."""
    if local_day is None:
        return None
    expiry = _parse_day(local_day)
    if expiry is None:
        return None
    return (expiry - local_date(now, tz)).days


def bucket_freshness(days: Optional[int]) -> FreshnessState:
    """Bucket days-until-expiry into a freshness state.

    Items expiring today count as expired. No date means fresh.
    """
    if days is None:
        return FreshnessState.FRESH
    if days <= 0:
        return FreshnessState.EXPIRED
    if days <= EXPIRING_SOON_DAYS:
        return FreshnessState.EXPIRING_SOON
    return FreshnessState.FRESH


def classify(item: FoodItem, now: datetime, tz: str | tzinfo) -> ExpiryClassification:
    """Derive local expiry day, days until expiry and freshness for one item."""
    local_day = canonical_expiry_day(item.expiry_date, tz)
    days = days_until_expiry(local_day, now, tz)
    return ExpiryClassification(
        local_expiry_day=local_day,
        days_until_expiry=days,
        state=bucket_freshness(days),
    )


def classify_items(
    items: Iterable[FoodItem], now: datetime, tz: str | tzinfo
) -> list[ClassifiedItem]:
    zone = as_timezone(tz)
    return [
        ClassifiedItem(item=item, classification=classify(item, now, zone))
        for item in items
    ]


def count_freshness(classified: Iterable[ClassifiedItem]) -> FreshnessCounts:
    """Fold classified items into counts; every item lands in exactly one bucket."""
    counts = {state: 0 for state in FreshnessState}
    total = 0
    for c in classified:
        counts[c.classification.state] += 1
        total += 1
    return FreshnessCounts(
        total=total,
        fresh=counts[FreshnessState.FRESH],
        expiring_soon=counts[FreshnessState.EXPIRING_SOON],
        expired=counts[FreshnessState.EXPIRED],
    )


def summarize_freshness(
    items: Iterable[FoodItem], now: datetime, tz: str | tzinfo
) -> FreshnessCounts:
    return count_freshness(classify_items(items, now, tz))


def filter_by_state(
    classified: Iterable[ClassifiedItem], state: FreshnessState
) -> list[ClassifiedItem]:
    return [c for c in classified if c.classification.state is state]


def items_expiring_on(
    items: Iterable[FoodItem], day: str, tz: str | tzinfo
) -> list[FoodItem]:
    """Items whose local expiry day is ``day`` (calendar view)."""
    zone = as_timezone(tz)
    return [i for i in items if canonical_expiry_day(i.expiry_date, zone) == day]


def expiry_days_in_month(
    items: Iterable[FoodItem], year: int, month: int, tz: str | tzinfo
) -> set[int]:
    """Days of the month that have at least one item expiring."""
    zone = as_timezone(tz)
    prefix = f"{year:04d}-{month:02d}-"
    days: set[int] = set()
    for item in items:
        local_day = canonical_expiry_day(item.expiry_date, zone)
        if local_day and local_day.startswith(prefix):
            parsed = _parse_day(local_day)
            if parsed is not None:
                days.add(parsed.day)
    return days


def expiry_label(days: Optional[int], translations: Mapping[str, str]) -> Optional[str]:
    """Short status label, e.g. "3 days left", "Expires today", "2 days expired"."""
    if days is None:
        return None
    if days < 0:
        return f"{abs(days)} {translate('foodStatus.expiredDays', translations)}"
    if days == 0:
        return translate("foodStatus.expirestoday", translations)
    return f"{days} {translate('foodStatus.daysLeft', translations)}"


def count_items_by(items: Iterable[FoodItem], field: str) -> dict[str, int]:
    """Item counts keyed by ``category_id`` or ``location_id``; unset ids are skipped."""
    counts: dict[str, int] = {}
    for item in items:
        key = getattr(item, field)
        if key:
            counts[key] = counts.get(key, 0) + 1
    return counts
