"""Core Data Models - Pydantic models for type safety.

Snapshot records mirror the backend JSON. All models are value objects with
no behavior beyond validation and a few derived flags.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field


class CatalogKind(str, Enum):
    """Which catalog a record belongs to."""

    CATEGORY = "category"
    LOCATION = "location"


class CatalogEntry(BaseModel):
    """A category or location record as returned by the list endpoints."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    group_id: Optional[str] = Field(default=None, description="None means global default")
    name: str = Field(description="Free text, authoritative fallback for display")
    icon: Optional[str] = None
    translation_key: Optional[str] = None
    is_default: Optional[bool] = None
    is_customization: Optional[bool] = Field(
        default=None, description="True when user-owned; absent on legacy rows"
    )
    section: Optional[str] = None
    sort_order: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_user_customization(self) -> bool:
        """Whether edit/delete is permitted.

        Legacy rows without the flag are treated as user-owned unless seeded.
        """
        if self.is_customization is not None:
            return self.is_customization
        return self.is_default is not True


class Category(CatalogEntry):
    """A food category."""

    color: Optional[str] = None


class Location(CatalogEntry):
    """A storage location."""


class FoodItem(BaseModel):
    """An inventory item with joined category/location display fields."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    group_id: Optional[str] = None
    name: str
    quantity: int = 1
    unit: Optional[str] = None
    brand: Optional[str] = None
    category_id: Optional[str] = None
    location_id: Optional[str] = None
    purchase_date: Optional[str] = None
    expiry_date: Optional[str] = Field(
        default=None, description="YYYY-MM-DD or a timestamp with time of day"
    )
    notes: Optional[str] = None
    is_consumed: Optional[bool] = None

    category_name: Optional[str] = None
    category_icon: Optional[str] = None
    category_translation_key: Optional[str] = None
    location_name: Optional[str] = None
    location_icon: Optional[str] = None
    location_translation_key: Optional[str] = None


class FreshnessState(str, Enum):
    """Freshness bucket derived from days until expiry."""

    FRESH = "fresh"
    EXPIRING_SOON = "expiringSoon"
    EXPIRED = "expired"

    @property
    def color(self) -> str:
        return _STATE_COLORS[self]

    @property
    def icon(self) -> str:
        return _STATE_ICONS[self]


_STATE_COLORS = {
    FreshnessState.FRESH: "#4CAF50",
    FreshnessState.EXPIRING_SOON: "#FF9800",
    FreshnessState.EXPIRED: "#F44336",
}

_STATE_ICONS = {
    FreshnessState.FRESH: "checkmark.circle.fill",
    FreshnessState.EXPIRING_SOON: "clock.fill",
    FreshnessState.EXPIRED: "exclamationmark.triangle.fill",
}


class ExpiryClassification(BaseModel):
    """Derived expiry fields for one item. Recomputed on every read."""

    local_expiry_day: Optional[str] = Field(default=None, description="YYYY-MM-DD in viewer's timezone")
    days_until_expiry: Optional[int] = Field(default=None, description="Signed, today = 0")
    state: FreshnessState = FreshnessState.FRESH


class ClassifiedItem(BaseModel):
    """A food item paired with its classification."""

    item: FoodItem
    classification: ExpiryClassification


class FreshnessCounts(BaseModel):
    """Aggregate counts over a collection of classified items."""

    total: int = Field(default=0, ge=0)
    fresh: int = Field(default=0, ge=0)
    expiring_soon: int = Field(default=0, ge=0)
    expired: int = Field(default=0, ge=0)


class ReminderState(BaseModel):
    """Persisted marker of the last day the expired reminder was shown."""

    last_shown_day: Optional[str] = None


class ReminderDecision(BaseModel):
    """Outcome of a reminder check."""

    should_fire: bool
    count: int = Field(ge=0, description="Expired count to display")
    state: ReminderState


class DisplayEntry(BaseModel):
    """A catalog entry with its resolved display name."""

    entry: CatalogEntry
    display_name: str
    selected: bool = True


class CatalogSection(BaseModel):
    """An ordered, named group of display entries."""

    section_key: str
    title: str
    items: list[DisplayEntry] = Field(default_factory=list)
    selected_count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)


class LocationGroup(BaseModel):
    """One row of the merged location view."""

    name: str
    location_ids: list[str] = Field(default_factory=list)


class NotificationSettings(BaseModel):
    """User toggles for local expiry notifications."""

    expiry_alerts: bool = True
    today_alerts: bool = True
    expired_alerts: bool = True
    reminder_days: int = Field(default=3, ge=0)


class PlannedNotification(BaseModel):
    """A local notification the client should schedule."""

    id: str
    kind: str = Field(description="expiring, today or expired")
    title: str
    body: str
    item_id: str


def _unwrap(payload: Any, key: str) -> list:
    if isinstance(payload, dict):
        return payload.get(key) or []
    return list(payload or [])


def parse_categories(payload: Any) -> list[Category]:
    """Parse a bare list or a ``{"categories": [...]}`` response."""
    return [Category(**c) for c in _unwrap(payload, "categories")]


def parse_locations(payload: Any) -> list[Location]:
    """Parse a bare list or a ``{"locations": [...]}`` response."""
    return [Location(**loc) for loc in _unwrap(payload, "locations")]


def parse_food_items(payload: Any) -> list[FoodItem]:
    """Parse a bare list or an ``{"items": [...]}`` response."""
    return [FoodItem(**i) for i in _unwrap(payload, "items")]
