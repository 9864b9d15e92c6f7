"""MCP Server - Tool definitions for catalog and expiry queries.

Defines the MCP tools that expose catalog organization, expiry classification
and the daily reminder. Snapshots are passed in by the caller; only device
preferences are persisted.
"""

import logging
import os
from contextvars import ContextVar
from datetime import datetime, timezone, tzinfo
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from pydantic import ValidationError

from ..core.catalog import OrganizeMode, deselect_all, organize, select_all
from ..core.expiry import (
    as_timezone,
    classify_items,
    count_freshness,
    count_items_by,
    expiry_label,
    items_expiring_on,
)
from ..core.models import (
    CatalogKind,
    CatalogSection,
    ClassifiedItem,
    NotificationSettings,
    parse_categories,
    parse_food_items,
    parse_locations,
)
from ..core.names import group_locations
from ..core.notifications import plan_notifications
from ..core.translations import get_translations, normalize_language
from .device import hash_device_id
from .firestore_client import FirestoreConfig, PreferenceFirestoreClient
from .reminder_service import DEFAULT_DELAY_SECONDS, ExpiredReminderService


logger = logging.getLogger(__name__)

# Context variable to store the calling device per request
current_device_id: ContextVar[str | None] = ContextVar("current_device_id", default=None)

transport_security = TransportSecuritySettings(
    enable_dns_rebinding_protection=True,
    allowed_hosts=[
        "localhost:*",
        "127.0.0.1:*",
        "*.run.app:*",
        "*.run.app",
    ],
)

mcp = FastMCP(
    "expiryalert",
    instructions="""ExpiryAlert - Household food expiry assistant.

Pass the categories, locations or food items you fetched from the backend;
the tools return localized, sectioned catalogs and freshness classifications.

Call check_expired_reminder once after the main view appears, not on every
refresh. It reports should_fire at most once per local day per device.""",
    stateless_http=True,
    transport_security=transport_security,
)

_PARSERS = {
    CatalogKind.CATEGORY: parse_categories,
    CatalogKind.LOCATION: parse_locations,
}

# Lazy-initialized clients
_preference_client: PreferenceFirestoreClient | None = None
_reminder_service: ExpiredReminderService | None = None


def get_preference_client() -> PreferenceFirestoreClient:
    """Get or create the preference store client."""
    global _preference_client
    if _preference_client is None:
        config = FirestoreConfig(
            project_id=os.environ.get("FIRESTORE_PROJECT") or None,
            database=os.environ.get("FIRESTORE_DATABASE", "expiryalert"),
        )
        _preference_client = PreferenceFirestoreClient(config)
    return _preference_client


def get_reminder_service() -> ExpiredReminderService:
    """Get or create the reminder service."""
    global _reminder_service
    if _reminder_service is None:
        delay = float(os.environ.get("REMINDER_DELAY_SECONDS", DEFAULT_DELAY_SECONDS))
        _reminder_service = ExpiredReminderService(get_preference_client(), delay_seconds=delay)
    return _reminder_service


def get_device_id() -> str:
    """Get the calling device's id.

    Raises:
        RuntimeError: If no device header was sent
    """
    device_id = current_device_id.get()
    if device_id is None:
        raise RuntimeError("No device context. Send the X-Device-Id header.")
    return device_id


def optional_str(value: Any, field: str) -> str | None:
    """Reject non-string JSON values for optional text fields. Raises TypeError."""
    if value is not None and not isinstance(value, str):
        raise TypeError(f"{field} must be a string")
    return value


def resolve_timezone(name: str | None) -> tzinfo:
    """Request timezone, falling back to DEFAULT_TIMEZONE. Raises ValueError."""
    return as_timezone(name or os.environ.get("DEFAULT_TIMEZONE", "UTC"))


def resolve_language(language: str | None) -> str:
    return normalize_language(language or os.environ.get("DEFAULT_LANGUAGE", "en"))


def parse_now(now: str | None) -> datetime:
    """Parse an ISO timestamp override, or use the current UTC time."""
    if not now:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(now.replace("Z", "+00:00"))


def _load_selection(kind: CatalogKind) -> frozenset[str] | None:
    device_id = current_device_id.get()
    if device_id is None:
        return None
    return get_preference_client().get_selection(hash_device_id(device_id), kind)


# ==================== Serialization ====================


def section_to_dict(section: CatalogSection) -> dict:
    return {
        "section_key": section.section_key,
        "title": section.title,
        "selected_count": section.selected_count,
        "total_count": section.total_count,
        "items": [
            {
                "id": d.entry.id,
                "display_name": d.display_name,
                "icon": d.entry.icon,
                "is_customization": d.entry.is_user_customization,
                "selected": d.selected,
            }
            for d in section.items
        ],
    }


def classified_to_dict(c: ClassifiedItem, translations) -> dict:
    return {
        "id": c.item.id,
        "name": c.item.name,
        "quantity": c.item.quantity,
        "category_id": c.item.category_id,
        "location_id": c.item.location_id,
        "local_expiry_day": c.classification.local_expiry_day,
        "days_until_expiry": c.classification.days_until_expiry,
        "state": c.classification.state.value,
        "label": expiry_label(c.classification.days_until_expiry, translations),
    }


# ==================== Shared Operations ====================


def organize_catalog(
    kind: CatalogKind,
    records: Any,
    language: str | None = None,
    mode: str = OrganizeMode.RECLASSIFY.value,
    search_text: str = "",
) -> dict:
    """Parse a catalog snapshot and organize it into sections.

    Returns:
        {"language", "sections"} or {"error"} for malformed input
    """
    try:
        entries = _PARSERS[kind](records)
        organize_mode = OrganizeMode(mode)
        lang = resolve_language(optional_str(language, "language"))
        if not isinstance(search_text, str):
            raise TypeError("search_text must be a string")
    except (ValidationError, ValueError, TypeError) as e:
        logger.warning("Rejected %s snapshot: %s", kind.value, str(e))
        return {"error": f"Invalid {kind.value} snapshot: {e}"}

    sections = organize(
        entries,
        kind,
        get_translations(lang),
        mode=organize_mode,
        search_text=search_text,
        selection=_load_selection(kind),
    )
    return {"language": lang, "sections": [section_to_dict(s) for s in sections]}


def classify_snapshot(
    records: Any,
    timezone_name: str | None = None,
    now: str | None = None,
    language: str | None = None,
) -> dict:
    """Classify every item of a food snapshot and fold the counts.

    Returns:
        {"timezone", "items", "counts"} or {"error"}
    """
    try:
        items = parse_food_items(records)
        tz = resolve_timezone(optional_str(timezone_name, "timezone"))
        current = parse_now(optional_str(now, "now"))
        lang = resolve_language(optional_str(language, "language"))
    except (ValidationError, ValueError, TypeError) as e:
        logger.warning("Rejected food item snapshot: %s", str(e))
        return {"error": f"Invalid request: {e}"}

    translations = get_translations(lang)
    classified = classify_items(items, current, tz)
    return {
        "timezone": str(tz),
        "items": [classified_to_dict(c, translations) for c in classified],
        "counts": count_freshness(classified).model_dump(),
    }


# ==================== Catalog Tools ====================


@mcp.tool()
def organize_categories(
    categories: list[dict],
    language: str | None = None,
    mode: str = "reclassify",
    search_text: str = "",
) -> dict:
    """Organize categories into localized, deduplicated display sections.

    Args:
        categories: Category records as returned by GET /categories
        language: Display language code (en, ja, ms, th, zh)
        mode: "reclassify" (Customize, Food, Beverages, ...) or "preserve_order"
        search_text: Optional case-insensitive filter on display names

    Returns:
        Ordered sections with resolved display names and selection counts
    """
    return organize_catalog(CatalogKind.CATEGORY, categories, language, mode, search_text)


@mcp.tool()
def organize_locations(
    locations: list[dict],
    language: str | None = None,
    mode: str = "reclassify",
    search_text: str = "",
) -> dict:
    """Organize storage locations into localized display sections.

    Args:
        locations: Location records as returned by GET /locations
        language: Display language code
        mode: "reclassify" (Customize, Kitchen, ..., Other) or "preserve_order"
        search_text: Optional case-insensitive filter on display names

    Returns:
        Ordered sections with resolved display names and selection counts
    """
    return organize_catalog(CatalogKind.LOCATION, locations, language, mode, search_text)


@mcp.tool()
def group_locations_view(locations: list[dict], language: str | None = None) -> dict:
    """Merged location view where all fridge compartments share one label."""
    try:
        entries = parse_locations(locations)
    except ValidationError as e:
        return {"error": f"Invalid location snapshot: {e}"}
    groups = group_locations(entries, get_translations(resolve_language(language)))
    return {"groups": [g.model_dump() for g in groups]}


@mcp.tool()
def select_all_entries(kind: str, entries: list[dict], language: str | None = None) -> dict:
    """Include every (deduplicated) category or location in pickers.

    Args:
        kind: "category" or "location"
        entries: The catalog snapshot
        language: Display language used for deduplication

    Returns:
        The saved selection size
    """
    try:
        catalog_kind = CatalogKind(kind)
        parsed = _PARSERS[catalog_kind](entries)
    except (ValidationError, ValueError) as e:
        return {"error": f"Invalid request: {e}"}

    selection = select_all(parsed, catalog_kind, get_translations(resolve_language(language)))
    device_key = hash_device_id(get_device_id())
    if not get_preference_client().save_selection(device_key, catalog_kind, selection):
        return {"error": "Failed to save selection. Please try again."}
    return {"kind": catalog_kind.value, "selected": len(selection)}


@mcp.tool()
def deselect_all_entries(kind: str) -> dict:
    """Exclude every category or location from pickers."""
    try:
        catalog_kind = CatalogKind(kind)
    except ValueError as e:
        return {"error": f"Invalid request: {e}"}

    device_key = hash_device_id(get_device_id())
    if not get_preference_client().save_selection(device_key, catalog_kind, deselect_all()):
        return {"error": "Failed to save selection. Please try again."}
    return {"kind": catalog_kind.value, "selected": 0}


# ==================== Expiry Tools ====================


@mcp.tool()
def classify_food_items(
    items: list[dict],
    timezone: str | None = None,
    now: str | None = None,
    language: str | None = None,
) -> dict:
    """Classify food items as fresh, expiringSoon or expired.

    Items expiring today count as expired. Items without an expiry date are fresh.

    Args:
        items: Food item records as returned by GET /food-items
        timezone: Viewer's IANA timezone (e.g. "Asia/Tokyo")
        now: Optional ISO timestamp to evaluate at instead of the current time
        language: Language for the status labels

    Returns:
        Per-item local expiry day, days until expiry, state, plus aggregate counts
    """
    return classify_snapshot(items, timezone, now, language)


@mcp.tool()
def get_dashboard_counts(items: list[dict], timezone: str | None = None) -> dict:
    """Dashboard totals plus item counts per category and location."""
    result = classify_snapshot(items, timezone)
    if "error" in result:
        return result
    parsed = parse_food_items(items)
    return {
        "counts": result["counts"],
        "by_category": count_items_by(parsed, "category_id"),
        "by_location": count_items_by(parsed, "location_id"),
    }


@mcp.tool()
def get_calendar_day(items: list[dict], day: str, timezone: str | None = None) -> dict:
    """Items whose local expiry day is ``day`` (YYYY-MM-DD)."""
    try:
        parsed = parse_food_items(items)
        tz = resolve_timezone(timezone)
    except (ValidationError, ValueError) as e:
        return {"error": f"Invalid request: {e}"}
    return {
        "day": day,
        "items": [{"id": i.id, "name": i.name} for i in items_expiring_on(parsed, day, tz)],
    }


@mcp.tool()
def plan_expiry_notifications(
    items: list[dict],
    timezone: str | None = None,
    language: str | None = None,
    expiry_alerts: bool = True,
    today_alerts: bool = True,
    expired_alerts: bool = True,
    reminder_days: int = 3,
) -> dict:
    """Local notifications to schedule for expiring, due-today and expired items."""
    try:
        parsed = parse_food_items(items)
        tz = resolve_timezone(timezone)
        settings = NotificationSettings(
            expiry_alerts=expiry_alerts,
            today_alerts=today_alerts,
            expired_alerts=expired_alerts,
            reminder_days=reminder_days,
        )
    except (ValidationError, ValueError) as e:
        return {"error": f"Invalid request: {e}"}

    planned = plan_notifications(
        parsed, parse_now(None), tz, settings, get_translations(resolve_language(language))
    )
    return {"notifications": [p.model_dump() for p in planned]}


@mcp.tool()
async def check_expired_reminder(items: list[dict], timezone: str | None = None) -> dict:
    """Decide whether to show the once-a-day expired items reminder.

    Call once after the main view appears. Waits a short delay first.

    Args:
        items: Current food item snapshot
        timezone: Viewer's IANA timezone

    Returns:
        {"should_fire", "count", "last_shown_day"}
    """
    try:
        parsed = parse_food_items(items)
        tz = resolve_timezone(timezone)
    except (ValidationError, ValueError) as e:
        return {"error": f"Invalid request: {e}"}

    decision = await get_reminder_service().check_after_delay(get_device_id(), parsed, tz)
    return {
        "should_fire": decision.should_fire,
        "count": decision.count,
        "last_shown_day": decision.state.last_shown_day,
    }
