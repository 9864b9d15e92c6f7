"""Name Resolution - Pure functions for localized catalog display names.

All functions are pure: same input always produces same output, no side effects.
"""

from types import MappingProxyType
from typing import Mapping

from .models import CatalogEntry, CatalogKind, Location, LocationGroup
from .translations import translate


# Known default English names for rows that predate translation keys.
CATEGORY_NAME_TO_KEY: Mapping[str, str] = MappingProxyType({
    "fresh food": "defaultCategory.freshFood",
    "cooked food": "defaultCategory.cookedFood",
    "cooked food / leftovers": "defaultCategory.cookedFood",
    "canned goods": "defaultCategory.cannedPackaged",
    "canned / packaged food": "defaultCategory.cannedPackaged",
    "frozen food": "defaultCategory.frozenFood",
    "frozen foods": "defaultCategory.frozenFood",
    "snacks": "defaultCategory.snacks",
    "drinks": "defaultCategory.drinks",
    "beverages": "defaultCategory.drinks",
    "dairy": "defaultCategory.dairy",
    "meat / seafood": "defaultCategory.meatSeafood",
    "meat": "defaultCategory.meatSeafood",
    "fruits": "defaultCategory.fruits",
    "vegetables": "defaultCategory.vegetables",
    "bread / bakery": "defaultCategory.breadBakery",
    "bread": "defaultCategory.breadBakery",
    "condiments & sauces": "defaultCategory.condimentsSauces",
    "spices & seasoning": "defaultCategory.spicesSeasoning",
    "baby food": "defaultCategory.babyFood",
    "medicine": "defaultCategory.medicine",
    "supplements / vitamins": "defaultCategory.supplements",
    "first aid": "defaultCategory.firstAid",
    "medical devices (e.g., test strips)": "defaultCategory.medicalDevices",
    "skincare": "defaultCategory.skincare",
    "makeup": "defaultCategory.makeup",
    "hair care": "defaultCategory.hairCare",
    "body care": "defaultCategory.bodyCare",
    "perfume": "defaultCategory.perfume",
    "hygiene products": "defaultCategory.hygieneProducts",
    "cleaning supplies": "defaultCategory.cleaningSupplies",
    "laundry": "defaultCategory.laundry",
    "kitchen supplies (wrap, foil)": "defaultCategory.kitchenSupplies",
    "batteries": "defaultCategory.batteries",
    "light bulbs": "defaultCategory.lightBulbs",
    "filters (water/air)": "defaultCategory.filters",
    "passport": "defaultCategory.passport",
    "visa / residence card": "defaultCategory.visa",
    "driver license": "defaultCategory.driverLicense",
    "insurance": "defaultCategory.insurance",
    "contracts": "defaultCategory.contracts",
    "bills / receipts": "defaultCategory.billsReceipts",
    "warranty": "defaultCategory.warranty",
    "certificates": "defaultCategory.certificates",
    "membership / subscriptions": "defaultCategory.membership",
    "pet food": "defaultCategory.petFood",
    "pet medicine": "defaultCategory.petMedicine",
    "pet supplies": "defaultCategory.petSupplies",
    "electronics / gadgets": "defaultCategory.electronics",
    "stationery": "defaultCategory.stationery",
    "miscellaneous": "defaultCategory.miscellaneous",
})

LOCATION_NAME_TO_KEY: Mapping[str, str] = MappingProxyType({
    "fridge (top)": "defaultLocation.fridgeTop",
    "fridge (middle)": "defaultLocation.fridgeMiddle",
    "fridge (bottom)": "defaultLocation.fridgeBottom",
    "fridge door": "defaultLocation.fridgeDoor",
    "freezer": "defaultLocation.freezer",
    "pantry": "defaultLocation.pantry",
    "cabinet": "defaultLocation.cabinet",
    "drawer": "defaultLocation.drawer",
    "counter / shelf": "defaultLocation.counterShelf",
    "counter": "defaultLocation.counter",
    "fridge": "defaultLocation.fridge",
    "storage box": "defaultLocation.storageBox",
    "cardboard box": "defaultLocation.cardboardBox",
    "closet": "defaultLocation.closet",
    "closet / wardrobe": "defaultLocation.closet",
    "under bed": "defaultLocation.underBed",
    "storage room": "defaultLocation.storageRoom",
    "garage": "defaultLocation.garage",
    "balcony storage": "defaultLocation.balconyStorage",
    "bathroom cabinet": "defaultLocation.bathroomCabinet",
    "sink drawer": "defaultLocation.sinkDrawer",
    "shower shelf": "defaultLocation.showerShelf",
    "desk drawer": "defaultLocation.deskDrawer",
    "bookshelf": "defaultLocation.bookshelf",
    "file organizer": "defaultLocation.fileOrganizer",
    "backpack": "defaultLocation.backpack",
    "suitcase": "defaultLocation.suitcase",
})

_NAME_TABLES = {
    CatalogKind.CATEGORY: CATEGORY_NAME_TO_KEY,
    CatalogKind.LOCATION: LOCATION_NAME_TO_KEY,
}

FRIDGE_KEY = "defaultLocation.fridge"
FRIDGE_VARIANT_KEYS = frozenset({
    FRIDGE_KEY,
    "defaultLocation.fridgeTop",
    "defaultLocation.fridgeMiddle",
    "defaultLocation.fridgeBottom",
})
FRIDGE_VARIANT_NAMES = frozenset({"fridge (top)", "fridge (middle)", "fridge (bottom)"})

CUSTOMIZE_SECTION = "Customize"
OTHER_SECTION = "Other"

_CATEGORY_SECTION_KEYS = {
    "food": "section.food",
    "beverages": "section.beverages",
    "other": "section.other",
    "health": "section.health",
    "personal care": "section.personalCare",
    "home": "section.home",
    "documents": "section.documents",
    "pets": "section.pets",
    "others": "section.others",
}

_LOCATION_SECTION_KEYS = {
    "kitchen": "section.kitchen",
    "home storage": "section.homeStorage",
    "bathroom": "section.bathroom",
    "office": "section.office",
    "travel": "section.travel",
}


def take_first_part(text: str) -> str:
    """Return the trimmed part of a string before its first ``/``.

    "Meat / Seafood" becomes "Meat". Strings without a slash are only trimmed.
    """
    trimmed = text.strip()
    idx = trimmed.find("/")
    if idx >= 0:
        return trimmed[:idx].strip()
    return trimmed


def _resolve_key(key: str, fallback: str, translations: Mapping[str, str]) -> str:
    """Translate a key, falling back when the table echoes the key back."""
    translated = translate(key, translations)
    return translated if translated != key else fallback


def lookup_default_key(name: str, kind: CatalogKind) -> str | None:
    """Find the translation key for a known default English name.

    Tries the exact lowered name first, then the part before the first slash.
    """
    table = _NAME_TABLES[kind]
    name_lower = name.strip().lower()
    first_part = take_first_part(name).lower()
    return table.get(name_lower) or table.get(first_part)


def resolve_display_name(
    entry: CatalogEntry,
    kind: CatalogKind,
    translations: Mapping[str, str],
) -> str:
    """Resolve the localized display name of a category or location.

    Args:
        entry: The catalog entry
        kind: Whether the entry is a category or a location
        translations: Key→string table for the active language

    Returns:
        The localized name cut at its first slash. Falls back to the raw
        name whenever a translation is missing, and never returns an empty
        string for a non-empty name.
    """
    if entry.translation_key:
        raw = _resolve_key(entry.translation_key, entry.name, translations)
    else:
        key = lookup_default_key(entry.name, kind)
        raw = _resolve_key(key, entry.name, translations) if key else entry.name

    resolved = take_first_part(raw)
    if not resolved:
        # "/ x" style names or blank translations
        resolved = take_first_part(entry.name) or entry.name.strip() or entry.name
    return resolved


def is_fridge_variant(location: CatalogEntry) -> bool:
    """Whether a location is one of the fridge entries merged into "Fridge"."""
    if location.translation_key and location.translation_key in FRIDGE_VARIANT_KEYS:
        return True
    return location.name.strip().lower() in FRIDGE_VARIANT_NAMES


def resolve_location_group_name(location: Location, translations: Mapping[str, str]) -> str:
    """Display name for the merged location view.

    Fridge (Top/Middle/Bottom) and the plain Fridge all share one label.
    Not used for editable entries.
    """
    if is_fridge_variant(location):
        return _resolve_key(FRIDGE_KEY, "Fridge", translations)
    return resolve_display_name(location, CatalogKind.LOCATION, translations)


def group_locations(
    locations: list[Location], translations: Mapping[str, str]
) -> list[LocationGroup]:
    """Collapse locations sharing a merged display name, in first-seen order."""
    groups: dict[str, LocationGroup] = {}
    for loc in locations:
        name = resolve_location_group_name(loc, translations)
        if name not in groups:
            groups[name] = LocationGroup(name=name)
        groups[name].location_ids.append(loc.id)
    return list(groups.values())


def resolve_section_title(
    section_key: str, kind: CatalogKind, translations: Mapping[str, str]
) -> str:
    """Localize a section key for display; unknown sections pass through."""
    if section_key == CUSTOMIZE_SECTION:
        return _resolve_key("common.sectionCustomize", section_key, translations)

    normalized = section_key.strip().lower()
    if kind is CatalogKind.LOCATION:
        if not normalized or section_key == OTHER_SECTION:
            return _resolve_key("locations.sectionOther", OTHER_SECTION, translations)
        key = _LOCATION_SECTION_KEYS.get(normalized)
    else:
        key = _CATEGORY_SECTION_KEYS.get(normalized)

    if key is None:
        return section_key
    return _resolve_key(key, section_key, translations)
