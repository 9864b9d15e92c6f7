"""Catalog Organization - Pure functions for grouping catalog entries into sections.

All functions are pure: same input always produces same output, no side effects.
"""

from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence, TypeVar

from .models import CatalogEntry, CatalogKind, CatalogSection, DisplayEntry
from .names import (
    CUSTOMIZE_SECTION,
    OTHER_SECTION,
    is_fridge_variant,
    resolve_display_name,
    resolve_section_title,
)


E = TypeVar("E", bound=CatalogEntry)

# None means no selection has been saved yet: everything is selected.
Selection = Optional[frozenset[str]]

FOOD_SECTION = "Food"
BEVERAGES_SECTION = "Beverages"
KITCHEN_SECTION = "Kitchen"

BEVERAGE_TOKENS = ("drink", "beverage")

# Seeded category sections that get split into Food / Beverages
_MIXED_CATEGORY_SECTIONS = frozenset({"", "other", "food & drinks", "food and drinks"})


class OrganizeMode(str, Enum):
    """How to turn a flat entry list into sections."""

    PRESERVE_ORDER = "preserve_order"
    RECLASSIFY = "reclassify"


def deduplicate(
    entries: Iterable[E], kind: CatalogKind, translations: Mapping[str, str]
) -> list[E]:
    """Drop entries whose resolved display name was already seen.

    The first occurrence in input order wins. Idempotent.
    """
    seen: set[str] = set()
    unique: list[E] = []
    for entry in entries:
        name = resolve_display_name(entry, kind, translations)
        if name in seen:
            continue
        seen.add(name)
        unique.append(entry)
    return unique


def group_by_section_runs(entries: Sequence[E]) -> list[tuple[str, list[E]]]:
    """Group consecutive entries that share a section, keeping arrival order.

    Non-adjacent runs of the same section stay separate groups.
    """
    groups: list[tuple[str, list[E]]] = []
    for entry in entries:
        section = entry.section or ""
        if groups and groups[-1][0] == section:
            groups[-1][1].append(entry)
        else:
            groups.append((section, [entry]))
    return groups


def is_beverage_category(entry: CatalogEntry) -> bool:
    """Keyword test on translation key and name for drink-like categories."""
    key = (entry.translation_key or "").lower()
    name = entry.name.lower()
    return any(token in key or token in name for token in BEVERAGE_TOKENS)


def normalized_category_section(entry: CatalogEntry) -> str:
    """Section key for a non-customization category."""
    section = entry.section or ""
    if section.strip().lower() in _MIXED_CATEGORY_SECTIONS:
        return BEVERAGES_SECTION if is_beverage_category(entry) else FOOD_SECTION
    return section


def normalized_location_section(entry: CatalogEntry) -> str:
    """Section key for a non-customization location; fridge variants go to Kitchen."""
    if is_fridge_variant(entry):
        return KITCHEN_SECTION
    section = entry.section or ""
    if section.strip().lower() in ("", "other"):
        return OTHER_SECTION
    return section


def _reclassify(entries: Sequence[E], kind: CatalogKind) -> list[tuple[str, list[E]]]:
    custom = [e for e in entries if e.is_user_customization]
    normalize = (
        normalized_category_section if kind is CatalogKind.CATEGORY
        else normalized_location_section
    )

    buckets: dict[str, list[E]] = {}
    for entry in entries:
        if entry.is_user_customization:
            continue
        buckets.setdefault(normalize(entry), []).append(entry)

    order = list(buckets)
    if kind is CatalogKind.CATEGORY:
        head = [k for k in (FOOD_SECTION, BEVERAGES_SECTION) if k in buckets]
        order = head + [k for k in order if k not in head]
    else:
        if KITCHEN_SECTION in buckets:
            order.remove(KITCHEN_SECTION)
            order.insert(0, KITCHEN_SECTION)
        if OTHER_SECTION in buckets:
            order.remove(OTHER_SECTION)
            order.append(OTHER_SECTION)

    return [(CUSTOMIZE_SECTION, custom)] + [(k, buckets[k]) for k in order]


def is_selected(selection: Selection, entry_id: str) -> bool:
    return selection is None or entry_id in selection


def organize(
    entries: Sequence[CatalogEntry],
    kind: CatalogKind,
    translations: Mapping[str, str],
    mode: OrganizeMode = OrganizeMode.RECLASSIFY,
    search_text: str = "",
    selection: Selection = None,
) -> list[CatalogSection]:
    """Organize a catalog snapshot into ordered display sections.

    Args:
        entries: Categories or locations as fetched (assumed immutable)
        kind: Which catalog the entries belong to
        translations: Key→string table for the active language
        mode: Run-length grouping of backend order, or reclassification
        search_text: Case-insensitive filter over resolved display names
        selection: Selected entry ids, or None when nothing is saved

    Returns:
        Sections in display order. In reclassify mode the Customize section
        is always first, even when empty or when nothing matches the search.
    """
    unique = deduplicate(entries, kind, translations)
    if mode is OrganizeMode.PRESERVE_ORDER:
        groups = group_by_section_runs(unique)
    else:
        groups = _reclassify(unique, kind)

    term = search_text.strip().lower()
    sections: list[CatalogSection] = []
    for section_key, members in groups:
        items = []
        for entry in members:
            name = resolve_display_name(entry, kind, translations)
            if term and term not in name.lower():
                continue
            items.append(DisplayEntry(
                entry=entry,
                display_name=name,
                selected=is_selected(selection, entry.id),
            ))

        if not items and section_key != CUSTOMIZE_SECTION:
            continue

        sections.append(CatalogSection(
            section_key=section_key,
            title=resolve_section_title(section_key, kind, translations),
            items=items,
            selected_count=sum(1 for i in items if i.selected),
            total_count=len(items),
        ))
    return sections


def select_all(
    entries: Iterable[CatalogEntry], kind: CatalogKind, translations: Mapping[str, str]
) -> frozenset[str]:
    """Select every entry of the deduplicated set."""
    return frozenset(e.id for e in deduplicate(entries, kind, translations))


def deselect_all() -> frozenset[str]:
    return frozenset()


def toggle_selection(
    selection: Selection, entry_id: str, all_ids: Iterable[str]
) -> frozenset[str]:
    """Flip one entry. An unsaved selection starts from ``all_ids``."""
    current = frozenset(all_ids) if selection is None else selection
    if entry_id in current:
        return current - {entry_id}
    return current | {entry_id}


def visible_entries(entries: Iterable[E], selection: Selection) -> list[E]:
    """Entries included in pickers, in input order."""
    return [e for e in entries if is_selected(selection, e.id)]
