"""Unit tests for name resolution - pure functions, no mocks needed."""

import pytest

from expiryalert.core.models import Category, CatalogKind, Location
from expiryalert.core.names import (
    group_locations,
    is_fridge_variant,
    lookup_default_key,
    resolve_display_name,
    resolve_location_group_name,
    resolve_section_title,
    take_first_part,
)
from expiryalert.core.translations import get_translations


EN = get_translations("en")
JA = get_translations("ja")


class TestTakeFirstPart:
    """Tests for take_first_part."""

    def test_splits_on_slash(self):
        assert take_first_part("Meat / Seafood") == "Meat"

    def test_no_slash_trims(self):
        assert take_first_part("  Dairy ") == "Dairy"

    def test_first_slash_only(self):
        assert take_first_part("a/b/c") == "a"


class TestLookupDefaultKey:
    """Tests for the legacy name→key tables."""

    def test_exact_lowered_name(self):
        assert lookup_default_key("Meat / Seafood", CatalogKind.CATEGORY) == "defaultCategory.meatSeafood"

    def test_first_part_fallback(self):
        """"Bread / Something" falls back to the "bread" entry."""
        assert lookup_default_key("Bread / Rolls", CatalogKind.CATEGORY) == "defaultCategory.breadBakery"

    def test_kind_specific(self):
        """Location names are not looked up in the category table."""
        assert lookup_default_key("Pantry", CatalogKind.CATEGORY) is None
        assert lookup_default_key("Pantry", CatalogKind.LOCATION) == "defaultLocation.pantry"

    def test_unknown_name(self):
        assert lookup_default_key("Grandma's jam", CatalogKind.CATEGORY) is None


class TestResolveDisplayName:
    """Tests for resolve_display_name."""

    def test_translation_key_used(self):
        """A key present in the table resolves to its translation."""
        cat = Category(id="1", name="Dairy", translation_key="defaultCategory.dairy")
        assert resolve_display_name(cat, CatalogKind.CATEGORY, JA) == "乳製品"

    def test_translation_truncated_never_key(self):
        """Translated compound names are cut at the first slash, never the key."""
        cat = Category(id="1", name="Meat / Seafood", translation_key="defaultCategory.meatSeafood")
        name = resolve_display_name(cat, CatalogKind.CATEGORY, JA)
        assert name == "肉"
        assert name != "defaultCategory.meatSeafood"

    def test_missing_translation_falls_back_to_name(self):
        """A key the table does not know falls back to the raw name."""
        cat = Category(id="1", name="Leftovers", translation_key="custom.unknownKey")
        assert resolve_display_name(cat, CatalogKind.CATEGORY, EN) == "Leftovers"

    def test_empty_key_treated_as_missing(self):
        """An empty key goes through the legacy name table."""
        cat = Category(id="1", name="Dairy", translation_key="")
        assert resolve_display_name(cat, CatalogKind.CATEGORY, JA) == "乳製品"

    def test_legacy_name_lookup(self):
        """Unkeyed default rows are translated via the name table."""
        loc = Location(id="1", name="Freezer")
        assert resolve_display_name(loc, CatalogKind.LOCATION, JA) == "冷凍庫"

    def test_split_name_without_table_entry(self):
        """"Meat / Seafood" with no matching key in the table renders as "Meat"."""
        cat = Category(id="1", name="Meat / Seafood", translation_key=None)
        ja_without_meat = {"defaultCategory.dairy": "乳製品"}
        assert resolve_display_name(cat, CatalogKind.CATEGORY, ja_without_meat) == "Meat"

    def test_custom_name_with_slash_truncated(self):
        """User names containing a slash are truncated too."""
        cat = Category(id="1", name="Mine/Yours", is_customization=True)
        assert resolve_display_name(cat, CatalogKind.CATEGORY, EN) == "Mine"

    @pytest.mark.parametrize("language", ["en", "ja", "ms", "th", "zh"])
    def test_split_names_stable_in_every_language(self, language):
        """Split names always resolve to the pre-slash token of their source string."""
        table = get_translations(language)
        for name in ("Meat / Seafood", "Cooked Food / Leftovers", "Bread / Bakery"):
            cat = Category(id="1", name=name)
            key = lookup_default_key(name, CatalogKind.CATEGORY)
            source = table.get(key, name)
            resolved = resolve_display_name(cat, CatalogKind.CATEGORY, table)
            assert resolved == take_first_part(source)
            assert "/" not in resolved

    def test_never_empty(self):
        """A name that starts with a slash still renders something."""
        cat = Category(id="1", name="/ misc")
        assert resolve_display_name(cat, CatalogKind.CATEGORY, EN) == "/ misc"

    def test_blank_translation_falls_back(self):
        """An empty translation string does not blank the name."""
        cat = Category(id="1", name="Snacks", translation_key="k")
        assert resolve_display_name(cat, CatalogKind.CATEGORY, {"k": ""}) == "Snacks"


class TestLocationGroups:
    """Tests for the merged fridge view."""

    def test_fridge_variants_by_name(self):
        loc = Location(id="1", name="Fridge (Top)")
        assert is_fridge_variant(loc)
        assert resolve_location_group_name(loc, JA) == "冷蔵庫"

    def test_fridge_variants_by_key(self):
        loc = Location(id="1", name="Whatever", translation_key="defaultLocation.fridgeBottom")
        assert resolve_location_group_name(loc, EN) == "Fridge"

    def test_fridge_door_not_merged(self):
        """Fridge Door keeps its own label."""
        loc = Location(id="1", name="Fridge Door")
        assert not is_fridge_variant(loc)
        assert resolve_location_group_name(loc, EN) == "Fridge Door"

    def test_missing_fridge_translation(self):
        """Without a table entry the merged label is "Fridge", not the key."""
        loc = Location(id="1", name="Fridge (Middle)")
        assert resolve_location_group_name(loc, {}) == "Fridge"

    def test_group_locations(self):
        """Compartments collapse into one group in first-seen order."""
        locs = [
            Location(id="a", name="Fridge (Top)"),
            Location(id="b", name="Pantry"),
            Location(id="c", name="Fridge (Bottom)"),
        ]
        groups = group_locations(locs, EN)
        assert [g.name for g in groups] == ["Fridge", "Pantry"]
        assert groups[0].location_ids == ["a", "c"]


class TestResolveSectionTitle:
    """Tests for section title localization."""

    def test_customize(self):
        assert resolve_section_title("Customize", CatalogKind.CATEGORY, JA) == "カスタマイズ"

    def test_category_sections(self):
        assert resolve_section_title("Beverages", CatalogKind.CATEGORY, JA) == "飲料"
        assert resolve_section_title("Personal Care", CatalogKind.CATEGORY, EN) == "Personal Care"

    def test_location_other(self):
        assert resolve_section_title("", CatalogKind.LOCATION, JA) == "その他"
        assert resolve_section_title("Other", CatalogKind.LOCATION, EN) == "Other"

    def test_unknown_section_passes_through(self):
        assert resolve_section_title("Garden Shed", CatalogKind.LOCATION, JA) == "Garden Shed"

    def test_missing_translation_returns_section(self):
        assert resolve_section_title("Kitchen", CatalogKind.LOCATION, {}) == "Kitchen"
