"""Translation Tables - Built-in key to string tables per language.

Only the keys the catalog and expiry code resolve are shipped here.
"""

from types import MappingProxyType
from typing import Mapping


DEFAULT_LANGUAGE = "en"

# Recognized language codes. Codes without a table below resolve every key
# to itself, so display names fall back to the raw backend names.
SUPPORTED_LANGUAGES = ("en", "ja", "ms", "th", "zh")

_EN = {
    # Categories
    "defaultCategory.freshFood": "Fresh Food",
    "defaultCategory.cookedFood": "Cooked Food / Leftovers",
    "defaultCategory.cannedPackaged": "Canned / Packaged Food",
    "defaultCategory.frozenFood": "Frozen Food",
    "defaultCategory.snacks": "Snacks",
    "defaultCategory.drinks": "Drinks",
    "defaultCategory.dairy": "Dairy",
    "defaultCategory.meatSeafood": "Meat / Seafood",
    "defaultCategory.fruits": "Fruits",
    "defaultCategory.vegetables": "Vegetables",
    "defaultCategory.breadBakery": "Bread / Bakery",
    "defaultCategory.condimentsSauces": "Condiments & Sauces",
    "defaultCategory.spicesSeasoning": "Spices & Seasoning",
    "defaultCategory.babyFood": "Baby Food",
    "defaultCategory.medicine": "Medicine",
    "defaultCategory.supplements": "Supplements / Vitamins",
    "defaultCategory.firstAid": "First Aid",
    "defaultCategory.medicalDevices": "Medical Devices",
    "defaultCategory.skincare": "Skincare",
    "defaultCategory.makeup": "Makeup",
    "defaultCategory.hairCare": "Hair Care",
    "defaultCategory.bodyCare": "Body Care",
    "defaultCategory.perfume": "Perfume",
    "defaultCategory.hygieneProducts": "Hygiene Products",
    "defaultCategory.cleaningSupplies": "Cleaning Supplies",
    "defaultCategory.laundry": "Laundry",
    "defaultCategory.kitchenSupplies": "Kitchen Supplies",
    "defaultCategory.batteries": "Batteries",
    "defaultCategory.lightBulbs": "Light Bulbs",
    "defaultCategory.filters": "Filters",
    "defaultCategory.passport": "Passport",
    "defaultCategory.visa": "Visa / Residence Card",
    "defaultCategory.driverLicense": "Driver License",
    "defaultCategory.insurance": "Insurance",
    "defaultCategory.contracts": "Contracts",
    "defaultCategory.billsReceipts": "Bills / Receipts",
    "defaultCategory.warranty": "Warranty",
    "defaultCategory.certificates": "Certificates",
    "defaultCategory.membership": "Membership / Subscriptions",
    "defaultCategory.petFood": "Pet Food",
    "defaultCategory.petMedicine": "Pet Medicine",
    "defaultCategory.petSupplies": "Pet Supplies",
    "defaultCategory.electronics": "Electronics / Gadgets",
    "defaultCategory.stationery": "Stationery",
    "defaultCategory.miscellaneous": "Miscellaneous",
    # Locations
    "defaultLocation.fridge": "Fridge",
    "defaultLocation.fridgeTop": "Fridge (Top)",
    "defaultLocation.fridgeMiddle": "Fridge (Middle)",
    "defaultLocation.fridgeBottom": "Fridge (Bottom)",
    "defaultLocation.fridgeDoor": "Fridge Door",
    "defaultLocation.freezer": "Freezer",
    "defaultLocation.pantry": "Pantry",
    "defaultLocation.cabinet": "Cabinet",
    "defaultLocation.drawer": "Drawer",
    "defaultLocation.counterShelf": "Counter / Shelf",
    "defaultLocation.counter": "Counter",
    "defaultLocation.storageBox": "Storage Box",
    "defaultLocation.cardboardBox": "Cardboard Box",
    "defaultLocation.closet": "Closet / Wardrobe",
    "defaultLocation.underBed": "Under Bed",
    "defaultLocation.storageRoom": "Storage Room",
    "defaultLocation.garage": "Garage",
    "defaultLocation.balconyStorage": "Balcony Storage",
    "defaultLocation.bathroomCabinet": "Bathroom Cabinet",
    "defaultLocation.sinkDrawer": "Sink Drawer",
    "defaultLocation.showerShelf": "Shower Shelf",
    "defaultLocation.deskDrawer": "Desk Drawer",
    "defaultLocation.bookshelf": "Bookshelf",
    "defaultLocation.fileOrganizer": "File Organizer",
    "defaultLocation.backpack": "Backpack",
    "defaultLocation.suitcase": "Suitcase",
    # Sections
    "common.sectionCustomize": "Customize",
    "section.food": "Food",
    "section.beverages": "Beverages",
    "section.other": "Other",
    "section.health": "Health",
    "section.personalCare": "Personal Care",
    "section.home": "Home",
    "section.documents": "Documents",
    "section.pets": "Pets",
    "section.others": "Others",
    "section.kitchen": "Kitchen",
    "section.homeStorage": "Home Storage",
    "section.bathroom": "Bathroom",
    "section.office": "Office",
    "section.travel": "Travel",
    "locations.sectionOther": "Other",
    # Expiry labels
    "foodStatus.daysLeft": "days left",
    "foodStatus.expirestoday": "Expires today",
    "foodStatus.expiredDays": "days expired",
    "notification.expiringSoonTitle": "Food Expiring Soon",
    "notification.expiringTodayTitle": "Food Expiring Today!",
    "notification.expiredTitle": "Food Has Expired",
}

_JA = {
    "defaultCategory.freshFood": "生鮮食品",
    "defaultCategory.cookedFood": "調理済み / 残り物",
    "defaultCategory.cannedPackaged": "缶詰 / 加工食品",
    "defaultCategory.frozenFood": "冷凍食品",
    "defaultCategory.snacks": "お菓子",
    "defaultCategory.drinks": "飲み物",
    "defaultCategory.dairy": "乳製品",
    "defaultCategory.meatSeafood": "肉 / 魚介",
    "defaultCategory.fruits": "果物",
    "defaultCategory.vegetables": "野菜",
    "defaultCategory.breadBakery": "パン / ベーカリー",
    "defaultCategory.condimentsSauces": "調味料・ソース",
    "defaultCategory.spicesSeasoning": "スパイス",
    "defaultCategory.babyFood": "ベビーフード",
    "defaultCategory.medicine": "薬",
    "defaultCategory.supplements": "サプリメント / ビタミン",
    "defaultCategory.firstAid": "救急用品",
    "defaultCategory.medicalDevices": "医療機器",
    "defaultCategory.skincare": "スキンケア",
    "defaultCategory.makeup": "メイク",
    "defaultCategory.hairCare": "ヘアケア",
    "defaultCategory.bodyCare": "ボディケア",
    "defaultCategory.perfume": "香水",
    "defaultCategory.hygieneProducts": "衛生用品",
    "defaultCategory.cleaningSupplies": "掃除用品",
    "defaultCategory.laundry": "洗濯用品",
    "defaultCategory.kitchenSupplies": "キッチン用品",
    "defaultCategory.batteries": "電池",
    "defaultCategory.lightBulbs": "電球",
    "defaultCategory.filters": "フィルター",
    "defaultCategory.passport": "パスポート",
    "defaultCategory.visa": "ビザ / 在留カード",
    "defaultCategory.driverLicense": "運転免許証",
    "defaultCategory.insurance": "保険",
    "defaultCategory.contracts": "契約書",
    "defaultCategory.billsReceipts": "請求書 / レシート",
    "defaultCategory.warranty": "保証書",
    "defaultCategory.certificates": "証明書",
    "defaultCategory.membership": "会員 / サブスク",
    "defaultCategory.petFood": "ペットフード",
    "defaultCategory.petMedicine": "ペット用薬",
    "defaultCategory.petSupplies": "ペット用品",
    "defaultCategory.electronics": "電子機器 / ガジェット",
    "defaultCategory.stationery": "文房具",
    "defaultCategory.miscellaneous": "その他",
    "defaultLocation.fridge": "冷蔵庫",
    "defaultLocation.fridgeTop": "冷蔵庫（上段）",
    "defaultLocation.fridgeMiddle": "冷蔵庫（中段）",
    "defaultLocation.fridgeBottom": "冷蔵庫（下段）",
    "defaultLocation.fridgeDoor": "ドアポケット",
    "defaultLocation.freezer": "冷凍庫",
    "defaultLocation.pantry": "パントリー",
    "defaultLocation.cabinet": "戸棚",
    "defaultLocation.drawer": "引き出し",
    "defaultLocation.counterShelf": "カウンター / 棚",
    "defaultLocation.counter": "カウンター",
    "defaultLocation.storageBox": "収納ボックス",
    "defaultLocation.cardboardBox": "段ボール箱",
    "defaultLocation.closet": "クローゼット",
    "defaultLocation.underBed": "ベッド下",
    "defaultLocation.storageRoom": "物置",
    "defaultLocation.garage": "ガレージ",
    "defaultLocation.balconyStorage": "ベランダ収納",
    "defaultLocation.bathroomCabinet": "洗面台収納",
    "defaultLocation.sinkDrawer": "シンク下引き出し",
    "defaultLocation.showerShelf": "シャワー棚",
    "defaultLocation.deskDrawer": "机の引き出し",
    "defaultLocation.bookshelf": "本棚",
    "defaultLocation.fileOrganizer": "ファイル整理棚",
    "defaultLocation.backpack": "リュック",
    "defaultLocation.suitcase": "スーツケース",
    "common.sectionCustomize": "カスタマイズ",
    "section.food": "食品",
    "section.beverages": "飲料",
    "section.other": "その他",
    "section.health": "健康",
    "section.personalCare": "パーソナルケア",
    "section.home": "家庭用品",
    "section.documents": "書類",
    "section.pets": "ペット",
    "section.others": "その他",
    "section.kitchen": "キッチン",
    "section.homeStorage": "家庭収納",
    "section.bathroom": "浴室",
    "section.office": "オフィス",
    "section.travel": "旅行",
    "locations.sectionOther": "その他",
    "foodStatus.daysLeft": "日残り",
    "foodStatus.expirestoday": "今日まで",
    "foodStatus.expiredDays": "日経過",
    "notification.expiringSoonTitle": "期限間近の食品",
    "notification.expiringTodayTitle": "今日が期限の食品！",
    "notification.expiredTitle": "期限切れの食品",
}

_EMPTY: Mapping[str, str] = MappingProxyType({})

TRANSLATIONS: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "en": MappingProxyType(_EN),
    "ja": MappingProxyType(_JA),
})


def normalize_language(language: str | None) -> str:
    """Map a requested language code onto a recognized one (unknown → en)."""
    code = (language or "").strip().lower()
    return code if code in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def get_translations(language: str | None) -> Mapping[str, str]:
    """Return the key→string table for a language."""
    return TRANSLATIONS.get(normalize_language(language), _EMPTY)


def translate(key: str, table: Mapping[str, str]) -> str:
    """Look up a key, returning the key itself when no translation exists."""
    return table.get(key, key)
