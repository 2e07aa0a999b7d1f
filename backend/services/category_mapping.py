"""Photography category classification for product groups and types."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from models.product import PhotographyCategory

logger = logging.getLogger(__name__)

# Containment matches shorter than this are ignored ("a", "to", ...)
MIN_CONTAINMENT_LENGTH = 3

# Specific categories win over clothing words ("dress shoes", "top hat")
DEFAULT_CATEGORY_PRIORITY: tuple[PhotographyCategory, ...] = (
    "footwear",
    "accessories",
    "non_wearable",
    "wearable",
)


def normalize_label(value: Optional[str]) -> str:
    """Lowercase, unify separators and collapse whitespace."""
    if not value:
        return ""
    lowered = value.lower().replace("_", " ")
    return re.sub(r"\s+", " ", lowered).strip()


def _freeze(mapping: Mapping[str, PhotographyCategory]) -> Mapping[str, PhotographyCategory]:
    return MappingProxyType({normalize_label(key): value for key, value in mapping.items()})


def _contains_word(text: str, keyword: str) -> bool:
    """Whole-word match, allowing a plural ``s``/``es`` ("boots", "watches")."""
    return re.search(rf"(?<![a-z0-9]){re.escape(keyword)}(?:e?s)?(?![a-z0-9])", text) is not None


@dataclass(frozen=True)
class CategoryTable:
    """Read-only lookup configuration for ``classify``.

    ``groups`` maps catalog product groups, ``keywords`` maps product type
    keywords. Both are normalized on construction. ``priority`` orders the
    categories when several keywords match the same text.
    """

    version: str
    groups: Mapping[str, PhotographyCategory]
    keywords: Mapping[str, PhotographyCategory]
    default: PhotographyCategory = "wearable"
    priority: tuple[PhotographyCategory, ...] = DEFAULT_CATEGORY_PRIORITY
    _ranked_keywords: tuple[tuple[str, PhotographyCategory], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        groups = _freeze(self.groups)
        keywords = _freeze(self.keywords)
        object.__setattr__(self, "groups", groups)
        object.__setattr__(self, "keywords", keywords)
        # Category priority first, then longest keyword, then table order
        rank = {category: index for index, category in enumerate(self.priority)}
        order = {key: index for index, key in enumerate(keywords)}
        ranked = sorted(
            keywords.items(),
            key=lambda item: (rank.get(item[1], len(rank)), -len(item[0]), order[item[0]]),
        )
        object.__setattr__(self, "_ranked_keywords", tuple(ranked))

    def match_exact(self, product_group: str, product_type: str) -> Optional[PhotographyCategory]:
        if product_group and product_group in self.groups:
            return self.groups[product_group]
        if product_type and product_type in self.keywords:
            return self.keywords[product_type]
        return None

    def match_containment(self, text: str) -> Optional[PhotographyCategory]:
        """
        Match keywords contained in ``text``.

        The last word names the product ("dress shoes", "flat front trousers")
        and is tried first. Then any whole word, by category priority, then
        plain substrings in either direction ("sweat" in "sweater"), then
        product groups.
        """
        if len(text) < MIN_CONTAINMENT_LENGTH:
            return None
        head = text.rsplit(" ", 1)[-1]
        for keyword, category in self._ranked_keywords:
            if _contains_word(head, keyword):
                return category
        for keyword, category in self._ranked_keywords:
            if _contains_word(text, keyword):
                return category
        for keyword, category in self._ranked_keywords:
            if keyword in text or text in keyword:
                return category
        for group, category in self.groups.items():
            if group in text or text in group:
                return category
        return None


PRODUCT_GROUP_TO_CATEGORY: dict[str, PhotographyCategory] = {
    # Wearable
    "Garment Upper body": "wearable",
    "Garment Lower body": "wearable",
    "Garment Full body": "wearable",
    "Nightwear": "wearable",
    "Swimwear": "wearable",
    "Underwear": "wearable",
    "Underwear/nightwear": "wearable",
    # Footwear
    "Shoes": "footwear",
    "Socks & Tights": "footwear",
    # Accessories
    "Bags": "accessories",
    "Accessories": "accessories",
    # Non-wearable
    "Interior textile": "non_wearable",
    "Furniture": "non_wearable",
    "Cosmetic": "non_wearable",
    "Garment and Shoe care": "non_wearable",
    "Items": "non_wearable",
    "Fun": "non_wearable",
    "Stationery": "non_wearable",
}

_WEARABLE_KEYWORDS = [
    "t-shirt", "shirt", "blouse", "top", "hoodie", "sweater", "cardigan", "jacket",
    "coat", "blazer", "vest", "dress", "jumpsuit", "trousers", "pants", "jeans",
    "shorts", "skirt", "leggings", "bikini", "swimsuit", "bra", "pyjama",
]
_FOOTWEAR_KEYWORDS = [
    "shoe", "sneaker", "boot", "heel", "sandal", "loafer", "flat", "pump", "mule",
    "slipper", "sock", "tight", "hosiery",
]
_ACCESSORY_KEYWORDS = [
    "bag", "handbag", "backpack", "tote", "clutch", "hat", "cap", "beanie", "scarf",
    "belt", "watch", "jewelry", "necklace", "pendant", "bracelet", "earring", "sunglasses",
    "gloves", "tie",
]
_NON_WEARABLE_KEYWORDS = [
    "cushion", "pillow", "blanket", "towel", "furniture", "table", "cosmetic",
    "lipstick", "makeup", "toy", "umbrella", "keychain", "case", "pen", "marker",
    "stationery",
]

PRODUCT_TYPE_KEYWORDS: dict[str, PhotographyCategory] = {
    **{keyword: "wearable" for keyword in _WEARABLE_KEYWORDS},
    **{keyword: "footwear" for keyword in _FOOTWEAR_KEYWORDS},
    **{keyword: "accessories" for keyword in _ACCESSORY_KEYWORDS},
    **{keyword: "non_wearable" for keyword in _NON_WEARABLE_KEYWORDS},
}

DEFAULT_CATEGORY_TABLE = CategoryTable(
    version="2024.1",
    groups=PRODUCT_GROUP_TO_CATEGORY,
    keywords=PRODUCT_TYPE_KEYWORDS,
    default="wearable",
)


def classify(
    product_group: Optional[str],
    product_type: str,
    table: CategoryTable = DEFAULT_CATEGORY_TABLE,
) -> PhotographyCategory:
    """
    Get photography category for a product.

    Exact product group lookup first, then exact product type keyword, then
    substring containment on the product type and the product group. Falls
    back to the table default (wearable, the most common case).
    """
    group = normalize_label(product_group)
    product = normalize_label(product_type)

    category = table.match_exact(group, product)
    if category is None:
        category = table.match_containment(product) or table.match_containment(group)

    if category is None:
        logger.debug(
            "[CategoryMapping] No match for group=%r type=%r, defaulting to %s",
            product_group,
            product_type,
            table.default,
        )
        return table.default
    return category


# Labels of the superseded preprocessing API
LEGACY_CATEGORY_LABELS: dict[PhotographyCategory, str] = {
    "wearable": "Upper Body",
    "footwear": "Footwear",
    "accessories": "Accessory",
    "non_wearable": "Unknown",
}


def to_legacy_category(category: PhotographyCategory) -> str:
    return LEGACY_CATEGORY_LABELS[category]
