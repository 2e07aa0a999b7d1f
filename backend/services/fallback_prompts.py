"""Template-based prompt components used when the LLM is unavailable."""

from __future__ import annotations

import re
from typing import Optional

from models.product import ModelProfile, PhotographyCategory, ProductData, ResolvedDescriptor
from models.prompts import PromptComponents

GENERIC_MODEL_DESCRIPTOR = "a model"

COLOR_KEYS = ("specific_color", "color_family", "color")
MATERIAL_KEYS = ("material", "fabric_type_base", "fabric")
FIT_KEYS = ("fit",)
STYLE_KEYS = ("style",)

# Keys represented by the leading description words
DESCRIPTION_KEYS = frozenset(COLOR_KEYS + MATERIAL_KEYS + FIT_KEYS + STYLE_KEYS)

# Lower-body garments are photographed flat instead of on a ghost mannequin
LOWER_BODY_PATTERN = re.compile(r"trouser|pant|jean|short|skirt|legging", re.IGNORECASE)

# Vowel letter with a consonant sound ("a uniform") and the reverse ("an hour")
CONSONANT_SOUND_PATTERN = re.compile(r"^(?:uni|use|usu|uti|eu|ewe|one\b)", re.IGNORECASE)
VOWEL_SOUND_PATTERN = re.compile(r"^(?:hour|honest|honou?r|heir)", re.IGNORECASE)


def _first_value(attributes: dict[str, str], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = attributes.get(key)
        if value:
            return value
    return ""


def build_product_description(product_type: str, attributes: dict[str, str]) -> str:
    """
    Build the shared product description from attributes.

    ``[color] [material] [fit] [style] [type] with key: value, ...``
    """
    parts = [
        _first_value(attributes, COLOR_KEYS),
        _first_value(attributes, MATERIAL_KEYS),
        _first_value(attributes, FIT_KEYS),
        _first_value(attributes, STYLE_KEYS),
        product_type,
    ]
    description = " ".join(part for part in parts if part)

    other_attrs = ", ".join(
        f"{key.replace('_', ' ')}: {value}"
        for key, value in attributes.items()
        if key not in DESCRIPTION_KEYS
    )
    if other_attrs:
        return f"{description} with {other_attrs}"
    return description


def is_lower_body(product_type: str) -> bool:
    return LOWER_BODY_PATTERN.search(product_type or "") is not None


def _is_plural(product_type: str) -> bool:
    last_word = product_type.strip().split(" ")[-1].lower() if product_type.strip() else ""
    return last_word.endswith("s") and not last_word.endswith("ss")


def indefinite_article(description: str, product_type: str) -> str:
    """Article for the description; empty for plural products like trousers."""
    if _is_plural(product_type) or not description:
        return ""
    if VOWEL_SOUND_PATTERN.match(description):
        return "an"
    if CONSONANT_SOUND_PATTERN.match(description):
        return "a"
    return "an" if description[0].lower() in "aeiou" else "a"


def _with_article(prefix: str, article: str) -> str:
    return f"{prefix} {article}" if article else prefix


def build_fallback_components(
    product: ProductData | ResolvedDescriptor,
    category: Optional[PhotographyCategory] = None,
    model_profile: Optional[ModelProfile] = None,
) -> PromptComponents:
    """
    Build fallback prompt components when the LLM fails.

    Deterministic and free of I/O. ``category`` and ``model_profile`` default
    to the values stored on ``ProductData``; a missing profile falls back to a
    generic model phrasing and a missing category to wearable.
    """
    if isinstance(product, ProductData):
        descriptor = product.descriptor
        category = category or product.photography_category
        model_profile = model_profile or product.model_profile
    else:
        descriptor = product
    category = category or "wearable"
    model = model_profile.descriptor if model_profile else GENERIC_MODEL_DESCRIPTOR

    product_type = descriptor.product_type
    description = build_product_description(product_type, descriptor.attributes)
    article = indefinite_article(description, product_type)

    if category == "footwear":
        return PromptComponents(
            product_description=description,
            front_prefix=_with_article("Professional footwear photography, front three-quarter view of", article),
            back_prefix=_with_article("Professional footwear photography, back view of", article),
            model_prefix=_with_article(f"Fashion photography, cropped shot from mid-thigh down of {model} wearing", article),
            front_details="Displayed as a pair with one shoe slightly forward",
            back_details="Pair shown from behind highlighting heel and sole profile",
            model_details="Styled with dark jeans, standing in a natural pose",
        )

    if category == "accessories":
        return PromptComponents(
            product_description=description,
            front_prefix=_with_article("Professional product photography, front three-quarter view of", article),
            back_prefix=_with_article("Professional product photography, back view of", article),
            model_prefix=_with_article(f"Fashion photography, shot of {model} styled with", article),
            front_details="Showing main design details and construction",
            back_details="Showing rear panel and construction details",
            model_details="Accessory as focal point, clean minimal styling",
        )

    if category == "non_wearable":
        return PromptComponents(
            product_description=description,
            front_prefix=_with_article("Professional product photography, front view of", article),
            back_prefix=_with_article("Professional product photography, alternate angle of", article),
            model_prefix=_with_article("Lifestyle photography featuring", article),
            front_details="Clean product shot showing main features",
            back_details="Showing back panel and secondary details",
            model_details="Product styled in appropriate context, warm natural lighting",
        )

    if is_lower_body(product_type):
        return PromptComponents(
            product_description=description,
            front_prefix=_with_article("Professional flat lay photography, overhead view of", article),
            back_prefix=_with_article("Professional flat lay photography, overhead back view of", article),
            model_prefix=_with_article(f"Fashion photography, full body shot of {model} wearing", article),
            front_details="Laid flat on white surface, neatly pressed, strictly product only",
            back_details="Laid flat face down on white surface, strictly the back side",
            model_details="Styled with a neutral top, standing in a natural pose",
        )

    return PromptComponents(
        product_description=description,
        front_prefix=_with_article("Ghost mannequin fashion photography, front view of", article),
        back_prefix=_with_article("Ghost mannequin fashion photography, back view of", article),
        model_prefix=_with_article(f"Fashion photography, full body shot of {model} wearing", article),
        front_details="Displayed on invisible form, strictly product only, no human skin visible",
        back_details="Displayed on invisible form showing rear panel, strictly the back side",
        model_details="Styled with neutral complementary garments, standing in a natural pose",
    )
