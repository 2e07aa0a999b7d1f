"""Merge layered catalog attributes into one canonical product descriptor."""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import Optional

from models.product import AttributeLayer, ResolutionConfidence, ResolvedDescriptor

logger = logging.getLogger(__name__)

FALLBACK_PRODUCT_TYPE = "Fashion Item"

PRODUCT_TYPE_KEYS = ("article_product_type", "product_type")
PRODUCT_GROUP_KEYS = ("article_product_group", "product_group")
CUSTOMER_SEGMENT_KEYS = ("article_customer_segment", "customer_segment")

# Extracted into dedicated descriptor fields, never repeated as attributes
CONSUMED_KEYS = frozenset((*PRODUCT_TYPE_KEYS, *PRODUCT_GROUP_KEYS, *CUSTOMER_SEGMENT_KEYS))

INTERNAL_KEY_PREFIX = "_"
ARTICLE_PREFIX = "article_"

# ontology_{productType}_{attribute}; product types use hyphens, never underscores
ONTOLOGY_KEY_PATTERN = re.compile(r"^ontology_([^_]+(?:-[^_]+)*)_")


def merge_layers(
    context: Optional[AttributeLayer] = None,
    locked: Optional[AttributeLayer] = None,
    predicted: Optional[AttributeLayer] = None,
) -> dict[str, str]:
    """Merge the layers; predicted overrides locked overrides context."""
    merged: dict[str, str] = {}
    for layer in (context, locked, predicted):
        if layer:
            merged.update(layer)
    return merged


def format_product_type(key: str) -> str:
    """
    Format product type from key format to display format.

    e.g. ``"t-shirt"`` -> ``"T-Shirt"``, ``"hoodie"`` -> ``"Hoodie"``
    """
    return "-".join(word[:1].upper() + word[1:].lower() for word in key.split("-"))


def clean_attribute_key(key: str) -> str:
    """
    Strip the namespace prefix from an attribute key.

    e.g. ``"ontology_hoodie_pocket_type"`` -> ``"pocket_type"``,
    ``"article_specific_color"`` -> ``"specific_color"``
    """
    if key.startswith("ontology_"):
        return ONTOLOGY_KEY_PATTERN.sub("", key, count=1)
    if key.startswith(ARTICLE_PREFIX):
        return key[len(ARTICLE_PREFIX):]
    return key


def _first_present(attributes: dict[str, str], keys: tuple[str, ...]) -> Optional[str]:
    for key in keys:
        value = attributes.get(key)
        if value and value.strip():
            return value
    return None


def extract_product_type(attributes: dict[str, str]) -> tuple[str, ResolutionConfidence]:
    """
    Determine the product type of the merged attributes.

    Priority: 1) ``article_product_type`` or ``product_type`` verbatim,
    2) the product type named by most ``ontology_*`` keys, compared
    case-insensitively. Ties between equally frequent types are broken
    alphabetically so the result never depends on key order.

    Returns:
        Tuple of display product type and confidence
    """
    explicit = _first_present(attributes, PRODUCT_TYPE_KEYS)
    if explicit:
        return explicit, "high"

    counts: Counter[str] = Counter()
    for key in attributes:
        if key.startswith(INTERNAL_KEY_PREFIX):
            continue
        match = ONTOLOGY_KEY_PATTERN.match(key)
        if match:
            counts[match.group(1).lower()] += 1

    if not counts:
        logger.warning(
            "[AttributeResolver] Could not determine product type, using fallback '%s'",
            FALLBACK_PRODUCT_TYPE,
        )
        return FALLBACK_PRODUCT_TYPE, "low"

    if len(counts) == 1:
        (only,) = counts
        return format_product_type(only), "high"

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    chosen = ranked[0][0]
    logger.warning(
        "[AttributeResolver] Multiple product types found: %s. Using most frequent: %s",
        ", ".join(f"{name}={count}" for name, count in ranked),
        chosen,
    )
    return format_product_type(chosen), "medium"


def clean_attributes(attributes: dict[str, str], consumed_keys: frozenset[str]) -> dict[str, str]:
    """Drop internal and consumed keys, strip key prefixes, trim values."""
    cleaned: dict[str, str] = {}
    for key, value in attributes.items():
        if key.startswith(INTERNAL_KEY_PREFIX) or key in consumed_keys:
            continue
        if value is None:
            continue
        value = str(value).strip()
        if not value:
            continue
        cleaned[clean_attribute_key(key)] = value
    return cleaned


def resolve(
    context: Optional[AttributeLayer] = None,
    locked: Optional[AttributeLayer] = None,
    predicted: Optional[AttributeLayer] = None,
) -> ResolvedDescriptor:
    """
    Resolve the three attribute layers into a canonical descriptor.

    Args:
        context: Attributes inherited from the selected product scope
        locked: Attributes fixed by the user
        predicted: Attributes predicted by the enrichment model

    Returns:
        ResolvedDescriptor; never raises
    """
    merged = merge_layers(context, locked, predicted)

    product_type, confidence = extract_product_type(merged)
    product_group = _first_present(merged, PRODUCT_GROUP_KEYS)
    customer_segment = _first_present(merged, CUSTOMER_SEGMENT_KEYS)
    attributes = clean_attributes(merged, CONSUMED_KEYS)

    return ResolvedDescriptor(
        product_type=product_type,
        product_group=product_group,
        customer_segment=customer_segment,
        attributes=attributes,
        type_confidence=confidence,
    )
