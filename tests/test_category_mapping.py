"""Tests for photography category classification and model profiles."""

import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from backend.services.category_mapping import CategoryTable, classify, to_legacy_category
from backend.services.model_profiles import (
    DEFAULT_MODEL_PROFILE,
    ModelProfileTable,
    model_profile,
)
from models.product import ModelProfile


@pytest.mark.parametrize(
    "group, product_type, expected",
    [
        ("Garment Upper body", "Hoodie", "wearable"),
        ("Shoes", "Fashion Item", "footwear"),
        ("socks & tights", "Fashion Item", "footwear"),
        ("Bags", "Fashion Item", "accessories"),
        ("Interior textile", "Fashion Item", "non_wearable"),
    ],
)
def test_classify_by_product_group(group, product_type, expected):
    assert classify(group, product_type) == expected


@pytest.mark.parametrize(
    "product_type, expected",
    [
        ("Sneaker", "footwear"),
        ("Chelsea Boots", "footwear"),
        ("Leather Tote Bag", "accessories"),
        ("Aviator Sunglasses", "accessories"),
        ("Throw Cushion", "non_wearable"),
        ("Bootcut Jeans", "wearable"),
        ("T-Shirt", "wearable"),
    ],
)
def test_classify_by_product_type_keywords(product_type, expected):
    assert classify(None, product_type) == expected


@pytest.mark.parametrize(
    "product_type, expected",
    [
        ("Dress Shoes", "footwear"),
        ("Top Hat", "accessories"),
        ("Dress Watch", "accessories"),
        ("Top Handle Bag", "accessories"),
        ("Flat Front Trousers", "wearable"),
        ("Tie-Dye T-Shirt", "wearable"),
    ],
)
def test_classify_prefers_the_word_naming_the_product(product_type, expected):
    assert classify(None, product_type) == expected


def test_classify_ranks_specific_categories_before_clothing_words():
    assert classify(None, "Shoe Dress Charm") == "footwear"


def test_classify_matches_input_contained_in_keyword():
    assert classify(None, "Sweat") == "wearable"


def test_classify_defaults_to_wearable():
    assert classify(None, "Fashion Item") == "wearable"
    assert classify("Unknown group", "Gizmo") == "wearable"


def test_group_lookup_beats_product_type_keywords():
    assert classify("Garment Lower body", "Boot Socks") == "wearable"


def test_injected_table_replaces_defaults():
    table = CategoryTable(
        version="test",
        groups={"Home": "non_wearable"},
        keywords={"poncho": "accessories"},
        default="non_wearable",
    )

    assert classify("home", "Anything", table) == "non_wearable"
    assert classify(None, "Rain Poncho", table) == "accessories"
    assert classify(None, "Hoodie", table) == "non_wearable"
    assert table.version == "test"


def test_legacy_labels():
    assert to_legacy_category("wearable") == "Upper Body"
    assert to_legacy_category("non_wearable") == "Unknown"


@pytest.mark.parametrize(
    "segment, gender, age_group",
    [
        ("Menswear", "male", "adult"),
        ("menswear", "male", "adult"),
        ("Ladieswear", "female", "adult"),
        ("Baby/Children", "unspecified", "child"),
        ("Womens Sport", "female", "adult"),
        ("Men Basics", "male", "adult"),
        ("Girls Party", "female", "adult"),
        ("Divided", "unspecified", "adult"),
    ],
)
def test_model_profile_from_segment(segment, gender, age_group):
    profile = model_profile(segment)

    assert profile.gender == gender
    assert profile.age_group == age_group


def test_model_profile_defaults_for_missing_or_unknown_segment(caplog):
    caplog.set_level("WARNING")

    assert model_profile(None) == DEFAULT_MODEL_PROFILE
    assert model_profile("   ") == DEFAULT_MODEL_PROFILE
    assert model_profile("Outdoor") == DEFAULT_MODEL_PROFILE
    assert DEFAULT_MODEL_PROFILE.descriptor == "an adult model"
    assert any("Unknown customer segment" in record.message for record in caplog.records)


def test_model_profile_uses_injected_table():
    teen = ModelProfile(gender="unspecified", age_group="adult", descriptor="a young adult model")
    table = ModelProfileTable(
        segments={"Teens": teen},
        female_keywords=("her",),
        male_keywords=("him",),
    )

    assert model_profile("teens", table) == teen
    assert model_profile("For Her", table).gender == "female"
    assert model_profile("Menswear", table) == table.default
