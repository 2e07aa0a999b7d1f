"""Model profile configuration: customer segment -> model characteristics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from models.product import ModelProfile

logger = logging.getLogger(__name__)

ADULT_MODEL = ModelProfile(gender="unspecified", age_group="adult", descriptor="an adult model")
ADULT_FEMALE_MODEL = ModelProfile(gender="female", age_group="adult", descriptor="an adult female model")
ADULT_MALE_MODEL = ModelProfile(gender="male", age_group="adult", descriptor="an adult male model")
CHILD_MODEL = ModelProfile(gender="unspecified", age_group="child", descriptor="a child model")


@dataclass(frozen=True)
class ModelProfileTable:
    """Read-only configuration for ``model_profile``.

    Child models are only assigned through an exact ``segments`` entry;
    keyword matches never change the age group.
    """

    segments: Mapping[str, ModelProfile]
    female_keywords: tuple[str, ...]
    male_keywords: tuple[str, ...]
    female: ModelProfile = ADULT_FEMALE_MODEL
    male: ModelProfile = ADULT_MALE_MODEL
    default: ModelProfile = ADULT_MODEL

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "segments",
            MappingProxyType({key.strip().lower(): value for key, value in self.segments.items()}),
        )


SEGMENT_TO_MODEL_PROFILE: dict[str, ModelProfile] = {
    "Baby/Children": CHILD_MODEL,
    "Divided": ADULT_MODEL,
    "Ladieswear": ADULT_FEMALE_MODEL,
    "Menswear": ADULT_MALE_MODEL,
    "Sport": ADULT_MODEL,
}

DEFAULT_MODEL_PROFILE_TABLE = ModelProfileTable(
    segments=SEGMENT_TO_MODEL_PROFILE,
    female_keywords=("women", "female", "girls", "ladies", "womenswear", "ladieswear"),
    male_keywords=("men", "male", "boys", "menswear"),
)

DEFAULT_MODEL_PROFILE = DEFAULT_MODEL_PROFILE_TABLE.default


def model_profile(
    customer_segment: Optional[str],
    table: ModelProfileTable = DEFAULT_MODEL_PROFILE_TABLE,
) -> ModelProfile:
    """
    Get model profile from customer segment.

    Exact segment match first, then case-insensitive keyword search. Female
    keywords are checked before male ones since "women" contains "men".
    Unknown segments get the default adult profile.
    """
    if not customer_segment or not customer_segment.strip():
        return table.default

    lowered = customer_segment.strip().lower()
    if lowered in table.segments:
        return table.segments[lowered]

    if any(keyword in lowered for keyword in table.female_keywords):
        return table.female
    if any(keyword in lowered for keyword in table.male_keywords):
        return table.male

    logger.warning(
        "[ModelProfile] Unknown customer segment: %r, defaulting to %s",
        customer_segment,
        table.default.descriptor,
    )
    return table.default
