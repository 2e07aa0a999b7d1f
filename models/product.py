"""Product descriptor models for prompt generation."""

from __future__ import annotations

from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

AttributeLayer = Mapping[str, str]

PhotographyCategory = Literal["wearable", "footwear", "accessories", "non_wearable"]

ResolutionConfidence = Literal["high", "medium", "low"]

PHOTOGRAPHY_CATEGORIES: tuple[PhotographyCategory, ...] = (
    "wearable",
    "footwear",
    "accessories",
    "non_wearable",
)


class ResolvedDescriptor(BaseModel):
    """Canonical product descriptor merged from the attribute layers."""

    model_config = ConfigDict(frozen=True)

    product_type: str
    product_group: Optional[str] = None
    customer_segment: Optional[str] = None
    attributes: dict[str, str] = Field(default_factory=dict)
    type_confidence: ResolutionConfidence = Field(
        "high", description="How the product type was obtained"
    )


class ModelProfile(BaseModel):
    """Model characteristics used to phrase the model view."""

    model_config = ConfigDict(frozen=True)

    gender: Literal["male", "female", "unspecified"] = "unspecified"
    age_group: Literal["child", "adult"] = "adult"
    descriptor: str = Field(..., min_length=1)


class ProductData(BaseModel):
    """Preprocessed product data consumed by both prompt synthesizers."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    descriptor: ResolvedDescriptor
    photography_category: PhotographyCategory
    model_profile: ModelProfile

    @property
    def product_type(self) -> str:
        return self.descriptor.product_type

    @property
    def product_group(self) -> Optional[str]:
        return self.descriptor.product_group

    @property
    def customer_segment(self) -> Optional[str]:
        return self.descriptor.customer_segment

    @property
    def attributes(self) -> dict[str, str]:
        return self.descriptor.attributes
