"""Models package for product prompt generation."""

from models.product import (
    PHOTOGRAPHY_CATEGORIES,
    AttributeLayer,
    ModelProfile,
    PhotographyCategory,
    ProductData,
    ResolutionConfidence,
    ResolvedDescriptor,
)
from models.prompts import (
    REQUIRED_COMPONENT_FIELDS,
    GeneratedPrompts,
    ImageView,
    PromptComponents,
    PromptGenerationResult,
    PromptSource,
)

__all__ = [
    # Product models
    "AttributeLayer",
    "PhotographyCategory",
    "PHOTOGRAPHY_CATEGORIES",
    "ResolutionConfidence",
    "ResolvedDescriptor",
    "ModelProfile",
    "ProductData",
    # Prompt models
    "ImageView",
    "PromptSource",
    "PromptComponents",
    "REQUIRED_COMPONENT_FIELDS",
    "GeneratedPrompts",
    "PromptGenerationResult",
]
