"""Prompt component and result models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageView = Literal["front", "back", "model"]

PromptSource = Literal["llm", "fallback", "cancelled"]


class PromptComponents(BaseModel):
    """Structured components that are assembled into the three view prompts.

    Field aliases are the camelCase keys of the JSON contract with the LLM.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, protected_namespaces=())

    product_description: str = Field(..., alias="productDescription", min_length=1)
    front_prefix: str = Field(..., alias="frontPrefix", min_length=1)
    back_prefix: str = Field(..., alias="backPrefix", min_length=1)
    model_prefix: str = Field(..., alias="modelPrefix", min_length=1)
    front_details: str = Field(..., alias="frontDetails", min_length=1)
    back_details: str = Field(..., alias="backDetails", min_length=1)
    model_details: str = Field(..., alias="modelDetails", min_length=1)


# JSON keys the LLM must return, in the order they are validated
REQUIRED_COMPONENT_FIELDS: tuple[str, ...] = tuple(
    field.alias or name for name, field in PromptComponents.model_fields.items()
)


class GeneratedPrompts(BaseModel):
    """Final assembled prompts for image generation."""

    model_config = ConfigDict(frozen=True)

    front: str
    back: str
    model: str

    def for_view(self, view: ImageView) -> str:
        """Return the prompt for a single image view."""
        return getattr(self, view)


class PromptGenerationResult(BaseModel):
    """Prompt generation result tagged with the path that produced it."""

    model_config = ConfigDict(frozen=True)

    prompts: GeneratedPrompts
    source: PromptSource
