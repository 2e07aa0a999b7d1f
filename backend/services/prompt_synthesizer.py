"""LLM-backed synthesis of prompt components and prompt assembly."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from backend.prompts.loader import PromptLoader
from models.product import ProductData
from models.prompts import REQUIRED_COMPONENT_FIELDS, GeneratedPrompts, PromptComponents
from services.llm_service import LLMService, get_llm_service

logger = logging.getLogger(__name__)

QUALITY_SUFFIX = (
    "plain white studio background, shadowless, 4K quality, sharp focus, no text, "
    "no watermarks, no logos, high-end e-commerce photography."
)

SYSTEM_TEMPLATE = "system_prompt.md"
USER_TEMPLATE = "user_prompt.md"

_CODE_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


class PromptSynthesisError(Exception):
    """Base class for unusable LLM replies."""


class ResponseParseError(PromptSynthesisError):
    """Reply is not a JSON object after fence stripping."""


class ResponseValidationError(PromptSynthesisError):
    """Reply is missing a required component."""

    def __init__(self, field: str):
        super().__init__(f"Invalid component structure: missing {field}")
        self.field = field


def strip_code_fence(text: str) -> str:
    """Return the content of the first fenced code block, else the trimmed text."""
    stripped = (text or "").strip()
    match = _CODE_FENCE.search(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_components(text: str) -> PromptComponents:
    """
    Parse and validate an LLM reply into ``PromptComponents``.

    Raises:
        ResponseParseError: reply is not a JSON object
        ResponseValidationError: a component is missing, not a string or blank
    """
    payload = strip_code_fence(text)
    try:
        data: Any = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"LLM reply is not valid JSON: {exc.msg}") from exc

    if not isinstance(data, dict):
        raise ResponseParseError(f"LLM reply is a JSON {type(data).__name__}, expected an object")

    for field in REQUIRED_COMPONENT_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ResponseValidationError(field)

    return PromptComponents.model_validate(
        {field: data[field].strip() for field in REQUIRED_COMPONENT_FIELDS}
    )


def assemble_prompts(components: PromptComponents) -> GeneratedPrompts:
    """
    Assemble final prompts from components.

    Every view reuses the same product description so the three generated
    images show the same product.
    """
    description = components.product_description
    return GeneratedPrompts(
        front=f"{components.front_prefix} {description}. {components.front_details}. {QUALITY_SUFFIX}",
        back=f"{components.back_prefix} {description}. {components.back_details}. {QUALITY_SUFFIX}",
        model=f"{components.model_prefix} {description}. {components.model_details}. {QUALITY_SUFFIX}",
    )


class LLMPromptSynthesizer:
    """Generates prompt components with one structured LLM request."""

    def __init__(
        self,
        llm_service: Optional[LLMService] = None,
        prompt_loader: Optional[PromptLoader] = None,
        temperature: float = 0.7,
    ):
        self._llm_service = llm_service
        self.prompt_loader = prompt_loader or PromptLoader()
        self.temperature = temperature

    @property
    def llm_service(self) -> LLMService:
        """Lazy-load LLM service."""
        if self._llm_service is None:
            self._llm_service = get_llm_service()
        return self._llm_service

    def build_system_prompt(self, product: ProductData) -> str:
        """Build the system prompt with category rules and the model profile."""
        return self.prompt_loader.render_template(
            SYSTEM_TEMPLATE,
            {
                "category": product.photography_category,
                "model_descriptor": product.model_profile.descriptor,
                "age_group": product.model_profile.age_group,
                "quality_suffix": QUALITY_SUFFIX,
            },
        )

    def build_user_prompt(self, product: ProductData) -> str:
        return self.prompt_loader.render_template(
            USER_TEMPLATE,
            {
                "product_group": product.product_group,
                "product_type": product.product_type,
                "customer_segment": product.customer_segment,
                "category": product.photography_category,
                "attributes": product.attributes,
            },
        )

    async def synthesize(self, product: ProductData) -> PromptComponents:
        """
        Generate prompt components using the LLM.

        Raises:
            BackendTransportError: request failed
            ResponseParseError: reply is not JSON
            ResponseValidationError: reply misses a component
        """
        system_prompt = self.build_system_prompt(product)
        user_prompt = self.build_user_prompt(product)

        logger.info(
            "[PromptGen] Calling LLM for %s (category=%s, model=%s)",
            product.product_type,
            product.photography_category,
            product.model_profile.descriptor,
        )
        reply = await self.llm_service.generate_response(
            system_prompt=system_prompt,
            user_message=user_prompt,
            temperature=self.temperature,
        )

        components = parse_components(reply)
        description = components.product_description
        logger.info(
            "[PromptGen] LLM components generated: %s",
            description if len(description) <= 100 else description[:100] + "...",
        )
        return components
