"""Prompt generation service: resolve, classify, synthesize with fallback."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Optional, Protocol, TypeVar

from config.settings import get_settings
from models.product import AttributeLayer, ProductData
from models.prompts import GeneratedPrompts, PromptComponents, PromptGenerationResult
from services.llm_service import BackendTransportError

from .attribute_resolver import resolve
from .category_mapping import DEFAULT_CATEGORY_TABLE, CategoryTable, classify
from .fallback_prompts import build_fallback_components
from .model_profiles import DEFAULT_MODEL_PROFILE_TABLE, ModelProfileTable, model_profile
from .prompt_synthesizer import LLMPromptSynthesizer, PromptSynthesisError, assemble_prompts

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Logged without traceback; anything else is unexpected
EXPECTED_ATTEMPT_ERRORS = (BackendTransportError, PromptSynthesisError)


class ComponentSynthesizer(Protocol):
    async def synthesize(self, product: ProductData) -> PromptComponents:
        """Produce prompt components or raise."""
        ...


class _Cancelled(Exception):
    """Internal signal: the caller set the cancel event."""


class PromptGenerationService:
    """
    Generates front/back/model image prompts for a catalog article.

    The LLM path is attempted ``max_attempts`` times, strictly one after the
    other; afterwards the deterministic template path takes over, so
    ``generate`` always returns populated prompts.
    """

    def __init__(
        self,
        synthesizer: Optional[ComponentSynthesizer] = None,
        *,
        category_table: CategoryTable = DEFAULT_CATEGORY_TABLE,
        profile_table: ModelProfileTable = DEFAULT_MODEL_PROFILE_TABLE,
        max_attempts: Optional[int] = None,
        retry_delay: Optional[float] = None,
    ):
        settings = get_settings()
        self.synthesizer = synthesizer or LLMPromptSynthesizer(temperature=settings.prompt_temperature)
        self.category_table = category_table
        self.profile_table = profile_table
        self.max_attempts = max(1, max_attempts if max_attempts is not None else settings.prompt_max_attempts)
        self.retry_delay = max(0.0, retry_delay if retry_delay is not None else settings.prompt_retry_delay)

    # --------------------------- public API ---------------------------
    def preprocess(
        self,
        context: Optional[AttributeLayer] = None,
        locked: Optional[AttributeLayer] = None,
        predicted: Optional[AttributeLayer] = None,
    ) -> ProductData:
        """Resolve the attribute layers and classify the product."""
        descriptor = resolve(context, locked, predicted)
        return ProductData(
            descriptor=descriptor,
            photography_category=classify(
                descriptor.product_group, descriptor.product_type, self.category_table
            ),
            model_profile=model_profile(descriptor.customer_segment, self.profile_table),
        )

    def fallback_prompts(self, product: ProductData) -> GeneratedPrompts:
        return assemble_prompts(build_fallback_components(product))

    async def generate(
        self,
        context: Optional[AttributeLayer] = None,
        locked: Optional[AttributeLayer] = None,
        predicted: Optional[AttributeLayer] = None,
        *,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> PromptGenerationResult:
        """
        Generate image prompts with retry and fallback logic.

        Args:
            context: Context attributes (lowest precedence)
            locked: Locked attributes
            predicted: Predicted attributes (highest precedence)
            cancel_event: When set, no further LLM attempts are made and the
                in-flight request is abandoned

        Returns:
            PromptGenerationResult tagged ``llm``, ``fallback`` or ``cancelled``
        """
        product = self.preprocess(context, locked, predicted)
        logger.info(
            "[PromptGen] Preprocessed product: type=%s group=%s segment=%s category=%s model=%s attributes=%d",
            product.product_type,
            product.product_group,
            product.customer_segment,
            product.photography_category,
            product.model_profile.descriptor,
            len(product.attributes),
        )

        try:
            for attempt in range(1, self.max_attempts + 1):
                if cancel_event is not None and cancel_event.is_set():
                    raise _Cancelled()
                try:
                    components = await self._unless_cancelled(
                        self.synthesizer.synthesize(product), cancel_event
                    )
                    return PromptGenerationResult(prompts=assemble_prompts(components), source="llm")
                except _Cancelled:
                    raise
                except Exception as exc:
                    logger.error(
                        "[PromptGen] LLM attempt %d/%d failed: %s: %s",
                        attempt,
                        self.max_attempts,
                        type(exc).__name__,
                        exc,
                        exc_info=not isinstance(exc, EXPECTED_ATTEMPT_ERRORS),
                    )

                if attempt < self.max_attempts:
                    logger.info("[PromptGen] Retrying in %.1fs...", self.retry_delay)
                    await self._unless_cancelled(asyncio.sleep(self.retry_delay), cancel_event)
        except _Cancelled:
            logger.info("[PromptGen] Generation cancelled, returning template prompts")
            return PromptGenerationResult(prompts=self.fallback_prompts(product), source="cancelled")

        logger.warning("[PromptGen] LLM failed after %d attempts, using fallback prompts", self.max_attempts)
        return PromptGenerationResult(prompts=self.fallback_prompts(product), source="fallback")

    # --------------------------- helpers ---------------------------
    async def _unless_cancelled(self, awaitable: Awaitable[T], cancel_event: Optional[asyncio.Event]) -> T:
        """Await ``awaitable`` unless ``cancel_event`` fires first."""
        if cancel_event is None:
            return await awaitable

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(cancel_event.wait())
        try:
            await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

        if task.cancelled():
            raise _Cancelled()
        return task.result()


_prompt_generation_service: Optional[PromptGenerationService] = None


def get_prompt_generation_service() -> PromptGenerationService:
    global _prompt_generation_service
    if _prompt_generation_service is None:
        _prompt_generation_service = PromptGenerationService()
        logger.info("[PromptGen] Singleton instance created")
    return _prompt_generation_service


async def generate_image_prompts_with_fallback(
    context: Optional[AttributeLayer] = None,
    locked: Optional[AttributeLayer] = None,
    predicted: Optional[AttributeLayer] = None,
    **kwargs: Any,
) -> PromptGenerationResult:
    """Main entry point: generate prompts with the shared service instance."""
    return await get_prompt_generation_service().generate(context, locked, predicted, **kwargs)
