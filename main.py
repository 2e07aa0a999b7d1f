"""Main Entry Point for product image prompt generation."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from dotenv import load_dotenv

from backend.services.prompt_generation import PromptGenerationService
from config.settings import get_settings
from models.prompts import PromptGenerationResult


def load_attribute_layer(path: Optional[str]) -> Optional[dict[str, str]]:
    """
    Load one attribute layer from a JSON file.

    Args:
        path: Path to a JSON object of string attributes, or None

    Returns:
        Attribute mapping or None
    """
    if not path:
        return None
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of attributes")
    return {str(key): "" if value is None else str(value) for key, value in data.items()}


async def run_prompt_generation(
    context: Optional[dict[str, str]],
    locked: Optional[dict[str, str]],
    predicted: Optional[dict[str, str]],
    fallback_only: bool = False,
) -> PromptGenerationResult:
    """Run the pipeline, or only the template path when ``fallback_only`` is set."""
    service = PromptGenerationService()
    if fallback_only:
        product = service.preprocess(context, locked, predicted)
        return PromptGenerationResult(prompts=service.fallback_prompts(product), source="fallback")
    return await service.generate(context, locked, predicted)


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(description="Generate front/back/model image prompts for an article")
    parser.add_argument("--context", default=None, help="JSON file with context attributes")
    parser.add_argument("--locked", default=None, help="JSON file with locked attributes")
    parser.add_argument("--predicted", default=None, help="JSON file with predicted attributes")
    parser.add_argument(
        "--fallback-only",
        action="store_true",
        help="Skip the LLM and use the template prompts",
    )
    parser.add_argument(
        "--view",
        choices=["front", "back", "model"],
        default=None,
        help="Print only the prompt for this view",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None):
    """Main function: load attribute files, generate prompts, print JSON."""
    args = parse_cli_args(argv)
    load_dotenv()
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    result = asyncio.run(
        run_prompt_generation(
            load_attribute_layer(args.context),
            load_attribute_layer(args.locked),
            load_attribute_layer(args.predicted),
            fallback_only=args.fallback_only,
        )
    )

    if args.view:
        print(result.prompts.for_view(args.view))
    else:
        print(json.dumps(result.model_dump(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
