from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

logger = logging.getLogger(__name__)

PROMPT_ROOT = Path(__file__).parent / "product"
BASE_RULES_TEMPLATE = "base_rules.md"


class PromptLoader:
    """Render the product prompt templates.

    Every render also renders ``base_rules.md`` with the same variables and
    passes it in as ``base_rules``, so the shared output contract (and the
    quality suffix it quotes) is written once.
    """

    def __init__(self, root: Path | None = None):
        self.root = root or PROMPT_ROOT
        self.env = Environment(loader=FileSystemLoader(self.root))

    def _get(self, name: str):
        try:
            return self.env.get_template(name)
        except TemplateNotFound as exc:
            raise FileNotFoundError(f"Prompt template not found: {self.root / name}") from exc

    def _base_rules(self, variables: dict[str, Any]) -> str:
        if BASE_RULES_TEMPLATE not in self.env.list_templates():
            return ""
        return self._get(BASE_RULES_TEMPLATE).render(**variables).strip()

    def render_template(self, name: str, variables: dict[str, Any]) -> str:
        """Render ``name`` with ``variables`` plus the rendered base rules."""
        template = self._get(name)
        context = {"base_rules": self._base_rules(variables), **variables}
        rendered = template.render(**context).strip()
        logger.debug("[PromptLoader] Rendered %s (%d chars)", name, len(rendered))
        return rendered
