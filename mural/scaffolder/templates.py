"""Jinja2 template rendering for app and project scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``mural/scaffolder/templates/`` directory and renders them with a context
dictionary.  Rendering is pure: nothing here touches the output tree, which
is the writer's job.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the built-in Jinja2 templates.

    Templates live under ``app/`` (per-app files), ``project/`` (new project
    skeleton) and ``messages/`` (next-step text printed after scaffolding).
    Undefined variables raise instead of rendering as empty strings, so a
    missing context key can never leak into generated code.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        # Register custom filters
        self.env.filters["jsonify"] = _jsonify_filter
        self.env.filters["camel_case"] = _camel_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"app/router.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered content, normalised to end with exactly one newline.
        """
        template = self.env.get_template(template_path)
        return _single_trailing_newline(template.render(**context))


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _jsonify_filter(value: Any) -> str:
    """Serialise *value* as a JSON literal (strings get quoted and escaped)."""
    return json.dumps(value)


def _camel_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    parts = [word for word in re.split(r"[-_\s]+", value) if word]
    if not parts:
        return ""
    head = parts[0][0].lower() + parts[0][1:]
    return head + "".join(word.capitalize() for word in parts[1:])


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _single_trailing_newline(text: str) -> str:
    return text.strip() + "\n"
