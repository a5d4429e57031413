"""Jinja2 template rendering for generated artifacts.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``prism/generators/templates/`` directory and renders them with an
entity-derived context. The naming helpers are registered as filters so the
templates can derive class, method and alias names themselves.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from .naming import to_camel_case, to_diagram_id, to_pascal_case, to_snake_case


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders the ``.j2`` templates shipped with the generators package.

    Autoescaping is off: the output is PlantUML or source code, never HTML,
    and ``<<include>>`` style markers must survive untouched.
    """

    def __init__(self, template_dir: Optional[str | Path] = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pascal_case"] = to_pascal_case
        self.env.filters["camel_case"] = to_camel_case
        self.env.filters["snake_case"] = to_snake_case
        self.env.filters["diagram_id"] = to_diagram_id

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"uml/use_case.puml.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered text.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


_renderer: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    """Return the process-wide renderer, creating it on first use."""
    global _renderer
    if _renderer is None:
        _renderer = TemplateRenderer()
    return _renderer
