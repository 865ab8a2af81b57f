"""Jinja2 template rendering for the generated store files.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``storegen/scaffolder/templates/`` directory and renders them with the
context built by the composers.  Long literal bodies (the Firestore actions
factory, the auth flow block, the email HTML, Cloud Function scaffolding)
live in templates; the short structural parts are built as IR instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from storegen.naming import capitalize_first, js_property_key, js_string


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for the store, email and function generators.

    Undefined variables raise instead of rendering as empty text, so a
    missing context key surfaces as a composition failure rather than as
    broken JavaScript.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["capitalize_first"] = capitalize_first
        self.env.filters["js_key"] = js_property_key
        self.env.filters["js_string"] = js_string

    # -- Rendering -----------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"store/state.js.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)
