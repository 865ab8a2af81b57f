"""HTML email template generator.

Renders a single responsive HTML email from an ``EmailTemplateOptions``
model.  Menu-style answers (font, button, header and layout style) are
resolved to concrete CSS here so the template only interpolates values.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storegen.config import Config
from storegen.errors import InputError
from storegen.utils import write_text_async

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Option vocabularies
# ---------------------------------------------------------------------------

ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")

FONT_OPTIONS: tuple[str, ...] = (
    "'Helvetica Neue', Helvetica, Arial, sans-serif",
    "'Georgia', serif",
    "'Segoe UI', Tahoma, Geneva, Verdana, sans-serif",
    "'Montserrat', sans-serif",
    "'Merriweather', serif",
)

BORDER_RADII: dict[str, str] = {
    "none": "0",
    "slight": "4px",
    "rounded": "8px",
    "pill": "30px",
}

BUTTON_STYLES: tuple[str, ...] = ("solid", "outline", "gradient", "soft-shadow", "rounded")

HEADER_STYLES: tuple[str, ...] = ("color-block", "gradient", "image")
HEADER_STYLE_LABELS: tuple[str, ...] = ("Solid color block", "Color gradient", "Background image")

LAYOUT_STYLES: tuple[str, ...] = ("card", "minimal", "bordered", "flat")
LAYOUT_STYLE_LABELS: tuple[str, ...] = (
    "Card (with shadow)",
    "Minimal (clean)",
    "Bordered",
    "Flat (no background)",
)

_TEMPLATE_NAME = re.compile(r"^[A-Za-z0-9 _-]+$")


class EmailTemplateOptions(BaseModel):
    """Every answer of the email template prompt session."""

    model_config = ConfigDict(frozen=True)

    template_name: str
    primary_color: str = "#4a86e8"
    secondary_color: str = "#f3f6fc"
    accent_color: str = "#ff7043"
    text_color: str = "#333333"
    background_color: str = "#f7f9fc"
    alignment: Literal["left", "center", "right"] = "center"
    font_family: str = FONT_OPTIONS[0]
    border_radius: str = Field(default="rounded", description="Key of BORDER_RADII")
    button_style: Literal["solid", "outline", "gradient", "soft-shadow", "rounded"] = "solid"
    header_style: Literal["color-block", "gradient", "image"] = "color-block"
    layout_style: Literal["card", "minimal", "bordered", "flat"] = "card"
    include_features: bool = True
    include_social: bool = True
    include_unsubscribe: bool = True

    @field_validator("template_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InputError("Template name is required")
        if not _TEMPLATE_NAME.match(value):
            raise InputError(
                f"Invalid template name: {value!r} (use letters, digits, spaces, - and _)"
            )
        return value

    @field_validator("border_radius")
    @classmethod
    def _check_radius(cls, value: str) -> str:
        if value not in BORDER_RADII:
            raise InputError(f"Unknown border radius: {value!r}")
        return value

    @property
    def border_radius_css(self) -> str:
        return BORDER_RADII[self.border_radius]


def email_file_name(template_name: str) -> str:
    """``"Welcome Email"`` -> ``"welcome-email.html"``."""
    return re.sub(r"\s+", "-", template_name.strip().lower()) + ".html"


# ---------------------------------------------------------------------------
# Style resolution
# ---------------------------------------------------------------------------


def _header_css(options: EmailTemplateOptions) -> str:
    primary, accent = options.primary_color, options.accent_color
    return {
        "color-block": f"background-color: {primary};",
        "gradient": f"background: linear-gradient(135deg, {primary} 0%, {accent} 100%);",
        "image": (
            "background: url('https://via.placeholder.com/600x150/"
            f"{primary.lstrip('#')}/ffffff?text=Your+Brand') center/cover;"
        ),
    }[options.header_style]


def _button_css(options: EmailTemplateOptions) -> str:
    primary, accent = options.primary_color, options.accent_color
    return {
        "solid": f"background-color: {primary}; color: white;",
        "outline": f"background-color: transparent; border: 2px solid {primary}; color: {primary};",
        "gradient": f"background: linear-gradient(135deg, {primary} 0%, {accent} 100%); color: white;",
        "soft-shadow": f"background-color: {primary}; color: white; box-shadow: 0 4px 6px rgba(0,0,0,0.1);",
        "rounded": f"background-color: {primary}; color: white; border-radius: 30px;",
    }[options.button_style]


def _layout_css(options: EmailTemplateOptions) -> str:
    return {
        "card": "box-shadow: 0 4px 12px rgba(0,0,0,0.05); border-radius: 8px;",
        "minimal": "box-shadow: none; border-radius: 0;",
        "bordered": f"border: 1px solid {options.secondary_color}; border-radius: 4px;",
        "flat": "box-shadow: none; border-radius: 0; background: transparent;",
    }[options.layout_style]


def compose_email_template(
    options: EmailTemplateOptions,
    renderer: TemplateRenderer,
    year: Optional[int] = None,
) -> str:
    """Render the HTML for *options*."""
    return renderer.render(
        "email/email_template.html.j2",
        {
            "o": options,
            "header_css": _header_css(options),
            "button_css": _button_css(options),
            "layout_css": _layout_css(options),
            "year": year or date.today().year,
        },
    )


def design_summary(options: EmailTemplateOptions) -> dict[str, str]:
    """Key choices printed after the template is written."""
    return {
        "Primary color": options.primary_color,
        "Button style": options.button_style,
        "Header style": options.header_style,
        "Layout style": options.layout_style,
        "Features section": "Included" if options.include_features else "Excluded",
    }


class EmailTemplateGenerator:
    """Writes one HTML email template under ``Config.email_templates_path``."""

    def __init__(self, config: Config, renderer: Optional[TemplateRenderer] = None) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()

    async def generate(self, options: EmailTemplateOptions, year: Optional[int] = None) -> Path:
        content = compose_email_template(options, self.renderer, year=year)
        target = self.config.email_templates_path / email_file_name(options.template_name)
        return await write_text_async(target, content)
