"""Firebase Cloud Function scaffolding.

Ensures the shared files of a Cloud Functions project exist (they are never
overwritten), renders one HTTPS function and splices it into ``index.js``
ahead of the export marker, registering it in ``module.exports``.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storegen.errors import CompositionError, InputError
from storegen.utils import ensure_dir, ensure_file, write_text

from .templates import TemplateRenderer

EXPORT_MARKER = "// Export your functions below this line"

SCAFFOLD_FILES: tuple[str, ...] = ("helpers.js", "emailSender.js", "emailTemplates.js", "index.js")

_EXPORTS_RE = re.compile(r"module\.exports\s*=\s*\{([^}]*)\};")
_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


class CloudFunctionOptions(BaseModel):
    """Every answer of the Cloud Function prompt session."""

    model_config = ConfigDict(frozen=True)

    function_name: str
    description: str = "Function description"
    is_public: bool = False
    is_email: bool = True
    template_name: str = ""
    subject: str = ""
    notify_admin: bool = False
    required_fields: tuple[str, ...] = Field(default=())

    @field_validator("function_name")
    @classmethod
    def _check_function_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise InputError("Function name is required")
        if not _JS_IDENTIFIER.match(value):
            raise InputError(f"Invalid function name: {value!r}")
        return value

    @field_validator("template_name")
    @classmethod
    def _check_template_name(cls, value: str) -> str:
        value = value.strip()
        if value and not _JS_IDENTIFIER.match(value):
            raise InputError(f"Invalid email template name: {value!r}")
        return value

    @field_validator("required_fields")
    @classmethod
    def _check_required_fields(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        fields = tuple(dict.fromkeys(f.strip() for f in value if f.strip()))
        if not fields:
            raise InputError("At least one required field is needed")
        invalid = [f for f in fields if not _JS_IDENTIFIER.match(f)]
        if invalid:
            raise InputError(f"Invalid required field name: {', '.join(invalid)}")
        return fields


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


def compose_function(options: CloudFunctionOptions, renderer: TemplateRenderer) -> str:
    """Render the source of one exported HTTPS function."""
    with_email = "email" in options.required_fields
    return renderer.render(
        "functions/function.js.j2",
        {
            "o": options,
            "template_args": [f for f in options.required_fields if f != "email"],
            "recipient": "email" if with_email else "req.body.email",
        },
    ).rstrip("\n")


def insert_function(index_source: str, function_name: str, function_code: str) -> str:
    """Splice *function_code* in front of the export marker and export it.

    Raises:
        CompositionError: If ``index.js`` has no export marker.
    """
    position = index_source.find(EXPORT_MARKER)
    if position == -1:
        raise CompositionError("index.js", "Could not find insertion point in index.js")

    source = (
        index_source[:position].rstrip("\n")
        + f"\n\n{function_code}\n\n"
        + index_source[position:]
    )

    match = _EXPORTS_RE.search(source)
    if match is None:
        return source
    entries = [e.strip() for e in match.group(1).split(",") if e.strip()]
    entries.append(f"{function_name}: exports.{function_name}")
    exports = ",\n  ".join(entries)
    return source[: match.start()] + f"module.exports = {{\n  {exports}\n}};" + source[match.end():]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class CloudFunctionGenerator:
    """Adds generated functions to a Firebase Cloud Functions project."""

    def __init__(
        self,
        project_dir: str | Path,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self.project_dir = Path(project_dir)
        self.renderer = renderer or TemplateRenderer()

    @property
    def index_path(self) -> Path:
        return self.project_dir / "index.js"

    def _scaffold_context(self) -> dict[str, object]:
        return {
            "marker": EXPORT_MARKER,
            "email_from": "noreply@yourdomain.com",
            "smtp_host": "smtp.zoho.com",
            "smtp_port": 465,
        }

    async def scaffold(self) -> list[Path]:
        """Create the shared project files that do not exist yet.

        Returns:
            The files that were created; existing files are left untouched.
        """
        await asyncio.to_thread(ensure_dir, self.project_dir)
        context = self._scaffold_context()
        created: list[Path] = []
        for name in SCAFFOLD_FILES:
            content = self.renderer.render(f"functions/{name}.j2", context)
            path = self.project_dir / name
            if await asyncio.to_thread(ensure_file, path, content):
                created.append(path)
        return created

    async def add_function(self, options: CloudFunctionOptions) -> Path:
        """Render the function described by *options* into ``index.js``."""
        code = compose_function(options, self.renderer)
        source = await asyncio.to_thread(self.index_path.read_text, encoding="utf-8")
        updated = insert_function(source, options.function_name, code)
        return await asyncio.to_thread(write_text, self.index_path, updated)
