"""storegen configuration.

Typed configuration for every generator.  Uses a Pydantic v2 model so values
can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_AUTH_COLLECTION_NOUNS: list[str] = [
    "users",
    "user",
    "customer",
    "client",
    "clients",
    "customers",
    "student",
    "students",
    "admins",
    "admin",
    "accounts",
    "account",
]


class Config(BaseModel):
    """Global storegen configuration.

    Instances are typically created once by the CLI entry point (usually via
    :meth:`from_env`) and passed to the generators.
    """

    output_dir: Path = Field(default=Path("."), description="Root of every generated tree")
    stores_dir: str = Field(default="stores")
    email_templates_dir: str = Field(default="email_templates")
    functions_dir: str = Field(
        default="./functions",
        description="Default answer for the Cloud Functions project directory prompt",
    )
    file_extension: str = Field(default="js", pattern=r"^[a-z]+$")
    auth_collection_nouns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTH_COLLECTION_NOUNS),
        description="Collection names treated as authentication collections",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def stores_path(self) -> Path:
        """Directory that holds one sub-directory per generated store."""
        return self.output_dir / self.stores_dir

    @property
    def email_templates_path(self) -> Path:
        """Directory that receives generated HTML email templates."""
        return self.output_dir / self.email_templates_dir

    def store_path(self, store_name: str) -> Path:
        """Root directory of the store called *store_name*."""
        return self.stores_path / store_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STOREGEN_OUTPUT_DIR, STOREGEN_AUTH_COLLECTIONS (comma-separated),
            STOREGEN_FUNCTIONS_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STOREGEN_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["STOREGEN_OUTPUT_DIR"])
        if os.environ.get("STOREGEN_FUNCTIONS_DIR"):
            kwargs["functions_dir"] = os.environ["STOREGEN_FUNCTIONS_DIR"]
        if os.environ.get("STOREGEN_AUTH_COLLECTIONS"):
            nouns = os.environ["STOREGEN_AUTH_COLLECTIONS"].split(",")
            kwargs["auth_collection_nouns"] = [n.strip() for n in nouns if n.strip()]
        return cls(**kwargs)
