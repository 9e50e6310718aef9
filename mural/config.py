"""mural configuration.

Typed settings for the values that end up as literal text in generated
projects (base URL, port, database location) and for the fixed layout of a
project (where apps and shared libraries live).  Uses Pydantic v2 so values
are validated at construction time and can round-trip through JSON or be
read from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError


class ConfigError(ValueError):
    """Raised when environment variables describe an invalid configuration."""


class Config(BaseModel):
    """Global mural configuration.

    The defaults reproduce the values every generated project has always
    shipped with, so ``Config()`` is what the CLI uses unless ``MURAL_*``
    environment variables say otherwise.
    """

    node_env: str = Field(default="development")
    app_url: str = Field(default="http://localhost:3000")
    port: int = Field(default=3000, ge=1, le=65535)
    mongo_url_base: str = Field(default="mongodb://localhost:27017")
    app_url_env_var: str = Field(
        default="APP_URL", description="Env var the generated controllers read the base URL from"
    )

    # Project layout
    apps_dir: str = Field(default="apps")
    lib_dir: str = Field(default="lib")
    manifest_name: str = Field(default="package.json")

    def mongo_url(self, project_name: str) -> str:
        """Return the database URL for *project_name*."""
        return f"{self.mongo_url_base.rstrip('/')}/{project_name}"

    def env_vars(self, project_name: str) -> dict[str, str]:
        """Return the ordered variables written to a new project's ``.env``."""
        return {
            "NODE_ENV": self.node_env,
            self.app_url_env_var: self.app_url,
            "PORT": str(self.port),
            "MONGO_URL": self.mongo_url(project_name),
        }

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
            MURAL_NODE_ENV, MURAL_APP_URL, MURAL_PORT, MURAL_MONGO_URL_BASE.

        Raises:
            ConfigError: If a variable holds a value the model rejects.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("MURAL_NODE_ENV"):
            kwargs["node_env"] = os.environ["MURAL_NODE_ENV"]
        if os.environ.get("MURAL_APP_URL"):
            kwargs["app_url"] = os.environ["MURAL_APP_URL"]
        if os.environ.get("MURAL_PORT"):
            raw_port = os.environ["MURAL_PORT"]
            try:
                kwargs["port"] = int(raw_port)
            except ValueError:
                raise ConfigError(f"MURAL_PORT must be an integer, got '{raw_port}'") from None
        if os.environ.get("MURAL_MONGO_URL_BASE"):
            kwargs["mongo_url_base"] = os.environ["MURAL_MONGO_URL_BASE"]
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ConfigError(f"Invalid configuration from environment: {problems}") from None
