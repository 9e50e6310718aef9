"""Pydantic v2 models describing what to scaffold and what was rendered.

All models are frozen: they are built once per invocation, handed to the
renderers, and discarded afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .attributes import AttributeSchema, SchemaDerivation, build_query, derive_schema


class ModuleSpec(BaseModel):
    """Everything needed to render the files of one app."""

    model_config = ConfigDict(frozen=True)

    module_name: str = Field(..., min_length=1, description="App name, e.g. 'article'")
    attributes: AttributeSchema = Field(default_factory=AttributeSchema)
    project_name: str = Field(..., min_length=1, description="Name of the enclosing project")
    app_url_env_var: str = Field(
        default="APP_URL", description="Environment variable holding the base URL"
    )

    @property
    def derived(self) -> SchemaDerivation:
        return derive_schema(self.attributes)

    @property
    def query(self) -> str:
        """The GraphQL query the controller sends for this module."""
        return build_query(self.module_name, self.attributes.names)


class ProjectSpec(BaseModel):
    """Context for the new-project skeleton."""

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1)
    target_dir: Path

    @classmethod
    def from_argument(cls, argument: str, cwd: str | Path) -> "ProjectSpec":
        """Build a spec from the ``new`` command argument.

        The argument may be a nested path; the project is named after its
        last component (``new work/blog`` creates a project called ``blog``).
        """
        target = (Path(cwd) / argument).resolve()
        return cls(project_name=target.name, target_dir=target)


class GeneratedFile(BaseModel):
    """A fully rendered file, relative to the scaffold root."""

    model_config = ConfigDict(frozen=True)

    relative_path: str
    content: str
