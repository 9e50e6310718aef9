"""Main scaffolding orchestrator.

Turns a ``ProjectSpec`` or ``ModuleSpec`` into a plan (the directories and
fully rendered files of the fixed artifact set) and hands the plan to a
``Writer``.  Planning is pure; the only side effects happen in
:meth:`Scaffolder.apply`, after the target root has been checked.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..config import Config
from ..utils import sanitize_name
from . import renderers
from .attributes import parse_attributes
from .errors import InvalidNameError, TargetExistsError
from .manifest import read_project_name
from .models import GeneratedFile, ModuleSpec, ProjectSpec
from .templates import TemplateRenderer
from .writer import Writer

# ---------------------------------------------------------------------------
# Fixed layouts
# ---------------------------------------------------------------------------

APP_DIRECTORIES: tuple[str, ...] = ("controllers", "models", "views")

# Relative path -> renderer, in write order.
APP_FILES: tuple[tuple[str, Callable[..., str]], ...] = (
    ("models/index.js", renderers.render_model),
    ("controllers/index.js", renderers.render_controller),
    ("views/index.js", renderers.render_view),
    ("views/head.js", renderers.render_head),
    ("router.js", renderers.render_router),
    ("client.js", renderers.render_client),
    ("server.js", renderers.render_server),
)
APP_INDEX = "index.js"

PROJECT_MANIFEST = "package.json"
PROJECT_ENV = ".env"
PROJECT_INDEX = "index.js"


# ---------------------------------------------------------------------------
# Plans and results
# ---------------------------------------------------------------------------


class ScaffoldPlan(BaseModel):
    """Everything one scaffold run will create, rendered in memory."""

    model_config = ConfigDict(frozen=True)

    root: Path
    directories: list[str] = Field(default_factory=list, description="Relative to root")
    files: list[GeneratedFile] = Field(default_factory=list)

    def file(self, relative_path: str) -> GeneratedFile:
        """Return the planned file at *relative_path*."""
        for generated in self.files:
            if generated.relative_path == relative_path:
                return generated
        raise KeyError(relative_path)


class ScaffoldResult(BaseModel):
    """What a completed scaffold run created."""

    root: Path
    directories: list[Path] = Field(default_factory=list)
    files: list[Path] = Field(default_factory=list)
    message: str = ""


# ---------------------------------------------------------------------------
# Scaffolder
# ---------------------------------------------------------------------------


class Scaffolder:
    """Generates new projects and new apps inside an existing project.

    Given a ``Writer``, produces the fixed artifact set for the requested
    mode:

    - new project: ``apps/``, ``lib/``, ``package.json``, ``.env``, ``index.js``
    - new app: ``controllers/``, ``models/``, ``views/`` and the eight app
      files (model, controller, view, head, router, client, server, index)

    The content never depends on what is already on disk.  The target root
    is checked before anything is written, so a run against an existing
    target fails without touching it.
    """

    def __init__(
        self,
        writer: Writer,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.writer = writer
        self.config = config or Config()
        self.renderer = renderer or renderers.default_renderer()

    # -- Planning ----------------------------------------------------------

    def plan_project(self, spec: ProjectSpec) -> ScaffoldPlan:
        """Render the new-project skeleton without writing anything."""
        files = [
            GeneratedFile(
                relative_path=PROJECT_MANIFEST,
                content=renderers.render_project_manifest(spec, renderer=self.renderer),
            ),
            GeneratedFile(
                relative_path=PROJECT_ENV,
                content=renderers.render_env_file(spec, self.config, renderer=self.renderer),
            ),
            GeneratedFile(
                relative_path=PROJECT_INDEX,
                content=renderers.render_project_index(spec, self.config, renderer=self.renderer),
            ),
        ]
        return ScaffoldPlan(
            root=spec.target_dir,
            directories=[self.config.apps_dir, self.config.lib_dir],
            files=files,
        )

    def plan_app(self, spec: ModuleSpec, root: Path) -> ScaffoldPlan:
        """Render every file of the app rooted at *root*."""
        files = [
            GeneratedFile(relative_path=path, content=render(spec, renderer=self.renderer))
            for path, render in APP_FILES
        ]
        files.append(
            GeneratedFile(
                relative_path=APP_INDEX,
                content=renderers.render_app_index(spec, self.config, renderer=self.renderer),
            )
        )
        return ScaffoldPlan(root=root, directories=list(APP_DIRECTORIES), files=files)

    def app_root(self, project_dir: str | Path, module_name: str) -> Path:
        """Directory of app *module_name* inside *project_dir*.

        Raises:
            InvalidNameError: If *module_name* is not a single path component.
        """
        check_app_name(module_name)
        return Path(project_dir) / self.config.apps_dir / module_name

    # -- Writing -----------------------------------------------------------

    def apply(self, plan: ScaffoldPlan) -> ScaffoldResult:
        """Create the plan's directories, then write its files.

        Raises:
            TargetExistsError: If the root already exists (checked before any
                write) or if the writer hits an existing path.
        """
        if self.writer.exists(plan.root):
            raise TargetExistsError(plan.root)

        result = ScaffoldResult(root=plan.root)
        self.writer.create_directory(plan.root)
        result.directories.append(plan.root)
        for directory in plan.directories:
            path = plan.root / directory
            self.writer.create_directory(path)
            result.directories.append(path)
        for generated in plan.files:
            path = plan.root / generated.relative_path
            self.writer.write_file(path, generated.content)
            result.files.append(path)
        return result

    # -- Public API --------------------------------------------------------

    def new_project(self, spec: ProjectSpec, cwd: str | Path | None = None) -> ScaffoldResult:
        """Scaffold a new project at ``spec.target_dir``.

        Args:
            spec: Project name and target directory.
            cwd: Directory the next-step message's ``cd`` is relative to.
                Defaults to the process working directory.
        """
        result = self.apply(self.plan_project(spec))
        result.message = renderers.render_project_message(
            _relative_location(spec.target_dir, cwd), renderer=self.renderer
        )
        return result

    def new_app(self, spec: ModuleSpec, project_dir: str | Path) -> ScaffoldResult:
        """Scaffold the app described by *spec* inside *project_dir*."""
        result = self.apply(self.plan_app(spec, self.app_root(project_dir, spec.module_name)))
        result.message = renderers.render_app_message(spec, self.config, renderer=self.renderer)
        return result

    def module_spec(
        self, module_name: str, tokens: Iterable[str], project_dir: str | Path
    ) -> ModuleSpec:
        """Parse *tokens* and look up the project name for a new app.

        Raises:
            InvalidNameError: If *module_name* is not a usable directory name.
            MalformedAttributeError: For a token that is not ``name:type``.
            DuplicateAttributeError: For a repeated attribute name.
            MissingProjectManifestError: If *project_dir* has no usable manifest.
        """
        check_app_name(module_name)
        schema = parse_attributes(tokens)
        project_name = read_project_name(project_dir, self.config.manifest_name)
        return ModuleSpec(
            module_name=module_name,
            attributes=schema,
            project_name=project_name,
            app_url_env_var=self.config.app_url_env_var,
        )

    def new_app_from_tokens(
        self, module_name: str, tokens: Iterable[str], project_dir: str | Path
    ) -> ScaffoldResult:
        """Parse, look up the project name, and scaffold in one call."""
        spec = self.module_spec(module_name, tokens, project_dir)
        return self.new_app(spec, project_dir)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _relative_location(target: Path, cwd: str | Path | None) -> str:
    """Path of *target* as typed from *cwd* (absolute if on another drive)."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    try:
        return os.path.relpath(target, base)
    except ValueError:
        return str(target)


def check_app_name(name: str) -> None:
    """Reject app names that would not land directly under ``apps/``.

    Raises:
        InvalidNameError: For an empty name, ``.``/``..``, or a name
            containing a path separator.
    """
    if not name.strip():
        raise InvalidNameError(name, "name is empty")
    if name in (".", "..") or Path(name).name != name or "/" in name or "\\" in name:
        suggestion = sanitize_name(name)
        reason = "must be a single directory name"
        if suggestion:
            reason += f" (try '{suggestion}')"
        raise InvalidNameError(name, reason)
