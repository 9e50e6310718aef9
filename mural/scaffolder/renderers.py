"""One rendering function per generated artifact.

Each function takes a ``ModuleSpec`` (app files) or a ``ProjectSpec``
(project skeleton) and returns the file's full text.  They are independent
of each other but share a naming contract:

- the controller exports ``state`` and ``index``, which the view and the
  router import;
- the controller's query asks for exactly the module's field names, and the
  model declares exactly those fields;
- the view reads ``state.get('<module>').<field>`` for every field, in
  schema order.

None of these functions touch the filesystem.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from ..config import Config
from .models import ModuleSpec, ProjectSpec
from .templates import TemplateRenderer

# ---------------------------------------------------------------------------
# Fixed data baked into the generated files
# ---------------------------------------------------------------------------

SERVER_WATCH: tuple[str, ...] = (
    "views/**/*",
    "controllers/**/*",
    "models/**/*",
    "router.js",
    "server.js",
)

CLIENT_WATCH: tuple[str, ...] = (
    "views/**/*",
    "controllers/**/*",
    "router.js",
    "client.js",
)

GLOBAL_REQUIRES = "-r dotenv/config -r babel-core/register"

PROJECT_SCRIPTS: dict[str, str] = {
    "node": f"NODE_PATH=$NODE_PATH:./lib node {GLOBAL_REQUIRES}",
    "start": "concurrently 'npm run node .' 'mongod'",
}

BABEL_PRESETS: tuple[str, ...] = ("es2015", "stage-3")
BABEL_PLUGINS: tuple[str, ...] = ("transform-runtime",)

PROJECT_DEPENDENCIES: dict[str, str] = {
    "babel": "^6.5.2",
    "babel-core": "^6.13.0",
    "babel-plugin-transform-runtime": "^6.12.0",
    "babel-preset-es2015": "^6.13.0",
    "babel-preset-stage-3": "^6.11.0",
    "babelify": "^7.3.0",
    "concurrently": "^2.1.0",
    "dotenv": "^2.0.0",
    "envify": "^3.4.0",
    "graphql": "^0.7.0",
    "hotglue": "0.0.2",
    "joiql-mongo": "^1.0.7",
    "koa": "^2.0.0-alpha.4",
    "lokka": "^1.7.0",
    "lokka-transport-http": "^1.4.0",
    "react": "^15.3.1",
    "react-dom": "^15.3.1",
    "unikoa": "0.0.1",
    "unikoa-bootstrap": "0.0.2",
    "unikoa-react-render": "0.0.3",
    "universal-tree": "0.0.2",
    "veact": "0.0.5",
}

# Example used in the project entry point comments and the next-step message.
EXAMPLE_APP = "article"
EXAMPLE_ATTRIBUTES: tuple[str, ...] = ("title:string", "body:string")

VIEW_ELEMENT_PREFIX = "\n    "
VIEW_ELEMENT_SEPARATOR = ",\n    "


@lru_cache(maxsize=1)
def default_renderer() -> TemplateRenderer:
    """Shared renderer over the built-in templates."""
    return TemplateRenderer()


def _render(template: str, context: dict[str, Any], renderer: TemplateRenderer | None) -> str:
    return (renderer or default_renderer()).render(template, context)


# ---------------------------------------------------------------------------
# Context building
# ---------------------------------------------------------------------------


def module_context(spec: ModuleSpec) -> dict[str, Any]:
    """Build the template context shared by all app templates."""
    derived = spec.derived
    return {
        "module_name": spec.module_name,
        "project_name": spec.project_name,
        "app_url_env_var": spec.app_url_env_var,
        "query": spec.query,
        "field_names": derived.field_names,
        "field_declarations": derived.field_declarations,
        "imported_types": derived.imported_types,
        "model_imports": ["model", *derived.imported_types],
        "view_body": view_body(spec.module_name, derived.field_names),
    }


def view_element(module_name: str, field_name: str) -> str:
    """Display expression for one field, read from the shared state tree."""
    return f"div(state.get('{module_name}').{field_name})"


def view_body(module_name: str, field_names: list[str]) -> str:
    """Arguments of the view's outer ``div``: one element per field."""
    if not field_names:
        return ""
    elements = [view_element(module_name, name) for name in field_names]
    return VIEW_ELEMENT_PREFIX + VIEW_ELEMENT_SEPARATOR.join(elements)


# ---------------------------------------------------------------------------
# App artifacts
# ---------------------------------------------------------------------------


def render_controller(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/controllers/index.js.j2", module_context(spec), renderer)


def render_model(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/models/index.js.j2", module_context(spec), renderer)


def render_view(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/views/index.js.j2", module_context(spec), renderer)


def render_head(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    """Render the reset stylesheet view.  Output does not depend on *spec*."""
    return _render("app/views/head.js.j2", {}, renderer)


def render_client(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/client.js.j2", {}, renderer)


def render_server(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/server.js.j2", module_context(spec), renderer)


def render_router(spec: ModuleSpec, renderer: TemplateRenderer | None = None) -> str:
    return _render("app/router.js.j2", module_context(spec), renderer)


def render_app_index(
    spec: ModuleSpec,
    config: Config | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Render the app's hotglue entry point with its file-watch globs."""
    config = config or Config()
    context = {
        **module_context(spec),
        "server_watch": SERVER_WATCH,
        "client_watch": CLIENT_WATCH,
        "mongo_url": config.mongo_url(spec.project_name),
    }
    return _render("app/index.js.j2", context, renderer)


# ---------------------------------------------------------------------------
# Project artifacts
# ---------------------------------------------------------------------------


def render_project_index(
    spec: ProjectSpec,
    config: Config | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    config = config or Config()
    context = {"example_app": EXAMPLE_APP, "apps_dir": config.apps_dir}
    return _render("project/index.js.j2", context, renderer)


def render_env_file(
    spec: ProjectSpec,
    config: Config | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    config = config or Config()
    return _render("project/env.j2", {"env": config.env_vars(spec.project_name)}, renderer)


def render_project_manifest(spec: ProjectSpec, renderer: TemplateRenderer | None = None) -> str:
    context = {
        "project_name": spec.project_name,
        "scripts": PROJECT_SCRIPTS,
        "babel_presets": BABEL_PRESETS,
        "babel_plugins": BABEL_PLUGINS,
        "dependencies": PROJECT_DEPENDENCIES,
    }
    return _render("project/package.json.j2", context, renderer)


# ---------------------------------------------------------------------------
# Next-step messages
# ---------------------------------------------------------------------------


def render_app_message(
    spec: ModuleSpec,
    config: Config | None = None,
    renderer: TemplateRenderer | None = None,
) -> str:
    config = config or Config()
    context = {"module_name": spec.module_name, "apps_dir": config.apps_dir}
    return _render("messages/app.txt.j2", context, renderer)


def render_project_message(location: str, renderer: TemplateRenderer | None = None) -> str:
    context = {
        "location": location,
        "example_app": EXAMPLE_APP,
        "example_attributes": EXAMPLE_ATTRIBUTES,
    }
    return _render("messages/project.txt.j2", context, renderer)
