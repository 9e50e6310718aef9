"""Tests for the Scaffolder orchestrator.

Covers:
- Plans for new projects and new apps (paths, order, content)
- Directory-before-file write order
- Target-exists checks before any write
- Manifest lookup and attribute parsing in new_app_from_tokens
- Next-step messages on the result
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mural.config import Config
from mural.scaffolder import (
    DuplicateAttributeError,
    InvalidNameError,
    MalformedAttributeError,
    MemoryWriter,
    MissingProjectManifestError,
    ModuleSpec,
    ProjectSpec,
    Scaffolder,
    TargetExistsError,
)
from mural.scaffolder.generator import APP_DIRECTORIES, _relative_location, check_app_name
from mural.scaffolder.renderers import render_controller, render_model


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


APP_FILE_ORDER = [
    "models/index.js",
    "controllers/index.js",
    "views/index.js",
    "views/head.js",
    "router.js",
    "client.js",
    "server.js",
    "index.js",
]


# ---------------------------------------------------------------------------
# ProjectSpec
# ---------------------------------------------------------------------------


class TestProjectSpec:
    def test_name_from_argument(self, tmp_path: Path):
        spec = ProjectSpec.from_argument("blog", tmp_path)
        assert spec.project_name == "blog"
        assert spec.target_dir == (tmp_path / "blog").resolve()

    def test_nested_argument_uses_basename(self, tmp_path: Path):
        spec = ProjectSpec.from_argument("work/sites/blog", tmp_path)
        assert spec.project_name == "blog"
        assert spec.target_dir == (tmp_path / "work" / "sites" / "blog").resolve()


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


class TestPlanApp:
    def test_file_order(self, memory_scaffolder, article_spec):
        plan = memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        assert [f.relative_path for f in plan.files] == APP_FILE_ORDER

    def test_directories(self, memory_scaffolder, article_spec):
        plan = memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        assert plan.directories == list(APP_DIRECTORIES) == ["controllers", "models", "views"]

    def test_content_matches_renderers(self, memory_scaffolder, article_spec):
        plan = memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        assert plan.file("controllers/index.js").content == render_controller(article_spec)
        assert plan.file("models/index.js").content == render_model(article_spec)

    def test_unknown_file_raises(self, memory_scaffolder, article_spec):
        plan = memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        with pytest.raises(KeyError):
            plan.file("missing.js")

    def test_planning_writes_nothing(self, memory_scaffolder, memory_writer, article_spec):
        memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        assert memory_writer.directories == []
        assert memory_writer.files == {}

    def test_controller_and_model_agree(self, memory_scaffolder, article_spec):
        plan = memory_scaffolder.plan_app(article_spec, Path("apps/article"))
        controller = plan.file("controllers/index.js").content
        model = plan.file("models/index.js").content
        assert "{ article { title body } }" in controller
        assert "model('article'" in model
        for name in article_spec.attributes.names:
            assert f"  {name}: string()" in model


class TestPlanProject:
    def test_layout(self, memory_scaffolder, blog_project):
        plan = memory_scaffolder.plan_project(blog_project)
        assert plan.root == blog_project.target_dir
        assert plan.directories == ["apps", "lib"]
        assert [f.relative_path for f in plan.files] == ["package.json", ".env", "index.js"]

    def test_env_file(self, memory_scaffolder, blog_project):
        plan = memory_scaffolder.plan_project(blog_project)
        assert "MONGO_URL=mongodb://localhost:27017/blog" in plan.file(".env").content.splitlines()

    def test_manifest_name(self, memory_scaffolder, blog_project):
        plan = memory_scaffolder.plan_project(blog_project)
        assert json.loads(plan.file("package.json").content)["name"] == "blog"

    def test_layout_follows_config(self, memory_writer, blog_project):
        scaffolder = Scaffolder(memory_writer, Config(apps_dir="modules", lib_dir="shared"))
        plan = scaffolder.plan_project(blog_project)
        assert plan.directories == ["modules", "shared"]


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


class TestNewApp:
    def test_writes_directories_then_files(self, memory_scaffolder, memory_writer, article_spec):
        result = memory_scaffolder.new_app(article_spec, Path("blog"))
        root = Path("blog/apps/article")
        assert result.root == root
        assert memory_writer.directories == [
            root,
            root / "controllers",
            root / "models",
            root / "views",
        ]
        assert list(memory_writer.files) == [root / p for p in APP_FILE_ORDER]
        assert result.files == [root / p for p in APP_FILE_ORDER]

    def test_existing_target_aborts_before_writing(self, article_spec):
        writer = MemoryWriter(existing=["blog/apps/article"])
        scaffolder = Scaffolder(writer)
        with pytest.raises(TargetExistsError) as excinfo:
            scaffolder.new_app(article_spec, Path("blog"))
        assert excinfo.value.path == Path("blog/apps/article")
        assert writer.directories == []
        assert writer.files == {}

    def test_message(self, memory_scaffolder, article_spec):
        result = memory_scaffolder.new_app(article_spec, Path("blog"))
        assert "app.use(...article.middleware)" in result.message

    def test_on_disk(self, disk_scaffolder, article_spec, project_dir):
        result = disk_scaffolder.new_app(article_spec, project_dir)
        app_dir = project_dir / "apps" / "article"
        assert result.root == app_dir
        for relative in APP_FILE_ORDER:
            assert (app_dir / relative).is_file()

    def test_second_run_leaves_first_output_untouched(self, disk_scaffolder, article_spec, project_dir):
        disk_scaffolder.new_app(article_spec, project_dir)
        model = project_dir / "apps" / "article" / "models" / "index.js"
        model.write_text("// edited by hand\n", encoding="utf-8")

        with pytest.raises(TargetExistsError):
            disk_scaffolder.new_app(article_spec, project_dir)
        assert model.read_text(encoding="utf-8") == "// edited by hand\n"


class TestNewAppFromTokens:
    def test_reads_project_name(self, disk_scaffolder, project_dir):
        result = disk_scaffolder.new_app_from_tokens(
            "article", ["title:string", "body:string"], project_dir
        )
        index = (result.root / "index.js").read_text(encoding="utf-8")
        assert "connect('mongodb://localhost:27017/blog')" in index

    def test_missing_manifest(self, disk_scaffolder, tmp_path: Path):
        with pytest.raises(MissingProjectManifestError):
            disk_scaffolder.new_app_from_tokens("article", ["title:string"], tmp_path)
        assert not (tmp_path / "apps").exists()

    def test_malformed_token(self, disk_scaffolder, project_dir):
        with pytest.raises(MalformedAttributeError) as excinfo:
            disk_scaffolder.new_app_from_tokens("article", ["title"], project_dir)
        assert excinfo.value.token == "title"
        assert not (project_dir / "apps" / "article").exists()

    def test_duplicate_token(self, disk_scaffolder, project_dir):
        with pytest.raises(DuplicateAttributeError):
            disk_scaffolder.new_app_from_tokens(
                "article", ["title:string", "title:string"], project_dir
            )

    def test_module_spec_uses_config_env_var(self, project_dir):
        scaffolder = Scaffolder(MemoryWriter(), Config(app_url_env_var="BASE_URL"))
        spec = scaffolder.module_spec("article", ["title:string"], project_dir)
        assert spec.app_url_env_var == "BASE_URL"
        assert spec.project_name == "blog"


class TestAppName:
    @pytest.mark.parametrize("name", ["article", "blog-post", "blog_post", "blogPost"])
    def test_accepts_plain_names(self, name):
        check_app_name(name)

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "../x", "a/b", "a\\b"])
    def test_rejects_non_directory_names(self, name):
        with pytest.raises(InvalidNameError) as excinfo:
            check_app_name(name)
        assert excinfo.value.name == name
        assert f"'{name}'" in str(excinfo.value)

    def test_suggests_sanitized_name(self):
        with pytest.raises(InvalidNameError, match="try 'a-b'"):
            check_app_name("a/b")

    def test_rejected_before_manifest_lookup(self, disk_scaffolder, tmp_path: Path):
        with pytest.raises(InvalidNameError):
            disk_scaffolder.new_app_from_tokens("", ["title:string"], tmp_path)

    def test_new_app_does_not_escape_apps_dir(self, disk_scaffolder, project_dir):
        spec = ModuleSpec(module_name="../outside", project_name="blog")
        with pytest.raises(InvalidNameError):
            disk_scaffolder.new_app(spec, project_dir)
        assert not (project_dir / "outside").exists()


class TestNewProject:
    def test_writes_skeleton(self, memory_scaffolder, memory_writer, tmp_path: Path):
        spec = ProjectSpec(project_name="blog", target_dir=tmp_path / "blog")
        result = memory_scaffolder.new_project(spec, cwd=tmp_path)
        root = tmp_path / "blog"
        assert memory_writer.directories == [root, root / "apps", root / "lib"]
        assert list(memory_writer.files) == [root / "package.json", root / ".env", root / "index.js"]
        assert "$ cd blog && npm install" in result.message

    def test_existing_target(self, disk_scaffolder, tmp_path: Path):
        (tmp_path / "blog").mkdir()
        spec = ProjectSpec(project_name="blog", target_dir=tmp_path / "blog")
        with pytest.raises(TargetExistsError):
            disk_scaffolder.new_project(spec, cwd=tmp_path)
        assert list((tmp_path / "blog").iterdir()) == []


class TestRelativeLocation:
    def test_relative(self, tmp_path: Path):
        assert _relative_location(tmp_path / "a" / "blog", tmp_path) == str(Path("a/blog"))

    def test_parent(self, tmp_path: Path):
        assert _relative_location(tmp_path / "blog", tmp_path / "x") == str(Path("../blog"))
