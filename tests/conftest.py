"""Shared pytest fixtures for the mural test suite.

Provides reusable fixtures for:
- Temporary project directories with a ``package.json``
- The ``article`` app used throughout the examples
- In-memory and on-disk scaffolders
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mural.config import Config
from mural.scaffolder import (
    FileSystemWriter,
    MemoryWriter,
    ModuleSpec,
    ProjectSpec,
    Scaffolder,
    parse_attributes,
)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An existing ``blog`` project with a manifest and an empty ``apps/``."""
    root = tmp_path / "blog"
    (root / "apps").mkdir(parents=True)
    (root / "package.json").write_text(
        json.dumps({"name": "blog", "version": "0.0.1"}, indent=2), encoding="utf-8"
    )
    yield root


# ---------------------------------------------------------------------------
# Specs
# ---------------------------------------------------------------------------

@pytest.fixture
def article_spec() -> ModuleSpec:
    """``mural app article title:string body:string`` inside project ``blog``."""
    return ModuleSpec(
        module_name="article",
        attributes=parse_attributes(["title:string", "body:string"]),
        project_name="blog",
    )


@pytest.fixture
def empty_spec() -> ModuleSpec:
    """An app declared without any attributes."""
    return ModuleSpec(module_name="ping", project_name="blog")


@pytest.fixture
def blog_project(tmp_path: Path) -> ProjectSpec:
    return ProjectSpec(project_name="blog", target_dir=tmp_path / "blog")


# ---------------------------------------------------------------------------
# Scaffolders
# ---------------------------------------------------------------------------

@pytest.fixture
def memory_writer() -> MemoryWriter:
    return MemoryWriter()


@pytest.fixture
def memory_scaffolder(memory_writer: MemoryWriter) -> Scaffolder:
    """A Scaffolder that records output instead of writing it."""
    return Scaffolder(memory_writer, Config())


@pytest.fixture
def disk_scaffolder(tmp_path: Path) -> Scaffolder:
    """A Scaffolder writing under ``tmp_path``."""
    return Scaffolder(FileSystemWriter(tmp_path), Config())
