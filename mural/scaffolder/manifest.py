"""Lookup of the enclosing project's name from its ``package.json``."""

from __future__ import annotations

import json
from pathlib import Path

from ..utils import load_json
from .errors import MissingProjectManifestError

MANIFEST_NAME = "package.json"


def read_project_name(project_dir: str | Path, manifest_name: str = MANIFEST_NAME) -> str:
    """Return the ``name`` declared in *project_dir*'s manifest.

    Raises:
        MissingProjectManifestError: If the manifest is missing, is not a
            JSON object, or has no non-empty string ``name``.
    """
    path = Path(project_dir) / manifest_name
    if not path.is_file():
        raise MissingProjectManifestError(path, "file not found")
    try:
        data = load_json(path)
    except json.JSONDecodeError as exc:
        raise MissingProjectManifestError(path, f"invalid JSON ({exc.msg})") from exc
    if not isinstance(data, dict):
        raise MissingProjectManifestError(path, "expected a JSON object")
    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MissingProjectManifestError(path, "no 'name' field")
    return name.strip()
