"""Writers: the only place scaffolding touches the output tree.

Both implementations refuse to overwrite anything.  ``create_directory``
and ``write_file`` raise :class:`TargetExistsError` if the path is already
there, so a second run against the same target fails instead of merging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .errors import TargetExistsError


class Writer(Protocol):
    """Capability the scaffolder depends on to produce output."""

    def exists(self, path: Path) -> bool: ...

    def create_directory(self, path: Path) -> None: ...

    def write_file(self, path: Path, content: str) -> None: ...


class FileSystemWriter:
    """Writes to the real filesystem.

    Relative paths are resolved against *base_dir* (the current working
    directory by default).  Missing parent directories are created, but the
    directory itself must not exist yet.
    """

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

    def _resolve(self, path: Path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_dir / path

    def exists(self, path: Path) -> bool:
        return self._resolve(path).exists()

    def create_directory(self, path: Path) -> None:
        target = self._resolve(path)
        try:
            target.mkdir(parents=True)
        except FileExistsError:
            raise TargetExistsError(target) from None

    def write_file(self, path: Path, content: str) -> None:
        target = self._resolve(path)
        try:
            with target.open("x", encoding="utf-8") as fh:
                fh.write(content)
        except FileExistsError:
            raise TargetExistsError(target) from None


class MemoryWriter:
    """Collects output in memory instead of writing it.

    Used for dry runs and tests.  Paths listed in *existing* are treated as
    already present, which lets callers simulate a populated tree.
    """

    def __init__(self, existing: list[str | Path] | None = None) -> None:
        self.existing: set[Path] = {Path(p) for p in existing or []}
        self.directories: list[Path] = []
        self.files: dict[Path, str] = {}

    def exists(self, path: Path) -> bool:
        path = Path(path)
        return path in self.existing or path in self.files or path in self.directories

    def create_directory(self, path: Path) -> None:
        path = Path(path)
        if self.exists(path):
            raise TargetExistsError(path)
        self.directories.append(path)

    def write_file(self, path: Path, content: str) -> None:
        path = Path(path)
        if self.exists(path):
            raise TargetExistsError(path)
        self.files[path] = content
