"""Cross-project tag index and task search filters."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import yaml

from lotar.config.types import Priority, TaskStatus
from lotar.errors import LotarIOError, SerializationError

_NUMERIC_STEM = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class TaskFilter:
    """Criteria for selecting tasks; unset criteria match everything."""

    status: TaskStatus | None = None
    priority: Priority | None = None
    project: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    text_query: str | None = None


@dataclass
class TaskIndex:
    """Maps tags to the ids of the tasks that carry them."""

    tag2id: dict[str, list[str]] = field(default_factory=dict)
    last_updated: str = field(default_factory=_now)

    def add_task_with_id(self, task_id: str, tags: Iterable[str], file_path: str) -> None:
        """Record that the task carries each of the given tags."""
        for tag in tags:
            self.tag2id.setdefault(tag, []).append(task_id)
        self.last_updated = _now()

    def remove_task_with_id(self, task_id: str, tags: Iterable[str]) -> None:
        """Remove the task from each of the given tags, dropping tags left empty."""
        for tag in tags:
            ids = self.tag2id.get(tag)
            if ids is None:
                continue
            remaining = [existing for existing in ids if existing != task_id]
            if remaining:
                self.tag2id[tag] = remaining
            else:
                del self.tag2id[tag]
        self.last_updated = _now()

    def update_task_with_id(
        self,
        task_id: str,
        old_tags: Iterable[str],
        new_tags: Iterable[str],
        file_path: str,
    ) -> None:
        """Replace the task's old tags with its new ones."""
        self.remove_task_with_id(task_id, old_tags)
        self.add_task_with_id(task_id, new_tags, file_path)

    def find_by_filter(self, task_filter: TaskFilter) -> list[str]:
        """Return ids carrying every tag in the filter; empty when it names no tags."""
        candidates: list[str] | None = None
        for tag in task_filter.tags:
            tag_ids = list(self.tag2id.get(tag, []))
            if candidates is None:
                candidates = tag_ids
            else:
                candidates = [task_id for task_id in candidates if task_id in tag_ids]
        return candidates or []

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag2id": {tag: list(ids) for tag, ids in self.tag2id.items()},
            "last_updated": self.last_updated,
        }

    @classmethod
    def from_dict(cls, data: Any) -> TaskIndex:
        if not isinstance(data, dict):
            raise SerializationError("index: expected a mapping")
        for key in ("tag2id", "last_updated"):
            if key not in data:
                raise SerializationError(f"index: missing field '{key}'")
        raw_tags = data["tag2id"]
        if not isinstance(raw_tags, dict):
            raise SerializationError("index: 'tag2id' must be a mapping")
        tag2id: dict[str, list[str]] = {}
        for tag, ids in raw_tags.items():
            if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
                raise SerializationError(f"index: ids for tag {tag!r} must be a list of strings")
            tag2id[str(tag)] = list(ids)
        if not isinstance(data["last_updated"], str):
            raise SerializationError("index: 'last_updated' must be a string")
        return cls(tag2id=tag2id, last_updated=data["last_updated"])

    def save_to_file(self, path: str | os.PathLike[str]) -> None:
        """Write the index as YAML."""
        content = yaml.safe_dump(self.to_dict(), sort_keys=False, allow_unicode=True)
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise LotarIOError(exc) from exc

    @classmethod
    def load_from_file(cls, path: str | os.PathLike[str]) -> TaskIndex:
        """Read an index from YAML, or return an empty index if the file is missing."""
        target = Path(path)
        if not target.exists():
            return cls()
        try:
            content = target.read_text(encoding="utf-8")
        except OSError as exc:
            raise LotarIOError(exc) from exc
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise SerializationError(str(exc)) from exc
        return cls.from_dict(data)

    @classmethod
    def rebuild_from_storage(cls, root_path: str | os.PathLike[str]) -> TaskIndex:
        """Build an index from the task files found in each project directory."""
        index = cls()
        root = Path(root_path)
        if not root.exists():
            return index
        try:
            entries = sorted(root.iterdir())
        except OSError as exc:
            raise LotarIOError(exc) from exc
        for entry in entries:
            if entry.is_dir() and not entry.name.startswith("."):
                index._scan_project_directory(entry, entry.name, root)
        return index

    def _scan_project_directory(self, project_path: Path, project_name: str, root: Path) -> None:
        try:
            entries = sorted(project_path.iterdir())
        except OSError as exc:
            raise LotarIOError(exc) from exc
        for path in entries:
            if not path.is_file() or not path.name.endswith((".yaml", ".yml")):
                continue
            tags = _read_task_tags(path)
            if tags is None:
                continue
            number = _task_number(path.stem)
            if number is None:
                continue
            try:
                relative = str(path.relative_to(root))
            except ValueError:
                relative = str(path)
            self.add_task_with_id(f"{project_name}-{number}", tags, relative)


def _task_number(stem: str) -> int | None:
    if not _NUMERIC_STEM.fullmatch(stem):
        return None
    value = int(stem)
    return value if value <= _U64_MAX else None


def _read_task_tags(path: Path) -> list[str] | None:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return None
    if not isinstance(data, dict):
        return None
    tags = data.get("tags")
    if tags is None:
        return []
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        return None
    return tags