import pytest
import yaml

from lotar.config.types import TaskStatus
from lotar.errors import SerializationError
from lotar.index import TaskFilter, TaskIndex


def _sample_index():
    index = TaskIndex()
    index.add_task_with_id("ST-1", ["backend", "api"], "ST/1.yml")
    index.add_task_with_id("ST-2", ["frontend", "ui"], "ST/2.yml")
    index.add_task_with_id("ST-3", ["backend", "frontend"], "ST/3.yml")
    return index


def test_filter_defaults():
    task_filter = TaskFilter()
    assert task_filter.tags == []
    assert task_filter.status is None and task_filter.text_query is None


def test_find_by_single_tag():
    result = _sample_index().find_by_filter(TaskFilter(tags=["backend"]))
    assert result == ["ST-1", "ST-3"]


def test_find_by_tag_intersection():
    result = _sample_index().find_by_filter(TaskFilter(tags=["backend", "frontend"]))
    assert result == ["ST-3"]


def test_find_without_tags_is_empty():
    index = _sample_index()
    assert index.find_by_filter(TaskFilter(status=TaskStatus.TODO)) == []


def test_find_unknown_tag_is_empty():
    assert _sample_index().find_by_filter(TaskFilter(tags=["backend", "nope"])) == []


def test_remove_drops_empty_tags():
    index = _sample_index()
    index.remove_task_with_id("ST-1", ["backend", "api"])
    assert "api" not in index.tag2id
    assert index.tag2id["backend"] == ["ST-3"]


def test_update_moves_tags():
    index = _sample_index()
    index.update_task_with_id("ST-2", ["frontend", "ui"], ["security"], "ST/2.yml")
    assert index.tag2id["security"] == ["ST-2"]
    assert "ui" not in index.tag2id
    assert index.tag2id["frontend"] == ["ST-3"]


def test_save_and_load_round_trip(tmp_path):
    index = _sample_index()
    target = tmp_path / "index.yml"
    index.save_to_file(target)
    loaded = TaskIndex.load_from_file(target)
    assert loaded.tag2id == index.tag2id
    assert loaded.last_updated == index.last_updated


def test_load_missing_file_returns_empty(tmp_path):
    assert TaskIndex.load_from_file(tmp_path / "absent.yml").tag2id == {}


def test_load_invalid_content_raises(tmp_path):
    target = tmp_path / "index.yml"
    target.write_text("tag2id: [1, 2\n", encoding="utf-8")
    with pytest.raises(SerializationError):
        TaskIndex.load_from_file(target)


def test_load_missing_field_raises(tmp_path):
    target = tmp_path / "index.yml"
    target.write_text("tag2id: {}\n", encoding="utf-8")
    with pytest.raises(SerializationError):
        TaskIndex.load_from_file(target)


def _write_task(path, tags):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump({"title": "t", "tags": tags}), encoding="utf-8")


def test_rebuild_from_storage(tmp_path):
    _write_task(tmp_path / "AUTH" / "5.yml", ["security"])
    _write_task(tmp_path / "AUTH" / "6.yaml", ["security", "backend"])
    _write_task(tmp_path / "AUTH" / "notes.yml", ["security"])
    _write_task(tmp_path / "AUTH" / "sub" / "7.yml", ["security"])
    _write_task(tmp_path / ".hidden" / "1.yml", ["security"])
    (tmp_path / "AUTH" / "8.yml").write_text("::: [", encoding="utf-8")
    index = TaskIndex.rebuild_from_storage(tmp_path)
    assert index.tag2id == {"security": ["AUTH-5", "AUTH-6"], "backend": ["AUTH-6"]}


def test_rebuild_normalizes_numeric_stem(tmp_path):
    _write_task(tmp_path / "WEB" / "007.yml", ["ui"])
    assert TaskIndex.rebuild_from_storage(tmp_path).tag2id == {"ui": ["WEB-7"]}


def test_rebuild_missing_root_is_empty(tmp_path):
    assert TaskIndex.rebuild_from_storage(tmp_path / "missing").tag2id == {}