from pathlib import Path

import pytest

from lotar.project import detect_project_name, get_project_name, get_project_path


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    folder = tmp_path / "someproject"
    folder.mkdir()
    monkeypatch.chdir(folder)
    monkeypatch.delenv("LOTAR_PROJECT", raising=False)
    return folder


def test_environment_variable_wins(workdir, monkeypatch):
    (workdir / "Cargo.toml").write_text('name = "from-manifest"\n', encoding="utf-8")
    monkeypatch.setenv("LOTAR_PROJECT", "env-project")
    assert detect_project_name() == "env-project"


def test_empty_environment_variable_ignored(workdir, monkeypatch):
    monkeypatch.setenv("LOTAR_PROJECT", "")
    assert detect_project_name() == workdir.name


def test_manifest_name_used(workdir):
    (workdir / "Cargo.toml").write_text(
        '[package]\nname = "local_task_repo"\nversion = "0.1.0"\n', encoding="utf-8"
    )
    assert detect_project_name() == "local_task_repo"


def test_manifest_name_must_start_line(workdir):
    (workdir / "Cargo.toml").write_text('  name = "indented"\n', encoding="utf-8")
    assert detect_project_name() == workdir.name


def test_folder_name_fallback(workdir):
    assert detect_project_name() == workdir.name


def test_get_project_name_matches_detection(workdir):
    assert get_project_name() == detect_project_name()


def test_get_project_path_is_cwd(workdir):
    assert get_project_path().resolve() == Path(workdir).resolve()