from pathlib import Path

from charsheet.data import paths


def test_get_reference_path_base_path(tmp_path: Path) -> None:
    assert paths.get_reference_path(tmp_path) == tmp_path


def test_get_reference_path_source_repo_exists(monkeypatch) -> None:
    monkeypatch.delenv(paths.REFERENCE_DIR_ENV, raising=False)
    reference_path = paths.get_reference_path()
    assert reference_path.name == "reference"
    assert (reference_path / "srd_equipment.json").exists()


def test_environment_override(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(paths.REFERENCE_DIR_ENV, str(tmp_path))
    assert paths.get_reference_path() == tmp_path
    assert paths.get_reference_path("explicit") == Path("explicit")


def test_repo_root_holds_pyproject() -> None:
    assert (paths.get_repo_root() / "pyproject.toml").exists()
