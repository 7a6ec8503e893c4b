from pathlib import Path

from protonav.data import paths


def test_get_prototypes_path_base_path(tmp_path: Path) -> None:
    assert paths.get_prototypes_path(tmp_path) == tmp_path


def test_get_prototypes_path_source_repo_exists() -> None:
    prototypes_path = paths.get_prototypes_path()
    assert prototypes_path.name == "prototypes"
    assert prototypes_path.exists()
