from __future__ import annotations

from pathlib import Path

import pytest

from bookman.settings import BookmanSettings, default_settings_path


def test_packaged_defaults():
    s = BookmanSettings.load()
    assert s.storage.default_list_name == "NewList"
    assert s.storage.data_path == ""
    assert s.catalog.max_name_length == 256
    assert s.catalog.index_buckets == 10007
    assert s.logging.level == "INFO"


def test_user_file_overrides_defaults(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("storage:\n  default_list_name: Backroom\ncatalog:\n  index_buckets: 101\n", encoding="utf-8")

    s = BookmanSettings.load(user_path=user)
    assert s.storage.default_list_name == "Backroom"
    assert s.catalog.index_buckets == 101
    # untouched keys keep their defaults
    assert s.catalog.max_name_length == 256


def test_missing_user_file_uses_defaults(tmp_path: Path):
    s = BookmanSettings.load(user_path=tmp_path / "absent.yaml")
    assert s == BookmanSettings.load()


def test_save_and_reload(tmp_path: Path):
    s = BookmanSettings()
    s.storage.data_path = str(tmp_path / "books.dat")
    s.logging.level = "DEBUG"
    target = tmp_path / "cfg" / "settings.yaml"
    s.save(target)

    assert BookmanSettings.load(user_path=target) == s


@pytest.mark.parametrize(
    "body",
    [
        "catalog:\n  index_buckets: 0\n",
        "catalog:\n  max_name_length: 1000\n",
        "storage:\n  default_list_name: two words\n",
        "logging:\n  level: LOUD\n",
        "storage:\n  colour: red\n",
        "stroage:\n  data_path: /x\n",
        "storage:\n  - data_path\n",
        "- a\n- b\n",
        "just a string\n",
    ],
)
def test_invalid_settings_raise(tmp_path: Path, body: str):
    user = tmp_path / "settings.yaml"
    user.write_text(body, encoding="utf-8")
    with pytest.raises(ValueError):
        BookmanSettings.load(user_path=user)


def test_data_path_resolution(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("BOOKMAN_DATA_PATH", raising=False)
    s = BookmanSettings()
    assert s.data_path().name == "books.dat"

    s.storage.data_path = str(tmp_path / "mine.dat")
    assert s.data_path() == tmp_path / "mine.dat"

    monkeypatch.setenv("BOOKMAN_DATA_PATH", str(tmp_path / "env.dat"))
    assert s.data_path() == tmp_path / "env.dat"


def test_default_settings_path_is_yaml():
    assert default_settings_path().name == "settings.yaml"


def test_top_level_must_be_a_mapping(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("- storage\n- catalog\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must contain a mapping"):
        BookmanSettings.load(user_path=user)


def test_misspelled_group_is_named_in_error(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("stroage:\n  data_path: /x\n", encoding="utf-8")
    with pytest.raises(ValueError, match="stroage"):
        BookmanSettings.load(user_path=user)


def test_empty_user_file_keeps_defaults(tmp_path: Path):
    user = tmp_path / "settings.yaml"
    user.write_text("", encoding="utf-8")
    assert BookmanSettings.load(user_path=user) == BookmanSettings.load()
