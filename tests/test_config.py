from pathlib import Path

import pytest

from gentle_diary.config import AppConfig


def test_defaults():
    cfg = AppConfig()
    assert cfg.storage.storage_key == "gentle_diary_entries_v1"
    assert cfg.generation.use_delegated is False
    assert cfg.ui.max_reflection_display_length == 800
    assert cfg.ui.excerpt_length == 120


def test_from_yaml_resolves_relative_paths(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "storage:\n"
        "  path: db/diary.db\n"
        "  storage_key: custom_key\n"
        "generation:\n"
        "  use_delegated: true\n"
        "  model: gemini-test\n"
        "log_level: debug\n",
        encoding="utf-8",
    )
    cfg = AppConfig.from_yaml(str(config_file))
    assert Path(cfg.storage.path) == (tmp_path / "db" / "diary.db").resolve()
    assert cfg.storage.storage_key == "custom_key"
    assert cfg.generation.use_delegated is True
    assert cfg.generation.model == "gemini-test"
    assert cfg.log_level == "DEBUG"


def test_empty_yaml_uses_defaults(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("", encoding="utf-8")
    cfg = AppConfig.from_yaml(str(config_file))
    assert Path(cfg.storage.path) == (tmp_path / "data" / "diary.db").resolve()
    assert cfg.ui.excerpt_length == 120


def test_unknown_section_key_is_rejected():
    with pytest.raises(TypeError):
        AppConfig.from_dict({"ui": {"colour": "blue"}})
