from __future__ import annotations

from pathlib import Path

import pytest

from engine.core.config import SceneConfig
from util.utils import load_config


@pytest.mark.integration
# - 同梱の configs/default.yaml から既定シーンがそのまま得られる
def test_repo_default_yaml_describes_reference_scene():
    cfg = load_config()
    assert SceneConfig.from_mapping(cfg.get("scene")) == SceneConfig()
    assert cfg["runner"]["fps"] == 60
    assert cfg["render"]["backend"] in ("numba", "numpy")


@pytest.mark.integration
# - ルート config.yaml はトップレベル単位で default.yaml を上書きする
def test_root_config_overrides_top_level_sections(tmp_path: Path):
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text(
        "scene:\n  width: 320\n  height: 240\n  occluder_radius: 50\nrunner:\n  fps: 60\n",
        encoding="utf-8",
    )
    (tmp_path / "config.yaml").write_text("runner:\n  fps: 24\n", encoding="utf-8")
    cfg = load_config(tmp_path)
    assert cfg["runner"] == {"fps": 24}
    assert cfg["scene"]["width"] == 320


@pytest.mark.integration
# - 壊れた YAML は警告を出して無視する（フェイルソフト）
def test_broken_yaml_is_ignored(tmp_path: Path, caplog):
    (tmp_path / "config.yaml").write_text("scene: [unclosed\n", encoding="utf-8")
    with caplog.at_level("WARNING"):
        assert load_config(tmp_path) == {}
    assert "failed to read config" in caplog.text


@pytest.mark.integration
def test_missing_files_give_empty_config(tmp_path: Path):
    assert load_config(tmp_path) == {}
