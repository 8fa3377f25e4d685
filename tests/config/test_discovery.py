"""Tests for config and site root discovery."""

from pathlib import Path

import pytest

from blogctl.config.discovery import CONFIG_ENV_VAR, CONFIG_FILENAME, find_config, find_site_root


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[metadata]\nutc_offset = "+00:00"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "content" / "blog"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert find_config(tmp_path) == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestFindSiteRoot:
    def test_content_dir_marks_root(self, tmp_path: Path) -> None:
        (tmp_path / "content" / "blog").mkdir(parents=True)
        assert find_site_root(tmp_path / "content" / "blog") == tmp_path.resolve()

    def test_config_marks_root(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        sub = tmp_path / "scripts"
        sub.mkdir()
        assert find_site_root(sub) == tmp_path.resolve()

    def test_none_without_markers(self, tmp_path: Path) -> None:
        sub = tmp_path / "a"
        sub.mkdir()
        found = find_site_root(sub)
        assert found is None or not found.is_relative_to(tmp_path.resolve())
