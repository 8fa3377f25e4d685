"""Tests for the generate-ids CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogctl.cli import cli
from tests.conftest import post_fields, write_post


@pytest.mark.usefixtures("_isolated_site")
class TestGenerateIdsCommand:
    def test_generates_files(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "hello-world", post_fields(tags=["python"]))
        result = cli_runner.invoke(cli, ["generate-ids"])
        assert result.exit_code == 0, result.output
        assert "New IDs" in result.stdout
        assert "hello-world" in result.stdout
        for name in ("tag-ids.json", "category-ids.json", "blog-ids.json"):
            assert (site_root / "data" / name).exists()

    def test_json_output(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "test-x")
        result = cli_runner.invoke(cli, ["--json", "generate-ids"])
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["assigned"]["blog"] == {"test-x": -1}

    def test_second_run(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "p")
        cli_runner.invoke(cli, ["generate-ids"])
        result = cli_runner.invoke(cli, ["generate-ids"])
        assert result.exit_code == 0
        assert "no new IDs assigned" in result.stdout

    def test_recovered_file_warns(self, cli_runner: CliRunner, site_root: Path) -> None:
        (site_root / "data" / "blog-ids.json").write_text("not json")
        result = cli_runner.invoke(cli, ["generate-ids"])
        assert result.exit_code == 0
        assert "WARNING:" in result.stderr
        assert "restore the file" in result.stderr

    def test_runs_from_subdirectory(
        self, cli_runner: CliRunner, site_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_post(site_root, "p")
        monkeypatch.chdir(site_root / "content" / "blog")
        result = cli_runner.invoke(cli, ["generate-ids"])
        assert result.exit_code == 0
        assert (site_root / "data" / "blog-ids.json").exists()
