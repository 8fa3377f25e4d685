"""Tests for the update-metadata CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from blogctl.cli import cli
from blogctl.domain.hashing import compute_content_hash
from tests.conftest import post_fields, write_post


@pytest.mark.usefixtures("_isolated_site")
class TestUpdateMetadataCommand:
    def test_updates_named_file(self, cli_runner: CliRunner, site_root: Path) -> None:
        path = write_post(site_root, "p", post_fields(body="stale"))
        result = cli_runner.invoke(cli, ["update-metadata", "content/blog/p.mdx"])
        assert result.exit_code == 0, result.output
        assert "updated" in result.stdout
        assert "1/1" in result.stdout
        assert compute_content_hash("stale") not in path.read_text()

    def test_all(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_post(site_root, "a", post_fields(body="stale"))
        write_post(site_root, "b", post_fields(body="stale"))
        result = cli_runner.invoke(cli, ["--json", "update-metadata", "--all"])
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 2

    def test_non_mdx_skipped(self, cli_runner: CliRunner, site_root: Path) -> None:
        (site_root / "README.md").write_text("# readme\n")
        result = cli_runner.invoke(cli, ["--json", "update-metadata", "README.md"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert len(data["data"]["skipped"]) == 1

    def test_relative_to_cwd(
        self, cli_runner: CliRunner, site_root: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        write_post(site_root, "p", post_fields(body="stale"))
        monkeypatch.chdir(site_root / "content" / "blog")
        result = cli_runner.invoke(cli, ["--json", "update-metadata", "p.mdx"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["count"] == 1

    def test_missing_file_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["update-metadata", "content/blog/nope.mdx"])
        assert result.exit_code == 1
        assert "could not be updated" in result.stderr
        assert "failed" in result.stderr

    def test_no_files_is_noop(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "update-metadata"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["data"]["total"] == 0
