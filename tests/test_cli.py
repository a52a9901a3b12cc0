"""Tests for the bucketfs command line."""

import pytest
from conftest import BUCKET, ENDPOINT
from typer.testing import CliRunner

from bucketfs import __version__
from bucketfs.cli import app

runner = CliRunner()

CONNECTION = [
    "--bucket",
    BUCKET,
    "--endpoint",
    ENDPOINT,
    "--access-id",
    "test_key",
    "--access-secret",
    "test_secret",
]


@pytest.fixture
def populated(facade):
    """Bucket with a file and a subdirectory under /data."""
    facade.write_file("/data/file1.txt", b"content1")
    facade.mkdir("/data/archive")
    return facade


class TestCli:
    """Test CLI commands against mocked S3."""

    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"bucketfs {__version__}" in result.output

    def test_missing_bucket(self, monkeypatch):
        monkeypatch.delenv("BUCKETFS_BUCKET", raising=False)

        result = runner.invoke(app, ["ls", "/"])

        assert result.exit_code == 1
        assert "A bucket is required" in result.output

    def test_ls(self, populated):
        result = runner.invoke(app, [*CONNECTION, "ls", "/data"])

        assert result.exit_code == 0
        assert "d  data/archive/" in result.output
        assert "data/file1.txt" in result.output

    def test_ls_empty(self, facade):
        result = runner.invoke(app, [*CONNECTION, "ls", "/nothing"])

        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_cat(self, populated):
        result = runner.invoke(app, [*CONNECTION, "cat", "/data/file1.txt"])

        assert result.exit_code == 0
        assert result.stdout == "content1"

    def test_cat_missing(self, facade):
        result = runner.invoke(app, [*CONNECTION, "cat", "/missing.txt"])

        assert result.exit_code == 1
        assert "No such file" in result.output

    def test_put(self, facade, tmp_path):
        source = tmp_path / "cat.jpg"
        source.write_bytes(b"jpeg bytes")

        result = runner.invoke(app, [*CONNECTION, "put", str(source), "/photos/cat.jpg"])

        assert result.exit_code == 0
        assert facade.read_file("/photos/cat.jpg") == b"jpeg bytes"

    def test_stat_directory(self, populated):
        result = runner.invoke(app, [*CONNECTION, "stat", "/data/archive"])

        assert result.exit_code == 0
        assert "Type: folder" in result.output
        assert "Size: 0 bytes" in result.output

    def test_rm(self, populated):
        result = runner.invoke(app, [*CONNECTION, "rm", "/data/file1.txt"])

        assert result.exit_code == 0
        assert populated.read_file("/data/file1.txt") is None

    def test_mkdir_and_rmdir(self, facade):
        created = runner.invoke(app, [*CONNECTION, "mkdir", "/photos"])
        removed = runner.invoke(app, [*CONNECTION, "rmdir", "/photos"])

        assert created.exit_code == 0
        assert removed.exit_code == 0
        assert facade.get_file_info("/photos") is None

    def test_usage(self, facade):
        result = runner.invoke(app, [*CONNECTION, "usage", "/data"])

        assert result.exit_code == 0
        assert "Usage: 0.0 bytes" in result.output

    def test_relative_path_error(self, facade):
        result = runner.invoke(app, [*CONNECTION, "stat", "data/file1.txt"])

        assert result.exit_code == 1
        assert "must start with" in result.output
