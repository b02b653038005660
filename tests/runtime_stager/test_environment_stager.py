"""
Tests for the environment stager and the ._pth rules.
"""

import zipfile

import pytest

from runtime_stager.environment_stager import (
    EnvironmentStager,
    find_path_config,
    match_path_config_name,
    render_path_config,
)
from runtime_stager.stager_exceptions import StagingError
from tests.test_utils import create_test_layout, make_embed_zip, quiet_logger


class TestPathConfigRules:
    """Tests for the pure ._pth helpers."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("python312._pth", "312"),
            ("python38._pth", "38"),
            ("python._pth", None),
            ("python312.zip", None),
            ("python312._pth.bak", None),
            ("mypython312._pth", None),
        ],
    )
    def test_match_path_config_name(self, name, expected):
        assert match_path_config_name(name) == expected

    def test_find_single_match(self):
        assert find_path_config(["python.exe", "python312._pth", "python312.zip"]) == (
            "python312._pth",
            "312",
        )

    def test_no_match_is_fatal(self):
        with pytest.raises(StagingError, match="No python<version>._pth"):
            find_path_config(["python.exe", "python312.zip"])

    def test_several_matches_are_fatal(self):
        with pytest.raises(StagingError, match="python311._pth, python312._pth"):
            find_path_config(["python312._pth", "python311._pth"])

    def test_render_path_config(self):
        assert render_path_config("312") == (
            "python312.zip\n"
            ".\n"
            "\n"
            "# Uncomment to run site.main() automatically\n"
            "import site\n"
        )

    def test_render_is_deterministic(self):
        assert render_path_config("311") == render_path_config("311")


class TestEnvironmentStager:
    """Tests for EnvironmentStager."""

    @pytest.fixture
    def layout(self, tmp_path):
        with create_test_layout(tmp_path, embed_zip_name="python-3.12.4-embed-amd64.zip") as layout:
            yield layout

    def test_stage_rewrites_path_config(self, layout):
        make_embed_zip(layout.embed_zip_path, version="312")
        stager = EnvironmentStager(layout, quiet_logger())

        path, version = stager.stage()

        assert version == "312"
        assert path == layout.env_dir / "python312._pth"
        content = path.read_text(encoding="utf-8")
        assert content.splitlines()[0] == "python312.zip"
        assert content == render_path_config("312")
        assert (layout.env_dir / "python.exe").is_file()
        assert (layout.env_dir / "python312.zip").is_file()

    def test_two_runs_produce_identical_content(self, layout):
        make_embed_zip(layout.embed_zip_path, version="312")
        stager = EnvironmentStager(layout, quiet_logger())

        first_path, _ = stager.stage()
        first = first_path.read_bytes()
        second_path, _ = stager.stage()

        assert second_path.read_bytes() == first

    def test_reset_removes_unrelated_files(self, layout):
        make_embed_zip(layout.embed_zip_path)
        layout.env_dir.mkdir(parents=True)
        (layout.env_dir / "leftover.txt").write_text("stale")
        (layout.env_dir / "old_pkg").mkdir()
        (layout.env_dir / "old_pkg" / "mod.py").write_text("")

        EnvironmentStager(layout, quiet_logger()).stage()

        assert not (layout.env_dir / "leftover.txt").exists()
        assert not (layout.env_dir / "old_pkg").exists()

    def test_reset_creates_missing_directory(self, layout):
        stager = EnvironmentStager(layout, quiet_logger())
        stager.reset_staging_directory()
        assert layout.env_dir.is_dir()
        assert list(layout.env_dir.iterdir()) == []

    def test_nested_path_config_is_ignored(self, layout):
        make_embed_zip(
            layout.embed_zip_path,
            version=None,
            extra_files={"Lib/python312._pth": b"nested"},
        )

        with pytest.raises(StagingError):
            EnvironmentStager(layout, quiet_logger()).stage()

    def test_missing_path_config_is_fatal_and_not_written(self, layout):
        make_embed_zip(layout.embed_zip_path, version=None)

        with pytest.raises(StagingError):
            EnvironmentStager(layout, quiet_logger()).stage()

        assert not any(p.name.endswith("._pth") for p in layout.env_dir.iterdir())

    def test_missing_archive_is_fatal(self, layout):
        with pytest.raises(StagingError, match="not found"):
            EnvironmentStager(layout, quiet_logger()).stage()

    def test_corrupt_archive_is_fatal(self, layout):
        layout.embed_zip_path.parent.mkdir(parents=True)
        layout.embed_zip_path.write_bytes(b"this is not a zip file")

        with pytest.raises(StagingError, match="Could not read archive"):
            EnvironmentStager(layout, quiet_logger()).stage()

    def test_unsupported_compression_method_is_fatal(self, layout):
        make_embed_zip(layout.embed_zip_path)
        data = bytearray(layout.embed_zip_path.read_bytes())
        # compression method field of every central directory entry
        offset = data.find(b"PK\x01\x02")
        while offset != -1:
            data[offset + 10:offset + 12] = (99).to_bytes(2, "little")
            offset = data.find(b"PK\x01\x02", offset + 4)
        layout.embed_zip_path.write_bytes(bytes(data))

        with pytest.raises(StagingError, match="Could not extract"):
            EnvironmentStager(layout, quiet_logger()).stage()

    def test_encrypted_member_is_fatal(self, layout, monkeypatch):
        make_embed_zip(layout.embed_zip_path)

        def password_required(self, path=None, members=None, pwd=None):
            raise RuntimeError("File 'python.exe' is encrypted, password required for extraction")

        monkeypatch.setattr(zipfile.ZipFile, "extractall", password_required)

        with pytest.raises(StagingError, match="password required"):
            EnvironmentStager(layout, quiet_logger()).stage()
