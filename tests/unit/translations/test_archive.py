"""
Tests for build archive extraction, staging restructuring and merging.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from obs_translation_updater.translations.archive import (
    extract_archive,
    merge_into_project,
    restructure_staging,
)
from obs_translation_updater.utils.core.exceptions import ArchiveError
from tests.utils.test_helpers import build_zip

SUBMODULES = ["enc-amf", "obs-browser", "obs-vst"]


class TestExtractArchive:
    """Test the extract_archive function."""

    def test_files_are_normalized(self, tmp_path: Path) -> None:
        """Test that extracted files are written normalized."""
        data = build_zip({"UI/data/locale/de-DE.ini": '\r\nA="a"\r\n\r\nB="b"\r\n\r\n'})

        written = extract_archive(data, tmp_path / "staging")

        target = tmp_path / "staging" / "UI" / "data" / "locale" / "de-DE.ini"
        assert written == [target]
        assert target.read_bytes() == b'A="a"\nB="b"\n'

    def test_empty_files_are_not_staged(self, tmp_path: Path) -> None:
        """Test that entries empty after normalization produce no file."""
        data = build_zip(
            {
                "UI/": None,
                "UI/empty.ini": "\n\r\n   \n",
                "UI/full.ini": 'A="a"',
            }
        )

        written = extract_archive(data, tmp_path / "staging")

        assert written == [tmp_path / "staging" / "UI" / "full.ini"]
        assert not (tmp_path / "staging" / "UI" / "empty.ini").exists()

    def test_directory_entries_are_created(self, tmp_path: Path) -> None:
        """Test that directory entries become empty directories."""
        data = build_zip({"desktop-entry/": None, "Website/": None})

        written = extract_archive(data, tmp_path / "staging")

        assert written == []
        assert (tmp_path / "staging" / "desktop-entry").is_dir()
        assert (tmp_path / "staging" / "Website").is_dir()

    def test_missing_parent_directories_are_created(self, tmp_path: Path) -> None:
        """Test files whose directories have no entry of their own."""
        data = build_zip({"obs-vst/data/locale/fr-FR.ini": 'VST="vst"'})

        _ = extract_archive(data, tmp_path / "staging")

        assert (tmp_path / "staging" / "obs-vst" / "data" / "locale" / "fr-FR.ini").is_file()

    def test_invalid_archive_raises(self, tmp_path: Path) -> None:
        """Test that non-zip data raises ArchiveError."""
        with pytest.raises(ArchiveError, match="not a valid zip archive"):
            _ = extract_archive(b"definitely not a zip", tmp_path / "staging")

    def test_path_traversal_is_rejected(self, tmp_path: Path) -> None:
        """Test that entries escaping the staging directory are refused."""
        data = build_zip({"../escape.ini": 'A="a"'})

        with pytest.raises(ArchiveError, match="unsafe archive entry"):
            _ = extract_archive(data, tmp_path / "staging")
        assert not (tmp_path / "escape.ini").exists()


class TestRestructureStaging:
    """Test the restructure_staging function."""

    def make_staging(self, staging: Path) -> None:
        for relative in (
            "Website/locale/de-DE.ini",
            "enc-amf/resources/locale/de-DE.ini",
            "obs-browser/data/locale/de-DE.ini",
            "obs-vst/data/locale/de-DE.ini",
            "plugins/obs-outputs/data/locale/de-DE.ini",
            "UI/data/locale/de-DE.ini",
        ):
            path = staging / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            _ = path.write_text('A="a"\n', encoding="utf-8")

    def test_website_is_removed(self, tmp_path: Path) -> None:
        """Test that the website export is dropped."""
        self.make_staging(tmp_path)

        restructure_staging(tmp_path, SUBMODULES)

        assert not (tmp_path / "Website").exists()

    def test_submodules_move_under_plugins(self, tmp_path: Path) -> None:
        """Test that each submodule export is nested under plugins/."""
        self.make_staging(tmp_path)

        restructure_staging(tmp_path, SUBMODULES)

        for submodule in SUBMODULES:
            assert not (tmp_path / submodule).exists()
        assert (tmp_path / "plugins" / "enc-amf" / "resources" / "locale" / "de-DE.ini").is_file()
        assert (tmp_path / "plugins" / "obs-browser" / "data" / "locale" / "de-DE.ini").is_file()
        assert (tmp_path / "plugins" / "obs-vst" / "data" / "locale" / "de-DE.ini").is_file()
        assert (tmp_path / "plugins" / "obs-outputs" / "data" / "locale" / "de-DE.ini").is_file()

    def test_missing_submodule_export_raises(self, tmp_path: Path) -> None:
        """Test that an absent submodule export aborts the restructuring."""
        self.make_staging(tmp_path)
        shutil.rmtree(tmp_path / "obs-browser")

        with pytest.raises(ArchiveError, match="no export for submodule obs-browser"):
            restructure_staging(tmp_path, SUBMODULES)

    def test_missing_website_export_is_allowed(self, tmp_path: Path) -> None:
        """Test that only the website export may be absent."""
        self.make_staging(tmp_path)
        shutil.rmtree(tmp_path / "Website")

        restructure_staging(tmp_path, SUBMODULES)

        assert (tmp_path / "plugins" / "obs-vst" / "data" / "locale" / "de-DE.ini").is_file()

    def test_existing_plugin_directory_is_merged(self, tmp_path: Path) -> None:
        """Test moving onto a plugins/<name> directory that already exists."""
        self.make_staging(tmp_path)
        existing = tmp_path / "plugins" / "obs-vst" / "data" / "locale" / "fr-FR.ini"
        existing.parent.mkdir(parents=True)
        _ = existing.write_text('B="b"\n', encoding="utf-8")

        restructure_staging(tmp_path, SUBMODULES)

        assert existing.is_file()
        assert (existing.parent / "de-DE.ini").is_file()
        assert not (tmp_path / "obs-vst").exists()


class TestMergeIntoProject:
    """Test the merge_into_project function."""

    def stage(self, staging: Path, relative: str, content: str) -> None:
        """Stage one file next to both merged groups."""
        for group in ("UI", "plugins"):
            (staging / group).mkdir(parents=True, exist_ok=True)
        path = staging / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        _ = path.write_text(content, encoding="utf-8")

    def test_matching_files_are_overwritten(self, tmp_path: Path, project_root: Path) -> None:
        """Test that staged files replace project files."""
        self.stage(tmp_path / "staging", "UI/data/locale/de-DE.ini", 'Apply="Übernehmen"\n')

        merge_into_project(tmp_path / "staging", project_root)

        target = project_root / "UI" / "data" / "locale" / "de-DE.ini"
        assert target.read_text(encoding="utf-8") == 'Apply="Übernehmen"\n'

    def test_unrelated_files_are_kept(self, tmp_path: Path, project_root: Path) -> None:
        """Test that sibling files in the project tree survive the merge."""
        self.stage(tmp_path / "staging", "plugins/obs-vst/data/locale/it-IT.ini", 'Name="Nome"\n')

        merge_into_project(tmp_path / "staging", project_root)

        plugin = project_root / "plugins" / "obs-vst"
        assert (plugin / "data" / "locale" / "it-IT.ini").is_file()
        assert (plugin / "data" / "locale" / "en-US.ini").is_file()
        assert (plugin / "CMakeLists.txt").is_file()

    def test_other_staged_groups_are_ignored(self, tmp_path: Path, project_root: Path) -> None:
        """Test that only UI and plugins are copied."""
        self.stage(tmp_path / "staging", "desktop-entry/fr.ini", 'Comment="Bonjour"\n')

        merge_into_project(tmp_path / "staging", project_root)

        assert not (project_root / "desktop-entry").exists()

    @pytest.mark.parametrize("missing", ["UI", "plugins"])
    def test_missing_group_raises_before_copying(
        self, tmp_path: Path, project_root: Path, missing: str
    ) -> None:
        """Test that nothing is merged when a group is absent."""
        staging = tmp_path / "staging"
        self.stage(staging, "UI/data/locale/it-IT.ini", 'Apply="Applica"\n')
        self.stage(staging, "plugins/obs-vst/data/locale/it-IT.ini", 'Name="Nome"\n')
        shutil.rmtree(staging / missing)

        with pytest.raises(ArchiveError, match=f"no {missing} export"):
            merge_into_project(staging, project_root)

        assert not (project_root / "UI" / "data" / "locale" / "it-IT.ini").exists()
        assert not (project_root / "plugins" / "obs-vst" / "data" / "locale" / "it-IT.ini").exists()
