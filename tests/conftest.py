"""
Global test fixtures for translation updater tests.

Provides a fake OBS Studio checkout in a temporary directory, a validated
configuration rooted in it, and the shell/clock test doubles.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from obs_translation_updater.config.schema import UpdaterConfig
from tests.utils.test_helpers import RecordingClock, RecordingShell, create_test_config

DESKTOP_ENTRY = """[Desktop Entry]
Version=1.0
Name=OBS Studio
GenericName=Streaming/Recording Software
GenericName[fr]=Old
Comment=Free and Open Source Streaming/Recording Software
Comment[de]=Alt
Exec=obs
Icon=com.obsproject.Studio
Terminal=false
Type=Application
"""


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """
    Create a minimal repository layout with existing translations.

    Returns:
        Path: Root of the fake checkout
    """
    root = tmp_path / "obs-studio"
    ui_locale = root / "UI" / "data" / "locale"
    ui_locale.mkdir(parents=True)
    _ = (ui_locale / "en-US.ini").write_text('Apply="Apply"\n', encoding="utf-8")
    _ = (ui_locale / "de-DE.ini").write_text('Apply="Anwenden"\n', encoding="utf-8")
    _ = (ui_locale / "xx-XX.ini").write_text('Apply="Dropped"\n', encoding="utf-8")

    for plugin in ("enc-amf", "obs-browser", "obs-vst", "obs-outputs"):
        locale = root / "plugins" / plugin / "data" / "locale"
        locale.mkdir(parents=True)
        _ = (locale / "en-US.ini").write_text('Name="Name"\n', encoding="utf-8")
        _ = (locale / "de-DE.ini").write_text('Name="Name DE"\n', encoding="utf-8")
        _ = (root / "plugins" / plugin / "CMakeLists.txt").write_text("project()\n", encoding="utf-8")

    amf_resources = root / "plugins" / "enc-amf" / "resources" / "locale"
    amf_resources.mkdir(parents=True)
    _ = (amf_resources / "en-US.ini").write_text('AMF="AMF"\n', encoding="utf-8")
    _ = (amf_resources / "fr-FR.ini").write_text('AMF="AMF FR"\n', encoding="utf-8")

    desktop = root / "UI" / "xdg-data" / "com.obsproject.Studio.desktop"
    desktop.parent.mkdir(parents=True)
    _ = desktop.write_text(DESKTOP_ENTRY, encoding="utf-8")
    return root


@pytest.fixture
def test_config(project_root: Path) -> UpdaterConfig:
    """Configuration rooted in the fake checkout."""
    return create_test_config(project_root)


@pytest.fixture
def recording_shell(project_root: Path) -> RecordingShell:
    """Shell double rooted in the fake checkout."""
    return RecordingShell(project_root)


@pytest.fixture
def recording_clock() -> RecordingClock:
    """Clock double that never sleeps."""
    return RecordingClock()
