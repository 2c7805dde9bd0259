"""Configuration schema for the translation updater using Pydantic models."""

from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

AUTHORS_HEADING = (
    'Original Author: Hugh Bailey ("Jim")\n\n'
    "Contributors are sorted by their amount of commits / translated strings.\n\n"
)


class CrowdinConfig(BaseModel):
    """Crowdin service configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    token: str = Field(
        ...,
        description="Crowdin personal access token",
        min_length=1,
    )
    project_id: Annotated[int, Field(gt=0)] = Field(
        default=51028,
        description="Numeric Crowdin project ID",
    )
    api_url: str = Field(
        default="https://api.crowdin.com/api/v2",
        description="Base URL of the Crowdin REST API",
        pattern=r"^https?://.*",
    )
    timeout: Annotated[float, Field(gt=0)] = Field(
        default=60.0,
        description="Timeout in seconds for a single HTTP request",
    )
    poll_interval: Annotated[float, Field(ge=0)] = Field(
        default=3.0,
        description="Seconds to wait between build/report status checks",
    )
    report_date_from: str = Field(default="2014-01-01T00:00:00+00:00")
    report_date_to: str = Field(default="2030-01-01T00:00:00+00:00")

    @field_validator("api_url")
    @classmethod
    def normalize_api_url(cls, v: str) -> str:
        """Strip trailing slashes from the API URL."""
        return v.rstrip("/")


class GitConfig(BaseModel):
    """Git identity and submodule configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    submodules: list[str] = Field(
        default_factory=lambda: ["enc-amf", "obs-browser", "obs-vst"],
        description="Submodules under plugins/ that receive translations",
    )
    branch: str = Field(
        default="master",
        description="Integration branch every submodule tracks",
        min_length=1,
    )
    committer_name: str = Field(default="Translation Updater", min_length=1)
    committer_email: str = Field(default="<>")
    commit_message: str = Field(
        default="Update translations from Crowdin",
        min_length=1,
    )

    @field_validator("submodules")
    @classmethod
    def validate_submodules(cls, v: list[str]) -> list[str]:
        """Reject duplicate or path-like submodule names."""
        if len(set(v)) != len(v):
            raise ValueError("Submodule names must be unique")
        for name in v:
            if not name or "/" in name or "\\" in name or name in (".", ".."):
                raise ValueError(f"Invalid submodule name: {name!r}")
        return v


class PathsConfig(BaseModel):
    """Files and directories touched inside the project repository."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    temp_dir_name: str = Field(default="obs-translation-updater", min_length=1)
    source_locale_file: str = Field(default="en-US.ini", min_length=1)
    desktop_file: str = Field(default="UI/xdg-data/com.obsproject.Studio.desktop")
    authors_file: str = Field(default="AUTHORS")
    authors_heading: str = Field(default=AUTHORS_HEADING)


class UpdaterConfig(BaseModel):
    """Root configuration for a translation update run."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")

    root_dir: Path = Field(
        default_factory=lambda: Path(".").resolve(),
        description="Root of the project repository",
    )
    crowdin: CrowdinConfig
    git: GitConfig = Field(default_factory=GitConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)

    @property
    def temp_dir(self) -> Path:
        """Staging directory for the extracted translation build."""
        return self.root_dir / self.paths.temp_dir_name

    @property
    def desktop_path(self) -> Path:
        """Desktop entry file rewritten with localized keys."""
        return self.root_dir / self.paths.desktop_file

    @property
    def authors_path(self) -> Path:
        """Credits file regenerated on every run."""
        return self.root_dir / self.paths.authors_file
