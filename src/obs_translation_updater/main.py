"""
Main entry point for the OBS translation updater.

This module sets up logging, loads the configuration and runs one complete
update: clear old translations, prepare submodules, regenerate AUTHORS and
download the Crowdin build concurrently, patch the desktop entry, then commit
and push. Any error aborts the run with a non-zero exit status.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
from collections.abc import Callable

from .config.manager import ConfigManager
from .config.schema import UpdaterConfig
from .credits import (
    SHORTLOG_COMMAND,
    collect_translators,
    format_contributors,
    format_translators,
    generate_authors,
    parse_contributors,
)
from .crowdin.client import CrowdinClient
from .crowdin.polling import Clock
from .desktop_entry import update_desktop_file
from .sync.shell import Shell
from .sync.submodules import SubmoduleSynchronizer
from .translations.archive import extract_archive, merge_into_project, restructure_staging
from .translations.locale_dirs import remove_previous_translations
from .utils.cli.args import parse_arguments
from .utils.core.exceptions import UpdaterError
from .utils.core.tasks import run_concurrently

logger = logging.getLogger(__name__)

DESKTOP_ENTRY_GROUP = "desktop-entry"

ClientFactory = Callable[[UpdaterConfig], CrowdinClient]


def setup_logging(verbose: bool = False, ci_mode: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
        ci_mode: Enable CI-friendly logging format
    """
    level = logging.DEBUG if verbose else logging.INFO

    if ci_mode:
        log_format = "::%(levelname)s::%(message)s" if verbose else "%(message)s"
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    # Request lines from httpx are noise at INFO level
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def create_client(config: UpdaterConfig, clock: Clock | None = None) -> CrowdinClient:
    """Create a Crowdin client from the run configuration."""
    crowdin = config.crowdin
    return CrowdinClient(
        token=crowdin.token,
        project_id=crowdin.project_id,
        api_url=crowdin.api_url,
        timeout=crowdin.timeout,
        poll_interval=crowdin.poll_interval,
        clock=clock,
        report_date_from=crowdin.report_date_from,
        report_date_to=crowdin.report_date_to,
    )


class TranslationUpdater:
    """Runs one translation update against a repository checkout."""

    def __init__(
        self,
        config: UpdaterConfig,
        shell: Shell | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.config: UpdaterConfig = config
        self.shell: Shell = shell if shell is not None else Shell(config.root_dir)
        self.client_factory: ClientFactory = (
            client_factory if client_factory is not None else create_client
        )
        git = config.git
        self.synchronizer: SubmoduleSynchronizer = SubmoduleSynchronizer(
            self.shell,
            config.root_dir,
            git.submodules,
            branch=git.branch,
            committer_name=git.committer_name,
            committer_email=git.committer_email,
            commit_message=git.commit_message,
        )

    async def update_authors(self, client: CrowdinClient) -> None:
        """Regenerate the AUTHORS file from git history and Crowdin reports."""
        # Keep the event loop polling Crowdin while git walks the history
        shortlog = await asyncio.to_thread(self.shell.git, *SHORTLOG_COMMAND)
        contributors = parse_contributors(shortlog, excluded=self.config.git.committer_name)
        blocked_ids = await client.list_blocked_member_ids()
        reports = await client.fetch_top_members_reports()
        translators = collect_translators(reports, blocked_ids)
        generate_authors(
            self.config.authors_path,
            format_contributors(contributors),
            format_translators(translators),
            self.config.paths.authors_heading,
        )

    async def update_translations(self, client: CrowdinClient, reuse_build: bool = True) -> None:
        """Download the translation build and merge it into the project tree."""
        build_id = await client.acquire_build(reuse_finished=reuse_build)
        archive = await client.download_build(build_id)

        temp_dir = self.config.temp_dir
        if temp_dir.exists():
            shutil.rmtree(temp_dir)
        _ = extract_archive(archive, temp_dir)
        restructure_staging(temp_dir, self.config.git.submodules)
        merge_into_project(temp_dir, self.config.root_dir)

    async def run(self, reuse_build: bool = True, push: bool = True) -> None:
        """
        Execute the complete update.

        Args:
            reuse_build: Reuse the latest finished Crowdin build
            push: Commit and push the result
        """
        config = self.config
        _ = remove_previous_translations(config.root_dir, keep=config.paths.source_locale_file)
        detached = self.synchronizer.prepare_build()

        try:
            async with self.client_factory(config) as client:
                _ = await run_concurrently(
                    self.update_authors(client),
                    self.update_translations(client, reuse_build),
                )
            update_desktop_file(config.desktop_path, config.temp_dir / DESKTOP_ENTRY_GROUP)
        finally:
            shutil.rmtree(config.temp_dir, ignore_errors=True)

        if not push:
            logger.info("Skipping commit and push")
            return
        _ = self.synchronizer.push_changes(detached)


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the translation updater.

    Returns:
        Exit code (0 for success, 1 for error, 130 when interrupted)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose, args.ci_mode)

    try:
        config = ConfigManager.load_config(args.config_file, root_dir=args.root_dir)
        updater = TranslationUpdater(config)
        asyncio.run(updater.run(reuse_build=not args.new_build, push=not args.skip_push))
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 130
    except Exception as e:
        if isinstance(e, UpdaterError):
            logger.error(f"Translation update failed: {e}")
        else:
            logger.error(f"Unexpected error during translation update: {e}")
        if args.verbose:
            logger.exception("Full traceback:")
        if args.ci_mode:
            print(f"::error::{e}", file=sys.stdout, flush=True)
        return 1

    logger.info("Translation update finished")
    return 0
