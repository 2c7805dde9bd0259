"""
Async Crowdin REST API v2 client.

Covers the endpoints the updater needs: project languages, blocked members,
top-members reports and translation builds. Reports for all languages are
generated concurrently; builds are reused when the latest one is finished.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

import httpx

from ..utils.core.exceptions import CrowdinAPIError
from ..utils.core.tasks import run_concurrently
from .models import TopMembersReport, parse_top_members_report
from .polling import AsyncioClock, Clock, RemoteJob, poll_until_finished

if TYPE_CHECKING:
    from types import TracebackType

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.crowdin.com/api/v2"
USER_AGENT = "OBS-Translation-Updater/1.0"


class CrowdinClient:
    """Client for the parts of the Crowdin API used by a translation update."""

    def __init__(
        self,
        token: str,
        project_id: int,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        poll_interval: float = 3.0,
        clock: Clock | None = None,
        report_date_from: str = "2014-01-01T00:00:00+00:00",
        report_date_to: str = "2030-01-01T00:00:00+00:00",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client; the HTTP connection opens on context entry."""
        self.api_url: str = api_url.rstrip("/")
        self.project_id: int = project_id
        self.timeout: float = timeout
        self.poll_interval: float = poll_interval
        self.clock: Clock = clock if clock is not None else AsyncioClock()
        self.report_date_from: str = report_date_from
        self.report_date_to: str = report_date_to
        self._token: str = token
        self._transport: httpx.AsyncBaseTransport | None = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> CrowdinClient:
        """Enter async context and initialize HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and cleanup HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def _project_path(self) -> str:
        return f"{self.api_url}/projects/{self.project_id}"

    async def _send(
        self, method: str, url: str, authenticated: bool, **kwargs: Any
    ) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("CrowdinClient not initialized. Use as async context manager.")

        headers = {"Authorization": f"Bearer {self._token}"} if authenticated else {}
        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
            _ = response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP {e.response.status_code} for {method} {e.request.url.path}: {e.response.text}"
            raise CrowdinAPIError(error_msg, e.response.status_code) from e
        except httpx.RequestError as e:
            raise CrowdinAPIError(f"Request failed: {e}") from e

    async def _request(self, method: str, endpoint: str, **kwargs: Any) -> Mapping[str, object]:
        """Call a project endpoint and return the ``data`` member of the response."""
        response = await self._send(
            method, f"{self._project_path}{endpoint}", authenticated=True, **kwargs
        )
        try:
            body = response.json()  # pyright: ignore[reportAny]
        except ValueError as e:
            raise CrowdinAPIError(f"Invalid JSON from {endpoint or '/'}: {e}") from e
        if not isinstance(body, dict) or "data" not in body:
            raise CrowdinAPIError(f"Unexpected response format from {endpoint or '/'}")
        return cast(Mapping[str, object], body)

    @staticmethod
    def _item(data: object, endpoint: str) -> Mapping[str, object]:
        if not isinstance(data, Mapping):
            raise CrowdinAPIError(f"Unexpected response format from {endpoint}")
        return cast(Mapping[str, object], data)

    async def get_target_language_ids(self) -> list[str]:
        """Return the project's target language IDs."""
        body = await self._request("GET", "")
        project = self._item(body["data"], "project")
        languages = project.get("targetLanguageIds") or []
        if not isinstance(languages, list):
            raise CrowdinAPIError("Unexpected targetLanguageIds in project response")
        return [str(language) for language in cast(list[object], languages)]

    async def list_blocked_member_ids(self) -> set[int]:
        """Return the user IDs of members blocked in the project."""
        body = await self._request(
            "GET", "/members", params={"role": "blocked", "limit": 500}
        )
        blocked: set[int] = set()
        for item in cast(list[object], body["data"] or []):
            member = self._item(self._item(item, "members").get("data"), "members")
            member_id = member.get("id")
            if member_id is not None:
                blocked.add(int(str(member_id)))
        return blocked

    async def generate_top_members_report(self, language_id: str) -> RemoteJob:
        """Request a top-members report for one language."""
        body = await self._request(
            "POST",
            "/reports",
            json={
                "name": "top-members",
                "schema": {
                    "unit": "strings",
                    "format": "json",
                    "dateFrom": self.report_date_from,
                    "dateTo": self.report_date_to,
                    "languageId": language_id,
                },
            },
        )
        report = self._item(body["data"], "reports")
        return RemoteJob(str(report["identifier"]), str(report.get("status", "")))

    async def check_report_status(self, report_id: int | str) -> str:
        """Return the current status of a report."""
        body = await self._request("GET", f"/reports/{report_id}")
        return str(self._item(body["data"], "reports").get("status", ""))

    async def _download_url(self, endpoint: str) -> str:
        body = await self._request("GET", endpoint)
        url = self._item(body["data"], endpoint).get("url")
        if not isinstance(url, str) or not url:
            raise CrowdinAPIError(f"No download URL returned by {endpoint}")
        return url

    async def download_report(self, report_id: int | str) -> TopMembersReport:
        """Download and parse a finished report."""
        url = await self._download_url(f"/reports/{report_id}/download")
        # Signed download URLs reject additional credentials.
        response = await self._send("GET", url, authenticated=False)
        try:
            payload = response.json()  # pyright: ignore[reportAny]
        except ValueError as e:
            raise CrowdinAPIError(f"Report {report_id} is not valid JSON: {e}") from e
        return parse_top_members_report(payload)

    async def fetch_report(self, language_id: str) -> TopMembersReport:
        """Generate, wait for and download the report of one language."""
        job = await self.generate_top_members_report(language_id)
        _ = await poll_until_finished(
            job, self.check_report_status, self.clock, self.poll_interval
        )
        logger.debug(f"Top-members report for {language_id} finished")
        return await self.download_report(job.identifier)

    async def fetch_top_members_reports(self) -> list[TopMembersReport]:
        """Fetch the top-members report of every target language concurrently."""
        languages = await self.get_target_language_ids()
        logger.info(f"Requesting top-members reports for {len(languages)} languages")
        return await run_concurrently(*(self.fetch_report(language) for language in languages))

    async def get_latest_build(self) -> RemoteJob | None:
        """Return the most recent project build, if any."""
        body = await self._request("GET", "/translations/builds", params={"limit": 1})
        builds = cast(list[object], body["data"] or [])
        if not builds:
            return None
        build = self._item(self._item(builds[0], "builds").get("data"), "builds")
        return RemoteJob(int(str(build["id"])), str(build.get("status", "")))

    async def build_project(self) -> RemoteJob:
        """Request a new translation build without untranslated strings."""
        body = await self._request(
            "POST", "/translations/builds", json={"skipUntranslatedStrings": True}
        )
        build = self._item(body["data"], "builds")
        return RemoteJob(int(str(build["id"])), str(build.get("status", "")))

    async def check_build_status(self, build_id: int | str) -> str:
        """Return the current status of a build."""
        body = await self._request("GET", f"/translations/builds/{build_id}")
        return str(self._item(body["data"], "builds").get("status", ""))

    async def acquire_build(self, reuse_finished: bool = True) -> int:
        """
        Get a finished build ID.

        Args:
            reuse_finished: Reuse the latest build when it has already finished

        Returns:
            ID of a finished build
        """
        if reuse_finished:
            latest = await self.get_latest_build()
            if latest is not None and latest.finished:
                logger.info(f"Reusing finished build {latest.identifier}")
                return int(latest.identifier)

        job = await self.build_project()
        logger.info(f"Requested build {job.identifier}")
        _ = await poll_until_finished(
            job, self.check_build_status, self.clock, self.poll_interval
        )
        logger.info(f"Build {job.identifier} finished")
        return int(job.identifier)

    async def download_build(self, build_id: int | str) -> bytes:
        """Download the zip archive of a finished build."""
        url = await self._download_url(f"/translations/builds/{build_id}/download")
        response = await self._send("GET", url, authenticated=False)
        return response.content
