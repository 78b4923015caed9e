"""Read text files from GitHub repositories via the REST contents API."""

from __future__ import annotations

import base64
import logging
from typing import Any

import requests

from gh_labeler.errors import (
    ApiError,
    AuthenticationError,
    RateLimitError,
    RepositoryNotFoundError,
)

logger = logging.getLogger(__name__)


class GitHubContents:
    """Small `requests` wrapper for fetching configuration files from other repositories."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://api.github.com",
        session: requests.Session | None = None,
        timeout: float = 30,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")

        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "gh-labeler",
            }
        )

    def _contents_url(self, *, repository: str, path: str) -> str:
        return f"{self._rest_base_url}/repos/{repository}/contents/{path.lstrip('/')}"

    def get_text_file(self, *, repository: str, path: str, ref: str = "") -> str | None:
        """Return the decoded text of `path` in `repository`, or None if it does not exist."""

        url = self._contents_url(repository=repository, path=path)
        params = {"ref": ref} if ref.strip() else None
        try:
            resp = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ApiError(f"Network error fetching {repository}:{path}: {exc}") from exc

        if resp.status_code == 404:
            logger.debug("Remote file not found", extra={"repo": repository, "path": path})
            return None
        if resp.status_code == 401:
            raise AuthenticationError(
                f"Authentication failed fetching {repository}:{path}", status=401
            )
        if resp.status_code in {403, 429} and "rate limit" in resp.text.lower():
            raise RateLimitError(
                "Rate limit exceeded. Please wait and try again", status=resp.status_code
            )
        if not resp.ok:
            raise ApiError(
                f"Failed to fetch {repository}:{path} (HTTP {resp.status_code})",
                status=resp.status_code,
            )

        data: Any = resp.json()
        if not isinstance(data, dict):
            raise ApiError(f"{repository}:{path} is a directory, not a file")

        encoding = data.get("encoding")
        content = data.get("content")
        if encoding == "base64" and isinstance(content, str):
            return base64.b64decode(content.encode("utf-8")).decode("utf-8")
        if isinstance(content, str):
            return content
        raise ApiError(f"Unexpected contents response for {repository}:{path}: missing content")

    def repository_exists(self, repository: str) -> bool:
        url = f"{self._rest_base_url}/repos/{repository}"
        try:
            resp = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise ApiError(f"Network error checking {repository}: {exc}") from exc
        return resp.status_code == 200

    def require_repository(self, repository: str) -> None:
        if not self.repository_exists(repository):
            raise RepositoryNotFoundError(repository)

    def close(self) -> None:
        self._session.close()
