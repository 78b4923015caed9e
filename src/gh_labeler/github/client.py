"""GitHub label client.

Wraps PyGithub so that GitHub calls stay out of the planner and the CLI, and so tests
can inject a mocked `Repository`. PyGithub exceptions are translated into the
gh-labeler `ApiError` family at this boundary, as are transport errors from requests.
"""

from __future__ import annotations

import logging

import requests
from github import Auth, Github, GithubException
from github.GithubException import (
    BadCredentialsException,
    RateLimitExceededException,
    UnknownObjectException,
)
from github.Label import Label
from github.Repository import Repository

from gh_labeler.errors import (
    ApiError,
    AuthenticationError,
    RateLimitError,
    RepositoryNotFoundError,
)
from gh_labeler.labels import DesiredLabel, ExistingLabel
from gh_labeler.service import LabelService

logger = logging.getLogger(__name__)


def translate_github_error(exc: GithubException, *, action: str) -> ApiError:
    """Map a PyGithub exception onto the gh-labeler error taxonomy."""

    status = exc.status
    message = _error_message(exc)
    if isinstance(exc, BadCredentialsException) or status == 401:
        return AuthenticationError(f"Authentication failed while trying to {action}", status=401)
    if isinstance(exc, RateLimitExceededException) or (
        status in {403, 429} and "rate limit" in message.lower()
    ):
        return RateLimitError(
            "Rate limit exceeded. Please wait and try again", status=status
        )
    return ApiError(f"Failed to {action}: {message} (HTTP {status})", status=status)


def _error_message(exc: GithubException) -> str:
    data = exc.data
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return str(exc)


def _to_existing(label: Label) -> ExistingLabel:
    return ExistingLabel(name=label.name, color=label.color, description=label.description)


class GitHubLabelClient(LabelService):
    """Label source and label-mutation capability for one repository."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        repo: Repository | None = None,
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository

        if repo is not None:
            self._repo = repo
            self._github = github_api
            logger.debug("Using injected Repository instance")
            return

        self._github = github_api or Github(auth=Auth.Token(token), base_url=base_url)
        try:
            self._repo = self._github.get_repo(repository)
        except UnknownObjectException as exc:
            raise RepositoryNotFoundError(repository) from exc
        except GithubException as exc:
            raise translate_github_error(exc, action=f"open repository {repository}") from exc

        logger.info(
            "Authenticated with GitHub and connected to repository", extra={"repo": repository}
        )

    @property
    def repository(self) -> str:
        """Return the configured repository name ("owner/repo")."""

        return self._repository_name

    def list_labels(self) -> list[ExistingLabel]:
        """Fetch every label of the repository (all pages)."""

        try:
            labels = [_to_existing(label) for label in self._repo.get_labels()]
        except UnknownObjectException as exc:
            raise RepositoryNotFoundError(self._repository_name) from exc
        except GithubException as exc:
            raise translate_github_error(exc, action="list labels") from exc
        except requests.RequestException as exc:
            raise ApiError(f"Network error listing labels: {exc}") from exc

        logger.info(
            "Labels fetched", extra={"repo": self._repository_name, "count": len(labels)}
        )
        return labels

    def create(self, label: DesiredLabel) -> None:
        try:
            self._repo.create_label(
                name=label.name,
                color=label.remote_color,
                description=label.description or "",
            )
        except GithubException as exc:
            raise translate_github_error(exc, action=f"create label {label.name!r}") from exc
        except requests.RequestException as exc:
            raise ApiError(f"Network error creating label {label.name!r}: {exc}") from exc
        logger.info("Label created", extra={"repo": self._repository_name, "label": label.name})

    def delete(self, name: str) -> None:
        # PyGithub percent-encodes the name in the request path (spaces, non-ASCII).
        try:
            self._repo.get_label(name).delete()
        except GithubException as exc:
            raise translate_github_error(exc, action=f"delete label {name!r}") from exc
        except requests.RequestException as exc:
            raise ApiError(f"Network error deleting label {name!r}: {exc}") from exc
        logger.info("Label deleted", extra={"repo": self._repository_name, "label": name})

    def close(self) -> None:
        if self._github is not None:
            self._github.close()
