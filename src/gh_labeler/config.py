"""Runtime settings.

Settings are loaded from environment variables and a local `.env` file (if present):

- GH_LABELER_TOKEN, GITHUB_TOKEN or GH_TOKEN (first one set wins)
- GITHUB_BASE_URL   (optional, for GitHub Enterprise)
- LOG_LEVEL         (optional)
- LOG_FORMAT        (optional, `json` or `text`)

A token is only required by commands that talk to GitHub, so it is checked on use
(`require_token`) rather than at load time.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gh_labeler.errors import ConfigValidationError, InvalidRepositoryError


class LabelerSettings(BaseSettings):
    """Settings for the gh-labeler CLI.

    Notes:
        Tests can point at a specific env file via `LabelerSettings(_env_file=path)`.
    """

    github_token: str = Field(
        default="",
        validation_alias=AliasChoices("GH_LABELER_TOKEN", "GITHUB_TOKEN", "GH_TOKEN"),
        description="GitHub token used for API authentication",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )
    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        validation_alias="LOG_FORMAT",
        description="Log record rendering on stderr",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("github_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    def require_token(self, override: str | None = None) -> str:
        """Return the token to use, preferring an explicit `override`."""

        token = (override or self.github_token).strip()
        if not token:
            raise ConfigValidationError(
                "GitHub access token is required. Set it via --access-token, "
                "GH_LABELER_TOKEN, GITHUB_TOKEN or GH_TOKEN"
            )
        return token


def parse_repository(repository: str) -> tuple[str, str]:
    """Split "owner/repo" into its parts."""

    parts = repository.strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise InvalidRepositoryError(repository)
    return parts[0], parts[1]
