"""Error taxonomy and process exit codes.

Every error raised by gh-labeler derives from `LabelerError` and carries the exit
code the CLI should terminate with. Execution failures are not raised out of the
executor; they are recorded per operation and only surface as `PartialFailureError`
when a caller asks for it explicitly.
"""

from __future__ import annotations

EXIT_SUCCESS = 0
EXIT_GENERAL = 1
EXIT_CONFIG = 2
EXIT_AUTH = 3
EXIT_REPO_NOT_FOUND = 4
EXIT_PARTIAL = 5


class LabelerError(Exception):
    """Base class for all gh-labeler errors."""

    exit_code: int = EXIT_GENERAL


class ConfigValidationError(LabelerError):
    exit_code = EXIT_CONFIG


class LabelValidationError(ConfigValidationError):
    """A declared label is malformed (empty name, bad color, duplicate name)."""


class AliasCollisionError(LabelValidationError):
    """Two declared labels claim the same alias, or an alias shadows a label name."""

    def __init__(self, alias: str, owner: str, claimant: str) -> None:
        self.alias = alias
        self.owner = owner
        self.claimant = claimant
        super().__init__(
            f"Alias {alias!r} of label {claimant!r} collides with label {owner!r}"
        )


class InvalidRepositoryError(ConfigValidationError):
    def __init__(self, repository: str) -> None:
        self.repository = repository
        super().__init__(f"Invalid repository format: {repository} (expected 'owner/repo')")


class ConfigNotFoundError(LabelerError):
    """No label configuration file could be located."""

    exit_code = EXIT_CONFIG

    def __init__(self, searched: list[str] | tuple[str, ...]) -> None:
        self.searched = list(searched)
        super().__init__(
            "Label configuration not found (searched: " + ", ".join(self.searched) + ")"
        )


class RemoteConfigNotFoundError(ConfigNotFoundError):
    def __init__(self, repository: str, searched: list[str] | tuple[str, ...]) -> None:
        self.repository = repository
        super().__init__([f"{repository}:{path}" for path in searched])


class ApiError(LabelerError):
    """A remote GitHub call failed."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class AuthenticationError(ApiError):
    exit_code = EXIT_AUTH


class RepositoryNotFoundError(ApiError):
    exit_code = EXIT_REPO_NOT_FOUND

    def __init__(self, repository: str) -> None:
        self.repository = repository
        super().__init__(f"Repository not found: {repository}", status=404)


class RateLimitError(ApiError):
    pass


class LabelLostError(ApiError):
    """A non-atomic update deleted the old label but failed to create the new one.

    The label named `name` no longer exists on the remote and must be recreated by hand.
    """

    def __init__(self, name: str, new_name: str, cause: Exception) -> None:
        self.name = name
        self.new_name = new_name
        self.cause = cause
        super().__init__(
            f"Label {name!r} was deleted but {new_name!r} could not be created: {cause}"
        )


class PartialFailureError(LabelerError):
    """Some operations of a sync run failed."""

    exit_code = EXIT_PARTIAL

    def __init__(self, errors: list[str], *, exit_code: int = EXIT_PARTIAL) -> None:
        self.errors = list(errors)
        self.exit_code = exit_code
        noun = "operation" if len(self.errors) == 1 else "operations"
        super().__init__(f"{len(self.errors)} {noun} failed")
