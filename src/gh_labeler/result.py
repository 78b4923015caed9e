"""Sync results and the serializable output envelope."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from gh_labeler.errors import (
    EXIT_GENERAL,
    EXIT_PARTIAL,
    EXIT_SUCCESS,
    PartialFailureError,
)
from gh_labeler.operations import (
    NoChange,
    OperationKind,
    SyncOperation,
    operation_kind,
    operation_to_json,
)


class SyncStatus(str, Enum):
    SUCCESS = "success"
    NO_CHANGES = "no_changes"
    ERROR = "error"


class ErrorKind(str, Enum):
    OPERATION_FAILED = "operation_failed"
    LABEL_LOST = "label_lost"


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    operation: SyncOperation
    succeeded: bool
    error: str | None = None
    error_kind: ErrorKind | None = None

    def to_json(self) -> dict[str, object]:
        out = operation_to_json(self.operation)
        out["status"] = "success" if self.succeeded else "failed"
        if self.error is not None:
            out["error"] = self.error
            out["error_kind"] = self.error_kind.value if self.error_kind else None
        return out


@dataclass
class SyncResult:
    """Append-only log of a sync run.

    Counts tally successful operations by kind. In dry-run mode every planned
    operation counts, since nothing was attempted.
    """

    dry_run: bool = False
    outcomes: list[OperationOutcome] = field(default_factory=list)
    counts: dict[OperationKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in OperationKind}
    )
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_plan(cls, operations: Iterable[SyncOperation], *, dry_run: bool = True) -> SyncResult:
        result = cls(dry_run=dry_run)
        for operation in operations:
            result.record_success(operation)
        return result

    def record_success(self, operation: SyncOperation) -> None:
        self.outcomes.append(OperationOutcome(operation=operation, succeeded=True))
        self.counts[operation_kind(operation)] += 1

    def record_failure(self, operation: SyncOperation, error: str, kind: ErrorKind) -> None:
        self.outcomes.append(
            OperationOutcome(operation=operation, succeeded=False, error=error, error_kind=kind)
        )
        self.errors.append(error)

    @property
    def operations(self) -> list[SyncOperation]:
        return [outcome.operation for outcome in self.outcomes]

    @property
    def created(self) -> int:
        return self.counts[OperationKind.CREATE]

    @property
    def updated(self) -> int:
        return self.counts[OperationKind.UPDATE]

    @property
    def deleted(self) -> int:
        return self.counts[OperationKind.DELETE]

    @property
    def renamed(self) -> int:
        return self.counts[OperationKind.RENAME]

    @property
    def unchanged(self) -> int:
        return self.counts[OperationKind.NO_CHANGE]

    @property
    def failed(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.succeeded)

    def has_changes(self) -> bool:
        return (self.created + self.updated + self.deleted + self.renamed) > 0

    def total_operations(self) -> int:
        return len(self.outcomes)

    def to_output(self) -> SyncOutput:
        return build_output(self)


@dataclass(frozen=True, slots=True)
class SyncOutput:
    status: SyncStatus
    dry_run: bool
    exit_code: int
    summary: dict[str, int]
    operations: list[dict[str, object]]
    errors: list[str]
    idempotent: bool

    def to_dict(self) -> dict[str, object]:
        return {
            "status": self.status.value,
            "dry_run": self.dry_run,
            "exit_code": self.exit_code,
            "summary": dict(self.summary),
            "operations": list(self.operations),
            "errors": list(self.errors),
            "idempotent": self.idempotent,
        }

    def raise_for_status(self) -> None:
        if self.status is SyncStatus.ERROR:
            raise PartialFailureError(self.errors, exit_code=self.exit_code)


def build_output(result: SyncResult) -> SyncOutput:
    outcomes = result.outcomes
    if any(not outcome.succeeded for outcome in outcomes):
        status = SyncStatus.ERROR
    elif all(isinstance(outcome.operation, NoChange) for outcome in outcomes):
        status = SyncStatus.NO_CHANGES
    else:
        status = SyncStatus.SUCCESS

    if status is SyncStatus.ERROR:
        # NoChange outcomes never touch the remote and do not make a run partial.
        any_applied = any(
            outcome.succeeded and not isinstance(outcome.operation, NoChange)
            for outcome in outcomes
        )
        exit_code = EXIT_PARTIAL if any_applied else EXIT_GENERAL
    else:
        exit_code = EXIT_SUCCESS

    return SyncOutput(
        status=status,
        dry_run=result.dry_run,
        exit_code=exit_code,
        summary={
            "created": result.created,
            "updated": result.updated,
            "deleted": result.deleted,
            "renamed": result.renamed,
            "unchanged": result.unchanged,
        },
        operations=[outcome.to_json() for outcome in outcomes],
        errors=list(result.errors),
        idempotent=status is SyncStatus.NO_CHANGES,
    )
