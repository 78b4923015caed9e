"""Sequential plan executor.

Operations are applied one at a time in plan order. A failed operation is recorded and
execution moves on to the next one; nothing already applied is undone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import assert_never

from gh_labeler.errors import LabelerError, LabelLostError
from gh_labeler.operations import (
    Create,
    Delete,
    NoChange,
    Rename,
    SyncOperation,
    Update,
    describe_operation,
    operation_subject,
)
from gh_labeler.result import ErrorKind, SyncResult
from gh_labeler.service import LabelService

logger = logging.getLogger(__name__)


def apply_operation(operation: SyncOperation, service: LabelService) -> None:
    match operation:
        case NoChange():
            return
        case Create(label=label):
            service.create(label)
        case Delete(name=name):
            service.delete(name)
        case Update(current_name=name, label=label) | Rename(current_name=name, label=label):
            service.update(name, label)
        case _:
            assert_never(operation)


def execute(
    operations: Sequence[SyncOperation],
    allow_added_labels: bool,
    service: LabelService,
) -> SyncResult:
    """Apply `operations` through `service` and collect the outcome of each.

    Args:
        operations: Planner output, applied strictly in order.
        allow_added_labels: Whether undeclared labels were kept by the planner.
        service: Label-mutation capability.

    Returns:
        The populated `SyncResult`.
    """

    logger.info(
        "Applying sync plan",
        extra={"operations": len(operations), "allow_added_labels": allow_added_labels},
    )

    result = SyncResult(dry_run=False)
    for operation in operations:
        description = describe_operation(operation)
        try:
            apply_operation(operation, service)
        except LabelLostError as exc:
            message = (
                f"Label lost: {exc.name!r} was deleted but {exc.new_name!r} could not be "
                f"created ({exc.cause}); recreate it manually"
            )
            logger.error(message, extra={"label": exc.name, "new_name": exc.new_name})
            result.record_failure(operation, message, ErrorKind.LABEL_LOST)
        except LabelerError as exc:
            message = f"Operation failed: {description} - {exc}"
            logger.warning(message, extra={"label": operation_subject(operation)})
            result.record_failure(operation, message, ErrorKind.OPERATION_FAILED)
        else:
            logger.debug(
                "Operation applied",
                extra={"label": operation_subject(operation), "operation": description},
            )
            result.record_success(operation)

    return result
