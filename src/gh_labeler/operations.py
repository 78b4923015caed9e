"""Sync operations produced by the planner.

`SyncOperation` is a closed union of five immutable shapes. Code that dispatches on it
uses `match` with an `assert_never` fallback, so adding a shape is a type error at
every dispatch site until that site handles it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias, assert_never

from gh_labeler.labels import DesiredLabel

DELETE_REASON_UNDECLARED = "Not defined in configuration"
DELETE_REASON_MARKED = "Marked for deletion in configuration"


class OperationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RENAME = "rename"
    NO_CHANGE = "no_change"


@dataclass(frozen=True, slots=True)
class AttributeChange:
    field: str
    old: str | None
    new: str | None

    def __str__(self) -> str:
        return f"{self.field}: {self.old or '(none)'} -> {self.new or '(none)'}"

    def to_json(self) -> dict[str, object]:
        return {"field": self.field, "old": self.old, "new": self.new}


@dataclass(frozen=True, slots=True)
class Create:
    label: DesiredLabel


@dataclass(frozen=True, slots=True)
class Update:
    current_name: str
    label: DesiredLabel
    changes: tuple[AttributeChange, ...]


@dataclass(frozen=True, slots=True)
class Rename:
    current_name: str
    label: DesiredLabel
    changes: tuple[AttributeChange, ...] = ()

    @property
    def new_name(self) -> str:
        return self.label.name


@dataclass(frozen=True, slots=True)
class Delete:
    name: str
    reason: str


@dataclass(frozen=True, slots=True)
class NoChange:
    name: str


SyncOperation: TypeAlias = Create | Update | Rename | Delete | NoChange


def operation_kind(operation: SyncOperation) -> OperationKind:
    match operation:
        case Create():
            return OperationKind.CREATE
        case Update():
            return OperationKind.UPDATE
        case Rename():
            return OperationKind.RENAME
        case Delete():
            return OperationKind.DELETE
        case NoChange():
            return OperationKind.NO_CHANGE
        case _:
            assert_never(operation)


def operation_subject(operation: SyncOperation) -> str:
    """Return the remote label name the operation acts on."""

    match operation:
        case Create(label=label):
            return label.name
        case Update(current_name=name) | Rename(current_name=name):
            return name
        case Delete(name=name) | NoChange(name=name):
            return name
        case _:
            assert_never(operation)


def describe_operation(operation: SyncOperation) -> str:
    match operation:
        case Create(label=label):
            return f"Create label: {label.name} ({label.color})"
        case Update(current_name=name):
            return f"Update label: {name}"
        case Rename(current_name=name, label=label):
            return f"Rename label: {name} -> {label.name}"
        case Delete(name=name, reason=reason):
            return f"Delete label: {name} ({reason})"
        case NoChange(name=name):
            return f"No change: {name}"
        case _:
            assert_never(operation)


def operation_to_json(operation: SyncOperation) -> dict[str, object]:
    out: dict[str, object] = {"type": operation_kind(operation).value}
    match operation:
        case Create(label=label):
            out.update(
                name=label.name, color=label.remote_color, description=label.description
            )
        case Update(current_name=name, label=label, changes=changes):
            out.update(
                name=name,
                color=label.remote_color,
                description=label.description,
                changes=[c.to_json() for c in changes],
            )
        case Rename(current_name=name, label=label, changes=changes):
            out.update(
                name=name,
                new_name=label.name,
                color=label.remote_color,
                description=label.description,
                changes=[c.to_json() for c in changes],
            )
        case Delete(name=name, reason=reason):
            out.update(name=name, reason=reason)
        case NoChange(name=name):
            out.update(name=name)
        case _:
            assert_never(operation)
    return out
