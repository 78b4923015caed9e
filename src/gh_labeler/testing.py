"""In-memory `LabelService` doubles.

These stand in for GitHub when exercising the executor and the sync pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass

from gh_labeler.errors import ApiError
from gh_labeler.labels import DesiredLabel, ExistingLabel
from gh_labeler.service import LabelService


@dataclass(frozen=True, slots=True)
class ServiceCall:
    method: str
    name: str


class InMemoryLabelService(LabelService):
    """A label store that always succeeds."""

    def __init__(self, labels: list[ExistingLabel] | None = None) -> None:
        self.labels: list[ExistingLabel] = list(labels or [])
        self.calls: list[ServiceCall] = []

    def list_labels(self) -> list[ExistingLabel]:
        return list(self.labels)

    def create(self, label: DesiredLabel) -> None:
        self.calls.append(ServiceCall("create", label.name))
        self.labels.append(
            ExistingLabel(name=label.name, color=label.remote_color, description=label.description)
        )

    def delete(self, name: str) -> None:
        self.calls.append(ServiceCall("delete", name))
        self.labels = [existing for existing in self.labels if existing.name != name]


class FailingLabelService(LabelService):
    """A label store on which every mutation fails."""

    def __init__(self, message: str = "Mock failure") -> None:
        self.message = message
        self.calls: list[ServiceCall] = []

    def create(self, label: DesiredLabel) -> None:
        self.calls.append(ServiceCall("create", label.name))
        raise ApiError(f"{self.message} (create {label.name})", status=500)

    def delete(self, name: str) -> None:
        self.calls.append(ServiceCall("delete", name))
        raise ApiError(f"{self.message} (delete {name})", status=500)


class ScriptedLabelService(InMemoryLabelService):
    """An in-memory store that fails only the calls named in `fail_creates`/`fail_deletes`."""

    def __init__(
        self,
        labels: list[ExistingLabel] | None = None,
        *,
        fail_creates: set[str] | None = None,
        fail_deletes: set[str] | None = None,
    ) -> None:
        super().__init__(labels)
        self.fail_creates = set(fail_creates or ())
        self.fail_deletes = set(fail_deletes or ())

    def create(self, label: DesiredLabel) -> None:
        if label.name in self.fail_creates:
            self.calls.append(ServiceCall("create", label.name))
            raise ApiError(f"Validation failed creating {label.name!r}", status=422)
        super().create(label)

    def delete(self, name: str) -> None:
        if name in self.fail_deletes:
            self.calls.append(ServiceCall("delete", name))
            raise ApiError(f"Could not delete {name!r}", status=500)
        super().delete(name)
