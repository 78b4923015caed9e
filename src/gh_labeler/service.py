"""Abstract label-mutation capability."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Protocol

from gh_labeler.errors import LabelerError, LabelLostError
from gh_labeler.labels import DesiredLabel, ExistingLabel

logger = logging.getLogger(__name__)


class LabelService(ABC):
    """Mutations the executor applies to a repository's label set.

    Implementations raise a `LabelerError` subclass on failure. `update` is not atomic:
    it deletes the current label and then creates the new one. If the create fails
    after the delete succeeded, the label is gone and `LabelLostError` is raised.
    """

    @abstractmethod
    def create(self, label: DesiredLabel) -> None:
        """Create `label` on the remote.

        Args:
            label: Desired label; its color is sent without the `#`.
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Delete the remote label called `name`."""
        pass

    def update(self, current_name: str, label: DesiredLabel) -> None:
        """Replace `current_name` with `label` (delete, then create).

        Raises:
            LabelerError: If the delete fails; nothing changed on the remote.
            LabelLostError: If the delete succeeded but the create failed.
        """

        self.delete(current_name)
        try:
            self.create(label)
        except LabelerError as exc:
            logger.error(
                "Label deleted but not recreated",
                extra={"label": current_name, "new_name": label.name},
            )
            raise LabelLostError(current_name, label.name, exc) from exc

    def close(self) -> None:
        """Release transport resources, if any."""


class LabelSource(Protocol):
    """Anything that can report the labels currently on the remote."""

    def list_labels(self) -> list[ExistingLabel]: ...
