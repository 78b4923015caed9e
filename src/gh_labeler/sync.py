"""Label synchronization pipeline.

fetch existing labels -> build alias index -> plan -> execute (or dry run) -> result
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from gh_labeler.aliases import AliasIndex
from gh_labeler.executor import execute
from gh_labeler.github.client import GitHubLabelClient
from gh_labeler.labels import DesiredLabel, ExistingLabel
from gh_labeler.operations import SyncOperation
from gh_labeler.planner import DEFAULT_POLICY, MatchPolicy, plan
from gh_labeler.result import SyncResult
from gh_labeler.service import LabelService, LabelSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SyncOptions:
    dry_run: bool = False
    allow_added_labels: bool = False


class LabelSyncer:
    """Synchronizes a repository's labels with a declared label set."""

    def __init__(
        self,
        *,
        source: LabelSource,
        service: LabelService,
        options: SyncOptions | None = None,
        policy: MatchPolicy = DEFAULT_POLICY,
    ) -> None:
        self._source = source
        self._service = service
        self._options = options or SyncOptions()
        self._policy = policy

    @property
    def options(self) -> SyncOptions:
        return self._options

    def plan(
        self,
        desired: Sequence[DesiredLabel],
        existing: Sequence[ExistingLabel] | None = None,
    ) -> list[SyncOperation]:
        """Compute the plan; fetches the existing labels unless they are given."""

        alias_index = AliasIndex.build(desired)
        if existing is None:
            existing = self._source.list_labels()
        operations = plan(
            desired,
            existing,
            alias_index,
            self._options.allow_added_labels,
            policy=self._policy,
        )
        logger.info(
            "Sync plan computed",
            extra={
                "desired": len(desired),
                "existing": len(existing),
                "aliases": len(alias_index),
                "operations": len(operations),
            },
        )
        return operations

    def sync(self, desired: Sequence[DesiredLabel]) -> SyncResult:
        operations = self.plan(desired)
        if self._options.dry_run:
            return SyncResult.from_plan(operations, dry_run=True)
        return execute(operations, self._options.allow_added_labels, self._service)


def sync_repository_labels(
    *,
    token: str,
    repository: str,
    labels: Sequence[DesiredLabel],
    dry_run: bool = False,
    allow_added_labels: bool = False,
    base_url: str = "https://api.github.com",
) -> SyncResult:
    """Synchronize `repository` against `labels` in one call."""

    client = GitHubLabelClient(token=token, repository=repository, base_url=base_url)
    try:
        syncer = LabelSyncer(
            source=client,
            service=client,
            options=SyncOptions(dry_run=dry_run, allow_added_labels=allow_added_labels),
        )
        return syncer.sync(labels)
    finally:
        client.close()
