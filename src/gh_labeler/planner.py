"""Reconciliation planner.

`plan()` is a pure function from (desired labels, existing labels, alias index,
options) to an ordered list of operations. It performs no I/O and keeps no state
between calls.

Each desired label, in declaration order, is matched against the pool of existing
labels not yet claimed, in this fixed priority:

1. exact name (case-sensitive)
2. alias declared by the desired label
3. name similarity at or above the policy threshold

Alias matching is exhausted before similarity is tried. Existing labels left in the
pool afterwards are deleted unless added labels are allowed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from gh_labeler.aliases import AliasIndex
from gh_labeler.labels import DesiredLabel, ExistingLabel, colors_equal, descriptions_equal
from gh_labeler.operations import (
    DELETE_REASON_MARKED,
    DELETE_REASON_UNDECLARED,
    AttributeChange,
    Create,
    Delete,
    NoChange,
    Rename,
    SyncOperation,
    Update,
)
from gh_labeler.similarity import SIMILARITY_THRESHOLD, is_similar, label_similarity


@dataclass(frozen=True, slots=True)
class MatchPolicy:
    """Fixed matching policy, passed explicitly into `plan()`."""

    similarity_threshold: float = SIMILARITY_THRESHOLD


DEFAULT_POLICY = MatchPolicy()


def attribute_changes(
    existing: ExistingLabel, desired: DesiredLabel
) -> tuple[AttributeChange, ...]:
    changes: list[AttributeChange] = []
    if not colors_equal(desired.color, existing.color):
        changes.append(AttributeChange("color", existing.color, desired.remote_color))
    if not descriptions_equal(desired.description, existing.description):
        changes.append(
            AttributeChange("description", existing.description, desired.description)
        )
    return tuple(changes)


def find_alias_match(
    desired: DesiredLabel, pool: Sequence[ExistingLabel], alias_index: AliasIndex
) -> ExistingLabel | None:
    for candidate in pool:
        if alias_index.canonical_for(candidate.name) == desired.name:
            return candidate
    return None


def find_similar_match(
    desired: DesiredLabel, pool: Sequence[ExistingLabel], policy: MatchPolicy = DEFAULT_POLICY
) -> ExistingLabel | None:
    """Return the most similar pooled label, first in pool order on ties."""

    best: ExistingLabel | None = None
    best_score = -1.0
    for candidate in pool:
        score = label_similarity(desired.name, candidate.name)
        if score > best_score:
            best, best_score = candidate, score

    if best is not None and is_similar(best_score, policy.similarity_threshold):
        return best
    return None


def plan(
    desired: Sequence[DesiredLabel],
    existing: Sequence[ExistingLabel],
    alias_index: AliasIndex,
    allow_added_labels: bool,
    *,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> list[SyncOperation]:
    """Compute the operations that bring `existing` in line with `desired`."""

    pool: list[ExistingLabel] = list(existing)
    operations: list[SyncOperation] = []

    for label in desired:
        exact = next((c for c in pool if c.name == label.name), None)
        if exact is not None:
            pool.remove(exact)
            if label.delete:
                operations.append(Delete(name=exact.name, reason=DELETE_REASON_MARKED))
                continue
            changes = attribute_changes(exact, label)
            if changes:
                operations.append(Update(current_name=exact.name, label=label, changes=changes))
            else:
                operations.append(NoChange(name=exact.name))
            continue

        candidate = find_alias_match(label, pool, alias_index)
        if candidate is None:
            candidate = find_similar_match(label, pool, policy)
        if candidate is not None:
            pool.remove(candidate)
            if label.delete:
                operations.append(Delete(name=candidate.name, reason=DELETE_REASON_MARKED))
            else:
                operations.append(
                    Rename(
                        current_name=candidate.name,
                        label=label,
                        changes=attribute_changes(candidate, label),
                    )
                )
            continue

        if not label.delete:
            operations.append(Create(label=label))

    if not allow_added_labels:
        operations.extend(Delete(name=left.name, reason=DELETE_REASON_UNDECLARED) for left in pool)
    return operations
