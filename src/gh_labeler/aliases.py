"""Alias lookup for desired labels.

An alias is an alternate name a label used to have. When an existing label carries an
alias of a desired label, the sync renames it instead of deleting and recreating it.

Collision policy: the first declaration wins and every later conflicting declaration
is rejected with `AliasCollisionError`. A conflict is either an alias claimed by two
labels, or an alias equal to another label's name (compared case-insensitively).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from gh_labeler.errors import AliasCollisionError
from gh_labeler.labels import DesiredLabel


class AliasIndex(Mapping[str, str]):
    """Read-only mapping of lowercased alias to canonical desired-label name."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})

    @classmethod
    def build(cls, desired: Iterable[DesiredLabel]) -> AliasIndex:
        labels = list(desired)
        names = {label.name.lower(): label.name for label in labels}

        entries: dict[str, str] = {}
        for label in labels:
            for alias in label.aliases:
                key = alias.lower()
                if key == label.name.lower():
                    continue

                owner = names.get(key)
                if owner is not None:
                    raise AliasCollisionError(alias, owner=owner, claimant=label.name)

                previous = entries.get(key)
                if previous is None:
                    entries[key] = label.name
                elif previous != label.name:
                    raise AliasCollisionError(alias, owner=previous, claimant=label.name)
        return cls(entries)

    def canonical_for(self, name: str) -> str | None:
        """Return the desired label that declares `name` as an alias, if any."""

        return self._entries.get(name.lower())

    def __getitem__(self, alias: str) -> str:
        return self._entries[alias.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"AliasIndex({self._entries!r})"
