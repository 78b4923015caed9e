"""Label name similarity based on Levenshtein distance."""

from __future__ import annotations

SIMILARITY_THRESHOLD = 0.70


def levenshtein_distance(a: str, b: str) -> int:
    """Return the edit distance between `a` and `b`.

    Insertions, deletions and substitutions each cost 1; transpositions are not
    special-cased. Only two rows of the table are kept, sized by the shorter string.
    """

    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def label_similarity(a: str, b: str) -> float:
    """Return a case-insensitive similarity ratio in [0, 1] for two label names."""

    a = a.lower()
    b = b.lower()
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    # (longest - distance) / longest keeps exact ratios such as 7/10 at their
    # nearest float, so they compare equal to the threshold literal.
    return (longest - levenshtein_distance(a, b)) / longest


def is_similar(score: float, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    return score >= threshold
