"""
Label Normalizer - canonical forms for certification and skill labels.

Two labels are considered equal when they match after trimming surrounding
whitespace and lower-casing. The canonical form is what ends up in match
evidence; the original spelling is not preserved.
"""
from typing import Any, FrozenSet, Iterable, Optional


def canonicalize(label: Any) -> Optional[str]:
    """Return the canonical form of a single label, or None if it carries no claim."""
    if not isinstance(label, str):
        return None
    canonical = label.strip().lower()
    return canonical or None


def canonicalize_labels(labels: Optional[Iterable[Any]]) -> FrozenSet[str]:
    """
    Canonicalize a raw label collection into a set.

    Duplicates collapse. None, a bare string, or entries that are not
    strings are tolerated and simply contribute nothing.
    """
    if labels is None:
        return frozenset()
    if isinstance(labels, str):
        # A single label passed where a collection was expected
        labels = [labels]
    try:
        iterator = iter(labels)
    except TypeError:
        return frozenset()

    canonical = set()
    for label in iterator:
        value = canonicalize(label)
        if value is not None:
            canonical.add(value)
    return frozenset(canonical)


def labels_equal(left: Any, right: Any) -> bool:
    """True when both labels are present and canonically equal."""
    left_canonical = canonicalize(left)
    if left_canonical is None:
        return False
    return left_canonical == canonicalize(right)
