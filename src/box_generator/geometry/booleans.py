"""Boolean operations with empty-manifold guards.

All operations filter empty manifolds before processing to prevent
silent propagation and batch_boolean crashes.
"""

from manifold3d import Manifold, OpType


def _filter_empty(parts: list[Manifold]) -> list[Manifold]:
    """Remove empty manifolds from a list."""
    return [p for p in parts if not p.is_empty()]


def union_all(parts: list[Manifold]) -> Manifold:
    """Union a list of manifolds. Filters empty manifolds first.

    Returns an empty Manifold if no valid parts remain.
    """
    valid = _filter_empty(parts)
    if not valid:
        return Manifold()
    if len(valid) == 1:
        return valid[0]
    return Manifold.batch_boolean(valid, OpType.Add)


def compose_disjoint(parts: list[Manifold]) -> Manifold:
    """Compose manifolds into one object without boolean resolution.

    Overlapping parts stay overlapping; use union_all when a single
    watertight shell is required.
    """
    valid = _filter_empty(parts)
    if not valid:
        return Manifold()
    if len(valid) == 1:
        return valid[0]
    return Manifold.compose(valid)
