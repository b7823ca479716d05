"""Scene graph: solids, nodes and assemblies.

The box is returned as a tree of immutable Assemblies. Each Node pairs a
child (Solid or Assembly) with its local Transform. Trimming half-spaces
live on the solids and are expressed in the root frame; they are applied
only when the tree is flattened for export.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np
from manifold3d import Manifold

from box_generator.errors import GeometryError
from box_generator.geometry.clipping import ClippingHalfSpace
from box_generator.geometry.profiles import Profile
from box_generator.geometry.transforms import Transform, apply_matrix


@dataclass(frozen=True, eq=False)
class Solid:
    """A finished piece of geometry with a logical material name."""

    name: str
    manifold: Manifold
    material: str
    trims: tuple[ClippingHalfSpace, ...] = ()
    profile: Profile | None = None

    def __post_init__(self) -> None:
        if self.manifold.is_empty():
            raise GeometryError(f"Solid '{self.name}' has no geometry")

    def signature(self) -> tuple:
        """Structural fingerprint: name, material, trims and profile points."""
        return (
            "solid",
            self.name,
            self.material,
            tuple(t.as_tuple() for t in self.trims),
            self.profile.points if self.profile is not None else None,
            round(self.manifold.volume(), 3),
        )


@dataclass(frozen=True)
class Node:
    """A child placed in its parent's frame."""

    child: Union[Solid, "Assembly"]
    transform: Transform = Transform()


@dataclass(frozen=True)
class FlatPart:
    """One solid after flattening: world-space geometry with trims applied."""

    path: str
    solid: Solid
    manifold: Manifold


@dataclass(frozen=True, eq=False)
class Assembly:
    """Named, ordered collection of placed children."""

    name: str
    nodes: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        seen = set()
        names = set()
        for node in self.nodes:
            if id(node.child) in seen:
                raise GeometryError(
                    f"Assembly '{self.name}' holds '{node.child.name}' twice; "
                    "scene nodes must have exactly one parent"
                )
            if node.child.name in names:
                raise GeometryError(
                    f"Assembly '{self.name}' has two children named '{node.child.name}'"
                )
            seen.add(id(node.child))
            names.add(node.child.name)

    def __len__(self) -> int:
        return len(self.nodes)

    def names(self) -> list[str]:
        return [node.child.name for node in self.nodes]

    def find(self, name: str) -> Solid | Assembly | None:
        """Direct child with the given name, or None."""
        for node in self.nodes:
            if node.child.name == name:
                return node.child
        return None

    def node(self, name: str) -> Node:
        for node in self.nodes:
            if node.child.name == name:
                return node
        raise KeyError(name)

    def __getitem__(self, name: str) -> Solid | Assembly:
        return self.node(name).child

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def iter_solids(self, parent: np.ndarray | None = None, prefix: str = "") -> Iterator[tuple[str, Solid, np.ndarray]]:
        """Depth-first walk yielding (path, solid, world matrix)."""
        base = np.eye(4) if parent is None else parent
        path = f"{prefix}{self.name}"
        for node in self.nodes:
            world = base @ node.transform.matrix()
            child = node.child
            if isinstance(child, Assembly):
                yield from child.iter_solids(world, f"{path}/")
            else:
                yield f"{path}/{child.name}", child, world

    def solids(self) -> list[Solid]:
        return [solid for _, solid, _ in self.iter_solids()]

    def node_count(self) -> int:
        """Number of nodes in the whole tree (not counting this root)."""
        count = 0
        for node in self.nodes:
            count += 1
            if isinstance(node.child, Assembly):
                count += node.child.node_count()
        return count

    def is_tree(self) -> bool:
        """True if no Solid or Assembly object appears more than once."""
        seen: set[int] = set()

        def walk(assembly: Assembly) -> bool:
            for node in assembly.nodes:
                if id(node.child) in seen:
                    return False
                seen.add(id(node.child))
                if isinstance(node.child, Assembly) and not walk(node.child):
                    return False
            return True

        return walk(self)

    def signature(self) -> tuple:
        """Structural fingerprint of the whole tree."""
        return (
            "assembly",
            self.name,
            tuple(
                (node.transform.as_tuple(), node.child.signature())
                for node in self.nodes
            ),
        )

    def flatten(self) -> list[FlatPart]:
        """World-space manifolds with every solid's trims applied.

        Solids trimmed away entirely are dropped.
        """
        parts = []
        for path, solid, world in self.iter_solids():
            m = apply_matrix(solid.manifold, world)
            for half_space in solid.trims:
                m = half_space.trim(m)
            if not m.is_empty():
                parts.append(FlatPart(path, solid, m))
        return parts


def place(child: Solid | Assembly, x: float = 0, y: float = 0, z: float = 0, rotation=(0.0, 0.0, 0.0)) -> Node:
    """Shorthand for Node(child, Transform.at(...))."""
    return Node(child, Transform.at(x, y, z, rotation))
