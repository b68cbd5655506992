"""Cell-tuple navigation on triangle meshes.

A tuple ``(face, edge, along)`` names a directed half edge: triangle
``face``, its local edge ``edge`` (from corner ``edge`` to corner
``edge + 1``), and whether the half edge follows that direction.
Adjacency is given as ``ff[f][e]`` (neighbouring face or -1) and
``ffi[f][e]`` (edge index in that neighbour).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

Table = Sequence[Sequence[int]]


@dataclass(frozen=True)
class TriangleTuple:
    """A directed half edge on a triangle mesh."""

    face: int
    edge: int
    along: bool = True

    def switch_vert(self) -> "TriangleTuple":
        """Same edge and face, the other end vertex."""
        return replace(self, along=not self.along)

    def switch_edge(self) -> "TriangleTuple":
        """Same face and vertex, the other edge."""
        edge = (self.edge + (2 if self.along else 1)) % 3
        return TriangleTuple(self.face, edge, not self.along)

    def switch_face(self, ff: Table, ffi: Table) -> "TriangleTuple":
        """Same edge and vertex, the neighbouring face; unchanged on a boundary."""
        if self.is_on_boundary(ff):
            return self
        return TriangleTuple(
            ff[self.face][self.edge], ffi[self.face][self.edge], not self.along
        )

    def vert(self, faces: Table) -> int:
        """Index of the vertex the half edge starts from."""
        if self.face < 0 or self.face >= len(faces):
            raise IndexError(f"face index {self.face} out of range")
        if not 0 <= self.edge <= 2:
            raise IndexError(f"edge index {self.edge} out of range 0..2")
        corner = self.edge if self.along else (self.edge + 1) % 3
        return faces[self.face][corner]

    def is_on_boundary(self, ff: Table) -> bool:
        """Whether the half edge has no neighbouring face."""
        return ff[self.face][self.edge] == -1

    def next_in_one_ring(self, ff: Table, ffi: Table) -> tuple["TriangleTuple", bool]:
        """Step to the next half edge around the start vertex.

        Returns the new tuple and False when a boundary had to be crossed
        by rotating back to the opposite boundary, True otherwise.
        """
        if self.is_on_boundary(ff):
            tup = self
            while True:
                tup = tup.switch_face(ff, ffi).switch_edge()
                if tup.is_on_boundary(ff):
                    break
            return tup.switch_edge(), False
        return self.switch_face(ff, ffi).switch_edge(), True