"""Cell-tuple navigation on tetrahedral meshes.

A tuple ``(tet, face, edge, along)`` names a directed half edge inside one
tetrahedron. ``face`` is a local face index (0-3, the face opposite that
corner), ``edge`` a local edge index within the face (0-2, from corner
``edge`` to corner ``edge + 1``) and ``along`` whether the half edge follows
that direction. Switching one of vertex, edge, face or tetrahedron yields
the tuple that differs from this one only in that element.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .adjacency import LOCAL_FACES, TetConnectivity


@dataclass(frozen=True)
class TetTuple:
    """A directed half edge within a face of a tetrahedron."""

    tet: int
    face: int
    edge: int
    along: bool = True

    def switch_vert(self) -> "TetTuple":
        """Same edge, face and tetrahedron, the other end vertex."""
        return replace(self, along=not self.along)

    def switch_edge(self) -> "TetTuple":
        """Same vertex, face and tetrahedron, the other edge."""
        edge = (self.edge + (2 if self.along else 1)) % 3
        return TetTuple(self.tet, self.face, edge, not self.along)

    def switch_face(self) -> "TetTuple":
        """Same vertex, edge and tetrahedron, the other face."""
        face = LOCAL_FACES[self.face][(self.edge + 2) % 3]
        return TetTuple(self.tet, face, self.edge, not self.along)

    def switch_tet(self, mesh: TetConnectivity) -> "TetTuple":
        """Same vertex, edge and face, the neighbouring tetrahedron.

        On a boundary face the tuple is returned unchanged.
        """
        if self.is_on_boundary(mesh):
            return self
        return TetTuple(
            mesh.tt[self.tet][self.face],
            mesh.ttif[self.tet][self.face],
            mesh.ttie[self.tet][self.face][self.edge],
            not self.along,
        )

    def _local_vert(self) -> int:
        corner = self.edge if self.along else (self.edge + 1) % 3
        return LOCAL_FACES[self.face][corner]

    def vert(self, mesh: TetConnectivity) -> int:
        """Global index of the vertex the half edge starts from."""
        if not 0 <= self.tet < len(mesh.tets):
            raise IndexError(f"tetrahedron index {self.tet} out of range")
        if not 0 <= self.face <= 3:
            raise IndexError(f"face index {self.face} out of range 0..3")
        if not 0 <= self.edge <= 2:
            raise IndexError(f"edge index {self.edge} out of range 0..2")
        return mesh.tets[self.tet][self._local_vert()]

    def is_on_boundary(self, mesh: TetConnectivity) -> bool:
        """Whether the tuple's face has no neighbouring tetrahedron."""
        return mesh.tt[self.tet][self.face] == -1

    def next_in_one_ring(self, mesh: TetConnectivity) -> tuple["TetTuple", bool]:
        """Step to the next half edge in the one ring.

        Returns the new tuple and False when a boundary face was met and the
        walk rotated back to the opposite boundary, True otherwise.
        """
        if self.is_on_boundary(mesh):
            tup = self
            seen = {tup}
            while True:
                tup = tup.switch_face().switch_tet(mesh).switch_face().switch_edge()
                if tup.is_on_boundary(mesh):
                    break
                if tup in seen:
                    raise RuntimeError("one ring walk does not reach a boundary")
                seen.add(tup)
            return tup.switch_edge(), False

        face = LOCAL_FACES[self.face][(self.edge + 2) % 3]
        tet = mesh.tt[self.tet][face]
        if tet == -1:
            raise ValueError("one ring step crosses a boundary face")
        new_face = mesh.ttif[self.tet][face]
        new_edge = mesh.ttie[self.tet][face][self.edge]
        new_face = LOCAL_FACES[new_face][(new_edge + 2) % 3]
        new_edge = (new_edge + (1 if self.along else 2)) % 3
        return TetTuple(tet, new_face, new_edge, self.along), True

    def tets_with_vert(self, mesh: TetConnectivity) -> set[int]:
        """Tetrahedra that contain the start vertex and are reachable by faces."""
        local = self._local_vert()
        vertex = mesh.tets[self.tet][local]
        found: set[int] = set()
        stack = [(local, self.tet)]
        while stack:
            local_v, t = stack.pop()
            if local_v == -1 or t == -1 or t in found:
                continue
            found.add(t)
            for f in range(4):
                if f == local_v:
                    continue
                neighbour = mesh.tt[t][f]
                if neighbour == -1:
                    continue
                corners = mesh.tets[neighbour]
                position = next(
                    (i for i, v in enumerate(corners) if v == vertex), -1
                )
                stack.append((position, neighbour))
        return found