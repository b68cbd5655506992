"""Face adjacency of tetrahedral meshes.

Faces of a tetrahedron ``[v0, v1, v2, v3]`` are indexed by the opposite
corner and oriented as seen from that corner::

    face 0 = v3, v2, v1
    face 1 = v2, v3, v0
    face 2 = v1, v0, v3
    face 3 = v0, v1, v2

Edge ``e`` of a face runs from its corner ``e`` to corner ``(e + 1) % 3``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

LOCAL_FACES: tuple[tuple[int, int, int], ...] = (
    (3, 2, 1),
    (2, 3, 0),
    (1, 0, 3),
    (0, 1, 2),
)

Adjacency = tuple[list[list[int]], list[list[int]], list[list[list[int]]]]


def local_face_vertex(face: int, corner: int) -> int:
    """Return the local vertex index (0-3) at ``corner`` of tetrahedron face ``face``."""
    if not 0 <= face < 4:
        raise IndexError(f"face index {face} out of range 0..3")
    if not 0 <= corner < 3:
        raise IndexError(f"corner index {corner} out of range 0..2")
    return LOCAL_FACES[face][corner]


def _face_vertices(tet: Sequence[int], face: int) -> list[int]:
    return [tet[c] for c in LOCAL_FACES[face]]


def tetrahedron_tetrahedron_adjacency(tets: Iterable[Sequence[int]]) -> Adjacency:
    """Compute ``(tt, ttif, ttie)`` for a list of tetrahedra.

    ``tt[t][f]`` is the tetrahedron across face ``f`` of ``t`` (or -1),
    ``ttif[t][f]`` the index of that face in the neighbour, and
    ``ttie[t][f][e]`` the index, in the neighbour's face, of edge ``e``.
    """
    tet_list = [tuple(tet) for tet in tets]
    for tet in tet_list:
        if len(tet) != 4:
            raise ValueError(f"tetrahedron {tet!r} does not have 4 vertices")

    count = len(tet_list)
    tt = [[-1] * 4 for _ in range(count)]
    ttif = [[-1] * 4 for _ in range(count)]
    ttie = [[[-1] * 3 for _ in range(4)] for _ in range(count)]

    cells = sorted(
        (tuple(sorted(_face_vertices(tet, f))), t, f)
        for t, tet in enumerate(tet_list)
        for f in range(4)
    )

    for (key1, t1, f1), (key2, t2, f2) in zip(cells, cells[1:]):
        if key1 != key2:
            continue
        tt[t1][f1] = t2
        tt[t2][f2] = t1
        ttif[t1][f1] = f2
        ttif[t2][f2] = f1

        f1v = _face_vertices(tet_list[t1], f1)
        f2v = _face_vertices(tet_list[t2], f2)
        emap = [0, 1, 2]
        for e in range(3):
            for i in range(3 - e):
                if f1v[e] == f2v[emap[i]]:
                    ttie[t1][f1][(e + 2) % 3] = emap[i]
                    ttie[t2][f2][(emap[i] + 2) % 3] = e
                    emap[i] = emap[2 - e]
                    break

    return tt, ttif, ttie


@dataclass
class TetConnectivity:
    """Tetrahedra together with their face adjacency."""

    tets: list[list[int]]
    tt: list[list[int]] = field(default_factory=list)
    ttif: list[list[int]] = field(default_factory=list)
    ttie: list[list[list[int]]] = field(default_factory=list)

    @classmethod
    def from_tets(cls, tets: Iterable[Sequence[int]]) -> "TetConnectivity":
        """Build the connectivity for the given tetrahedra."""
        mesh = cls([list(tet) for tet in tets])
        mesh.recompute()
        return mesh

    def recompute(self) -> None:
        """Recompute the adjacency from the current tetrahedra."""
        self.tt, self.ttif, self.ttie = tetrahedron_tetrahedron_adjacency(self.tets)

    def __len__(self) -> int:
        return len(self.tets)