"""Edge removal on tetrahedral meshes.

The tetrahedra around an interior edge ``(a, b)`` are replaced by two fans
built on a triangulation of the ring of vertices around the edge. The ring
polygon is triangulated with Klincsek's dynamic programme so that the worst
quality of the new tetrahedra is as large as possible.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence

from .adjacency import LOCAL_FACES, TetConnectivity
from .retain import retain_tetrahedral_adjacency, surrounding_tets
from .tet_tuple import TetTuple

QualityFn = Callable[[int, int, int, int], float]
TriangleQualityFn = Callable[[int, int, int], float]
Triangle = tuple[int, int, int]


def optimal_triangulation(
    polygon: Sequence[int], quality: TriangleQualityFn
) -> tuple[float, list[Triangle]]:
    """Triangulate ``polygon`` maximising the worst triangle quality.

    Returns the achieved worst quality and the triangles, each given as
    ``(p[i], p[j], p[k])`` for polygon positions ``i < k < j``.
    """
    poly = list(polygon)
    m = len(poly)
    if m < 2:
        raise ValueError("a polygon needs at least two vertices")

    q_table = [[math.inf] * m for _ in range(m - 1)]
    k_table = [[-1] * m for _ in range(m - 1)]
    for i in range(m - 3, -1, -1):
        for j in range(i + 2, m):
            for k in range(i + 1, j):
                q = quality(poly[i], poly[j], poly[k])
                if k < j - 1:
                    q = min(q, q_table[k][j])
                if k > i + 1:
                    q = min(q, q_table[i][k])
                if k == i + 1 or q > q_table[i][j]:
                    q_table[i][j] = q
                    k_table[i][j] = k

    triangles: list[Triangle] = []

    def extract(i: int, j: int) -> None:
        if j >= i + 2:
            k = k_table[i][j]
            extract(i, k)
            extract(k, j)
            triangles.append((poly[i], poly[j], poly[k]))

    extract(0, m - 1)
    return q_table[0][m - 1], triangles


def _edge_ring(
    tup: TetTuple, tet_quality: QualityFn, mesh: TetConnectivity
) -> tuple[int, int, list[int], list[int], float] | None:
    """Collect the tetrahedra and vertices around the tuple's edge.

    Returns ``(a, b, ring_tets, ring_verts, worst_quality)`` or None when
    the edge touches the boundary.
    """
    vert_a = tup.vert(mesh)
    vert_b = tup.switch_vert().vert(mesh)

    start = TetTuple(tup.tet, tup.face, tup.edge, True).switch_edge().switch_face()
    t, f, e = start.tet, start.face, start.edge
    ring_tets: list[int] = []
    ring_verts: list[int] = []
    worst = math.inf
    while True:
        ring_tets.append(t)
        worst = min(worst, tet_quality(*mesh.tets[t]))
        ring_verts.append(TetTuple(t, f, e, False).vert(mesh))
        f = LOCAL_FACES[f][(e + 2) % 3]
        neighbour = mesh.tt[t][f]
        if neighbour == -1:
            return None
        t, f, e = neighbour, mesh.ttif[t][f], mesh.ttie[t][f][e]
        f = LOCAL_FACES[f][(e + 2) % 3]
        e = (e + 1) % 3
        if t == start.tet:
            break
    return vert_a, vert_b, ring_tets, ring_verts, worst


def _replace_ring(
    vert_a: int,
    vert_b: int,
    ring_tets: list[int],
    triangles: list[Triangle],
    mesh: TetConnectivity,
) -> list[int]:
    new_tets: list[list[int]] = []
    for tri in triangles:
        new_tets.append([vert_a, *tri])
        new_tets.append([*tri, vert_b])
    deleted = set(ring_tets)
    surround = surrounding_tets(deleted, mesh)
    return retain_tetrahedral_adjacency(deleted, surround, new_tets, mesh)


def _ring_quality(tet_quality: QualityFn, vert_a: int, vert_b: int) -> TriangleQualityFn:
    def quality(u: int, v: int, w: int) -> float:
        return min(tet_quality(vert_a, u, v, w), tet_quality(u, v, w, vert_b))

    return quality


def edge_removal(
    tup: TetTuple, tet_quality: QualityFn, mesh: TetConnectivity
) -> list[int] | None:
    """Remove the tuple's edge if that does not lower the worst quality.

    Returns the indices of the new tetrahedra, or None when the edge is on
    the boundary or removing it would make the worst quality worse.
    """
    ring = _edge_ring(tup, tet_quality, mesh)
    if ring is None:
        return None
    vert_a, vert_b, ring_tets, ring_verts, worst_old = ring
    worst_new, triangles = optimal_triangulation(
        ring_verts, _ring_quality(tet_quality, vert_a, vert_b)
    )
    if worst_old > worst_new:
        return None
    return _replace_ring(vert_a, vert_b, ring_tets, triangles, mesh)


def edge_removal_force(
    tup: TetTuple, tet_quality: QualityFn, mesh: TetConnectivity
) -> list[int] | None:
    """Remove the tuple's edge regardless of the resulting quality.

    Returns the indices of the new tetrahedra, or None when the edge is on
    the boundary.
    """
    ring = _edge_ring(tup, tet_quality, mesh)
    if ring is None:
        return None
    vert_a, vert_b, ring_tets, ring_verts, _ = ring
    _, triangles = optimal_triangulation(
        ring_verts, _ring_quality(tet_quality, vert_a, vert_b)
    )
    return _replace_ring(vert_a, vert_b, ring_tets, triangles, mesh)