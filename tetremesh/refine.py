"""Local refinement operations on tetrahedral meshes.

Edge contraction, edge split and Laplacian smoothing. Each operation is
"smart": it is only carried out when the worst quality of the affected
tetrahedra does not get worse (contraction) or strictly improves (split and
smoothing). On success the operations return the indices of the tetrahedra
that were created or moved; otherwise they return None and leave the mesh
as it was.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, MutableSequence, Sequence

from .adjacency import LOCAL_FACES, TetConnectivity
from .retain import retain_tetrahedral_adjacency, surrounding_tets
from .tet_tuple import TetTuple

QualityFn = Callable[[int, int, int, int], float]
EditableFn = Callable[[int], bool]
Point = Sequence[float]


def _worst(tet_quality: QualityFn, tets: Iterable[Sequence[int]]) -> float:
    return min((tet_quality(*tet) for tet in tets), default=math.inf)


def _replace(
    delete_ids: Iterable[int], new_tets: list[list[int]], mesh: TetConnectivity
) -> list[int]:
    deleted = set(delete_ids)
    surround = surrounding_tets(deleted, mesh)
    return retain_tetrahedral_adjacency(deleted, surround, new_tets, mesh)


def edge_contraction(
    tup: TetTuple,
    tet_quality: QualityFn,
    vertex_editable: EditableFn,
    mesh: TetConnectivity,
) -> list[int] | None:
    """Collapse the tuple's edge by merging its end vertex into its start.

    If the end vertex may not be edited the direction is reversed; if
    neither end may be edited nothing happens. The tetrahedra around the
    removed vertex are replaced, those containing the whole edge vanish.
    Returns the indices of the new tetrahedra, or None when the contraction
    is not allowed or would lower the worst quality.
    """
    if not vertex_editable(tup.switch_vert().vert(mesh)):
        tup = tup.switch_vert()
        if not vertex_editable(tup.switch_vert().vert(mesh)):
            return None

    v0 = tup.vert(mesh)
    v1 = tup.switch_vert().vert(mesh)

    tets_v0 = tup.tets_with_vert(mesh)
    tets_v1 = tup.switch_vert().tets_with_vert(mesh)

    new_tets = [
        [v0 if x == v1 else x for x in mesh.tets[s]]
        for s in sorted(tets_v1 - tets_v0)
    ]

    worst_new = _worst(tet_quality, new_tets)
    worst_old = _worst(tet_quality, (mesh.tets[s] for s in sorted(tets_v1)))
    if worst_old > worst_new:
        return None

    return _replace(tets_v1, new_tets, mesh)


def laplacian_smart_smoothing(
    tup: TetTuple,
    tet_quality: QualityFn,
    vertex_editable: EditableFn,
    mesh: TetConnectivity,
    vertices: MutableSequence[Point],
) -> list[int] | None:
    """Move the tuple's vertex to the centroid of its neighbours.

    The vertex taken is the one at the tuple's edge start in the positive
    direction, whatever the tuple's ``along``. The move is kept only when
    the worst quality of the surrounding tetrahedra strictly improves.
    Returns the sorted indices of those tetrahedra, or None when the vertex
    may not be edited or the move was undone.
    """
    forward = TetTuple(tup.tet, tup.face, tup.edge, True)
    v0 = forward.vert(mesh)
    if not vertex_editable(v0):
        return None

    neighbours = sorted(forward.tets_with_vert(mesh))
    worst_old = _worst(tet_quality, (mesh.tets[s] for s in neighbours))

    adjacent = {v for s in neighbours for v in mesh.tets[s]}
    adjacent.discard(v0)
    points = [vertices[v] for v in sorted(adjacent)]
    centroid = tuple(sum(coords) / len(points) for coords in zip(*points))

    saved = vertices[v0]
    vertices[v0] = centroid
    worst_new = _worst(tet_quality, (mesh.tets[s] for s in neighbours))
    if worst_new <= worst_old:
        vertices[v0] = saved
        return None
    return neighbours


def _ring_tets(tup: TetTuple, mesh: TetConnectivity) -> list[int] | None:
    """Tetrahedra around the tuple's edge, or None if the edge is on the boundary."""
    start = TetTuple(tup.tet, tup.face, tup.edge, True).switch_edge().switch_face()
    t, f, e = start.tet, start.face, start.edge
    ring: list[int] = []
    while True:
        ring.append(t)
        f = LOCAL_FACES[f][(e + 2) % 3]
        neighbour = mesh.tt[t][f]
        if neighbour == -1:
            return None
        t, f, e = neighbour, mesh.ttif[t][f], mesh.ttie[t][f][e]
        f = LOCAL_FACES[f][(e + 2) % 3]
        e = (e + 1) % 3
        if t == start.tet:
            break
    return ring


def edge_split(
    tup: TetTuple,
    tet_quality: QualityFn,
    vertices: MutableSequence[Point],
    mesh: TetConnectivity,
) -> list[int] | None:
    """Split the tuple's interior edge at its midpoint.

    A new vertex is appended to ``vertices`` and every tetrahedron around
    the edge is cut in two. The split is kept only when the worst quality
    strictly improves. Returns the indices of the new tetrahedra, or None
    when the edge is on the boundary or the split was undone.
    """
    forward = TetTuple(tup.tet, tup.face, tup.edge, True)
    vert_a = forward.vert(mesh)
    vert_b = forward.switch_vert().vert(mesh)

    ring = _ring_tets(forward, mesh)
    if ring is None:
        return None
    ring_ids = sorted(set(ring))
    worst_old = _worst(tet_quality, (mesh.tets[s] for s in ring_ids))

    point_a, point_b = vertices[vert_a], vertices[vert_b]
    vertices.append(tuple((p + q) / 2 for p, q in zip(point_a, point_b)))
    vert_m = len(vertices) - 1

    new_tets: list[list[int]] = []
    for old_v in (vert_a, vert_b):
        for s in ring_ids:
            tet = list(mesh.tets[s])
            tet[tet.index(old_v)] = vert_m
            new_tets.append(tet)

    if _worst(tet_quality, new_tets) <= worst_old:
        vertices.pop()
        return None

    return _replace(ring_ids, new_tets, mesh)