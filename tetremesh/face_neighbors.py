"""Neighbour search used when removing faces between two apex vertices.

Starting from an edge of a face that separates two apex vertices ``a`` and
``b``, the search looks for further faces sandwiched between the apexes
whose removal, together with the starting face, improves mesh quality.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

from .adjacency import LOCAL_FACES, TetConnectivity
from .tet_tuple import TetTuple

QualityFn = Callable[[int, int, int, int], float]
OrientFn = Callable[[int, int, int, int], bool]


@dataclass
class NeighborResult:
    """Outcome of a neighbour search across one edge.

    ``q_old`` is the worst quality of the tetrahedra that would be removed,
    ``q_new`` the worst quality of those that would be created, ``polygon``
    the vertices added to the removal polygon across this edge and
    ``deleted_faces`` the ``(tet, face)`` pairs of faces to remove.
    """

    q_old: float
    q_new: float
    polygon: list[int] = field(default_factory=list)
    deleted_faces: list[tuple[int, int]] = field(default_factory=list)


def _revolve(tup: TetTuple, mesh: TetConnectivity) -> tuple[int, int, int] | None:
    """Walk around the tuple's edge; return the face two steps on when the
    edge is interior and exactly four tetrahedra surround it."""
    t, f, e = tup.tet, tup.face, tup.edge
    count = 0
    sandwiched = None
    while True:
        if mesh.tt[t][f] == -1:
            return None
        t, f, e = mesh.tt[t][f], mesh.ttif[t][f], mesh.ttie[t][f][e]
        f = LOCAL_FACES[f][(e + 2) % 3]
        count += 1
        if count == 2:
            sandwiched = (t, f, e)
        if count > 4:
            return None
        if t == tup.tet:
            break
    return sandwiched if count == 4 else None


def face_removal_neighbors(
    tup: TetTuple,
    mesh: TetConnectivity,
    apex_a: int,
    apex_b: int,
    tet_quality: QualityFn,
    orient3d: OrientFn,
) -> NeighborResult:
    """Search across the tuple's edge for faces worth removing together."""
    u = tup.vert(mesh)
    w = tup.switch_vert().vert(mesh)
    q_uw = tet_quality(apex_a, apex_b, u, w)
    fallback = NeighborResult(math.inf, q_uw)

    sandwiched = _revolve(tup, mesh)
    if sandwiched is None:
        return fallback

    t, f, e = sandwiched
    v = TetTuple(t, f, (e + 2) % 3, True).vert(mesh)

    votes = (
        int(orient3d(apex_a, apex_b, u, v))
        + int(orient3d(apex_a, apex_b, v, w))
        + int(orient3d(apex_a, apex_b, w, u))
    )
    if votes < 2:
        return fallback

    uv = face_removal_neighbors(
        TetTuple(t, f, (e + 1) % 3, False), mesh, apex_a, apex_b, tet_quality, orient3d
    )
    vw = face_removal_neighbors(
        TetTuple(t, f, (e + 2) % 3, False), mesh, apex_a, apex_b, tet_quality, orient3d
    )

    q_old = min(
        tet_quality(apex_a, u, v, w),
        tet_quality(u, v, w, apex_b),
        uv.q_old,
        vw.q_old,
    )
    q_new = min(uv.q_new, vw.q_new)

    if q_new > q_old or q_new > q_uw:
        return NeighborResult(
            q_old,
            q_new,
            uv.polygon + [v] + vw.polygon,
            uv.deleted_faces + [(t, f)] + vw.deleted_faces,
        )
    return fallback