"""Multi-face removal on tetrahedral meshes.

A face shared by two tetrahedra separates two apex vertices ``a`` and ``b``.
The face is removed together with any further faces sandwiched between the
apexes that the neighbour search finds worth removing. The tetrahedra on
both sides of those faces are replaced by a fan of tetrahedra around the new
edge ``(a, b)``, one for each edge of the boundary polygon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

from .adjacency import TetConnectivity
from .face_neighbors import face_removal_neighbors
from .retain import retain_tetrahedral_adjacency, surrounding_tets
from .tet_tuple import TetTuple

QualityFn = Callable[[int, int, int, int], float]
OrientFn = Callable[[int, int, int, int], bool]


@dataclass
class _Plan:
    apex_a: int
    apex_b: int
    q_old: float
    q_new: float
    polygon: list[int]
    deleted_faces: list[tuple[int, int]]


def _plan(
    tup: TetTuple,
    tet_quality: QualityFn,
    orient3d: OrientFn,
    mesh: TetConnectivity,
) -> _Plan | None:
    """Gather apexes, polygon and faces to remove; None on a boundary face."""
    if tup.is_on_boundary(mesh):
        return None

    q_old = tet_quality(*mesh.tets[tup.tet])

    start = TetTuple(tup.tet, tup.face, tup.edge, True)
    apex_a = start.switch_face().switch_edge().switch_vert().vert(mesh)

    other = start.switch_tet(mesh).switch_face().switch_edge()
    apex_b = other.switch_vert().vert(mesh)
    q_old = min(q_old, tet_quality(*mesh.tets[other.tet]))

    q_new = math.inf
    polygon: list[int] = []
    deleted_faces: list[tuple[int, int]] = [(tup.tet, tup.face)]
    for e in range(3):
        edge_tup = TetTuple(tup.tet, tup.face, e, tup.along)
        polygon.append(edge_tup.vert(mesh))
        result = face_removal_neighbors(
            edge_tup, mesh, apex_a, apex_b, tet_quality, orient3d
        )
        q_old = min(q_old, result.q_old)
        q_new = min(q_new, result.q_new)
        polygon.extend(result.polygon)
        deleted_faces.extend(result.deleted_faces)

    return _Plan(apex_a, apex_b, q_old, q_new, polygon, deleted_faces)


def _apply(plan: _Plan, mesh: TetConnectivity) -> list[int]:
    deleted: set[int] = set()
    for t, f in plan.deleted_faces:
        deleted.add(t)
        deleted.add(mesh.tt[t][f])
    deleted.discard(-1)

    ring = plan.polygon[::-1]
    new_tets = [
        [plan.apex_a, plan.apex_b, p, q] for p, q in zip(ring, ring[1:])
    ]
    if new_tets:
        new_tets.append([plan.apex_a, plan.apex_b, ring[-1], ring[0]])

    surround = surrounding_tets(deleted, mesh)
    return retain_tetrahedral_adjacency(deleted, surround, new_tets, mesh)


def multi_face_removal(
    tup: TetTuple,
    tet_quality: QualityFn,
    orient3d: OrientFn,
    mesh: TetConnectivity,
) -> list[int] | None:
    """Remove the tuple's face (and suitable neighbours) if quality improves.

    Returns the indices of the new tetrahedra, or None when the face is on
    the boundary, the worst quality would not improve, or the new worst
    quality would be negative.
    """
    plan = _plan(tup, tet_quality, orient3d, mesh)
    if plan is None:
        return None
    if plan.q_new <= plan.q_old or plan.q_new < 0:
        return None
    return _apply(plan, mesh)


def multi_face_removal_force(
    tup: TetTuple,
    tet_quality: QualityFn,
    orient3d: OrientFn,
    mesh: TetConnectivity,
) -> list[int] | None:
    """Remove the tuple's face (and suitable neighbours) regardless of quality.

    Returns the indices of the new tetrahedra, or None when the face is on
    the boundary.
    """
    plan = _plan(tup, tet_quality, orient3d, mesh)
    if plan is None:
        return None
    return _apply(plan, mesh)