import math

import pytest

from tetremesh.adjacency import LOCAL_FACES, TetConnectivity
from tetremesh.face_neighbors import NeighborResult, face_removal_neighbors
from tetremesh.tet_tuple import TetTuple

APEX_A = 4
APEX_B = 5


def _ring_mesh():
    # Four consistently oriented tets around edge 0-1: faces {0,1,2} and
    # {0,1,3} are sandwiched between apexes 4 and 5.
    return TetConnectivity.from_tets(
        [[0, 1, 2, 4], [1, 0, 2, 5], [0, 1, 4, 3], [1, 0, 5, 3]]
    )


def _start():
    return TetTuple(0, 3, 0, True)


def _prefers_apex_pair(a, b, c, d):
    corners = {a, b, c, d}
    return 1.0 if APEX_A in corners and APEX_B in corners else 0.5


def _always(value):
    return lambda a, b, c, d: value


def test_boundary_edge_returns_apex_quality():
    mesh = TetConnectivity.from_tets([[0, 1, 2, 3], [1, 0, 2, 4]])
    calls = []

    def quality(a, b, c, d):
        calls.append((a, b, c, d))
        return 1.5

    tup = TetTuple(0, 3, 0, True)
    result = face_removal_neighbors(tup, mesh, 3, 4, quality, _always(True))
    assert result.q_old == math.inf
    assert result.q_new == 1.5
    assert result.polygon == []
    assert result.deleted_faces == []
    assert calls[0] == (3, 4, tup.vert(mesh), tup.switch_vert().vert(mesh))


def test_ring_of_four_finds_sandwiched_face():
    mesh = _ring_mesh()
    result = face_removal_neighbors(
        _start(), mesh, APEX_A, APEX_B, _prefers_apex_pair, _always(True)
    )
    assert result.q_old == 0.5
    assert result.q_new == 1.0
    assert result.polygon == [3]
    assert len(result.deleted_faces) == 1
    t, f = result.deleted_faces[0]
    face_verts = {mesh.tets[t][c] for c in LOCAL_FACES[f]}
    assert face_verts == {0, 1, 3}


def test_no_improvement_keeps_edge():
    mesh = _ring_mesh()
    result = face_removal_neighbors(
        _start(), mesh, APEX_A, APEX_B, _always(1.0), _always(True)
    )
    assert result == NeighborResult(math.inf, 1.0, [], [])


def test_orientation_rejects_sandwiched_face():
    mesh = _ring_mesh()
    result = face_removal_neighbors(
        _start(), mesh, APEX_A, APEX_B, _prefers_apex_pair, _always(False)
    )
    assert result.polygon == []
    assert result.q_old == math.inf
    assert result.q_new == _prefers_apex_pair(APEX_A, APEX_B, 0, 1)


@pytest.mark.parametrize("rejected", [0, 1, 2])
def test_two_of_three_orientations_suffice(rejected):
    mesh = _ring_mesh()
    calls = []

    def orient(a, b, c, d):
        calls.append((c, d))
        return len(calls) - 1 != rejected

    result = face_removal_neighbors(
        _start(), mesh, APEX_A, APEX_B, _prefers_apex_pair, orient
    )
    assert result.polygon == [3]


def test_one_of_three_orientations_is_not_enough():
    mesh = _ring_mesh()
    calls = []

    def orient(a, b, c, d):
        calls.append((c, d))
        return len(calls) == 1

    result = face_removal_neighbors(
        _start(), mesh, APEX_A, APEX_B, _prefers_apex_pair, orient
    )
    assert result.polygon == []
    assert result.deleted_faces == []


def test_search_does_not_modify_mesh():
    mesh = _ring_mesh()
    before = (
        [list(t) for t in mesh.tets],
        [list(r) for r in mesh.tt],
        [list(r) for r in mesh.ttif],
    )
    face_removal_neighbors(_start(), mesh, APEX_A, APEX_B, _prefers_apex_pair, _always(True))
    assert (mesh.tets, mesh.tt, mesh.ttif) == before