import pytest

from tetremesh.adjacency import (
    TetConnectivity,
    local_face_vertex,
    tetrahedron_tetrahedron_adjacency,
)

TWO_TETS = [[0, 1, 2, 3], [1, 2, 3, 4]]
FAN = [[0, 1, 2, 3], [0, 1, 3, 4], [0, 1, 4, 5], [0, 1, 5, 2]]


def _vert(tets, t, f, e, along):
    corner = e if along else (e + 1) % 3
    return tets[t][local_face_vertex(f, corner)]


def test_local_face_table_matches_closed_form():
    for i in range(4):
        for j in range(3):
            assert local_face_vertex(i, j) == (i - j + 3 + (i % 2) * (2 * j - 2)) % 4


def test_local_face_three_is_base_triangle():
    assert [local_face_vertex(3, c) for c in range(3)] == [0, 1, 2]


def test_local_face_never_contains_opposite_corner():
    for f in range(4):
        assert sorted(local_face_vertex(f, c) for c in range(3)) == sorted(
            set(range(4)) - {f}
        )


@pytest.mark.parametrize("face,corner", [(4, 0), (-1, 0), (0, 3), (0, -1)])
def test_local_face_out_of_range(face, corner):
    with pytest.raises(IndexError):
        local_face_vertex(face, corner)


def test_two_tets_share_one_face():
    tt, ttif, ttie = tetrahedron_tetrahedron_adjacency(TWO_TETS)
    assert tt[0][0] == 1
    assert ttif[0][0] == 3
    assert ttie[0][0] == [1, 0, 2]
    assert tt[1][ttif[0][0]] == 0
    assert sum(x == -1 for row in tt for x in row) == 6


def test_boundary_faces_have_no_inverse():
    tt, ttif, ttie = tetrahedron_tetrahedron_adjacency(TWO_TETS)
    for t in range(2):
        for f in range(4):
            if tt[t][f] == -1:
                assert ttif[t][f] == -1
                assert ttie[t][f] == [-1, -1, -1]


def test_edge_map_preserves_vertices_for_consistent_orientation():
    tt, ttif, ttie = tetrahedron_tetrahedron_adjacency(TWO_TETS)
    for t in range(2):
        for f in range(4):
            n = tt[t][f]
            if n == -1:
                continue
            for e in range(3):
                for along in (True, False):
                    assert _vert(TWO_TETS, t, f, e, along) == _vert(
                        TWO_TETS, n, ttif[t][f], ttie[t][f][e], not along
                    )


def test_fan_adjacency_is_symmetric():
    tt, ttif, ttie = tetrahedron_tetrahedron_adjacency(FAN)
    for t in range(len(FAN)):
        for f in range(4):
            n = tt[t][f]
            if n == -1:
                continue
            assert tt[n][ttif[t][f]] == t
            assert ttif[n][ttif[t][f]] == f
            for e in range(3):
                assert _vert(FAN, t, f, e, False) == _vert(
                    FAN, n, ttif[t][f], ttie[t][f][e], True
                )


def test_fan_each_tet_has_two_neighbours():
    tt, _, _ = tetrahedron_tetrahedron_adjacency(FAN)
    for row in tt:
        assert sum(x != -1 for x in row) == 2


def test_empty_mesh():
    assert tetrahedron_tetrahedron_adjacency([]) == ([], [], [])


def test_rejects_wrong_arity():
    with pytest.raises(ValueError):
        tetrahedron_tetrahedron_adjacency([[0, 1, 2]])


def test_connectivity_from_tets_and_recompute():
    mesh = TetConnectivity.from_tets(tuple(t) for t in TWO_TETS)
    assert len(mesh) == 2
    assert mesh.tets == TWO_TETS
    assert mesh.tt[0][0] == 1
    mesh.tets[1] = [5, 6, 7, 8]
    mesh.recompute()
    assert all(x == -1 for row in mesh.tt for x in row)


def test_connectivity_matches_function():
    mesh = TetConnectivity.from_tets(FAN)
    assert (mesh.tt, mesh.ttif, mesh.ttie) == tetrahedron_tetrahedron_adjacency(FAN)