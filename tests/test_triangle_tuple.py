import pytest

from tetremesh.triangle_tuple import TriangleTuple

FAN_FACES = [[4, 0, 1], [4, 1, 2], [4, 2, 3], [4, 3, 0]]
OPEN_FACES = [[0, 1, 2], [0, 2, 3]]


def _triangle_adjacency(faces):
    half_edges = {}
    for f, tri in enumerate(faces):
        for e in range(3):
            half_edges[(tri[e], tri[(e + 1) % 3])] = (f, e)
    ff = [[-1] * 3 for _ in faces]
    ffi = [[-1] * 3 for _ in faces]
    for f, tri in enumerate(faces):
        for e in range(3):
            other = half_edges.get((tri[(e + 1) % 3], tri[e]))
            if other is not None:
                ff[f][e], ffi[f][e] = other
    return ff, ffi


def test_switch_vert_toggles_vertex():
    tup = TriangleTuple(0, 1, True)
    assert tup.vert(FAN_FACES) == FAN_FACES[0][1]
    assert tup.switch_vert().vert(FAN_FACES) == FAN_FACES[0][2]
    assert tup.switch_vert().switch_vert() == tup


@pytest.mark.parametrize("edge", [0, 1, 2])
@pytest.mark.parametrize("along", [True, False])
def test_switch_edge_keeps_vertex_and_face(edge, along):
    tup = TriangleTuple(2, edge, along)
    switched = tup.switch_edge()
    assert switched.face == tup.face
    assert switched.edge != tup.edge
    assert switched.vert(FAN_FACES) == tup.vert(FAN_FACES)
    assert switched.switch_edge() == tup


def test_switch_face_keeps_vertex_and_is_involution():
    ff, ffi = _triangle_adjacency(FAN_FACES)
    for f in range(4):
        for e in range(3):
            for along in (True, False):
                tup = TriangleTuple(f, e, along)
                if tup.is_on_boundary(ff):
                    assert tup.switch_face(ff, ffi) == tup
                    continue
                other = tup.switch_face(ff, ffi)
                assert other.face == ff[f][e]
                assert other.vert(FAN_FACES) == tup.vert(FAN_FACES)
                assert other.switch_face(ff, ffi) == tup


def test_boundary_detection():
    ff, _ = _triangle_adjacency(FAN_FACES)
    assert TriangleTuple(0, 1).is_on_boundary(ff)
    assert not TriangleTuple(0, 0).is_on_boundary(ff)


def test_interior_one_ring_visits_every_face():
    ff, ffi = _triangle_adjacency(FAN_FACES)
    start = TriangleTuple(0, 0, True)
    tup = start
    seen = []
    for _ in range(4):
        tup, interior = tup.next_in_one_ring(ff, ffi)
        assert interior is True
        assert tup.vert(FAN_FACES) == 4
        seen.append(tup.face)
    assert tup == start
    assert sorted(seen) == [0, 1, 2, 3]


def test_boundary_one_ring_wraps_to_other_side():
    ff, ffi = _triangle_adjacency(OPEN_FACES)
    start = TriangleTuple(0, 0, True)
    assert start.is_on_boundary(ff)
    first, interior = start.next_in_one_ring(ff, ffi)
    assert interior is False
    assert first == TriangleTuple(1, 0, True)
    assert first.vert(OPEN_FACES) == 0
    second, interior = first.next_in_one_ring(ff, ffi)
    assert interior is True
    assert second == start


@pytest.mark.parametrize("tup", [TriangleTuple(0, 3), TriangleTuple(5, 0), TriangleTuple(-1, 0)])
def test_vert_rejects_bad_indices(tup):
    with pytest.raises(IndexError):
        tup.vert(FAN_FACES)


def test_tuples_compare_by_value():
    assert TriangleTuple(1, 2, False) == TriangleTuple(1, 2, False)
    assert TriangleTuple(1, 2, False) != TriangleTuple(1, 2, True)