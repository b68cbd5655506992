# tetremesh

Local remeshing operations for tetrahedral meshes, in pure Python with no
runtime dependencies.

The package holds a tetrahedral mesh together with its face adjacency. You
can walk the mesh with cell tuples and apply topological operations that
improve mesh quality. Every operation keeps the adjacency consistent.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Connectivity (`tetremesh.adjacency`)

`TetConnectivity.from_tets(tets)` builds a mesh from a list of 4-vertex
tetrahedra. Its fields are:

- `tets`: the tetrahedra, as lists of four vertex indices;
- `tt[t][f]`: the tetrahedron across face `f` of `t`, or `-1` on the boundary;
- `ttif[t][f]`: the index of that face inside the neighbour;
- `ttie[t][f][e]`: the index, in the neighbour's face, of edge `e`.

`recompute()` rebuilds the tables from `tets`. `len(mesh)` is the number of
tetrahedra.

Face `f` of a tetrahedron `[v0, v1, v2, v3]` is the face opposite corner `f`,
oriented as seen from that corner:

```
face 0 = v3, v2, v1
face 1 = v2, v3, v0
face 2 = v1, v0, v3
face 3 = v0, v1, v2
```

Edge `e` of a face runs from its corner `e` to corner `(e + 1) % 3`.
`local_face_vertex(face, corner)` returns the local vertex (0-3) at a corner
of a face. It raises `IndexError` for out-of-range indices.
`tetrahedron_tetrahedron_adjacency(tets)` returns the raw `(tt, ttif, ttie)`
tables. It raises `ValueError` if a tetrahedron does not have four vertices.

## Tuples

### `tetremesh.tet_tuple.TetTuple`

`TetTuple(tet, face, edge, along=True)` is a frozen value that names one
directed half edge of one face of one tetrahedron. Each switch returns a new
tuple that differs in exactly one element:

- `switch_vert()`, `switch_edge()` and `switch_face()` stay inside the same
  tetrahedron;
- `switch_tet(mesh)` crosses to the neighbouring tetrahedron, and returns the
  tuple unchanged on a boundary face.

The queries are:

- `vert(mesh)`: the global index of the start vertex;
- `is_on_boundary(mesh)`: whether the tuple's face has no neighbour;
- `next_in_one_ring(mesh)`: returns `(new_tuple, crossed)`. `crossed` is
  `False` when a boundary face was met and the walk rotated back to the
  opposite boundary;
- `tets_with_vert(mesh)`: the set of tetrahedra that contain the start
  vertex and can be reached through faces.

### `tetremesh.triangle_tuple.TriangleTuple`

`TriangleTuple(face, edge, along=True)` does the same for triangle meshes.
It uses a face list and triangle-triangle adjacency tables `ff` (the
neighbouring face or `-1`) and `ffi` (the edge index in that neighbour).
It has these methods:

- `switch_vert()`, `switch_edge()`;
- `switch_face(ff, ffi)`, which returns the tuple unchanged on a boundary;
- `vert(faces)`;
- `is_on_boundary(ff)`;
- `next_in_one_ring(ff, ffi)`, which returns `(new_tuple, crossed)`.

## Operations

Every operation takes a `tet_quality(a, b, c, d)` callable that receives four
vertex indices. Larger values mean better tetrahedra. On success an operation
changes `mesh` in place and returns the list of indices of the new or moved
tetrahedra. Otherwise it returns `None` and leaves the mesh, and any vertex
list you passed in, as they were.

- `tetremesh.edge_removal.edge_removal(tup, tet_quality, mesh)` replaces the
  ring of tetrahedra around an interior edge with two fans, built on the
  triangulation of the ring polygon that maximises the worst quality. It does
  this unless the worst quality would get worse. `edge_removal_force` applies
  the change regardless of quality. Both return `None` for an edge on the
  boundary.
- `tetremesh.edge_removal.optimal_triangulation(polygon, quality)` is the
  dynamic-programming triangulation those operations use. `quality(u, v, w)`
  scores a triangle. It returns `(worst_quality, triangles)`.
- `tetremesh.multi_face_removal.multi_face_removal(tup, tet_quality,
  orient3d, mesh)` removes the tuple's face, together with neighbouring faces
  that lie between the two apex vertices and are worth removing. It then
  rebuilds the region as a fan around the apex-to-apex edge. It acts only
  when the worst quality strictly improves and stays non-negative.
  `orient3d(a, b, c, d)` is a boolean orientation test that you supply.
  `multi_face_removal_force` acts regardless of quality. Both return `None`
  for a boundary face.
- `tetremesh.face_neighbors.face_removal_neighbors(tup, mesh, apex_a, apex_b,
  tet_quality, orient3d)` is the recursive neighbour search behind
  multi-face removal. It returns a `NeighborResult` with the fields `q_old`,
  `q_new`, `polygon` and `deleted_faces`.
- `tetremesh.refine.edge_contraction(tup, tet_quality, vertex_editable,
  mesh)` merges the tuple's end vertex into its start vertex. If the end
  vertex is not editable, the direction is reversed. If neither end is
  editable, nothing happens.
- `tetremesh.refine.edge_split(tup, tet_quality, vertices, mesh)` appends the
  midpoint of an interior edge to `vertices` and cuts every tetrahedron around
  the edge in two. The split is kept only if the worst quality strictly
  improves.
- `tetremesh.refine.laplacian_smart_smoothing(tup, tet_quality,
  vertex_editable, mesh, vertices)` moves a vertex to the centroid of its
  neighbouring vertices. The move is kept only if the worst quality strictly
  improves.

`tetremesh.retain.retain_tetrahedral_adjacency(delete_ids, surround_ids,
new_tets, mesh)` is the building block the operations share. It replaces a
set of tetrahedra with new ones and repairs the adjacency of their neighbours.
New tetrahedra reuse the deleted slots first, and any extra ones are
appended. Slots left over are filled by moving tetrahedra from the end of the
list, so the numbering stays dense. It returns the indices of the new
tetrahedra. `tetremesh.retain.surrounding_tets(delete_ids, mesh)` finds the
face neighbours to pass as `surround_ids`.

## Example

```python
from tetremesh.adjacency import TetConnectivity
from tetremesh.tet_tuple import TetTuple

mesh = TetConnectivity.from_tets([(0, 1, 2, 3), (1, 0, 2, 4)])
tup = TetTuple(0, 0, 0, True)
print(tup.vert(mesh), tup.is_on_boundary(mesh))
print(sorted(tup.tets_with_vert(mesh)))
```

## What it does not do

- It does not read or write mesh files.
- It does not generate tetrahedral meshes.
- It has no viewer and no command-line program.
- It does not compute tetrahedron quality or orientation. You supply those
  as callables, and only `edge_split` and `laplacian_smart_smoothing` touch
  vertex coordinates.