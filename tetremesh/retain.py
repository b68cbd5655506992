"""Local replacement of tetrahedra while keeping face adjacency valid.

A group of tetrahedra is deleted and a new group takes its place. Only the
new tetrahedra and their immediate neighbours are re-examined. The mesh
keeps a dense numbering: new tetrahedra reuse the deleted slots first, extra
ones are appended, and slots left over are filled by moving tetrahedra from
the end of the list.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from .adjacency import TetConnectivity, tetrahedron_tetrahedron_adjacency


def surrounding_tets(delete_ids: Iterable[int], mesh: TetConnectivity) -> set[int]:
    """Face neighbours of the given tetrahedra that are not themselves given."""
    deleted = set(delete_ids)
    neighbours = {n for t in deleted for n in mesh.tt[t] if n != -1}
    return neighbours - deleted


def _compact(mesh: TetConnectivity, voided: list[int], new_size: int) -> None:
    """Fill the voided slots with tetrahedra from the end and truncate."""
    ending = set(range(new_size, new_size + len(voided)))
    diff = sorted(set(voided) ^ ending)
    half = len(diff) // 2
    for slot, moved in zip(diff[:half], reversed(diff[half:])):
        for f in range(4):
            neighbour = mesh.tt[moved][f]
            if neighbour == -1:
                continue
            mesh.tt[neighbour][mesh.ttif[moved][f]] = slot
        mesh.tt[slot] = mesh.tt[moved]
        mesh.ttif[slot] = mesh.ttif[moved]
        mesh.tets[slot] = mesh.tets[moved]
        mesh.ttie[slot] = mesh.ttie[moved]

    del mesh.tets[new_size:]
    del mesh.tt[new_size:]
    del mesh.ttif[new_size:]
    del mesh.ttie[new_size:]


def retain_tetrahedral_adjacency(
    delete_ids: Iterable[int],
    surround_ids: Iterable[int],
    new_tets: Iterable[Sequence[int]],
    mesh: TetConnectivity,
) -> list[int]:
    """Replace the tetrahedra ``delete_ids`` by ``new_tets`` in place.

    ``surround_ids`` are the face neighbours of the deleted tetrahedra that
    stay in the mesh (see :func:`surrounding_tets`). Returns the indices the
    new tetrahedra occupy, in the order they were given.
    """
    deleted = sorted(set(delete_ids))
    deleted_set = set(deleted)
    surround = sorted(set(surround_ids))
    new_rows = [list(tet) for tet in new_tets]

    num_new = len(new_rows)
    old_size = len(mesh.tets)
    num_addition = num_new - len(deleted)

    slots = deleted + [old_size + i for i in range(max(num_addition, 0))]
    new_ids = slots[:num_new]
    voided = slots[num_new:]
    local_map = new_ids + surround

    local_tets = new_rows + [list(mesh.tets[s]) for s in surround]
    local_tt, local_ttif, local_ttie = tetrahedron_tetrahedron_adjacency(local_tets)

    for _ in range(max(num_addition, 0)):
        mesh.tets.append([-1] * 4)
        mesh.tt.append([-1] * 4)
        mesh.ttif.append([-1] * 4)
        mesh.ttie.append([[-1] * 3 for _ in range(4)])

    # Faces of neighbours that pointed into the deleted region become open.
    for s in surround:
        for j in range(4):
            if mesh.tt[s][j] in deleted_set:
                mesh.tt[s][j] = -1
                mesh.ttif[s][j] = -1
                mesh.ttie[s][j] = [-1, -1, -1]

    for i, gid in enumerate(new_ids):
        mesh.tets[gid] = new_rows[i]
        mesh.ttif[gid] = list(local_ttif[i])
        mesh.ttie[gid] = [list(row) for row in local_ttie[i]]
        mesh.tt[gid] = [-1 if n == -1 else local_map[n] for n in local_tt[i]]

    for i in range(num_new, len(local_map)):
        gid = local_map[i]
        for j in range(4):
            n = local_tt[i][j]
            if n == -1:
                continue
            mesh.tt[gid][j] = local_map[n]
            mesh.ttif[gid][j] = local_ttif[i][j]
            mesh.ttie[gid][j] = list(local_ttie[i][j])

    if num_addition < 0:
        _compact(mesh, voided, old_size + num_addition)

    return new_ids