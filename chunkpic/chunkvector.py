"""List of the chunks owned by one rank.

Chunks are expected to expose an ``id`` attribute and the methods
``set_nb_id``, ``get_nb_id``, ``set_nb_rank`` and ``get_nb_rank``. The chunk
map must provide ``get_coordinate``, ``get_neighbor_coord``, ``get_chunkid``
and ``get_rank``.
"""

from __future__ import annotations

from itertools import product
from operator import attrgetter
from typing import Any

from .debug import get_logger
from .utils import MAX_CHUNK_PER_RANK

_DIRECTIONS = tuple(product((-1, 0, 1), repeat=3))


def _neighbors(chunkmap: Any, chunk_id: int):
    """Yield ``(direction, neighbor id, neighbor rank)`` for all 27 directions."""
    iz, iy, ix = chunkmap.get_coordinate(chunk_id)
    for dirz, diry, dirx in _DIRECTIONS:
        cz = chunkmap.get_neighbor_coord(iz, dirz, 0)
        cy = chunkmap.get_neighbor_coord(iy, diry, 1)
        cx = chunkmap.get_neighbor_coord(ix, dirx, 2)
        nbid = chunkmap.get_chunkid(cz, cy, cx)
        yield (dirz, diry, dirx), nbid, chunkmap.get_rank(nbid)


class ChunkVector(list):
    """A list of chunks with neighbour bookkeeping."""

    def remove_none(self) -> None:
        """Drop empty slots."""
        self[:] = [chunk for chunk in self if chunk is not None]

    def sort_and_shrink(self) -> None:
        """Drop empty slots and sort the chunks by id."""
        self.remove_none()
        self.sort(key=attrgetter("id"))

    def set_neighbors(self, chunkmap: Any) -> None:
        """Store the id and rank of all 27 neighbours in each chunk."""
        for chunk in self:
            for direction, nbid, nbrank in _neighbors(chunkmap, chunk.id):
                chunk.set_nb_id(*direction, nbid)
                chunk.set_nb_rank(*direction, nbrank)

    def validate(self, chunkmap: Any) -> bool:
        """Return True if the count is allowed and all neighbours agree with the map."""
        if len(self) > MAX_CHUNK_PER_RANK:
            get_logger().error(
                "Number of chunk per rank should not exceed %8d", MAX_CHUNK_PER_RANK
            )
            return False

        return all(
            chunk.get_nb_id(*direction) == nbid and chunk.get_nb_rank(*direction) == nbrank
            for chunk in self
            for direction, nbid, nbrank in _neighbors(chunkmap, chunk.id)
        )