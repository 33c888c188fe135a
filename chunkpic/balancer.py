"""Load balancing of chunks among processes.

A *boundary* is a list of ``nprocess + 1`` chunk indices: rank ``r`` owns
chunks ``boundary[r]`` up to (but excluding) ``boundary[r + 1]``.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from itertools import accumulate, pairwise
from typing import Sequence, TextIO

_MAX_ITERATION = 100


def _cumulative(load: Sequence[float]) -> list[float]:
    return [0.0, *accumulate(float(x) for x in load)]


class Balancer:
    """Hold the load of every chunk and compute rank assignments."""

    def __init__(self, nchunk: int = 0) -> None:
        if nchunk < 0:
            raise ValueError(f"number of chunks must be non-negative, got {nchunk}")
        self.chunkload: list[float] = [0.0] * nchunk

    @property
    def nchunk(self) -> int:
        """Number of chunks."""
        return len(self.chunkload)

    def fill_load(self, value: float) -> None:
        """Set the load of every chunk to ``value``."""
        self.chunkload = [float(value)] * self.nchunk

    def assign_smilei(
        self, load: Sequence[float], boundary: Sequence[int]
    ) -> tuple[list[int], bool]:
        """Move each inner boundary towards the ideal cumulative load.

        Follows the scheme of Derouillat et al. (2018). Returns the new
        boundary and whether it differs from the one given.
        """
        nc = len(load)
        nr = len(boundary) - 1
        cumload = _cumulative(load)
        mean_load = cumload[nc] / nr
        old = list(boundary)
        new = list(boundary)

        for i in range(1, nr):
            target = mean_load * i
            current = cumload[new[i]]

            if current > target:
                # possibly move the boundary backward
                index = new[i] - 1
                while index >= 0 and abs(current - target) > abs(
                    current - target - load[index]
                ):
                    current -= load[index]
                    index -= 1
                # keep at least one chunk on the left rank
                new[i] = index + 1 if index >= old[i - 1] else old[i - 1] + 1
            else:
                # move the boundary forward
                index = new[i]
                while index < nc and abs(current - target) > abs(
                    current - target + load[index]
                ):
                    current += load[index]
                    index += 1
                # keep at least one chunk on the right rank
                new[i] = index if index < old[i + 1] else old[i + 1] - 1

        return new, new != old

    def assign_binarysearch(
        self, load: Sequence[float], boundary: Sequence[int]
    ) -> tuple[list[int], bool]:
        """Place each boundary by binary search over the cumulative load.

        Only the length of ``boundary`` is used. Returns the new boundary and
        whether it is in strictly ascending order.
        """
        nc = len(load)
        nr = len(boundary) - 1
        cumload = _cumulative(load)
        mean_load = cumload[nc] / nr

        result = [0] * (nr + 1)
        result[nr] = nc
        for i in range(1, nr):
            result[i] = bisect_right(cumload, mean_load * i) - 1

        return result, self.is_boundary_ascending(result)

    def assign_initial(self, nprocess: int) -> list[int]:
        """Return an initial boundary for ``nprocess`` ranks."""
        if nprocess < 1:
            raise ValueError(f"number of processes must be positive, got {nprocess}")
        boundary = [0] * (nprocess + 1)

        boundary, status = self.assign_binarysearch(self.chunkload, boundary)
        if not status:
            uniform = [1.0] * self.nchunk
            boundary, _ = self.assign_binarysearch(uniform, boundary)
            for _ in range(_MAX_ITERATION):
                boundary, updated = self.assign_smilei(self.chunkload, boundary)
                if not updated:
                    break

        return boundary

    def assign(self, boundary: Sequence[int]) -> list[int]:
        """Return an improved boundary starting from the given one."""
        new, _ = self.assign_smilei(self.chunkload, boundary)
        return new

    def get_rankload(self, boundary: Sequence[int], load: Sequence[float]) -> list[float]:
        """Return the total load of each rank."""
        return [float(sum(load[lo:hi])) for lo, hi in pairwise(boundary)]

    def print_assignment(self, out: TextIO, boundary: Sequence[int]) -> None:
        """Write a summary of the per-rank load to ``out``."""
        nr = len(boundary) - 1
        rankload = self.get_rankload(boundary, self.chunkload)
        meanload = sum(self.chunkload) / nr

        out.write(f"*** mean load = {meanload:12.5e} ***\n")
        for i, (load, (lo, hi)) in enumerate(zip(rankload, pairwise(boundary))):
            numchunk = hi - lo
            deviation = (load - meanload) / meanload * 100 if meanload != 0 else math.nan
            out.write(f"load[{i:4d}] = {load:12.5e} ({numchunk:4d} : {deviation:+7.2f} %)\n")

    def is_boundary_ascending(self, boundary: Sequence[int]) -> bool:
        """Check that the boundary spans all chunks in ascending order."""
        nprocess = len(boundary) - 1
        status = boundary[0] == 0 and boundary[nprocess] == self.nchunk
        for i in range(1, nprocess):
            status = status and boundary[i + 1] > boundary[i]
        return status

    def is_boundary_optimum(self, boundary: Sequence[int]) -> bool:
        """Check that every inner boundary sits at the ideal cumulative load."""
        nprocess = len(boundary) - 1
        cumulative = _cumulative(self.chunkload)
        total = cumulative[self.nchunk]

        for i in range(1, nprocess):
            index1 = boundary[i]
            index2 = boundary[i] + 1
            if index2 > self.nchunk:
                return False
            bestload = i * total / nprocess
            if not (cumulative[index1] <= bestload and cumulative[index2] > bestload):
                return False
        return True