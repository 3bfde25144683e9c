from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .base import DEFAULT_MAX_NULLITY, MinWeightSearch, check_nullity


class GrayCodeSearch(MinWeightSearch):
    """
    Walk the solution space in reflected Gray-code order.

    Consecutive Gray codes differ in exactly one bit, so each step XORs a
    single basis vector into the running candidate instead of rebuilding it
    from x0. Step i flips the basis vector indexed by the number of trailing
    zeros of i.
    """

    def __init__(self, max_nullity: Optional[int] = DEFAULT_MAX_NULLITY):
        self.max_nullity = max_nullity

    def solution(self, x0: np.ndarray, basis: Sequence[np.ndarray]) -> np.ndarray:
        k = len(basis)
        check_nullity(k, self.max_nullity)

        cand = x0.copy()
        best = cand.copy()
        best_w = int(best.sum())
        for i in range(1, 1 << k):
            if best_w == 0:
                break
            flip = (i & -i).bit_length() - 1
            cand ^= basis[flip]
            w = int(cand.sum())
            if w < best_w:
                best, best_w = cand.copy(), w
        return best
