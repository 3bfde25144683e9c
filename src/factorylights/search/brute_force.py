from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .base import DEFAULT_MAX_NULLITY, MinWeightSearch, check_nullity


class BruteForceSearch(MinWeightSearch):
    """
    Try every combination of nullspace basis vectors, counting the
    combination mask up from 0. The first minimum found wins ties.
    """

    def __init__(self, max_nullity: Optional[int] = DEFAULT_MAX_NULLITY):
        self.max_nullity = max_nullity

    def solution(self, x0: np.ndarray, basis: Sequence[np.ndarray]) -> np.ndarray:
        k = len(basis)
        check_nullity(k, self.max_nullity)

        best = x0.copy()
        best_w = int(best.sum())
        for mask in range(1, 1 << k):
            if best_w == 0:
                break
            cand = x0.copy()
            for idx in range(k):
                if (mask >> idx) & 1:
                    cand ^= basis[idx]
            w = int(cand.sum())
            if w < best_w:
                best, best_w = cand, w
        return best
