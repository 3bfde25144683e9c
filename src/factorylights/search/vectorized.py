from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .base import DEFAULT_MAX_NULLITY, MinWeightSearch, check_nullity


class VectorizedSearch(MinWeightSearch):
    """
    Evaluate combination masks in chunks with one integer matmul per chunk.
    Same visiting order and tie-break as BruteForceSearch.
    """

    def __init__(
        self,
        max_nullity: Optional[int] = DEFAULT_MAX_NULLITY,
        chunk_size: int = 1 << 14,
    ):
        assert chunk_size > 0, "chunk_size must be positive"
        self.max_nullity = max_nullity
        self.chunk_size = int(chunk_size)

    def solution(self, x0: np.ndarray, basis: Sequence[np.ndarray]) -> np.ndarray:
        k = len(basis)
        check_nullity(k, self.max_nullity)
        if k == 0:
            return x0.copy()

        B = np.stack(basis).astype(np.int64)  # (k, m)
        shifts = np.arange(k, dtype=np.int64)
        x0_row = x0.astype(np.uint8)

        best = x0.copy()
        best_w = int(best.sum())
        total = 1 << k
        for lo in range(0, total, self.chunk_size):
            if best_w == 0:
                break
            masks = np.arange(lo, min(lo + self.chunk_size, total), dtype=np.int64)
            coeffs = (masks[:, None] >> shifts) & 1  # (chunk, k)
            cands = ((coeffs @ B) % 2).astype(np.uint8) ^ x0_row
            weights = cands.sum(axis=1)
            j = int(np.argmin(weights))  # first minimum in mask order
            if int(weights[j]) < best_w:
                best, best_w = cands[j].copy(), int(weights[j])
        return best
