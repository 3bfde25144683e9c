from __future__ import annotations

from typing import Optional, Protocol, Sequence

import numpy as np

from ..errors import ScalabilityLimitError

DEFAULT_MAX_NULLITY = 24


def check_nullity(k: int, max_nullity: Optional[int]) -> None:
    """Refuse to enumerate 2^k candidates when k is above the bound."""
    if max_nullity is not None and k > max_nullity:
        raise ScalabilityLimitError(k, max_nullity)


class MinWeightSearch(Protocol):
    max_nullity: Optional[int]

    def solution(
        self, x0: np.ndarray, basis: Sequence[np.ndarray]
    ) -> np.ndarray: ...

    def min_weight(self, x0: np.ndarray, basis: Sequence[np.ndarray]) -> int:
        return int(self.solution(x0, basis).sum())
