from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np


def build_A(n: int, buttons: Sequence[Iterable[int]]) -> np.ndarray:
    """Return the n x m incidence matrix A over GF(2) for a machine.
    Column j encodes the lights toggled when pressing button j.
    Indices outside [0, n) are ignored.
    """
    m = len(buttons)
    A = np.zeros((n, m), dtype=np.uint8)
    for j, indices in enumerate(buttons):
        for i in indices:
            if 0 <= i < n:
                A[i, j] = 1
    return A


class Machine:
    def __init__(
        self, target: Sequence[int] | np.ndarray, buttons: Sequence[Iterable[int]]
    ):
        target = np.asarray(target, dtype=np.uint8).reshape(-1)
        assert np.all(target <= 1), "target must be a 0/1 vector"
        self.buttons = [tuple(int(i) for i in b) for b in buttons]
        self._target = target.copy()
        self._target.setflags(write=False)
        self._A = build_A(len(self._target), self.buttons)
        self._A.setflags(write=False)

    @staticmethod
    def from_pattern(pattern: str, buttons: Sequence[Iterable[int]]) -> "Machine":
        # '#' is on, anything else is off
        return Machine([1 if ch == "#" else 0 for ch in pattern], buttons)

    @property
    def target(self) -> np.ndarray:
        return self._target

    @property
    def A(self) -> np.ndarray:
        return self._A

    @property
    def n(self) -> int:
        return self._A.shape[0]

    @property
    def m(self) -> int:
        return self._A.shape[1]

    def count_on(self) -> int:
        return int(self._target.sum())

    def pattern(self) -> str:
        return "".join("#" if bit else "." for bit in self._target)

    def __repr__(self):
        return f"Machine(n={self.n}, m={self.m}, on={self.count_on()})"

    def __str__(self) -> str:
        groups = " ".join(
            "(" + ",".join(str(i) for i in b) + ")" for b in self.buttons
        )
        return f"[{self.pattern()}] {groups}".rstrip()
