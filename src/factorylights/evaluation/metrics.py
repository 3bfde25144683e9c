from __future__ import annotations

import numpy as np


def hamming_weight(x) -> int:
    return int(np.count_nonzero(np.asarray(x) % 2))


def apply_presses(A: np.ndarray, x: np.ndarray) -> np.ndarray:
    # light state after pressing each button j x[j] times, starting all-off
    A = np.asarray(A, dtype=np.int64)
    x = np.asarray(x, dtype=np.int64).reshape(-1)
    return ((A @ x) % 2).astype(np.uint8)


def is_solution(A: np.ndarray, target: np.ndarray, x: np.ndarray) -> bool:
    target = np.asarray(target, dtype=np.uint8).reshape(-1) % 2
    return bool(np.array_equal(apply_presses(A, x), target))


def in_nullspace(A: np.ndarray, v: np.ndarray) -> bool:
    return not apply_presses(A, v).any()
