from __future__ import annotations

from typing import List, NamedTuple, Tuple

import numpy as np

from .errors import InconsistentSystemError, NoButtonsError


class NullspaceSolution(NamedTuple):
    """Particular solution x0 (free variables = 0) and a nullspace basis of A."""

    x0: np.ndarray
    basis: List[np.ndarray]
    pivcols: List[int]

    @property
    def rank(self) -> int:
        return len(self.pivcols)

    @property
    def nullity(self) -> int:
        return len(self.basis)


def gf2_rref_augmented(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Reduce [A|b] to row echelon form over GF(2), Gauss-Jordan style.

    Works on a single uint8 block of shape (n, m + 1) allocated here; the
    inputs are left untouched. Returns the reduced block and the pivot
    columns in increasing order (one per pivot row, so rank = len).
    """
    A = np.asarray(A) % 2
    b = (np.asarray(b) % 2).reshape(-1)
    n, m = A.shape
    assert b.shape == (n,), "target length must match the rows of A"

    # one row-major block per solve: columns 0..m-1 are A, column m is b
    M = np.empty((n, m + 1), dtype=np.uint8)
    M[:, :m] = A
    M[:, m] = b

    row = 0
    pivcols: list[int] = []
    for col in range(m):
        if row == n:
            break
        # first 1 at or below the pivot row
        hits = np.flatnonzero(M[row:, col])
        if hits.size == 0:
            continue
        pivot = row + int(hits[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # XOR the pivot row into every other row holding a 1 in this column
        others = M[:, col].astype(bool)
        others[row] = False
        M[others] ^= M[row]
        pivcols.append(col)
        row += 1
    return M, pivcols


def gf2_solve_with_nullspace(A: np.ndarray, b: np.ndarray) -> NullspaceSolution:
    """Solve A x = b over GF(2), and return a nullspace basis of A.

    Raises:
        NoButtonsError: A has no columns but b is non-zero.
        InconsistentSystemError: elimination leaves a row 0...0 | 1.
    """
    A = np.asarray(A)
    b = np.asarray(b).reshape(-1)
    m = A.shape[1]
    if m == 0:
        if np.any(b % 2):
            raise NoButtonsError()
        return NullspaceSolution(np.zeros((0,), dtype=np.uint8), [], [])

    R, pivcols = gf2_rref_augmented(A, b)  # R is [RREF(A) | r]
    rank = len(pivcols)

    # Inconsistency check: rows below the rank are zero in A, so any 1 in b fails
    bad = np.flatnonzero(R[rank:, m])
    if bad.size:
        raise InconsistentSystemError(rank + int(bad[0]))

    # Particular solution: free vars = 0, pivot var of row i reads the reduced b
    x0 = np.zeros((m,), dtype=np.uint8)
    x0[pivcols] = R[:rank, m]

    # Nullspace basis: for each free column f, set x_f=1, others free=0.
    # Over GF(2) the pivot var of row i equals R[i, f].
    pivset = set(pivcols)
    basis: list[np.ndarray] = []
    for f in range(m):
        if f in pivset:
            continue
        v = np.zeros((m,), dtype=np.uint8)
        v[f] = 1
        v[pivcols] = R[:rank, f]
        basis.append(v)

    return NullspaceSolution(x0, basis, pivcols)


def gf2_rank(A: np.ndarray) -> int:
    A = np.asarray(A)
    _, pivcols = gf2_rref_augmented(A, np.zeros(A.shape[0], dtype=np.uint8))
    return len(pivcols)
