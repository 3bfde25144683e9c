from __future__ import annotations

from typing import Iterable, NamedTuple, Optional

import numpy as np

from .algebra import gf2_solve_with_nullspace
from .machine import Machine
from .search import GrayCodeSearch, MinWeightSearch


class MachineResult(NamedTuple):
    presses: int
    rank: int
    nullity: int
    particular_weight: int
    solution: np.ndarray


def solve_machine(
    machine: Machine, search: Optional[MinWeightSearch] = None
) -> MachineResult:
    """Fewest presses that turn all-off lights into the machine's target."""
    search = search or GrayCodeSearch()
    sol = gf2_solve_with_nullspace(machine.A, machine.target)
    best = search.solution(sol.x0, sol.basis)
    return MachineResult(
        presses=int(best.sum()),
        rank=sol.rank,
        nullity=sol.nullity,
        particular_weight=int(sol.x0.sum()),
        solution=best,
    )


def total_min_presses(
    machines: Iterable[Machine], search: Optional[MinWeightSearch] = None
) -> int:
    # any unsolvable machine aborts the whole sum
    search = search or GrayCodeSearch()
    total = 0
    for machine in machines:
        total += solve_machine(machine, search).presses
    return total
