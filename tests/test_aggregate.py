"""
Tests for per-machine solving and the summed press count.
"""
import pytest

from factorylights.aggregate import solve_machine, total_min_presses
from factorylights.errors import (
    InconsistentSystemError,
    NoButtonsError,
    ScalabilityLimitError,
)
from factorylights.machine import Machine
from factorylights.parsing import parse_machines
from factorylights.search import BruteForceSearch, GrayCodeSearch, VectorizedSearch


def test_single_press_solution():
    result = solve_machine(Machine.from_pattern("#.#", [(0, 2), (1,)]))
    assert result.presses == 1
    assert result.solution.tolist() == [1, 0]
    assert result.rank == 2
    assert result.nullity == 0
    assert result.particular_weight == 1


def test_no_buttons_nonzero_target_is_fatal():
    with pytest.raises(NoButtonsError):
        solve_machine(Machine.from_pattern("#", []))


def test_no_buttons_all_off_needs_no_presses():
    assert solve_machine(Machine.from_pattern("....", [])).presses == 0


def test_identical_buttons_need_one_press():
    result = solve_machine(Machine.from_pattern("##", [(0, 1), (0, 1)]))
    assert result.presses == 1
    assert result.nullity == 1


def test_example_machines(example_input):
    machines = parse_machines(example_input)
    assert [solve_machine(m).presses for m in machines] == [2, 3, 2]


@pytest.mark.parametrize(
    "search", [BruteForceSearch(), GrayCodeSearch(), VectorizedSearch()]
)
def test_example_total(example_input, search):
    assert total_min_presses(parse_machines(example_input), search) == 7


def test_total_of_nothing_is_zero():
    assert total_min_presses([]) == 0


def test_one_unsolvable_machine_aborts_the_total():
    machines = [
        Machine.from_pattern("#.", [(0,)]),
        Machine.from_pattern("##", [(0, 1), (0, 1)]),
        Machine.from_pattern("#.", [(0, 1)]),
    ]
    with pytest.raises(InconsistentSystemError):
        total_min_presses(machines)


def test_nullity_limit_reaches_the_aggregate():
    machine = Machine.from_pattern("#", [(0,)] * 6)
    with pytest.raises(ScalabilityLimitError):
        total_min_presses([machine], GrayCodeSearch(max_nullity=4))
    assert total_min_presses([machine], GrayCodeSearch(max_nullity=5)) == 1
