import pytest

from conftest import FakeClock
from qap_search.budget import SearchBudget


def test_iteration_cap_allows_exactly_max_iterations():
    budget = SearchBudget(max_iterations=3).start()
    assert [budget.poll() for _ in range(4)] == [False, False, False, True]
    assert budget.iterations == 3


def test_time_limit_uses_injected_clock():
    budget = SearchBudget(time_limit_s=2.5, clock=FakeClock(step=1.0)).start()
    # The clock reads 1, 2, 3 at the successive polls.
    assert [budget.poll() for _ in range(3)] == [False, False, True]
    assert budget.iterations == 2


def test_poll_starts_an_unstarted_budget():
    budget = SearchBudget(max_iterations=1)
    assert budget.elapsed == 0.0
    assert budget.poll() is False
    assert budget.poll() is True


def test_restart_resets_the_counter():
    budget = SearchBudget(max_iterations=1).start()
    budget.poll()
    budget.poll()
    budget.start()
    assert budget.iterations == 0
    assert budget.poll() is False


@pytest.mark.parametrize(
    "kwargs", [{}, {"time_limit_s": -1.0}, {"max_iterations": -5}]
)
def test_invalid_budgets(kwargs):
    with pytest.raises(ValueError):
        SearchBudget(**kwargs)
