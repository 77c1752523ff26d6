import pytest

from board import Board
from catalog import SQUARE_PIECES
from solver.worker import SolveJob


def test_job_solves_in_the_background_and_queues_close_attempts():
    job = SolveJob(Board(4, 4), SQUARE_PIECES).start()
    assert job.wait(30)
    assert job.done
    solved = job.result
    assert solved is not None and solved.is_full
    attempts = job.drain()
    assert attempts
    assert [a.count for a in attempts] == list(range(1, len(attempts) + 1))
    assert job.stats.close_attempts == len(attempts)
    assert job.drain() == []


def test_no_solution_is_a_none_result():
    job = SolveJob(Board(3, 3), SQUARE_PIECES[:1]).start()
    assert job.wait(30)
    assert job.result is None
    assert "area" in job.reason


def test_abandoned_job_discards_its_result():
    job = SolveJob(Board(4, 4), SQUARE_PIECES).start()
    job.abandon()
    assert job.abandoned
    job.wait(30)
    assert job.result is None


def test_worker_errors_surface_on_result():
    job = SolveJob(Board(2, 2), [object()]).start()
    assert job.wait(30)
    with pytest.raises(TypeError):
        job.result
    assert job.reason.startswith("TypeError")


def test_result_before_start_is_none():
    job = SolveJob(Board(2, 2), SQUARE_PIECES[:1])
    assert not job.done
    assert job.result is None
    assert job.stats is None


def test_abandoned_job_stops_queuing_close_attempts():
    job = SolveJob(Board(4, 4), SQUARE_PIECES)
    job.abandon()
    job.start()
    assert job.wait(30)
    assert job.stats.close_attempts > 0
    assert job.events.empty()
    assert job.drain() == []
