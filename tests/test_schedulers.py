import pytest

from schedsim.algorithms import (
    DEFAULT_ORDER,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from schedsim.errors import InvalidProcessError
from schedsim.models import Process


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=3, burst_time=9, priority=1),
        Process(3, arrival_time=6, burst_time=6, priority=3),
    ]


def _spans(result):
    return [(s.pid, s.start_time, s.end_time) for s in result.timeline]


def test_fcfs_reference_fixture():
    res = schedule_fcfs(_procs())
    assert _spans(res) == [(1, 0, 5), (2, 5, 14), (3, 14, 20)]
    assert [p.completion_time for p in res.processes] == [5, 14, 20]
    assert [p.waiting_time for p in res.processes] == [0, 2, 8]
    assert [p.turnaround_time for p in res.processes] == [5, 11, 14]
    assert res.summary.throughput == pytest.approx(3 / 20)
    assert res.quantum is None


def test_fcfs_idle_gap():
    res = schedule_fcfs([Process(1, 0, 2), Process(2, 5, 3)])
    assert _spans(res) == [(1, 0, 2), (2, 5, 8)]
    assert res.processes[1].waiting_time == 0
    assert res.summary.cpu_busy_time == 5
    assert res.summary.makespan == 8


def test_fcfs_keeps_input_order_for_equal_arrivals():
    res = schedule_fcfs([Process(7, 0, 4), Process(3, 0, 1)])
    assert [s.pid for s in res.timeline] == [7, 3]


def test_sjf_reference_fixture():
    res = schedule_sjf(_procs())
    # P1 is alone until t=3 and still the shortest when P2 shows up.
    assert _spans(res) == [(1, 0, 5), (2, 5, 6), (3, 6, 12), (2, 12, 20)]
    assert [p.completion_time for p in res.processes] == [5, 20, 12]
    assert [p.waiting_time for p in res.processes] == [0, 8, 0]


def test_sjf_preempts_for_shorter_arrival():
    res = schedule_sjf([Process(1, 0, 8), Process(2, 1, 2)])
    assert _spans(res) == [(1, 0, 1), (2, 1, 3), (1, 3, 10)]
    assert res.result_for(2).waiting_time == 0
    assert res.result_for(1).waiting_time == 2


def test_sjf_tie_goes_to_first_listed():
    res = schedule_sjf([Process(5, 0, 3), Process(4, 0, 3)])
    assert [s.pid for s in res.timeline] == [5, 4]


def test_sjf_does_not_preempt_on_equal_remaining():
    res = schedule_sjf([Process(1, 0, 4), Process(2, 2, 2)])
    # At t=2 both need 2 more units; the first listed keeps the CPU.
    assert _spans(res) == [(1, 0, 4), (2, 4, 6)]


def test_sjf_running_process_keeps_cpu_against_equal_earlier_listed():
    res = schedule_sjf([Process(1, 2, 2), Process(2, 0, 4)])
    # At t=2 P1 arrives needing 2, the same as P2 still needs.
    assert _spans(res) == [(2, 0, 4), (1, 4, 6)]


def test_sjf_idle_until_first_arrival():
    res = schedule_sjf([Process(1, 4, 2)])
    assert _spans(res) == [(1, 4, 6)]
    assert res.processes[0].waiting_time == 0
    assert res.processes[0].response_time == 0


def test_priority_reference_fixture():
    res = schedule_priority(_procs())
    assert _spans(res) == [(1, 0, 3), (2, 3, 12), (1, 12, 14), (3, 14, 20)]
    assert [p.completion_time for p in res.processes] == [14, 12, 20]
    assert [p.waiting_time for p in res.processes] == [9, 0, 8]


def test_priority_never_picks_lower_priority_for_shorter_remaining():
    res = schedule_priority(
        [
            Process(1, 0, 10, priority=1),
            Process(2, 1, 1, priority=5),
        ]
    )
    assert _spans(res) == [(1, 0, 10), (2, 10, 11)]


def test_priority_ties_broken_by_remaining_time():
    res = schedule_priority(
        [
            Process(1, 0, 6, priority=1),
            Process(2, 2, 2, priority=1),
            Process(3, 2, 1, priority=2),
        ]
    )
    assert _spans(res) == [(1, 0, 2), (2, 2, 4), (1, 4, 8), (3, 8, 9)]


def test_priority_running_process_keeps_cpu_on_equal_key():
    res = schedule_priority([Process(1, 2, 2, priority=1), Process(2, 0, 4, priority=1)])
    assert _spans(res) == [(2, 0, 4), (1, 4, 6)]


def test_rr_reference_fixture():
    res = schedule_rr(_procs(), quantum=2)
    assert _spans(res) == [
        (1, 0, 2),
        (1, 2, 4),
        (2, 4, 6),
        (1, 6, 7),
        (3, 7, 9),
        (2, 9, 11),
        (3, 11, 13),
        (2, 13, 15),
        (3, 15, 17),
        (2, 17, 19),
        (2, 19, 20),
    ]
    assert [p.completion_time for p in res.processes] == [7, 20, 17]
    assert [p.waiting_time for p in res.processes] == [2, 8, 5]
    assert res.quantum == 2


def test_rr_arrivals_join_before_preempted_process():
    res = schedule_rr([Process(1, 0, 4), Process(2, 2, 2)], quantum=2)
    # P2 arrives exactly when P1's slice ends and goes ahead of it.
    assert _spans(res) == [(1, 0, 2), (2, 2, 4), (1, 4, 6)]


def test_rr_idles_until_next_arrival():
    res = schedule_rr([Process(1, 0, 1), Process(2, 4, 3)], quantum=2)
    assert _spans(res) == [(1, 0, 1), (2, 4, 6), (2, 6, 7)]
    assert res.result_for(2).waiting_time == 0


def test_rr_nothing_at_time_zero():
    res = schedule_rr([Process(1, 3, 2), Process(2, 3, 1)], quantum=2)
    assert _spans(res) == [(1, 3, 5), (2, 5, 6)]


def test_rr_single_process_slices():
    res = schedule_rr([Process(1, 0, 5)], quantum=2)
    assert _spans(res) == [(1, 0, 2), (1, 2, 4), (1, 4, 5)]
    assert res.processes[0].completion_time == 5


def test_rr_default_quantum():
    assert schedule_rr(_procs()).quantum == 2
    assert run_algorithm("rr", _procs()).quantum == 2


@pytest.mark.parametrize("quantum", [0, -1])
def test_rr_rejects_non_positive_quantum(quantum):
    with pytest.raises(ValueError):
        schedule_rr(_procs(), quantum=quantum)


@pytest.mark.parametrize("name", DEFAULT_ORDER)
def test_empty_workload(name):
    res = run_algorithm(name, [])
    assert res.processes == []
    assert res.timeline == []
    assert res.summary.average_wait == 0.0
    assert res.summary.throughput == 0.0


@pytest.mark.parametrize("name", DEFAULT_ORDER)
def test_rejects_non_positive_burst(name):
    with pytest.raises(InvalidProcessError):
        run_algorithm(name, [Process(1, 0, 0)])


@pytest.mark.parametrize("name", DEFAULT_ORDER)
def test_rejects_negative_arrival(name):
    with pytest.raises(InvalidProcessError):
        run_algorithm(name, [Process(1, -1, 2)])


@pytest.mark.parametrize("name", DEFAULT_ORDER)
def test_rejects_duplicate_ids(name):
    with pytest.raises(InvalidProcessError):
        run_algorithm(name, [Process(1, 0, 2), Process(1, 1, 2)])


def test_input_is_not_mutated():
    procs = _procs()
    for name in DEFAULT_ORDER:
        run_algorithm(name, procs)
    assert procs == _procs()


def test_run_algorithm_unknown():
    with pytest.raises(ValueError):
        run_algorithm("lottery", _procs())


def test_run_algorithm_is_case_insensitive():
    assert run_algorithm("FCFS", _procs()).algorithm == "First-come, first-serve"
