import pytest

from schedsim.metrics import build_process_result, build_schedule_result, compute_summary
from schedsim.models import ExecutionInterval, Process


def test_process_result_from_completion():
    r = build_process_result(Process(2, arrival_time=3, burst_time=9, priority=1), completion_time=14, start_time=5)
    assert r.waiting_time == 2
    assert r.turnaround_time == 11
    assert r.response_time == 2
    assert r.priority == 1


def test_waiting_time_is_clamped():
    r = build_process_result(Process(1, 0, 5), completion_time=4, start_time=0)
    assert r.waiting_time == 0
    assert r.turnaround_time == 5


def test_summary_averages_and_throughput():
    procs = [Process(1, 0, 2), Process(2, 1, 2)]
    timeline = [ExecutionInterval(1, 0, 2), ExecutionInterval(2, 2, 4)]
    res = build_schedule_result("test", procs, timeline, {1: 2, 2: 4})

    assert res.summary.average_wait == pytest.approx(0.5)
    assert res.summary.average_turnaround == pytest.approx(2.5)
    assert res.summary.throughput == pytest.approx(0.5)
    assert res.summary.cpu_utilization == pytest.approx(1.0)
    assert res.processes[1].start_time == 2


def test_utilization_counts_idle_time():
    procs = [Process(1, 0, 1), Process(2, 3, 1)]
    timeline = [ExecutionInterval(1, 0, 1), ExecutionInterval(2, 3, 4)]
    res = build_schedule_result("test", procs, timeline, {1: 1, 2: 4})
    assert res.summary.cpu_busy_time == 2
    assert res.summary.cpu_utilization == pytest.approx(0.5)


def test_empty_summary_has_no_division():
    s = compute_summary([], [])
    assert s.throughput == 0.0
    assert s.average_wait == 0.0
    assert s.makespan == 0
