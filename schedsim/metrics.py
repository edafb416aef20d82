from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .models import ExecutionInterval, Process, ProcessResult, ScheduleResult, ScheduleSummary


def build_process_result(process: Process, completion_time: int, start_time: int) -> ProcessResult:
    """
    Derive one process's timings from its completion instant and first dispatch.
    """
    # A process cannot be served before it is ready.
    waiting_time = max(0, completion_time - process.arrival_time - process.burst_time)
    return ProcessResult(
        pid=process.pid,
        arrival_time=process.arrival_time,
        burst_time=process.burst_time,
        start_time=start_time,
        completion_time=completion_time,
        waiting_time=waiting_time,
        turnaround_time=process.burst_time + waiting_time,
        response_time=start_time - process.arrival_time,
        priority=process.priority,
    )


def compute_summary(processes: List[ProcessResult], timeline: List[ExecutionInterval]) -> ScheduleSummary:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process results and timeline intervals.
    """
    if not processes:
        return ScheduleSummary(
            average_wait=0.0,
            average_turnaround=0.0,
            average_response=0.0,
            throughput=0.0,
            makespan=0,
            cpu_busy_time=0,
            cpu_utilization=0.0,
        )

    n = len(processes)
    makespan = max(p.completion_time for p in processes)
    cpu_busy_time = sum(interval.duration for interval in timeline)

    return ScheduleSummary(
        average_wait=sum(p.waiting_time for p in processes) / n,
        average_turnaround=sum(p.turnaround_time for p in processes) / n,
        average_response=sum(p.response_time for p in processes) / n,
        throughput=n / makespan if makespan > 0 else 0.0,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )


def build_schedule_result(
    algorithm: str,
    processes: Sequence[Process],
    timeline: List[ExecutionInterval],
    completions: Dict[int, int],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Assemble a ScheduleResult from a finished simulation.

    ``completions`` maps pid to completion instant. Results are listed in the
    order of ``processes``.
    """
    first_start: Dict[int, int] = {}
    for interval in timeline:
        first_start.setdefault(interval.pid, interval.start_time)

    results = [build_process_result(p, completions[p.pid], first_start[p.pid]) for p in processes]

    return ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=results,
        timeline=timeline,
        summary=compute_summary(results, timeline),
    )
