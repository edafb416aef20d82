from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence, Tuple

from .metrics import build_schedule_result
from .models import Process, ScheduleResult, validate_processes
from .timeline import Timeline

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

FCFS_TITLE = "First-come, first-serve"
SJF_TITLE = "Shortest-job-first"
PRIORITY_TITLE = "Priority"
RR_TITLE = "Round-robin"


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes are expected in ascending arrival order; the sort below is
    stable, so input that is already ordered runs exactly as given.
    """
    validate_processes(processes)
    processes_sorted = sorted(processes, key=lambda p: p.arrival_time)

    service_time = 0
    timeline = Timeline()
    completions: Dict[int, int] = {}

    for p in processes_sorted:
        wait = max(0, service_time - p.arrival_time)
        start_time = p.arrival_time + wait
        completion_time = start_time + p.burst_time

        timeline.record(p.pid, start_time, completion_time)
        completions[p.pid] = completion_time
        logger.debug("fcfs: process %s runs [%d, %d)", p.pid, start_time, completion_time)

        service_time = completion_time

    return build_schedule_result(FCFS_TITLE, processes, timeline.intervals, completions)


SelectionKey = Callable[[Process, int], Tuple[int, ...]]


def _shortest_remaining(p: Process, remaining: int) -> Tuple[int, ...]:
    return (remaining,)


def _priority_then_remaining(p: Process, remaining: int) -> Tuple[int, ...]:
    return (p.priority, remaining)


def _schedule_preemptive(processes: Sequence[Process], algorithm: str, key: SelectionKey) -> ScheduleResult:
    """
    Shared loop for the preemptive selection policies.

    At every instant the ready process with the smallest ``key`` runs. The
    running process is only preempted by a strictly smaller key; when the CPU
    is free, ties go to the process listed first. The selection can only
    change when a process arrives or completes, so time advances from one
    such boundary to the next.
    """
    validate_processes(processes)

    remaining = [p.burst_time for p in processes]
    timeline = Timeline(merge_adjacent=True)
    completions: Dict[int, int] = {}
    running: Optional[int] = None
    time = 0

    def next_arrival_after(t: int) -> Optional[int]:
        future = [p.arrival_time for i, p in enumerate(processes) if p.arrival_time > t and remaining[i] > 0]
        return min(future) if future else None

    while len(completions) < len(processes):
        ready = [i for i, p in enumerate(processes) if p.arrival_time <= time and remaining[i] > 0]
        nxt_arrival = next_arrival_after(time)

        if not ready:
            # Every unfinished process arrives later, so nxt_arrival is set.
            logger.debug("%s: cpu idle [%d, %d)", algorithm, time, nxt_arrival)
            time = nxt_arrival
            continue

        # min() keeps the first of equal keys, so the lowest index wins ties.
        best = min(ready, key=lambda i: key(processes[i], remaining[i]))
        if running is not None and not key(processes[best], remaining[best]) < key(
            processes[running], remaining[running]
        ):
            current = running
        else:
            current = best
        running = current
        p = processes[current]

        if nxt_arrival is None:
            run_time = remaining[current]
        else:
            run_time = min(remaining[current], nxt_arrival - time)

        timeline.record(p.pid, time, time + run_time)
        time += run_time
        remaining[current] -= run_time

        if remaining[current] == 0:
            completions[p.pid] = time
            running = None
            logger.debug("%s: process %s completes at %d", algorithm, p.pid, time)

    return build_schedule_result(algorithm, processes, timeline.intervals, completions)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First, preemptive (shortest remaining time).
    """
    return _schedule_preemptive(processes, SJF_TITLE, _shortest_remaining)


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive priority scheduling with shortest-remaining-time tie-break.

    Lower numeric priority value means higher priority. Among ready processes
    of equal priority the one with less remaining burst runs; a lower priority
    process is never chosen just because it has less work left.
    """
    return _schedule_preemptive(processes, PRIORITY_TITLE, _priority_then_remaining)


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = DEFAULT_QUANTUM) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals that happen while a slice runs join the queue before the
    preempted process is put back at its tail. Each slice is recorded as its
    own interval.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    if quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum (use --quantum)")
    validate_processes(processes)

    remaining = [p.burst_time for p in processes]
    by_arrival = sorted(range(len(processes)), key=lambda i: processes[i].arrival_time)
    admitted = 0

    time = 0
    timeline = Timeline(merge_adjacent=False)
    completions: Dict[int, int] = {}
    ready: Deque[int] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        nonlocal admitted
        while admitted < len(by_arrival) and processes[by_arrival[admitted]].arrival_time <= current_time:
            ready.append(by_arrival[admitted])
            admitted += 1

    enqueue_new_arrivals(time)

    while len(completions) < len(processes):
        if not ready:
            # Jump to next arrival if CPU is idle
            nxt_arrival = processes[by_arrival[admitted]].arrival_time
            logger.debug("rr: cpu idle [%d, %d)", time, nxt_arrival)
            time = nxt_arrival
            enqueue_new_arrivals(time)
            continue

        current = ready.popleft()
        p = processes[current]

        run_time = min(quantum, remaining[current])
        timeline.record(p.pid, time, time + run_time)
        time += run_time
        remaining[current] -= run_time

        enqueue_new_arrivals(time)

        if remaining[current] > 0:
            ready.append(current)
        else:
            completions[p.pid] = time
            logger.debug("rr: process %s completes at %d", p.pid, time)

    return build_schedule_result(RR_TITLE, processes, timeline.intervals, completions, quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

DEFAULT_ORDER: List[str] = ["fcfs", "sjf", "priority", "rr"]


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    logger.debug("running %s on %d processes", name, len(processes))
    return func(processes, quantum=quantum)
