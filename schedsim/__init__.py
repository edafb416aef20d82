"""
CPU scheduling simulator.

Replays FCFS, preemptive SJF, preemptive priority and round-robin scheduling
over a known batch of processes and reports per-process timings, aggregate
averages and an execution timeline.
"""

from .algorithms import (
    ALGORITHMS,
    DEFAULT_QUANTUM,
    run_algorithm,
    schedule_fcfs,
    schedule_priority,
    schedule_rr,
    schedule_sjf,
)
from .errors import InvalidProcessError, SchedulerError, WorkloadError
from .models import ExecutionInterval, Process, ProcessResult, ScheduleResult, ScheduleSummary

__all__ = [
    "ALGORITHMS",
    "DEFAULT_QUANTUM",
    "ExecutionInterval",
    "InvalidProcessError",
    "Process",
    "ProcessResult",
    "ScheduleResult",
    "ScheduleSummary",
    "SchedulerError",
    "WorkloadError",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_priority",
    "schedule_rr",
    "schedule_sjf",
]
