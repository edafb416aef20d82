from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .errors import InvalidProcessError


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class ExecutionInterval:
    """
    One contiguous, uninterrupted run of a process on the CPU.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessResult:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class ScheduleSummary:
    average_wait: float
    average_turnaround: float
    average_response: float
    throughput: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessResult] = field(default_factory=list)
    timeline: List[ExecutionInterval] = field(default_factory=list)
    summary: Optional[ScheduleSummary] = None

    def result_for(self, pid: int) -> ProcessResult:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)


def validate_processes(processes: Iterable[Process]) -> None:
    """
    Reject process tables a simulation could not finish: non-positive bursts,
    negative arrivals and duplicate ids.
    """
    seen: set[int] = set()
    for p in processes:
        if p.burst_time <= 0:
            raise InvalidProcessError(f"Process {p.pid} has non-positive burst time {p.burst_time}")
        if p.arrival_time < 0:
            raise InvalidProcessError(f"Process {p.pid} has negative arrival time {p.arrival_time}")
        if p.pid in seen:
            raise InvalidProcessError(f"Duplicate process id {p.pid}")
        seen.add(p.pid)
