from __future__ import annotations

from typing import List

from .models import ExecutionInterval


class Timeline:
    """
    Ordered record of who ran on the CPU and when.

    With ``merge_adjacent`` set, a run that continues the previous interval's
    process without a gap extends that interval instead of opening a new one.
    """

    def __init__(self, merge_adjacent: bool = True) -> None:
        self.merge_adjacent = merge_adjacent
        self._intervals: List[ExecutionInterval] = []

    def record(self, pid: int, start_time: int, end_time: int) -> None:
        if end_time <= start_time:
            raise ValueError(f"Empty or inverted interval for process {pid}: [{start_time}, {end_time})")
        if self._intervals and start_time < self._intervals[-1].end_time:
            raise ValueError(
                f"Interval [{start_time}, {end_time}) for process {pid} overlaps the previous interval"
            )

        last = self._intervals[-1] if self._intervals else None
        if self.merge_adjacent and last is not None and last.pid == pid and last.end_time == start_time:
            last.end_time = end_time
            return

        self._intervals.append(ExecutionInterval(pid=pid, start_time=start_time, end_time=end_time))

    @property
    def intervals(self) -> List[ExecutionInterval]:
        return list(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)
