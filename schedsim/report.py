from __future__ import annotations

from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ExecutionInterval, ScheduleResult

TABLE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def render_banner(title: str) -> str:
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def build_time_marks(intervals: List[ExecutionInterval]) -> str:
    """
    Interval boundary timestamps, one per slice start plus the final stop.

    An idle gap shows up as a start that differs from the previous stop.
    """
    if not intervals:
        return ""

    marks = [str(sl.start_time) for sl in intervals]
    marks.append(str(intervals[-1].end_time))
    return "\t".join(marks)


def build_rich_gantt(intervals: List[ExecutionInterval]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not intervals:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    intervals = sorted(intervals, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    bar = Text("|")
    for sl in intervals:
        label = str(sl.pid)
        padding = " " * max(0, (8 - len(label)) // 2)
        bar.append(f"{padding}{label}{padding}", style=f"bold on {pid_color(sl.pid)}")
        bar.append("|")

    panel = Panel.fit(bar, title="Gantt schedule")
    return panel, build_time_marks(intervals)


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process table with averages and throughput in the footer.
    """
    summary = result.summary
    footers: List[Optional[str]] = ["", "", "", ""]
    if summary is not None:
        footers += [
            f"Average\n{summary.average_wait:.2f}",
            f"Average\n{summary.average_turnaround:.2f}",
            f"Throughput\n{summary.throughput:.2f}/t",
        ]
    else:
        footers += ["", "", ""]

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for header, footer in zip(TABLE_HEADERS, footers):
        justify = "center" if header in {"ID", "Priority"} else "right"
        table.add_column(header, footer=footer, justify=justify)

    for p in result.processes:
        table.add_row(
            str(p.pid),
            str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def print_report(result: ScheduleResult, console: Console) -> None:
    console.print(render_banner(result.algorithm), highlight=False)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks, highlight=False)

    console.print()
    console.print(build_schedule_table(result))
    console.print()
