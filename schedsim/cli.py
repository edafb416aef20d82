from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_ORDER, DEFAULT_QUANTUM, run_algorithm
from .models import Process, ScheduleResult
from .report import print_report
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, preemptive SJF, preemptive Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions (dispatches, idle time, completions).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_workload_args(run_parser)

    all_parser = subparsers.add_parser(
        "all",
        help="Run FCFS, SJF, Priority and Round-robin in turn and print each schedule.",
    )
    _add_workload_args(all_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=list(DEFAULT_ORDER),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )
    _add_workload_args(compare_parser)

    return parser


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to CSV or JSON workload file.",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _run_all(names: List[str], processes: List[Process], quantum: int) -> List[ScheduleResult]:
    results = []
    for name in names:
        q = quantum if name == "rr" else None
        results.append(run_algorithm(name, processes, quantum=q))
    return results


def _print_comparison(results: List[ScheduleResult], workload_path: Path, console: Console) -> None:
    summary_table = Table(title=f"Algorithm comparison: {workload_path.name}", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for result in results:
        summary = result.summary
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary.average_wait:.2f}",
            f"{summary.average_turnaround:.2f}",
            f"{summary.average_response:.2f}",
            f"{summary.throughput:.2f}/t",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()
    workload_path = Path(args.workload)

    # The whole schedule is computed before anything is printed.
    try:
        processes = load_workload(workload_path)
        if args.command == "run":
            results = _run_all([args.algorithm], processes, args.quantum)
        elif args.command == "all":
            results = _run_all(DEFAULT_ORDER, processes, args.quantum)
        else:
            results = _run_all(args.algorithms, processes, args.quantum)
    except ValueError as exc:
        # WorkloadError, InvalidProcessError and bad quantum values alike
        logger.debug("aborting: %s", exc)
        console.print(f"Error: {exc}", style="red", markup=False, highlight=False)
        return 1

    if args.command == "compare":
        _print_comparison(results, workload_path, console)
    else:
        for result in results:
            print_report(result, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
