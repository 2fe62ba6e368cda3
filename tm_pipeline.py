"""CLI driving the binary addition Turing machine."""
from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from tm_graph import build_state_graph, save_state_graph_dot, visualize_state_graph
from tm_trace import record_trace, state_visits
from turing_machine import (
    DEFAULT_MAX_STEPS,
    TRACE_EVERY,
    TuringMachine,
    UnexpectedSymbol,
    step_budget,
    to_dec,
)

TRACE_CSV = os.path.join("output", "trace.csv")
BENCHMARK_CSV = "benchmark_results.csv"
GRAPH_DOT = os.path.join("output", "states.dot")

RULE = "═══════════════════════════════════════════"

TEST_CASES: List[Tuple[str, str, int]] = [
    ("111 11", "1010", 10),
    ("101 11", "1000", 8),
    ("1 1", "10", 2),
    ("1111 1", "10000", 16),
]


def setup_logging(level: str = "WARNING") -> None:
    """Set up logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler()],
    )


def print_banner() -> None:
    print("\n╔═══════════════════════════════════════════╗")
    print("║   TURING MACHINE: Binary Addition        ║")
    print("╚═══════════════════════════════════════════╝\n")

    print("📖 Key Concepts:")
    print("  • States: Rules that control behavior")
    print("  • Tape: Infinite memory (sparse dict)")
    print("  • Head: Current position on tape")
    print("  • Transitions: (state, symbol) → (new_state, write, move)\n")
    print(f"{RULE}\n")


def expected_sum(input_str: str) -> Optional[str]:
    """Return the binary sum of ``"<left> <right>"`` or None if not two binary numbers."""
    parts = input_str.split(" ")
    if len(parts) != 2 or not all(parts) or any(set(p) - {"0", "1"} for p in parts):
        return None
    return format(int(parts[0], 2) + int(parts[1], 2), "b")


def run_case(
    index: int,
    input_str: str,
    expected: Optional[str],
    max_steps: int = DEFAULT_MAX_STEPS,
    verbose: bool = False,
    every: int = TRACE_EVERY,
) -> Dict[str, object]:
    """Run one input, print the outcome and return a summary row."""
    print(f"TEST {index}: {input_str}")
    if expected is not None:
        print(f"Expected: {expected} (decimal: {to_dec(expected)})\n")

    tm = TuringMachine(input_str)
    outcome = tm.run(max_steps, verbose=verbose, every=every)
    print(outcome)

    result = tm.get_result()
    ok = expected is not None and result == expected
    if expected is None:
        print(f"Result:   {result} (decimal: {to_dec(result)})\n")
    else:
        mark = "✓" if ok else "✗"
        print(f"Result:   {result} (decimal: {to_dec(result)}) {mark}\n")
    print(f"{RULE}\n")
    return {
        "input": input_str,
        "expected": expected if expected is not None else "",
        "result": result,
        "steps": outcome.steps,
        "halted": outcome.halted,
        "ok": ok and outcome.halted,
    }


def run_tests(
    cases: Sequence[Tuple[str, Optional[str]]],
    max_steps: int = DEFAULT_MAX_STEPS,
    verbose: bool = False,
    every: int = TRACE_EVERY,
) -> pd.DataFrame:
    """Run every case; only the first is traced unless ``verbose`` is set."""
    rows = []
    for i, (input_str, expected) in enumerate(cases):
        trace = verbose or i == 0
        try:
            rows.append(run_case(i + 1, input_str, expected, max_steps, trace, every))
        except UnexpectedSymbol as e:
            print(f"[!] {e}\n")
            print(f"{RULE}\n")
            rows.append(
                {
                    "input": input_str,
                    "expected": expected or "",
                    "result": "",
                    "steps": 0,
                    "halted": False,
                    "ok": False,
                }
            )
    return pd.DataFrame(rows)


def save_trace(input_str: str, path: str, max_steps: int) -> pd.DataFrame:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    trace = record_trace(TuringMachine(input_str), max_steps)
    trace.to_csv(path, index=False)
    print(f"[+] Trace of {input_str!r} ({len(trace)} steps) saved to {path}")
    print(state_visits(trace).to_string())
    return trace


def run_benchmarks(bits: int, csv_path: str = BENCHMARK_CSV) -> Tuple[pd.DataFrame, float]:
    """Add every pair of operands with 1..``bits`` digits and record step counts.

    Returns the per-pair table and the slope of log(max steps) against
    log(input length), an estimate of the polynomial degree of the run time.
    """
    if bits <= 0:
        raise ValueError("bits must be a positive integer.")

    operands = [format(v, "b") for v in range(1 << bits)]
    results = []
    for left in operands:
        for right in operands:
            input_str = f"{left} {right}"
            tm = TuringMachine(input_str)
            outcome = tm.run(step_budget(len(input_str)))
            expected = format(int(left, 2) + int(right, 2), "b")
            result = tm.get_result()
            results.append(
                {
                    "input": input_str,
                    "length": len(input_str),
                    "expected": expected,
                    "result": result,
                    "steps": outcome.steps,
                    "ok": outcome.halted and result == expected,
                }
            )

    df = pd.DataFrame(results)
    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        df.to_csv(csv_path, index=False)
        print(f"[✓] Benchmark results saved to {csv_path}")

    worst = df.groupby("length")["steps"].max()
    if len(worst) > 1:
        slope = float(np.polyfit(np.log(worst.index.to_numpy(dtype=float)), np.log(worst.to_numpy(dtype=float)), 1)[0])
    else:
        slope = 0.0
    return df, slope


def save_graph(path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    g = build_state_graph()
    if path.endswith(".dot"):
        save_state_graph_dot(g, path)
    else:
        visualize_state_graph(g, path)
    print(f"[+] State graph ({g.number_of_nodes()} states, {g.number_of_edges()} transitions) saved to {path}")


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Add two binary numbers on a simulated Turing machine.")
    parser.add_argument(
        "inputs",
        nargs="*",
        help='Inputs of the form "<left> <right>"; the built-in test list runs when omitted',
    )
    parser.add_argument("--max-steps", type=int, default=DEFAULT_MAX_STEPS, help="Step budget per run")
    parser.add_argument("--verbose", action="store_true", help="Trace every run, not only the first")
    parser.add_argument("--every", type=int, default=TRACE_EVERY, help="Steps between trace snapshots")
    parser.add_argument("--trace-csv", nargs="?", const=TRACE_CSV, help="Save a step-by-step trace of the first input as CSV")
    parser.add_argument("--benchmarks", type=int, metavar="BITS", help="Run every operand pair up to BITS digits")
    parser.add_argument("--graph", nargs="?", const=GRAPH_DOT, help="Save the state graph (.dot or image file)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    parser.add_argument("--time", action="store_true", help="Print total running time")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    if args.max_steps <= 0:
        parser.error("--max-steps must be positive")
    if args.every <= 0:
        parser.error("--every must be positive")
    if args.benchmarks is not None and args.benchmarks <= 0:
        parser.error("--benchmarks must be positive")
    setup_logging(args.log_level)

    start = time.time() if args.time else None

    if args.graph:
        save_graph(args.graph)

    if args.benchmarks is not None:
        df, slope = run_benchmarks(args.benchmarks)
        failed = df[~df["ok"]]
        print(f"[+] {len(df)} additions, worst case {df['steps'].max()} steps, growth ~ n^{slope:.2f}")
        if len(failed):
            print(f"[!] {len(failed)} additions failed:")
            print(failed.to_string(index=False))
            return 1
        return 0

    print_banner()
    if args.inputs:
        cases = [(s, expected_sum(s)) for s in args.inputs]
    else:
        cases = [(s, expected) for s, expected, _ in TEST_CASES]

    summary = run_tests(cases, args.max_steps, args.verbose, args.every)

    if args.trace_csv:
        try:
            save_trace(cases[0][0], args.trace_csv, args.max_steps)
        except UnexpectedSymbol as e:
            print(f"[!] {e}")

    if args.time:
        elapsed = time.time() - start
        print(f"\n[Completed in {elapsed:.2f} seconds]")

    return 0 if summary["ok"].all() else 1


if __name__ == "__main__":
    sys.exit(main())
