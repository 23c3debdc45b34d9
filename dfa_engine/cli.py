from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .analysis import AcceptanceResult, analyze_graph, run_test_cases, summarize_results
from .automata import DFA, AutomatonError
from .graphviz import write_dot
from .loader import Description, load_path, load_test_cases_from_file, parse_inputs

logger = logging.getLogger(__name__)

EMPTY_INPUT_LABEL = "<empty>"


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a DFA from a description, render it and simulate input strings."
    )
    parser.add_argument(
        "description",
        nargs="?",
        help="Path to a text description (or a .json config) of the automaton.",
    )
    parser.add_argument("--config", help="Path to a JSON file that defines the automaton.")
    parser.add_argument(
        "--tests",
        help="Optional JSON file containing additional test cases to execute.",
    )
    parser.add_argument(
        "-i",
        "--input",
        action="append",
        default=[],
        help="Extra input string to simulate (repeatable, 'e' is the empty string).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on transitions that reference undeclared states instead of dropping them.",
    )
    parser.add_argument(
        "--complement",
        action="store_true",
        help="Also render and simulate the complement automaton.",
    )
    parser.add_argument(
        "--analyze",
        action="store_true",
        help="Print reachability and completeness details.",
    )
    parser.add_argument(
        "--dot-dir",
        help="Directory where DOT graph files will be written.",
    )
    parser.add_argument(
        "--base-name",
        default="automaton",
        help="Base filename used for generated DOT files.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)
    if not args.description and not args.config:
        parser.error("a description file or --config is required")
    return args


def run(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )
    try:
        description = _load(args)
    except (
        AutomatonError,
        ValueError,
        FileNotFoundError,
        json.JSONDecodeError,
    ) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    automaton = description.automaton

    _display(automaton, description.inputs)
    results = _run_tests(automaton, description)

    complement: Optional[DFA] = None
    if args.complement:
        complement = automaton.complement()
        print("\nComplement")
        _display(complement, description.inputs)

    if args.analyze:
        _display_analysis(automaton)

    if args.dot_dir:
        paths = write_graphs(
            automaton,
            complement,
            args.dot_dir,
            args.base_name,
            determine_highlight_path(automaton, description.inputs),
        )
        print("\nDOT files written:")
        for path in paths:
            print(f"  {path}")

    if any(not result.passed for result in results):
        return 2
    return 0


def _load(args: argparse.Namespace) -> Description:
    path = Path(args.config or args.description)
    logger.info("Reading automaton from %s", path)
    description = load_path(path, strict=args.strict or None)
    description.inputs.extend(parse_inputs(args.input))
    if args.tests:
        description.test_cases.extend(load_test_cases_from_file(Path(args.tests)))
    return description


def _display(automaton: DFA, inputs: Sequence[str]) -> None:
    print(automaton.render(), end="")
    for input_string in inputs:
        print("yes" if automaton.accepts(input_string) else "no")


def _run_tests(automaton: DFA, description: Description) -> List[AcceptanceResult]:
    if not description.test_cases:
        return []
    print("\nRunning test cases...")
    results = run_test_cases(automaton, description.test_cases)
    summary = summarize_results(results)
    print(f"  Passed {summary['passed']} of {summary['total']} test cases.")
    for result in results:
        input_text = result.case.input or EMPTY_INPUT_LABEL
        expected_text = "accept" if result.case.expected else "reject"
        actual_text = "accept" if result.actual else "reject"
        status = "PASS" if result.passed else "FAIL"
        label_prefix = f"{result.case.label}: " if result.case.label else ""
        print(
            f"    [{status}] {label_prefix}{input_text} -> expected {expected_text}, got {actual_text}"
        )
    return results


def _display_analysis(automaton: DFA) -> None:
    report = analyze_graph(automaton)
    print("\nAnalysis")
    print(f"  States: {report['state_count']} ({report['reachable_count']} reachable)")
    print(f"  Transitions: {report['transition_count']}")
    print(f"  Unreachable: {', '.join(report['unreachable']) or '<none>'}")
    print(f"  Dead: {', '.join(report['dead_states']) or '<none>'}")
    missing = ", ".join(f"d({state}, {symbol})" for state, symbol in report["missing_symbols"])
    print(f"  Missing transitions: {missing or '<none>'}")
    print(f"  Total: {'yes' if report['is_total'] else 'no'}")


def determine_highlight_path(automaton: DFA, inputs: Sequence[str]) -> List[Tuple[str, str]]:
    if not inputs:
        return []
    path, _accepted = automaton.transition_path(inputs[0])
    return [(source, destination) for source, _symbol, destination in path]


def write_graphs(
    automaton: DFA,
    complement: Optional[DFA],
    output_dir: Path | str,
    base_name: Optional[str],
    highlight_path: Sequence[Tuple[str, str]],
) -> List[Path]:
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    name = (base_name or "automaton").strip() or "automaton"

    written_paths: List[Path] = []
    dfa_path = out_dir / f"{name}_dfa.dot"
    write_dot(automaton, str(dfa_path), highlight_path=highlight_path)
    written_paths.append(dfa_path)
    if complement is not None:
        complement_path = out_dir / f"{name}_complement.dot"
        write_dot(complement, str(complement_path), graph_name="Complement")
        written_paths.append(complement_path)
    return [path.resolve() for path in written_paths]
