from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Sequence, Set, Tuple

from .automata import DFA


@dataclass(frozen=True)
class AcceptanceCase:
    input: str
    expected: bool
    label: str = ""


@dataclass(frozen=True)
class AcceptanceResult:
    case: AcceptanceCase
    actual: bool

    @property
    def passed(self) -> bool:
        return self.actual == self.case.expected


def run_test_cases(automaton: DFA, test_cases: Sequence[AcceptanceCase]) -> List[AcceptanceResult]:
    results: List[AcceptanceResult] = []
    for case in test_cases:
        actual = automaton.accepts(case.input)
        results.append(AcceptanceResult(case=case, actual=actual))
    return results


def summarize_results(results: Sequence[AcceptanceResult]) -> Dict[str, int]:
    summary = {"total": len(results), "passed": 0, "failed": 0}
    for result in results:
        if result.passed:
            summary["passed"] += 1
        else:
            summary["failed"] += 1
    return summary


def analyze_graph(automaton: DFA) -> Dict[str, object]:
    labels = [state.label for state in automaton.states]

    forward: Dict[str, Set[str]] = {label: set() for label in labels}
    reverse: Dict[str, Set[str]] = {label: set() for label in labels}
    transition_count = 0
    for source, _symbol, destination in automaton.iter_transitions():
        forward[source.label].add(destination.label)
        reverse[destination.label].add(source.label)
        transition_count += 1

    reachable: Set[str] = set()
    queue: Deque[str] = deque()
    if automaton.start_state is not None:
        queue.append(automaton.start_state.label)
    while queue:
        label = queue.popleft()
        if label in reachable:
            continue
        reachable.add(label)
        queue.extend(dest for dest in forward[label] if dest not in reachable)

    alive: Set[str] = set()
    queue.extend(state.label for state in automaton.final_states)
    while queue:
        label = queue.popleft()
        if label in alive:
            continue
        alive.add(label)
        queue.extend(src for src in reverse[label] if src not in alive)

    missing: List[Tuple[str, str]] = []
    for state in automaton.states:
        for symbol in automaton.alphabet:
            if automaton.transition_from(state, symbol) is None:
                missing.append((state.label, symbol))

    return {
        "state_count": len(labels),
        "reachable_count": len(reachable),
        "unreachable": [label for label in labels if label not in reachable],
        "dead_states": [label for label in labels if label not in alive],
        "missing_symbols": missing,
        "transition_count": transition_count,
        "is_total": not missing,
        "has_start": automaton.start_state is not None,
    }
