from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List

if TYPE_CHECKING:
    from .automata import DFA

NO_TRANSITION = "-"


def _braced(items: Iterable[object]) -> str:
    body = " ".join(str(item) for item in items)
    return f"{{ {body} }}" if body else "{ }"


def render(automaton: "DFA") -> str:
    """Return the 5-tuple report, states and symbols in declaration order."""
    alphabet = automaton.alphabet
    lines: List[str] = []
    lines.append(f"Q = {_braced(automaton.states)}")
    lines.append(f"Sigma = {_braced(alphabet)}")
    lines.append("delta =")
    lines.append("\t\t" + "\t".join(alphabet))
    for state in automaton.states:
        cells: List[str] = []
        for symbol in alphabet:
            destination = automaton.transition_from(state, symbol)
            cells.append(destination.label if destination is not None else NO_TRANSITION)
        lines.append("\t" + "\t".join([state.label, *cells]))
    start = automaton.start_state
    lines.append(f"q0 = {start.label if start is not None else NO_TRANSITION}")
    lines.append(f"F = {_braced(automaton.final_states)}")
    return "\n".join(lines) + "\n"
