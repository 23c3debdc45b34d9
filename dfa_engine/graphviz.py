from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from .automata import DFA


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def automaton_to_dot(
    automaton: DFA,
    *,
    graph_name: str = "DFA",
    rankdir: str = "LR",
    highlight_path: Sequence[Tuple[str, str]] = (),
) -> str:
    """Return a Graphviz DOT representation for the provided automaton."""
    highlight_edges = set(highlight_path)

    lines: List[str] = [f"digraph {_quote(graph_name)} {{"]
    lines.append(f"  rankdir={rankdir};")
    lines.append("  node [shape=circle];")
    start = automaton.start_state
    if start is not None:
        lines.append("  __start__ [shape=point];")
        lines.append(f"  __start__ -> {_quote(start.label)};")

    for state in automaton.states:
        shape = "doublecircle" if automaton.is_final(state) else "circle"
        lines.append(f"  {_quote(state.label)} [shape={shape}];")

    for source, destination, labels in _collect_edges(automaton):
        attributes = [f"label={_quote(', '.join(labels))}"]
        if (source, destination) in highlight_edges:
            attributes.append('color="red"')
            attributes.append('fontcolor="red"')
        lines.append(f"  {_quote(source)} -> {_quote(destination)} [{', '.join(attributes)}];")

    lines.append("}")
    return "\n".join(lines)


def _collect_edges(automaton: DFA) -> Iterable[Tuple[str, str, List[str]]]:
    # parallel edges are merged into one labelled edge, first-declared order
    grouped: Dict[Tuple[str, str], List[str]] = {}
    for source, symbol, destination in automaton.iter_transitions():
        grouped.setdefault((source.label, destination.label), []).append(symbol)
    for (source, destination), labels in grouped.items():
        yield source, destination, labels


def write_dot(automaton: DFA, path: str, **kwargs) -> str:
    """Generate a DOT file at `path` and return the path."""
    dot = automaton_to_dot(automaton, **kwargs)
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(dot + "\n")
    return path
