from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from .analysis import AcceptanceCase
from .automata import DFA, AutomatonValidationError

logger = logging.getLogger(__name__)

EMPTY_INPUT_MARKER = "e"
ARROW_TRANSITION_RE = re.compile(r"^(?P<src>.+?)-(?P<symbol>.)->(?P<dst>.+)$")


@dataclass
class Description:
    automaton: DFA
    inputs: List[str] = field(default_factory=list)
    test_cases: List[AcceptanceCase] = field(default_factory=list)


# ---------------------------------------------------------------
# Line-oriented text format


def parse_description(text: str, *, strict: bool = False) -> Description:
    """Build a DFA from the line-oriented description format.

    Line 1 lists the final states, line 2 the start state, line 3 the other
    states and line 4 the transitions. Every following non-blank line is an
    input string, with a lone ``e`` standing for the empty string.
    """
    lines = text.splitlines()
    while len(lines) < 4:
        lines.append("")

    final_labels = lines[0].split()
    start_tokens = lines[1].split()
    if len(start_tokens) != 1:
        raise AutomatonValidationError("Line 2 must name exactly one start state.")
    other_labels = lines[2].split()

    automaton = DFA(strict=strict)
    automaton.add_start_state(start_tokens[0])
    for label in other_labels:
        automaton.add_state(label)
    for label in final_labels:
        automaton.add_final_state(label)
    for token in lines[3].split():
        source, symbol, destination = _split_transition(token)
        automaton.add_transition(source, symbol, destination)

    inputs: List[str] = []
    for raw in lines[4:]:
        line = raw.strip()
        if not line:
            continue
        inputs.append("" if line == EMPTY_INPUT_MARKER else line)

    logger.info(
        "Loaded DFA with %d state(s), alphabet %s, %d input string(s)",
        len(automaton),
        "".join(automaton.alphabet) or "<empty>",
        len(inputs),
    )
    return Description(automaton=automaton, inputs=inputs)


def _split_transition(token: str) -> Tuple[str, str, str]:
    match = ARROW_TRANSITION_RE.match(token)
    if match:
        return match.group("src"), match.group("symbol"), match.group("dst")
    if len(token) == 3:
        return token[0], token[1], token[2]
    raise AutomatonValidationError(
        f"Cannot read transition '{token}', expected 'a0b' or 'src-sym->dst'."
    )


# ---------------------------------------------------------------
# JSON payloads


def build_from_payload(payload: Mapping[str, Any]) -> Description:
    if not isinstance(payload, Mapping):
        raise ValueError("Config payload must be a mapping.")
    data = dict(payload)

    start_state = _require_string(data, "start_state")
    states = _optional_string_sequence(data, "states")
    accept_states = _optional_string_sequence(data, "accept_states")
    alphabet = data.get("alphabet")
    if alphabet is not None:
        alphabet = _optional_string_sequence(data, "alphabet")
    strict = data.get("strict", False)
    if not isinstance(strict, bool):
        raise ValueError("Config field 'strict' must be a boolean.")

    transitions_obj = data.get("transitions", {})
    if not isinstance(transitions_obj, dict):
        raise ValueError("Config field 'transitions' must be an object.")
    transitions = _normalize_transitions_from_config(transitions_obj)

    automaton = DFA(strict=strict)
    automaton.add_start_state(start_state)
    for label in states:
        automaton.add_state(label)
    for label in accept_states:
        automaton.add_final_state(label)

    allowed: Optional[Set[str]] = set(alphabet) if alphabet is not None else None
    for source, mapping in transitions.items():
        for symbol, destination in mapping.items():
            if allowed is not None and symbol not in allowed:
                raise AutomatonValidationError(
                    f"Symbol '{symbol}' of state '{source}' is not in the declared alphabet."
                )
            automaton.add_transition(source, symbol, destination)

    inputs = _optional_string_sequence(data, "inputs")
    test_cases = load_test_cases_from_payload(data.get("test_cases"))
    return Description(automaton=automaton, inputs=inputs, test_cases=test_cases)


def _require_string(payload: Mapping[str, Any], key: str) -> str:
    value = payload.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Config field '{key}' must be a non-empty string.")
    return value


def _optional_string_sequence(payload: Mapping[str, Any], key: str) -> List[str]:
    value = payload.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Config field '{key}' must be a list of strings.")
    return list(value)


def _normalize_transitions_from_config(
    transitions: Mapping[str, Any]
) -> Dict[str, Dict[str, str]]:
    normalized: Dict[str, Dict[str, str]] = {}
    for state, mapping in transitions.items():
        if not isinstance(mapping, dict):
            raise ValueError("Transition entries must be objects.")
        state_map: Dict[str, str] = {}
        for symbol, destination in mapping.items():
            if isinstance(destination, str):
                state_map[str(symbol)] = destination
            elif (
                isinstance(destination, list)
                and len(destination) == 1
                and isinstance(destination[0], str)
            ):
                state_map[str(symbol)] = destination[0]
            else:
                raise ValueError(
                    f"Transition for state '{state}' and symbol '{symbol}' must be a single destination string."
                )
        normalized[str(state)] = state_map
    return normalized


def load_test_cases_from_payload(data: Any) -> List[AcceptanceCase]:
    if data is None:
        return []
    if isinstance(data, dict):
        entries = data.get("cases", [])
    else:
        entries = data
    if not isinstance(entries, list):
        raise ValueError("Test cases must be provided as a list.")
    cases: List[AcceptanceCase] = []
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise ValueError("Each test case must be an object with 'input' and 'expected'.")
        raw_input = _normalize_test_case_input(entry.get("input", ""))
        expected = bool(entry.get("expected", False))
        label = entry.get("label") or f"case {index}"
        cases.append(AcceptanceCase(input=raw_input, expected=expected, label=label))
    return cases


def _normalize_test_case_input(raw_input: Any) -> str:
    if isinstance(raw_input, str):
        return raw_input
    if isinstance(raw_input, list):
        if not all(isinstance(token, str) and len(token) == 1 for token in raw_input):
            raise ValueError("Test case symbols must be single-character strings.")
        return "".join(raw_input)
    raise ValueError("Test case 'input' must be a string or a list of strings.")


# ---------------------------------------------------------------
# Files


def load_path(path: Path, *, strict: Optional[bool] = None) -> Description:
    """Load a ``.json`` payload or a text description from ``path``."""
    with open(path, "r", encoding="utf-8") as handle:
        content = handle.read()
    if path.suffix.lower() == ".json":
        payload = json.loads(content)
        if not isinstance(payload, dict):
            raise ValueError("Config file must define a JSON object.")
        if strict is not None:
            payload["strict"] = strict
        return build_from_payload(payload)
    return parse_description(content, strict=bool(strict))


def load_test_cases_from_file(path: Path) -> List[AcceptanceCase]:
    with open(path, "r", encoding="utf-8") as handle:
        payload = json.load(handle)
    return load_test_cases_from_payload(payload)


def parse_inputs(lines: Sequence[str]) -> List[str]:
    return ["" if line.strip() == EMPTY_INPUT_MARKER else line.strip() for line in lines]
