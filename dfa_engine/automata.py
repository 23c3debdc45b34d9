from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .formatting import render

logger = logging.getLogger(__name__)


class AutomatonError(Exception):
    """Base meltdown for automata drama."""


class AutomatonValidationError(AutomatonError):
    """Input is cursed or whatever."""


class DuplicateStateError(AutomatonError):
    """Somebody tried to crown a second start state."""


class UnknownStateError(AutomatonError):
    """Transition points at a state nobody declared."""


class _Stay:
    __slots__ = ()

    def __repr__(self) -> str:
        return "STAY"


# Querying with STAY leaves the automaton where it is. It is not an alphabet symbol.
STAY = _Stay()

Symbol = Union[str, _Stay]


def _key(label: object) -> object:
    return label.strip() if isinstance(label, str) else label


@dataclass(frozen=True)
class State:
    label: str
    is_start: bool = False
    is_final: bool = False

    def __str__(self) -> str:
        return self.label


class DFA:
    __slots__ = (
        "_states",
        "_alphabet",
        "_delta",
        "_start_label",
        "_final_labels",
        "_strict",
    )

    def __init__(self, *, strict: bool = False) -> None:
        self._states: Dict[str, State] = {}
        # dicts keep insertion order, values are unused
        self._alphabet: Dict[str, None] = {}
        self._delta: Dict[Tuple[str, str], str] = {}
        self._start_label: Optional[str] = None
        self._final_labels: Dict[str, None] = {}
        self._strict = strict

    # ---------------------------------------------------------------
    @staticmethod
    def _normalize_label(label: str) -> str:
        if not isinstance(label, str) or not label.strip():
            raise AutomatonValidationError("States must be non-empty strings.")
        return label.strip()

    @staticmethod
    def _normalize_symbol(symbol: str) -> str:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise AutomatonValidationError(
                f"Alphabet symbols must be single characters, got {symbol!r}."
            )
        return symbol

    def _resolve(self, state: Union[State, str]) -> Optional[State]:
        label = state.label if isinstance(state, State) else _key(state)
        return self._states.get(label)

    # ---------------------------------------------------------------
    def add_start_state(self, label: str) -> State:
        label = self._normalize_label(label)
        if label in self._states:
            raise DuplicateStateError(f"State '{label}' is already registered.")
        if self._start_label is not None:
            raise DuplicateStateError(
                f"Start state already set to '{self._start_label}', cannot add '{label}'."
            )
        state = State(label, is_start=True)
        self._states[label] = state
        self._start_label = label
        logger.debug("Registered start state %s", label)
        return state

    def add_state(self, label: str) -> State:
        label = self._normalize_label(label)
        existing = self._states.get(label)
        if existing is not None:
            return existing
        state = State(label)
        self._states[label] = state
        logger.debug("Registered state %s", label)
        return state

    def add_final_state(self, label: str) -> State:
        label = self._normalize_label(label)
        existing = self._states.get(label)
        if existing is None:
            state = State(label, is_final=True)
        elif existing.is_final:
            return existing
        else:
            state = replace(existing, is_final=True)
        self._states[label] = state
        self._final_labels[label] = None
        logger.debug("Registered final state %s", label)
        return state

    def lookup(self, label: str) -> Optional[State]:
        return self._states.get(_key(label))

    def add_transition(self, from_label: str, symbol: str, to_label: str) -> bool:
        """Record ``from_label --symbol--> to_label``.

        Returns ``False`` when either label is unknown and the transition was
        dropped. Strict automata raise ``UnknownStateError`` instead. Labels
        that are not strings raise ``AutomatonValidationError`` in both modes.
        """
        symbol = self._normalize_symbol(symbol)
        from_label = self._normalize_label(from_label)
        to_label = self._normalize_label(to_label)
        missing = [label for label in (from_label, to_label) if label not in self._states]
        if missing:
            if self._strict:
                raise UnknownStateError(
                    f"Transition {from_label}-{symbol}->{to_label} references unknown "
                    f"state(s): {', '.join(missing)}."
                )
            logger.debug(
                "Dropping transition %s-%s->%s, unknown state(s): %s",
                from_label,
                symbol,
                to_label,
                ", ".join(missing),
            )
            return False
        self._alphabet[symbol] = None
        self._delta[(from_label, symbol)] = to_label
        return True

    # ---------------------------------------------------------------
    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def states(self) -> Tuple[State, ...]:
        return tuple(self._states.values())

    @property
    def final_states(self) -> Tuple[State, ...]:
        return tuple(self._states[label] for label in self._final_labels)

    @property
    def start_state(self) -> Optional[State]:
        if self._start_label is None:
            return None
        return self._states[self._start_label]

    @property
    def alphabet(self) -> Tuple[str, ...]:
        return tuple(self._alphabet)

    def iter_transitions(self) -> Iterator[Tuple[State, str, State]]:
        for (source, symbol), destination in self._delta.items():
            yield self._states[source], symbol, self._states[destination]

    def is_final(self, state: Union[State, str]) -> bool:
        label = state.label if isinstance(state, State) else _key(state)
        return label in self._final_labels

    def __len__(self) -> int:
        return len(self._states)

    def __contains__(self, label: object) -> bool:
        return _key(label) in self._states

    # ---------------------------------------------------------------
    def transition_from(self, state: Union[State, str], symbol: Symbol) -> Optional[State]:
        current = self._resolve(state)
        if current is None:
            return None
        if symbol is STAY:
            return current
        destination = self._delta.get((current.label, symbol))
        if destination is None:
            return None
        return self._states[destination]

    def _walk(self, input_string: str) -> Tuple[List[Tuple[State, str, State]], Optional[State]]:
        # halts on the first missing transition; final state is None then
        current = self.start_state
        steps: List[Tuple[State, str, State]] = []
        if current is None:
            return steps, None
        for symbol in input_string:
            nxt = self.transition_from(current, symbol)
            if nxt is None:
                logger.debug("No transition from %s on %r, rejecting", current.label, symbol)
                return steps, None
            steps.append((current, symbol, nxt))
            current = nxt
        return steps, current

    def run(self, input_string: str) -> Optional[State]:
        _steps, final = self._walk(input_string)
        return final

    def accepts(self, input_string: str) -> bool:
        final = self.run(input_string)
        return final is not None and final.label in self._final_labels

    def transition_path(self, input_string: str) -> Tuple[List[Tuple[str, str, str]], bool]:
        steps, final = self._walk(input_string)
        path = [(source.label, symbol, destination.label) for source, symbol, destination in steps]
        return path, final is not None and final.label in self._final_labels

    # ---------------------------------------------------------------
    def complement(self) -> "DFA":
        other = DFA(strict=self._strict)
        for label, state in self._states.items():
            flipped = label not in self._final_labels
            other._states[label] = replace(state, is_final=flipped)
            if flipped:
                other._final_labels[label] = None
        other._alphabet = dict(self._alphabet)
        other._delta = dict(self._delta)
        other._start_label = self._start_label
        logger.debug(
            "Built complement with %d final state(s) out of %d",
            len(other._final_labels),
            len(other._states),
        )
        return other

    def render(self) -> str:
        return render(self)

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        start = self._start_label if self._start_label is not None else "-"
        return (
            f"DFA(states={len(self._states)}, alphabet={''.join(self._alphabet)!r}, "
            f"start={start!r}, finals={list(self._final_labels)!r})"
        )
