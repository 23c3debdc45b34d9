from .automata import (
    DFA,
    STAY,
    AutomatonError,
    AutomatonValidationError,
    DuplicateStateError,
    State,
    UnknownStateError,
)
from .cli import run
from .formatting import render
from .loader import build_from_payload, parse_description

__all__ = [
    "DFA",
    "State",
    "STAY",
    "AutomatonError",
    "AutomatonValidationError",
    "DuplicateStateError",
    "UnknownStateError",
    "render",
    "run",
    "build_from_payload",
    "parse_description",
]
