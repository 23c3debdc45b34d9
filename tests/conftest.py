"""
Pytest configuration and fixtures for dfa_engine tests.

Provides a couple of small automata shared by unit and integration tests.
"""

import pytest

from dfa_engine.automata import DFA


@pytest.fixture
def ends_in_one():
    """
    Two-state DFA over {0, 1} accepting strings that end in 1.

    a is the start state, b the only final state.
    """
    dfa = DFA()
    dfa.add_start_state("a")
    dfa.add_final_state("b")
    dfa.add_transition("a", "0", "a")
    dfa.add_transition("a", "1", "b")
    dfa.add_transition("b", "0", "a")
    dfa.add_transition("b", "1", "b")
    return dfa


@pytest.fixture
def partial_dfa():
    """
    Three states, transitions only defined on the path p -x-> q -y-> r.
    """
    dfa = DFA()
    dfa.add_start_state("p")
    dfa.add_state("q")
    dfa.add_final_state("r")
    dfa.add_transition("p", "x", "q")
    dfa.add_transition("q", "y", "r")
    return dfa


ENDS_IN_ONE_TEXT = "b\na\n\na0a a1b b0a b1b\ne\n1\n11\n10\n01\n"


@pytest.fixture
def ends_in_one_text():
    """Line-oriented description of the ends_in_one DFA plus five inputs."""
    return ENDS_IN_ONE_TEXT


@pytest.fixture
def expected_ends_in_one():
    """Rendered report of the ends_in_one DFA."""
    return (
        "Q = { a b }\n"
        "Sigma = { 0 1 }\n"
        "delta =\n"
        "\t\t0\t1\n"
        "\ta\ta\tb\n"
        "\tb\ta\tb\n"
        "q0 = a\n"
        "F = { b }\n"
    )
