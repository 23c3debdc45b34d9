from setuptools import setup

setup(
    name="dfa-engine",
    version="0.1.0",
    description="Deterministic finite automata: construction, simulation, complement and rendering.",
    packages=["dfa_engine"],
    python_requires=">=3.8",
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["dfa-engine=dfa_engine.cli:run"]},
)
