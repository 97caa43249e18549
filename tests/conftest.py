"""Shared pytest setup.

Graph fixtures live in ``tests/algorithms/sample_graphs.py`` and are loaded as
a plugin so every test directory can request them by name. The plugin is only
registered when importable, which keeps ``pytest tests/expr`` style runs
working from other roots.
"""

from __future__ import annotations

from importlib.util import find_spec

pytest_plugins: list[str] = []
if find_spec("tests.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.algorithms.sample_graphs"]
