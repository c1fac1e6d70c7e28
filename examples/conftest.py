"""Shared pytest configuration for imprint examples.

Provides the ``example_app`` fixture that loads and executes the ``app.py``
file in the same directory as the test. Each call re-executes app.py in an
isolated module namespace so every test starts with clean state (module-level
listener lists, collecting diagnostics, builders).
"""

import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> ModuleType:
    """Load a fresh module from the sibling app.py next to the test file."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"imprint_example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    # Registered for the duration of the test so app-level classes can be introspected
    monkeypatch.setitem(sys.modules, module_name, module)
    spec.loader.exec_module(module)
    return module
