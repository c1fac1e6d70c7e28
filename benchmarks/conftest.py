from __future__ import annotations

import importlib.metadata as importlib_metadata
import json
import os
import platform
import sys
from pathlib import Path

import pytest

from benchmarks.fixtures.templates import TEMPLATES
from imprint import CollectingDiagnostics, DictLoader, Environment

BASE_DIR = Path(__file__).resolve().parent
BENCHMARK_OUTPUT_DIR = BASE_DIR.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)


def _version(dist: str) -> str:
    try:
        return importlib_metadata.version(dist)
    except importlib_metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {
            "processor": platform.processor(),
            "count": os.cpu_count(),
        },
        "imprint": _version("imprint"),
    }


@pytest.fixture(scope="session")
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    metadata = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(metadata, indent=2))
    return metadata


@pytest.fixture(scope="session")
def imprint_env() -> Environment:
    # Collect diagnostics so unresolved default blocks do not hit logging
    return Environment(loader=DictLoader(TEMPLATES), diagnostics=CollectingDiagnostics())


@pytest.fixture(scope="session")
def small_model() -> dict[str, object]:
    return {
        "title": "Benchmark",
        "items": [f"item {n}" for n in range(5)],
        "footer": "done",
    }


@pytest.fixture(scope="session")
def large_model() -> dict[str, object]:
    return {
        "title": "Large",
        "items": [f"item {n}" for n in range(1000)],
        "footer": None,
        "rows": [list(range(10)) for _ in range(100)],
    }
