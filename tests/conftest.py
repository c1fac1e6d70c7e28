"""Pytest configuration and fixtures for imprint tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from imprint import (
    CollectingDiagnostics,
    DictLoader,
    Environment,
    RecordingBuilder,
    TreeBuilder,
    parse_template,
    prepare_template,
)
from imprint.environment import terminal

# One document holding every fixture template, addressed as "fixtures.html#<id>"
FIXTURES = """
<template id="static"><div>static</div></template>
<template id="simple-binding"><div>{{ foo }}</div></template>
<template id="attribute-binding"><div foo$="{{ foo }}"></div></template>
<template id="property-binding"><div foo="{{ foo }}"></div></template>
<template id="if-handler"><template type="if" if="{{ render == 'yes' }}">RENDERED</template></template>
<template id="repeat-handler"><template type="repeat" repeat="{{ items }}">{{ item }}</template></template>
<template id="repeat-handler-index"><template type="repeat" repeat="{{ items }}">{{ index }}</template></template>
<template id="repeat-handler-scope"><template type="repeat" repeat="{{ items }}">{{ outer }}</template></template>
<template id="inheritance-super-1">super</template>
<template id="inheritance-super-2">super<template name="block">default</template>super</template>
<template id="inheritance-sub-1">sub</template>
<template id="inheritance-sub-2">sub<template name="super"></template>sub</template>
<template id="inheritance-sub-3">sub<template name="block">subtemplate</template>sub</template>
<template id="inheritance-sub-4">sub<template name="super"><template name="block">sub</template></template>sub</template>
<template id="renderer"><template name="block-a"></template></template>
"""


@pytest.fixture(autouse=True, scope="session")
def plain_terminal() -> Iterator[None]:
    """Error messages without ANSI codes, whatever the CI terminal says."""
    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(terminal, "_USE_COLORS", False)
        yield


@pytest.fixture
def recorder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture
def tree() -> TreeBuilder:
    return TreeBuilder()


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    return CollectingDiagnostics()


@pytest.fixture
def env(diagnostics: CollectingDiagnostics) -> Environment:
    """Environment serving the fixture document, collecting diagnostics."""
    return Environment(
        loader=DictLoader({"fixtures.html": FIXTURES}),
        diagnostics=diagnostics,
    )


@pytest.fixture
def fixture_template(env: Environment) -> Callable[[str], Any]:
    """Look up a fixture template by id."""

    def get(template_id: str) -> Any:
        return env.get_template(f"fixtures.html#{template_id}")

    return get


@pytest.fixture
def render_html(diagnostics: CollectingDiagnostics) -> Callable[..., str]:
    """Render markup (or a template element) to an HTML string.

    Usage: ``render_html("<p>{{ x }}</p>", {"x": 1}, extends=parent)``
    """

    def render(source: Any, model: Any = None, **options: Any) -> str:
        template = parse_template(source) if isinstance(source, str) else source
        options.setdefault("diagnostics", diagnostics)
        return prepare_template(template, **options).render_to_string(model)

    return render
