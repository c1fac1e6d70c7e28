"""Non-fatal diagnostics reported while rendering.

Rendering degrades gracefully for an unknown directive type, a named block
with no renderer, or a node kind the walker does not understand. Each case
is reported to a ``DiagnosticSink`` instead of being printed, so embedding
code can route, silence, or assert on it.

Built-in sinks:
- ``LoggingDiagnostics``: forwards to the ``imprint.diagnostics`` logger (default)
- ``CollectingDiagnostics``: keeps every diagnostic in a list (tests, tooling)

"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from imprint.nodes import Node

logger = logging.getLogger(__name__)


class DiagnosticCode(Enum):
    """Codes for non-fatal render diagnostics (IMP-DIA-xxx)."""

    UNKNOWN_DIRECTIVE = "IMP-DIA-001"
    UNRESOLVED_BLOCK = "IMP-DIA-002"
    UNHANDLED_NODE = "IMP-DIA-003"


class Severity(Enum):
    DEBUG = logging.DEBUG
    WARNING = logging.WARNING


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One non-fatal render event."""

    code: DiagnosticCode
    message: str
    node: Node | None = None
    severity: Severity = Severity.WARNING

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class DiagnosticSink(Protocol):
    def report(self, diagnostic: Diagnostic) -> None: ...


class LoggingDiagnostics:
    """Send diagnostics to a stdlib logger at their severity level."""

    __slots__ = ("_logger",)

    def __init__(self, log: logging.Logger | None = None):
        self._logger = log or logger

    def report(self, diagnostic: Diagnostic) -> None:
        self._logger.log(
            diagnostic.severity.value,
            "%s: %s",
            diagnostic.code.value,
            diagnostic.message,
        )


class CollectingDiagnostics:
    """Keep diagnostics in memory.

    Example:
        >>> sink = CollectingDiagnostics()
        >>> render(template, builder, {}, diagnostics=sink)
        >>> sink.codes
        [<DiagnosticCode.UNKNOWN_DIRECTIVE: 'IMP-DIA-001'>]
    """

    __slots__ = ("diagnostics",)

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def codes(self) -> list[DiagnosticCode]:
        return [d.code for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)
