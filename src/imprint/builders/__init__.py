"""Builder sinks that receive the walker's open/text/close call sequence."""

from imprint.builders.base import Builder, ElementHandle
from imprint.builders.recording import RecordedElement, RecordingBuilder
from imprint.builders.tree import (
    VOID_ELEMENTS,
    OutputElement,
    OutputFragment,
    OutputText,
    TreeBuilder,
)

__all__ = [
    "VOID_ELEMENTS",
    "Builder",
    "ElementHandle",
    "OutputElement",
    "OutputFragment",
    "OutputText",
    "RecordedElement",
    "RecordingBuilder",
    "TreeBuilder",
]
