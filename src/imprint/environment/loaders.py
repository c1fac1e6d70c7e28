"""Template source loaders for the imprint Environment.

A loader maps a document name to markup source. It implements
``get_source(name)`` returning ``(source, filename)`` and may implement
``list_templates()``.

Built-in Loaders:
- ``FileSystemLoader``: documents under one or more directories
- ``DictLoader``: in-memory mapping (tests, embedded markup)
- ``ChoiceLoader``: first loader that has the document wins
- ``FunctionLoader``: wrap a callable

Custom Loaders:
    ```python
    class CmsLoader:
        def get_source(self, name: str) -> tuple[str, str | None]:
            page = cms.fetch(name)
            if page is None:
                raise TemplateNotFoundError(f"Template '{name}' not found")
            return page.markup, f"cms://{name}"
    ```

"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol

from imprint.environment.exceptions import TemplateNotFoundError

MARKUP_SUFFIXES = (".html", ".htm", ".xml")


class Loader(Protocol):
    def get_source(self, name: str) -> tuple[str, str | None]: ...


class FileSystemLoader:
    """Load markup documents from filesystem directories.

    Directories are searched in order; the first existing file wins:

        >>> loader = FileSystemLoader(["themes/custom/", "themes/default/"])
        >>> source, filename = loader.get_source("layouts/base.html")

    Raises:
        TemplateNotFoundError: If no directory contains ``name``
    """

    __slots__ = ("_encoding", "_paths")

    def __init__(
        self,
        paths: str | Path | Sequence[str | Path],
        encoding: str = "utf-8",
    ):
        if isinstance(paths, (str, Path)):
            paths = [paths]
        self._paths = [Path(p) for p in paths]
        self._encoding = encoding

    def get_source(self, name: str) -> tuple[str, str]:
        for base in self._paths:
            path = base / name
            if path.is_file():
                return path.read_text(self._encoding), str(path)

        raise TemplateNotFoundError(
            f"Template '{name}' not found in: {', '.join(str(p) for p in self._paths)}"
        )

    def list_templates(self) -> list[str]:
        """Markup documents under every search path, relative and sorted."""
        found: set[str] = set()
        for base in self._paths:
            if not base.is_dir():
                continue
            for path in base.rglob("*"):
                if path.is_file() and path.suffix in MARKUP_SUFFIXES:
                    found.add(path.relative_to(base).as_posix())
        return sorted(found)


class DictLoader:
    """Load markup from an in-memory ``name → source`` mapping.

    Example:
        >>> loader = DictLoader({"card.html": "<template><b>{{ title }}</b></template>"})
        >>> loader.get_source("card.html")[1] is None
        True

    Raises:
        TemplateNotFoundError: If ``name`` is not a key, with a close-match hint
    """

    __slots__ = ("_mapping",)

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = mapping

    def get_source(self, name: str) -> tuple[str, None]:
        if name not in self._mapping:
            available = sorted(self._mapping)
            msg = f"Template '{name}' not found"
            matches = get_close_matches(name, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise TemplateNotFoundError(msg)
        return self._mapping[name], None

    def list_templates(self) -> list[str]:
        return sorted(self._mapping)


class ChoiceLoader:
    """Try several loaders in order; the first that has ``name`` wins."""

    __slots__ = ("_loaders",)

    def __init__(self, loaders: Sequence[Loader]):
        self._loaders = list(loaders)

    def get_source(self, name: str) -> tuple[str, str | None]:
        for loader in self._loaders:
            try:
                return loader.get_source(name)
            except TemplateNotFoundError:
                continue
        raise TemplateNotFoundError(
            f"Template '{name}' not found in any of {len(self._loaders)} loaders"
        )

    def list_templates(self) -> list[str]:
        names: set[str] = set()
        for loader in self._loaders:
            list_templates = getattr(loader, "list_templates", None)
            if list_templates is not None:
                names.update(list_templates())
        return sorted(names)


class FunctionLoader:
    """Wrap ``load(name) -> source | (source, filename) | None`` as a loader.

    Raises:
        TemplateNotFoundError: When the callable returns ``None``
    """

    __slots__ = ("_load",)

    def __init__(self, load: Callable[[str], str | tuple[str, str | None] | None]):
        self._load = load

    def get_source(self, name: str) -> tuple[str, str | None]:
        result = self._load(name)
        if result is None:
            raise TemplateNotFoundError(f"Template '{name}' not found")
        if isinstance(result, str):
            return result, "<function>"
        return result
