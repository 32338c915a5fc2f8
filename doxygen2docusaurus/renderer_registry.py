"""Lookup tables mapping element classes to their renderers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from doxygen2docusaurus.errors import BuildPhaseError

if TYPE_CHECKING:
    from doxygen2docusaurus.elements import Element


class LinesRenderer(Protocol):
    def render_to_lines(self, element: Element, flavor: str) -> list[str]: ...


class StringRenderer(Protocol):
    def render_to_string(self, element: Element, flavor: str) -> str: ...


class RendererRegistry:
    """Two registries, one per renderer shape, resolved along the class MRO.

    A lookup for an element class tries the class itself, then each of its
    base classes in method resolution order. The result is cached, so a
    class always resolves to the same renderer for the life of the registry.
    Registration is closed by ``freeze()``.
    """

    def __init__(self) -> None:
        self.lines_renderers: dict[type, LinesRenderer] = {}
        self.string_renderers: dict[type, StringRenderer] = {}
        self._lines_cache: dict[type, LinesRenderer | None] = {}
        self._string_cache: dict[type, StringRenderer | None] = {}
        self.frozen = False

    def register_lines(self, cls: type, renderer: LinesRenderer) -> None:
        self._check_open()
        self.lines_renderers[cls] = renderer

    def register_string(self, cls: type, renderer: StringRenderer) -> None:
        self._check_open()
        self.string_renderers[cls] = renderer

    def freeze(self) -> None:
        self.frozen = True

    def lines_renderer_for(self, element: Element) -> LinesRenderer | None:
        cls = type(element)
        if cls not in self._lines_cache:
            self._lines_cache[cls] = _walk(cls, self.lines_renderers)
        return self._lines_cache[cls]

    def string_renderer_for(self, element: Element) -> StringRenderer | None:
        cls = type(element)
        if cls not in self._string_cache:
            self._string_cache[cls] = _walk(cls, self.string_renderers)
        return self._string_cache[cls]

    def _check_open(self) -> None:
        if self.frozen:
            raise BuildPhaseError("renderer registry is frozen")


def _walk(cls: type, table: dict) -> object | None:
    for klass in cls.__mro__:
        renderer = table.get(klass)
        if renderer is not None:
            return renderer
    return None
