"""Generic entry points turning element trees into text."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from doxygen2docusaurus.elements import Element
from doxygen2docusaurus.errors import RendererNotFoundError
from doxygen2docusaurus.renderer_registry import RendererRegistry
from doxygen2docusaurus.text_processing import escape_text


class RenderDispatch:
    """Render undefined values, strings, lists and elements in one flavor.

    Strings are escaped for the flavor; elements go to the renderer found
    in the registry. Each direction falls back to the other renderer shape:
    lines are joined with newlines when a string is wanted, and strings are
    split on newlines when lines are wanted.
    """

    def __init__(self, registry: RendererRegistry | None = None) -> None:
        self.registry = registry or RendererRegistry()

    def render_string(self, s: str, flavor: str) -> str:
        return escape_text(s, flavor)

    def render_element_to_lines(self, element: Any, flavor: str) -> list[str]:
        if element is None:
            return []
        if isinstance(element, str):
            # Whitespace between block elements.
            if element.startswith("\n"):
                return []
            return [self.render_string(element, flavor)]
        if isinstance(element, list):
            return self.render_elements_to_lines(element, flavor)

        renderer = self.registry.lines_renderer_for(element)
        if renderer is not None:
            return renderer.render_to_lines(element, flavor)
        string_renderer = self.registry.string_renderer_for(element)
        if string_renderer is not None:
            return string_renderer.render_to_string(element, flavor).split("\n")
        raise RendererNotFoundError(_kind_of(element), "lines")

    def render_element_to_string(self, element: Any, flavor: str) -> str:
        if element is None:
            return ""
        if isinstance(element, str):
            return self.render_string(element, flavor)
        if isinstance(element, list):
            return self.render_elements_to_string(element, flavor)

        renderer = self.registry.string_renderer_for(element)
        if renderer is not None:
            return renderer.render_to_string(element, flavor)
        lines_renderer = self.registry.lines_renderer_for(element)
        if lines_renderer is not None:
            return "\n".join(lines_renderer.render_to_lines(element, flavor))
        raise RendererNotFoundError(_kind_of(element), "string")

    def render_elements_to_lines(
        self, elements: Iterable[Any] | None, flavor: str
    ) -> list[str]:
        lines: list[str] = []
        for element in elements or []:
            lines.extend(self.render_element_to_lines(element, flavor))
        return lines

    def render_elements_to_string(
        self, elements: Iterable[Any] | None, flavor: str
    ) -> str:
        return "".join(
            self.render_element_to_string(element, flavor) for element in elements or []
        )


def _kind_of(element: Any) -> str:
    if isinstance(element, Element):
        return f"{type(element).__name__} <{element.tag}>"
    return type(element).__name__
