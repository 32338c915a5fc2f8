"""Renderers for tables, variable lists and parameter lists."""

from __future__ import annotations

import logging

from doxygen2docusaurus.description_renderers import (
    ElementRenderer,
    render_without_para,
)
from doxygen2docusaurus.elements import (
    Description,
    DocCaption,
    DocEntry,
    DocListItem,
    DocParamList,
    DocParamListItem,
    DocParamName,
    DocParamNameList,
    DocParamType,
    DocRefText,
    DocRow,
    DocTable,
    DocTerm,
    DocVariableList,
    DocVarListEntry,
)

logger = logging.getLogger(__name__)

ENTRY_ATTRIBUTES = ("colspan", "rowspan", "align", "valign", "width", "class")

PARAM_LIST_TITLES = {
    "templateparam": "Template Parameters",
    "retval": "Return Values",
    "param": "Parameters",
    "exception": "Exceptions",
}


class DocTableRenderer(ElementRenderer):
    def render_to_lines(self, element: DocTable, flavor: str) -> list[str]:
        lines = ["", '<table class="doxyTable">']
        caption = element.find(DocCaption)
        if caption is not None:
            lines.append(self.workspace.render_element_to_string(caption, "html"))
        lines.extend(
            self.workspace.render_elements_to_lines(element.find_all(DocRow), "html")
        )
        lines.append("</table>")
        return lines


class DocCaptionRenderer(ElementRenderer):
    def render_to_lines(self, element: DocCaption, flavor: str) -> list[str]:
        caption_id = element.attr("id")
        attributes = f' id="{caption_id}"' if caption_id else ""
        content = self.workspace.render_elements_to_string(
            element.children, "html"
        ).strip()
        return [f"<caption{attributes}>{content}</caption>"]


class DocRowRenderer(ElementRenderer):
    def render_to_lines(self, element: DocRow, flavor: str) -> list[str]:
        lines = ["<tr>"]
        lines.extend(
            self.workspace.render_elements_to_lines(
                element.find_all(DocEntry), "html"
            )
        )
        lines.append("</tr>")
        return lines


class DocEntryRenderer(ElementRenderer):
    def render_to_string(self, element: DocEntry, flavor: str) -> str:
        attributes = ""
        for name in ENTRY_ATTRIBUTES:
            value = element.attr(name)
            if value is not None:
                attributes += f' {name}="{value}"'
        paras = [c for c in element.children if not isinstance(c, str)]
        content = render_without_para(self.workspace, paras, "html")
        cell = "th" if element.attr("thead") == "yes" else "td"
        return f"<{cell}{attributes}>{content}</{cell}>"


class DocVariableListRenderer(ElementRenderer):
    """Pairs each varlistentry term with the listitem that follows it."""

    def render_to_lines(self, element: DocVariableList, flavor: str) -> list[str]:
        lines = ["", '<dl class="doxyVariableList">']
        entry: DocVarListEntry | None = None
        for child in element.children:
            if isinstance(child, DocVarListEntry):
                entry = child
            elif isinstance(child, DocListItem):
                lines.extend(self._render_pair(entry, child))
                entry = None
        lines.append("</dl>")
        return lines

    def _render_pair(
        self, entry: DocVarListEntry | None, item: DocListItem
    ) -> list[str]:
        title = ""
        if entry is not None:
            title = self.workspace.render_element_to_string(
                entry.find(DocTerm), "html"
            ).strip()
        paras = [c for c in item.children if not isinstance(c, str)]
        description = self.workspace.render_elements_to_string(paras, "html").strip()
        lines = [f"<dt>{title}</dt>"]
        if "\n" not in description:
            lines.append(f"<dd>{description}</dd>")
        else:
            lines.append("<dd>")
            lines.extend(description.split("\n"))
            lines.append("</dd>")
        return lines


class DocParamListRenderer(ElementRenderer):
    def render_to_lines(self, element: DocParamList, flavor: str) -> list[str]:
        items = element.find_all(DocParamListItem)
        if not items:
            return []
        title = PARAM_LIST_TITLES.get(element.kind)
        if title is None:
            logger.error("Parameter list kind %s not supported", element.kind)
            title = element.kind

        lines = [
            "",
            '<dl class="doxyParamsList">',
            f'<dt class="doxyParamsTableTitle">{title}</dt>',
            "<dd>",
            '<table class="doxyParamsTable">',
        ]
        for item in items:
            names = self._names(item)
            description = self.workspace.render_element_to_string(
                item.find(Description), "html"
            ).strip()
            lines.append('<tr class="doxyParamItem">')
            lines.append(f'<td class="doxyParamItemName">{", ".join(names)}</td>')
            lines.append(f'<td class="doxyParamItemDescription">{description}</td>')
            lines.append("</tr>")
        lines.extend(["</table>", "</dd>", "</dl>"])
        return lines

    def _names(self, item: DocParamListItem) -> list[str]:
        names: list[str] = []
        for name_list in item.find_all(DocParamNameList):
            for child in name_list.children:
                if isinstance(child, DocParamType):
                    logger.debug("Parameter type ignored in parameter list")
                elif isinstance(child, DocParamName):
                    names.append(self._name(child))
        return names

    def _name(self, element: DocParamName) -> str:
        parts: list[str] = []
        for child in element.children:
            if isinstance(child, str):
                parts.append(self.workspace.render_string(child.strip(), "html"))
            elif isinstance(child, DocRefText):
                parts.append(self.workspace.render_element_to_string(child, "html"))
        name = "".join(parts)
        direction = element.attr("direction")
        if direction:
            return f"[{direction}] {name}"
        return name
