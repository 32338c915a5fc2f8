"""Build the renderer registry used by a workspace."""

from __future__ import annotations

from typing import TYPE_CHECKING

from doxygen2docusaurus import code_renderers as code
from doxygen2docusaurus import description_renderers as desc
from doxygen2docusaurus import table_renderers as table
from doxygen2docusaurus.elements import (
    Description,
    DocAnchor,
    DocBlockQuote,
    DocCaption,
    DocComputerOutput,
    DocEmoji,
    DocEmpty,
    DocEntry,
    DocFormula,
    DocHeading,
    DocHtmlOnly,
    DocImage,
    DocInternal,
    DocList,
    DocMarkup,
    DocPara,
    DocParamList,
    DocPreformatted,
    DocRefText,
    DocRow,
    DocSect,
    DocSimpleSect,
    DocSp,
    DocSubstring,
    DocTable,
    DocTitle,
    DocTocList,
    DocUrlLink,
    DocVariableList,
    DocVerbatim,
    DocXRefSect,
    Highlight,
    Inc,
    LinkedText,
    Listing,
    Param,
    Reference,
)
from doxygen2docusaurus.renderer_registry import RendererRegistry

if TYPE_CHECKING:
    from doxygen2docusaurus.workspace import Workspace


def create_renderer_registry(workspace: Workspace) -> RendererRegistry:
    """Register every renderer once and freeze the registry."""
    registry = RendererRegistry()

    lines_renderers = {
        Description: desc.DescriptionRenderer,
        DocPara: desc.DocParaRenderer,
        DocAnchor: desc.DocAnchorRenderer,
        DocHeading: desc.DocHeadingRenderer,
        DocSect: desc.DocSectRenderer,
        DocTitle: desc.DocTitleRenderer,
        DocInternal: desc.DocInternalRenderer,
        DocBlockQuote: desc.DocBlockQuoteRenderer,
        DocList: desc.DocListRenderer,
        DocSimpleSect: desc.DocSimpleSectRenderer,
        DocXRefSect: desc.DocXRefSectRenderer,
        DocTocList: desc.DocTocListRenderer,
        DocTable: table.DocTableRenderer,
        DocCaption: table.DocCaptionRenderer,
        DocRow: table.DocRowRenderer,
        DocVariableList: table.DocVariableListRenderer,
        DocParamList: table.DocParamListRenderer,
        Listing: code.ListingRenderer,
        Highlight: code.HighlightRenderer,
        Inc: code.IncRenderer,
        Param: code.ParamRenderer,
    }
    string_renderers = {
        DocMarkup: desc.DocMarkupRenderer,
        DocComputerOutput: desc.DocComputerOutputRenderer,
        DocSubstring: desc.DocSubstringRenderer,
        DocEmpty: desc.DocEmptyRenderer,
        DocUrlLink: desc.DocUrlLinkRenderer,
        DocRefText: desc.DocRefTextRenderer,
        DocFormula: desc.DocFormulaRenderer,
        DocEmoji: desc.DocEmojiRenderer,
        DocImage: desc.DocImageRenderer,
        DocHtmlOnly: desc.DocHtmlOnlyRenderer,
        DocVerbatim: desc.DocVerbatimRenderer,
        DocPreformatted: desc.DocVerbatimRenderer,
        DocEntry: table.DocEntryRenderer,
        DocSp: code.SpRenderer,
        LinkedText: code.LinkedTextRenderer,
        Reference: code.ReferenceRenderer,
    }

    for cls, renderer_cls in lines_renderers.items():
        registry.register_lines(cls, renderer_cls(workspace))
    for cls, renderer_cls in string_renderers.items():
        registry.register_string(cls, renderer_cls(workspace))

    registry.freeze()
    return registry
