"""Members of a section: definitions, references to definitions, enum values."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from doxygen2docusaurus.code_renderers import MemberListing
from doxygen2docusaurus.description_renderers import render_without_para
from doxygen2docusaurus.elements import CodeLine
from doxygen2docusaurus.models import EnumValueDef, Location, MemberDef, MemberRefDef
from doxygen2docusaurus.permalinks import get_permalink_anchor, sanitize_anonymous_namespace

if TYPE_CHECKING:
    from doxygen2docusaurus.sections import Section
    from doxygen2docusaurus.workspace import Workspace

logger = logging.getLogger(__name__)

# Labels shown next to the prototype, in display order.
FLAG_LABELS = ("inline", "explicit", "nodiscard", "constexpr", "noexcept")

FUNCTION_SECTION_SUFFIXES = ("func", "constructorr", "destructor", "operator")


class MemberBase:
    def __init__(self, section: Section, name: str) -> None:
        self.section = section
        self.name = name

    @property
    def workspace(self) -> Workspace:
        return self.section.compound.workspace


class MemberRef(MemberBase):
    """A member listed in a section but defined in another compound."""

    def __init__(self, section: Section, member_ref: MemberRefDef) -> None:
        super().__init__(section, member_ref.name)
        self.refid = member_ref.refid
        self.kind = member_ref.kind


class Member(MemberBase):
    """One function, variable, typedef, enum, define or friend."""

    def __init__(self, section: Section, member_def: MemberDef) -> None:
        super().__init__(section, member_def.name)
        self.id = member_def.id
        self.kind = member_def.kind
        self._member_def: MemberDef | None = member_def

        self.brief_html: str | None = None
        self.detailed_lines: list[str] | None = None
        self.argsstring: str | None = None
        self.qualified_name: str | None = None
        self.definition: str | None = None
        self.type: str | None = None
        self.initializer_lines: list[str] | None = None
        self.location_lines: list[str] | None = None
        self.template_parameters: str | None = None
        self.enum_lines: list[str] | None = None
        self.parameters_html: str | None = None
        self.program_listing: MemberListing | None = None
        self.references_html: str | None = None
        self.referenced_by_html: str | None = None
        self.enum_values: list[EnumValue] | None = None
        self.labels: list[str] = []
        self.is_trailing_type = False
        self.is_constexpr = False
        self.is_strong = False
        self.is_const = False
        self.is_static = False

    def initialize_late(self) -> None:
        member_def = self._member_def
        if member_def is None:
            return
        workspace = self.workspace
        compound = self.section.compound

        if member_def.briefdescription is not None:
            self.brief_html = render_without_para(
                workspace, member_def.briefdescription.children, "html"
            )
        if member_def.detaileddescription is not None:
            self.detailed_lines = workspace.render_element_to_lines(
                member_def.detaileddescription, "html"
            )

        self.argsstring = member_def.argsstring
        if member_def.type is not None:
            self.type = workspace.render_element_to_string(member_def.type, "html").strip()
        if member_def.initializer is not None:
            self.initializer_lines = workspace.render_element_to_lines(
                member_def.initializer, "html"
            )

        if member_def.location is not None:
            self.location_lines = compound.render_location_to_lines(member_def.location)
            if workspace.options.render_program_listing_inline:
                self.program_listing = self._listing_for_location(member_def.location)

        if member_def.references:
            self.references_html = compound.render_references_to_string(
                member_def.references
            )
        if member_def.referencedby:
            self.referenced_by_html = compound.render_referenced_by_to_string(
                member_def.referencedby
            )

        self.labels = self._labels(member_def)

        type_text = self.type or ""
        template_param_list = member_def.templateparamlist
        if template_param_list is None:
            template_param_list = compound.template_param_list
        # Heuristic: a templated return type is rendered after the arguments.
        if compound.is_template(template_param_list) and (
            "decltype(" in type_text or ("&lt;" in type_text and "&gt;" in type_text)
        ):
            self.is_trailing_type = True
        if template_param_list:
            self.template_parameters = sanitize_anonymous_namespace(
                compound.render_template_parameters_to_string(
                    template_param_list, with_defaults=True
                )
            )

        parameters = [
            workspace.render_element_to_string(param, "html").strip()
            for param in member_def.params
        ]
        if parameters:
            self.parameters_html = ", ".join(parameters)

        if member_def.kind == "enum" and member_def.enumvalues:
            self.enum_values = [EnumValue(self, v) for v in member_def.enumvalues]
            self.enum_lines = self.render_enum_to_lines()

        if member_def.qualifiedname is not None:
            self.qualified_name = sanitize_anonymous_namespace(member_def.qualifiedname)
        if member_def.definition is not None:
            self.definition = sanitize_anonymous_namespace(member_def.definition)

        if member_def.flag("constexpr") and "constexpr" not in type_text:
            self.is_constexpr = True
        self.is_strong = member_def.flag("strong")
        self.is_const = member_def.flag("const")

        self._member_def = None

    def _labels(self, member_def: MemberDef) -> list[str]:
        labels = [name for name in FLAG_LABELS if member_def.flag(name)]
        if member_def.prot == "protected":
            labels.append("protected")
        if member_def.static:
            self.is_static = True
            labels.append("static")
        if member_def.attributes.get("virt") == "virtual":
            labels.append("virtual")
        argsstring = member_def.argsstring or ""
        if argsstring.endswith("=delete"):
            labels.append("delete")
        if argsstring.endswith("=default"):
            labels.append("default")
        if member_def.flag("strong"):
            labels.append("strong")
        if member_def.flag("mutable"):
            labels.append("mutable")
        return labels

    def _listing_for_location(self, location: Location) -> MemberListing | None:
        """The lines of the definition file spanned by the member body."""
        if location.bodyfile is None or location.bodystart is None:
            return None
        definition_file = self.workspace.files_by_path.get(location.bodyfile)
        if definition_file is None or definition_file.program_listing is None:
            return None
        start = location.bodystart
        end = location.bodyend if location.bodyend not in (None, -1) else start
        code_lines = [
            line
            for line in definition_file.program_listing.find_all(CodeLine)
            if line.lineno is not None and start <= line.lineno <= end
        ]
        if not code_lines:
            return None
        return MemberListing(tag="programlisting", children=list(code_lines))

    # Rendering

    def _initializer_suffix(self, many: str) -> str:
        if self.initializer_lines is None:
            return ""
        if len(self.initializer_lines) == 1:
            return self.initializer_lines[0]
        return many

    def render_index_to_lines(self) -> list[str]:
        workspace = self.workspace
        permalink = workspace.get_permalink(self.id, "member")
        name = workspace.render_string(self.name, "html")
        item_template = ""
        item_type = ""
        item_name = f'<a href="{permalink}">{name}</a>' if permalink else name

        if self.template_parameters:
            if len(self.template_parameters) < 64:
                item_template = workspace.render_string(
                    f"template {self.template_parameters}", "html"
                )
            else:
                item_template = workspace.render_string("template < ... >", "html")

        definition = self.definition or ""
        if self.kind == "typedef":
            if definition.startswith("typedef"):
                item_type = "typedef"
                item_name = f"{self.type or ''} {item_name}{self.argsstring or ''}"
            elif definition.startswith("using"):
                item_type = "using"
                if self.type is not None:
                    item_name += " = " + self.type
        elif self.kind == "function":
            if self.is_static:
                item_type += "static "
            if self.is_constexpr:
                item_type += "constexpr "
            if self.argsstring is not None:
                item_name += " " + workspace.render_string(self.argsstring, "html")
            if self.is_trailing_type:
                if "auto" not in item_type:
                    item_type += "auto "
                item_name += workspace.render_string(" -> ", "html") + (self.type or "")
            else:
                item_type += self.type or ""
            if self.initializer_lines is not None:
                item_name += " " + self._initializer_suffix("= ...")
        elif self.kind == "variable":
            if self.is_static:
                item_type += "static "
            if self.is_constexpr:
                item_type += "constexpr "
            item_type += self.type or ""
            if definition.startswith("struct "):
                item_type = workspace.render_string("struct { ... }", "html")
            elif definition.startswith("class "):
                item_type = workspace.render_string("class { ... }", "html")
            if self.argsstring is not None:
                item_name += self.argsstring
            if self.initializer_lines is not None:
                item_name += " " + self._initializer_suffix("= ...")
        elif self.kind == "enum":
            item_type = "anonymous enum" if not self.name else "enum"
            if self.is_strong:
                item_type += " class"
            item_name = self.name
            if self.type:
                item_name += f" : {self.type}"
            item_name += workspace.render_string(" { ", "html")
            item_name += f'<a href="{permalink}">...</a>'
            item_name += workspace.render_string(" }", "html")
        elif self.kind == "friend":
            item_type = self.type or "class"
        elif self.kind == "define":
            item_type = "#define"
            if self.parameters_html is not None:
                item_name += f"({self.parameters_html})"
            if self.initializer_lines is not None:
                item_name += "&nbsp;&nbsp;&nbsp;" + self._initializer_suffix("...")
        else:
            logger.error("Member kind %s not supported in the index", self.kind)

        children_lines: list[str] = []
        if self.brief_html:
            children_lines.append(
                self.section.compound.render_brief_description_to_string(
                    self.brief_html, more_permalink=permalink
                )
            )
        lines = [""]
        lines.extend(
            workspace.render_members_index_item_to_lines(
                template=item_template,
                type=item_type,
                name=item_name,
                children_lines=children_lines,
            )
        )
        return lines

    def is_function(self) -> bool:
        kind = self.section.kind
        return kind.startswith("func") or kind.endswith(FUNCTION_SECTION_SUFFIXES)

    def render_to_lines(self) -> list[str]:
        workspace = self.workspace
        compound = self.section.compound
        anchor = get_permalink_anchor(self.id)
        name = self.name + ("()" if self.is_function() else "")

        lines = [""]
        if self.kind != "enum":
            lines.append(f"### {workspace.render_string(name, 'markdown')} {{#{anchor}}}")

        template: str | None = None
        prototype: str | None = None
        children_lines: list[str] = []

        if self.kind in ("function", "typedef", "variable"):
            prototype = workspace.render_string(self.definition or "", "html")
            if self.is_static and prototype.startswith("static "):
                prototype = prototype[len("static ") :]
            if self.kind == "function":
                prototype += f" ({self.parameters_html or ''})"
            if self.initializer_lines is not None and len(self.initializer_lines) == 1:
                prototype += f" {self.initializer_lines[0]}"
            if self.template_parameters:
                template = workspace.render_string(
                    f"template {self.template_parameters}", "html"
                )
            if self.brief_html is not None:
                children_lines.append(
                    compound.render_brief_description_to_string(self.brief_html)
                )
            children_lines.extend(self._render_initializer_block("Initialiser"))
            if self.detailed_lines is not None:
                children_lines.extend(
                    compound.render_detailed_description_to_lines(
                        brief_html=self.brief_html,
                        detailed_lines=self.detailed_lines,
                        show_header=False,
                        show_brief=False,
                    )
                )
        elif self.kind == "enum":
            prototype = "anonymous enum " if not self.name else "enum "
            if self.is_strong:
                prototype += "class "
            if self.name:
                lines.append(f"### {workspace.render_string(name, 'markdown')} {{#{anchor}}}")
            else:
                lines.append(f"### {prototype} {{#{anchor}}}")
            if self.brief_html:
                children_lines.append(
                    compound.render_brief_description_to_string(self.brief_html)
                )
            if self.enum_lines is not None:
                children_lines.extend(self.enum_lines)
            if self.detailed_lines is not None:
                children_lines.extend(
                    compound.render_detailed_description_to_lines(
                        detailed_lines=self.detailed_lines,
                        show_header=False,
                        show_brief=False,
                    )
                )
            if self.name and self.qualified_name is not None:
                prototype += f"{workspace.render_string(self.qualified_name, 'html')} "
            elif self.name:
                prototype += f"{workspace.render_string(self.name, 'html')} "
            if self.type:
                prototype += f": {self.type}"
        elif self.kind == "friend":
            prototype = f"friend {self.type or ''} {self.parameters_html or ''}"
            if self.detailed_lines is not None:
                children_lines.extend(
                    compound.render_detailed_description_to_lines(
                        brief_html=self.brief_html,
                        detailed_lines=self.detailed_lines,
                        show_header=False,
                        show_brief=True,
                    )
                )
        elif self.kind == "define":
            prototype = f"#define {name}"
            if self.parameters_html is not None:
                prototype += f"({self.parameters_html})"
            if self.initializer_lines is not None:
                prototype += "&nbsp;&nbsp;&nbsp;" + self._initializer_suffix("...")
            if self.brief_html is not None:
                children_lines.append(
                    compound.render_brief_description_to_string(self.brief_html)
                )
            children_lines.extend(self._render_initializer_block("Value"))
            children_lines.extend(
                compound.render_detailed_description_to_lines(
                    brief_html=self.brief_html,
                    detailed_lines=self.detailed_lines,
                    show_header=False,
                    show_brief=False,
                )
            )
        else:
            lines.append("")
            logger.error(
                "Member %s of kind %s not supported in %s", self.name, self.kind, compound.id
            )

        if self.location_lines is not None:
            children_lines.extend(self.location_lines)
        if self.program_listing is not None:
            children_lines.extend(
                workspace.render_element_to_lines(self.program_listing, "html")
            )
        if self.references_html is not None:
            children_lines.extend(["", self.references_html])
        if self.referenced_by_html is not None:
            children_lines.extend(["", self.referenced_by_html])

        lines.append("")
        if prototype is not None:
            lines.extend(
                self._render_definition_to_lines(
                    template=template,
                    prototype=prototype,
                    labels=self.labels,
                    children_lines=children_lines,
                )
            )
        return lines

    def _render_initializer_block(self, title: str) -> list[str]:
        """Multi-line initializers go below the prototype."""
        if self.initializer_lines is None or len(self.initializer_lines) <= 1:
            return []
        lines = [
            "",
            '<dl class="doxySectionUser">',
            f"<dt>{title}</dt>",
            "<dd>",
            f'<div class="doxyVerbatim">{self.initializer_lines[0]}',
        ]
        lines.extend(line for line in self.initializer_lines[1:] if line.strip())
        lines.extend(["</div>", "</dd>", "</dl>"])
        return lines

    def _render_definition_to_lines(
        self,
        template: str | None,
        prototype: str,
        labels: list[str],
        children_lines: list[str],
    ) -> list[str]:
        lines = ['<div class="doxyMemberItem">', '<div class="doxyMemberProto">']
        if template:
            lines.append(f'<div class="doxyMemberTemplate">{template}</div>')
        lines.extend(
            [
                '<table class="doxyMemberLabels">',
                '<tr class="doxyMemberLabels">',
                '<td class="doxyMemberLabelsLeft">',
                '<table class="doxyMemberName">',
                "<tr>",
                f'<td class="doxyMemberName">{prototype}</td>',
                "</tr>",
                "</table>",
                "</td>",
            ]
        )
        if labels:
            lines.append('<td class="doxyMemberLabelsRight">')
            lines.append('<span class="doxyMemberLabels">')
            for label in labels:
                lines.append(f'<span class="doxyMemberLabel {label}">{label}</span>')
            lines.append("</span>")
            lines.append("</td>")
        lines.extend(["</tr>", "</table>", "</div>", '<div class="doxyMemberDoc">'])
        # An empty line keeps the first child a separate paragraph.
        lines.append("")
        lines.extend(children_lines)
        lines.extend(["</div>", "</div>"])
        return lines

    def render_enum_to_lines(self) -> list[str]:
        lines = [
            "",
            '<dl class="doxyEnumList">',
            '<dt class="doxyEnumTableTitle">Enumeration values</dt>',
            "<dd>",
            '<table class="doxyEnumTable">',
        ]
        for enum_value in self.enum_values or []:
            anchor = get_permalink_anchor(enum_value.id)
            name = self.workspace.render_string(enum_value.name, "html")
            description = (enum_value.brief_html or "").removesuffix(".")
            if enum_value.initializer_html:
                description += f" ({enum_value.initializer_html})"
            lines.append("")
            lines.append('<tr class="doxyEnumItem">')
            lines.append(
                f'<td class="doxyEnumItemName">{name}<a id="{anchor}"></a></td>'
            )
            if "\n" not in description:
                lines.append(f'<td class="doxyEnumItemDescription">{description}</td>')
            else:
                lines.append('<td class="doxyEnumItemDescription">')
                lines.extend(description.split("\n"))
                lines.append("</td>")
            lines.append("</tr>")
        lines.extend(["", "</table>", "</dd>", "</dl>"])
        return lines


class EnumValue:
    def __init__(self, member: Member, enum_value: EnumValueDef) -> None:
        self.member = member
        self.name = enum_value.name.strip()
        self.id = enum_value.id
        self.brief_html: str | None = None
        self.initializer_html: str | None = None

        workspace = member.workspace
        if enum_value.briefdescription is not None:
            self.brief_html = render_without_para(
                workspace, enum_value.briefdescription.children, "html"
            )
        if enum_value.initializer is not None:
            self.initializer_html = workspace.render_element_to_string(
                enum_value.initializer, "html"
            )
