"""Member sections: the kind-grouped buckets of a compound's members."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from doxygen2docusaurus.members import Member, MemberRef
from doxygen2docusaurus.models import MemberDef, MemberRefDef, SectionDef

if TYPE_CHECKING:
    from doxygen2docusaurus.compound_base import CompoundBase

logger = logging.getLogger(__name__)

# kind: (header, sort order)
SECTION_HEADERS: dict[str, tuple[str, int]] = {
    "typedef": ("Typedefs", 100),
    "public-type": ("Public Member Typedefs", 110),
    "protected-type": ("Protected Member Typedefs", 120),
    "private-type": ("Private Member Typedefs", 130),
    "package-type": ("Package Member Typedefs", 140),
    "enum": ("Enumerations", 150),
    "friend": ("Friends", 160),
    "interface": ("Interfaces", 170),
    "constructorr": ("Constructors", 200),
    "public-constructorr": ("Public Constructors", 200),
    "protected-constructorr": ("Protected Constructors", 210),
    "private-constructorr": ("Private Constructors", 220),
    "public-destructor": ("Public Destructor", 230),
    "protected-destructor": ("Protected Destructor", 240),
    "private-destructor": ("Private Destructor", 250),
    "operator": ("Operators", 300),
    "public-operator": ("Public Operators", 310),
    "protected-operator": ("Protected Operators", 320),
    "private-operator": ("Private Operators", 330),
    "package-operator": ("Package Operators", 340),
    "func": ("Functions", 350),
    "function": ("Functions", 350),
    "public-func": ("Public Member Functions", 360),
    "protected-func": ("Protected Member Functions", 370),
    "private-func": ("Private Member Functions", 380),
    "package-func": ("Package Member Functions", 390),
    "var": ("Variables", 400),
    "variable": ("Variables", 400),
    "public-attrib": ("Public Member Attributes", 410),
    "protected-attrib": ("Protected Member Attributes", 420),
    "private-attrib": ("Private Member Attributes", 430),
    "package-attrib": ("Package Member Attributes", 440),
    "public-static-operator": ("Public Operators", 450),
    "protected-static-operator": ("Protected Operators", 460),
    "private-static-operator": ("Private Operators", 470),
    "package-static-operator": ("Package Operators", 480),
    "public-static-func": ("Public Static Functions", 500),
    "protected-static-func": ("Protected Static Functions", 510),
    "private-static-func": ("Private Static Functions", 520),
    "package-static-func": ("Package Static Functions", 530),
    "public-static-attrib": ("Public Static Attributes", 600),
    "protected-static-attrib": ("Protected Static Attributes", 610),
    "private-static-attrib": ("Private Static Attributes", 620),
    "package-static-attrib": ("Package Static Attributes", 630),
    "slot": ("Slots", 700),
    "public-slot": ("Public Slots", 700),
    "protected-slot": ("Protected Slot", 710),
    "private-slot": ("Private Slot", 720),
    "related": ("Related", 800),
    "define": ("Macro Definitions", 810),
    "prototype": ("Prototypes", 820),
    "signal": ("Signals", 830),
    "dcop": ("DCOP Functions", 840),
    "property": ("Properties", 850),
    "event": ("Events", 860),
    "service": ("Services", 870),
}

USER_DEFINED_ORDER = 1000
UNKNOWN_ORDER = 999

OPERATOR_FOLLOWERS = ' =!<>+-*/%&|^~,"(['


def is_operator(name: str) -> bool:
    return len(name) > 8 and name.startswith("operator") and name[8] in OPERATOR_FOLLOWERS


def adjusted_kind(section_kind: str, section_suffix: str, member_suffix: str | None = None) -> str:
    """Replace the last word of a visibility section kind with a new suffix.

    ``public-func`` becomes ``public-constructorr`` or ``public-operator``;
    kinds without a visibility prefix use the member suffix.
    """
    if member_suffix is None:
        member_suffix = section_suffix
    if section_kind == "user-defined" or "-" not in section_kind:
        return member_suffix
    return re.sub(r"-[a-z]+$", "-", section_kind) + section_suffix


def member_section_kind(
    section_kind: str, item: MemberDef | MemberRefDef, class_name: str | None
) -> str:
    """The section a member belongs to once constructors, operators and so on are split out."""
    kind = item.kind
    if kind == "function":
        if is_operator(item.name):
            return adjusted_kind(section_kind, "operator")
        if class_name is not None:
            if item.name == class_name:
                return adjusted_kind(section_kind, "constructorr")
            if item.name.replace("~", "", 1) == class_name:
                return adjusted_kind(section_kind, "destructor")
        return adjusted_kind(section_kind, "func", "function")
    if kind == "variable":
        return adjusted_kind(section_kind, "attrib", "variable")
    if kind == "typedef":
        return adjusted_kind(section_kind, "type", "typedef")
    if kind == "slot":
        return adjusted_kind(section_kind, "slot")
    return kind


def regroup_section_defs(
    section_defs: list[SectionDef], class_name: str | None = None
) -> list[SectionDef]:
    """Keep titled user sections; move every other member to a section by adjusted kind."""
    result: list[SectionDef] = []
    by_kind: dict[str, SectionDef] = {}
    for section_def in section_defs:
        if section_def.kind == "user-defined" and section_def.header is not None:
            result.append(section_def)
            continue
        for item in section_def.items:
            kind = member_section_kind(section_def.kind, item, class_name)
            if kind not in by_kind:
                by_kind[kind] = SectionDef(kind=kind)
            by_kind[kind].items.append(item)
    result.extend(by_kind.values())
    return result


class Section:
    """One group of members with a header, an index table and member details."""

    def __init__(self, compound: CompoundBase, section_def: SectionDef) -> None:
        self.compound = compound
        self.kind = section_def.kind
        self.header_name = self._header_name(section_def)
        self.description_lines: list[str] | None = None
        self._section_def: SectionDef | None = section_def

        self.index_members: list[Member | MemberRef] = []
        for item in section_def.items:
            if isinstance(item, MemberDef):
                self.index_members.append(Member(self, item))
            else:
                self.index_members.append(MemberRef(self, item))

        self.definition_members: list[Member] = sorted(
            (m for m in self.index_members if isinstance(m, Member)),
            key=lambda m: m.name,
        )

    @property
    def workspace(self):
        return self.compound.workspace

    def _header_name(self, section_def: SectionDef) -> str:
        if section_def.kind == "user-defined":
            if section_def.header:
                return section_def.header.strip()
            return "User Defined"
        header = SECTION_HEADERS.get(section_def.kind)
        if header is None:
            logger.error(
                "Section kind %s not supported in %s", section_def.kind, self.compound.id
            )
            return section_def.kind
        return header[0]

    @property
    def order(self) -> int:
        if self.kind == "user-defined":
            return USER_DEFINED_ORDER
        header = SECTION_HEADERS.get(self.kind)
        return header[1] if header else UNKNOWN_ORDER

    def has_definition_members(self) -> bool:
        return len(self.definition_members) > 0

    def initialize_late(self) -> None:
        if self._section_def is not None and self._section_def.description is not None:
            self.description_lines = self.workspace.render_element_to_lines(
                self._section_def.description, "html"
            )
        self._section_def = None

    def render_index_to_lines(self) -> list[str]:
        lines: list[str] = []
        if not self.index_members:
            return lines
        lines.extend(["", f"## {self.header_name} Index", "", '<table class="doxyMembersIndex">'])
        for member in self.index_members:
            if isinstance(member, Member):
                lines.extend(member.render_index_to_lines())
                continue
            referred = self.workspace.members_by_id.get(member.refid)
            if referred is None:
                logger.warning(
                    "Member %s listed in %s not found", member.refid, self.compound.id
                )
                continue
            lines.extend(referred.render_index_to_lines())
        lines.extend(["", "</table>"])
        return lines

    def render_to_lines(self) -> list[str]:
        lines: list[str] = []
        if not self.has_definition_members():
            return lines
        lines.extend(["", '<div class="doxySectionDef">', "", f"## {self.header_name}"])
        if self.description_lines is not None:
            lines.append("")
            lines.extend(
                self.compound.render_detailed_description_to_lines(
                    detailed_lines=self.description_lines, show_header=False
                )
            )
        for member in self.definition_members:
            lines.extend(member.render_to_lines())
        lines.extend(["", "</div>"])
        return lines
