"""Data models for the compound-level parts of the Doxygen XML."""

from __future__ import annotations

from dataclasses import dataclass, field

from doxygen2docusaurus.elements import (
    Description,
    Inc,
    LinkedText,
    Listing,
    Param,
    Reference,
    ReferencedBy,
)


@dataclass
class CompoundRef:
    """A base or derived class reference."""

    name: str
    refid: str | None = None
    prot: str = "public"
    virt: str = "non-virtual"


@dataclass
class InnerRef:
    """innerclass, innernamespace, innerdir, innerfile, innergroup, innerpage."""

    name: str
    refid: str
    prot: str | None = None


@dataclass
class Location:
    file: str
    line: int | None = None
    column: int | None = None
    declfile: str | None = None
    declline: int | None = None
    bodyfile: str | None = None
    bodystart: int | None = None
    bodyend: int | None = None


@dataclass
class EnumValueDef:
    id: str
    name: str
    prot: str = "public"
    initializer: LinkedText | None = None
    briefdescription: Description | None = None
    detaileddescription: Description | None = None


@dataclass
class MemberDef:
    """A memberdef: one function, variable, typedef, enum, define or friend."""

    kind: str
    id: str
    name: str
    prot: str = "public"
    static: bool = False
    attributes: dict[str, str] = field(default_factory=dict)
    templateparamlist: list[Param] | None = None
    type: LinkedText | None = None
    definition: str | None = None
    argsstring: str | None = None
    qualifiedname: str | None = None
    params: list[Param] = field(default_factory=list)
    enumvalues: list[EnumValueDef] = field(default_factory=list)
    initializer: LinkedText | None = None
    briefdescription: Description | None = None
    detaileddescription: Description | None = None
    inbodydescription: Description | None = None
    location: Location | None = None
    references: list[Reference] = field(default_factory=list)
    referencedby: list[ReferencedBy] = field(default_factory=list)

    def flag(self, name: str) -> bool:
        """Return True for a ``yes`` valued attribute."""
        return self.attributes.get(name) == "yes"


@dataclass
class MemberRefDef:
    """A member listed in a section by id, defined elsewhere."""

    refid: str
    kind: str
    name: str


@dataclass
class SectionDef:
    kind: str
    header: str | None = None
    description: Description | None = None
    items: list[MemberDef | MemberRefDef] = field(default_factory=list)


@dataclass
class CompoundDef:
    """One compounddef element, the unit Doxygen writes per XML file."""

    id: str
    kind: str
    compoundname: str
    language: str | None = None
    prot: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    title: str | None = None
    basecompoundrefs: list[CompoundRef] = field(default_factory=list)
    derivedcompoundrefs: list[CompoundRef] = field(default_factory=list)
    includes: list[Inc] = field(default_factory=list)
    includedby: list[Inc] = field(default_factory=list)
    inner: dict[str, list[InnerRef]] = field(default_factory=dict)
    templateparamlist: list[Param] | None = None
    sectiondefs: list[SectionDef] = field(default_factory=list)
    briefdescription: Description | None = None
    detaileddescription: Description | None = None
    location: Location | None = None
    programlisting: Listing | None = None

    def inner_refs(self, tag: str) -> list[InnerRef]:
        return self.inner.get(tag, [])


@dataclass
class DoxygenData:
    """Everything read from one Doxygen XML output folder."""

    compound_defs: list[CompoundDef]
    doxygen_version: str = ""
    project_name: str = ""
    project_brief: str = ""
    images: list[str] = field(default_factory=list)
