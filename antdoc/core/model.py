"""
The documentation model: ANT types, their attributes and subelements, and type groups.
"""
from typing import Dict, Iterator, List, Optional, Tuple
from collections import OrderedDict
from pydantic import BaseModel, Field

from .declarations import Declaration, Member


class Link(BaseModel):
    """
    A resolved cross reference.

    ``href`` is relative to the page that contains the reference; ``None`` means
    that the reference renders as a plain label. ``code`` asks the renderer to
    typeset the label as code.
    """

    href: Optional[str] = None
    label: str
    code: bool = False

    def __str__(self) -> str:
        return f"{self.label} -> {self.href}" if self.href else self.label


class AntAttribute(BaseModel):
    """An attribute of an ANT type, derived from a "setXxx(T)" method."""

    name: str
    member: Member
    type: str
    group: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name}={self.type}"


class AntSubelement(BaseModel):
    """
    A subelement of an ANT type ("parameters specified as nested elements").

    ``name`` is None for a typed subelement ("add(Condition)",
    "createCondition()"), and the tag name for a named subelement
    ("addConfiguredFileSet(FileSet)").
    """

    member: Member
    name: Optional[str] = None
    type: str
    group: Optional[str] = None

    @property
    def is_named(self) -> bool:
        return self.name is not None

    @property
    def fragment(self) -> str:
        return f"{self.name if self.name is not None else self.type}_subelement_detail"


class AntType(BaseModel):
    """
    An "ANT type" (a task is a special case) registered in an ANTLIB.

    Created once by the model builder and never modified afterwards.
    """

    name: str
    declaration: Declaration
    adapt_to: Optional[Declaration] = None
    character_data: Optional[Member] = None
    attributes: List[AntAttribute] = Field(default_factory=list)
    subelements: List[AntSubelement] = Field(default_factory=list)
    kind: str = "typedef"

    def __str__(self) -> str:
        return f"<{self.name} {[str(a) for a in self.attributes]}>"


class AntTypeGroup(BaseModel):
    """A group of ANT types, e.g. "tasks" or "chainable readers"."""

    subdir: str
    name: str
    heading: str
    type_title_mf: str
    type_heading_mf: str
    types: List[AntType] = Field(default_factory=list)

    def __str__(self) -> str:
        return self.subdir

    def type_title(self, type_name: str) -> str:
        """E.g. 'Task "<echo>"'."""
        return self.type_title_mf.replace("{0}", type_name)

    def type_heading(self, type_name: str) -> str:
        """E.g. '<echo>'."""
        return self.type_heading_mf.replace("{0}", type_name)


class TypeGroupRegistry:
    """
    Ordered mapping from the qualified name of a group's root declaration to the group.

    The key ``None`` holds the catch-all group. Groups are only ever added.
    """

    def __init__(self):
        self._groups: "OrderedDict[Optional[str], AntTypeGroup]" = OrderedDict()

    def get(self, key: Optional[str]) -> Optional[AntTypeGroup]:
        return self._groups.get(key)

    def register(self, key: Optional[str], group: AntTypeGroup) -> AntTypeGroup:
        """Register a group unless one exists for the key; returns the registered group."""
        return self._groups.setdefault(key, group)

    def __contains__(self, key: Optional[str]) -> bool:
        return key in self._groups

    def __iter__(self) -> Iterator[AntTypeGroup]:
        return iter(list(self._groups.values()))

    def __len__(self) -> int:
        return len(self._groups)

    def items(self) -> List[Tuple[Optional[str], AntTypeGroup]]:
        return list(self._groups.items())

    @property
    def other(self) -> AntTypeGroup:
        return self._groups[None]

    def find_by_subdir(self, subdir: str) -> Optional[AntTypeGroup]:
        return next((g for g in self._groups.values() if g.subdir == subdir), None)

    def groups_of(self, ant_type: AntType) -> List[AntTypeGroup]:
        """All groups that contain the given ANT type."""
        return [g for g in self._groups.values() if any(t is ant_type for t in g.types)]

    def all_types(self) -> Iterator[Tuple[AntTypeGroup, AntType]]:
        for group in list(self._groups.values()):
            for ant_type in group.types:
                yield group, ant_type

    def get_statistics(self) -> Dict[str, int]:
        return {group.subdir: len(group.types) for group in self._groups.values()}
