"""
Derivation of ANT attributes and subelements from method naming conventions.

See http://ant.apache.org/manual/develop.html
"""
import re
from typing import Callable, List, NamedTuple, Optional, Tuple
import logging

from pydantic import BaseModel, Field

from antdoc.core import (
    AntAttribute,
    AntSubelement,
    Declaration,
    DeclarationStore,
    Diagnostics,
    Member,
    MemberDocumentationError
)
from antdoc.core.notations import to_lower_camel_case

ADD_TEXT_METHOD_NAME = re.compile(r"addText")
SET_ATTRIBUTE_METHOD_NAME = re.compile(r"set(?P<attribute_name>[A-Z]\w*)")
ADD_METHOD_NAME = re.compile(r"add(?:Configured)?")
ADD_SUBELEMENT_METHOD_NAME = re.compile(r"add(?:Configured)?(?P<subelement_name>[A-Z]\w*)")
CREATE_SUBELEMENT_METHOD_NAME = re.compile(r"create(?P<subelement_name>[A-Z]\w*)")

IGNORED_SETTERS = {"setProject"}

CHARACTER_DATA = "character_data"
ATTRIBUTE = "attribute"
SUBELEMENT = "subelement"

GROUP_TAG = "@ant.group"
SUBELEMENT_ORDER_TAG = "@ant.subelementOrder"


class Classification(NamedTuple):
    """The role a single method plays for ANT."""

    role: str
    name: Optional[str]
    type: str


def _character_data(member: Member) -> Optional[Classification]:
    if (
        ADD_TEXT_METHOD_NAME.fullmatch(member.name)
        and member.parameter_types == ["java.lang.String"]
    ):
        return Classification(CHARACTER_DATA, None, "java.lang.String")
    return None


def _attribute_setter(member: Member) -> Optional[Classification]:
    m = SET_ATTRIBUTE_METHOD_NAME.fullmatch(member.name)
    if m and len(member.parameters) == 1 and member.name not in IGNORED_SETTERS:
        return Classification(ATTRIBUTE, to_lower_camel_case(m.group("attribute_name")), member.parameters[0].type)
    return None


def _create_subelement(member: Member) -> Optional[Classification]:
    if (
        CREATE_SUBELEMENT_METHOD_NAME.fullmatch(member.name)
        and not member.parameters
        and member.return_type not in (None, "void")
    ):
        return Classification(SUBELEMENT, None, member.return_type)
    return None


def _add_named_subelement(member: Member) -> Optional[Classification]:
    m = ADD_SUBELEMENT_METHOD_NAME.fullmatch(member.name)
    if (
        m and len(member.parameters) == 1
        and not ADD_TEXT_METHOD_NAME.fullmatch(member.name)
        and not ADD_METHOD_NAME.fullmatch(member.name)
    ):
        return Classification(SUBELEMENT, to_lower_camel_case(m.group("subelement_name")), member.parameters[0].type)
    return None


def _add_typed_subelement(member: Member) -> Optional[Classification]:
    if ADD_METHOD_NAME.fullmatch(member.name) and len(member.parameters) == 1:
        return Classification(SUBELEMENT, None, member.parameters[0].type)
    return None


# Tested in this order; the first match wins.
RULES: Tuple[Tuple[str, Callable[[Member], Optional[Classification]]], ...] = (
    ("character data", _character_data),
    ("attribute setter", _attribute_setter),
    ("subelement creator", _create_subelement),
    ("named subelement adder", _add_named_subelement),
    ("typed subelement adder", _add_typed_subelement),
)


def classify_member(member: Member) -> Optional[Classification]:
    """
    Determine the role of a single method.

    Args:
        member: The method

    Returns:
        The classification of the first matching rule, or None
    """
    for _, rule in RULES:
        classification = rule(member)
        if classification is not None:
            return classification
    return None


def method_label(member: Member) -> str:
    """
    The label of a setter, adder or creator as it appears in a build file,
    e.g. 'destFile="..."' for "setDestFile(File)" and "<fileSet>" for
    "addConfiguredFileSet(FileSet)"; otherwise the bare method name.
    """
    m = SET_ATTRIBUTE_METHOD_NAME.fullmatch(member.name)
    if m:
        return f'{to_lower_camel_case(m.group("attribute_name"))}="..."'
    if ADD_METHOD_NAME.fullmatch(member.name):
        return member.name
    m = ADD_SUBELEMENT_METHOD_NAME.fullmatch(member.name) or CREATE_SUBELEMENT_METHOD_NAME.fullmatch(member.name)
    if m:
        return f"<{to_lower_camel_case(m.group('subelement_name'))}>"
    return member.name


class ClassifiedMembers(BaseModel):
    """The attributes, subelements and character data method of one declaration."""

    attributes: List[AntAttribute] = Field(default_factory=list)
    subelements: List[AntSubelement] = Field(default_factory=list)
    character_data: Optional[Member] = None


class MemberClassifier:
    """
    Turns the public methods of a declaration into attributes and subelements.

    Methods are visited most-derived first. When a method collides with an
    already accepted entry of the same (name, type), the accepted entry is only
    replaced if the new method is documented and the accepted one is not.
    """

    def __init__(self, store: DeclarationStore, diagnostics: Optional[Diagnostics] = None):
        self.store = store
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.logger = logging.getLogger(__name__)

    def classify(self, declaration: Declaration) -> ClassifiedMembers:
        """
        Classify all public methods of a declaration, including the inherited ones.

        Args:
            declaration: The implementing declaration of an ANT type

        Returns:
            The attributes, subelements and character data method
        """
        result = ClassifiedMembers()

        for member in self.store.members(declaration, include_inherited=True):
            classification = classify_member(member)
            if classification is None:
                continue

            if classification.role == CHARACTER_DATA:
                if result.character_data is None:
                    result.character_data = member
                continue

            try:
                group = self._group_of(member)
            except MemberDocumentationError as e:
                self.diagnostics.warning(f"{member}: {e}", member.position)
                group = None

            if classification.role == ATTRIBUTE:
                self._merge(result.attributes, AntAttribute(
                    name=classification.name,
                    member=member,
                    type=classification.type,
                    group=group,
                ))
            else:
                self._merge(result.subelements, AntSubelement(
                    member=member,
                    name=classification.name,
                    type=classification.type,
                    group=group,
                ))

        result.subelements = self._apply_subelement_order(declaration, result.subelements)
        self.logger.debug(
            f"{declaration}: {len(result.attributes)} attributes, {len(result.subelements)} subelements"
        )
        return result

    @staticmethod
    def _merge(entries: List, candidate) -> None:
        for i, accepted in enumerate(entries):
            if accepted.name == candidate.name and accepted.type == candidate.type:
                if candidate.member.has_documentation and not accepted.member.has_documentation:
                    entries[i] = candidate
                return
        entries.append(candidate)

    def _group_of(self, member: Member) -> Optional[str]:
        values = member.tag_values(GROUP_TAG)
        if not values:
            return None
        if len(values) > 1:
            self.diagnostics.warning(f"At most one '{GROUP_TAG}' tag allowed", member.position)
        if not values[0]:
            raise MemberDocumentationError(f"'{GROUP_TAG}' tag lacks the group name")
        return values[0]

    def _apply_subelement_order(self, declaration: Declaration,
                                subelements: List[AntSubelement]) -> List[AntSubelement]:
        values = declaration.tag_values(SUBELEMENT_ORDER_TAG)
        if not values:
            return subelements

        own = [se for se in subelements if se.member.owner == declaration.qualified_name]
        inherited = [se for se in subelements if se.member.owner != declaration.qualified_name]
        if values[0] == "declaredFirst":
            return own + inherited
        if values[0] == "inheritedFirst":
            return inherited + own

        self.diagnostics.warning(
            f"Invalid '{SUBELEMENT_ORDER_TAG}' value \"{values[0]}\"; "
            f"expected \"declaredFirst\" or \"inheritedFirst\"",
            declaration.position,
        )
        return subelements
