"""
Value domains of attributes: what may appear on the right-hand side of
'name="..."'.

See http://ant.apache.org/manual/develop.html#set-magic
"""
import re
from typing import List, Optional

from pydantic import BaseModel, Field

from antdoc.core import AntAttribute, DeclarationStore, Diagnostics
from antdoc.core.notations import to_lower_case_hyphenated

DEFAULT_VALUE_TAG = "@ant.defaultValue"
VALUE_EXPLANATION_TAG = "@ant.valueExplanation"
MANDATORY_TAG = "@ant.mandatory"

ENUMERATED_ATTRIBUTE = "org.apache.tools.ant.types.EnumeratedAttribute"
UNKNOWN = "???"

_INLINE_CODE = re.compile(r"\{@(?:code|literal)\s+([^}]*)\}")

BOOLEAN_TYPES = {"boolean", "java.lang.Boolean"}
NUMERIC_TYPES = {
    "byte", "char", "short", "int", "long", "float", "double",
    "java.lang.Byte", "java.lang.Short", "java.lang.Integer", "java.lang.Long",
    "java.lang.Float", "java.lang.Double",
}
NAMED_BY_PARAMETER_TYPES = {"java.io.File", "java.lang.String"}
NAMED_BY_TYPE_TYPES = {
    "org.apache.tools.ant.types.Resource",
    "org.apache.tools.ant.types.Path",
    "java.lang.Class",
    "java.lang.Object",
}


class ValueDomain(BaseModel):
    """
    The values an attribute accepts.

    Exactly one of ``explanation``, ``choices`` and ``placeholder`` is set,
    unless the values are unknown (``unknown``, rendered as "???").
    """

    explanation: Optional[str] = None
    choices: List[str] = Field(default_factory=list)
    placeholder: Optional[str] = None
    default: Optional[str] = None
    mandatory: bool = False
    unknown: bool = False

    def __str__(self) -> str:
        if self.unknown:
            text = UNKNOWN
        elif self.explanation is not None:
            text = self.explanation
        elif self.choices:
            return "|".join(f"[{c}]" if c == self.default else c for c in self.choices)
        else:
            text = self.placeholder
        return f"{text}|[{self.default}]" if self.default is not None else text


def describe_value(attribute: AntAttribute, store: DeclarationStore,
                   diagnostics: Optional[Diagnostics] = None) -> ValueDomain:
    """
    Compute the value domain of an attribute.

    Args:
        attribute: The attribute
        store: Used to look up enums and EnumeratedAttribute subclasses
        diagnostics: Receives inconsistencies of the documentation tags

    Returns:
        The value domain
    """
    diagnostics = diagnostics if diagnostics is not None else Diagnostics()
    member = attribute.member

    defaults = member.tag_values(DEFAULT_VALUE_TAG)
    if len(defaults) > 1:
        diagnostics.warning(f"At most one '{DEFAULT_VALUE_TAG}' tag allowed", member.position)
    default = defaults[0] if defaults else None
    if default is not None:
        default = _INLINE_CODE.sub(r"\1", default)

    mandatory = MANDATORY_TAG in member.tags
    if mandatory and default is not None:
        diagnostics.warning(
            f"'{MANDATORY_TAG}' together with '{DEFAULT_VALUE_TAG}' does not make much sense", member.position
        )

    domain = ValueDomain(default=default, mandatory=mandatory)
    type_name = attribute.type
    simple_type_name = type_name.rsplit(".", 1)[-1]
    parameter_name = member.parameters[0].name if member.parameters else attribute.name

    explanations = member.tag_values(VALUE_EXPLANATION_TAG)
    if explanations:
        domain.explanation = explanations[0]
        return domain

    if type_name in BOOLEAN_TYPES:
        domain.choices = ["true", "false"]
        if default is None:
            domain.default = "false"
        elif default not in domain.choices:
            diagnostics.warning(f'Invalid default value "{default}" for boolean attribute', member.position)
            domain.default = None
        return domain

    if type_name in NUMERIC_TYPES or type_name in NAMED_BY_PARAMETER_TYPES:
        domain.placeholder = to_lower_case_hyphenated(parameter_name)
        return domain

    if type_name in NAMED_BY_TYPE_TYPES:
        domain.placeholder = to_lower_case_hyphenated(simple_type_name)
        return domain

    declaration = store.find_declaration(type_name)
    if declaration is not None and declaration.is_enum:
        domain.choices = list(declaration.enum_constants)
        if default is not None and default not in domain.choices:
            diagnostics.warning(
                f'Default value "{default}" matches none of the enum constants', member.position
            )
            domain.default = None
        return domain

    if declaration is not None and not declaration.is_stub and store.is_subtype_of(declaration, ENUMERATED_ATTRIBUTE):
        diagnostics.error(
            f'Values of enumerated attribute type "{type_name}" cannot be determined from the sources; '
            f'document them with "{VALUE_EXPLANATION_TAG}"',
            member.position,
        )
        domain.unknown = True
        return domain

    domain.placeholder = to_lower_case_hyphenated(simple_type_name)
    return domain
