"""
Introspection and cross reference resolution: derives the ANT documentation
model from the declaration store and the ANTLIB registration records.
"""

from .members import MemberClassifier, ClassifiedMembers, classify_member, method_label
from .type_groups import TypeGroupClassifier, builtin_registry
from .builder import ModelBuilder
from .external import ExternalAntdocs, parse_properties
from .links import LinkResolver
from .values import ValueDomain, describe_value

__all__ = [
    "MemberClassifier",
    "ClassifiedMembers",
    "classify_member",
    "method_label",
    "TypeGroupClassifier",
    "builtin_registry",
    "ModelBuilder",
    "ExternalAntdocs",
    "parse_properties",
    "LinkResolver",
    "ValueDomain",
    "describe_value"
]
