"""
Core module for antdoc declarations, the declaration store and the documentation model.
"""

from .declarations import (
    SourcePosition,
    CodeResource,
    Parameter,
    Member,
    Declaration
)
from .store import DeclarationStore
from .model import (
    Link,
    AntAttribute,
    AntSubelement,
    AntType,
    AntTypeGroup,
    TypeGroupRegistry
)
from .diagnostics import Diagnostic, Diagnostics
from .exceptions import (
    AntdocError,
    AntlibError,
    RecordError,
    TypeGroupConfigurationError,
    MemberDocumentationError,
    LinkResolutionError
)

__all__ = [
    "SourcePosition",
    "CodeResource",
    "Parameter",
    "Member",
    "Declaration",
    "DeclarationStore",
    "Link",
    "AntAttribute",
    "AntSubelement",
    "AntType",
    "AntTypeGroup",
    "TypeGroupRegistry",
    "Diagnostic",
    "Diagnostics",
    "AntdocError",
    "AntlibError",
    "RecordError",
    "TypeGroupConfigurationError",
    "MemberDocumentationError",
    "LinkResolutionError"
]
