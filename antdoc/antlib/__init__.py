"""
ANTLIB registration file parsing.
"""

from .registration import (
    RegistrationRecord,
    AntlibDocument,
    AntlibParser,
    ResourceLocator,
    DEFINITION,
    NESTED_FILE,
    NESTED_RESOURCE
)

__all__ = [
    "RegistrationRecord",
    "AntlibDocument",
    "AntlibParser",
    "ResourceLocator",
    "DEFINITION",
    "NESTED_FILE",
    "NESTED_RESOURCE"
]
