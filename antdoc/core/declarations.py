"""
Declaration entities: the read-only view of the inspected Java sources.
"""
from typing import Dict, List, Optional, Any
from pydantic import BaseModel, Field


class SourcePosition(BaseModel):
    """Location of a declaration in a source file."""

    path: str
    line: int = 0

    def __str__(self) -> str:
        return f"{self.path}:{self.line}" if self.line else self.path


class CodeResource(BaseModel):
    """Base class for all documented declarations."""

    name: str
    qualified_name: str
    documentation: str = ""
    tags: Dict[str, List[str]] = Field(default_factory=dict)
    position: Optional[SourcePosition] = None

    def __str__(self) -> str:
        return self.qualified_name

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.qualified_name))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, CodeResource) or other.__class__ is not self.__class__:
            return False
        return self.qualified_name == other.qualified_name

    @property
    def has_documentation(self) -> bool:
        return bool(self.documentation.strip())

    def tag_values(self, tag_name: str) -> List[str]:
        """
        Get the values of a block tag.

        Args:
            tag_name: Tag name including the leading "@", e.g. "@ant.group"

        Returns:
            The tag values in declaration order (empty if absent)
        """
        return list(self.tags.get(tag_name, []))


class Parameter(BaseModel):
    """A formal parameter of a Member."""

    name: str
    type: str
    position: int


class Member(CodeResource):
    """A method (or constructor) declared on a Declaration."""

    qualified_name: str = ""
    owner: str = ""
    parameters: List[Parameter] = Field(default_factory=list)
    return_type: Optional[str] = None
    access_modifier: str = "default"
    is_static: bool = False
    is_abstract: bool = False
    is_constructor: bool = False

    @property
    def parameter_types(self) -> List[str]:
        return [p.type for p in self.parameters]

    @property
    def signature(self) -> str:
        return f"{self.name}({', '.join(self.parameter_types)})"

    @property
    def is_public(self) -> bool:
        return self.access_modifier == "public"

    def refresh_qualified_name(self) -> None:
        """Recompute the identity after parameter types were resolved."""
        self.qualified_name = f"{self.owner}.{self.signature}"


class Declaration(CodeResource):
    """A class, interface or enum."""

    kind: str = "class"  # class, interface, enum
    package: str = ""
    superclass: Optional[str] = None
    interfaces: List[str] = Field(default_factory=list)
    members: List[Member] = Field(default_factory=list)
    constructors: List[Member] = Field(default_factory=list)
    enum_constants: List[str] = Field(default_factory=list)
    access_modifier: str = "public"
    is_abstract: bool = False
    is_stub: bool = False
    imports: List[str] = Field(default_factory=list)
    import_packages: List[str] = Field(default_factory=list)
    nested: List[str] = Field(default_factory=list)

    @property
    def is_interface(self) -> bool:
        return self.kind == "interface"

    @property
    def is_enum(self) -> bool:
        return self.kind == "enum"

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]
