"""
Java-specific parser for extracting declarations and their doc comments.
"""
import re
from typing import Dict, List, Optional, Tuple

import tree_sitter_java
from tree_sitter import Language, Parser, Tree, Node

from antdoc.core import (
    DeclarationStore,
    Declaration,
    Member,
    Parameter,
    SourcePosition
)
from .base_parser import BaseParser
from .javadoc import split_doc_comment

TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "class",
}

COMMENT_NODES = {"block_comment", "comment"}

_IMPORT = re.compile(r"^import\s+(static\s+)?([\w.$]+?)(\s*\.\s*\*)?\s*;")


class JavaParser(BaseParser):
    """
    Parser for Java source code.
    """

    def __init__(self):
        """Initialize the Java parser."""
        super().__init__("java", "1.8+")

        # Compilation unit context for qualified name generation
        self.current_package = ""
        self.current_imports: List[str] = []
        self.current_import_packages: List[str] = []

    def initialize_parser(self) -> None:
        """Initialize the tree-sitter parser with the Java grammar."""
        try:
            self.language = Language(tree_sitter_java.language())
            self.parser = Parser(self.language)
            self.logger.info("Java parser initialized")
        except Exception as e:
            self.logger.error(f"Failed to initialize Java parser: {e}")
            raise

    def process_file(self, file_path: str, source_code: bytes, tree: Tree, store: DeclarationStore) -> None:
        """
        Process a Java file and add its type declarations to the store.

        Args:
            file_path: Path to the Java file
            source_code: Raw source code bytes
            tree: Parsed tree-sitter tree
            store: Declaration store to populate
        """
        self.current_package = ""
        self.current_imports = []
        self.current_import_packages = []

        root = tree.root_node
        self._extract_package(root, source_code)
        self._extract_imports(root, source_code)

        count = 0
        for child in root.named_children:
            if child.type in TYPE_DECLARATIONS:
                count += self._process_type_declaration(child, source_code, store, file_path, None)
        self.logger.debug(f"Extracted {count} declarations from {file_path}")

    def _extract_package(self, root_node: Node, source_code: bytes) -> None:
        """Extract the package declaration of the compilation unit."""
        for child in root_node.named_children:
            if child.type != "package_declaration":
                continue
            for name_node in child.named_children:
                if name_node.type in ("scoped_identifier", "identifier"):
                    self.current_package = re.sub(r"\s+", "", self._get_node_text(name_node, source_code))
            return

    def _extract_imports(self, root_node: Node, source_code: bytes) -> None:
        """Extract single-type and on-demand imports; static imports are ignored."""
        for child in root_node.named_children:
            if child.type != "import_declaration":
                continue
            text = re.sub(r"\s+", " ", self._get_node_text(child, source_code)).strip()
            m = _IMPORT.match(text)
            if not m or m.group(1):
                continue
            if m.group(3):
                self.current_import_packages.append(m.group(2))
            else:
                self.current_imports.append(m.group(2))

    def _process_type_declaration(self, node: Node, source_code: bytes, store: DeclarationStore,
                                  file_path: str, enclosing: Optional[str]) -> int:
        """Process a class, interface, or enum declaration (and its nested declarations)."""
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return 0
        name = self._get_node_text(name_node, source_code)

        if enclosing:
            qualified_name = f"{enclosing}.{name}"
        elif self.current_package:
            qualified_name = f"{self.current_package}.{name}"
        else:
            qualified_name = name

        kind = TYPE_DECLARATIONS[node.type]
        modifiers = self._get_modifiers(node)
        documentation, tags = self._get_doc_comment(node, source_code)

        declaration = Declaration(
            name=name,
            qualified_name=qualified_name,
            kind=kind,
            package=self.current_package,
            documentation=documentation,
            tags=tags,
            position=self._position(node, file_path),
            access_modifier=self._access_modifier(modifiers),
            is_abstract="abstract" in modifiers or kind == "interface",
            imports=list(self.current_imports),
            import_packages=list(self.current_import_packages),
        )

        superclass_node = node.child_by_field_name("superclass")
        if superclass_node is not None and superclass_node.named_children:
            declaration.superclass = self._type_name(superclass_node.named_children[-1], source_code)

        for child in node.named_children:
            if child.type in ("super_interfaces", "extends_interfaces"):
                declaration.interfaces.extend(self._type_list(child, source_code))

        count = 1
        body = node.child_by_field_name("body")
        if body is not None:
            count += self._process_body(body, source_code, store, file_path, declaration)

        store.add_declaration(declaration)
        return count

    def _process_body(self, body: Node, source_code: bytes, store: DeclarationStore,
                      file_path: str, declaration: Declaration) -> int:
        """Process the members of a class, interface or enum body."""
        count = 0
        for child in body.named_children:
            if child.type == "method_declaration":
                declaration.members.append(
                    self._process_method_declaration(child, source_code, file_path, declaration)
                )
            elif child.type == "constructor_declaration":
                constructor = self._process_method_declaration(child, source_code, file_path, declaration)
                constructor.is_constructor = True
                declaration.constructors.append(constructor)
            elif child.type == "enum_constant":
                name_node = child.child_by_field_name("name")
                if name_node is not None:
                    declaration.enum_constants.append(self._get_node_text(name_node, source_code))
            elif child.type == "enum_body_declarations":
                count += self._process_body(child, source_code, store, file_path, declaration)
            elif child.type in TYPE_DECLARATIONS:
                nested_count = self._process_type_declaration(
                    child, source_code, store, file_path, declaration.qualified_name
                )
                if nested_count:
                    declaration.nested.append(
                        f"{declaration.qualified_name}.{self._get_node_text(child.child_by_field_name('name'), source_code)}"
                    )
                count += nested_count
        return count

    def _process_method_declaration(self, node: Node, source_code: bytes, file_path: str,
                                    declaration: Declaration) -> Member:
        """Process a method or constructor declaration."""
        name = self._get_node_text(node.child_by_field_name("name"), source_code)
        modifiers = self._get_modifiers(node)
        documentation, tags = self._get_doc_comment(node, source_code)

        return_type = None
        type_node = node.child_by_field_name("type")
        if type_node is not None:
            return_type = self._type_name(type_node, source_code)
            dimensions = node.child_by_field_name("dimensions")
            if dimensions is not None:
                return_type += "[]" * self._get_node_text(dimensions, source_code).count("[")

        parameters = []
        formal_parameters = node.child_by_field_name("parameters")
        if formal_parameters is not None:
            for parameter_node in formal_parameters.named_children:
                parameter = self._process_parameter(parameter_node, source_code, len(parameters))
                if parameter is not None:
                    parameters.append(parameter)

        member = Member(
            name=name,
            owner=declaration.qualified_name,
            documentation=documentation,
            tags=tags,
            position=self._position(node, file_path),
            parameters=parameters,
            return_type=return_type,
            access_modifier=self._access_modifier(modifiers),
            is_static="static" in modifiers,
            is_abstract="abstract" in modifiers,
        )
        member.refresh_qualified_name()
        return member

    def _process_parameter(self, node: Node, source_code: bytes, position: int) -> Optional[Parameter]:
        """Process a formal or variable-arity parameter."""
        if node.type == "formal_parameter":
            type_node = node.child_by_field_name("type")
            name_node = node.child_by_field_name("name")
            if type_node is None or name_node is None:
                return None
            type_name = self._type_name(type_node, source_code)
            dimensions = node.child_by_field_name("dimensions")
            if dimensions is not None:
                type_name += "[]" * self._get_node_text(dimensions, source_code).count("[")
            return Parameter(name=self._get_node_text(name_node, source_code), type=type_name, position=position)

        if node.type == "spread_parameter":
            type_node = None
            name = f"arg{position}"
            for child in node.named_children:
                if child.type == "variable_declarator":
                    name_node = child.child_by_field_name("name")
                    if name_node is not None:
                        name = self._get_node_text(name_node, source_code)
                elif child.type != "modifiers" and type_node is None:
                    type_node = child
            if type_node is None:
                return None
            return Parameter(name=name, type=self._type_name(type_node, source_code) + "...", position=position)

        return None

    def _type_list(self, node: Node, source_code: bytes) -> List[str]:
        """Types of a "super_interfaces" or "extends_interfaces" node."""
        result = []
        for child in node.named_children:
            if child.type == "type_list":
                result.extend(self._type_name(t, source_code) for t in child.named_children)
        return result

    def _type_name(self, node: Node, source_code: bytes) -> str:
        """Type as written, without annotations, white space and type arguments."""
        if node.type == "annotated_type" and node.named_children:
            return self._type_name(node.named_children[-1], source_code)
        text = re.sub(r"\s+", "", self._get_node_text(node, source_code))
        text = re.sub(r"@[\w.]+(\([^)]*\))?", "", text)
        previous = None
        while previous != text:
            previous, text = text, re.sub(r"<[^<>]*>", "", text)
        return text

    def _get_doc_comment(self, node: Node, source_code: bytes) -> Tuple[str, Dict[str, List[str]]]:
        """The Javadoc comment immediately preceding a declaration, split into text and tags."""
        previous = node.prev_named_sibling
        if previous is None or previous.type not in COMMENT_NODES:
            return "", {}
        comment = self._get_node_text(previous, source_code)
        if not comment.startswith("/**"):
            return "", {}
        return split_doc_comment(comment)

    def _get_modifiers(self, node: Node) -> List[str]:
        """Modifier keywords of a declaration, e.g. ["public", "static"]."""
        for child in node.children:
            if child.type == "modifiers":
                return [modifier.type for modifier in child.children]
        return []

    @staticmethod
    def _access_modifier(modifiers: List[str]) -> str:
        for access in ("public", "protected", "private"):
            if access in modifiers:
                return access
        return "default"

    @staticmethod
    def _position(node: Node, file_path: str) -> SourcePosition:
        return SourcePosition(path=file_path, line=node.start_point[0] + 1)

    def _get_node_text(self, node: Node, source_code: bytes) -> str:
        """Get text for a node from the source code."""
        return self.extract_node_text(node, source_code)
