"""
Model builder: walks the registration records of ANTLIB files and resources and
files the resulting ANT types into type groups.
"""
import os
from typing import List, Optional, Sequence
import logging

from antdoc.antlib import (
    AntlibDocument,
    AntlibParser,
    RegistrationRecord,
    ResourceLocator,
    DEFINITION,
    NESTED_FILE,
    NESTED_RESOURCE
)
from antdoc.core import (
    AntType,
    Declaration,
    DeclarationStore,
    Diagnostics,
    RecordError,
    TypeGroupRegistry
)
from .members import MemberClassifier
from .type_groups import TASK, TypeGroupClassifier, builtin_registry


class ModelBuilder:
    """
    Builds the grouped documentation model.

    Record-level problems (unknown classes, invalid attribute combinations,
    nested resources that cannot be found) are reported to the diagnostics
    sink and skip only the offending record. An unreadable or malformed
    ANTLIB document raises AntlibError.
    """

    def __init__(self, store: DeclarationStore, diagnostics: Optional[Diagnostics] = None,
                 locator: Optional[ResourceLocator] = None,
                 registry: Optional[TypeGroupRegistry] = None):
        self.store = store
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.locator = locator or ResourceLocator()
        self.registry = registry if registry is not None else builtin_registry()
        self.parser = AntlibParser()
        self.member_classifier = MemberClassifier(store, self.diagnostics)
        self.type_group_classifier = TypeGroupClassifier(store, self.diagnostics)
        self._include_stack: List[str] = []
        self.logger = logging.getLogger(__name__)

    def build(self, antlib_files: Sequence[str] = (), antlib_resources: Sequence[str] = ()) -> TypeGroupRegistry:
        """
        Process ANTLIB resources, then ANTLIB files.

        Args:
            antlib_files: Paths of ANTLIB files
            antlib_resources: Resource names, looked up on the source path, then the class path

        Returns:
            The type group registry holding all ANT types
        """
        if not antlib_files and not antlib_resources:
            self.diagnostics.warning("Neither ANTLIB files nor ANTLIB resources were given")

        for resource_name in antlib_resources:
            self.add_antlib_resource(resource_name)
        for path in antlib_files:
            self.add_antlib_file(path)

        self.logger.info(f"Model built: {self.get_statistics()}")
        return self.registry

    def add_antlib_file(self, path: str) -> None:
        """Parse an ANTLIB file and add its types to the model."""
        key = os.path.abspath(path)
        if self._enter(key):
            try:
                self.add_document(self.parser.parse_file(path))
            finally:
                self._include_stack.pop()

    def add_antlib_resource(self, resource_name: str) -> bool:
        """
        Look up an ANTLIB resource and add its types to the model.

        Returns:
            False if the resource is neither on the source path nor on the class path
        """
        found = self.locator.find(resource_name)
        if found is None:
            self.diagnostics.error(
                f'Antlib resource "{resource_name}" not found on the {self.locator.describe()}'
            )
            return False

        location, content = found
        if self._enter(location):
            try:
                base_dir = os.path.dirname(location) if os.path.isfile(location) else None
                self.add_document(self.parser.parse_bytes(content, location, base_dir))
            finally:
                self._include_stack.pop()
        return True

    def add_document(self, document: AntlibDocument) -> None:
        """Add the types of a parsed ANTLIB document to the model."""
        for record in document.records:
            try:
                self.add_record(record, document)
            except RecordError as e:
                self.diagnostics.error(f"{document.location}: {record}: {e}")

        for kind in document.unsupported:
            self.diagnostics.warning(f"{document.location}: <{kind}>s are not yet supported")

    def add_record(self, record: RegistrationRecord, document: AntlibDocument) -> Optional[AntType]:
        """
        Process one registration record.

        Raises:
            RecordError: If the record cannot be processed
        """
        shape = record.shape
        if shape == NESTED_RESOURCE:
            if not self.add_antlib_resource(record.resource):
                raise RecordError(f'Nested resource "{record.resource}" not found')
            return None

        if shape == NESTED_FILE:
            path = record.file
            if not os.path.isabs(path) and document.base_dir:
                path = os.path.join(document.base_dir, path)
            if not os.path.isfile(path):
                raise RecordError(f'Nested file "{path}" not found')
            self.add_antlib_file(path)
            return None

        if shape != DEFINITION:
            raise RecordError("Invalid combination of attributes")

        declaration = self._find_class(record.classname, record.name)
        adapt_to = self._find_class(record.adapt_to, record.name) if record.adapt_to else None

        classified = self.member_classifier.classify(declaration)
        ant_type = AntType(
            name=record.name,
            declaration=declaration,
            adapt_to=adapt_to,
            character_data=classified.character_data,
            attributes=classified.attributes,
            subelements=classified.subelements,
            kind=record.kind,
        )

        if record.kind == "taskdef":
            groups = [self.registry.get(TASK)]
        else:
            groups = self.type_group_classifier.classify(declaration, self.registry)
        for group in groups:
            group.types.append(ant_type)

        self.logger.debug(f"<{record.name}> ({declaration}) filed under {[str(g) for g in groups]}")
        return ant_type

    def _find_class(self, qualified_name: str, type_name: str) -> Declaration:
        declaration = self.store.find_declaration(qualified_name)
        if declaration is None or declaration.is_stub:
            raise RecordError(f"Class '{qualified_name}' not found for <{type_name}>")
        return declaration

    def _enter(self, key: str) -> bool:
        if key in self._include_stack:
            self.diagnostics.warning(
                f"ANTLIB {key} includes itself (via {' -> '.join(self._include_stack)}); not expanded again"
            )
            return False
        self._include_stack.append(key)
        return True

    def get_statistics(self):
        """Number of ANT types per type group subdir."""
        return self.registry.get_statistics()
