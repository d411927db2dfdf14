"""
Base parser class for populating the declaration store.
"""
import os
from typing import Iterator, List, Optional
import logging
from abc import ABC, abstractmethod

from tree_sitter import Tree, Node

from antdoc.core import DeclarationStore


class BaseParser(ABC):
    """
    Reads source files with tree-sitter and hands each syntax tree to
    process_file(), which adds the declarations it finds to the store.

    A file that cannot be parsed is logged and skipped; the run continues.
    """

    def __init__(self, language_name: str, language_version: str = None):
        """
        Initialize the parser.

        Args:
            language_name: Name of the programming language
            language_version: Optional version of the language
        """
        self.language_name = language_name
        self.language_version = language_version
        self.logger = logging.getLogger(f"{__name__}.{language_name}")

        # Created lazily by initialize_parser()
        self.parser = None
        self.language = None

        self.parsed_files: List[str] = []
        self.failed_files: List[str] = []

    @abstractmethod
    def initialize_parser(self) -> None:
        """Create the tree-sitter language and parser."""

    @abstractmethod
    def process_file(self, file_path: str, source_code: bytes, tree: Tree, store: DeclarationStore) -> None:
        """
        Extract the declarations of one parsed file.

        Args:
            file_path: Path to the file
            source_code: Raw source code bytes
            tree: Parsed tree-sitter tree
            store: Declaration store to populate
        """

    def parse_file(self, file_path: str, store: DeclarationStore) -> bool:
        """
        Parse a single file and add its declarations to the store.

        Returns:
            False if the file is missing or could not be processed
        """
        if not os.path.isfile(file_path):
            self.logger.error(f"File not found: {file_path}")
            self.failed_files.append(file_path)
            return False

        if self.parser is None:
            self.initialize_parser()

        with open(file_path, 'rb') as f:
            source_code = f.read()

        try:
            tree = self.parser.parse(source_code)
            self.process_file(file_path, source_code, tree, store)
        except Exception as e:
            self.logger.error(f"Error parsing {file_path}: {e}")
            self.failed_files.append(file_path)
            return False

        self.parsed_files.append(file_path)
        return True

    def iter_source_files(self, directory_path: str,
                          file_extensions: Optional[List[str]] = None) -> Iterator[str]:
        """
        Files below a directory in a stable order, optionally filtered by extension (e.g. ['.java']).
        """
        extensions = {e.lower() for e in file_extensions} if file_extensions else None
        for root, dirs, files in os.walk(directory_path):
            dirs.sort()
            for file in sorted(files):
                if extensions is None or os.path.splitext(file)[1].lower() in extensions:
                    yield os.path.join(root, file)

    def parse_directory(self, directory_path: str, store: DeclarationStore,
                        file_extensions: Optional[List[str]] = None) -> None:
        """Parse all matching files below a directory."""
        if not os.path.isdir(directory_path):
            self.logger.error(f"Directory not found: {directory_path}")
            return
        for file_path in self.iter_source_files(directory_path, file_extensions):
            self.parse_file(file_path, store)

    def parse_paths(self, paths: List[str], store: DeclarationStore,
                    file_extensions: Optional[List[str]] = None) -> DeclarationStore:
        """
        Parse files and directories, then resolve the type names of the store.

        Args:
            paths: Files and/or directories
            store: Declaration store to populate
            file_extensions: Extensions to include when walking directories

        Returns:
            The populated store
        """
        for path in paths:
            if os.path.isdir(path):
                self.parse_directory(path, store, file_extensions=file_extensions)
            else:
                self.parse_file(path, store)
        store.resolve_types()
        self.logger.info(
            f"Parsed {len(self.parsed_files)} {self.language_name} files"
            + (f", {len(self.failed_files)} failed" if self.failed_files else "")
        )
        return store

    def extract_node_text(self, node: Node, source_code: bytes) -> str:
        """Text of a node; undecodable bytes are replaced."""
        return source_code[node.start_byte:node.end_byte].decode('utf-8', errors='replace')
