"""
Parsers that populate the declaration store.
"""

from .base_parser import BaseParser
from .java_parser import JavaParser
from .javadoc import split_doc_comment, first_sentence

__all__ = [
    "BaseParser",
    "JavaParser",
    "split_doc_comment",
    "first_sentence"
]
