"""
antdoc - documentation generator for APACHE ANT tasks and types.
"""

__version__ = "0.1.0"
