"""
Exceptions raised by antdoc.
"""


class AntdocError(Exception):
    """Base class for all antdoc errors."""


class AntlibError(AntdocError):
    """An ANTLIB file or resource could not be read or parsed; aborts the run."""


class RecordError(AntdocError):
    """A registration record is unusable; only that record is skipped."""


class TypeGroupConfigurationError(AntdocError):
    """An ancestor declares only part of the type group metadata."""


class LinkResolutionError(AntdocError):
    """A cross reference does not designate any documented entity."""


class MemberDocumentationError(AntdocError):
    """The doc tags of a single member are unusable; the member gets placeholder metadata."""
