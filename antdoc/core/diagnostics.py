"""
Diagnostics sink shared by the model builder, the link resolver and the renderer.
"""
from typing import Dict, List, Optional
import logging
from collections import defaultdict

from pydantic import BaseModel

from .declarations import SourcePosition

ERROR = "ERROR"
WARNING = "WARNING"
NOTICE = "NOTICE"


class Diagnostic(BaseModel):
    """One reported problem."""

    severity: str
    message: str
    position: Optional[SourcePosition] = None

    def __str__(self) -> str:
        if self.position is not None:
            return f"{self.position}: {self.severity.lower()}: {self.message}"
        return f"{self.severity.lower()}: {self.message}"


class Diagnostics:
    """
    Collects errors, warnings and notices of one run.

    Errors skip the offending unit (record, ancestor, reference), warnings are
    non-blocking, and notices record silently recovered reference failures.
    Nothing reported here stops the run.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.records: List[Diagnostic] = []
        self.logger = logger or logging.getLogger(__name__)

    def error(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
        return self._report(ERROR, message, position, logging.ERROR)

    def warning(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
        return self._report(WARNING, message, position, logging.WARNING)

    def notice(self, message: str, position: Optional[SourcePosition] = None) -> Diagnostic:
        return self._report(NOTICE, message, position, logging.DEBUG)

    def _report(self, severity: str, message: str, position: Optional[SourcePosition], level: int) -> Diagnostic:
        diagnostic = Diagnostic(severity=severity, message=message, position=position)
        self.records.append(diagnostic)
        self.logger.log(level, str(diagnostic))
        return diagnostic

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.records if d.severity == ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.records if d.severity == WARNING]

    def counts(self) -> Dict[str, int]:
        result = defaultdict(int)
        for d in self.records:
            result[d.severity] += 1
        return dict(result)

    def __len__(self) -> int:
        return len(self.records)
