# Pydantic data models for diagnostics: Severity, Location, Issue.

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    """Issue severity, declared in increasing order of importance."""

    INFO = "INFO"
    WARNING = "WARNING"

    @property
    def rank(self) -> int:
        return list(Severity).index(self)

    def at_least(self, other: "Severity") -> bool:
        return self.rank >= other.rank


class Location(BaseModel):
    """
    Source range of a finding.

    line/column point at the first byte of the construct; end_line/end_column
    point just past its last byte. All values are 1-based.
    """

    path: Path
    line: int = Field(..., ge=1, description="1-based line number")
    column: int = Field(..., ge=1, description="1-based column number")
    end_line: Optional[int] = Field(None, ge=1)
    end_column: Optional[int] = Field(None, ge=1)
    snippet: Optional[str] = None

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    def __str__(self) -> str:
        if self.end_line is None or self.end_column is None:
            return f"{self.path}:{self.line}:{self.column}"
        if self.line == self.end_line:
            return f"{self.path}:{self.line}:{self.column}-{self.end_column}"
        return f"{self.path}:{self.line}:{self.column}-{self.end_line}:{self.end_column}"


class Issue(BaseModel):
    """A single diagnostic reported by a rule (e.g. a blocking send at line 12)."""

    rule_id: str
    message: str
    location: Location
    severity: Severity = Severity.WARNING

    model_config = {"arbitrary_types_allowed": True, "frozen": True}
