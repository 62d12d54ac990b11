"""ValidationReport contracts."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .base import LayoutBaseModel

ValidationSeverity = Literal["BLOCKING", "WARN"]
ViolationType = Literal[
    "MALFORMED_COLOR",
    "THEME_FALLBACK",
    "UNKNOWN_SLIDE_TYPE",
    "MISSING_STRUCTURED_FIELD",
    "EXCESS_ITEMS",
    "DANGLING_CONNECTION",
    "DUPLICATE_NODE_ID",
]


class ValidationViolation(LayoutBaseModel):
    slide_index: Optional[int] = None
    slide_type: Optional[str] = None
    field_key: Optional[str] = None
    violation_type: ViolationType
    severity: ValidationSeverity
    recommended_action: Optional[str] = None


class ValidationReport(LayoutBaseModel):
    violations: List[ValidationViolation] = Field(default_factory=list)

    @property
    def blocking(self) -> List[ValidationViolation]:
        return [v for v in self.violations if v.severity == "BLOCKING"]
