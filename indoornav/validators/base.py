"""Base classes for map validation results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a validation issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ValidationIssue:
    """A single map validation issue."""

    code: str
    message: str
    severity: Severity
    node: str | None = None
    floor: int | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if self.node is None and self.floor is None:
            return ""
        parts = []
        if self.node is not None:
            parts.append(self.node)
        if self.floor is not None:
            parts.append(f"floor {self.floor}")
        return "[" + " @ ".join(parts) + "]"

    def __str__(self) -> str:
        location = f" {self.location}" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ValidationResult:
    """Result of running validation on a map."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def infos(self) -> list[ValidationIssue]:
        return [i for i in self.issues if i.severity == Severity.INFO]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """A map is valid when it has no errors."""
        return not self.has_errors

    def codes(self) -> set[str]:
        return {i.code for i in self.issues}

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def _add(
        self,
        severity: Severity,
        code: str,
        message: str,
        node: str | None,
        floor: int | None,
        details: dict[str, Any],
    ) -> None:
        self.issues.append(
            ValidationIssue(
                code=code,
                message=message,
                severity=severity,
                node=node,
                floor=floor,
                details=details,
            )
        )

    def add_error(
        self,
        code: str,
        message: str,
        node: str | None = None,
        floor: int | None = None,
        **details: Any,
    ) -> None:
        self._add(Severity.ERROR, code, message, node, floor, details)

    def add_warning(
        self,
        code: str,
        message: str,
        node: str | None = None,
        floor: int | None = None,
        **details: Any,
    ) -> None:
        self._add(Severity.WARNING, code, message, node, floor, details)

    def add_info(
        self,
        code: str,
        message: str,
        node: str | None = None,
        floor: int | None = None,
        **details: Any,
    ) -> None:
        self._add(Severity.INFO, code, message, node, floor, details)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
