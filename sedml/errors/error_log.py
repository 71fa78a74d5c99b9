# sedml/errors/error_log.py
"""
Ordered log of diagnostics accumulated while reading, writing or checking a document.

Diagnostics are never raised; severity decides whether the document is usable.
"""

from typing import Iterator, List, Optional

from ..logging.debug_logger import get_logger, event, EventType as EVT
from .codes import SedErrorCategory, SedErrorSeverity
from .sed_error import SedError

logger = get_logger(__name__)


class SedErrorLog:
    """Collects SedError records in the order they were reported."""

    def __init__(self, level: int = 1, version: int = 1):
        """
        Initialise an empty log.

        Args:
            level: SED-ML level stamped on diagnostics created through log_error
            version: SED-ML version stamped on diagnostics created through log_error
        """
        self.level = level
        self.version = version
        self._errors: List[SedError] = []

    # ==================== Recording ====================

    def add(self, error: SedError) -> None:
        """
        Append an existing diagnostic.

        Args:
            error: Diagnostic to record
        """
        self._errors.append(error)
        event(
            logger,
            EVT.DIAGNOSTIC_LOGGED,
            error.short_message or error.message,
            error_id=error.error_id,
            severity=error.severity.name,
            line=error.line,
        )

    def log_error(
        self,
        error_id: int,
        details: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        severity: SedErrorSeverity = SedErrorSeverity.ERROR,
        category: SedErrorCategory = SedErrorCategory.SEDML,
    ) -> SedError:
        """
        Create and record a diagnostic for this log's level and version.

        Args:
            error_id: Numeric diagnostic code
            details: Additional message text
            line: Source line, if known
            column: Source column, if known
            severity: Severity for caller-supplied codes
            category: Category for caller-supplied codes

        Returns:
            The recorded diagnostic
        """
        error = SedError.create(
            error_id,
            level=self.level,
            version=self.version,
            details=details,
            line=line,
            column=column,
            severity=severity,
            category=category,
        )
        self.add(error)
        return error

    def remove(self, error_id: int) -> Optional[SedError]:
        """
        Remove and return the first diagnostic with the given code.

        Args:
            error_id: Code to search for

        Returns:
            The removed diagnostic, or None if not present
        """
        for index, error in enumerate(self._errors):
            if error.error_id == error_id:
                return self._errors.pop(index)
        return None

    def clear(self) -> None:
        self._errors.clear()

    # ==================== Queries ====================

    def get_num_errors(self) -> int:
        return len(self._errors)

    def get_error(self, n: int) -> Optional[SedError]:
        """Return the n-th diagnostic or None when out of range."""
        if 0 <= n < len(self._errors):
            return self._errors[n]
        return None

    def get_num_fails_with_severity(self, severity: SedErrorSeverity) -> int:
        """Count diagnostics with exactly this severity."""
        return sum(1 for error in self._errors if error.severity == severity)

    def has_errors_at_least(self, severity: SedErrorSeverity) -> bool:
        """True if any diagnostic is at or above the given severity."""
        return any(error.severity >= severity for error in self._errors)

    def is_document_usable(self) -> bool:
        """A document is usable while no ERROR or FATAL diagnostic has been logged."""
        return not self.has_errors_at_least(SedErrorSeverity.ERROR)

    def contains(self, error_id: int) -> bool:
        return any(error.error_id == error_id for error in self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __iter__(self) -> Iterator[SedError]:
        return iter(list(self._errors))

    def __str__(self) -> str:
        return "\n".join(error.render() for error in self._errors)
