# sedml/errors/sed_error.py
"""
Diagnostic record describing one condition found while processing a document.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .codes import (
    SedErrorCategory,
    SedErrorSeverity,
    is_caller_supplied,
    is_internal_code,
    is_sedml_code,
    is_xml_code,
)
from .error_table import lookup
from .return_codes import UNKNOWN_LOCATION

# Table-only severities and what they are reported as
_SEVERITY_TRANSLATION = {
    SedErrorSeverity.SCHEMA_ERROR: SedErrorSeverity.ERROR,
    SedErrorSeverity.GENERAL_WARNING: SedErrorSeverity.WARNING,
    SedErrorSeverity.NOT_APPLICABLE: SedErrorSeverity.INFO,
}


@dataclass(frozen=True)
class SedError:
    """
    An immutable diagnostic.

    Attributes:
        error_id: Numeric diagnostic code
        level: SED-ML level of the document the diagnostic refers to
        version: SED-ML version of the document the diagnostic refers to
        message: Full message, default text followed by any caller detail
        short_message: One-line summary
        line: Source line, or UNKNOWN_LOCATION
        column: Source column, or UNKNOWN_LOCATION
        severity: One of INFO, WARNING, ERROR, FATAL
        category: Consistency domain
        package: Name of the language package the code belongs to
        package_version: Version of that package
    """

    error_id: int
    level: int
    version: int
    message: str
    short_message: str
    line: int
    column: int
    severity: SedErrorSeverity
    category: SedErrorCategory
    package: str = "core"
    package_version: int = 1

    # ==================== Factory Methods ====================

    @classmethod
    def create(
        cls,
        error_id: int,
        level: int = 1,
        version: int = 1,
        details: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        severity: Union[SedErrorSeverity, int] = SedErrorSeverity.ERROR,
        category: SedErrorCategory = SedErrorCategory.SEDML,
        package: str = "core",
        package_version: int = 1,
    ) -> "SedError":
        """
        Create a diagnostic, filling in defaults from the message table.

        For codes below the caller-supplied threshold the table's severity,
        category and message are used and `details` is appended to the message.
        For codes at or above it nothing is looked up: `details` becomes the
        whole message and `severity`/`category` are taken as given.

        Args:
            error_id: Numeric diagnostic code
            level: SED-ML level
            version: SED-ML version
            details: Additional text
            line: Source line (None for unknown)
            column: Source column (None for unknown)
            severity: Severity used for caller-supplied codes
            category: Category used for caller-supplied codes
            package: Package name
            package_version: Package version

        Returns:
            New SedError
        """
        error_id = int(error_id)
        line = UNKNOWN_LOCATION if line is None else line
        column = UNKNOWN_LOCATION if column is None else column

        entry = lookup(error_id)
        if entry is None:
            severity = SedErrorSeverity(severity)
            return cls(
                error_id=error_id,
                level=level,
                version=version,
                message=details,
                short_message=details.splitlines()[0] if details else "",
                line=line,
                column=column,
                severity=_SEVERITY_TRANSLATION.get(severity, severity),
                category=category,
                package=package,
                package_version=package_version,
            )

        message = entry.message
        if details:
            message = f"{message} {details}"

        return cls(
            error_id=error_id,
            level=level,
            version=version,
            message=message,
            short_message=entry.short_message,
            line=line,
            column=column,
            severity=_SEVERITY_TRANSLATION.get(entry.severity, entry.severity),
            category=entry.category,
            package=package,
            package_version=package_version,
        )

    # ==================== Predicates ====================

    def is_info(self) -> bool:
        return self.severity == SedErrorSeverity.INFO

    def is_warning(self) -> bool:
        return self.severity == SedErrorSeverity.WARNING

    def is_error(self) -> bool:
        return self.severity == SedErrorSeverity.ERROR

    def is_fatal(self) -> bool:
        return self.severity == SedErrorSeverity.FATAL

    def is_xml(self) -> bool:
        """True if the code belongs to the XML-layer band."""
        return is_xml_code(self.error_id)

    def is_sedml(self) -> bool:
        """True if the code belongs to the SED-ML schema band."""
        return is_sedml_code(self.error_id)

    def is_internal(self) -> bool:
        """True if the code belongs to the library-internal band."""
        return is_internal_code(self.error_id)

    def is_caller_supplied(self) -> bool:
        return is_caller_supplied(self.error_id)

    def has_location(self) -> bool:
        return self.line != UNKNOWN_LOCATION

    # ==================== Rendering ====================

    def render(self) -> str:
        """
        Render as "<line>: (<code>) <message>".

        The unknown-location sentinel is printed verbatim.
        """
        return f"{self.line}: ({self.error_id}) {self.message}"

    def __str__(self) -> str:
        return self.render()
