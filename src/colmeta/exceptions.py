"""Custom colmeta exceptions."""

from __future__ import annotations

import warnings


class ColmetaError(Exception):
    """Base exception for all colmeta-related errors.

    This is the root exception that all other colmeta exceptions inherit from.
    It provides enhanced error reporting with suggestions for resolution.

    Attributes:
        suggestions: List of suggested fixes or actions.

    Example:
        >>> raise ColmetaError(
        ...     "Column 'user_id' has no field mapping",
        ...     suggestions=["Set the 'field' key", "Check the column name"]
        ... )
    """

    def __init__(
        self,
        message: str,
        suggestions: list[str] | None = None,
    ):
        """Initialize a ColmetaError.

        Args:
            message: The error message.
            suggestions: Optional list of suggestions to fix the error.
        """
        super().__init__(message)
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        result = super().__str__()

        if self.suggestions:
            suggestions_text = "; ".join(self.suggestions)
            result += f" | {suggestions_text}"

        return result


class ColmetaValidationError(ColmetaError):
    """Base for all validation-related errors.

    Raised when column definitions or configuration objects fail validation.
    """


class ColumnParsingError(ColmetaValidationError):
    """Errors while building columns from YAML or dictionaries.

    Raised when the input format is invalid, required keys are missing,
    or values have the wrong type.
    """


class ConfigError(ColmetaValidationError):
    """Invalid configuration for a resolver, renderer or dialect."""


# Resolver Exceptions
class FieldResolutionError(ColmetaError):
    """A column's field path could not be walked on a record.

    Raised when an intermediate value on the path is neither a structured
    value nor an empty optional of a structured type, or when the final
    field does not exist on the record.

    Attributes:
        field_name: The dotted field name of the column being resolved.
    """

    def __init__(
        self,
        field_name: str,
        message: str | None = None,
        suggestions: list[str] | None = None,
    ):
        self.field_name = field_name
        super().__init__(message or f"field {field_name} is not valid", suggestions)


# Dialect Exceptions
class DialectError(ColmetaError):
    """Dialect lookup or configuration errors."""


class UnsupportedFeatureError(DialectError):
    """Feature not supported by the target dialect.

    Raised in "raise" mode when a dialect cannot render part of a column
    definition, such as an unparseable SQL type.
    """


# Warnings
class ValidationWarning(UserWarning):
    """Warning emitted when a value is coerced instead of rejected."""


def validation_warning(
    message: str,
    filename: str | None = None,
    module: str | None = None,
) -> None:
    """Emit a `ValidationWarning` attributed to a colmeta module.

    Args:
        message: The warning text.
        filename: Name reported as the warning's origin. Defaults to "colmeta".
        module: Module name used by warning filters.
    """
    warnings.warn_explicit(
        message,
        category=ValidationWarning,
        filename=filename or "colmeta",
        lineno=0,
        module=module,
    )
