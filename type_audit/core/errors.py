"""
Error types raised while auditing record property types.
"""


class TypeAuditError(Exception):
    """Base class for all type audit errors."""
    pass


class InvalidInputError(TypeAuditError, ValueError):
    """
    Raised when a record is missing or cannot be introspected.

    Aborts only the call that received the record; the aggregation
    session it was passed to stays usable.
    """

    def __init__(self, message: str, record_type: str | None = None):
        self.record_type = record_type
        super().__init__(message)


class TypeResolutionFailure(TypeAuditError):
    """
    Raised when the value of a single property cannot be read or typed.

    Never escapes the aggregator: it is always mapped to the null label.
    """

    def __init__(self, property_name: str, cause: BaseException):
        self.property_name = property_name
        self.cause = cause
        super().__init__(
            f"Cannot resolve type of property '{property_name}': "
            f"{type(cause).__name__}: {cause}"
        )


class RecordReadError(TypeAuditError):
    """Raised when a record source cannot be decoded."""

    def __init__(self, source: str, message: str, line_number: int | None = None):
        self.source = source
        self.line_number = line_number
        location = f"{source}:{line_number}" if line_number is not None else source
        super().__init__(f"{location}: {message}")


class ConfigError(TypeAuditError):
    """Raised when an audit configuration file is invalid."""
    pass
